"""Deterministic JSON manifests for cabinet skeletons.

A manifest describes a skeleton without its geometry: dimensions, reference
plane, part names with their bounding boxes, and which profile slots are
populated. Output is stable across runs so manifests can be diffed.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

import orjson

from kernel.geometry import describe_plane, shape_bounding_box

from .aggregate import PROFILE_SLOTS, CabinetSkeleton

MANIFEST_VERSION = "0.1.0"


def _sort_dict_recursive(obj: Any) -> Any:
    """Recursively sort dictionaries for deterministic output."""
    if isinstance(obj, dict):
        return {k: _sort_dict_recursive(v) for k, v in sorted(obj.items())}
    elif isinstance(obj, list):
        return [_sort_dict_recursive(item) for item in obj]
    else:
        return obj


def to_json_dict(skeleton: CabinetSkeleton, deterministic: bool = True) -> Dict[str, Any]:
    """Convert a skeleton to a JSON-serializable manifest.

    Args:
        skeleton: The skeleton to describe
        deterministic: If True, sort dictionary keys for reproducible output

    Returns:
        Dictionary representation ready for JSON serialization
    """
    parts_data = []
    for index, (part, name) in enumerate(skeleton.named_parts()):
        parts_data.append({
            "index": index,
            "name": name,
            "bounding_box": shape_bounding_box(part).as_dict(),
        })

    result = {
        "manifest_version": MANIFEST_VERSION,
        "type_name": skeleton.type_name,
        "dimensions": {
            "width": skeleton.width,
            "height": skeleton.height,
            "depth": skeleton.depth,
            "thickness": skeleton.thickness,
        },
        "plane": {key: list(value) for key, value in describe_plane(skeleton.plane).items()},
        "parts": parts_data,
        "profiles": {
            "count": len(skeleton.profiles),
            "named_slots": [slot for slot in PROFILE_SLOTS if skeleton.profile(slot) is not None],
        },
        "bounding_box": skeleton.bounding_box().as_dict(),
    }

    if deterministic:
        # Part order is significant and stays as-is; only keys are sorted
        return _sort_dict_recursive(result)
    return result


def to_json_string(skeleton: CabinetSkeleton, deterministic: bool = True, pretty: bool = False) -> str:
    """Convert a skeleton manifest to a JSON string."""
    data = to_json_dict(skeleton, deterministic=deterministic)

    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return orjson.dumps(data).decode("utf-8")


def dump_json(skeleton: CabinetSkeleton, path: Union[str, Path], deterministic: bool = True) -> Path:
    """Write a skeleton manifest to disk.

    Args:
        skeleton: The skeleton to describe
        path: Output file path; parent directories are created
        deterministic: If True, sort dictionary keys for reproducible output

    Returns:
        The written path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "wb") as f:
        f.write(orjson.dumps(to_json_dict(skeleton, deterministic=deterministic)))
        f.write(b"\n")
    return path


def load_json(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a manifest written by :func:`dump_json`.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a skeleton manifest
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Manifest not found: {path}")

    try:
        data = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        raise ValueError(f"Failed to parse manifest {path}: {e}") from e

    if not isinstance(data, dict) or "manifest_version" not in data:
        raise ValueError(f"Not a skeleton manifest: {path}")
    return data
