"""MCP tools implementation with session management.

This module provides the skeleton tools for the cabinetry MCP server.
Built skeletons are kept in a process-local session so later tool calls
can describe or export them by id.
"""

from __future__ import annotations

import tempfile
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from cabinetry.components import CabinetBoxSkeleton
from kernel.geometry import GeometryKernelError
from kernel.occt_io import StepExportError, write_step
from skeleton import CabinetSkeleton, ConversionShape, to_json_dict

logger = structlog.get_logger(__name__)


class SessionError(Exception):
    """Raised when session operations fail."""
    pass


class SkeletonSession:
    """Session store for built skeletons."""

    def __init__(self, max_skeletons: int = 10):
        """Initialize session.

        Args:
            max_skeletons: Maximum number of skeletons to keep in memory
        """
        self._skeletons: Dict[str, CabinetSkeleton] = {}
        self._build_times: Dict[str, float] = {}
        self._max_skeletons = max_skeletons
        self._counter = 0

        logger.info("Skeleton session initialized", max_skeletons=max_skeletons)

    def cleanup_old_skeletons(self) -> None:
        """Remove oldest skeletons if we exceed the limit."""
        if len(self._skeletons) <= self._max_skeletons:
            return

        by_age = sorted(self._build_times.items(), key=lambda x: x[1])
        for skeleton_id, _ in by_age[:-self._max_skeletons]:
            self.remove_skeleton(skeleton_id)

    def remove_skeleton(self, skeleton_id: str) -> None:
        """Remove a skeleton from the session."""
        if self._skeletons.pop(skeleton_id, None) is not None:
            logger.debug("Removed skeleton from session", skeleton_id=skeleton_id)
        self._build_times.pop(skeleton_id, None)

    def has_skeleton(self, skeleton_id: str) -> bool:
        return skeleton_id in self._skeletons

    def get_skeleton(self, skeleton_id: str) -> CabinetSkeleton:
        """Get a stored skeleton by id.

        Raises:
            SessionError: If the id is unknown
        """
        if skeleton_id not in self._skeletons:
            raise SessionError(f"Skeleton not found in session: {skeleton_id}")
        return self._skeletons[skeleton_id]

    def list_skeletons(self) -> List[str]:
        return list(self._skeletons.keys())

    def get_session_stats(self) -> Dict[str, Any]:
        return {
            "stored_skeletons": len(self._skeletons),
            "max_skeletons": self._max_skeletons,
            "skeleton_ids": list(self._skeletons.keys()),
        }

    def store(self, skeleton: CabinetSkeleton, skeleton_id: Optional[str] = None) -> str:
        """Add a skeleton to the session and return its id."""
        self._counter += 1
        skeleton_id = skeleton_id or f"skeleton_{self._counter}"

        self._skeletons[skeleton_id] = skeleton
        self._build_times[skeleton_id] = time.time()
        self.cleanup_old_skeletons()
        return skeleton_id

    def build_box(self, inputs: Dict[str, Any], skeleton_id: Optional[str] = None) -> str:
        """Solve the box skeleton component and store the result.

        Raises:
            SessionError: If the component produced no skeleton
        """
        outputs = CabinetBoxSkeleton().solve(inputs)
        skeleton = outputs["Cabinet"]
        if skeleton is None:
            raise SessionError(f"Could not build skeleton from inputs: {inputs}")

        skeleton_id = self.store(skeleton, skeleton_id)
        logger.info("Skeleton built", skeleton_id=skeleton_id, parts=len(skeleton.parts))
        return skeleton_id

    def export_step(self, skeleton_id: str, out_dir: str) -> Path:
        """Write a stored skeleton's combined solid to STEP.

        Raises:
            SessionError: If the skeleton is unknown or export fails
        """
        skeleton = self.get_skeleton(skeleton_id)
        combined = skeleton.cast_to(ConversionShape.COMBINED_SOLID)

        try:
            return write_step(combined.value, Path(out_dir) / f"{skeleton_id}.step")
        except (StepExportError, GeometryKernelError) as e:
            logger.error("Failed to export skeleton", skeleton_id=skeleton_id, error=str(e))
            raise SessionError(f"Failed to export skeleton: {e}") from e


# Global session instance for MCP tools
_session = SkeletonSession()


def _require(params: Dict[str, Any], key: str) -> Any:
    if key not in params:
        raise ValueError(f"Missing required parameter: {key}")
    value = params[key]
    if not value:
        raise ValueError(f"Parameter '{key}' cannot be empty")
    return value


def tool_build_box_skeleton(params: Dict[str, Any]) -> Dict[str, Any]:
    """MCP tool: Build a box skeleton from dimensions.

    Args:
        params: Optional 'width', 'depth', 'height', 'thickness', 'skeleton_id'

    Returns:
        Dictionary with the new skeleton id and its manifest
    """
    inputs = {
        name.capitalize(): params[name]
        for name in ("width", "depth", "height", "thickness")
        if params.get(name) is not None
    }

    try:
        skeleton_id = _session.build_box(inputs, params.get("skeleton_id"))
    except SessionError as e:
        logger.error("build_box_skeleton tool failed", error=str(e))
        return {"success": False, "error": str(e), "skeleton_id": None}

    return {
        "success": True,
        "skeleton_id": skeleton_id,
        "manifest": to_json_dict(_session.get_skeleton(skeleton_id)),
        "session_stats": _session.get_session_stats(),
    }


def tool_describe_skeleton(params: Dict[str, Any]) -> Dict[str, Any]:
    """MCP tool: Describe a stored skeleton.

    Raises:
        ValueError: If 'skeleton_id' is missing or empty
    """
    skeleton_id = _require(params, "skeleton_id")

    try:
        skeleton = _session.get_skeleton(skeleton_id)
    except SessionError as e:
        return {"success": False, "error": str(e), "skeleton_id": skeleton_id, "manifest": None}

    return {"success": True, "skeleton_id": skeleton_id, "manifest": to_json_dict(skeleton)}


def tool_export_skeleton(params: Dict[str, Any]) -> Dict[str, Any]:
    """MCP tool: Export a stored skeleton as STEP.

    Args:
        params: 'skeleton_id' and optional 'out_dir' (defaults to temp directory)

    Raises:
        ValueError: If 'skeleton_id' is missing or empty
    """
    skeleton_id = _require(params, "skeleton_id")
    out_dir = params.get("out_dir") or tempfile.gettempdir()

    try:
        path = _session.export_step(skeleton_id, out_dir)
    except SessionError as e:
        return {"success": False, "error": str(e), "skeleton_id": skeleton_id, "step_path": None}

    return {
        "success": True,
        "skeleton_id": skeleton_id,
        "step_path": str(path),
        "size_bytes": path.stat().st_size,
    }


def tool_session_info(params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """MCP tool: Get session information and stored skeletons."""
    stats = _session.get_session_stats()

    details = []
    for skeleton_id in stats["skeleton_ids"]:
        skeleton = _session.get_skeleton(skeleton_id)
        details.append({
            "skeleton_id": skeleton_id,
            "dimensions": {
                "width": skeleton.width,
                "depth": skeleton.depth,
                "height": skeleton.height,
                "thickness": skeleton.thickness,
            },
            "part_names": list(skeleton.part_names),
            "profile_count": len(skeleton.profiles),
        })

    return {
        "success": True,
        "session_stats": stats,
        "skeletons": details,
        "available_tools": [
            "build_box_skeleton",
            "describe_skeleton",
            "export_skeleton",
            "session_info",
        ],
    }
