"""Cabinet skeleton package.

Provides the skeleton aggregate, its closed set of cast targets, and
deterministic JSON manifests.
"""

from .aggregate import DEFAULT_PART_NAME, PROFILE_SLOTS, CabinetSkeleton
from .casting import CastResult, ConversionShape, Converted, Unsupported
from .serialize import dump_json, load_json, to_json_dict, to_json_string

__version__ = "0.1.0"
__all__ = [
    "CabinetSkeleton", "PROFILE_SLOTS", "DEFAULT_PART_NAME",
    "ConversionShape", "Converted", "Unsupported", "CastResult",
    "to_json_dict", "to_json_string", "dump_json", "load_json",
]
