"""Cabinetry tools: editor components, box construction and CLI."""

from .box import build_box_skeleton
from .components import COMPONENTS, CabinetBoxSkeleton, Component, DataAccess, ParamSpec

__version__ = "0.1.0"
__all__ = [
    "build_box_skeleton",
    "Component", "CabinetBoxSkeleton", "COMPONENTS", "DataAccess", "ParamSpec",
]
