"""Kernel package for CAD geometry processing.

This package wraps the Open CASCADE primitives the skeleton relies on:
bounding boxes, copies, transforms, morphs, compounds and STEP I/O.
"""

from .geometry import BoundingBox, GeometryKernelError, shape_bounding_box
from .morph import GeneralTransformMorph, SpaceMorph
from .occt_io import LoadedModel, StepExportError, StepImportError, get_occt_info, load_step, write_step

__version__ = "0.1.0"
__all__ = [
    "BoundingBox", "GeometryKernelError", "shape_bounding_box",
    "SpaceMorph", "GeneralTransformMorph",
    "LoadedModel", "StepImportError", "StepExportError", "get_occt_info", "load_step", "write_step",
]
