"""Space morphs: deformations applied to whole shapes.

A space morph maps every point of space to a new location. OCCT applies
non-rigid maps through ``BRepBuilderAPI_GTransform``, which converts the
affected geometry to B-splines so that stretches and shears are exact.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import structlog
from OCP.BRepBuilderAPI import BRepBuilderAPI_GTransform
from OCP.TopoDS import TopoDS_Shape
from OCP.gp import gp_GTrsf, gp_Mat, gp_XYZ

from .geometry import GeometryKernelError, Point3D

logger = structlog.get_logger(__name__)


class SpaceMorph(ABC):
    """Base class for free-form deformations."""

    @abstractmethod
    def morph_point(self, point: Point3D) -> Point3D:
        """Map a single point."""

    @abstractmethod
    def morph_shape(self, shape: TopoDS_Shape) -> TopoDS_Shape:
        """Return a morphed copy of ``shape``."""


class GeneralTransformMorph(SpaceMorph):
    """Morph driven by a general affine map (non-uniform scale, shear)."""

    def __init__(self, gtrsf: gp_GTrsf):
        self._gtrsf = gtrsf

    @classmethod
    def from_matrix(
        cls,
        rows: tuple[Point3D, Point3D, Point3D],
        translation: Point3D = (0.0, 0.0, 0.0),
    ) -> GeneralTransformMorph:
        """Build a morph from a row-major 3x3 linear part and a translation."""
        gtrsf = gp_GTrsf()
        gtrsf.SetVectorialPart(gp_Mat(*[float(value) for row in rows for value in row]))
        gtrsf.SetTranslationPart(gp_XYZ(*map(float, translation)))
        return cls(gtrsf)

    @classmethod
    def stretch(
        cls,
        sx: float,
        sy: float,
        sz: float,
        origin: Point3D = (0.0, 0.0, 0.0),
    ) -> GeneralTransformMorph:
        """Non-uniform scale about ``origin``."""
        ox, oy, oz = origin
        translation = (ox - sx * ox, oy - sy * oy, oz - sz * oz)
        return cls.from_matrix(((sx, 0.0, 0.0), (0.0, sy, 0.0), (0.0, 0.0, sz)), translation)

    @classmethod
    def shear_xz(cls, factor: float) -> GeneralTransformMorph:
        """Lean the shape along X in proportion to its height: x' = x + factor * z."""
        return cls.from_matrix(((1.0, 0.0, factor), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)))

    def morph_point(self, point: Point3D) -> Point3D:
        xyz = gp_XYZ(*map(float, point))
        self._gtrsf.Transforms(xyz)
        return (xyz.X(), xyz.Y(), xyz.Z())

    def morph_shape(self, shape: TopoDS_Shape) -> TopoDS_Shape:
        if shape is None or shape.IsNull():
            return shape

        builder = BRepBuilderAPI_GTransform(shape, self._gtrsf, True)
        if not builder.IsDone():
            raise GeometryKernelError("Space morph failed")

        logger.debug("Applied space morph", morph=type(self).__name__)
        return builder.Shape()
