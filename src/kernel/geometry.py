"""Geometry kernel adapter over Open CASCADE (OCP bindings).

This module wraps the handful of OCCT primitives the skeleton relies on:
axis-aligned bounding boxes, deep copies, rigid and affine transforms,
compound assembly and shape classification. It also provides the small
primitive builders used to construct box skeletons.

Shapes are passed around as raw ``TopoDS_Shape`` handles. ``None`` is
tolerated everywhere a shape is accepted and flows through unchanged.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Union

import structlog
from OCP.BRep import BRep_Builder
from OCP.BRepBndLib import BRepBndLib
from OCP.BRepBuilderAPI import (
    BRepBuilderAPI_Copy,
    BRepBuilderAPI_GTransform,
    BRepBuilderAPI_MakePolygon,
    BRepBuilderAPI_Transform,
)
from OCP.BRepPrimAPI import BRepPrimAPI_MakeBox
from OCP.Bnd import Bnd_Box
from OCP.TopAbs import (
    TopAbs_COMPOUND,
    TopAbs_COMPSOLID,
    TopAbs_EDGE,
    TopAbs_FACE,
    TopAbs_SHELL,
    TopAbs_SOLID,
    TopAbs_WIRE,
)
from OCP.TopExp import TopExp_Explorer
from OCP.TopoDS import TopoDS_Compound, TopoDS_Shape
from OCP.gp import gp_Ax3, gp_Dir, gp_GTrsf, gp_Pnt, gp_Trsf

logger = structlog.get_logger(__name__)

# Rigid/similarity transforms are gp_Trsf, general affine ones gp_GTrsf
ShapeTransform = Union[gp_Trsf, gp_GTrsf]

Point3D = tuple[float, float, float]


class GeometryKernelError(Exception):
    """Raised when an OCCT builder fails to produce a shape."""

    pass


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned 3D bounding box.

    ``BoundingBox.UNSET`` is the empty box: it has inverted infinite extents,
    reports ``is_set == False`` and is the identity element of :meth:`union`.
    """

    min_x: float
    min_y: float
    min_z: float
    max_x: float
    max_y: float
    max_z: float

    UNSET: ClassVar["BoundingBox"]

    @property
    def is_set(self) -> bool:
        return self.min_x <= self.max_x and self.min_y <= self.max_y and self.min_z <= self.max_z

    @property
    def size(self) -> Point3D:
        if not self.is_set:
            return (0.0, 0.0, 0.0)
        return (self.max_x - self.min_x, self.max_y - self.min_y, self.max_z - self.min_z)

    @property
    def volume(self) -> float:
        """Calculate bounding box volume."""
        dx, dy, dz = self.size
        return dx * dy * dz

    @property
    def center(self) -> Point3D | None:
        """Calculate bounding box center point."""
        if not self.is_set:
            return None
        return (
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2,
            (self.min_z + self.max_z) / 2,
        )

    def union(self, other: BoundingBox) -> BoundingBox:
        """Component-wise min/max of two boxes. Unset boxes are skipped."""
        if not other.is_set:
            return self
        if not self.is_set:
            return other
        return BoundingBox(
            min_x=min(self.min_x, other.min_x),
            min_y=min(self.min_y, other.min_y),
            min_z=min(self.min_z, other.min_z),
            max_x=max(self.max_x, other.max_x),
            max_y=max(self.max_y, other.max_y),
            max_z=max(self.max_z, other.max_z),
        )

    def is_close(self, other: BoundingBox, tolerance: float = 1e-6) -> bool:
        if self.is_set != other.is_set:
            return False
        if not self.is_set:
            return True
        return all(
            math.isclose(a, b, abs_tol=tolerance)
            for a, b in zip(self.as_tuple(), other.as_tuple())
        )

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.min_x, self.min_y, self.min_z, self.max_x, self.max_y, self.max_z)

    def as_dict(self) -> dict[str, float] | None:
        if not self.is_set:
            return None
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "min_z": self.min_z,
            "max_x": self.max_x,
            "max_y": self.max_y,
            "max_z": self.max_z,
        }


BoundingBox.UNSET = BoundingBox(
    math.inf, math.inf, math.inf, -math.inf, -math.inf, -math.inf
)


def _pnt(point: Point3D) -> gp_Pnt:
    x, y, z = point
    return gp_Pnt(float(x), float(y), float(z))


def _is_null(shape: Any) -> bool:
    return shape is None or not isinstance(shape, TopoDS_Shape) or shape.IsNull()


def shape_bounding_box(shape: TopoDS_Shape | None, transform: ShapeTransform | None = None) -> BoundingBox:
    """Compute the axis-aligned bounding box of a shape.

    Args:
        shape: Shape to measure
        transform: Optional transform applied to a copy of the shape first

    Returns:
        BoundingBox, or ``BoundingBox.UNSET`` for null or empty shapes
    """
    if _is_null(shape):
        return BoundingBox.UNSET

    if transform is not None:
        shape = transform_shape(shape, transform)

    bbox = Bnd_Box()
    BRepBndLib.AddOptimal_s(shape, bbox, True, False)

    if bbox.IsVoid():
        return BoundingBox.UNSET

    corner_min = bbox.CornerMin()
    corner_max = bbox.CornerMax()
    return BoundingBox(
        min_x=float(corner_min.X()),
        min_y=float(corner_min.Y()),
        min_z=float(corner_min.Z()),
        max_x=float(corner_max.X()),
        max_y=float(corner_max.Y()),
        max_z=float(corner_max.Z()),
    )


def duplicate_shape(shape: TopoDS_Shape | None) -> TopoDS_Shape | None:
    """Deep-copy a shape, geometry included."""
    if _is_null(shape):
        return shape
    return BRepBuilderAPI_Copy(shape, True, False).Shape()


def transform_shape(shape: TopoDS_Shape | None, transform: ShapeTransform) -> TopoDS_Shape | None:
    """Return a transformed copy of ``shape``; the input is left untouched.

    Raises:
        GeometryKernelError: If OCCT cannot apply the transform
    """
    if _is_null(shape):
        return shape

    if isinstance(transform, gp_GTrsf):
        builder = BRepBuilderAPI_GTransform(shape, transform, True)
    else:
        builder = BRepBuilderAPI_Transform(shape, transform, True)

    if not builder.IsDone():
        raise GeometryKernelError(f"Transform failed for {type(transform).__name__}")
    return builder.Shape()


def combine_shapes(shapes: Iterable[TopoDS_Shape | None]) -> TopoDS_Compound:
    """Append shapes into one compound. No boolean fusion is performed."""
    builder = BRep_Builder()
    compound = TopoDS_Compound()
    builder.MakeCompound(compound)

    count = 0
    for shape in shapes:
        if _is_null(shape):
            continue
        builder.Add(compound, shape)
        count += 1

    logger.debug("Combined shapes into compound", count=count)
    return compound


def _contains(shape: TopoDS_Shape, topo_type: Any) -> bool:
    return TopExp_Explorer(shape, topo_type).More()


def is_brep(value: Any) -> bool:
    """True for solid-like shapes: solids, shells, faces, or compounds of faces."""
    if _is_null(value):
        return False
    shape_type = value.ShapeType()
    if shape_type in (TopAbs_SOLID, TopAbs_COMPSOLID, TopAbs_SHELL, TopAbs_FACE):
        return True
    return shape_type == TopAbs_COMPOUND and _contains(value, TopAbs_FACE)


def is_curve(value: Any) -> bool:
    """True for edges and wires."""
    if _is_null(value):
        return False
    return value.ShapeType() in (TopAbs_EDGE, TopAbs_WIRE)


def world_xy() -> gp_Ax3:
    """The canonical world XY reference plane."""
    return gp_Ax3()


def make_plane(origin: Point3D, normal: Point3D = (0.0, 0.0, 1.0), x_dir: Point3D = (1.0, 0.0, 0.0)) -> gp_Ax3:
    return gp_Ax3(_pnt(origin), gp_Dir(*map(float, normal)), gp_Dir(*map(float, x_dir)))


def plane_to_world(plane: gp_Ax3) -> gp_Trsf:
    """Transform mapping coordinates local to ``plane`` into world coordinates."""
    trsf = gp_Trsf()
    trsf.SetTransformation(plane, gp_Ax3())
    return trsf


def describe_plane(plane: gp_Ax3) -> dict[str, Point3D]:
    location = plane.Location()
    normal = plane.Direction()
    x_dir = plane.XDirection()
    return {
        "origin": (location.X(), location.Y(), location.Z()),
        "normal": (normal.X(), normal.Y(), normal.Z()),
        "x_dir": (x_dir.X(), x_dir.Y(), x_dir.Z()),
    }


def make_box(corner_min: Point3D, corner_max: Point3D, tolerance: float = 1e-9) -> TopoDS_Shape:
    """Build a solid box between two corners.

    Raises:
        GeometryKernelError: If any extent is not strictly positive
    """
    extents = [hi - lo for lo, hi in zip(corner_min, corner_max)]
    if min(extents) <= tolerance:
        raise GeometryKernelError(f"Degenerate box extents: {extents}")
    return BRepPrimAPI_MakeBox(_pnt(corner_min), _pnt(corner_max)).Shape()


def make_polyline(points: Iterable[Point3D], closed: bool = True) -> TopoDS_Shape:
    """Build a polygonal wire through ``points``.

    Raises:
        GeometryKernelError: If OCCT rejects the polygon (e.g. coincident points)
    """
    polygon = BRepBuilderAPI_MakePolygon()
    for point in points:
        polygon.Add(_pnt(point))
    if closed:
        polygon.Close()

    if not polygon.IsDone():
        raise GeometryKernelError("Polygon construction failed")
    return polygon.Wire()
