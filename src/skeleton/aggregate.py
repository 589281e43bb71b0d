"""The cabinet skeleton aggregate.

A skeleton owns an ordered list of named solid parts and an ordered list of
reference profile curves, along with the cabinet's nominal dimensions and
reference plane. The first six profiles are reachable by semantic slot name
(``left``, ``right``, ``top``, ``bottom``, ``front``, ``back``).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Generic, List, Mapping, Optional, Sequence, TypeVar

import structlog
from OCP.TopoDS import TopoDS_Shape
from OCP.gp import gp_Ax3, gp_Trsf

from kernel.geometry import (
    BoundingBox,
    ShapeTransform,
    duplicate_shape,
    is_brep,
    is_curve,
    shape_bounding_box,
    transform_shape,
    world_xy,
)
from kernel.morph import SpaceMorph

from .casting import CastResult, convert

logger = structlog.get_logger(__name__)

T = TypeVar("T")

PROFILE_SLOTS = ("left", "right", "top", "bottom", "front", "back")
DEFAULT_PART_NAME = "New Brep"


class CabinetSkeleton(Generic[T]):
    """Named solid parts and reference profiles describing one cabinet.

    The type parameter is a caller-side tag for distinguishing skeleton
    flavours; it has no runtime effect.
    """

    type_name = "CabinetSkeleton"
    type_description = "Represents a skeleton of a cabinet"

    def __init__(
        self,
        width: float = 0.0,
        height: float = 0.0,
        depth: float = 0.0,
        thickness: float = 0.0,
        plane: Optional[gp_Ax3] = None,
    ):
        self.width = width
        self.height = height
        self.depth = depth
        self.thickness = thickness
        self.plane = plane if plane is not None else world_xy()

        self._parts: List[Optional[TopoDS_Shape]] = []
        self._part_names: List[str] = []
        self._profiles: List[TopoDS_Shape] = []
        self._named_profiles: dict[str, TopoDS_Shape] = {}

    def _derive(self) -> CabinetSkeleton[T]:
        # gp_Ax3 is mutable; each derived skeleton gets its own copy
        plane = self.plane.Transformed(gp_Trsf())
        return type(self)(self.width, self.height, self.depth, self.thickness, plane)

    # Parts

    @property
    def parts(self) -> List[Optional[TopoDS_Shape]]:
        return self._parts

    @property
    def part_names(self) -> List[str]:
        return self._part_names

    def add_part(self, part: Optional[TopoDS_Shape], name: str) -> None:
        """Append a solid and its name. Nothing is validated."""
        self._parts.append(part)
        self._part_names.append(name)

    def named_parts(self) -> list[tuple[Optional[TopoDS_Shape], str]]:
        return list(zip(self._parts, self._part_names))

    # Profiles

    @property
    def profiles(self) -> List[TopoDS_Shape]:
        return self._profiles

    @profiles.setter
    def profiles(self, curves: Sequence[TopoDS_Shape]) -> None:
        self._profiles = list(curves)
        self._update_named_profiles()

    @property
    def named_profiles(self) -> Mapping[str, TopoDS_Shape]:
        return MappingProxyType(self._named_profiles)

    def _update_named_profiles(self) -> None:
        self._named_profiles = dict(zip(PROFILE_SLOTS, self._profiles))

    def profile(self, name: str) -> Optional[TopoDS_Shape]:
        """Curve in slot ``name``, or None for unknown or empty slots."""
        return self._named_profiles.get(name)

    def __getitem__(self, name: str) -> Optional[TopoDS_Shape]:
        return self.profile(name)

    # Geometry

    def bounding_box(self, transform: Optional[ShapeTransform] = None) -> BoundingBox:
        """Union of the parts' bounding boxes.

        With ``transform`` each part is measured as a transformed duplicate;
        the skeleton's own parts are not modified. A skeleton without parts
        returns ``BoundingBox.UNSET``.
        """
        if not self._parts:
            return BoundingBox.UNSET

        combined = shape_bounding_box(self._parts[0], transform)
        for part in self._parts[1:]:
            combined = combined.union(shape_bounding_box(part, transform))
        return combined

    def duplicate(self) -> CabinetSkeleton[T]:
        """Deep copy. Geometry and reference plane are copied, nothing is shared."""
        duplicate = self._derive()
        for part, name in zip(self._parts, self._part_names):
            duplicate.add_part(duplicate_shape(part), name)
        duplicate.profiles = [duplicate_shape(curve) for curve in self._profiles]
        return duplicate

    def transform(self, transform: ShapeTransform) -> CabinetSkeleton[T]:
        """New skeleton with transformed copies of parts and profiles.

        Dimensions and plane are copied as-is, not re-derived.
        """
        transformed = self._derive()
        for part, name in zip(self._parts, self._part_names):
            transformed.add_part(transform_shape(part, transform), name)
        transformed.profiles = [transform_shape(curve, transform) for curve in self._profiles]
        return transformed

    def morph(self, space_morph: SpaceMorph) -> CabinetSkeleton[T]:
        """New skeleton with morphed copies of the parts.

        Profiles are not carried over to the result.
        """
        morphed = self._derive()
        for part, name in zip(self._parts, self._part_names):
            morphed.add_part(space_morph.morph_shape(part), name)
        return morphed

    # Casting

    def cast_to(self, target: Any) -> CastResult:
        """View the skeleton as curves, solids, or one combined solid."""
        result = convert(self, target)
        if not result.ok:
            logger.debug("Unsupported skeleton cast", target=str(target))
        return result

    def cast_from(self, source: Any) -> bool:
        """Absorb plain geometry into this skeleton.

        A solid or list of solids is appended as parts named ``"New Brep"``.
        A single curve is appended to the profiles without refreshing the
        named slots; a list of curves replaces the profiles entirely.

        Returns:
            False if ``source`` is none of the above
        """
        if is_brep(source):
            self.add_part(source, DEFAULT_PART_NAME)
            return True

        if isinstance(source, (list, tuple)) and source:
            if all(is_brep(item) for item in source):
                for item in source:
                    self.add_part(item, DEFAULT_PART_NAME)
                return True
            if all(is_curve(item) for item in source):
                self.profiles = source
                return True
            logger.debug("Rejected mixed geometry sequence", count=len(source))
            return False

        if is_curve(source):
            self._profiles.append(source)
            return True

        logger.debug("Rejected skeleton cast source", source_type=type(source).__name__)
        return False

    # Identity

    @property
    def is_valid(self) -> bool:
        return True

    def __str__(self) -> str:
        return "CabinetSkeleton object"

    def __repr__(self) -> str:
        return (
            f"CabinetSkeleton(width={self.width}, height={self.height}, depth={self.depth}, "
            f"thickness={self.thickness}, parts={len(self._parts)}, profiles={len(self._profiles)})"
        )
