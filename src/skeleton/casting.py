"""Conversions from a skeleton to plain geometry collections.

The set of target shapes is closed: a skeleton can be viewed as its curve
list, its solid list, or one combined solid. Every conversion returns a
:data:`CastResult`, either :class:`Converted` carrying the value or
:class:`Unsupported` carrying a reason, so callers can fall back to their
own generic conversion path without catching exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, TypeVar, Union

from kernel.geometry import combine_shapes

if TYPE_CHECKING:
    from .aggregate import CabinetSkeleton

V = TypeVar("V")


class ConversionShape(str, Enum):
    """Representations a skeleton can be cast to."""

    CURVES = "curves"
    SOLIDS = "solids"
    COMBINED_SOLID = "combined_solid"


@dataclass(frozen=True)
class Converted(Generic[V]):
    value: V
    ok: bool = True


@dataclass(frozen=True)
class Unsupported:
    reason: str
    ok: bool = False


CastResult = Union[Converted[Any], Unsupported]


def to_curves(skeleton: CabinetSkeleton) -> Converted[list]:
    """The live profile list."""
    return Converted(skeleton.profiles)


def to_solids(skeleton: CabinetSkeleton) -> Converted[list]:
    """The live part list."""
    return Converted(skeleton.parts)


def to_combined_solid(skeleton: CabinetSkeleton) -> Converted[Any]:
    """All parts appended into one compound (no boolean fusion)."""
    return Converted(combine_shapes(skeleton.parts))


CONVERTERS: Dict[ConversionShape, Callable[["CabinetSkeleton"], Converted[Any]]] = {
    ConversionShape.CURVES: to_curves,
    ConversionShape.SOLIDS: to_solids,
    ConversionShape.COMBINED_SOLID: to_combined_solid,
}


def convert(skeleton: CabinetSkeleton, target: Any) -> CastResult:
    """Dispatch to the converter registered for ``target``.

    ``target`` may be a :class:`ConversionShape` or its string value.
    Anything else yields :class:`Unsupported`.
    """
    try:
        shape = ConversionShape(target)
    except ValueError:
        return Unsupported(f"Cannot cast CabinetSkeleton to {target!r}")
    return CONVERTERS[shape](skeleton)
