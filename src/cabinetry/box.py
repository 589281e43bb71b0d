"""Box-shaped cabinet skeleton construction.

A box skeleton is laid out in the reference plane's local coordinates with
width along X, depth along Y (front face at Y=0) and height along Z, then
mapped into world space. It carries five solid panels and the six outer
face outlines as profiles, in slot order.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

import structlog
from OCP.gp import gp_Ax3

from kernel.geometry import GeometryKernelError, Point3D, make_box, make_polyline, plane_to_world, transform_shape
from skeleton import CabinetSkeleton

logger = structlog.get_logger(__name__)

Corners = tuple[Point3D, Point3D]

# (width, depth, height, thickness) -> (corner_min, corner_max)
PANEL_LAYOUT: Dict[str, Callable[[float, float, float, float], Corners]] = {
    "Left Side": lambda w, d, h, t: ((0, 0, 0), (t, d, h)),
    "Right Side": lambda w, d, h, t: ((w - t, 0, 0), (w, d, h)),
    "Top": lambda w, d, h, t: ((t, 0, h - t), (w - t, d, h)),
    "Bottom": lambda w, d, h, t: ((t, 0, 0), (w - t, d, t)),
    "Back": lambda w, d, h, t: ((t, d - t, t), (w - t, d, h - t)),
}


def _face_outlines(w: float, d: float, h: float) -> list[list[Point3D]]:
    # left, right, top, bottom, front, back
    return [
        [(0, 0, 0), (0, d, 0), (0, d, h), (0, 0, h)],
        [(w, 0, 0), (w, d, 0), (w, d, h), (w, 0, h)],
        [(0, 0, h), (w, 0, h), (w, d, h), (0, d, h)],
        [(0, 0, 0), (w, 0, 0), (w, d, 0), (0, d, 0)],
        [(0, 0, 0), (w, 0, 0), (w, 0, h), (0, 0, h)],
        [(0, d, 0), (w, d, 0), (w, d, h), (0, d, h)],
    ]


def build_box_skeleton(
    width: float,
    depth: float,
    height: float,
    thickness: float,
    plane: Optional[gp_Ax3] = None,
) -> CabinetSkeleton:
    """Build a box skeleton from nominal dimensions.

    Panels that would be degenerate for the given dimensions are skipped with
    a warning. Profiles are only built when width, depth and height are all
    positive, so slot positions never shift.

    Args:
        width: Outer width (local X)
        depth: Outer depth (local Y)
        height: Outer height (local Z)
        thickness: Panel thickness
        plane: Reference plane; world XY when omitted

    Returns:
        CabinetSkeleton carrying the panels and face profiles
    """
    skeleton: CabinetSkeleton = CabinetSkeleton(width, height, depth, thickness, plane)
    to_world = plane_to_world(skeleton.plane)

    for name, layout in PANEL_LAYOUT.items():
        corner_min, corner_max = layout(width, depth, height, thickness)
        try:
            panel = make_box(corner_min, corner_max)
        except GeometryKernelError as e:
            logger.warning("Skipping degenerate panel", panel=name, error=str(e))
            continue
        skeleton.add_part(transform_shape(panel, to_world), name)

    if min(width, depth, height) > 0:
        skeleton.profiles = [
            transform_shape(make_polyline(outline), to_world)
            for outline in _face_outlines(width, depth, height)
        ]
    else:
        logger.warning(
            "Skipping face profiles for non-positive dimensions",
            width=width, depth=depth, height=height,
        )

    logger.info(
        "Built box skeleton",
        width=width, depth=depth, height=height, thickness=thickness,
        parts=len(skeleton.parts), profiles=len(skeleton.profiles),
    )
    return skeleton
