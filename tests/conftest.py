"""Pytest configuration and shared fixtures.

Provides common geometry fixtures for the cabinet skeleton test suite.
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest
import structlog
from OCP.TopoDS import TopoDS_Shape

from kernel.geometry import make_box, make_polyline
from skeleton import CabinetSkeleton


# Configure test logging
structlog.configure(
    processors=[
        structlog.testing.LogCapture(),
    ],
    logger_factory=structlog.testing.CapturingLoggerFactory(),
    # Uncached so structlog.testing.capture_logs() sees module loggers
    cache_logger_on_first_use=False,
)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_panel() -> Callable[..., TopoDS_Shape]:
    """Factory for box solids between two corners."""
    def _make(corner_min=(0.0, 0.0, 0.0), corner_max=(1.0, 1.0, 1.0)) -> TopoDS_Shape:
        return make_box(corner_min, corner_max)
    return _make


@pytest.fixture
def make_square() -> Callable[..., TopoDS_Shape]:
    """Factory for closed square wires in a plane of constant Z."""
    def _make(size: float = 1.0, z: float = 0.0) -> TopoDS_Shape:
        return make_polyline([(0, 0, z), (size, 0, z), (size, size, z), (0, size, z)])
    return _make


@pytest.fixture
def left_side(make_panel) -> TopoDS_Shape:
    return make_panel((0, 0, 0), (0.75, 24, 36))


@pytest.fixture
def right_side(make_panel) -> TopoDS_Shape:
    return make_panel((35.25, 0, 0), (36, 24, 36))


@pytest.fixture
def six_profiles(make_square) -> list[TopoDS_Shape]:
    return [make_square(size=i + 1.0, z=float(i)) for i in range(6)]


@pytest.fixture
def two_sided_skeleton(left_side, right_side) -> CabinetSkeleton:
    """36 x 36 x 24 skeleton holding its two side panels."""
    skeleton: CabinetSkeleton = CabinetSkeleton(width=36, height=36, depth=24, thickness=0.75)
    skeleton.add_part(left_side, "Left Side")
    skeleton.add_part(right_side, "Right Side")
    return skeleton
