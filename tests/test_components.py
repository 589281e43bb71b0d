"""Tests for box skeleton construction and the dataflow component."""

from __future__ import annotations

import uuid

import pytest
from structlog.testing import capture_logs

from cabinetry import COMPONENTS, CabinetBoxSkeleton, build_box_skeleton
from cabinetry.box import PANEL_LAYOUT
from cabinetry.components import DataAccess, ParamAccess, ParamKind
from kernel.geometry import BoundingBox, make_plane, shape_bounding_box
from skeleton import PROFILE_SLOTS, CabinetSkeleton


class TestBuildBoxSkeleton:
    """Test cases for build_box_skeleton."""

    def test_dimensions(self):
        skeleton = build_box_skeleton(36, 24, 30, 0.75)

        assert skeleton.width == 36
        assert skeleton.depth == 24
        assert skeleton.height == 30
        assert skeleton.thickness == 0.75

    def test_panels(self):
        skeleton = build_box_skeleton(36, 24, 30, 0.75)
        assert skeleton.part_names == list(PANEL_LAYOUT)
        assert skeleton.part_names == ["Left Side", "Right Side", "Top", "Bottom", "Back"]

    def test_overall_bounding_box(self):
        skeleton = build_box_skeleton(36, 24, 30, 0.75)
        assert skeleton.bounding_box().is_close(BoundingBox(0, 0, 0, 36, 24, 30), 1e-6)

    def test_panel_positions(self):
        skeleton = build_box_skeleton(36, 24, 30, 0.75)
        boxes = {name: shape_bounding_box(part) for part, name in skeleton.named_parts()}

        assert boxes["Left Side"].is_close(BoundingBox(0, 0, 0, 0.75, 24, 30), 1e-6)
        assert boxes["Right Side"].is_close(BoundingBox(35.25, 0, 0, 36, 24, 30), 1e-6)
        assert boxes["Top"].is_close(BoundingBox(0.75, 0, 29.25, 35.25, 24, 30), 1e-6)
        assert boxes["Bottom"].is_close(BoundingBox(0.75, 0, 0, 35.25, 24, 0.75), 1e-6)
        assert boxes["Back"].is_close(BoundingBox(0.75, 23.25, 0.75, 35.25, 24, 29.25), 1e-6)

    def test_face_profiles(self):
        skeleton = build_box_skeleton(36, 24, 30, 0.75)

        assert len(skeleton.profiles) == 6
        assert set(skeleton.named_profiles) == set(PROFILE_SLOTS)
        assert shape_bounding_box(skeleton["left"]).is_close(BoundingBox(0, 0, 0, 0, 24, 30), 1e-6)
        assert shape_bounding_box(skeleton["top"]).is_close(BoundingBox(0, 0, 30, 36, 24, 30), 1e-6)
        assert shape_bounding_box(skeleton["front"]).is_close(BoundingBox(0, 0, 0, 36, 0, 30), 1e-6)
        assert shape_bounding_box(skeleton["back"]).is_close(BoundingBox(0, 24, 0, 36, 24, 30), 1e-6)

    def test_offset_plane(self):
        plane = make_plane((100, 50, 10))
        skeleton = build_box_skeleton(36, 24, 30, 0.75, plane)

        assert skeleton.plane is plane
        assert skeleton.bounding_box().is_close(BoundingBox(100, 50, 10, 136, 74, 40), 1e-6)

    def test_rotated_plane(self):
        # Width runs along world Y
        plane = make_plane((0, 0, 0), normal=(0, 0, 1), x_dir=(0, 1, 0))
        skeleton = build_box_skeleton(36, 24, 30, 0.75, plane)

        assert skeleton.bounding_box().is_close(BoundingBox(-24, 0, 0, 0, 36, 30), 1e-6)

    def test_zero_thickness_skips_panels(self):
        with capture_logs() as logs:
            skeleton = build_box_skeleton(36, 24, 30, 0)

        assert skeleton.parts == []
        assert len(skeleton.profiles) == 6
        skipped = [entry["panel"] for entry in logs if entry["event"] == "Skipping degenerate panel"]
        assert skipped == list(PANEL_LAYOUT)
        assert all(entry["log_level"] == "warning" for entry in logs if "panel" in entry)

    def test_build_is_logged(self):
        with capture_logs() as logs:
            build_box_skeleton(36, 24, 30, 0.75)

        built = [entry for entry in logs if entry["event"] == "Built box skeleton"]
        assert len(built) == 1
        assert built[0]["parts"] == 5
        assert built[0]["profiles"] == 6

    def test_zero_dimensions(self):
        skeleton = build_box_skeleton(0, 0, 0, 0)

        assert isinstance(skeleton, CabinetSkeleton)
        assert skeleton.parts == []
        assert skeleton.profiles == []
        assert not skeleton.bounding_box().is_set

    def test_thin_cabinet_keeps_sides(self):
        # Width of two thicknesses leaves no room for the inner panels
        skeleton = build_box_skeleton(1.5, 24, 30, 0.75)
        assert skeleton.part_names == ["Left Side", "Right Side"]


class TestCabinetBoxSkeleton:
    """Test cases for the CabinetBoxSkeleton component."""

    def test_registration(self):
        component = CabinetBoxSkeleton()

        assert component.name == "CabinetBoxSkeleton"
        assert component.nickname == "Skeleton"
        assert component.category == "Cabinetry"
        assert component.subcategory == "Base"
        assert component.component_guid == uuid.UUID("3f8f548a-617d-4359-8d2b-e5564e77e2e5")
        assert component.icon is None
        assert COMPONENTS["CabinetBoxSkeleton"] is CabinetBoxSkeleton

    def test_input_params(self):
        inputs = CabinetBoxSkeleton().inputs

        assert [p.name for p in inputs] == ["Width", "Depth", "Height", "Thickness"]
        assert [p.nickname for p in inputs] == ["W", "D", "H", "T"]
        assert [p.default for p in inputs] == [36, 24, 36, 0.75]
        assert all(p.kind == ParamKind.NUMBER for p in inputs)
        assert all(p.access == ParamAccess.ITEM for p in inputs)

    def test_output_params(self):
        outputs = CabinetBoxSkeleton().outputs

        assert len(outputs) == 1
        assert outputs[0].name == "Cabinet"
        assert outputs[0].nickname == "C"
        assert outputs[0].kind == ParamKind.GENERIC

    def test_solve_with_defaults(self):
        result = CabinetBoxSkeleton().solve()
        skeleton = result["Cabinet"]

        assert isinstance(skeleton, CabinetSkeleton)
        assert (skeleton.width, skeleton.depth, skeleton.height, skeleton.thickness) == (36, 24, 36, 0.75)
        assert skeleton.bounding_box().is_close(BoundingBox(0, 0, 0, 36, 24, 36), 1e-6)

    def test_solve_by_name_and_nickname(self):
        result = CabinetBoxSkeleton().solve({"Width": 48, "D": 12, "Height": "30"})
        skeleton = result["Cabinet"]

        assert skeleton.width == 48
        assert skeleton.depth == 12
        assert skeleton.height == 30
        assert skeleton.thickness == 0.75

    def test_missing_input_leaves_output_unset(self):
        result = CabinetBoxSkeleton().solve({"Width": None})
        assert result == {"Cabinet": None}

    def test_unreadable_input_leaves_output_unset(self):
        result = CabinetBoxSkeleton().solve({"Thickness": "thick"})
        assert result["Cabinet"] is None

    def test_unknown_inputs_ignored(self):
        result = CabinetBoxSkeleton().solve({"Colour": "oak"})
        assert result["Cabinet"] is not None


class TestDataAccess:
    """Test cases for the per-solve data access."""

    @pytest.fixture
    def component(self):
        return CabinetBoxSkeleton()

    def test_number_coercion(self, component):
        data = DataAccess(component.inputs, [1, "2.5", None, object()], component.outputs)

        assert data.get_data(0) == 1.0
        assert data.get_data(1) == 2.5
        assert data.get_data(2) is None
        assert data.get_data(3) is None

    def test_set_data(self, component):
        data = DataAccess(component.inputs, [1, 1, 1, 1], component.outputs)
        assert data.outputs == [None]

        data.set_data(0, "value")
        assert data.outputs == ["value"]
