"""Tests for skeleton casting to and from plain geometry."""

from __future__ import annotations

import pytest

from kernel.geometry import BoundingBox, is_brep, shape_bounding_box
from skeleton import (
    DEFAULT_PART_NAME,
    CabinetSkeleton,
    ConversionShape,
    Converted,
    Unsupported,
)


class TestCastTo:
    """Test cases for CabinetSkeleton.cast_to."""

    def test_curves(self, six_profiles):
        skeleton = CabinetSkeleton()
        skeleton.profiles = six_profiles

        result = skeleton.cast_to(ConversionShape.CURVES)

        assert isinstance(result, Converted)
        assert result.ok
        assert result.value is skeleton.profiles

    def test_solids(self, two_sided_skeleton):
        result = two_sided_skeleton.cast_to(ConversionShape.SOLIDS)
        assert result.ok
        assert result.value is two_sided_skeleton.parts

    def test_string_target(self, two_sided_skeleton):
        assert two_sided_skeleton.cast_to("solids").ok

    def test_combined_solid(self, two_sided_skeleton):
        result = two_sided_skeleton.cast_to(ConversionShape.COMBINED_SOLID)

        assert result.ok
        assert is_brep(result.value)
        assert shape_bounding_box(result.value).is_close(BoundingBox(0, 0, 0, 36, 24, 36), 1e-6)

    def test_combined_solid_of_empty_skeleton(self):
        result = CabinetSkeleton().cast_to(ConversionShape.COMBINED_SOLID)
        assert result.ok
        assert not shape_bounding_box(result.value).is_set

    @pytest.mark.parametrize("target", ["mesh", "points", 42, None])
    def test_unsupported(self, two_sided_skeleton, target):
        result = two_sided_skeleton.cast_to(target)

        assert isinstance(result, Unsupported)
        assert not result.ok
        assert "Cannot cast" in result.reason


class TestCastFrom:
    """Test cases for CabinetSkeleton.cast_from."""

    def test_single_solid(self, make_panel):
        skeleton = CabinetSkeleton()
        panel = make_panel()

        assert skeleton.cast_from(panel)
        assert skeleton.parts == [panel]
        assert skeleton.part_names == [DEFAULT_PART_NAME]

    def test_solid_list(self, left_side, right_side):
        skeleton = CabinetSkeleton()

        assert skeleton.cast_from([left_side, right_side])
        assert skeleton.part_names == ["New Brep", "New Brep"]

    def test_solids_append_to_existing(self, two_sided_skeleton, make_panel):
        assert two_sided_skeleton.cast_from(make_panel())
        assert two_sided_skeleton.part_names == ["Left Side", "Right Side", "New Brep"]

    def test_curve_list_replaces_profiles(self, six_profiles, make_square):
        skeleton = CabinetSkeleton()
        skeleton.profiles = [make_square(size=10.0)]

        assert skeleton.cast_from(six_profiles)
        assert len(skeleton.profiles) == 6
        assert skeleton.profile("front") is six_profiles[4]

    def test_single_curve_appends(self, six_profiles, make_square):
        skeleton = CabinetSkeleton()
        skeleton.profiles = six_profiles
        extra = make_square(size=20.0)

        assert skeleton.cast_from(extra)
        assert len(skeleton.profiles) == 7
        assert skeleton.profiles[-1] is extra

    def test_single_curve_does_not_refresh_slots(self, make_square):
        skeleton = CabinetSkeleton()
        first = make_square()

        assert skeleton.cast_from(first)
        assert skeleton.profiles == [first]
        assert skeleton.profile("left") is None

        # The next bulk assignment picks it up
        skeleton.profiles = skeleton.profiles
        assert skeleton.profile("left") is first

    def test_mixed_list_rejected(self, make_panel, make_square):
        skeleton = CabinetSkeleton()

        assert not skeleton.cast_from([make_panel(), make_square()])
        assert skeleton.parts == []
        assert skeleton.profiles == []

    @pytest.mark.parametrize("source", [None, "panel", 3.5, [], ()])
    def test_rejected_sources(self, source):
        skeleton = CabinetSkeleton()
        assert not skeleton.cast_from(source)
        assert skeleton.parts == []
