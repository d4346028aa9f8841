"""Tests for polygon and plateau validation."""

import pytest
from shapely.errors import GEOSException
from shapely.geometry import LineString, MultiPolygon, Point, Polygon, box

from plateausplit.core import validation_utils
from plateausplit.core.errors import OverlapValidationError
from plateausplit.core.types import Feature
from plateausplit.core.validation_utils import (
    explain_invalid_feature,
    find_overlapping_pairs,
    has_overlaps,
    is_valid_feature,
    is_valid_polygon,
)

BOWTIE = Polygon([(0, 0), (2, 2), (2, 0), (0, 2)])


class TestIsValidPolygon:
    """Tests for is_valid_polygon."""

    def test_square(self):
        assert is_valid_polygon(box(0, 0, 1, 1)) is True

    def test_multipolygon(self):
        assert is_valid_polygon(MultiPolygon([box(0, 0, 1, 1), box(2, 0, 3, 1)])) is True

    def test_self_intersecting(self):
        assert is_valid_polygon(BOWTIE) is False

    def test_empty(self):
        assert is_valid_polygon(Polygon()) is False
        assert is_valid_polygon(Polygon(), allow_empty=True) is True

    def test_non_polygonal(self):
        assert is_valid_polygon(Point(0, 0)) is False
        assert is_valid_polygon(LineString([(0, 0), (1, 1)])) is False

    def test_none(self):
        assert is_valid_polygon(None) is False

    def test_min_area(self):
        assert is_valid_polygon(box(0, 0, 1, 1), min_area=2.0) is False
        assert is_valid_polygon(box(0, 0, 2, 2), min_area=2.0) is True


class TestIsValidFeature:
    """Tests for is_valid_feature."""

    def test_valid_feature(self):
        assert is_valid_feature(Feature(box(0, 0, 1, 1), {'elevation': 1})) is True

    def test_none_feature(self):
        assert is_valid_feature(None) is False

    def test_missing_geometry(self):
        assert is_valid_feature(Feature(None)) is False

    def test_empty_geometry(self):
        assert is_valid_feature(Feature(Polygon())) is False

    def test_invalid_geometry(self):
        assert is_valid_feature(Feature(BOWTIE)) is False

    def test_explanations(self):
        assert explain_invalid_feature(None) == "feature is None"
        assert explain_invalid_feature(Feature(None)) == "geometry is None"
        assert explain_invalid_feature(Feature(Polygon())) == "geometry is empty"
        assert "Point" in explain_invalid_feature(Feature(Point(0, 0)))
        assert "Self-intersection" in explain_invalid_feature(Feature(BOWTIE))
        assert explain_invalid_feature(Feature(box(0, 0, 1, 1))) == ""


class TestHasOverlaps:
    """Tests for has_overlaps and find_overlapping_pairs."""

    def test_overlapping_pair(self):
        features = [Feature(box(0, 0, 2, 2)), Feature(box(1, 1, 3, 3))]
        assert has_overlaps(features) is True

    def test_touching_is_not_overlap(self):
        features = [Feature(box(0, 0, 1, 1)), Feature(box(1, 0, 2, 1))]
        assert has_overlaps(features) is False

    def test_containment_is_not_overlap(self):
        features = [Feature(box(0, 0, 4, 4)), Feature(box(1, 1, 2, 2))]
        assert has_overlaps(features) is False

    def test_disjoint(self):
        features = [Feature(box(0, 0, 1, 1)), Feature(box(5, 5, 6, 6))]
        assert has_overlaps(features) is False

    def test_single_and_empty_lists(self):
        assert has_overlaps([Feature(box(0, 0, 1, 1))]) is False
        assert has_overlaps([]) is False

    def test_pairs_are_reported_by_index(self):
        features = [
            Feature(box(0, 0, 2, 2)),
            Feature(box(10, 10, 11, 11)),
            Feature(box(1, 1, 3, 3)),
            Feature(box(2.5, 2.5, 4, 4)),
        ]
        assert find_overlapping_pairs(features) == [(0, 2), (2, 3)]

    def test_engine_failure_is_wrapped(self, monkeypatch):
        """Geometry engine errors surface as OverlapValidationError with the cause kept."""
        cause = GEOSException("IllegalArgumentException: non-finite coordinate")

        def failing_pairs(*args, **kwargs):
            raise cause

        monkeypatch.setattr(validation_utils, "find_polygon_pairs", failing_pairs)

        with pytest.raises(OverlapValidationError) as excinfo:
            has_overlaps([Feature(box(0, 0, 1, 1)), Feature(box(2, 2, 3, 3))])
        assert excinfo.value.__cause__ is cause
