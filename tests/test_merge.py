"""Tests for merging intersecting building limits."""

import pytest
from shapely.geometry import box

from plateausplit.core.errors import ConfigurationError
from plateausplit.core.types import Feature, MergeStrategy
from plateausplit.merge import merge_polygons_with_overlaps


def _chain():
    """A touches B, B touches C, A and C are disjoint."""
    return [
        Feature(box(0, 0, 2, 1), {'id': 'a'}),
        Feature(box(1.5, 0, 3.5, 1), {'id': 'b'}),
        Feature(box(3, 0, 5, 1), {'id': 'c'}),
    ]


class TestMergeDisjoint:
    """Inputs without intersections pass through untouched."""

    def test_same_objects_same_order(self):
        features = [
            Feature(box(0, 0, 1, 1), {'id': 1}),
            Feature(box(5, 0, 6, 1), {'id': 2}),
            Feature(box(0, 5, 1, 6), {'id': 3}),
        ]
        result = merge_polygons_with_overlaps(features)

        assert len(result) == 3
        for before, after in zip(features, result):
            assert after is before

    def test_empty_input(self):
        assert merge_polygons_with_overlaps([]) == []
        assert merge_polygons_with_overlaps([], return_mapping=True) == ([], [])


class TestMergeIntersecting:
    """Tests for groups of intersecting limits."""

    def test_two_overlapping_polygons(self):
        a = box(0, 0, 4, 4)
        b = box(2, 2, 6, 6)
        result = merge_polygons_with_overlaps([Feature(a, {'id': 'a'}), Feature(b, {'id': 'b'})])

        assert len(result) == 1
        expected_area = a.area + b.area - a.intersection(b).area
        assert result[0].geometry.area == pytest.approx(expected_area)
        assert result[0].properties == {}

    def test_touching_polygons_are_merged(self):
        result = merge_polygons_with_overlaps([Feature(box(0, 0, 1, 1)), Feature(box(1, 0, 2, 1))])

        assert len(result) == 1
        assert result[0].geometry.area == pytest.approx(2.0)

    def test_member_found_later_is_pulled_forward(self):
        a = Feature(box(0, 0, 2, 2))
        far = Feature(box(10, 10, 11, 11))
        b = Feature(box(1, 1, 3, 3))

        result, groups = merge_polygons_with_overlaps([a, far, b], return_mapping=True)

        assert groups == [[0, 2], [1]]
        assert result[1] is far
        assert result[0].geometry.area == pytest.approx(7.0)

    def test_input_list_is_not_reordered(self):
        features = [Feature(box(0, 0, 2, 2)), Feature(box(10, 10, 11, 11)), Feature(box(1, 1, 3, 3))]
        snapshot = list(features)

        merge_polygons_with_overlaps(features)

        assert all(a is b for a, b in zip(features, snapshot))
        assert all(f.properties == {} for f in features)


class TestMergeStrategies:
    """Anchor grouping versus connected components."""

    def test_anchor_is_not_transitive(self):
        result, groups = merge_polygons_with_overlaps(_chain(), return_mapping=True)

        assert groups == [[0, 1], [2]]
        assert len(result) == 2
        assert result[0].geometry.area == pytest.approx(3.5)
        assert result[1].properties == {'id': 'c'}
        # the chain's third link still intersects the first group
        assert result[0].geometry.intersects(result[1].geometry)

    def test_connected_merges_whole_chain(self):
        result, groups = merge_polygons_with_overlaps(
            _chain(), merge_strategy=MergeStrategy.CONNECTED, return_mapping=True
        )

        assert groups == [[0, 1, 2]]
        assert len(result) == 1
        assert result[0].geometry.area == pytest.approx(5.0)

    def test_connected_keeps_isolated_features(self):
        isolated = Feature(box(20, 20, 21, 21))
        result = merge_polygons_with_overlaps(_chain() + [isolated], merge_strategy='connected')

        assert len(result) == 2
        assert result[1] is isolated

    def test_strategy_string(self):
        result = merge_polygons_with_overlaps(_chain(), merge_strategy='anchor')
        assert len(result) == 2

    def test_unknown_strategy(self):
        with pytest.raises(ConfigurationError):
            merge_polygons_with_overlaps(_chain(), merge_strategy='closure')
