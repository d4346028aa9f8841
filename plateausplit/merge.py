"""Merging of intersecting building limits.

Building limits may overlap each other on input. Before splitting they are
reduced to a list in which no two members intersect, by replacing each group
of intersecting limits with the union of their geometries.
"""

import logging
from typing import List, Sequence, Tuple, Union

from shapely.ops import unary_union

from .core.spatial_utils import build_adjacency_graph, find_connected_components
from .core.types import Feature, MergeStrategy, coerce_enum

logger = logging.getLogger(__name__)


def merge_polygons_with_overlaps(
    features: Sequence[Feature],
    merge_strategy: Union[MergeStrategy, str] = MergeStrategy.ANCHOR,
    return_mapping: bool = False,
) -> Union[List[Feature], Tuple[List[Feature], List[List[int]]]]:
    """Union building limits that intersect each other.

    Groups of intersecting features are replaced by one new feature whose
    geometry is the union of the group and whose properties are empty. A
    feature that intersects nothing is passed through as the same object.
    The input sequence is never modified.

    Args:
        features: Building limits, in input order
        merge_strategy: How groups are formed (enum or string literal):
            - MergeStrategy.ANCHOR: Walk the list once. The first unprocessed
              feature is the anchor; every later feature that intersects the
              anchor joins its group. A feature that only intersects another
              group member is left for a later group (default)
            - MergeStrategy.CONNECTED: Group by connected components of the
              intersection graph, so chains merge completely
        return_mapping: If True, return (merged, groups) where groups[k] holds
            the input indices that make up merged[k]

    Returns:
        List of merged features, or (features, groups) if return_mapping=True

    Examples:
        >>> from shapely.geometry import box
        >>> a = Feature(box(0, 0, 2, 2))
        >>> b = Feature(box(1, 1, 3, 3))
        >>> merged = merge_polygons_with_overlaps([a, b])
        >>> len(merged), merged[0].geometry.area
        (1, 7.0)
    """
    if not features:
        return ([], []) if return_mapping else []

    strategy = coerce_enum(merge_strategy, MergeStrategy)

    if strategy == MergeStrategy.CONNECTED:
        groups = _connected_groups(features)
    else:
        groups = _anchor_groups(features)

    merged = [_merge_group(features, group) for group in groups]

    logger.debug(
        "Merged %d building limit(s) into %d using %s grouping",
        len(features), len(merged), strategy.value,
    )

    return (merged, groups) if return_mapping else merged


def _anchor_groups(features: Sequence[Feature]) -> List[List[int]]:
    """Group input indices with the single-pass anchor scan.

    Works on a permutation of indices: members found for the current anchor are
    swapped up to sit directly behind the group, so the next anchor is always
    the first feature not yet assigned to a group.
    """
    order = list(range(len(features)))
    groups: List[List[int]] = []

    i = 0
    while i < len(order):
        anchor = features[order[i]].geometry
        group = [order[i]]
        boundary = i

        for j in range(i + 1, len(order)):
            if anchor.intersects(features[order[j]].geometry):
                boundary += 1
                order[boundary], order[j] = order[j], order[boundary]
                group.append(order[boundary])

        groups.append(group)
        i = boundary + 1

    return groups


def _connected_groups(features: Sequence[Feature]) -> List[List[int]]:
    geometries = [feature.geometry for feature in features]
    adjacency = build_adjacency_graph(geometries, predicate='intersects')
    return find_connected_components(adjacency)


def _merge_group(features: Sequence[Feature], group: List[int]) -> Feature:
    if len(group) == 1:
        return features[group[0]]
    merged_geometry = unary_union([features[index].geometry for index in group])
    return Feature(merged_geometry, {})


__all__ = [
    'merge_polygons_with_overlaps',
]
