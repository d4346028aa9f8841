"""Splitting building limits by height plateaus.

Each building limit is cut into the pieces covered by individual height
plateaus, each tagged with that plateau's elevation, plus at most one
leftover piece for the area no plateau covers, tagged with the default
elevation.
"""

import logging
from typing import List, Sequence

from shapely.geometry.base import BaseGeometry

from .core.geometry_utils import has_area, polygonal_part
from .core.types import DEFAULT_ELEVATION, Feature

logger = logging.getLogger(__name__)

# DE-9IM pattern: interiors share at least one point
_INTERIORS_INTERSECT = 'T********'


def interiors_intersect(a: BaseGeometry, b: BaseGeometry) -> bool:
    """True if ``a`` and ``b`` share interior area.

    Unlike ``a.overlaps(b)`` this also holds when one geometry contains the
    other, and unlike ``a.intersects(b)`` it is False for geometries that only
    touch along their boundaries.
    """
    if a.is_empty or b.is_empty:
        return False
    return a.relate_pattern(b, _INTERIORS_INTERSECT)


def split_building_limit(
    building_limit: Feature,
    height_plateaus: Sequence[Feature],
    default_elevation: float = DEFAULT_ELEVATION,
) -> List[Feature]:
    """Split one building limit according to the height plateaus.

    Plateaus are visited in input order. Each plateau whose interior meets the
    not yet assigned remainder of the building limit claims that shared area
    as a fragment carrying the plateau's elevation; the claimed area is then
    removed from the remainder. Whatever is left after the last plateau
    becomes a single fragment with ``default_elevation``.

    Every fragment gets a copy of the building limit's properties with
    ``elevation`` overwritten.

    Args:
        building_limit: Building limit to split
        height_plateaus: Non-overlapping plateaus, each with an ``elevation``
        default_elevation: Elevation for the uncovered remainder
            (default: 9999.0)

    Returns:
        List of new fragment features. Fragments never have empty or
        zero-area geometry, and no input feature or property mapping is
        modified.

    Examples:
        >>> from shapely.geometry import box
        >>> limit = Feature(box(0, 0, 10, 10))
        >>> plateaus = [Feature(box(0, 0, 5, 10), {'elevation': 100})]
        >>> [(f.geometry.area, f.elevation) for f in split_building_limit(limit, plateaus)]
        [(50.0, 100.0), (50.0, 9999.0)]
    """
    remaining = building_limit.geometry
    fragments: List[Feature] = []

    for plateau in height_plateaus:
        if not has_area(remaining):
            break

        # against the remainder: area already claimed yields no fragment
        if not interiors_intersect(remaining, plateau.geometry):
            continue

        piece = polygonal_part(remaining.intersection(plateau.geometry))
        if not has_area(piece):
            continue

        fragments.append(building_limit.with_elevation(plateau.elevation, geometry=piece))
        remaining = polygonal_part(remaining.difference(piece))

    if has_area(remaining):
        fragments.append(building_limit.with_elevation(default_elevation, geometry=remaining))

    return fragments


def split_by_plateaus(
    building_limits: Sequence[Feature],
    height_plateaus: Sequence[Feature],
    default_elevation: float = DEFAULT_ELEVATION,
) -> List[Feature]:
    """Split every building limit; fragments are returned in building-limit order.

    Does no validation. Building limits are expected not to overlap each
    other, see :func:`plateausplit.merge.merge_polygons_with_overlaps`, and
    :func:`plateausplit.pipeline.split_building_limits` is the checked,
    serialized entry point.
    """
    fragments: List[Feature] = []
    for index, building_limit in enumerate(building_limits):
        pieces = split_building_limit(
            building_limit,
            height_plateaus,
            default_elevation=default_elevation,
        )
        logger.debug("Building limit %d split into %d fragment(s)", index, len(pieces))
        fragments.extend(pieces)
    return fragments


__all__ = [
    'interiors_intersect',
    'split_building_limit',
    'split_by_plateaus',
]
