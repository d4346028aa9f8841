"""Validation of building limits and height plateaus.

Splitting assumes every input is a usable polygon and that the height
plateaus assign at most one elevation to any point. The checks here gate the
pipeline in :mod:`plateausplit.pipeline`.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from shapely.geometry.base import BaseGeometry
from shapely.validation import explain_validity

from .errors import OverlapValidationError
from .geometry_utils import is_polygonal
from .spatial_utils import find_polygon_pairs
from .types import Feature

logger = logging.getLogger(__name__)


def is_valid_polygon(
    geometry: Optional[BaseGeometry],
    min_area: float = 0.0,
    allow_empty: bool = False
) -> bool:
    """Check if geometry is a usable polygon.

    Combines the checks the splitter relies on:
    - Polygon or MultiPolygon type
    - Non-empty (unless ``allow_empty``)
    - Finite bounding box
    - Shapely validity (no self-intersections, no degenerate rings)
    - Minimum area check (if specified)

    Args:
        geometry: Geometry to validate
        min_area: Minimum acceptable area (0 = no minimum)
        allow_empty: If True, allows empty geometries

    Returns:
        True if geometry meets all criteria, False otherwise

    Examples:
        >>> from shapely.geometry import Polygon
        >>> is_valid_polygon(Polygon([(0, 0), (1, 0), (1, 1), (0, 1)]))
        True

        >>> is_valid_polygon(Polygon([(0, 0), (1, 1), (0, 1), (1, 0)]))  # Bow-tie
        False
    """
    if not is_polygonal(geometry):
        return False

    if geometry.is_empty:
        return allow_empty

    if not np.all(np.isfinite(geometry.bounds)):
        return False

    if not geometry.is_valid:
        return False

    if min_area > 0 and geometry.area < min_area:
        return False

    return True


def is_valid_feature(feature: Optional[Feature]) -> bool:
    """Check that a feature is present and carries a valid, non-empty polygon.

    Args:
        feature: Feature to validate (``None`` is reported as invalid)

    Returns:
        True if the feature has a geometry, a bounding box, and the geometry is
        non-empty and topologically valid
    """
    if feature is None or getattr(feature, 'geometry', None) is None:
        return False

    if feature.bbox is None:
        return False

    return is_valid_polygon(feature.geometry)


def explain_invalid_feature(feature: Optional[Feature]) -> str:
    """Short reason why :func:`is_valid_feature` rejects ``feature``."""
    if feature is None:
        return "feature is None"
    geometry = getattr(feature, 'geometry', None)
    if geometry is None:
        return "geometry is None"
    if not is_polygonal(geometry):
        return f"unsupported geometry type {geometry.geom_type}"
    if geometry.is_empty:
        return "geometry is empty"
    if not np.all(np.isfinite(geometry.bounds)):
        return "geometry has non-finite coordinates"
    if not geometry.is_valid:
        return explain_validity(geometry)
    return ""


def find_overlapping_pairs(features: Sequence[Feature]) -> List[Tuple[int, int]]:
    """Find index pairs of features whose geometries properly overlap.

    Two geometries properly overlap when their interiors intersect and
    neither contains the other. Touching and containment are not reported.

    Raises:
        OverlapValidationError: If the geometry engine fails on any geometry;
            the original exception is chained as ``__cause__``
    """
    geometries = [feature.geometry for feature in features]
    try:
        return find_polygon_pairs(geometries, predicate='overlaps')
    except Exception as exc:
        raise OverlapValidationError(
            f"Failed on polygon overlap validation: {exc}"
        ) from exc


def has_overlaps(features: Sequence[Feature]) -> bool:
    """Check if any two features in the list properly overlap.

    Args:
        features: Features to check

    Returns:
        True if at least one pair overlaps

    Raises:
        OverlapValidationError: If the geometry engine fails during the scan
    """
    pairs = find_overlapping_pairs(features)
    if pairs:
        logger.debug("Found %d overlapping pair(s): %s", len(pairs), pairs[:10])
    return bool(pairs)


__all__ = [
    'is_valid_polygon',
    'is_valid_feature',
    'explain_invalid_feature',
    'find_overlapping_pairs',
    'has_overlaps',
]
