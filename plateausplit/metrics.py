"""Measurement helpers for split results.

A correct split covers each merged building limit exactly: the fragments do
not overlap each other and their areas add up to the building limits' area.
These helpers compute the numbers needed to check that and to summarize a
run.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, Sequence

import numpy as np
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from .core.types import Feature


def total_area(geometries: Iterable[BaseGeometry]) -> float:
    """Sum of the areas of ``geometries``, ignoring ``None`` and empty ones."""
    areas = [geom.area for geom in geometries if geom is not None and not geom.is_empty]
    return float(np.sum(areas)) if areas else 0.0


def total_overlap_area(geometries: Iterable[BaseGeometry]) -> float:
    """Compute the total overlapping area within ``geometries``."""
    geometries = [geom for geom in geometries if geom is not None and not geom.is_empty]
    if len(geometries) < 2:
        return 0.0
    union = unary_union(geometries)
    return total_area(geometries) - getattr(union, "area", 0.0)


def area_by_elevation(fragments: Sequence[Feature]) -> Dict[float, float]:
    """Return fragment area per elevation, in order of first appearance."""
    areas: Dict[float, float] = defaultdict(float)
    for fragment in fragments:
        areas[fragment.elevation] += fragment.geometry.area
    return dict(areas)


def measure_fragments(
    fragments: Sequence[Feature],
    building_limits: Sequence[Feature] = (),
) -> Dict[str, object]:
    """Return summary metrics for a list of fragments.

    Args:
        fragments: Output of the splitter
        building_limits: Optional building limits the fragments came from; when
            given, ``coverage_ratio`` compares fragment area to their union

    Returns:
        Dict with ``count``, ``area``, ``overlap_area``, ``area_by_elevation``
        and ``coverage_ratio`` (None without building limits)
    """
    geometries = [fragment.geometry for fragment in fragments]
    area = total_area(geometries)

    coverage_ratio = None
    if building_limits:
        limits_area = unary_union([limit.geometry for limit in building_limits]).area
        if limits_area > 0:
            coverage_ratio = area / limits_area

    return {
        "count": len(fragments),
        "area": area,
        "overlap_area": total_overlap_area(geometries),
        "area_by_elevation": area_by_elevation(fragments),
        "coverage_ratio": coverage_ratio,
    }


__all__ = [
    "total_area",
    "total_overlap_area",
    "area_by_elevation",
    "measure_fragments",
]
