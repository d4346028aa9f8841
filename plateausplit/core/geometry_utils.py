"""Common geometry manipulation utilities.

Intersections and differences of polygons can come back as lines, points or
mixed collections when boundaries touch. The helpers here reduce such results
to their polygonal part so only areal pieces become fragments.
"""

from typing import List, Union
from shapely.geometry import Polygon, MultiPolygon, GeometryCollection
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

AREA_EPS = 1e-10

POLYGONAL_TYPES = ('Polygon', 'MultiPolygon')


def polygonal_part(geometry: BaseGeometry) -> Union[Polygon, MultiPolygon]:
    """Return the polygonal part of ``geometry``.

    Polygons and MultiPolygons are returned unchanged. For a
    GeometryCollection, the polygon members are gathered (lines and points
    are dropped) and dissolved into a single Polygon or MultiPolygon.

    Args:
        geometry: Result of an overlay operation

    Returns:
        Polygon or MultiPolygon; an empty Polygon if there is no areal part

    Examples:
        >>> from shapely.geometry import box
        >>> piece = box(0, 0, 2, 2).intersection(box(1, 0, 3, 2))
        >>> polygonal_part(piece).area
        2.0
    """
    if geometry is None or geometry.is_empty:
        return Polygon()
    if isinstance(geometry, (Polygon, MultiPolygon)):
        return geometry
    if isinstance(geometry, GeometryCollection):
        polygons: List[Polygon] = []
        for part in geometry.geoms:
            if isinstance(part, Polygon) and not part.is_empty:
                polygons.append(part)
            elif isinstance(part, MultiPolygon):
                polygons.extend(p for p in part.geoms if not p.is_empty)
        if len(polygons) == 1:
            return polygons[0]
        if polygons:
            return polygonal_part(unary_union(polygons))
    return Polygon()


def has_area(geometry: BaseGeometry, tolerance: float = AREA_EPS) -> bool:
    """Check whether ``geometry`` is non-empty and encloses more than ``tolerance``."""
    if geometry is None or geometry.is_empty:
        return False
    return getattr(geometry, 'area', 0.0) > tolerance


def is_polygonal(geometry: BaseGeometry) -> bool:
    """Check whether ``geometry`` is a Polygon or MultiPolygon."""
    return geometry is not None and geometry.geom_type in POLYGONAL_TYPES


__all__ = [
    'AREA_EPS',
    'POLYGONAL_TYPES',
    'polygonal_part',
    'has_area',
    'is_polygonal',
]
