"""Type definitions for plateausplit operations.

This module defines the :class:`Feature` entity shared by building limits,
height plateaus and output fragments, and the enums used for strategy
parameters throughout the library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Any, Dict, Optional, Tuple, Type, TypeVar, Union

import numpy as np
from shapely.geometry.base import BaseGeometry

from .errors import ConfigurationError, InvalidAttributeError, MissingAttributeError

ELEVATION_KEY = 'elevation'
DEFAULT_ELEVATION = 9999.0

E = TypeVar('E', bound=Enum)


@dataclass
class Feature:
    """A polygonal geometry paired with an attribute mapping.

    Building limits, height plateaus and the fragments produced by splitting
    are all features. The only attribute the library interprets is
    ``elevation``, exposed through the typed :attr:`elevation` accessor.

    Attributes:
        geometry: Shapely Polygon or MultiPolygon (may be ``None`` for
            malformed input, which validation rejects)
        properties: Attribute mapping of string keys to arbitrary values

    Examples:
        >>> from shapely.geometry import box
        >>> plateau = Feature(box(0, 0, 5, 10), {'elevation': 100})
        >>> plateau.elevation
        100.0
    """
    geometry: Optional[BaseGeometry]
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def bbox(self) -> Optional[Tuple[float, float, float, float]]:
        """Bounding box ``(minx, miny, maxx, maxy)``, or ``None`` if there is none."""
        if self.geometry is None or self.geometry.is_empty:
            return None
        return tuple(self.geometry.bounds)

    @property
    def has_elevation(self) -> bool:
        return self.properties.get(ELEVATION_KEY) is not None

    @property
    def elevation(self) -> float:
        """The ``elevation`` attribute as a float.

        Raises:
            MissingAttributeError: If the attribute is absent or ``None``
            InvalidAttributeError: If the attribute is not a finite real number
        """
        value = self.properties.get(ELEVATION_KEY)
        if value is None:
            raise MissingAttributeError(ELEVATION_KEY)
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidAttributeError(ELEVATION_KEY, value)
        elevation = float(value)
        if not np.isfinite(elevation):
            raise InvalidAttributeError(ELEVATION_KEY, value)
        return elevation

    def with_elevation(
        self,
        elevation: float,
        geometry: Optional[BaseGeometry] = None,
    ) -> 'Feature':
        """Return a new feature carrying ``elevation``.

        The properties are copied, so the returned feature never shares its
        attribute mapping with this one.

        Args:
            elevation: Elevation to store on the new feature
            geometry: Geometry for the new feature (defaults to this feature's)

        Returns:
            New Feature
        """
        properties = dict(self.properties)
        properties[ELEVATION_KEY] = float(elevation)
        return Feature(self.geometry if geometry is None else geometry, properties)


class MergeStrategy(Enum):
    """Strategy for grouping intersecting building limits before union.

    Attributes:
        ANCHOR: Single pass; each group is the first unprocessed feature plus
            every later feature that directly intersects it (default)
        CONNECTED: Connected components of the intersection graph, so chains
            of intersecting features collapse into one

    Examples:
        >>> from plateausplit import merge_polygons_with_overlaps, MergeStrategy
        >>> merged = merge_polygons_with_overlaps(features, merge_strategy=MergeStrategy.CONNECTED)
    """
    ANCHOR = 'anchor'
    CONNECTED = 'connected'


def coerce_enum(value: Union[E, str], enum_type: Type[E]) -> E:
    """Convert a string value to ``enum_type``, passing enum members through.

    Raises:
        ConfigurationError: If ``value`` is not a member or member value
    """
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        choices = ", ".join(repr(member.value) for member in enum_type)
        raise ConfigurationError(
            f"Unknown {enum_type.__name__}: {value!r} (expected one of {choices})"
        ) from None


__all__ = [
    'ELEVATION_KEY',
    'DEFAULT_ELEVATION',
    'Feature',
    'MergeStrategy',
    'coerce_enum',
]
