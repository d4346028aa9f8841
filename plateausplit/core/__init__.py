"""Core types and utilities for plateausplit.

This module provides the Feature entity, strategy enums, exceptions and the
validation helpers used throughout the library.
"""

from .types import (
    ELEVATION_KEY,
    DEFAULT_ELEVATION,
    Feature,
    MergeStrategy,
    coerce_enum,
)

from .errors import (
    PlateauSplitError,
    ValidationError,
    EmptyInputError,
    InvalidPolygonError,
    OverlapDetectedError,
    MissingAttributeError,
    InvalidAttributeError,
    OverlapValidationError,
    ConfigurationError,
    FeatureCollectionError,
)

from .validation_utils import (
    is_valid_polygon,
    is_valid_feature,
    find_overlapping_pairs,
    has_overlaps,
)

__all__ = [
    # Feature entity
    'ELEVATION_KEY',
    'DEFAULT_ELEVATION',
    'Feature',

    # Strategy enum
    'MergeStrategy',
    'coerce_enum',

    # Exceptions
    'PlateauSplitError',
    'ValidationError',
    'EmptyInputError',
    'InvalidPolygonError',
    'OverlapDetectedError',
    'MissingAttributeError',
    'InvalidAttributeError',
    'OverlapValidationError',
    'ConfigurationError',
    'FeatureCollectionError',

    # Validation
    'is_valid_polygon',
    'is_valid_feature',
    'find_overlapping_pairs',
    'has_overlaps',
]
