"""plateausplit - Split building limits by height plateaus.

This library partitions building-limit polygons into fragments according to
the height plateaus covering them, tagging every fragment with an elevation.
Geometry operations are done with Shapely.
"""

__version__ = '0.1.0'


# Feature entity and strategy enum
from .core import (
    ELEVATION_KEY,
    DEFAULT_ELEVATION,
    Feature,
    MergeStrategy,
)

# Validation
from .core import (
    is_valid_polygon,
    is_valid_feature,
    find_overlapping_pairs,
    has_overlaps,
)

# Merge functions
from .merge import merge_polygons_with_overlaps

# Split functions
from .split import split_building_limit, split_by_plateaus

# Pipeline
from .pipeline import SplitConfig, ExecutionTicket, split_building_limits

# Metrics
from .metrics import measure_fragments

# Core exceptions
from .core import (
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

__all__ = [

    # Feature entity
    'ELEVATION_KEY',
    'DEFAULT_ELEVATION',
    'Feature',
    'MergeStrategy',

    # Validation
    'is_valid_polygon',
    'is_valid_feature',
    'find_overlapping_pairs',
    'has_overlaps',

    # Merge
    'merge_polygons_with_overlaps',

    # Split
    'split_building_limit',
    'split_by_plateaus',

    # Pipeline
    'SplitConfig',
    'ExecutionTicket',
    'split_building_limits',

    # Metrics
    'measure_fragments',

    # Core exceptions
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
]
