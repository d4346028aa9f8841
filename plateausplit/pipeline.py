"""Validate, merge and split building limits as one serialized pipeline."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Union

from .core.errors import (
    EmptyInputError,
    InvalidAttributeError,
    InvalidPolygonError,
    MissingAttributeError,
    OverlapDetectedError,
)
from .core.types import DEFAULT_ELEVATION, ELEVATION_KEY, Feature, MergeStrategy, coerce_enum
from .core.validation_utils import (
    explain_invalid_feature,
    find_overlapping_pairs,
    is_valid_feature,
)
from .merge import merge_polygons_with_overlaps
from .split import split_by_plateaus

logger = logging.getLogger(__name__)


@dataclass
class SplitConfig:
    """Settings for :func:`split_building_limits`."""

    default_elevation: float = DEFAULT_ELEVATION
    merge_strategy: Union[MergeStrategy, str] = MergeStrategy.ANCHOR

    def __post_init__(self) -> None:
        self.merge_strategy = coerce_enum(self.merge_strategy, MergeStrategy)
        self.default_elevation = float(self.default_elevation)


@dataclass
class PipelineContext:
    """Runtime state passed between pipeline steps."""

    building_limits: Sequence[Feature]
    height_plateaus: Sequence[Feature]
    config: SplitConfig
    merged: List[Feature] = field(default_factory=list)
    fragments: List[Feature] = field(default_factory=list)
    metadata: Dict[str, object] = field(default_factory=dict)


PipelineStep = Callable[[PipelineContext], None]


class ExecutionTicket:
    """Process-wide exclusive ticket held for one pipeline execution.

    Holders are serialized: ``acquire`` blocks with no timeout until the
    current holder releases, and waiting callers are not served in any
    particular order.
    """

    def __init__(self, name: str):
        self.name = name
        self._lock = threading.Lock()

    def acquire(self) -> None:
        self._lock.acquire()

    def release(self) -> None:
        self._lock.release()

    @property
    def held(self) -> bool:
        return self._lock.locked()

    def __enter__(self) -> "ExecutionTicket":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"ExecutionTicket({self.name!r}, held={self.held})"


SPLIT_TICKET = ExecutionTicket("split-building-limits")


def validate_inputs(context: PipelineContext) -> None:
    """Reject missing or empty lists and invalid polygons, naming the culprit."""
    for name, features in (
        ("building_limits", context.building_limits),
        ("height_plateaus", context.height_plateaus),
    ):
        if not features:
            raise EmptyInputError(name)
        for index, feature in enumerate(features):
            if not is_valid_feature(feature):
                raise InvalidPolygonError(name, index, explain_invalid_feature(feature))


def validate_plateaus(context: PipelineContext) -> None:
    """Reject overlapping plateaus and plateaus without a numeric elevation."""
    pairs = find_overlapping_pairs(context.height_plateaus)
    if pairs:
        raise OverlapDetectedError(pairs)

    for index, plateau in enumerate(context.height_plateaus):
        try:
            plateau.elevation  # typed accessor raises on missing or non-numeric values
        except MissingAttributeError:
            raise MissingAttributeError(ELEVATION_KEY, index) from None
        except InvalidAttributeError as exc:
            raise InvalidAttributeError(ELEVATION_KEY, exc.value, index) from None


def merge_step(context: PipelineContext) -> None:
    context.merged = merge_polygons_with_overlaps(
        context.building_limits,
        merge_strategy=context.config.merge_strategy,
    )
    context.metadata["merged_count"] = len(context.merged)


def split_step(context: PipelineContext) -> None:
    context.fragments = split_by_plateaus(
        context.merged,
        context.height_plateaus,
        default_elevation=context.config.default_elevation,
    )
    context.metadata["fragment_count"] = len(context.fragments)


DEFAULT_STEPS: List[PipelineStep] = [
    validate_inputs,
    validate_plateaus,
    merge_step,
    split_step,
]


def run_steps(context: PipelineContext, steps: Sequence[PipelineStep]) -> PipelineContext:
    """Run ``steps`` in order; the first exception aborts the run."""
    for step in steps:
        logger.debug("Running pipeline step %s", step.__name__)
        step(context)
    return context


def split_building_limits(
    building_limits: Optional[Sequence[Feature]],
    height_plateaus: Optional[Sequence[Feature]],
    config: Optional[SplitConfig] = None,
) -> List[Feature]:
    """Split building limits according to height plateaus.

    Validates both inputs, unions intersecting building limits, then splits
    every merged limit into fragments tagged with the elevation of the plateau
    covering them, or ``config.default_elevation`` where no plateau does.

    The whole run holds :data:`SPLIT_TICKET`, so concurrent callers execute one
    after another. Either the complete fragment list is returned or an
    exception is raised; there are no partial results.

    Args:
        building_limits: Building-limit features (may overlap each other)
        height_plateaus: Height-plateau features, each with an ``elevation``,
            not overlapping each other
        config: Pipeline settings (default: ``SplitConfig()``)

    Returns:
        List of fragment features

    Raises:
        EmptyInputError: If either list is None or empty
        InvalidPolygonError: If any feature lacks a valid, non-empty polygon
        OverlapDetectedError: If two height plateaus properly overlap
        OverlapValidationError: If the geometry engine fails during the
            overlap check
        MissingAttributeError: If a height plateau has no ``elevation``
        InvalidAttributeError: If a plateau's ``elevation`` is not a number

    Examples:
        >>> from shapely.geometry import box
        >>> limits = [Feature(box(0, 0, 10, 10))]
        >>> plateaus = [
        ...     Feature(box(0, 0, 5, 10), {'elevation': 100}),
        ...     Feature(box(5, 0, 10, 10), {'elevation': 200}),
        ... ]
        >>> [f.elevation for f in split_building_limits(limits, plateaus)]
        [100.0, 200.0]
    """
    if config is None:
        config = SplitConfig()

    with SPLIT_TICKET:
        context = PipelineContext(
            building_limits=list(building_limits or []),
            height_plateaus=list(height_plateaus or []),
            config=config,
        )
        run_steps(context, DEFAULT_STEPS)

    logger.info(
        "Split %d building limit(s) (%d after merge) by %d plateau(s) into %d fragment(s)",
        len(context.building_limits),
        context.metadata["merged_count"],
        len(context.height_plateaus),
        context.metadata["fragment_count"],
    )
    return context.fragments


__all__ = [
    "SplitConfig",
    "PipelineContext",
    "PipelineStep",
    "ExecutionTicket",
    "SPLIT_TICKET",
    "validate_inputs",
    "validate_plateaus",
    "run_steps",
    "split_building_limits",
]
