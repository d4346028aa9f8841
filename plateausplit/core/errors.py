"""Exception hierarchy for plateausplit.

Every error raised by the library derives from :class:`PlateauSplitError`, so
callers can catch a single base class. Validation problems with the caller's
input derive from :class:`ValidationError`.
"""

from __future__ import annotations

from typing import List, Optional, Tuple


class PlateauSplitError(Exception):
    """Base class for all plateausplit errors."""
    pass


class ValidationError(PlateauSplitError):
    """Raised when input features fail validation."""
    pass


class EmptyInputError(ValidationError):
    """Raised when a required feature list is ``None`` or empty."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} must be a non-empty list of polygon features")


class InvalidPolygonError(ValidationError):
    """Raised when a feature has no geometry, an empty geometry or an invalid one."""

    def __init__(self, name: str, index: int, reason: str = ""):
        self.name = name
        self.index = index
        self.reason = reason
        message = f"{name}[{index}] is not a valid polygon"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class OverlapDetectedError(ValidationError):
    """Raised when height plateaus properly overlap each other."""

    def __init__(self, pairs: Optional[List[Tuple[int, int]]] = None):
        self.pairs = list(pairs or [])
        message = "height plateaus must not overlap"
        if self.pairs:
            shown = ", ".join(f"{i}/{j}" for i, j in self.pairs[:5])
            message = f"{message} (overlapping pairs: {shown})"
        super().__init__(message)


class MissingAttributeError(ValidationError, KeyError):
    """Raised when a feature lacks a required attribute such as ``elevation``."""

    def __init__(self, key: str, index: Optional[int] = None):
        self.key = key
        self.index = index
        where = "feature" if index is None else f"feature {index}"
        self.message = f"{where} is missing required attribute '{key}'"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class InvalidAttributeError(ValidationError):
    """Raised when an attribute is present but is not a finite number."""

    def __init__(self, key: str, value: object, index: Optional[int] = None):
        self.key = key
        self.value = value
        self.index = index
        where = "" if index is None else f"feature {index}: "
        super().__init__(
            f"{where}attribute '{key}' must be a finite number, got {type(value).__name__}: {value!r}"
        )


class OverlapValidationError(PlateauSplitError):
    """Raised when the geometry engine fails while checking for overlaps.

    The underlying exception is available as ``__cause__``.
    """
    pass


class ConfigurationError(PlateauSplitError):
    """Raised for invalid configuration values."""
    pass


class FeatureCollectionError(PlateauSplitError):
    """Raised when a GeoJSON feature collection cannot be read or parsed."""
    pass


__all__ = [
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
