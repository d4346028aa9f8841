"""GeoJSON input and output for building limits, plateaus and fragments.

Feature collections are parsed with :func:`shapely.geometry.shape`. Only
polygonal features are kept; anything else in a collection is dropped with a
log message.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from shapely.errors import GEOSException
from shapely.geometry import mapping, shape

from .core.errors import FeatureCollectionError
from .core.geometry_utils import POLYGONAL_TYPES
from .core.types import Feature

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def features_from_geojson(data: Dict[str, Any]) -> List[Feature]:
    """Convert a parsed GeoJSON FeatureCollection into polygon features.

    Features whose geometry is missing or not a Polygon/MultiPolygon are
    skipped.

    Args:
        data: Parsed GeoJSON object with ``type == "FeatureCollection"``

    Returns:
        List of features in document order

    Raises:
        FeatureCollectionError: If ``data`` is not a FeatureCollection, a
            feature or its geometry is not an object, or a geometry cannot be
            built
    """
    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        raise FeatureCollectionError("GeoJSON document is not a FeatureCollection")

    raw_features = data.get("features") or []
    features: List[Feature] = []
    skipped = 0

    for index, raw in enumerate(raw_features):
        if not isinstance(raw, dict):
            raise FeatureCollectionError(f"feature {index} is not a GeoJSON object")
        geometry_data = raw.get("geometry")
        if geometry_data is not None and not isinstance(geometry_data, dict):
            raise FeatureCollectionError(f"feature {index} has a geometry that is not a GeoJSON object")
        if not geometry_data or geometry_data.get("type") not in POLYGONAL_TYPES:
            skipped += 1
            continue
        try:
            geometry = shape(geometry_data)
        except (GEOSException, ValueError, TypeError, KeyError, IndexError) as exc:
            raise FeatureCollectionError(f"feature {index} has a malformed geometry: {exc}") from exc
        features.append(Feature(geometry, dict(raw.get("properties") or {})))

    if skipped:
        logger.info("Skipped %d non-polygon feature(s)", skipped)

    return features


def read_feature_collection(path: PathLike) -> List[Feature]:
    """Read a GeoJSON file and return its polygon features.

    Raises:
        FeatureCollectionError: If the file is empty, is not UTF-8 text, is not
            valid JSON or is not a FeatureCollection
        OSError: If the file cannot be read
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FeatureCollectionError(f"{path} is not UTF-8 encoded: {exc}") from exc
    if not text.strip():
        raise FeatureCollectionError(f"{path} is empty")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FeatureCollectionError(f"{path} is not valid JSON: {exc}") from exc

    features = features_from_geojson(data)
    logger.debug("Read %d polygon feature(s) from %s", len(features), path)
    return features


def features_to_geojson(features: Sequence[Feature]) -> Dict[str, Any]:
    """Build a GeoJSON FeatureCollection dict from features."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": mapping(feature.geometry),
                "properties": dict(feature.properties),
            }
            for feature in features
        ],
    }


def write_feature_collection(features: Sequence[Feature], path: PathLike, indent: int = 2) -> None:
    path = Path(path)
    path.write_text(json.dumps(features_to_geojson(features), indent=indent), encoding="utf-8")
    logger.debug("Wrote %d feature(s) to %s", len(features), path)


__all__ = [
    "features_from_geojson",
    "read_feature_collection",
    "features_to_geojson",
    "write_feature_collection",
]
