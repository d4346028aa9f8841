"""
Command-line entry point.

Reads a building-limits and a height-plateaus GeoJSON FeatureCollection,
splits the building limits and prints the fragments, or writes them as a
FeatureCollection.

Usage:
    python -m plateausplit BUILDING_LIMITS HEIGHT_PLATEAUS [-o OUTPUT]

Example:
    python -m plateausplit samples/building_limits.json samples/height_plateaus.json -o split.json
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence, TextIO

from . import __version__
from .core.errors import PlateauSplitError
from .core.types import DEFAULT_ELEVATION, Feature, MergeStrategy
from .io import read_feature_collection, write_feature_collection
from .metrics import measure_fragments
from .pipeline import SplitConfig, split_building_limits

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure console logging; DEBUG when ``verbose``, otherwise WARNING."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S',
    )


def print_fragments(fragments: Sequence[Feature], stream: Optional[TextIO] = None) -> None:
    """Print index, coordinates and elevation of each fragment."""
    stream = stream if stream is not None else sys.stdout
    for index, fragment in enumerate(fragments):
        print(index, file=stream)
        print(fragment.geometry.wkt, file=stream)
        print(fragment.elevation, file=stream)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='plateausplit',
        description='Split building limits according to height plateaus',
    )

    parser.add_argument(
        'building_limits',
        help='GeoJSON FeatureCollection with building-limit polygons'
    )

    parser.add_argument(
        'height_plateaus',
        help='GeoJSON FeatureCollection with height-plateau polygons carrying "elevation"'
    )

    parser.add_argument(
        '-o', '--output',
        help='Write fragments to this GeoJSON file instead of printing them'
    )

    parser.add_argument(
        '--default-elevation',
        type=float,
        default=DEFAULT_ELEVATION,
        help=f'Elevation for area not covered by any plateau (default: {DEFAULT_ELEVATION})'
    )

    parser.add_argument(
        '--merge-strategy',
        choices=[strategy.value for strategy in MergeStrategy],
        default=MergeStrategy.ANCHOR.value,
        help='How intersecting building limits are grouped before union (default: anchor)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    config = SplitConfig(
        default_elevation=args.default_elevation,
        merge_strategy=args.merge_strategy,
    )

    try:
        building_limits = read_feature_collection(args.building_limits)
        height_plateaus = read_feature_collection(args.height_plateaus)
        fragments = split_building_limits(building_limits, height_plateaus, config)
    except (PlateauSplitError, OSError) as e:
        logger.error("Splitting failed: %s", e)
        return 1

    if not args.output:
        print_fragments(fragments)
        return 0

    try:
        write_feature_collection(fragments, args.output)
    except OSError as e:
        logger.error("Writing %s failed: %s", args.output, e)
        return 1

    summary = measure_fragments(fragments, building_limits)
    print(f"Wrote {summary['count']} fragments ({summary['area']:.2f} total area) to {args.output}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
