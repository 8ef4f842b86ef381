#!/usr/bin/env python3
"""
CLI for running market analyses and generating report PDFs.

Usage:
    python -m reporting.cli analyze --lat <lat> --lng <lng> [options]
    python -m reporting.cli analyze --address "<address>" [options]
    python -m reporting.cli geocode "<address>"

Examples:
    # Analyze a known location without the route lookup
    python -m reporting.cli analyze --lat 38.9 --lng -77.1 --asset-type Industrial \\
        --square-feet 50000 --no-routes

    # Geocode an address, analyze it and write the PDF
    python -m reporting.cli analyze --address "1600 Wilson Blvd, Arlington, VA" --pdf
"""

import argparse
import asyncio
import json
import logging
import sys

from core import AssetType, Coordinate, FilterCriteria, MarketAnalyzer, Subject
from core.coordinator import AnalysisCoordinator, AnalysisRequest
from sources import (
    DatasetError,
    GeocodingError,
    HeatmapDataset,
    OverpassRouteSource,
    RouteLookupError,
    create_default_geocoder,
)
from utils.config import Config

from .pdf_generator import generate_report


def _filters_from_args(args) -> FilterCriteria:
    return FilterCriteria(
        min_clear_height=args.min_clear_height,
        year_built_min=args.year_built_min,
        year_built_max=args.year_built_max,
    )


def _analyze_coordinates(args, config: Config, asset_type: AssetType, dataset: HeatmapDataset):
    subject = Subject(
        coordinate=Coordinate(args.lat, args.lng),
        display_name=args.label or f"{args.lat:.4f}, {args.lng:.4f}",
        asset_type=asset_type,
    )

    raw_segments = None
    if not args.no_routes:
        source = OverpassRouteSource(
            config.overpass_url, timeout=config.request_timeout, user_agent=config.user_agent
        )
        try:
            raw_segments = source.fetch_segments(subject.coordinate, config.route_radius_miles)
        except RouteLookupError as e:
            print(f"Warning: {e}", file=sys.stderr)
        finally:
            source.close()

    analyzer = MarketAnalyzer(route_radius_miles=config.route_radius_miles)
    return analyzer.analyze(
        subject=subject,
        subject_sf=args.square_feet,
        filters=_filters_from_args(args),
        raw_points=dataset.load(),
        raw_segments=raw_segments,
    )


def _analyze_address(args, config: Config, asset_type: AssetType, dataset: HeatmapDataset):
    route_source = None
    if not args.no_routes:
        route_source = OverpassRouteSource(
            config.overpass_url, timeout=config.request_timeout, user_agent=config.user_agent
        )
    geocoder = create_default_geocoder(
        config.nominatim_url, config.photon_url, config.request_timeout, config.user_agent
    )
    coordinator = AnalysisCoordinator(
        geocoder=geocoder,
        dataset=dataset,
        route_source=route_source,
        route_radius_miles=config.route_radius_miles,
    )
    request = AnalysisRequest(
        address=args.address,
        asset_type=asset_type,
        subject_sf=args.square_feet,
        filters=_filters_from_args(args),
    )
    try:
        return asyncio.run(coordinator.analyze(request))
    finally:
        geocoder.close()
        if route_source is not None:
            route_source.close()


def cmd_analyze(args):
    """Run an analysis and print the report as JSON."""
    config = Config.load()

    asset_type = AssetType.from_string(args.asset_type)
    if asset_type is None:
        print(f"Error: Unknown asset type: {args.asset_type}", file=sys.stderr)
        return 1

    if args.year_built_min > args.year_built_max:
        print("Error: --year-built-min must not exceed --year-built-max", file=sys.stderr)
        return 1

    dataset = HeatmapDataset(args.dataset or config.heatmap_path)

    try:
        if args.address:
            report = _analyze_address(args, config, asset_type, dataset)
        else:
            report = _analyze_coordinates(args, config, asset_type, dataset)
    except GeocodingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except DatasetError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(report.to_dict(), indent=2))

    if args.pdf:
        result = generate_report(report, output_dir=config.reports_dir)
        print(f"Report generated: {result.path}", file=sys.stderr)
    return 0


def cmd_geocode(args):
    """Resolve an address and print its coordinates."""
    config = Config.load()
    geocoder = create_default_geocoder(
        config.nominatim_url, config.photon_url, config.request_timeout, config.user_agent
    )
    try:
        result = geocoder.geocode(args.address)
    except GeocodingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        geocoder.close()

    print(json.dumps({
        "lat": result.coordinate.latitude,
        "lng": result.coordinate.longitude,
        "display_name": result.display_name,
    }, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Asset Intelligence Workbench - synthetic market report generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m reporting.cli analyze --lat 38.9 --lng -77.1 --no-routes
    python -m reporting.cli geocode "1600 Wilson Blvd, Arlington, VA"

Output:
    PDF reports are saved to: $REPORTS_DIR/AIW-<slug>.pdf
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser("analyze", help="Run a market analysis")
    location = analyze_parser.add_mutually_exclusive_group(required=True)
    location.add_argument("--address", help="Street address to geocode")
    location.add_argument("--lat", type=float, help="Subject latitude (requires --lng)")
    analyze_parser.add_argument("--lng", type=float, help="Subject longitude")
    analyze_parser.add_argument("--label", default="", help="Display label for --lat/--lng")
    analyze_parser.add_argument(
        "--asset-type",
        default=AssetType.INDUSTRIAL.value,
        help="Industrial, Office, Retail or Multifamily (default: Industrial)",
    )
    analyze_parser.add_argument("--square-feet", type=float, default=50000)
    analyze_parser.add_argument("--min-clear-height", type=float, default=20)
    analyze_parser.add_argument("--year-built-min", type=int, default=1990)
    analyze_parser.add_argument("--year-built-max", type=int, default=2024)
    analyze_parser.add_argument("--dataset", help="Path to the candidate dataset JSON")
    analyze_parser.add_argument("--no-routes", action="store_true", help="Skip the route lookup")
    analyze_parser.add_argument("--pdf", action="store_true", help="Also write the PDF report")
    analyze_parser.set_defaults(func=cmd_analyze)

    geocode_parser = subparsers.add_parser("geocode", help="Resolve an address")
    geocode_parser.add_argument("address", help="Street address")
    geocode_parser.set_defaults(func=cmd_geocode)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "analyze" and args.lat is not None and args.lng is None:
        parser.error("--lat requires --lng")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
