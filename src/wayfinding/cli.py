"""Command Line Interface for the wayfinding package.

This module provides a CLI for building a graph from indoor map files and
querying it. Routes and statistics can be printed as text or as JSON.

The CLI supports the following commands:
    - route: Find one or more routes between two nodes
    - stats: Display statistics of the built graph
    - classify: Display the node type inferred from each node id

Exit codes: 0 on success, 1 when no route exists, 2 on bad input such as an
unknown node or a map file that cannot be loaded.

Example Usage:
    python -m wayfinding cli route geojson/wayfinding.geojson wp_001 cabinet_12
    python -m wayfinding cli route map.geojson di_box_1 col_3 --fixtures geojson/*.geojson --json
    python -m wayfinding cli stats map.geojson
    python -m wayfinding cli classify wp_001 col_a_cab_7 fossil_2
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .config import DEFAULT_MAX_DEPTH, DEFAULT_MAX_PATHS, LOG_FORMAT, LOG_LEVEL
from .core.exceptions import DataLoadingError, NodeNotFoundError
from .core.graph import WayfindingGraph
from .core.pathfinding import PathDetails, Pathfinder
from .core.routing import determine_node_type
from .data import WayfindingDataManager

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_PATH = 1
EXIT_BAD_INPUT = 2


async def load_graph(wayfinding_path: str, fixture_paths: List[str]) -> WayfindingGraph:
    """Load the map file and fixture files into a frozen graph.

    Args:
        wayfinding_path (str): Main map file.
        fixture_paths (List[str]): Fixture files, possibly empty.

    Returns:
        WayfindingGraph: The built graph.

    Raises:
        DataLoadingError: If the map cannot be loaded or built.
    """
    manager = WayfindingDataManager()
    return await manager.load_and_build_graph(wayfinding_path, fixture_paths)


def format_path(details: PathDetails, index: int) -> str:
    """Render one route as human readable text."""
    lines = [f"Route {index} ({details.length} nodes): {' -> '.join(details.path)}"]
    for node in details.nodes:
        position = ""
        if node.coordinates is not None:
            position = f" at ({node.coordinates[0]:.6f}, {node.coordinates[1]:.6f})"
        lines.append(f"  - {node.node_id} [{node.node_type.value}]{position}")
    lines.append(f"  Waypoints used: {details.summary.waypoints_used}")
    return "\n".join(lines)


def print_json(data: Dict[str, Any]) -> None:
    print(json.dumps(data, indent=2))


async def run_route(args: argparse.Namespace) -> int:
    graph = await load_graph(args.wayfinding, args.fixtures)
    pathfinder = Pathfinder(graph)

    paths = pathfinder.find_multiple_paths(
        args.source,
        args.target,
        max_paths=args.max_paths,
        max_depth=args.max_depth,
        allow_direct_fixture_connections=args.allow_unknown,
    )
    details = [pathfinder.get_path_details(path) for path in paths]

    if args.json:
        print_json(
            {
                "source": args.source,
                "target": args.target,
                "found": bool(paths),
                "paths": [item.to_dict() for item in details],
            }
        )
    elif not paths:
        print(f"No route found from {args.source} to {args.target}")
    else:
        print("\n\n".join(format_path(item, index) for index, item in enumerate(details, 1)))

    return EXIT_OK if paths else EXIT_NO_PATH


async def run_stats(args: argparse.Namespace) -> int:
    graph = await load_graph(args.wayfinding, args.fixtures)
    stats = graph.get_statistics()

    if args.json:
        print_json(stats.to_dict())
        return EXIT_OK

    print(f"Nodes: {stats.total_nodes}")
    for node_type, count in sorted(stats.node_types.items()):
        print(f"  {node_type}: {count}")
    print(f"Edges: {stats.total_edges}")
    print(f"Walking paths: {stats.walking_paths}")
    print(f"Fixture polygons: {stats.fixture_polygons}")
    return EXIT_OK


def run_classify(args: argparse.Namespace) -> int:
    for node_id in args.node_ids:
        print(f"{node_id}\t{determine_node_type(node_id).value}")
    return EXIT_OK


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return number


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value} is not a non-negative integer")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="wayfinding", description="Indoor wayfinding CLI")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    route = subparsers.add_parser("route", help="Find routes between two nodes")
    route.add_argument("wayfinding", help="Main wayfinding GeoJSON file")
    route.add_argument("source", help="Source node id")
    route.add_argument("target", help="Target node id")
    route.add_argument("--fixtures", nargs="*", default=[], help="Fixture GeoJSON files")
    route.add_argument(
        "--max-paths",
        type=positive_int,
        default=DEFAULT_MAX_PATHS,
        help="Maximum number of alternative routes to find",
    )
    route.add_argument(
        "--max-depth",
        type=non_negative_int,
        default=DEFAULT_MAX_DEPTH,
        help="Maximum number of search expansion steps",
    )
    route.add_argument(
        "--allow-unknown",
        action="store_true",
        help="Allow hops to and from nodes of unknown type",
    )
    route.add_argument("--json", action="store_true", help="Print JSON output")

    stats = subparsers.add_parser("stats", help="Display graph statistics")
    stats.add_argument("wayfinding", help="Main wayfinding GeoJSON file")
    stats.add_argument("--fixtures", nargs="*", default=[], help="Fixture GeoJSON files")
    stats.add_argument("--json", action="store_true", help="Print JSON output")

    classify = subparsers.add_parser("classify", help="Display inferred node types")
    classify.add_argument("node_ids", nargs="+", help="Node ids to classify")

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI application.

    Parses arguments, runs the requested command and returns its exit code.
    """
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_BAD_INPUT

    try:
        if args.command == "route":
            return await run_route(args)
        elif args.command == "stats":
            return await run_stats(args)
        elif args.command == "classify":
            return run_classify(args)
    except NodeNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except DataLoadingError as e:
        logger.debug(f"Load failure code={e.code}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    return EXIT_BAD_INPUT


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
