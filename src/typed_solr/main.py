"""
Command-line interface for the typed SOLR client.

Runs a single query (or an administrative request) against a configured SOLR
core and prints the decoded response as JSON.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import argparse

from . import __version__
from .builders import (
    CommonQueryBuilder,
    DisMaxQueryBuilder,
    EDisMaxQueryBuilder,
    StandardQueryBuilder,
)
from .config import Config, get_config
from .exceptions import SOLRClientError
from .facets import FacetBuilder
from .highlight import HighlightBuilder
from .params import ParamBuilder
from .solr_client import SOLRClient
from .sort import SortClause, SortDirection, SortOrderBuilder


def setup_logging(log_level: str) -> None:
    """
    Set up logging configuration.

    Args:
        log_level: The logging level to use.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )

    # Set specific loggers to appropriate levels
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)


def create_arg_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="typed-solr",
        description="typed-solr - query an Apache SOLR core from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s 'title:solr'                          # Standard query on SOLR_CORE
  %(prog)s --core books --fq 'lang:en' '*:*'     # Filtered query on another core
  %(prog)s --defType edismax --qf 'title^2 body' 'search engines'
  %(prog)s --sort published:desc --rows 5 '*:*'  # Sorted, five rows
  %(prog)s --list-cores                          # List cores and exit
  %(prog)s --validate-config                     # Validate configuration and exit

Environment Variables:
  SOLR_BASE_URL          - SOLR scheme and host (default: http://localhost)
  SOLR_PORT              - SOLR port (default: 8983)
  SOLR_CORE              - SOLR core to query
  SOLR_USERNAME          - SOLR username (optional)
  SOLR_PASSWORD          - SOLR password (optional)
  SOLR_TIMEOUT           - Request timeout in seconds (default: 30)
  SOLR_VERIFY_SSL        - Verify SSL certificates (default: true)
  SOLR_DEFAULT_ROWS      - Rows requested when --rows is not given (default: 10)
  LOG_LEVEL              - Logging level (default: INFO)
        """
    )

    parser.add_argument(
        "query",
        nargs="?",
        help="Query string; plain user text for dismax and edismax"
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        help="Path to .env file (default: .env in current directory)"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override log level from configuration"
    )

    parser.add_argument("--core", help="Override SOLR_CORE")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--list-cores",
        action="store_true",
        help="List the cores of the SOLR instance and exit"
    )
    mode.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate configuration and exit"
    )

    parser.add_argument(
        "--fq", action="append", default=[], help="Filter query (repeatable)"
    )
    parser.add_argument("--fl", help="Comma-separated list of fields to return")
    parser.add_argument(
        "--sort",
        action="append",
        default=[],
        metavar="FIELD:DIR",
        help="Sort clause such as score:desc (repeatable)"
    )
    parser.add_argument("--rows", type=int, help="Number of rows to return")
    parser.add_argument("--start", type=int, help="Offset of the first row")
    parser.add_argument(
        "--defType",
        dest="def_type",
        choices=["standard", "dismax", "edismax"],
        default="standard",
        help="Query parser to use (default: standard)"
    )
    parser.add_argument("--qf", help="Query fields for dismax and edismax")
    parser.add_argument(
        "--facet-field",
        action="append",
        default=[],
        help="Field to facet on (repeatable)"
    )
    parser.add_argument(
        "--highlight",
        action="append",
        default=[],
        metavar="FIELD",
        help="Field to highlight (repeatable)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def parse_sort(value: str) -> SortClause:
    """Parse ``field:dir``; a bare field name sorts ascending."""
    field, _, direction = value.rpartition(":")
    if not field:
        return SortClause(field=value)
    try:
        return SortClause(field=field, direction=SortDirection(direction.lower()))
    except ValueError:
        raise ValueError(f"Invalid sort direction in '{value}': use asc or desc") from None


def build_query(args: argparse.Namespace, config: Config) -> List[ParamBuilder]:
    """Turn parsed arguments into the builders for one select request."""
    query = args.query or "*:*"

    if args.def_type == "standard":
        query_builder: ParamBuilder = StandardQueryBuilder().q(query)
    else:
        parser_builder = (
            DisMaxQueryBuilder() if args.def_type == "dismax" else EDisMaxQueryBuilder()
        )
        parser_builder.q(query)
        if args.qf:
            parser_builder.qf(args.qf)
        query_builder = parser_builder

    common = CommonQueryBuilder().rows(
        args.rows if args.rows is not None else config.solr.default_rows
    )
    if args.start is not None:
        common.start(args.start)
    for fq in args.fq:
        common.fq(fq)
    if args.fl:
        common.fl(args.fl)

    builders: List[ParamBuilder] = [query_builder, common]

    if args.sort:
        sort = SortOrderBuilder()
        for clause in args.sort:
            sort.add(parse_sort(clause))
        builders.append(sort)

    if args.facet_field:
        facets = FacetBuilder()
        for field in args.facet_field:
            facets.field(field)
        builders.append(facets)

    if args.highlight:
        builders.append(HighlightBuilder().fields(*args.highlight))

    return builders


async def main_async(
    args: argparse.Namespace,
    env_file: Optional[Path] = None,
    log_level_override: Optional[str] = None,
) -> int:
    """
    Async main function.

    Args:
        args: Parsed command-line arguments.
        env_file: Optional path to .env file.
        log_level_override: Optional log level override.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    try:
        config = get_config(env_file)

        if log_level_override:
            config.log_level = log_level_override.upper()

        setup_logging(config.log_level)
        logger = logging.getLogger(__name__)

        core_name = args.core or config.solr.core

        if args.validate_config:
            logger.info("Configuration validation successful!")
            logger.info(f"SOLR URL: {config.solr.base_url}:{config.solr.port}")
            logger.info(f"SOLR Core: {core_name or '(not set)'}")
            return 0

        async with SOLRClient.from_config(config.solr) as client:
            if args.list_cores:
                core_list = await client.cores()
                for name in core_list.names():
                    print(name)
                return 0

            if not core_name:
                print("Error: no core given; use --core or SOLR_CORE", file=sys.stderr)
                return 2

            core = await client.core(core_name)
            result = await core.select(*build_query(args, config))
            logger.info(
                f"Found {result.num_found} documents in '{core_name}' "
                f"(QTime {result.header.qtime} ms)"
            )
            print(result.model_dump_json(by_alias=True, indent=2))
            return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 130
    except (SOLRClientError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main() -> None:
    """Main entry point for the command-line interface."""
    parser = create_arg_parser()
    args = parser.parse_args()

    exit_code = asyncio.run(main_async(
        args,
        env_file=args.env_file,
        log_level_override=args.log_level,
    ))

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
