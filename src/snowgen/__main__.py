"""Entry point for the snowgen command line."""

import argparse
import sys

from pydantic import ValidationError

from snowgen.config import LOG_LEVELS, load_settings
from snowgen.generator import ClockRegressionError
from snowgen.utils import build_generator, configure_logging


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="snowgen", description="Print Snowflake IDs.")
    parser.add_argument("-n", "--count", type=int, default=1, help="number of IDs to print")
    parser.add_argument("--datacenter-id", type=int, help="override the configured datacenter ID")
    parser.add_argument("--server-id", type=int, help="override the configured server ID")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="override the configured log level",
    )
    args = parser.parse_args(argv)
    if args.count < 1:
        parser.error("--count must be at least 1")
    return args


def main(argv: list[str] | None = None) -> int:
    """Print the requested number of IDs, one per line."""
    args = _parse_args(argv)
    try:
        settings = load_settings()
    except ValidationError as e:
        print(f"snowgen: invalid configuration\n{e}", file=sys.stderr)
        return 2

    if args.log_level:
        settings.logging.level = args.log_level
    configure_logging(settings.logging)

    node = settings.node
    if args.datacenter_id is not None:
        node.datacenter_id = args.datacenter_id
    if args.server_id is not None:
        node.server_id = args.server_id

    try:
        generator = build_generator(node)
    except ValueError as e:
        print(f"snowgen: {e}", file=sys.stderr)
        return 2

    try:
        for _ in range(args.count):
            print(generator.next_id())
    except ClockRegressionError as e:
        print(f"snowgen: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
