"""
Unified CLI entry point for upsert-builder.

Usage:
    python -m upsert_builder.cli <command> [options]

Available commands:
    upsert       - Render an upsert statement for JSON records
    settings     - Show effective configuration values

Examples:
    echo '{"id": "1001", "name": "Tom"}' | \\
        python -m upsert_builder.cli upsert --table person --column id,primary --column name
"""

import argparse
import json
import sys
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point with subcommand routing.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = argparse.ArgumentParser(
        prog="upsert_builder.cli",
        description="upsert-builder CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
        help="Command to execute",
    )

    subparsers.add_parser(
        "upsert",
        help="Render an upsert statement for JSON records",
        add_help=False,  # Let the delegated module handle help
    )
    subparsers.add_parser("settings", help="Show effective configuration values")

    args, remaining_args = parser.parse_known_args(argv)

    if args.command == "upsert":
        from upsert_builder.cli.upsert import main as upsert_main

        return upsert_main(remaining_args)

    elif args.command == "settings":
        from upsert_builder.config import get_settings

        print(json.dumps(get_settings().model_dump(), indent=2))
        return 0

    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
