"""Unified CLI for release-note fragments.

Usage:
    relnote check <file>...
    relnote merge <directory> [--json]
    relnote discover <directory>
    relnote [--config <path>] ...
"""

import argparse
import sys

import yaml

from relnote_engine.cli.check import cmd_check
from relnote_engine.cli.merge import cmd_discover, cmd_merge
from relnote_engine.config import load_config
from relnote_engine.errors import RelnoteError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="relnote",
        description="Check and merge release-note fragments",
    )
    parser.add_argument(
        "--config", dest="config_path", default=None,
        help="Path to relnote.yaml (default: $RELNOTE_CONFIG or ./relnote.yaml)",
    )
    sub = parser.add_subparsers(dest="command")

    chk = sub.add_parser("check", help="Check fragments are well-formed")
    chk.add_argument("files", nargs="+", help="Fragment files to check")

    mrg = sub.add_parser("merge", help="Merge a directory of fragments")
    mrg.add_argument("directory", help="Root of the fragment tree")
    mrg.add_argument(
        "--json", action="store_true",
        help="Output the merged document structure as JSON",
    )

    disc = sub.add_parser("discover", help="List fragments in merge order")
    disc.add_argument("directory", help="Root of the fragment tree")

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        "check": cmd_check,
        "merge": cmd_merge,
        "discover": cmd_discover,
    }

    try:
        args.config = load_config(args.config_path)
        return dispatch[args.command](args)
    except (RelnoteError, OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
