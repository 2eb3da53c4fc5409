"""Merge and discover CLI commands."""

import argparse
import json

from relnote_engine.document.model import Heading


def cmd_merge(args: argparse.Namespace) -> int:
    from relnote_engine.fragments.merger import merge
    from relnote_engine.fragments.text import block_text

    doc = merge(args.directory, args.config)

    if args.json:
        print(json.dumps(doc.to_dict(), indent=2))
        return 0

    print(f"\n  Merged {args.directory}")
    print(f"  {'─' * 60}")
    for b in doc.blocks:
        if isinstance(b, Heading):
            indent = "  " * (b.level - 1)
            lines = f"{b.position.start_line}-{b.position.end_line}"
            print(f"  {lines:>9}  {indent}{block_text(b)}")
    print(f"\n  {len(doc.blocks)} block(s), {len(doc.links)} link reference(s)\n")
    return 0


def cmd_discover(args: argparse.Namespace) -> int:
    from relnote_engine.fragments.discover import sorted_fragment_filenames

    filenames = sorted_fragment_filenames(args.directory, args.config.suffix)
    print(f"Found {len(filenames)} fragment files:\n")
    for name in filenames:
        print(f"  {name}")
    return 0
