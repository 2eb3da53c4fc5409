"""Fragment check CLI commands."""

import argparse
from pathlib import Path


def cmd_check(args: argparse.Namespace) -> int:
    from relnote_engine.fragments.validator import check_files

    result = check_files(args.files, args.config.parser_options())
    failed = set(result.failed)
    for p in args.files:
        path = Path(p)
        status = "FAIL" if str(path) in failed else "PASS"
        print(f"  {status} {path}")
    print()
    print(result.summary())
    return 0 if result.passed else 1
