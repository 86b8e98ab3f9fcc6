"""
cli.py - Command line entry point for checking meet data.

Checks every meet under the data root (or just under PATH), prints reports and
a summary, and exits with status 1 if any error was found. With --age, prints
the age interpolation narration for one lifter; with --interpolate, runs age
interpolation over all lifters after a clean check.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from meet_checker.checker import CheckerPipeline, CheckerSettings, ConfigurationFailure
from meet_checker.interpolation import interpolate_age, interpolate_age_debug_for
from meet_checker.report import format_summary

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Checks meet data and interpolates lifter ages")
    parser.add_argument("--data-root", default="meet-data", help="Root of the meet data tree")
    parser.add_argument("--settings", default=None, help="Checker settings YAML file")
    parser.add_argument("--workers", type=int, default=None, help="Worker threads for meet checks")
    parser.add_argument("--age", metavar="USERNAME", default=None,
                        help="Print age interpolation debug info for the given username")
    parser.add_argument("--interpolate", action="store_true", help="Interpolate ages after checking")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("path", nargs="?", default=None,
                        help="Optionally restrict checking to this directory")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = CheckerSettings.from_yaml(Path(args.settings)) if args.settings else CheckerSettings.default()
    if args.workers is not None:
        settings.max_workers = args.workers

    meet_data_root = Path(args.data_root)
    if not meet_data_root.is_dir():
        print(f"{meet_data_root}: data root does not exist")
        return 1

    search_root = None
    if args.path:
        search_root = Path(args.path).resolve()
        if not search_root.exists():
            print(f"{search_root}: path does not exist")
            return 1

    pipeline = CheckerPipeline(settings=settings)
    try:
        result = pipeline.run(meet_data_root, search_root)
    except ConfigurationFailure as e:
        print(format_summary(e.error_count, e.warning_count))
        return 1

    validation = result.validation
    print(format_summary(validation.error_count + validation.internal_error_count, validation.warning_count))
    if result.failed:
        return 1

    if args.age or args.interpolate:
        lifter_map = result.store.create_lifter_map()
        if args.age:
            interpolate_age_debug_for(result.store, lifter_map, args.age)
            return 0
        count = interpolate_age(result.store, lifter_map)
        print(f"Interpolated ages for {count} of {len(lifter_map)} lifters")
    return 0


if __name__ == "__main__":
    sys.exit(main())
