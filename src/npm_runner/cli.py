"""Command-line entrypoint: discover scripts, pick one, run it.

Usage:
  npm-runner [PATH] [--config FILE] [--workers N] [--json] [--verbose] [-- ARGS...]

Arguments after ``--`` are forwarded to the selected script.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path

from .config import Settings, load_settings
from .core import build_catalog
from .errors import ConfigError, NoManifestsError
from .runner import run_script
from .selector import select_script

logger = logging.getLogger(__name__)

USAGE_ERROR_EXIT_CODE = 2


def _split_forwarded(argv: list[str]) -> tuple[list[str], list[str]]:
    if "--" not in argv:
        return argv, []
    index = argv.index("--")
    return argv[:index], argv[index + 1 :]


def parse_args(argv: list[str] | None = None) -> tuple[argparse.Namespace, list[str]]:
    own, forwarded = _split_forwarded(list(sys.argv[1:] if argv is None else argv))
    parser = argparse.ArgumentParser(prog="npm-runner", description=__doc__.splitlines()[0])
    parser.add_argument("path", nargs="?", type=Path, default=Path("."), help="Directory to search")
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON settings file")
    parser.add_argument("--workers", type=int, default=None, help="Maximum discovery threads")
    parser.add_argument(
        "--json", action="store_true", help="Print the script catalog as JSON and exit"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(own), forwarded


def configure_logging(settings: Settings, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args, forwarded = parse_args(argv)

    root: Path = args.path
    if not root.is_dir():
        print(f"ERROR: Not a directory: {root}", file=sys.stderr)
        return USAGE_ERROR_EXIT_CODE

    try:
        settings = load_settings(args.config, search_root=root)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return USAGE_ERROR_EXIT_CODE

    if args.workers is not None:
        if args.workers < 1:
            print("ERROR: --workers must be a positive integer", file=sys.stderr)
            return USAGE_ERROR_EXIT_CODE
        settings = replace(settings, max_workers=args.workers)

    configure_logging(settings, verbose=args.verbose)

    started = time.perf_counter()
    try:
        catalog = build_catalog(root, settings)
    except NoManifestsError as exc:
        logger.debug("%s", exc)
        print("No package.json files found.")
        return 1
    elapsed = time.perf_counter() - started

    if args.json:
        print(json.dumps(catalog.to_dict(), indent=2))
        return 0

    if not catalog.entries:
        print(f"No scripts found in {catalog.manifest_count} projects.", file=sys.stderr)
        return 0

    index = select_script(catalog.labels)
    print(f"Found {catalog.manifest_count} projects in {elapsed:.3f}s", file=sys.stderr)
    if index is None:
        return 0

    try:
        return run_script(catalog[index], forwarded)
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
