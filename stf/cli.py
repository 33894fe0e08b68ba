#!/usr/bin/env python3
"""
Test Harness Command Line

Runs every registered test suite once and exits with the overall result.

Usage:
    python3 -m stf                              # report on stderr
    python3 -m stf results.txt                  # report to a file
    python3 -m stf -m myproject.tests.suites    # import suites first
    python3 -m stf --list -m myproject.tests.suites

    # From a test program
    from stf import run_all_tests
    sys.exit(run_all_tests())

Exit status:
    0  every suite passed
    1  at least one suite failed
    2  harness misuse or invalid configuration
"""

import argparse
import importlib
import logging
import os
import sys
from typing import List, Optional

from .errors import HarnessError
from .registry import TestRegistry, get_registry
from .report import log_target, use_color
from .settings import load_settings

logger = logging.getLogger(__name__)

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stf",
        description="Run all registered test suites",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("log_file", nargs="?", help="Write the report to this file")
    parser.add_argument(
        "-m",
        "--module",
        action="append",
        default=[],
        dest="modules",
        help="Import a module that registers suites (repeatable)",
    )
    parser.add_argument("-c", "--config", help="YAML settings file")
    parser.add_argument("--color", choices=["auto", "always", "never"], help="Report colors")
    parser.add_argument("--list", action="store_true", help="List registered suites and exit")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Harness logging (-v info, -vv debug)"
    )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def import_suites(modules: List[str]) -> None:
    """
    Import modules whose import registers suites.

    The working directory goes on sys.path first, as it does under
    `python -m stf`. Import failures other than HarnessError are re-raised as
    HarnessError.
    """
    cwd = os.getcwd()
    if modules and cwd not in sys.path:
        sys.path.insert(0, cwd)
        logger.debug(f"Added working directory to sys.path: {cwd}")

    for module_name in modules:
        try:
            importlib.import_module(module_name)
        except HarnessError:
            raise
        except Exception as e:
            raise HarnessError(f"Cannot import suite module '{module_name}': {e}") from e
        logger.debug(f"Imported suite module: {module_name}")


def main(argv: Optional[List[str]] = None, registry: TestRegistry = None) -> int:
    """
    Run all registered suites.

    Args:
        argv: Arguments without the program name, sys.argv[1:] by default
        registry: Registry to run, the global one by default

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)

    verbosity = {1: "INFO", 2: "DEBUG"}.get(min(args.verbose, 2))
    try:
        settings = load_settings(
            config_file=args.config,
            overrides={
                "log_file": args.log_file,
                "color": args.color,
                "log_level": verbosity,
            },
        )
    except HarnessError as e:
        sys.stderr.write(f"stf: {e}\n")
        return EXIT_USAGE

    configure_logging(settings.log_level)
    if registry is None:
        registry = get_registry()

    try:
        import_suites(args.modules)

        if args.list:
            for name in registry.names():
                print(name)
            return EXIT_PASSED

        with log_target(settings.log_file) as out:
            passed = registry.run_all(
                out,
                color=use_color(out, settings.color),
                result_column=settings.result_column,
            )
    except HarnessError as e:
        logger.error(f"Harness error: {e}")
        sys.stderr.write(f"stf: {e}\n")
        return EXIT_USAGE

    return EXIT_PASSED if passed else EXIT_FAILED


def run_all_tests(argv: Optional[List[str]] = None, registry: TestRegistry = None) -> int:
    """Run all registered suites using the process's command line."""
    if argv is None:
        argv = sys.argv[1:]
    return main(argv, registry)


if __name__ == "__main__":
    sys.exit(main())
