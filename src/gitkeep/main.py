# File: src/gitkeep/main.py

import argparse
import logging
import os
import sys
import textwrap
from . import __version__
from .domain import Config, Mode
from .engine import run
from .errors import ConfigError
from .services.config_loader import ConfigLoader
from .services.reporter import print_summary, save_report
from .utils import setup_logging

logger = logging.getLogger("gitkeep")


def create_parser():
    examples = textwrap.dedent("""
    Examples:
      # Process the current directory
      gitkeep

      # Process a specific project
      gitkeep --root ./my-project

      # Simulate with verbose output
      gitkeep --dry-run --verbose

      # Remove every .gitkeep
      gitkeep --clean

      # Custom marker content
      gitkeep --content "Keep this directory"

      # Exclude directories by name
      gitkeep --exclude "temp,cache"

    Configuration:
      Put a .gitkeepcfg file (JSON or YAML) in the project root, e.g.
        {"content": "This directory is intentionally kept empty",
         "excludeDirs": ["temp", "cache"], "verbose": true}

      Add .gitkeepignore files for marker-specific ignore rules; they use
      the same syntax as .gitignore.
    """)

    parser = argparse.ArgumentParser(
        prog="gitkeep",
        description="GitKeep Manager - keeps .gitkeep files in sync with empty directories, honouring .gitignore rules",
        epilog=examples,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--root", help="Project root directory (default: current directory)")
    parser.add_argument("-d", "--dry-run", action="store_true", default=None, help="Simulate without changing files")
    parser.add_argument("-v", "--verbose", action="store_true", default=None, help="Enable debug logging")
    parser.add_argument("-r", "--report", metavar="FILE", help="Save a JSON report to FILE")
    parser.add_argument("-c", "--content", help="Content written into new marker files")

    modes = parser.add_mutually_exclusive_group()
    modes.add_argument("--clean", action="store_true", default=None, help="Remove every marker file")
    modes.add_argument("--check", action="store_true", default=None, help="Only report mismatches, change nothing")

    parser.add_argument("-e", "--exclude", metavar="DIRS", help="Comma-separated directory names to exclude")
    parser.add_argument("--gitkeep-name", metavar="NAME", help="Marker file name instead of .gitkeep")
    parser.add_argument("--no-gitkeepignore", action="store_false", dest="respect_gitkeepignore", default=None,
                        help="Ignore .gitkeepignore files")
    parser.add_argument("--version", action="version", version=f"gitkeep-manager v{__version__}")
    return parser


def overrides_from_args(args) -> dict:
    excludes = None
    if args.exclude is not None:
        excludes = [d.strip() for d in args.exclude.split(",") if d.strip()]

    return {
        "dryRun": args.dry_run,
        "verbose": args.verbose,
        "reportFile": args.report,
        "content": args.content,
        "clean": args.clean,
        "check": args.check,
        "excludeDirs": excludes,
        "gitkeepName": args.gitkeep_name,
        "respectGitkeepIgnore": args.respect_gitkeepignore,
    }


def describe_mode(config: Config) -> str:
    if config.dry_run:
        return "Simulation (dry-run)"
    if config.mode is Mode.CLEAN:
        return f"Clean (remove every {config.marker_name})"
    if config.mode is Mode.CHECK:
        return "Check (no changes)"
    return f"Normal (create/remove {config.marker_name})"


def main(argv=None):
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(bool(args.verbose))

    root = args.root or os.getcwd()
    try:
        config = ConfigLoader().load(root, overrides_from_args(args))
    except ConfigError as e:
        logger.critical(f"Configuration Error: {e}")
        sys.exit(1)

    if config.verbose:
        logger.setLevel(logging.DEBUG)

    if not config.root.is_dir():
        logger.critical(f"Root directory not found: {config.root}")
        sys.exit(1)

    print(f"\n\033[96m{'=' * 60}\033[0m")
    print(f"\033[96mGitKeep Manager v{__version__}\033[0m")
    print(f"\033[96m{'=' * 60}\033[0m\n")

    logger.info(f"Root directory: {config.root}")
    logger.info(f"Mode: {describe_mode(config)}")

    summary = run(config)

    print_summary(summary, config)

    if config.report_file:
        save_report(summary, config, config.report_file)

    sys.exit(1 if summary.failed else 0)


if __name__ == "__main__":
    main()
