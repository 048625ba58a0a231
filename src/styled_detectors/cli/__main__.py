"""
Main Entry Point for styled-detectors CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `styled_detectors.cli.handlers`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from styled_detectors import __version__
from styled_detectors.cli import handlers
from styled_detectors.utils.console import set_verbose


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="styled-detectors: styled-components binding and tag analysis")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Log binding resolutions and memo hits")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: SCAN ---
  cmd_scan = subparsers.add_parser("scan", help="Report bindings and tags of JavaScript sources or ESTree JSON files")
  cmd_scan.add_argument("path", type=Path, help="Input .js/.jsx/.mjs/.cjs or .json file, or a directory")
  cmd_scan.add_argument(
    "--import-path",
    dest="import_paths",
    action="append",
    default=None,
    help="Extra module specifier treated as styled-components (repeatable)",
  )
  cmd_scan.add_argument(
    "--styled-required",
    default=None,
    help="Local name bound by require('styled-components')",
  )
  cmd_scan.add_argument("--json", dest="json_mode", action="store_true", help="Output JSON to stdout")

  # --- Command: PATHS ---
  cmd_paths = subparsers.add_parser("paths", help="List recognized import paths")
  cmd_paths.add_argument(
    "--import-path",
    dest="import_paths",
    action="append",
    default=None,
    help="Extra module specifier treated as styled-components (repeatable)",
  )

  args = parser.parse_args(argv)
  set_verbose(args.verbose)

  if args.command == "scan":
    return handlers.handle_scan(args.path, args.import_paths, args.styled_required, args.json_mode)

  elif args.command == "paths":
    return handlers.handle_paths(args.import_paths)

  return 0


if __name__ == "__main__":
  sys.exit(main())
