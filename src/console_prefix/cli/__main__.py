"""
Main Entry Point for the console-prefix CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `console_prefix.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.markup import escape

from console_prefix import __version__
from console_prefix.cli import commands
from console_prefix.config import ConfigError, parse_cli_overrides
from console_prefix.utils.console import log_error


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="console-prefix: prepend a prefix to console.* call arguments")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Rewrite console calls in a Python file or directory")
  cmd_conv.add_argument("path", type=Path, help="Input source file or directory")
  cmd_conv.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_conv.add_argument(
    "--options",
    default=None,
    help='Plugin options as a JSON object (e.g. \'{"ignore": ["debug"], "prefixPattern": "[filename]:"}\')',
  )
  cmd_conv.add_argument("--ignore", nargs="+", default=None, help="Console methods to leave untouched")
  cmd_conv.add_argument("--prefix-pattern", default=None, help="Prefix template; '[filename]' expands to the file name")
  cmd_conv.add_argument("--filename", default=None, help="File name override for the '[filename]' token")
  cmd_conv.add_argument(
    "--json-trace", type=Path, default=None, help="Dump full execution trace (phases, mutations) to a JSON file."
  )

  args = parser.parse_args(argv)

  if args.command == "convert":
    try:
      overrides = parse_cli_overrides(args.options, args.ignore, args.prefix_pattern, args.filename)
    except ConfigError as e:
      log_error(f"Invalid configuration: {escape(str(e))}")
      return 1
    return commands.handle_convert(args.path, args.out, overrides, args.json_trace)

  return 0


if __name__ == "__main__":
  sys.exit(main())
