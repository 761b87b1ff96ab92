"""
CLI Command Handlers Facade.

Re-exports handlers from `console_prefix.cli.handlers` so the dispatcher and
tests can patch a single module.
"""

from console_prefix.cli.handlers.convert import (
  handle_convert,
  _convert_single_file,
  _print_batch_summary,
)

__all__ = [
  "_convert_single_file",
  "_print_batch_summary",
  "handle_convert",
]
