"""
Convert Command Handler.

This module implements the logic for the `console-prefix convert` command.
It orchestrates:
1. Configuration loading (pyproject.toml + command line overrides).
2. Prefix injection via the Engine, one file at a time.
3. Output writing and trace logging.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from rich.markup import escape
from rich.table import Table

from console_prefix.config import ConfigError, PrefixConfig
from console_prefix.core.conversion_result import ConversionResult
from console_prefix.core.engine import PrefixEngine
from console_prefix.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)


def handle_convert(
  input_path: Path,
  output_path: Optional[Path],
  overrides: Dict[str, Any],
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      input_path: Path to the source file or directory to convert.
      output_path: Path where generated code should be saved.
      overrides: Plugin options from the command line, layered over pyproject.toml.
      json_trace_path: Optional path to dump execution trace JSON.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = PrefixConfig.load(
      overrides=overrides,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ConfigError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  engine = PrefixEngine(config)
  batch_results: Dict[str, ConversionResult] = {}

  if input_path.is_file():
    result = _convert_single_file(input_path, output_path, engine, json_trace_path)
    batch_results[input_path.name] = result

  elif input_path.is_dir():
    if not output_path:
      log_error("Directory conversion requires --out destination directory.")
      return 1

    py_files = sorted(input_path.rglob("*.py"))
    if not py_files:
      log_warning(f"No .py files found in {input_path}")
      return 0

    log_info(f"Processing {len(py_files)} files from {input_path}...")

    for src_file in py_files:
      rel_path = src_file.relative_to(input_path)
      dest_file = output_path / rel_path
      batch_trace = dest_file.with_suffix(".trace.json") if json_trace_path else None

      result = _convert_single_file(src_file, dest_file, engine, batch_trace)
      batch_results[str(rel_path)] = result

  _print_batch_summary(batch_results)
  return 0 if all(r.success for r in batch_results.values()) else 1


def _convert_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: PrefixEngine,
  json_trace_path: Optional[Path] = None,
) -> ConversionResult:
  """
  Helper to execute the transform on a single file.

  The file's path, as given on the command line, is passed to the engine as
  the invocation context filename.

  Args:
      input_path: Source file path.
      output_path: Destination file path. Code is printed to stdout if None.
      engine: Engine configured with the plugin options.
      json_trace_path: Path to save trace event logs.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()
  except OSError as e:
    log_error(f"Failed to read {input_path}: {escape(str(e))}")
    return ConversionResult(success=False, errors=[str(e)])

  result = engine.run(code, filename=input_path.as_posix())

  if json_trace_path and result.trace_events:
    try:
      json_trace_path.parent.mkdir(parents=True, exist_ok=True)
      with open(json_trace_path, "wt", encoding="utf-8") as f:
        json.dump(result.trace_events, f, indent=2)
      log_info(f"Trace saved to [path]{json_trace_path}[/path]")
    except OSError as e:
      log_error(f"Failed to write trace: {escape(str(e))}")

  if not result.success:
    log_error(f"Failed to convert {input_path}: {escape('; '.join(result.errors))}")
    return result

  if output_path:
    try:
      output_path.parent.mkdir(parents=True, exist_ok=True)
      with open(output_path, "wt", encoding="utf-8") as f:
        f.write(result.code)
    except OSError as e:
      log_error(f"Failed to write {output_path}: {escape(str(e))}")
      return ConversionResult(code=result.code, success=False, errors=[str(e)])
    log_success(f"Rewrote {result.rewritten_calls} call(s): [path]{input_path}[/path] -> [path]{output_path}[/path]")
  else:
    print(result.code, end="")

  return result


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Renders a summary table of conversion results to the console.

  Args:
      results: Dictionary mapping filenames to conversion results.
  """
  total = len(results)
  failures = sum(1 for r in results.values() if not r.success)
  rewritten = sum(r.rewritten_calls for r in results.values())

  if failures == 0:
    log_success(f"Batch Complete: {total} file(s), {rewritten} console call(s) prefixed.")
    return

  table = Table(title="Prefix Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Calls", justify="right")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    status = "✅ OK" if res.success else "❌ Failed"
    issues = "; ".join(res.errors)
    table.add_row(escape(filename), status, str(res.rewritten_calls), escape(issues))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {total - failures} Passed, {failures} Failed.")
