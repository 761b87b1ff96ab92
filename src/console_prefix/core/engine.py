"""
Transform Entry Points.

Two layers are provided:

1.  `transform`: the core contract. Takes an already-parsed LibCST module plus
    the raw plugin options and invocation context, and returns the rewritten
    module. Configuration errors are raised before the tree is touched.

2.  `PrefixEngine`: the host-side driver for one compilation unit. It parses
    source text, supplies the file name as invocation context, runs the
    rewrite and packages the outcome (code, errors, trace) into a
    `ConversionResult`.

Pipeline per unit:

- **Configuration**: plugin options merged with the invocation context.
- **Prefix**: the `[filename]` token expanded into the final prefix text.
- **Parsing**: source text to `cst.Module` (engine only).
- **Prefix Injection**: `ConsolePrefixRewriter` over the whole tree.
"""

from typing import Optional, Union

import libcst as cst

from console_prefix.config import InvocationContext, Payload, PrefixConfig, resolve_config
from console_prefix.core.conversion_result import ConversionResult
from console_prefix.core.prefix import generate_prefix
from console_prefix.core.rewriter import ConsolePrefixRewriter
from console_prefix.core.tracer import TraceLogger
from console_prefix.utils.node_render import render_pair


def transform(
  module: cst.Module,
  plugin_options: Union[Payload, PrefixConfig] = None,
  context: Union[Payload, InvocationContext] = None,
) -> cst.Module:
  """
  Rewrites every qualifying console call in `module`.

  Args:
      module: The parsed program tree. It is not modified.
      plugin_options: Plugin options as JSON text, a mapping or a `PrefixConfig`. None means `{}`.
      context: Invocation context as JSON text or a mapping, or None if absent.

  Returns:
      cst.Module: The rewritten tree.

  Raises:
      ConfigError: If either configuration payload fails to parse.
  """
  config = resolve_config(plugin_options, context)
  rewriter = ConsolePrefixRewriter(generate_prefix(config), config.ignore)
  return rewriter.rewrite(module)


class PrefixEngine:
  """
  Drives the transform for a single unit of source code.

  The engine holds the user-level options. The file-specific context is
  supplied per `run` call, so one engine can process a whole batch.
  """

  def __init__(self, config: Optional[PrefixConfig] = None):
    """
    Initializes the Engine.

    Args:
        config (PrefixConfig, optional): Plugin options. Defaults apply when omitted.
    """
    self.config = config or PrefixConfig()

  def parse(self, code: str) -> cst.Module:
    """
    Parses source string into a LibCST Module.

    Args:
        code (str): Python source code.

    Returns:
        cst.Module: The parsed tree.

    Raises:
        libcst.ParserSyntaxError: If the input code is invalid Python.
    """
    return cst.parse_module(code)

  def to_source(self, tree: cst.Module) -> str:
    return tree.code

  def run(self, code: str, filename: Optional[str] = None) -> ConversionResult:
    """
    Executes the full pipeline on a source string.

    Args:
        code (str): The input source string.
        filename (str, optional): Name of the file being processed, used as invocation context.

    Returns:
        ConversionResult: Object containing transformed code and error logs.
    """
    tracer = TraceLogger()
    tracer.start_phase("Prefix Pipeline", filename or "<string>")

    tracer.start_phase("Configuration", "Plugin options + invocation context")
    context = InvocationContext(filename=filename) if filename is not None else None
    effective = self.config.with_context(context)
    prefix = generate_prefix(effective)
    if not prefix:
      tracer.log_warning("Prefix resolved to an empty string; console calls are left unchanged.")
    tracer.end_phase()

    tracer.start_phase("Parsing", "Source -> CST")
    try:
      tree = self.parse(code)
    except cst.ParserSyntaxError as e:
      tracer.end_phase()
      tracer.end_phase()
      return ConversionResult(
        code=code,
        errors=[f"Syntax Error: {e.message} (line {e.raw_line}, column {e.raw_column})"],
        success=False,
        trace_events=tracer.export(),
      )
    tracer.end_phase()

    tracer.start_phase("Prefix Injection", f"prefix={prefix!r}")
    rewriter = ConsolePrefixRewriter(prefix, effective.ignore)
    tree = rewriter.rewrite(tree)
    for original, updated in rewriter.rewritten:
      before, after = render_pair(original, updated)
      tracer.log_mutation("Call", before, after)
    tracer.end_phase()

    tracer.end_phase()
    return ConversionResult(
      code=self.to_source(tree),
      rewritten_calls=len(rewriter.rewritten),
      trace_events=tracer.export(),
    )
