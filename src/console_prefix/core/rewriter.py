"""
Console Call Rewriter.

Provides `ConsolePrefixRewriter`, the LibCST transformer that injects the
generated prefix as the first argument of qualifying `console.<method>(...)`
calls.

A call qualifies when its callee has exactly the shape ``console.<name>``:
an attribute access whose receiver is the bare name ``console``. Receivers such
as ``self.console`` or ``get_console()`` and subscript access such as
``console["log"]`` are left alone. Matching is purely syntactic, so a local
variable that shadows ``console`` is rewritten too.

LibCST trees are immutable. Rewritten calls are rebuilt with ``with_changes``
and every other subtree is shared with the input tree.
"""

import json
from typing import FrozenSet, Iterable, List, Tuple

import libcst as cst

TARGET_OBJECT = "console"

# Always exempt, regardless of configuration.
ALWAYS_EXEMPT: FrozenSet[str] = frozenset({"table"})


def make_string_literal(text: str) -> cst.SimpleString:
  """
  Builds a double-quoted Python string literal for arbitrary text.

  JSON string escapes are a subset of Python's, so the encoded form is a
  valid literal that evaluates back to `text`.

  Args:
      text: The literal value.

  Returns:
      cst.SimpleString: The literal node.
  """
  return cst.SimpleString(json.dumps(text, ensure_ascii=False))


def console_method_name(node: cst.Call) -> str:
  """
  Returns the method name if `node` is a direct ``console.<name>(...)`` call.

  Args:
      node: The call to inspect.

  Returns:
      str: The accessed method name, or an empty string if the shape does not match.
  """
  func = node.func
  if not isinstance(func, cst.Attribute):
    return ""
  if not isinstance(func.value, cst.Name) or func.value.value != TARGET_OBJECT:
    return ""
  return func.attr.value


class ConsolePrefixRewriter(cst.CSTTransformer):
  """
  Prepends a prefix literal to every non-exempt console call.

  Calls are processed in ``leave_Call``, after their arguments have been
  visited, so nested console calls are rewritten independently of the call
  that contains them.
  """

  def __init__(self, prefix: str, ignore: Iterable[str] = ()) -> None:
    """
    Initializes the rewriter.

    Args:
        prefix: Text to inject. An empty prefix disables injection.
        ignore: Method names to leave untouched in addition to ``table``.
    """
    super().__init__()
    self.prefix = prefix
    self.ignore: FrozenSet[str] = frozenset(ignore)
    self._rewritten: List[Tuple[cst.Call, cst.Call]] = []

  @property
  def rewritten(self) -> List[Tuple[cst.Call, cst.Call]]:
    """
    Pairs of (original, updated) call nodes rewritten so far.

    Returns:
        List[Tuple[cst.Call, cst.Call]]: One entry per injected prefix, in post-order.
    """
    return list(self._rewritten)

  def is_exempt(self, method: str) -> bool:
    """True if calls to `method` must be left untouched."""
    return method in ALWAYS_EXEMPT or method in self.ignore

  def leave_Call(self, original_node: cst.Call, updated_node: cst.Call) -> cst.BaseExpression:
    method = console_method_name(updated_node)
    if not method or self.is_exempt(method) or not self.prefix:
      return updated_node

    new_node = self._prepend_prefix(updated_node)
    self._rewritten.append((original_node, new_node))
    return new_node

  def _prepend_prefix(self, node: cst.Call) -> cst.Call:
    """
    Inserts the prefix literal at argument position 0.

    Args:
        node: The matched call.

    Returns:
        cst.Call: The call with the injected argument.
    """
    injected = cst.Arg(value=make_string_literal(self.prefix))
    if node.args:
      injected = injected.with_changes(comma=cst.Comma(whitespace_after=cst.SimpleWhitespace(" ")))
    return node.with_changes(args=[injected, *node.args])

  def rewrite(self, module: cst.Module) -> cst.Module:
    """
    Runs the rewriter over a whole module.

    Args:
        module: The parsed source tree. It is not modified.

    Returns:
        cst.Module: The rewritten tree.
    """
    return module.visit(self)
