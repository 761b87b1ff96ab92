"""
Detached Node Rendering.

Renders single LibCST nodes back to source text without serializing the whole
module. The engine uses this to record each call site before and after prefix
injection.
"""

from typing import Tuple

import libcst as cst

# Empty module providing default formatting for detached nodes.
_RENDER_CTX = cst.parse_module("")


def render_node(node: cst.CSTNode) -> str:
  return _RENDER_CTX.code_for_node(node)


def render_pair(original: cst.CSTNode, updated: cst.CSTNode) -> Tuple[str, str]:
  """
  Renders a call site as it was and as it was rewritten.

  Args:
      original: The node before prefix injection.
      updated: The node after prefix injection.

  Returns:
      Tuple[str, str]: (source_before, source_after)
  """
  return render_node(original), render_node(updated)
