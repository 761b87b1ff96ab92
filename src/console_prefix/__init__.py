"""
console-prefix Package.

A source-to-source rewrite that prepends a prefix (by default the file name)
to the arguments of ``console.<method>(...)`` calls.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import console_prefix as cp
    code = 'console.log("hi")'
    print(cp.transform_source(code, context={"filename": "app.py"}))
    # console.log("app.py", "hi")

Tree Transform
^^^^^^^^^^^^^^

.. code-block:: python

    import libcst as cst
    from console_prefix import transform

    tree = cst.parse_module('console.warn("careful")')
    tree = transform(tree, {"prefixPattern": "[filename]:"}, {"filename": "job.py"})
    print(tree.code)
    # console.warn("job.py:", "careful")
"""

import libcst as cst

from console_prefix.config import ConfigError, InvocationContext, Payload, PrefixConfig, resolve_config
from console_prefix.core.engine import PrefixEngine, transform
from console_prefix.core.conversion_result import ConversionResult

__version__ = "0.1.0"


def transform_source(code: str, options: Payload = None, context: Payload = None) -> str:
  """
  Rewrites console calls in a string of Python code.

  Args:
      code (str): The source code to transform.
      options: Plugin options as JSON text or a mapping.
          Keys: ``ignore``, ``prefixPattern``, ``filename``.
      context: Invocation context as JSON text or a mapping (``{"filename": ...}``), or None.

  Returns:
      str: The rewritten source code.

  Raises:
      ConfigError: If the options or context are invalid.
      ValueError: If the source code cannot be parsed.
  """
  config = resolve_config(options, context)
  try:
    tree = cst.parse_module(code)
  except cst.ParserSyntaxError as e:
    raise ValueError(f"Failed to parse source:\n{e}") from e

  return transform(tree, config).code


__all__ = [
  "ConfigError",
  "ConversionResult",
  "InvocationContext",
  "PrefixConfig",
  "PrefixEngine",
  "resolve_config",
  "transform",
  "transform_source",
  "__version__",
]
