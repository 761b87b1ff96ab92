"""
Prefix Generation.

Turns the effective configuration into the literal text injected in front of
console arguments. Substitution is plain substring replacement of the
`[filename]` token; no other placeholders exist.
"""

from console_prefix.config import PrefixConfig

FILENAME_PLACEHOLDER = "[filename]"


def generate_prefix(config: PrefixConfig) -> str:
  """
  Expands the configured prefix pattern.

  Every occurrence of `[filename]` is replaced with the configured filename,
  or removed when no filename is known.

  Args:
      config: The effective configuration.

  Returns:
      str: The prefix. An empty string means nothing should be injected.
  """
  prefix = config.prefix_pattern
  if FILENAME_PLACEHOLDER in prefix:
    prefix = prefix.replace(FILENAME_PLACEHOLDER, config.filename or "")
  return prefix
