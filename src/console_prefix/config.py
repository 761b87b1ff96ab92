"""
Plugin Configuration and Invocation Context.

Resolves the effective configuration of a single transform invocation from two
records supplied by the host:

1.  **Plugin options** (`PrefixConfig`): user-authored settings with a strict
    schema. Unknown keys are rejected so that typos fail loudly instead of
    silently producing an unconfigured transform.
2.  **Invocation context** (`InvocationContext`): per-file metadata from the
    host. Only `filename` is consulted, and only when the options leave it unset.

Both records are accepted as JSON strings or as already-decoded mappings.
Any failure surfaces as a `ConfigError`.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

DEFAULT_PREFIX_PATTERN = "[filename]"
TOML_SECTION = "console_prefix"

Payload = Union[str, bytes, Mapping[str, Any], None]


class ConfigError(ValueError):
  """
  Raised when plugin options or invocation context cannot be parsed.

  The transform must not run with a partially defaulted configuration, so
  this error always aborts the whole invocation.
  """


class PrefixConfig(BaseModel):
  """
  User-facing plugin options.

  Keys are accepted only under their serialized camelCase names
  (`prefixPattern`); Python code constructs the model by alias as well.
  """

  model_config = ConfigDict(extra="forbid")

  ignore: List[str] = Field(default_factory=list, description="Console method names to leave untouched.")
  prefix_pattern: str = Field(
    DEFAULT_PREFIX_PATTERN,
    alias="prefixPattern",
    description="Prefix template. Every '[filename]' token is replaced with the file name.",
  )
  filename: Optional[str] = Field(None, description="File name override. Falls back to the invocation context.")

  def with_context(self, context: Optional["InvocationContext"]) -> "PrefixConfig":
    """
    Returns the effective configuration for one compilation unit.

    Args:
        context: Host-supplied metadata, or None when the host sent nothing.

    Returns:
        PrefixConfig: A copy whose `filename` is filled from the context if unset.
    """
    if self.filename is not None or context is None:
      return self.model_copy()
    return self.model_copy(update={"filename": context.filename})

  @classmethod
  def load(
    cls,
    overrides: Optional[Mapping[str, Any]] = None,
    search_path: Optional[Path] = None,
  ) -> "PrefixConfig":
    """
    Loads options from pyproject.toml and layers explicit overrides on top.

    The nearest `pyproject.toml` (searching upwards from `search_path`) is
    read for a `[tool.console_prefix]` table. Keys present in `overrides`
    replace the TOML values one by one.

    Args:
        overrides: Options from the command line, keyed by their serialized names.
        search_path: Directory to start searching for TOML config.

    Returns:
        PrefixConfig: The validated options.

    Raises:
        ConfigError: If the merged options violate the schema.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    merged: Dict[str, Any] = {**toml_config, **(overrides or {})}
    return _validate(cls, merged, "failed to parse plugin config")


class InvocationContext(BaseModel):
  """
  Per-file metadata supplied by the host.

  Unlike the plugin options, extra keys are tolerated: hosts may send more
  metadata than this transform reads.
  """

  model_config = ConfigDict(extra="ignore")

  filename: Optional[str] = Field(None, description="Name of the file being transformed.")


def parse_plugin_options(payload: Payload) -> PrefixConfig:
  """
  Deserializes the plugin options record.

  Args:
      payload: JSON text, a decoded mapping, or None (meaning `{}`).

  Returns:
      PrefixConfig: Options with defaults applied.

  Raises:
      ConfigError: On malformed JSON, wrong field types or unknown keys.
  """
  return _validate(PrefixConfig, _decode(payload, "failed to parse plugin config"), "failed to parse plugin config")


def parse_context(payload: Payload) -> Optional[InvocationContext]:
  """
  Deserializes the invocation context record.

  Args:
      payload: JSON text, a decoded mapping, or None when the host supplied no context.

  Returns:
      Optional[InvocationContext]: The context, or None if absent.

  Raises:
      ConfigError: On malformed JSON or wrong field types.
  """
  if payload is None:
    return None
  return _validate(InvocationContext, _decode(payload, "failed to parse plugin context"), "failed to parse plugin context")


def resolve_config(
  plugin_options: Union[Payload, PrefixConfig] = None,
  context: Union[Payload, InvocationContext] = None,
) -> PrefixConfig:
  """
  Builds the effective configuration from both host records.

  Args:
      plugin_options: Plugin options payload, or an already validated `PrefixConfig`.
      context: Invocation context payload, an `InvocationContext`, or None.

  Returns:
      PrefixConfig: Options whose `filename` falls back to the context filename.

  Raises:
      ConfigError: If either payload fails to parse.
  """
  config = plugin_options if isinstance(plugin_options, PrefixConfig) else parse_plugin_options(plugin_options)
  ctx = context if isinstance(context, InvocationContext) else parse_context(context)
  return config.with_context(ctx)


def _decode(payload: Payload, label: str) -> Mapping[str, Any]:
  if payload is None:
    return {}
  if isinstance(payload, (str, bytes)):
    try:
      payload = json.loads(payload)
    except ValueError as e:
      raise ConfigError(f"{label}: {e}") from e
  if not isinstance(payload, Mapping):
    raise ConfigError(f"{label}: expected a JSON object, got {type(payload).__name__}")
  return payload


def _validate(schema, data: Mapping[str, Any], label: str):
  try:
    return schema.model_validate(dict(data))
  except ValidationError as e:
    raise ConfigError(f"{label}: {e}") from e


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.

  Raises:
      ConfigError: If the nearest pyproject.toml is not valid TOML or the section is not a table.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"failed to parse {toml_path}: {e}") from e

      tool_section = data.get("tool", {})
      section = tool_section.get(TOML_SECTION, {}) if isinstance(tool_section, dict) else {}
      if not isinstance(section, dict):
        raise ConfigError(f"failed to parse {toml_path}: [tool.{TOML_SECTION}] must be a table")
      return section, parent

  return {}, None


def parse_cli_overrides(
  options_json: Optional[str] = None,
  ignore: Optional[List[str]] = None,
  prefix_pattern: Optional[str] = None,
  filename: Optional[str] = None,
) -> Dict[str, Any]:
  """
  Collects plugin options given on the command line.

  The `--options` JSON object is applied first; individual flags override
  its keys. Flags that were not given are omitted so that lower layers
  (pyproject.toml, defaults) still apply.

  Args:
      options_json: Raw JSON object text from `--options`.
      ignore: Method names from `--ignore`.
      prefix_pattern: Value of `--prefix-pattern`.
      filename: Value of `--filename`.

  Returns:
      Dict[str, Any]: Options keyed by their serialized names.

  Raises:
      ConfigError: If `options_json` is not a JSON object.
  """
  overrides: Dict[str, Any] = {}
  if options_json is not None:
    overrides.update(_decode(options_json, "failed to parse plugin config"))

  if ignore is not None:
    overrides["ignore"] = list(ignore)
  if prefix_pattern is not None:
    overrides["prefixPattern"] = prefix_pattern
  if filename is not None:
    overrides["filename"] = filename

  return overrides
