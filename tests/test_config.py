"""
Tests for Plugin Options and Invocation Context Resolution.

Verifies:
1. Defaults when options are empty or absent.
2. Strict rejection of unknown option keys (but not unknown context keys).
3. Filename fallback from the invocation context.
4. pyproject.toml loading and command line layering.
"""

import pytest

from console_prefix.config import (
  ConfigError,
  InvocationContext,
  PrefixConfig,
  parse_cli_overrides,
  parse_context,
  parse_plugin_options,
  resolve_config,
)


def test_defaults_from_empty_object():
  config = parse_plugin_options("{}")

  assert config.ignore == []
  assert config.prefix_pattern == "[filename]"
  assert config.filename is None


def test_none_options_means_defaults():
  assert parse_plugin_options(None) == PrefixConfig()


def test_camel_case_keys_accepted():
  config = parse_plugin_options('{"ignore": ["log", "info"], "prefixPattern": "x:", "filename": "a.py"}')

  assert config.ignore == ["log", "info"]
  assert config.prefix_pattern == "x:"
  assert config.filename == "a.py"


def test_mapping_payload_accepted():
  config = parse_plugin_options({"prefixPattern": "[filename] >"})
  assert config.prefix_pattern == "[filename] >"


def test_unknown_option_key_rejected():
  """A typo must abort instead of silently running with defaults."""
  with pytest.raises(ConfigError, match="failed to parse plugin config"):
    parse_plugin_options('{"prefixPatern": "x"}')


def test_snake_case_option_key_rejected():
  """Options use their serialized names only; the Python field name is an unknown key."""
  with pytest.raises(ConfigError, match="failed to parse plugin config"):
    parse_plugin_options('{"prefix_pattern": "x"}')


def test_malformed_options_json_rejected():
  with pytest.raises(ConfigError, match="failed to parse plugin config"):
    parse_plugin_options("{ignore: [}")


def test_wrong_field_type_rejected():
  with pytest.raises(ConfigError):
    parse_plugin_options({"ignore": "log"})


def test_non_object_payload_rejected():
  with pytest.raises(ConfigError, match="expected a JSON object"):
    parse_plugin_options("[1, 2]")


def test_undecodable_bytes_rejected():
  with pytest.raises(ConfigError, match="failed to parse plugin config"):
    resolve_config(b'{"filename": "\xff"}')


def test_config_error_is_value_error():
  with pytest.raises(ValueError):
    parse_plugin_options({"bogus": True})


def test_context_absent():
  assert parse_context(None) is None


def test_context_tolerates_extra_keys():
  ctx = parse_context('{"filename": "src/a.py", "cwd": "/tmp", "env": "prod"}')
  assert ctx == InvocationContext(filename="src/a.py")


def test_malformed_context_rejected():
  with pytest.raises(ConfigError, match="failed to parse plugin context"):
    parse_context("not json")


def test_filename_falls_back_to_context():
  config = resolve_config("{}", '{"filename": "test.js"}')
  assert config.filename == "test.js"


def test_explicit_filename_wins_over_context():
  config = resolve_config({"filename": "explicit.py"}, {"filename": "context.py"})
  assert config.filename == "explicit.py"


def test_no_filename_anywhere():
  config = resolve_config({}, None)
  assert config.filename is None


def test_resolve_does_not_mutate_input_config():
  base = PrefixConfig()
  effective = resolve_config(base, InvocationContext(filename="a.py"))

  assert effective.filename == "a.py"
  assert base.filename is None


def test_load_reads_pyproject_section(tmp_path):
  (tmp_path / "pyproject.toml").write_text(
    '[tool.console_prefix]\nignore = ["debug"]\nprefixPattern = "[filename]:"\n', encoding="utf-8"
  )
  nested = tmp_path / "pkg" / "sub"
  nested.mkdir(parents=True)

  config = PrefixConfig.load(search_path=nested)

  assert config.ignore == ["debug"]
  assert config.prefix_pattern == "[filename]:"


def test_load_overrides_replace_toml_keys(tmp_path):
  (tmp_path / "pyproject.toml").write_text(
    '[tool.console_prefix]\nignore = ["debug"]\nprefixPattern = "toml:"\n', encoding="utf-8"
  )

  config = PrefixConfig.load(overrides={"prefixPattern": "cli:"}, search_path=tmp_path)

  assert config.prefix_pattern == "cli:"
  assert config.ignore == ["debug"]


def test_load_rejects_unknown_toml_key(tmp_path):
  (tmp_path / "pyproject.toml").write_text('[tool.console_prefix]\nprefix = "x"\n', encoding="utf-8")

  with pytest.raises(ConfigError):
    PrefixConfig.load(search_path=tmp_path)


def test_load_rejects_invalid_toml(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.console_prefix\n", encoding="utf-8")

  with pytest.raises(ConfigError, match="pyproject.toml"):
    PrefixConfig.load(search_path=tmp_path)


def test_load_rejects_non_table_section(tmp_path):
  (tmp_path / "pyproject.toml").write_text('[tool]\nconsole_prefix = "x"\n', encoding="utf-8")

  with pytest.raises(ConfigError, match="must be a table"):
    PrefixConfig.load(search_path=tmp_path)


def test_load_rejects_snake_case_toml_key(tmp_path):
  (tmp_path / "pyproject.toml").write_text('[tool.console_prefix]\nprefix_pattern = "x"\n', encoding="utf-8")

  with pytest.raises(ConfigError, match="failed to parse plugin config"):
    PrefixConfig.load(search_path=tmp_path)


def test_cli_overrides_layering():
  overrides = parse_cli_overrides(
    options_json='{"ignore": ["warn"], "prefixPattern": "json:"}',
    ignore=None,
    prefix_pattern="flag:",
  )

  assert overrides == {"ignore": ["warn"], "prefixPattern": "flag:"}


def test_cli_overrides_empty():
  assert parse_cli_overrides() == {}


def test_cli_overrides_bad_json():
  with pytest.raises(ConfigError):
    parse_cli_overrides(options_json="{oops")
