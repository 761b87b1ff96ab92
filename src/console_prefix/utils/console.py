"""
Diagnostic Output for the Command Line Tool.

Progress and failure messages go through the standard `logging` library and
are rendered by a `rich` handler on **stderr**. Standard output is reserved
for rewritten source, so `console-prefix convert file.py > out.py` yields
clean code. The transform core never logs.

The active Rich Console sits behind a proxy so that tests can capture
diagnostics via `set_console`.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Between INFO (20) and WARNING (30)
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme({"logging.level.success": "green", "path": "bold blue"})


def _stderr_console() -> Console:
  return Console(theme=_THEME, stderr=True)


class _ConsoleProxy:
  """
  Forwards printing to a swappable Console and keeps the root logger's
  RichHandler bound to the same Console.
  """

  def __init__(self) -> None:
    self._backend: Console = _stderr_console()
    self._bind_handler()

  @property
  def backend(self) -> Console:
    return self._backend

  def set_backend(self, new_console: Console) -> None:
    self._backend = new_console
    self._bind_handler()

  def reset(self) -> None:
    """Returns diagnostics to a fresh stderr console."""
    self.set_backend(_stderr_console())

  def _bind_handler(self) -> None:
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
      if isinstance(handler, RichHandler):
        root_logger.removeHandler(handler)

    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(
      RichHandler(console=self._backend, show_time=False, show_path=False, markup=True, rich_tracebacks=True)
    )

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Routes both `console.print` and log records to `new_console`.

  Args:
      new_console (Console): The Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  console.reset()


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): The message content. May include rich markup such as [path].
  """
  logging.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  logging.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  logging.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  logging.error(f"❌ {msg}", extra={"markup": True})
