"""
Helmsman logger: the messages a run emits (results, usage, debug notes, errors).

Design
- one Logger object is built per run from the configuration and handed to the
  runner and to commands; there is no module-level logger singleton.
- records go through the standard logging machinery, rendered by rich's
  RichHandler on a stderr console.
- every level accepts (message, replacements): "{name}" placeholders are filled
  the same way faults fill theirs, so a fault's template and parameters can be
  logged unchanged.
"""
import itertools
import logging

from rich.console import Console
from rich.logging import RichHandler

from .utils import interpolate

_instances = itertools.count()


class Logger:
    """
    Level-aware message sink.

    Parameters
    - config: mapping; "debug" switches the threshold from INFO to DEBUG.
    - console: rich Console to render on (stderr by default).
    - name: logging name; a unique suffix keeps runner instances apart.
    """

    def __init__(self, config=None, /, *, console=None, name="helmsman"):
        config = config or {}
        self.console = console if console is not None else Console(stderr=True)
        self.level = logging.DEBUG if config.get("debug") else logging.INFO

        self._logger = logging.getLogger(f"{name}.{next(_instances)}")
        self._logger.setLevel(self.level)
        self._logger.propagate = False
        self._handler = RichHandler(
            console=self.console,
            show_time=bool(config.get("debug")),
            show_path=False,
            markup=False,
            rich_tracebacks=False,
        )
        self._handler.setLevel(self.level)
        self._logger.addHandler(self._handler)

    def log(self, level, message, replacements=None, /):
        self._logger.log(level, interpolate(str(message), replacements))

    def debug(self, message, replacements=None, /):
        self.log(logging.DEBUG, message, replacements)

    def info(self, message, replacements=None, /):
        self.log(logging.INFO, message, replacements)

    def warning(self, message, replacements=None, /):
        self.log(logging.WARNING, message, replacements)

    def error(self, message, replacements=None, /):
        self.log(logging.ERROR, message, replacements)

    def close(self):
        """Detach the handler; the logger stays usable but silent."""
        self._logger.removeHandler(self._handler)
        self._handler.close()


__all__ = (
    "Logger",
)
