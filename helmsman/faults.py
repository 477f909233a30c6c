"""
Helmsman faults (errors) and rendering.

Scope
- FaultCode: canonical, stable identifiers for every user-facing fault. Codes are
  grouped by domain so logs and searches stay predictable.
- CommandException: base type that carries a message, its replacement parameters
  and the process exit code, and knows how to render itself with rich.
- Concrete faults for routing (UnknownCommandError), tree building
  (DuplicateCommandError), configuration (ConfigurationError) and discovery
  (PluginLoadError).

Messages
- Messages are templates: "{name}" placeholders are filled from the replacements
  mapping at render time, so the raw template and the structured parameters both
  reach the logger.
- The exit code is independent from the fault code; fault codes identify the
  issue, exit codes are what the process returns.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import interpolate


class FaultCode(IntEnum):
    """
    canonical fault codes used across the runner (stable identifiers).

    grouping
    - routing (1110x)
      • UNKNOWN_COMMAND
    - tree building (1120x)
      • DUPLICATE_COMMAND
    - configuration (1130x)
      • INVALID_CONFIGURATION
    - discovery (1140x)
      • PLUGIN_LOAD_FAILURE
    - delegated (1190x)
      • DELEGATED_ERROR: anything raised by a command implementation
    """
    # --- routing errors ---
    UNKNOWN_COMMAND         = 11101

    # --- tree building errors ---
    DUPLICATE_COMMAND       = 11201

    # --- configuration errors ---
    INVALID_CONFIGURATION   = 11301

    # --- discovery errors ---
    PLUGIN_LOAD_FAILURE     = 11401

    # --- delegated errors ---
    DELEGATED_ERROR         = 11901


class CommandException(Exception):
    """
    base class of every fault raised by helmsman itself.

    attributes
    - message: the message template (may hold "{name}" placeholders).
    - replacements: read-only mapping used to fill the template.
    - code: process exit code (non-zero).
    - hint: optional one-line advice shown under the message.
    """
    fault = FaultCode.DELEGATED_ERROR
    title = "command error"

    def __init__(self, message, /, replacements=None, code=1, *, hint=None):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        if not isinstance(code, int) or isinstance(code, bool) or not code:
            raise ValueError(f"{type(self).__name__} code must be a non-zero integer")
        super().__init__(message)
        self.message = message
        self.replacements = MappingProxyType(dict(replacements or {}))
        self.code = code
        self.hint = hint

    def render(self):
        """return the message with its replacements applied."""
        return interpolate(self.message, self.replacements)

    def __str__(self):
        return self.render()

    def __rich__(self):
        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

        header = Text.assemble(
            "[ ",
            ("helmsman", styles["prog-name"]),
            " — ",
            (str(self.fault.value), styles["code"]),
            " | ",
            (self.title.title(), styles["error-title"]),
            " ]",
        )
        renders = [header, Text(self.render(), styles["error-message"])]
        if self.hint:
            renders.append(Text.assemble((" → ", styles["hint-arrow"]), (self.hint, styles["hint"])))
        return Group(*renders)


class UnknownCommandError(CommandException):
    """
    a token names no child at the current position of the tree.

    the "cmd" replacement holds every token attempted so far, the failing one
    included, joined by spaces.
    """
    fault = FaultCode.UNKNOWN_COMMAND
    title = "unknown command"

    def __init__(self, path, /, suggestions=(), *, root="helmsman"):
        route = " ".join(path)
        self.path = tuple(path)
        self.suggestions = tuple(suggestions)
        hint = "run '%s help' to see available commands" % root
        if self.suggestions:
            hint = "did you mean %r? you can also %s" % (self.suggestions[0], hint)
        super().__init__(
            "'{cmd}' is not a registered command. See '%s help'." % root,
            {"cmd": route},
            1,
            hint=hint,
        )


class DuplicateCommandError(CommandException):
    """a command already occupies the requested path."""
    fault = FaultCode.DUPLICATE_COMMAND
    title = "duplicate command"

    def __init__(self, path, /, reason="is already registered"):
        self.path = tuple(path)
        super().__init__("'{cmd}' %s." % reason, {"cmd": " ".join(path)}, 1)


class ConfigurationError(CommandException):
    """invalid runtime argument, option value or configuration key."""
    fault = FaultCode.INVALID_CONFIGURATION
    title = "invalid configuration"


class PluginLoadError(CommandException):
    """a command module or plugin file cannot be loaded or registered."""
    fault = FaultCode.PLUGIN_LOAD_FAILURE
    title = "plugin load failure"


__all__ = (
    "FaultCode",
    "CommandException",
    "UnknownCommandError",
    "DuplicateCommandError",
    "ConfigurationError",
    "PluginLoadError",
)
