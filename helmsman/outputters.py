"""
Helmsman outputters: write structured command results in the selected format.

Pieces
- formatters turn a value into text: JSONFormatter, BashFormatter, PrettyFormatter.
- StreamWriter sends text to stdout ("-") or appends it to a file.
- Outputter pairs one writer with one formatter; commands reach it through the
  runner context (context.outputter.output(value)).

Textual results returned by a command are logged by the runner, not formatted
here; the outputter is for records, lists and tables.
"""
import io
import json
import sys
from collections.abc import Mapping, Sequence

from rich.console import Console
from rich.pretty import Pretty
from rich.table import Table


def _scalar(value):
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping) or (isinstance(value, Sequence) and not isinstance(value, str)):
        return json.dumps(value, sort_keys=True, default=str)
    return str(value)


def _rows(value):
    """True for a non-empty sequence made only of mappings."""
    return (
        isinstance(value, Sequence) and not isinstance(value, str) and bool(value)
        and all(isinstance(item, Mapping) for item in value)
    )


class JSONFormatter:
    def format(self, value, /, human_label=None):
        return json.dumps(value, indent=4, sort_keys=True, default=str)


class BashFormatter:
    """
    Shell friendly text.

    - mapping           → "key value" per line
    - list of mappings  → one tab separated row per mapping
    - other sequences   → one item per line
    """

    def format(self, value, /, human_label=None):
        if isinstance(value, Mapping):
            return "\n".join(f"{key} {_scalar(item)}" for key, item in value.items())
        if _rows(value):
            return "\n".join("\t".join(_scalar(cell) for cell in row.values()) for row in value)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return "\n".join(map(_scalar, value))
        return _scalar(value)


class PrettyFormatter:
    """Human readable rendering through rich (tables for lists of records)."""

    def __init__(self, width=100):
        self.width = width

    def format(self, value, /, human_label=None):
        if _rows(value):
            renderable = Table(title=human_label)
            columns = list(dict.fromkeys(key for row in value for key in row))
            for column in columns:
                renderable.add_column(str(column).replace("_", " ").title())
            for row in value:
                renderable.add_row(*(_scalar(row.get(column)) for column in columns))
        elif isinstance(value, Mapping):
            renderable = Table(show_header=False, title=human_label)
            renderable.add_column(style="bold")
            renderable.add_column()
            for key, item in value.items():
                renderable.add_row(str(key), _scalar(item))
        else:
            renderable = Pretty(value)

        console = Console(file=io.StringIO(), width=self.width, color_system=None)
        console.print(renderable)
        return console.file.getvalue().rstrip("\n")


class StreamWriter:
    """Write formatted text to stdout ("-") or append it to a file path."""

    def __init__(self, destination="-", /, *, stdout=None):
        if not isinstance(destination, str) or not destination:
            raise TypeError("StreamWriter destination must be a non-empty string")
        self.destination = destination
        self._stdout = stdout

    def write(self, text, /):
        if self.destination == "-":
            stream = self._stdout or sys.stdout
            stream.write(text + "\n")
            stream.flush()
            return
        with open(self.destination, "a", encoding="utf-8") as stream:
            stream.write(text + "\n")


class Outputter:
    """Format a value and hand it to the writer."""

    def __init__(self, writer, formatter, /):
        self.writer = writer
        self.formatter = formatter

    @classmethod
    def from_config(cls, format="pretty", output="-", /):
        if format == "json":
            formatter = JSONFormatter()
        elif format == "bash":
            formatter = BashFormatter()
        else:
            formatter = PrettyFormatter()
        return cls(StreamWriter(output), formatter)

    def output(self, value, /, human_label=None):
        self.writer.write(self.formatter.format(value, human_label=human_label))


__all__ = (
    "JSONFormatter",
    "BashFormatter",
    "PrettyFormatter",
    "StreamWriter",
    "Outputter",
)
