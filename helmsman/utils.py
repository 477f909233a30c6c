"""
Helmsman utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the tree, loader and configuration layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- interpolate(message, replacements)
  • Fill "{name}" placeholders from a mapping; unknown placeholders are left verbatim.

- expand(pattern)
  • Module globbing: expands "pkg.**.commands" style patterns into importable module names.
  • Pattern features: '*', '?', character classes [...]/[!...], and '**' for whole-segment wildcards.

Stability and contract
- Names not in __all__ are internal and may change without notice.
"""
import functools
import importlib
import pkgutil
import re
from collections.abc import Mapping
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


_PLACEHOLDER = re.compile(r"\{(?P<name>[A-Za-z_][\w-]*)\}")


def interpolate(message, replacements=None, /):
    """
    substitute "{name}" placeholders in a message.

    rules
    - only names present in replacements are substituted; others stay verbatim,
      so a message with literal braces never raises.
    - values are converted with str().
    """
    if not isinstance(message, str):
        raise TypeError("interpolate() first argument must be a string")
    if not replacements:
        return message
    if not isinstance(replacements, Mapping):
        raise TypeError("interpolate() second argument must be a mapping")

    def substitute(match):
        name = match.group("name")
        return str(replacements[name]) if name in replacements else match.group(0)

    return _PLACEHOLDER.sub(substitute, message)


@functools.cache
def _translate(segment):
    """
    translate one dot-free glob segment into a regex snippet.
      *       → zero or more non-dot chars
      ?       → exactly one non-dot char
      [...]   → character class, [!...] negated
    """
    parts = []
    index = 0
    while index < len(segment):
        char = segment[index]
        if char == "*":
            parts.append(r"[^.]*")
        elif char == "?":
            parts.append(r"[^.]")
        elif char == "[" and (close := segment.find("]", index + 1)) != -1:
            body = segment[index + 1:close]
            if body[:1] in ("!", "^"):
                body = "^" + body[1:]
            parts.append(f"[{body}]")
            index = close
        else:
            parts.append(re.escape(char))
        index += 1
    return "".join(parts)


@functools.cache
def _compile(pattern):
    # '**' spans zero or more whole segments
    head, *tail = pattern.split(".")
    body = _translate(head)
    for segment in tail:
        body += r"(?:\.[A-Za-z_]\w*)*" if segment == "**" else r"\." + _translate(segment)
    return re.compile(body)


def expand(source, /):
    """
    expand a dot-separated module glob into fully-qualified module names.

    rules
    - the pattern must start with at least one concrete package segment.
    - a pattern without wildcards is returned as-is (import errors surface later).
    - matches are returned sorted; an unimportable prefix yields no matches.

    examples
    - "helmsman.commands.*"      → direct children of helmsman.commands
    - "plugins.**.commands"      → any commands subpackage under plugins
    """
    if not isinstance(source, str):
        raise TypeError("expand() argument must be a string")
    elif not (source := source.strip()):
        raise ValueError("expand() argument must be a non-empty string")

    if re.fullmatch(r"(?!\d)\w+(\.(?!\d)\w+)*", source):
        return [source]

    prefixes = []
    for segment in source.split("."):
        if not re.fullmatch(r"(?!\d)\w+", segment):
            break
        prefixes.append(segment)

    if not prefixes:
        raise ValueError("expand() pattern must start with a concrete package segment")

    try:
        package = importlib.import_module(prefix := ".".join(prefixes))
    except ImportError:
        return []

    pattern = _compile(source)
    matches = {prefix} if pattern.fullmatch(prefix) else set()
    for metadata in pkgutil.walk_packages(getattr(package, "__path__", ()), prefix + "."):
        if pattern.fullmatch(metadata.name):
            matches.add(metadata.name)
    return sorted(matches)


__all__ = (
    "coalesce",
    "interpolate",
    "expand",
    "UnsetType",
    "Unset",
)
