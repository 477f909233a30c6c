"""
Helmsman configuration: split the argument vector and merge runtime settings.

What this module provides
- Configurator.parse_args(argv): separates positional tokens, named arguments
  and runtime configuration.
- Configurator.merge(mapping): overlays validated settings onto the defaults.
- config_dir(env) / load_file(path): the user configuration directory and its
  optional config.toml.

Token grammar
- "word"          → positional
- "--name=value"  → named, value is the text after the first "="
- "--name"        → named, True
- "--no-name"     → named, False
- "--"            → every later token is positional
- anything else starting with "-" is malformed (ConfigurationError)

Runtime keys
- format, output, debug, require, yes: consumed by the runner itself and kept
  out of the named arguments passed to commands.
"""
import os
import re
import tomllib
from types import MappingProxyType

from .faults import ConfigurationError

FORMATS = ("json", "bash", "pretty")

DEFAULTS = MappingProxyType({
    "format": "pretty",
    "output": "-",
    "debug": False,
    "require": (),
    "yes": False,
})

_OPTION = re.compile(r"--(?P<name>[A-Za-z0-9][A-Za-z0-9-]*)(=(?P<value>[^\r\n]*))?")


def _boolean(key, value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("1", "true", "yes", "on", "0", "false", "no", "off"):
        return value.lower() in ("1", "true", "yes", "on")
    raise ConfigurationError("Option {key} expects a boolean, got {value}.", {"key": key, "value": value})


def _validate(key, value):
    match key:
        case "format":
            if value not in FORMATS:
                raise ConfigurationError(
                    "Unknown output format {value}; expected one of {formats}.",
                    {"value": value, "formats": ", ".join(FORMATS)},
                )
            return value
        case "output":
            if not isinstance(value, str) or not value:
                raise ConfigurationError("Option output expects a path or '-'.")
            return value
        case "debug" | "yes":
            return _boolean(key, value)
        case "require":
            if isinstance(value, str):
                value = (value,)
            if not isinstance(value, (list, tuple)):
                raise ConfigurationError("Option require expects module patterns or file paths.")
            if not all(isinstance(item, str) and item for item in value):
                raise ConfigurationError("Option require expects module patterns or file paths.")
            return tuple(value)
    raise ConfigurationError("There is no configuration option set with the key {key}.", {"key": key})


class Configurator:
    """
    Holds the merged configuration for one run.

    Precedence (lowest first): DEFAULTS, config file, runtime arguments.
    """

    def __init__(self, /):
        self._config = dict(DEFAULTS)

    def parse_args(self, argv, /):
        """
        Split argv into (args, assoc_args, runtime_config).

        "require" may repeat; its values accumulate in order.
        """
        args, assoc_args, runtime = [], {}, {}
        tokens = iter(argv)
        for token in tokens:
            if token == "--":
                args.extend(tokens)
                break
            if not token.startswith("-"):
                args.append(token)
                continue
            match = _OPTION.fullmatch(token)
            if not match:
                raise ConfigurationError("Malformed option {token}.", {"token": token})
            name, value = match.group("name"), match.group("value")
            if value is None:
                value = not name.startswith("no-")
                name = name[3:] if name.startswith("no-") and len(name) > 3 else name
            if name == "require":
                runtime.setdefault("require", []).append(value)
            elif name in DEFAULTS:
                runtime[name] = value
            else:
                assoc_args[name] = value
        return args, assoc_args, runtime

    def merge(self, mapping, /):
        """Validate and overlay mapping onto the current configuration."""
        for key, value in mapping.items():
            if key == "require":
                self._config[key] = (*self._config[key], *_validate(key, value))
            else:
                self._config[key] = _validate(key, value)
        return self

    def get(self, key, /):
        try:
            return self._config[key]
        except KeyError:
            raise ConfigurationError(
                "There is no configuration option set with the key {key}.", {"key": key}
            ) from None

    def to_dict(self):
        return dict(self._config)


def config_dir(env=None, /):
    """
    Return the user configuration directory, or None when it cannot be derived.

    lookup
    - HELMSMAN_CONFIG_DIR
    - $HOME/.helmsman
    - $HOMEDRIVE$HOMEPATH/.helmsman (windows shells without HOME)
    """
    env = os.environ if env is None else env
    if directory := env.get("HELMSMAN_CONFIG_DIR"):
        return directory
    if home := env.get("HOME"):
        return os.path.join(home, ".helmsman")
    if env.get("HOMEDRIVE") and env.get("HOMEPATH"):
        return os.path.join(env["HOMEDRIVE"] + env["HOMEPATH"], ".helmsman")
    return None


def load_file(directory, /):
    """Read <directory>/config.toml; a missing directory or file yields {}."""
    if not directory or not os.path.isfile(path := os.path.join(directory, "config.toml")):
        return {}
    try:
        with open(path, "rb") as stream:
            return tomllib.load(stream)
    except tomllib.TOMLDecodeError as error:
        raise ConfigurationError("Unable to parse {path}: {error}", {"path": path, "error": error}) from error


__all__ = (
    "FORMATS",
    "DEFAULTS",
    "Configurator",
    "config_dir",
    "load_file",
)
