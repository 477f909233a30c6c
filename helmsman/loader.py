"""
Helmsman loader: populate the command tree from command modules and plugins.

Contract
- a command module exposes register(tree); the loader imports it and calls that
  function once. Nothing is discovered by scanning classes or globals.

Sources, in load order (load_all_commands)
1. built-in commands: every module matching "helmsman.commands.*".
2. "require" entries from the configuration: module globs ("pkg.**.commands")
   or paths to .py files.
3. user plugins: <config dir>/plugins/<plugin>/commands/*.py, plugins and files
   in sorted order.

Failures
- a module that cannot be imported (any exception raised while it runs), or
  that has no callable register, raises PluginLoadError; errors raised by
  register() itself (e.g. duplicates) propagate unchanged.
"""
import hashlib
import importlib
import importlib.util
import os

from .faults import PluginLoadError
from .utils import expand

BUILTINS = "helmsman.commands.*"


def _register(tree, module, origin):
    register = getattr(module, "register", None)
    if not callable(register):
        raise PluginLoadError("Command module {module} does not define register(tree).", {"module": origin})
    register(tree)


def include(tree, source, /):
    """
    Import every module matching a dotted glob and let each register its commands.

    Returns
    - the list of imported module names, in load order.
    """
    if not isinstance(source, str):
        raise TypeError("include() argument must be a string")

    modules = []
    for name in expand(source):
        try:
            module = importlib.import_module(name)
        except Exception as error:
            raise PluginLoadError("Unable to import module {module}: {error}", {"module": name, "error": error}) from error
        # Packages only group modules; a package without register() is skipped when globbing.
        if name != source and not hasattr(module, "register") and hasattr(module, "__path__"):
            continue
        _register(tree, module, name)
        modules.append(name)
    return modules


def include_file(tree, path, /):
    """Import a single .py file by path and let it register its commands."""
    path = os.path.abspath(path)
    if not os.path.isfile(path) or not os.access(path, os.R_OK):
        raise PluginLoadError("Command file {path} does not exist or is not readable.", {"path": path})

    # Unique, stable module name per file so two plugins may share a basename.
    digest = hashlib.sha1(path.encode("utf-8")).hexdigest()[:12]
    name = "helmsman_plugin_%s_%s" % (os.path.splitext(os.path.basename(path))[0], digest)
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise PluginLoadError("Unable to load command file {path}.", {"path": path})
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as error:
        raise PluginLoadError("Unable to import command file {path}: {error}", {"path": path, "error": error}) from error
    _register(tree, module, path)
    return module


def plugin_directories(directory, /):
    """Return the sorted plugin base directories under <directory>/plugins."""
    if not directory or not os.path.isdir(plugins := os.path.join(directory, "plugins")):
        return []
    return [
        os.path.join(plugins, entry)
        for entry in sorted(os.listdir(plugins))
        if not entry.startswith(".") and os.path.isdir(os.path.join(plugins, entry))
    ]


def command_files(directory, /):
    """Return the readable .py files of a commands directory, sorted by name."""
    if not os.path.isdir(directory):
        return []
    return [
        path
        for entry in sorted(os.listdir(directory))
        if entry.endswith(".py") and not entry.startswith((".", "_"))
        and os.path.isfile(path := os.path.join(directory, entry)) and os.access(path, os.R_OK)
    ]


def load_all_commands(tree, /, require=(), directory=None, *, builtins=True):
    """
    Load built-ins, required modules/files and user plugins into tree.

    Parameters
    - require: module globs or .py file paths.
    - directory: the user configuration directory (plugins live under it).
    - builtins: set to False to skip helmsman.commands (tests, embedders).
    """
    if builtins:
        include(tree, BUILTINS)
    for entry in require:
        if entry.endswith(".py") or os.sep in entry:
            include_file(tree, entry)
        else:
            include(tree, entry)
    for plugin in plugin_directories(directory):
        for path in command_files(os.path.join(plugin, "commands")):
            include_file(tree, path)
    return tree


__all__ = (
    "BUILTINS",
    "include",
    "include_file",
    "plugin_directories",
    "command_files",
    "load_all_commands",
)
