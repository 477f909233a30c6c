"""
Helmsman runner: resolve the typed words to a command and run it once.

Run loop (Runner.run)
1. no positional tokens → the default "help" token is used.
2. pre-check: resolve the tokens; an UnknownCommandError here is only logged at
   debug level, the final pass below reports it.
3. a composite reached by the pre-check → its usage is logged and the run ends
   with exit code 0; nothing is invoked.
4. final pass: resolve the same tokens again, then invoke the leaf with the
   remaining positional tokens and the named arguments.
5. a str result is logged at info level; other results are left to the command.
6. any exception from the final pass or the command is logged once at error
   level (message plus replacements, when it has them) and its exit code is
   returned.

States
    START → RESOLVING_PRECHECK → HELP_SHOWN
                               → RESOLVING_FINAL → INVOKING → SUCCESS | FAILED

Collaborators (logger, outputter, tree, configuration) are passed in; commands
that ask for it receive them bundled in a Context.
"""
import enum
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from rich.console import Console

from .config import Configurator, config_dir, load_file
from .faults import CommandException, UnknownCommandError
from .loader import load_all_commands
from .logger import Logger
from .outputters import Outputter
from .registry import CommandTree
from .resolver import ResolvedComposite, find_command_to_run, resolve

DEFAULT_COMMAND = "help"


class RunState(enum.Enum):
    START = "start"
    RESOLVING_PRECHECK = "resolving-precheck"
    HELP_SHOWN = "help-shown"
    RESOLVING_FINAL = "resolving-final"
    INVOKING = "invoking"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class Context:
    """What a command declared with context=True receives as its third argument."""
    runner: Any
    tree: CommandTree
    logger: Any
    outputter: Any
    config: dict


def exit_code(error, /):
    """Return the error's non-zero integer code, or 1."""
    code = getattr(error, "code", None)
    if isinstance(code, int) and not isinstance(code, bool) and code:
        return code
    return 1


class Runner:
    """
    Runs exactly one command.

    Parameters
    - tree: the populated CommandTree (frozen by from_argv()).
    - logger: object with debug/info/error(message, replacements=None).
    - outputter: object with output(value, human_label=None).
    - args: positional tokens; the first ones name the command.
    - assoc_args: named arguments, passed to the command untouched.
    - config: the merged runtime configuration.
    """

    def __init__(self, tree, logger, outputter, /, args=(), assoc_args=None, config=None):
        if not isinstance(tree, CommandTree):
            raise TypeError("Runner tree must be a CommandTree")
        self.tree = tree
        self.logger = logger
        self.outputter = outputter
        self.args = list(args)
        self.assoc_args = {} if assoc_args is None else assoc_args
        self.config = dict(config or {})
        self.state = RunState.START

    @classmethod
    def from_argv(cls, argv=None, /, tree=None, env=None, *, builtins=True, console=None):
        """
        Build a runner from a raw argument vector (sys.argv[1:] by default).

        Order
        - split argv; merge config.toml from the config directory, then the
          runtime arguments on top.
        - build the logger and outputter from the merged configuration.
        - load built-in commands, required modules and plugins; freeze the tree.
        """
        configurator = Configurator()
        args, assoc_args, runtime = configurator.parse_args(sys.argv[1:] if argv is None else argv)
        directory = config_dir(env)
        configurator.merge(load_file(directory))
        configurator.merge(runtime)
        config = configurator.to_dict()

        logger = Logger(config, console=console)
        outputter = Outputter.from_config(configurator.get("format"), configurator.get("output"))

        tree = CommandTree() if tree is None else tree
        load_all_commands(tree, configurator.get("require"), directory, builtins=builtins)
        return cls(tree.freeze(), logger, outputter, args, assoc_args, config)

    @property
    def context(self):
        return Context(self, self.tree, self.logger, self.outputter, dict(self.config))

    def run(self):
        """Resolve and run the command; return the process exit code."""
        args = self.args or [DEFAULT_COMMAND]

        self.state = RunState.RESOLVING_PRECHECK
        try:
            resolution = resolve(self.tree.root, args)
        except UnknownCommandError as error:
            self.logger.debug(error.message, error.replacements)
        else:
            if isinstance(resolution, ResolvedComposite):
                self.logger.info(resolution.node.usage())
                self.state = RunState.HELP_SHOWN
                return 0

        return self._run_command(args)

    def _run_command(self, args):
        self.state = RunState.RESOLVING_FINAL
        try:
            command, final_args, path = find_command_to_run(self.tree.root, args)
            self.state = RunState.INVOKING
            self.logger.debug("Running {cmd}", {"cmd": " ".join(path)})
            result = command.invoke(final_args, self.assoc_args, context=self.context)
            if isinstance(result, str):
                self.logger.info(result)
        except Exception as error:
            self.state = RunState.FAILED
            replacements = getattr(error, "replacements", None)
            self.logger.error(
                str(getattr(error, "message", error)),
                replacements if isinstance(replacements, Mapping) else None,
            )
            return exit_code(error)

        self.state = RunState.SUCCESS
        return 0


def main(argv=None, /):
    """Console entry point: build the runner from argv and run it."""
    try:
        runner = Runner.from_argv(argv)
    except CommandException as error:
        Console(stderr=True).print(error)
        return error.code
    return runner.run()


__all__ = (
    "DEFAULT_COMMAND",
    "RunState",
    "Context",
    "Runner",
    "exit_code",
    "main",
)
