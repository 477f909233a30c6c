"""
Helmsman resolver: match a flat token list against the command tree.

Algorithm (find_command_to_run)
- start at the root with an empty path.
- while tokens remain and the current node can hold subcommands:
  • take the next token and append it to the attempted path.
  • look it up among the current node's children (exact string equality).
  • a miss raises UnknownCommandError carrying the attempted path, failing token included.
  • a hit descends into the child.
- whatever was not consumed is returned as the command's positional arguments.

Two views of the same walk
- find_command_to_run() returns a Resolution triple (command, args, path).
- resolve() returns a tagged result, ResolvedComposite or ResolvedLeaf, so callers
  branch on the kind of node reached instead of asking the node.
"""
import difflib
from dataclasses import dataclass, field
from typing import NamedTuple

from .faults import UnknownCommandError
from .nodes import CommandNode, RootCommand


class Resolution(NamedTuple):
    command: CommandNode
    args: list
    path: list


@dataclass(frozen=True)
class ResolvedComposite:
    """The walk stopped on a namespace: the user named a composite exactly."""
    node: CommandNode
    path: tuple = field(default=())


@dataclass(frozen=True)
class ResolvedLeaf:
    """The walk reached an executable command; args are the unconsumed tokens."""
    node: CommandNode
    args: tuple = field(default=())
    path: tuple = field(default=())


def find_command_to_run(root, args, /):
    """
    Walk args from root to the deepest matching node.

    Parameters
    - root: the composite to start from (normally the tree root).
    - args: sequence of positional tokens; it is never mutated.

    Returns
    - Resolution(command, remaining args, consumed path).

    Raises
    - UnknownCommandError: a token names no child at the current position.
    """
    if not isinstance(root, CommandNode):
        raise TypeError("find_command_to_run() root must be a command node")

    command = root
    tokens = list(args)
    path = []
    while tokens and command.can_have_subcommands():
        path.append(token := tokens[0])
        subcommand = command.find_subcommand(token)
        if subcommand is None:
            raise UnknownCommandError(
                path,
                difflib.get_close_matches(token, command.children.keys(), 3),
                root=root.name if isinstance(root, RootCommand) else "helmsman",
            )
        del tokens[0]
        command = subcommand

    return Resolution(command, tokens, path)


def resolve(root, args, /):
    """Resolve args and tag the outcome by the kind of node reached."""
    command, remaining, path = find_command_to_run(root, args)
    if command.can_have_subcommands():
        return ResolvedComposite(command, tuple(path))
    return ResolvedLeaf(command, tuple(remaining), tuple(path))


__all__ = (
    "Resolution",
    "ResolvedComposite",
    "ResolvedLeaf",
    "find_command_to_run",
    "resolve",
)
