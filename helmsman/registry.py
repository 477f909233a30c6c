"""
Helmsman command tree: the namespace of every known command.

Scope
- CommandTree holds a RootCommand and inserts nodes at explicit paths,
  creating intermediate composites on the way.
- Command modules never touch the tree structure directly: each exposes a
  register(tree) function that the loader calls (see helmsman.loader).

Insertion rules (register)
- a leaf already at the exact path                  → DuplicateCommandError
- a composite at the exact path, new node composite → merged (children re-registered)
- composite vs leaf at the exact path               → DuplicateCommandError
- an intermediate segment naming a leaf             → DuplicateCommandError

Lifecycle
- built once at process start, frozen before resolution; register() on a frozen
  tree raises RuntimeError.
"""
from collections.abc import Sequence

from .faults import DuplicateCommandError
from .nodes import CommandNode, CompositeCommand, RootCommand


class CommandTree:
    """A rooted tree of command nodes."""

    def __init__(self, root=None, /):
        if root is None:
            root = RootCommand()
        elif not isinstance(root, RootCommand):
            raise TypeError("CommandTree root must be a RootCommand")
        self._root = root
        self._frozen = False

    @property
    def root(self):
        return self._root

    @property
    def frozen(self):
        return self._frozen

    def freeze(self):
        self._frozen = True
        return self

    def register(self, path, node, /):
        """
        Insert node at path, creating intermediate composites as needed.

        Parameters
        - path: sequence of names; the last one must equal node.name.
        - node: a detached CommandNode (leaf or composite).

        Returns
        - the node now living at path (the existing composite when merged).
        """
        if self._frozen:
            raise RuntimeError("command tree is frozen; register() is only allowed while loading")
        if isinstance(path, str) or not isinstance(path, Sequence):
            raise TypeError("register() path must be a sequence of names")
        if not path:
            raise ValueError("register() path must not be empty")
        if not isinstance(node, CommandNode) or isinstance(node, RootCommand):
            raise TypeError("register() node must be a non-root command node")
        if path[-1] != node.name:
            raise ValueError(f"register() path ends with {path[-1]!r} but the node is named {node.name!r}")

        parent = self._root
        for index, name in enumerate(path[:-1]):
            child = self.find_child(parent, name)
            if child is None:
                child = parent.attach(CompositeCommand(name))
            elif not child.can_have_subcommands():
                raise DuplicateCommandError(path[:index + 1], "is a command and cannot hold subcommands")
            parent = child

        existing = self.find_child(parent, node.name)
        if existing is None:
            return parent.attach(node)
        if not (existing.can_have_subcommands() and node.can_have_subcommands()):
            raise DuplicateCommandError(path)

        # Both composites: fold the newcomer into the existing namespace.
        self._check_merge(existing, node, tuple(path))
        if node.descr and not existing.descr:
            existing._descr = node.descr
        for name in list(node.children):
            self.register((*path, name), node.detach(name))
        return existing

    def _check_merge(self, existing, node, path):
        # raises before anything moves, so a failed merge leaves both nodes untouched
        for name, child in node.children.items():
            if (current := self.find_child(existing, name)) is None:
                continue
            if not (current.can_have_subcommands() and child.can_have_subcommands()):
                raise DuplicateCommandError((*path, name))
            self._check_merge(current, child, (*path, name))

    def find_child(self, node, name, /):
        """Return the child of node called name, or None (leaves have no children)."""
        return node.find_subcommand(name)

    def walk(self, node=None, /):
        """Yield (path, node) pairs depth-first, siblings sorted by name; the root is not yielded."""
        node = self._root if node is None else node
        for name in sorted(getattr(node, "children", ())):
            child = node.children[name]
            yield child.path, child
            yield from self.walk(child)

    def __contains__(self, path):
        node = self._root
        for name in path:
            if (node := self.find_child(node, name)) is None:
                return False
        return True


__all__ = (
    "CommandTree",
)
