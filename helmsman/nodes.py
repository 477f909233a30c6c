"""
Helmsman command nodes: the entries of the command namespace.

What this module provides
- CommandNode: common identity (name, description) and the non-owning parent link.
- CompositeCommand: a namespace node; owns children, renders a usage synopsis,
  and is never invoked directly.
- LeafCommand: an executable node that wraps a callable taking (args, assoc_args).
- RootCommand: the composite at the top of every tree; named after the program.
- leaf(...) / composite(...): factories; leaf also works as a decorator.

Ownership
- parent → child edges own the children (a plain dict on the composite).
- child → parent edges are weakref.ref handles, so the tree holds no cycles of
  strong references and a dropped tree is released at once.

Quick start
    from helmsman.nodes import composite, leaf

    site = composite("site", descr="Site commands.")

    @leaf(synopsis="[--format=<format>]")
    def list_sites(args, assoc_args):
        \"\"\"List the sites you can access.\"\"\"
        return "\\n".join(sorted(SITES))

    site.attach(list_sites)   # registered as "site list-sites"
"""
import inspect
import re
import weakref
from types import MappingProxyType

from .utils import Unset, coalesce

_NAME = re.compile(r"[^\s\-][^\s]*")


class CommandNode:
    """
    Base class of every entry in the command namespace.

    Attributes
    - name: the token that selects this node among its siblings.
    - descr: one-line description shown in usage listings ("" when missing).
    - parent: the owning composite, or None for a root or detached node.
    """

    def __init__(self, name, /, descr=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__name__} name must be a string")
        elif not _NAME.fullmatch(name):
            raise ValueError(f"{type(self).__name__} name {name!r} is not a valid command name")
        if not isinstance(descr := coalesce(descr, ""), str):
            raise TypeError(f"{type(self).__name__} descr must be a string")
        self._name = name
        self._descr = descr.strip().splitlines()[0] if descr.strip() else ""
        self._parent = None

    @property
    def name(self):
        return self._name

    @property
    def descr(self):
        return self._descr

    @property
    def parent(self):
        """Return the owning composite, or None when detached or when the referent is gone."""
        return self._parent() if self._parent is not None else None

    @property
    def root(self):
        """Return the topmost node reachable through parent links."""
        node = self
        while (parent := node.parent) is not None:
            node = parent
        return node

    @property
    def path(self):
        """
        Return the names from just below the root down to this node.

        The root is never part of a path: ("site", "list") is the route a user
        types to reach the "list" leaf under the "site" namespace.
        """
        names = []
        node = self
        while node is not None and not isinstance(node, RootCommand):
            names.append(node.name)
            node = node.parent
        return tuple(reversed(names))

    @property
    def route(self):
        """Return the program name followed by the path, joined by spaces."""
        root = self.root
        prog = root.name if isinstance(root, RootCommand) else ""
        return " ".join(filter(None, (prog, *self.path)))

    def can_have_subcommands(self):
        return False

    def find_subcommand(self, name, /):
        return None

    def usage(self):
        raise NotImplementedError

    def invoke(self, args, assoc_args, /, context=None):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}({' '.join(self.path) or self.name!r})"


class CompositeCommand(CommandNode):
    """
    A namespace that groups subcommands.

    Composites are never invoked; naming one on the command line shows its usage.
    """

    def __init__(self, name, /, descr=Unset):
        super().__init__(name, descr)
        self._children = {}

    @property
    def children(self):
        return MappingProxyType(self._children)

    def can_have_subcommands(self):
        return True

    def find_subcommand(self, name, /):
        return self._children.get(name)

    def attach(self, child, /):
        """
        Install a child under this composite and point its parent link here.

        Raises
        - TypeError: child is not a CommandNode, or is a root.
        - ValueError: the name is taken by another node, or the child already
          belongs to a different parent.
        """
        if not isinstance(child, CommandNode) or isinstance(child, RootCommand):
            raise TypeError(f"{type(self).__name__} can only attach non-root command nodes")
        if (parent := child.parent) is not None and parent is not self:
            raise ValueError(f"command {child.name!r} is already attached to {parent.name!r}")
        if self._children.setdefault(child.name, child) is not child:
            raise ValueError(f"command name {child.name!r} is already in use under {self.name!r}")
        child._parent = weakref.ref(self)
        return child

    def detach(self, name, /):
        child = self._children.pop(name)
        child._parent = None
        return child

    def usage(self):
        """
        Render the usage synopsis: a usage line, then the subcommand listing.

            usage: helmsman site <command>

            subcommands:
              list     List the sites you can access.
        """
        lines = [f"usage: {self.route} <command>"]
        if self.descr:
            lines += ["", self.descr]
        if self._children:
            width = max(map(len, self._children)) + 2
            lines += ["", "subcommands:"]
            for name in sorted(self._children):
                lines.append(f"  {name.ljust(width)}{self._children[name].descr}".rstrip())
        return "\n".join(lines)

    def invoke(self, args, assoc_args, /, context=None):
        raise TypeError(f"composite command {self.route!r} cannot be invoked")


class RootCommand(CompositeCommand):
    """The composite at the top of the tree; its name is the program name."""

    def __init__(self, name="helmsman", /, descr=Unset):
        super().__init__(name, descr)


class LeafCommand(CommandNode):
    """
    An executable command.

    Parameters
    - callback: callable(args, assoc_args) or, with context=True,
      callable(args, assoc_args, context).
    - synopsis: argument synopsis shown after the route in usage lines.
    - context: when True, the runner context is passed as a third argument.
    """

    def __init__(self, callback, /, name=Unset, descr=Unset, synopsis="", *, context=False):
        if not callable(callback):
            raise TypeError(f"{type(self).__name__} callback must be callable")
        if not isinstance(synopsis, str):
            raise TypeError(f"{type(self).__name__} synopsis must be a string")
        name = coalesce(name, getattr(callback, "__name__", "").replace("_", "-"))
        super().__init__(name, coalesce(descr, inspect.getdoc(callback) or ""))
        self._callback = callback
        self._synopsis = synopsis.strip()
        self._context = bool(context)

    @property
    def synopsis(self):
        return self._synopsis

    def usage(self):
        line = f"usage: {self.route}"
        if self._synopsis:
            line += f" {self._synopsis}"
        return f"{line}\n\n{self.descr}" if self.descr else line

    def invoke(self, args, assoc_args, /, context=None):
        """Call the wrapped callable and return its result unchanged."""
        if self._context:
            return self._callback(args, assoc_args, context)
        return self._callback(args, assoc_args)


def leaf(source=Unset, /, **options):
    """
    Create a LeafCommand or return a decorator that builds one.

    Invocation modes
    - Direct:     leaf(func, name="x")
    - Decorator:  @leaf  or  @leaf(name="x", descr="...", synopsis="...", context=True)
    """
    def wrapper(callback, /):
        return LeafCommand(callback, **options)

    return wrapper(source) if source is not Unset else wrapper


def composite(name, /, descr=Unset, children=()):
    """Create a CompositeCommand and attach the given children to it."""
    node = CompositeCommand(name, descr)
    for child in children:
        node.attach(child)
    return node


__all__ = (
    "CommandNode",
    "CompositeCommand",
    "RootCommand",
    "LeafCommand",
    "leaf",
    "composite",
)
