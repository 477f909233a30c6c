"""
cli: commands about helmsman itself.
"""
from .. import __version__
from ..nodes import composite, leaf


def show_version(args, assoc_args):
    """Print the helmsman version."""
    return "helmsman %s" % __version__


def show_info(args, assoc_args, context):
    """Print the merged configuration of this run."""
    context.outputter.output(context.config, human_label="Configuration")


def register(tree):
    tree.register(("cli",), composite("cli", "Inspect helmsman itself.", (
        leaf(show_version, name="version"),
        leaf(show_info, name="info", context=True),
    )))
