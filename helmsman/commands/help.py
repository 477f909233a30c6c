"""
help: show the usage of the program or of any command.

    helmsman help             → root usage (also what a bare "helmsman" shows)
    helmsman help site        → usage of the "site" namespace
    helmsman help site list   → usage line of the "site list" command
"""
from ..nodes import leaf
from ..resolver import find_command_to_run


def show_help(args, assoc_args, context):
    """Show the usage of the program or of a command."""
    command, _, _ = find_command_to_run(context.tree.root, args)
    return command.usage()


def register(tree):
    tree.register(("help",), leaf(show_help, name="help", synopsis="[<command>...]", context=True))
