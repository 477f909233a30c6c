"""
Built-in helmsman commands.

Every module in this package exposes register(tree) and is loaded before any
required module or user plugin (see helmsman.loader.BUILTINS).
"""
