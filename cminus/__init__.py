"""Symbol tables, an AST and a three-address code generator for a small C subset."""

__version__ = "0.1.0"
__all__ = ["nodes", "scoped", "symbols", "tac"]