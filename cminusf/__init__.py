"""C-minus-f front end: parse trees, AST building and printing, logging and runtime I/O."""

__version__ = "0.1.0"

__all__ = [
    "ast_nodes",
    "expressions",
    "logs",
    "printer",
    "runtime_io",
    "syntax_tree",
    "transform",
]