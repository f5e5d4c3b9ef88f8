"""Fixed-width crypto price tables for the console."""

__version__ = "0.3.0"
