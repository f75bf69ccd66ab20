"""A small file-backed table store that runs SQL statement objects, with models of statements and expressions and outline printers."""

__version__ = "0.1.0"

__all__ = ["util", "expr", "statements", "sqlhelper", "engine"]