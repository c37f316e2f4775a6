"""pkg2html - publish a package's function reference as a tree of HTML pages."""

__version__ = "0.1.0"

__all__ = ["__version__"]
