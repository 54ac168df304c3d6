"""Folio content collection manager.

This package models a blog's markdown files as typed content documents and
keeps them in a store that enforces unique slugs and lists documents newest
first. Rendering is left to an external static-site generator; Folio only
owns the front matter and the collection.

The main entry point is the CLI module, which provides commands for listing,
creating, publishing and removing documents.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
