"""
Convert Markdown to Confluence wiki markup or storage format.

Parses Markdown text, builds a document tree of block and inline nodes, and renders the tree either as Confluence wiki
markup or as Confluence Storage Format (XHTML), ready to be pasted into the Confluence editor.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]

__author__ = "Levente Hunyadi"
__copyright__ = "Copyright 2022-2026, Levente Hunyadi"
__license__ = "MIT"
__maintainer__ = "Levente Hunyadi"
__status__ = "Production"
