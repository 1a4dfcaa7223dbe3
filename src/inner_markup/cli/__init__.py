"""Command-line interface module for Inner Markup.

This module provides the ``inner-markup`` tool for reading and replacing the
inner markup of elements selected by XPath.
"""

from .main import main

__all__ = ["main"]
