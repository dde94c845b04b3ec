"""Content conversion module for HTML → markdown conversion.

This module provides the MarkdownConverter used when Google documents are
exported as HTML and converted locally with markdownify.
"""

from .markdown_converter import MarkdownConverter

__all__ = ['MarkdownConverter']
