"""Markdown converter using markdownify.

This module converts the HTML export of a Google document to markdown. It
is used when documents are exported as HTML instead of through Drive's
native markdown export.
"""

from bs4 import BeautifulSoup
from markdownify import MarkdownConverter as BaseMarkdownConverter

from ..drive_client.errors import ConversionError

# Elements that carry no document content in Drive's HTML export
_NON_CONTENT_TAGS = ['head', 'style', 'script', 'meta', 'title']


class _CustomMarkdownConverter(BaseMarkdownConverter):
    """Custom markdownify converter with Drive-friendly settings."""

    def __init__(self, **options):
        options.setdefault('heading_style', 'atx')
        options.setdefault('bullets', '-')
        options.setdefault('strong_em_symbol', '*')
        super().__init__(**options)


def _markdownify(html: str, **options) -> str:
    """Convert HTML to markdown using custom converter."""
    return _CustomMarkdownConverter(**options).convert(html)


class MarkdownConverter:
    """Converts Drive HTML exports to markdown."""

    def html_to_markdown(self, html: str) -> str:
        """Convert exported HTML to markdown.

        Strips the export's <head>, inline stylesheets and scripts before
        conversion so only document content remains.

        Args:
            html: HTML string from a Drive export

        Returns:
            Markdown string, stripped, with a single trailing newline

        Raises:
            ConversionError: If the HTML cannot be converted
        """
        if not html or not html.strip():
            return ""

        try:
            soup = BeautifulSoup(html, 'html.parser')
            for tag in soup.find_all(_NON_CONTENT_TAGS):
                # Nested matches are gone once their ancestor is decomposed
                if not tag.decomposed:
                    tag.decompose()
            body = soup.body or soup
            markdown = _markdownify(str(body))
        except Exception as e:
            raise ConversionError(f"HTML to markdown conversion failed: {e}")

        markdown = markdown.strip()
        return f"{markdown}\n" if markdown else ""
