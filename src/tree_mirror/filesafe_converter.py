"""Filesafe name conversion for Drive folder and file names.

Drive names may contain characters that are path separators locally. This
module rewrites only those characters so that every name maps to exactly
one path component; all other characters, including case, are preserved.
"""

import re
from typing import Optional

MARKDOWN_EXTENSION = "md"

# Characters that would split a name into several path components
_SEPARATOR_CHARS = re.compile(r'[/\\\x00]')


class FilesafeConverter:
    """Converts Drive names to single, safe path components.

    Conversion rules:
    - Path separators (/ and \\) and NUL → hyphen (-)
    - Leading/trailing whitespace → trimmed
    - Empty names and the special names "." and ".." → "_"
    - Everything else is left untouched

    Examples:
        - "Docs" → "Docs"
        - "Q1/Q2 Plans" → "Q1-Q2 Plans"
        - ".." → "_"
    """

    @staticmethod
    def to_path_component(name: str) -> str:
        """Convert a Drive name to a single path component.

        Examples:
            >>> FilesafeConverter.to_path_component("Q1/Q2 Plans")
            'Q1-Q2 Plans'
            >>> FilesafeConverter.to_path_component("Meeting Notes")
            'Meeting Notes'
        """
        component = _SEPARATOR_CHARS.sub('-', name).strip()
        if component in ('', '.', '..'):
            return '_'
        return component

    @staticmethod
    def to_markdown_filename(name: str, extension: Optional[str] = None) -> str:
        """Build the `.md` output name for an exported file.

        Names without an extension get ``.md`` appended; an existing
        extension other than ``md`` is replaced; ``.md`` names are kept.

        Examples:
            >>> FilesafeConverter.to_markdown_filename("Plan")
            'Plan.md'
            >>> FilesafeConverter.to_markdown_filename("report.docx", "docx")
            'report.md'
            >>> FilesafeConverter.to_markdown_filename("README.md", "md")
            'README.md'
        """
        filename = FilesafeConverter.to_path_component(name)

        if extension:
            if extension.lower() == MARKDOWN_EXTENSION:
                return filename
            suffix = f".{extension}"
            if filename.lower().endswith(suffix.lower()) and len(filename) > len(suffix):
                filename = filename[:-len(suffix)]

        return f"{filename}.{MARKDOWN_EXTENSION}"
