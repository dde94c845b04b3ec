"""Unit tests for tree_mirror.filesafe_converter module."""

import pytest
from src.tree_mirror.filesafe_converter import FilesafeConverter


class TestToPathComponent:
    """Test cases for to_path_component."""

    @pytest.mark.parametrize('name,expected', [
        ('Docs', 'Docs'),
        ('Meeting Notes', 'Meeting Notes'),
        ('Q1/Q2 Plans', 'Q1-Q2 Plans'),
        ('a\\b', 'a-b'),
        ('  padded  ', 'padded'),
        ('v1.2 (draft)', 'v1.2 (draft)'),
        ('Ünïcödé', 'Ünïcödé'),
    ])
    def test_conversion(self, name, expected):
        assert FilesafeConverter.to_path_component(name) == expected

    @pytest.mark.parametrize('name', ['', '   ', '.', '..'])
    def test_unusable_names_become_underscore(self, name):
        assert FilesafeConverter.to_path_component(name) == '_'

    def test_nul_is_replaced(self):
        assert FilesafeConverter.to_path_component('a\x00b') == 'a-b'


class TestToMarkdownFilename:
    """Test cases for to_markdown_filename."""

    @pytest.mark.parametrize('name,extension,expected', [
        ('Plan', None, 'Plan.md'),
        ('v1.2 Notes', None, 'v1.2 Notes.md'),
        ('report.docx', 'docx', 'report.md'),
        ('REPORT.DOCX', 'docx', 'REPORT.md'),
        ('README.md', 'md', 'README.md'),
        ('notes', 'txt', 'notes.md'),
        ('.txt', 'txt', '.txt.md'),
        ('a/b', None, 'a-b.md'),
    ])
    def test_conversion(self, name, extension, expected):
        assert FilesafeConverter.to_markdown_filename(name, extension) == expected
