"""Unit tests for tree_mirror.materializer module."""

import asyncio
import logging
import os

import pytest
from unittest.mock import patch

from src.models.drive_node import DriveNode, NodeType
from src.tree_mirror.errors import FilesystemError
from src.tree_mirror.materializer import Materializer
from src.tree_mirror.models import ExportedItem, ExportStrategy, WriteOutcome


def exported(filename, payload, parent='root', node_id=None):
    node = DriveNode(node_id or filename, filename, NodeType.DOCUMENT, parent_ids=(parent,))
    return ExportedItem(
        node=node,
        payload=payload,
        parent_container_id=parent,
        strategy=ExportStrategy.EDITABLE_DOCUMENT,
        filename=filename,
    )


class TestEnsureDirectories:
    """Test cases for ensure_directories."""

    def test_creates_nested_directories(self, tmp_path):
        root = str(tmp_path / 'out')
        paths = [os.path.join(root, 'a', 'b', 'c'), os.path.join(root, 'x')]

        created = asyncio.run(Materializer(root).ensure_directories(paths))

        assert created == 2
        assert os.path.isdir(os.path.join(root, 'a', 'b', 'c'))
        assert os.path.isdir(os.path.join(root, 'x'))

    def test_existing_directories_are_untouched(self, tmp_path):
        existing = tmp_path / 'out' / 'keep'
        existing.mkdir(parents=True)
        (existing / 'local.txt').write_text('mine')

        created = asyncio.run(Materializer(str(tmp_path / 'out')).ensure_directories([str(existing)]))

        assert created == 0
        assert (existing / 'local.txt').read_text() == 'mine'

    def test_none_entries_are_ignored(self, tmp_path):
        created = asyncio.run(Materializer(str(tmp_path)).ensure_directories([None, None]))
        assert created == 0

    def test_duplicates_counted_once(self, tmp_path):
        path = str(tmp_path / 'dup')
        created = asyncio.run(Materializer(str(tmp_path)).ensure_directories([path, path]))
        assert created == 1

    def test_failure_raises_filesystem_error(self, tmp_path):
        blocker = tmp_path / 'file'
        blocker.write_text('not a directory')

        with pytest.raises(FilesystemError) as exc_info:
            asyncio.run(Materializer(str(tmp_path)).ensure_directories([str(blocker / 'sub')]))

        assert exc_info.value.operation == 'create_directory'


class TestWriteItem:
    """Test cases for write_item."""

    def test_writes_payload(self, tmp_path):
        path_map = {'root': str(tmp_path)}

        outcome = asyncio.run(Materializer(str(tmp_path)).write_item(exported('Plan.md', '# Plan\n'), path_map))

        assert outcome is WriteOutcome.WRITTEN
        assert (tmp_path / 'Plan.md').read_text(encoding='utf-8') == '# Plan\n'

    def test_overwrites_existing_file(self, tmp_path):
        (tmp_path / 'Plan.md').write_text('old')
        path_map = {'root': str(tmp_path)}

        asyncio.run(Materializer(str(tmp_path)).write_item(exported('Plan.md', 'new'), path_map))

        assert (tmp_path / 'Plan.md').read_text() == 'new'

    def test_no_temp_files_left_behind(self, tmp_path):
        path_map = {'root': str(tmp_path)}

        asyncio.run(Materializer(str(tmp_path)).write_item(exported('Plan.md', 'x'), path_map))

        assert sorted(os.listdir(tmp_path)) == ['Plan.md']

    def test_empty_payload_is_skipped(self, tmp_path, caplog):
        path_map = {'root': str(tmp_path)}

        with caplog.at_level(logging.INFO, logger='src.tree_mirror.materializer'):
            outcome = asyncio.run(Materializer(str(tmp_path)).write_item(exported('Plan.md', ''), path_map))

        assert outcome is WriteOutcome.SKIPPED_EMPTY
        assert not (tmp_path / 'Plan.md').exists()
        assert "Skipped empty file" in caplog.text

    def test_empty_payload_keeps_existing_file(self, tmp_path):
        (tmp_path / 'Plan.md').write_text('previous run')
        path_map = {'root': str(tmp_path)}

        asyncio.run(Materializer(str(tmp_path)).write_item(exported('Plan.md', ''), path_map))

        assert (tmp_path / 'Plan.md').read_text() == 'previous run'

    @pytest.mark.parametrize('path_map', [{'root': None}, {}])
    def test_unresolved_parent_is_skipped(self, tmp_path, path_map):
        outcome = asyncio.run(Materializer(str(tmp_path)).write_item(exported('Plan.md', 'x'), path_map))

        assert outcome is WriteOutcome.SKIPPED_UNRESOLVED
        assert os.listdir(tmp_path) == []

    def test_path_outside_root_is_rejected(self, tmp_path):
        root = tmp_path / 'out'
        root.mkdir()
        path_map = {'root': str(tmp_path)}

        with pytest.raises(FilesystemError) as exc_info:
            asyncio.run(Materializer(str(root)).write_item(exported('Plan.md', 'x'), path_map))

        assert 'Path traversal' in str(exc_info.value)

    def test_write_failure_raises_filesystem_error(self, tmp_path):
        path_map = {'root': str(tmp_path)}

        with patch('src.tree_mirror.materializer.os.replace', side_effect=OSError("disk full")):
            with pytest.raises(FilesystemError) as exc_info:
                asyncio.run(Materializer(str(tmp_path)).write_item(exported('Plan.md', 'x'), path_map))

        assert exc_info.value.operation == 'write'
        assert os.listdir(tmp_path) == []


class TestWriteAll:
    """Test cases for write_all."""

    def test_writes_every_item_in_order(self, tmp_path):
        sub = tmp_path / 'Docs'
        sub.mkdir()
        path_map = {'root': str(tmp_path), 'docs': str(sub)}
        items = [
            exported('A.md', 'a'),
            exported('B.md', 'b', parent='docs'),
            exported('C.md', ''),
        ]

        outcomes = asyncio.run(Materializer(str(tmp_path)).write_all(items, path_map))

        assert outcomes == [WriteOutcome.WRITTEN, WriteOutcome.WRITTEN, WriteOutcome.SKIPPED_EMPTY]
        assert (tmp_path / 'A.md').read_text() == 'a'
        assert (sub / 'B.md').read_text() == 'b'

    def test_first_claim_wins_for_duplicate_targets(self, tmp_path, caplog):
        path_map = {'root': str(tmp_path)}
        items = [
            exported('Plan.md', 'newest', node_id='n1'),
            exported('Plan.md', 'older', node_id='n2'),
        ]

        with caplog.at_level(logging.WARNING, logger='src.tree_mirror.materializer'):
            outcomes = asyncio.run(Materializer(str(tmp_path)).write_all(items, path_map))

        assert outcomes == [WriteOutcome.WRITTEN, WriteOutcome.SKIPPED_DUPLICATE]
        assert (tmp_path / 'Plan.md').read_text() == 'newest'
        assert "already written by another file" in caplog.text

    def test_empty_item_does_not_claim_target(self, tmp_path):
        """An empty earlier item does not block a later item with content."""
        path_map = {'root': str(tmp_path)}
        items = [
            exported('Plan.md', '', node_id='n1'),
            exported('Plan.md', 'content', node_id='n2'),
        ]

        outcomes = asyncio.run(Materializer(str(tmp_path)).write_all(items, path_map))

        assert outcomes == [WriteOutcome.SKIPPED_EMPTY, WriteOutcome.WRITTEN]
        assert (tmp_path / 'Plan.md').read_text() == 'content'

    def test_failure_propagates_after_other_writes(self, tmp_path):
        path_map = {'root': str(tmp_path), 'gone': str(tmp_path / 'missing-dir')}
        items = [
            exported('Bad.md', 'x', parent='gone'),
            exported('Good.md', 'y'),
        ]

        with pytest.raises(FilesystemError):
            asyncio.run(Materializer(str(tmp_path)).write_all(items, path_map))

        assert (tmp_path / 'Good.md').read_text() == 'y'
