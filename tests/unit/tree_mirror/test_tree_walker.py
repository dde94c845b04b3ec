"""Unit tests for tree_mirror.tree_walker module."""

import asyncio
import logging

import pytest
from unittest.mock import AsyncMock, Mock

from src.drive_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    PermissionDeniedError,
)
from src.models.drive_node import DriveNode, ListingPage, NodeType
from src.tree_mirror.tree_walker import TreeWalker


def folder(node_id, parent):
    return DriveNode(node_id, node_id.title(), NodeType.CONTAINER, parent_ids=(parent,))


def doc(node_id, parent):
    return DriveNode(node_id, node_id.title(), NodeType.DOCUMENT, parent_ids=(parent,))


def create_mock_api(tree, failures=None):
    """Mock DriveAPIWrapper whose list_children serves ``tree``.

    Args:
        tree: Dict mapping folder ID to its list of child nodes
        failures: Dict mapping folder ID to the exception its listing raises
    """
    failures = failures or {}
    api = Mock()

    async def list_children(folder_id, query=None):
        if folder_id in failures:
            raise failures[folder_id]
        return ListingPage(nodes=list(tree.get(folder_id, [])))

    api.list_children = AsyncMock(side_effect=list_children)
    return api


def walk_ids(walker, root_id='root', query=None, recursive=True):
    async def _collect():
        return [node.node_id async for node in walker.walk(root_id, query, recursive)]
    return asyncio.run(_collect())


class TestDescentQuery:
    """Test cases for the widened listing query."""

    def test_no_query_returns_none(self):
        assert TreeWalker.descent_query(None) is None
        assert TreeWalker.descent_query('') is None

    def test_query_is_widened_with_folder_clause(self):
        query = "mimeType = 'application/vnd.google-apps.document'"
        assert TreeWalker.descent_query(query) == (
            "(mimeType = 'application/vnd.google-apps.document') "
            "or mimeType = 'application/vnd.google-apps.folder'"
        )


class TestWalk:
    """Test cases for walk."""

    def test_depth_first_pre_order(self):
        """Children of a folder are yielded before its sub-folders are expanded."""
        tree = {
            'root': [folder('a', 'root'), doc('d1', 'root'), folder('b', 'root')],
            'a': [doc('d2', 'a'), folder('c', 'a')],
            'c': [doc('d3', 'c')],
            'b': [doc('d4', 'b')],
        }

        ids = walk_ids(TreeWalker(create_mock_api(tree)))

        assert ids == ['a', 'd1', 'b', 'd2', 'c', 'd3', 'd4']

    def test_every_node_yielded_once(self):
        tree = {
            'root': [folder('a', 'root')],
            'a': [folder('b', 'a')],
            'b': [doc('d', 'b')],
        }

        ids = walk_ids(TreeWalker(create_mock_api(tree)))

        assert sorted(ids) == ['a', 'b', 'd']

    def test_root_is_not_yielded(self):
        ids = walk_ids(TreeWalker(create_mock_api({'root': []})))
        assert ids == []

    def test_query_is_widened_for_every_listing(self):
        tree = {'root': [folder('a', 'root')], 'a': []}
        api = create_mock_api(tree)
        query = "mimeType = 'x'"

        walk_ids(TreeWalker(api), query=query)

        expected = TreeWalker.descent_query(query)
        assert [c.args[1] for c in api.list_children.await_args_list] == [expected, expected]

    def test_non_recursive_lists_root_only_and_yields_files(self):
        tree = {
            'root': [folder('a', 'root'), doc('d1', 'root')],
            'a': [doc('d2', 'a')],
        }
        api = create_mock_api(tree)

        ids = walk_ids(TreeWalker(api), query="mimeType = 'x'", recursive=False)

        assert ids == ['d1']
        api.list_children.assert_awaited_once_with('root', "mimeType = 'x'")

    def test_folder_reached_twice_is_expanded_once(self, caplog):
        """A folder listed under two parents is listed only once."""
        shared = folder('shared', 'a')
        tree = {
            'root': [folder('a', 'root'), folder('b', 'root')],
            'a': [shared],
            'b': [shared],
            'shared': [doc('d', 'shared')],
        }
        api = create_mock_api(tree)

        with caplog.at_level(logging.WARNING, logger='src.tree_mirror.tree_walker'):
            ids = walk_ids(TreeWalker(api))

        listed = [c.args[0] for c in api.list_children.await_args_list]
        assert listed.count('shared') == 1
        assert ids.count('d') == 1
        assert "reached twice" in caplog.text


class TestWalkFailures:
    """Test cases for listing failures during a walk."""

    def test_unreadable_branch_is_skipped(self, caplog):
        tree = {
            'root': [folder('a', 'root'), folder('b', 'root')],
            'b': [doc('d', 'b')],
        }
        api = create_mock_api(tree, failures={'a': PermissionDeniedError('a')})

        with caplog.at_level(logging.WARNING, logger='src.tree_mirror.tree_walker'):
            ids = walk_ids(TreeWalker(api))

        assert ids == ['a', 'b', 'd']
        assert "Skipping unreadable folder a" in caplog.text

    def test_malformed_listing_branch_is_skipped(self, caplog):
        tree = {
            'root': [folder('a', 'root'), folder('b', 'root')],
            'b': [doc('d', 'b')],
        }
        api = create_mock_api(tree, failures={'a': APIAccessError('malformed listing')})

        with caplog.at_level(logging.WARNING, logger='src.tree_mirror.tree_walker'):
            ids = walk_ids(TreeWalker(api))

        assert ids == ['a', 'b', 'd']
        assert "Skipping unreadable folder a" in caplog.text

    def test_root_failure_propagates(self):
        api = create_mock_api({}, failures={'root': APIUnreachableError('https://drive.test')})

        with pytest.raises(APIUnreachableError):
            walk_ids(TreeWalker(api))

    def test_invalid_credentials_propagate_from_any_folder(self):
        tree = {'root': [folder('a', 'root')]}
        api = create_mock_api(tree, failures={'a': InvalidCredentialsError('https://drive.test')})

        with pytest.raises(InvalidCredentialsError):
            walk_ids(TreeWalker(api))

    def test_has_more_logs_warning(self, caplog):
        api = Mock()
        api.list_children = AsyncMock(return_value=ListingPage(nodes=[doc('d', 'root')], has_more=True))

        with caplog.at_level(logging.WARNING, logger='src.tree_mirror.tree_walker'):
            ids = walk_ids(TreeWalker(api))

        assert ids == ['d']
        assert "more children than fit in one listing page" in caplog.text


class TestCollect:
    """Test cases for collect."""

    def test_splits_containers_and_files(self):
        tree = {
            'root': [folder('a', 'root'), doc('d1', 'root')],
            'a': [doc('d2', 'a')],
        }

        snapshot = asyncio.run(TreeWalker(create_mock_api(tree)).collect('root'))

        assert list(snapshot.containers) == ['a']
        assert [node.node_id for node in snapshot.files] == ['d1', 'd2']
