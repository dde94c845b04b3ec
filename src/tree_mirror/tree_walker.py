"""Tree walker for discovering Google Drive folder hierarchies.

This module walks a Drive folder hierarchy depth-first and yields every
discovered node as soon as its parent's listing arrives. The walk keeps an
explicit stack of folders pending expansion instead of recursing, so tree
depth is bounded only by memory.
"""

import logging
from typing import AsyncIterator, List, Optional

from src.drive_client.api_wrapper import DriveAPIWrapper
from src.drive_client.errors import DriveError, InvalidCredentialsError
from src.models.drive_node import FOLDER_MIME_TYPE, DriveNode, ListingPage

from .models import TreeSnapshot

logger = logging.getLogger(__name__)


class TreeWalker:
    """Walks a Drive folder hierarchy using folder listings.

    The caller's query is pushed down to Drive, but is widened so that
    folders are always returned: a query targeting documents must still
    let the walk descend through every sub-folder.

    A folder whose listing fails (permission denied, deleted mid-run,
    network error) is a dead branch: the failure is logged and the walk
    continues with the remaining folders. Only a failure to list the root
    folder aborts the walk.

    Example:
        >>> walker = TreeWalker(api)
        >>> async for node in walker.walk("1AbC", recursive=True):
        ...     print(node.name)
    """

    def __init__(self, api: DriveAPIWrapper):
        """Initialize the walker.

        Args:
            api: DriveAPIWrapper used for folder listings
        """
        self._api = api

    @staticmethod
    def descent_query(query: Optional[str]) -> Optional[str]:
        """Widen a file query so folders always match.

        Returns None when there is no query (everything matches already).
        """
        if not query:
            return None
        return f"({query}) or mimeType = '{FOLDER_MIME_TYPE}'"

    async def walk(
        self,
        root_id: str,
        query: Optional[str] = None,
        recursive: bool = True
    ) -> AsyncIterator[DriveNode]:
        """Yield nodes below root_id in level-then-descend pre-order.

        Every child of an expanded folder is yielded before any of that
        folder's sub-folders is expanded; the first listed sub-folder is expanded
        next. Sibling order follows the listing (modification time,
        newest first).

        Args:
            root_id: Drive folder ID the walk starts from (not yielded)
            query: Optional Drive query restricting which files are yielded
            recursive: When False only the root is listed and only its files
                       are yielded

        Yields:
            DriveNode for every discovered folder and matching file

        Raises:
            DriveError: If the root folder itself cannot be listed
        """
        if not recursive:
            page = await self._list_folder(root_id, query, is_root=True)
            for node in page.nodes:
                if not node.is_container:
                    yield node
            return

        listing_query = self.descent_query(query)
        pending: List[str] = [root_id]
        expanded = set()

        while pending:
            folder_id = pending.pop()
            if folder_id in expanded:
                logger.warning(f"Folder {folder_id} reached twice during walk - not expanding again")
                continue
            expanded.add(folder_id)

            page = await self._list_folder(
                folder_id,
                listing_query,
                is_root=folder_id == root_id
            )

            child_folder_ids = []
            for node in page.nodes:
                yield node
                if node.is_container:
                    child_folder_ids.append(node.node_id)

            # Reversed so the first listed sub-folder is popped first
            pending.extend(reversed(child_folder_ids))

    async def collect(
        self,
        root_id: str,
        query: Optional[str] = None,
        recursive: bool = True
    ) -> TreeSnapshot:
        """Drain a walk into a TreeSnapshot."""
        snapshot = TreeSnapshot()
        async for node in self.walk(root_id, query, recursive):
            snapshot.add(node)

        logger.info(
            f"Discovered {len(snapshot.containers)} folder(s) and "
            f"{len(snapshot.files)} file(s) under {root_id}"
        )
        return snapshot

    async def _list_folder(
        self,
        folder_id: str,
        query: Optional[str],
        is_root: bool
    ) -> ListingPage:
        """List a folder, turning non-root failures into an empty listing.

        Raises:
            DriveError: If the root folder cannot be listed
            InvalidCredentialsError: Always propagated, for any folder
        """
        logger.debug(f"Listing children of folder {folder_id}")
        try:
            page = await self._api.list_children(folder_id, query)
        except InvalidCredentialsError:
            raise
        except DriveError as e:
            if is_root:
                logger.error(f"Failed to list root folder {folder_id}: {e}")
                raise
            logger.warning(f"Skipping unreadable folder {folder_id}: {e}")
            return ListingPage()

        if page.has_more:
            logger.warning(
                f"Folder {folder_id} has more children than fit in one listing page; "
                f"only the first {len(page.nodes)} are mirrored"
            )

        logger.debug(f"Found {len(page.nodes)} children in folder {folder_id}")
        return page
