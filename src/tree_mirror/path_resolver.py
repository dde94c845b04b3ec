"""Path resolver for building local directory paths from parent pointers.

Every Drive folder knows only its parent IDs. This module indexes all
discovered folders by ID and walks each folder's primary-parent chain up to
the mirrored root, memoizing every resolved ancestor so shared prefixes are
walked once.
"""

import logging
import os
from typing import Dict, Iterable, List, Optional

from src.models.drive_node import DriveNode

from .errors import PathResolutionError
from .filesafe_converter import FilesafeConverter
from .models import PathMap

logger = logging.getLogger(__name__)


class PathResolver:
    """Resolves a local directory path for every discovered folder.

    Resolution rules:
    - The root folder maps to the configured root path.
    - Any other folder maps to its primary parent's path joined with the
      folder's own (filesafe) name.
    - Only the first parent counts; multi-parented folders get one path.
    - A folder with no parents, or whose parent was never discovered,
      maps to None, and so does every folder below it.
    - A parent chain that loops back on itself raises PathResolutionError.

    Example:
        >>> resolver = PathResolver()
        >>> paths = resolver.resolve_paths(snapshot.containers.values(), "/out", "root")
        >>> paths["docs-folder-id"]
        '/out/Docs'
    """

    def resolve_paths(
        self,
        containers: Iterable[DriveNode],
        root_path: str,
        root_id: str
    ) -> PathMap:
        """Compute the path map for a set of folders.

        Args:
            containers: Discovered folders (the root itself may be included)
            root_path: Local directory corresponding to the root folder
            root_id: Drive ID of the root folder

        Returns:
            Dict mapping every folder ID (and root_id) to its path, or None
            for folders whose chain does not reach the root

        Raises:
            PathResolutionError: If a parent chain contains a cycle
        """
        arena: Dict[str, DriveNode] = {
            node.node_id: node for node in containers if node.node_id != root_id
        }
        resolved: PathMap = {root_id: root_path}

        for container_id in arena:
            if container_id not in resolved:
                self._resolve_chain(container_id, arena, resolved)

        unresolved = [cid for cid, path in resolved.items() if path is None]
        logger.info(
            f"Resolved paths for {len(resolved) - len(unresolved)} folder(s), "
            f"{len(unresolved)} unresolved"
        )
        return resolved

    def _resolve_chain(
        self,
        container_id: str,
        arena: Dict[str, DriveNode],
        resolved: PathMap
    ) -> None:
        """Resolve one folder and every unresolved folder on its chain."""
        chain: List[DriveNode] = []
        on_chain = set()
        current: Optional[str] = container_id
        base_path: Optional[str] = None

        while True:
            if current in resolved:
                base_path = resolved[current]
                break

            if current in on_chain:
                raise PathResolutionError(
                    container_id,
                    [node.node_id for node in chain] + [current]
                )

            node = arena.get(current)
            if node is None:
                logger.warning(
                    f"Folder '{chain[-1].name}' ({chain[-1].node_id}) has parent {current} "
                    f"outside the mirrored tree - its subtree will be skipped"
                )
                break

            on_chain.add(current)
            chain.append(node)

            current = node.primary_parent_id
            if current is None:
                logger.warning(
                    f"Folder '{node.name}' ({node.node_id}) has no parent - "
                    f"its subtree will be skipped"
                )
                break

        if base_path is None:
            for node in chain:
                resolved[node.node_id] = None
            return

        path = base_path
        for node in reversed(chain):
            path = os.path.join(path, FilesafeConverter.to_path_component(node.name))
            resolved[node.node_id] = path
            logger.debug(f"Resolved folder {node.node_id} ('{node.name}') to {path}")
