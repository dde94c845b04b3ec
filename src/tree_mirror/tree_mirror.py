"""Mirror run orchestration.

TreeMirror wires the walker, path resolver, export dispatcher and
materializer into a single run: discover the remote tree, compute local
directory paths, create directories, export files and write them.
"""

import logging
import os
from dataclasses import replace
from typing import Optional

from src.drive_client.api_wrapper import DriveAPIWrapper

from .config_loader import ConfigLoader
from .export_dispatcher import ExportDispatcher
from .materializer import Materializer
from .models import MirrorConfig, MirrorResult, PathMap
from .path_resolver import PathResolver
from .tree_walker import TreeWalker

logger = logging.getLogger(__name__)


class TreeMirror:
    """Mirrors one Drive folder hierarchy into a local directory.

    Example:
        >>> async with DriveAPIWrapper(Authenticator()) as api:
        ...     result = await TreeMirror(api).run(config)
        >>> result.files_written
        12
    """

    def __init__(
        self,
        api: DriveAPIWrapper,
        resolver: Optional[PathResolver] = None
    ):
        """Initialize the mirror.

        Args:
            api: DriveAPIWrapper used for listings and exports
            resolver: PathResolver (created if omitted)
        """
        self._api = api
        self._walker = TreeWalker(api)
        self._resolver = resolver or PathResolver()

    async def run(self, config: MirrorConfig) -> MirrorResult:
        """Execute one mirror run.

        Steps:
        1. Validate configuration (before any remote call)
        2. Walk the remote tree
        3. Resolve a local path for every discovered folder
        4. Create missing directories (root included) and wait for them
        5. Export every discovered file with bounded concurrency
        6. Write every export and wait for all writes

        Args:
            config: Run configuration

        Returns:
            MirrorResult summarizing the run

        Raises:
            ConfigError: If the configuration is invalid
            DriveError: If the root folder cannot be listed or credentials
                        are rejected
            PathResolutionError: If a folder parent chain contains a cycle
            FilesystemError: If a directory or file cannot be written
        """
        ConfigLoader.validate(config)
        output_root = os.path.abspath(config.output_path)

        logger.info(
            f"Mirroring Drive folder {config.root_folder_id} into {output_root} "
            f"(recursive={config.recursive}, query={config.query!r})"
        )

        snapshot = await self._walker.collect(
            config.root_folder_id,
            query=config.query,
            recursive=config.recursive
        )

        path_map: PathMap
        if config.recursive:
            path_map = self._resolver.resolve_paths(
                snapshot.containers.values(),
                output_root,
                config.root_folder_id
            )
        else:
            path_map = {config.root_folder_id: output_root}

        result = MirrorResult(
            containers_found=len(snapshot.containers),
            files_found=len(snapshot.files),
            unresolved_container_ids=[
                container_id for container_id, path in path_map.items() if path is None
            ],
        )

        materializer = Materializer(output_root)
        result.directories_created = await materializer.ensure_directories(
            [output_root, *path_map.values()]
        )

        dispatcher = ExportDispatcher(self._api, document_format=config.document_format)
        items = await dispatcher.export_all(snapshot.files, config.max_concurrency)
        if not config.recursive:
            # Every file of a non-recursive walk was listed under the root
            items = [
                replace(item, parent_container_id=config.root_folder_id) for item in items
            ]

        for outcome in await materializer.write_all(items, path_map):
            result.record(outcome)

        logger.info(
            f"Mirror complete: {result.files_written} written, "
            f"{result.skipped_empty} empty, {result.skipped_unresolved} unresolved, "
            f"{result.skipped_duplicate} duplicate"
        )
        return result
