"""Materializer writing the mirrored tree to the local filesystem.

Directory creation and file writes run in worker threads via
asyncio.to_thread. Filesystem failures propagate as FilesystemError.
"""

import asyncio
import logging
import os
import tempfile
from typing import Iterable, List, Optional, Set

from .errors import FilesystemError
from .models import ExportedItem, PathMap, WriteOutcome

logger = logging.getLogger(__name__)


class Materializer:
    """Creates directories and writes exported items under an output root.

    Example:
        >>> materializer = Materializer("/out")
        >>> await materializer.ensure_directories(path_map.values())
        >>> outcomes = await materializer.write_all(items, path_map)
    """

    def __init__(self, output_root: str):
        """Initialize the materializer.

        Args:
            output_root: Directory every written file must stay inside
        """
        self._output_root = output_root

    async def ensure_directories(self, paths: Iterable[Optional[str]]) -> int:
        """Create every directory in ``paths`` that does not exist yet.

        Parents are created as needed, so the order of ``paths`` does not
        matter. Existing directories are left untouched. None entries
        (unresolved folders) are ignored.

        Returns:
            Number of directories that were created

        Raises:
            FilesystemError: If a directory cannot be created
        """
        unique_paths = sorted({path for path in paths if path})
        created = 0
        for path in unique_paths:
            if await self._ensure_directory(path):
                created += 1

        logger.info(f"Ensured {len(unique_paths)} directories ({created} created)")
        return created

    async def _ensure_directory(self, path: str) -> bool:
        if await asyncio.to_thread(os.path.isdir, path):
            return False

        logger.debug(f"Creating directory {path}")
        try:
            await asyncio.to_thread(os.makedirs, path, exist_ok=True)
        except OSError as e:
            raise FilesystemError(path, 'create_directory', str(e))
        return True

    def target_path(self, item: ExportedItem, path_map: PathMap) -> Optional[str]:
        """Absolute output path for an item, or None if its folder is unresolved."""
        directory = path_map.get(item.parent_container_id) if item.parent_container_id else None
        if directory is None:
            return None
        return os.path.join(directory, item.filename)

    async def write_item(self, item: ExportedItem, path_map: PathMap) -> WriteOutcome:
        """Write one exported item.

        The file is replaced as a whole: content goes to a temporary file in
        the target directory which is then renamed over the target, so an
        interrupted write never leaves a truncated file behind.

        Returns:
            WriteOutcome describing whether the item was written or why not

        Raises:
            FilesystemError: If the file cannot be written
        """
        file_path = self.target_path(item, path_map)
        if file_path is None:
            logger.warning(
                f"Skipped '{item.node.name}' ({item.node.node_id}): folder "
                f"{item.parent_container_id} has no resolved path"
            )
            return WriteOutcome.SKIPPED_UNRESOLVED

        if item.payload == "":
            logger.info(f"Skipped empty file {file_path}")
            return WriteOutcome.SKIPPED_EMPTY

        self._validate_path_safety(file_path)
        await asyncio.to_thread(self._write_atomic, file_path, item.payload)
        logger.info(f"Wrote {file_path}")
        return WriteOutcome.WRITTEN

    async def write_all(
        self,
        items: Iterable[ExportedItem],
        path_map: PathMap
    ) -> List[WriteOutcome]:
        """Write all items and wait for every write to finish.

        Target paths are claimed in item order before any write starts; an
        item whose target was already claimed by an earlier item is skipped
        with a warning instead of overwriting it.

        Returns:
            One WriteOutcome per item, in input order

        Raises:
            FilesystemError: If any write fails (raised after all writes settle)
        """
        claimed: Set[str] = set()
        outcomes: List[Optional[WriteOutcome]] = []
        pending = []

        for item in items:
            file_path = self.target_path(item, path_map)
            if file_path is not None and item.payload != "":
                if file_path in claimed:
                    logger.warning(
                        f"Skipped '{item.node.name}' ({item.node.node_id}): "
                        f"{file_path} is already written by another file in this run"
                    )
                    outcomes.append(WriteOutcome.SKIPPED_DUPLICATE)
                    continue
                claimed.add(file_path)

            pending.append((len(outcomes), self.write_item(item, path_map)))
            outcomes.append(None)

        results = await asyncio.gather(
            *(write for _, write in pending),
            return_exceptions=True
        )

        for (index, _), result in zip(pending, results):
            if isinstance(result, BaseException):
                raise result
            outcomes[index] = result

        return outcomes  # type: ignore[return-value]

    def _validate_path_safety(self, file_path: str) -> None:
        """Ensure a file path resolves inside the output root.

        Raises:
            FilesystemError: If the path escapes the output root
        """
        real_base = os.path.realpath(self._output_root)
        real_path = os.path.realpath(file_path)

        if not real_path.startswith(real_base + os.sep) and real_path != real_base:
            raise FilesystemError(
                file_path,
                'validate',
                f'Path traversal detected: {file_path} is outside output root {self._output_root}'
            )

    @staticmethod
    def _write_atomic(file_path: str, content: str) -> None:
        directory = os.path.dirname(file_path)
        temp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                'w',
                encoding='utf-8',
                dir=directory,
                prefix='.drive-mirror-',
                suffix='.tmp',
                delete=False
            ) as f:
                temp_path = f.name
                f.write(content)
            os.replace(temp_path, file_path)
        except OSError as e:
            if temp_path and os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError as cleanup_error:
                    logger.warning(f"Failed to remove temp file {temp_path}: {cleanup_error}")
            raise FilesystemError(file_path, 'write', str(e))
