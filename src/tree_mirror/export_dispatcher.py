"""Export dispatcher turning Drive files into text payloads.

Each file node is resolved once to an ExportStrategy and handed to that
strategy's handler. Handlers never let an exception escape: a failed export
degrades to an empty payload so that one bad file cannot abort the run.
"""

import asyncio
import json
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from src.content_converter.markdown_converter import MarkdownConverter
from src.drive_client.api_wrapper import MARKDOWN_MIME_TYPE, DriveAPIWrapper
from src.models.drive_node import DriveNode, NodeType

from .filesafe_converter import FilesafeConverter
from .models import DocumentFormat, ExportedItem, ExportStrategy

logger = logging.getLogger(__name__)

HTML_MIME_TYPE = "text/html"

JSON_EXTENSION = "json"


class ExportDispatcher:
    """Exports file nodes according to their type tag and extension.

    Dispatch precedence:
    1. Google Docs → Drive's markdown export (or HTML export converted
       locally with markdownify), written as ``<name>.md``
    2. ``.json`` files → raw content pretty-printed, name unchanged
    3. Anything else → empty payload, skipped at write time

    Example:
        >>> dispatcher = ExportDispatcher(api)
        >>> item = await dispatcher.export_item(node)
        >>> item.filename, len(item.payload)
        ('Plan.md', 1532)
    """

    def __init__(
        self,
        api: DriveAPIWrapper,
        document_format: DocumentFormat = DocumentFormat.MARKDOWN,
        converter: Optional[MarkdownConverter] = None
    ):
        """Initialize the dispatcher.

        Args:
            api: DriveAPIWrapper used for exports and downloads
            document_format: How Google Docs are exported
            converter: MarkdownConverter for HTML exports (created if omitted)
        """
        self._api = api
        self._document_format = document_format
        self._converter = converter or MarkdownConverter()
        self._handlers: Dict[ExportStrategy, Callable[[DriveNode], Awaitable[str]]] = {
            ExportStrategy.EDITABLE_DOCUMENT: self._export_document,
            ExportStrategy.JSON_FILE: self._export_json,
            ExportStrategy.UNSUPPORTED: self._export_unsupported,
        }

    @staticmethod
    def resolve_strategy(node: DriveNode) -> ExportStrategy:
        """Pick the export strategy for a node."""
        if node.node_type is NodeType.DOCUMENT:
            return ExportStrategy.EDITABLE_DOCUMENT
        if node.extension and node.extension.lower() == JSON_EXTENSION:
            return ExportStrategy.JSON_FILE
        return ExportStrategy.UNSUPPORTED

    @staticmethod
    def output_filename(node: DriveNode, strategy: ExportStrategy) -> str:
        """Output file name for a node exported with the given strategy.

        JSON files keep their name; everything else is written as markdown.
        """
        if strategy is ExportStrategy.JSON_FILE:
            return FilesafeConverter.to_path_component(node.name)
        return FilesafeConverter.to_markdown_filename(node.name, node.extension)

    async def export_item(self, node: DriveNode) -> ExportedItem:
        """Export a single file node. Never raises.

        Args:
            node: File node to export

        Returns:
            ExportedItem; its payload is empty when the type is unsupported
            or the export failed
        """
        strategy = self.resolve_strategy(node)
        filename = self.output_filename(node, strategy)

        try:
            payload = await self._handlers[strategy](node)
        except Exception as e:
            logger.warning(f"Could not export '{node.name}' ({node.node_id}): {e}")
            payload = ""

        return ExportedItem(
            node=node,
            payload=payload,
            parent_container_id=node.primary_parent_id,
            strategy=strategy,
            filename=filename,
        )

    async def export_all(
        self,
        nodes: Sequence[DriveNode],
        max_concurrency: int = 8
    ) -> List[ExportedItem]:
        """Export many nodes concurrently.

        At most ``max_concurrency`` exports are in flight at once. The
        returned list preserves the input order.
        """
        semaphore = asyncio.Semaphore(max_concurrency)

        async def _bounded(node: DriveNode) -> ExportedItem:
            async with semaphore:
                return await self.export_item(node)

        return list(await asyncio.gather(*(_bounded(node) for node in nodes)))

    async def _export_document(self, node: DriveNode) -> str:
        logger.info(f"Exporting {node.name}")
        if self._document_format is DocumentFormat.HTML:
            html = await self._api.export_as_markup(node.node_id, mime_type=HTML_MIME_TYPE)
            return self._converter.html_to_markdown(html)
        return await self._api.export_as_markup(node.node_id, mime_type=MARKDOWN_MIME_TYPE)

    async def _export_json(self, node: DriveNode) -> str:
        logger.info(f"Exporting {node.name}")
        raw = await self._api.fetch_raw(node.node_id)
        return json.dumps(json.loads(raw), indent=2, ensure_ascii=False)

    async def _export_unsupported(self, node: DriveNode) -> str:
        logger.debug(f"No export available for '{node.name}' ({node.mime_type})")
        return ""
