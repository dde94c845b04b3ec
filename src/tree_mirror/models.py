"""Data models for the tree mirror.

This module defines all data models used by the tree mirror library.
All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from src.models.drive_node import DriveNode

# Mapping from container ID to absolute local directory path.
# None marks a container whose parent chain could not be resolved.
PathMap = Dict[str, Optional[str]]


class ExportStrategy(Enum):
    """How a file node is turned into a text payload.

    The set is closed: every node resolves to exactly one strategy.
    """
    EDITABLE_DOCUMENT = "editable_document"
    JSON_FILE = "json_file"
    UNSUPPORTED = "unsupported"


class DocumentFormat(Enum):
    """Representation requested from Drive when exporting documents."""
    MARKDOWN = "markdown"
    HTML = "html"


class WriteOutcome(Enum):
    """Result of materializing one exported item."""
    WRITTEN = "written"
    SKIPPED_EMPTY = "skipped_empty"
    SKIPPED_UNRESOLVED = "skipped_unresolved"
    SKIPPED_DUPLICATE = "skipped_duplicate"


@dataclass
class TreeSnapshot:
    """All nodes discovered during one walk.

    Attributes:
        containers: Arena of discovered folders, keyed by node ID
        files: Non-folder nodes in discovery order
    """
    containers: Dict[str, DriveNode] = field(default_factory=dict)
    files: List[DriveNode] = field(default_factory=list)

    def add(self, node: DriveNode) -> None:
        if node.is_container:
            self.containers[node.node_id] = node
        else:
            self.files.append(node)


@dataclass
class ExportedItem:
    """A file node paired with its exported payload.

    Attributes:
        node: The exported file
        payload: Exported text; empty when export failed or is unsupported
        parent_container_id: Folder the file is written under
        strategy: Export strategy that produced the payload
        filename: Output file name (no directory)
    """
    node: DriveNode
    payload: str
    parent_container_id: Optional[str]
    strategy: ExportStrategy
    filename: str


@dataclass
class MirrorConfig:
    """Configuration for a single mirror run.

    Attributes:
        root_folder_id: Drive folder ID to mirror
        output_path: Local directory that corresponds to the root folder
        query: Optional Drive query clause restricting which files are exported
        recursive: Descend into sub-folders (False exports root-level files only)
        document_format: Export documents via Drive markdown or via HTML + markdownify
        max_concurrency: Maximum number of concurrent export requests
    """
    root_folder_id: str
    output_path: str
    query: Optional[str] = None
    recursive: bool = True
    document_format: DocumentFormat = DocumentFormat.MARKDOWN
    max_concurrency: int = 8


@dataclass
class MirrorResult:
    """Summary of a completed mirror run.

    Attributes:
        containers_found: Folders discovered below the root
        files_found: Files discovered
        directories_created: Directories that did not exist before the run
        files_written: Files written to disk
        skipped_empty: Items skipped because their payload was empty
        skipped_unresolved: Items skipped because their folder had no path
        skipped_duplicate: Items skipped because another item claimed the same path
        unresolved_container_ids: Folders whose parent chain did not reach the root
    """
    containers_found: int = 0
    files_found: int = 0
    directories_created: int = 0
    files_written: int = 0
    skipped_empty: int = 0
    skipped_unresolved: int = 0
    skipped_duplicate: int = 0
    unresolved_container_ids: List[str] = field(default_factory=list)

    def record(self, outcome: WriteOutcome) -> None:
        if outcome is WriteOutcome.WRITTEN:
            self.files_written += 1
        elif outcome is WriteOutcome.SKIPPED_EMPTY:
            self.skipped_empty += 1
        elif outcome is WriteOutcome.SKIPPED_UNRESOLVED:
            self.skipped_unresolved += 1
        elif outcome is WriteOutcome.SKIPPED_DUPLICATE:
            self.skipped_duplicate += 1
