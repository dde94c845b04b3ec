"""Google Drive node data model."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
DOCUMENT_MIME_TYPE = "application/vnd.google-apps.document"
SPREADSHEET_MIME_TYPE = "application/vnd.google-apps.spreadsheet"


class NodeType(Enum):
    """Type tag of a node in the remote hierarchy."""
    CONTAINER = "container"
    DOCUMENT = "document"
    SPREADSHEET = "spreadsheet"
    GENERIC_FILE = "generic_file"

    @classmethod
    def from_mime_type(cls, mime_type: str) -> "NodeType":
        if mime_type == FOLDER_MIME_TYPE:
            return cls.CONTAINER
        if mime_type == DOCUMENT_MIME_TYPE:
            return cls.DOCUMENT
        if mime_type == SPREADSHEET_MIME_TYPE:
            return cls.SPREADSHEET
        return cls.GENERIC_FILE


@dataclass(frozen=True)
class DriveNode:
    """A file or folder fetched from Google Drive.

    Nodes are immutable once fetched; identity is ``node_id``.

    Attributes:
        node_id: Drive file ID
        name: Display name (may contain dots and spaces)
        node_type: Type tag derived from the MIME type
        mime_type: Raw Drive MIME type
        extension: File extension reported by Drive (None for native Google types)
        parent_ids: Parent folder IDs, first entry is the primary parent
        created_time: RFC 3339 creation timestamp
        modified_time: RFC 3339 modification timestamp
    """
    node_id: str
    name: str
    node_type: NodeType
    mime_type: str = ""
    extension: Optional[str] = None
    parent_ids: Tuple[str, ...] = ()
    created_time: str = ""
    modified_time: str = ""

    @property
    def is_container(self) -> bool:
        return self.node_type is NodeType.CONTAINER

    @property
    def primary_parent_id(self) -> Optional[str]:
        """First parent ID, or None for an orphaned node."""
        return self.parent_ids[0] if self.parent_ids else None

    @classmethod
    def from_api(cls, file_data: Dict[str, Any]) -> "DriveNode":
        """Create a DriveNode from a Drive v3 ``files`` resource.

        Raises:
            ValueError: If the resource is not an object or has no ``id``
        """
        if not isinstance(file_data, dict):
            raise ValueError(f"File data must be an object, got {type(file_data).__name__}")

        node_id = file_data.get('id')
        if not node_id:
            raise ValueError("File data missing required 'id' field")

        mime_type = file_data.get('mimeType', '')
        return cls(
            node_id=node_id,
            name=file_data.get('name', 'Untitled'),
            node_type=NodeType.from_mime_type(mime_type),
            mime_type=mime_type,
            extension=file_data.get('fileExtension') or None,
            parent_ids=tuple(file_data.get('parents') or ()),
            created_time=file_data.get('createdTime', ''),
            modified_time=file_data.get('modifiedTime', ''),
        )


@dataclass
class ListingPage:
    """One page of immediate children returned by a listing call.

    Attributes:
        nodes: Children in listing order (modification time, descending)
        has_more: True when the service reported further pages
    """
    nodes: List[DriveNode] = field(default_factory=list)
    has_more: bool = False
