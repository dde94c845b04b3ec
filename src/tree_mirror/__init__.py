"""Tree mirror library for Google Drive folder hierarchies.

This package walks a Drive folder hierarchy, resolves a local directory for
every folder, exports files to text and writes them to a local tree that
mirrors the remote one.
"""

from .tree_mirror import TreeMirror
from .models import (
    DocumentFormat,
    ExportedItem,
    ExportStrategy,
    MirrorConfig,
    MirrorResult,
    PathMap,
    TreeSnapshot,
    WriteOutcome,
)
from .errors import (
    TreeMirrorError,
    ConfigError,
    FilesystemError,
    PathResolutionError,
)
from .config_loader import ConfigLoader
from .export_dispatcher import ExportDispatcher
from .filesafe_converter import FilesafeConverter
from .materializer import Materializer
from .path_resolver import PathResolver
from .tree_walker import TreeWalker

__all__ = [
    'TreeMirror',
    'DocumentFormat',
    'ExportedItem',
    'ExportStrategy',
    'MirrorConfig',
    'MirrorResult',
    'PathMap',
    'TreeSnapshot',
    'WriteOutcome',
    'TreeMirrorError',
    'ConfigError',
    'FilesystemError',
    'PathResolutionError',
    'ConfigLoader',
    'ExportDispatcher',
    'FilesafeConverter',
    'Materializer',
    'PathResolver',
    'TreeWalker',
]
