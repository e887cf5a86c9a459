"""
core — 目錄樹處理核心

統一匯出樹模型、走訪、路徑計算與例外，方便外部 import。
(整理流程 prep_data 請由 core.reconciler 匯入)

用法：
    from core import Node, find_node_by_id, enhance_tree, walk_tree
    from core import DirectoryNotFoundError, SnapGenError
"""

from core.exceptions import (
    BackendError,
    ConfigurationError,
    DataFetchError,
    DirectoryNotFoundError,
    FilesystemError,
    MissingSourceError,
    SnapGenError,
    StyleSelectionError,
    UnknownBackendError,
    UnsafePathError,
)
from core.path_resolver import NodePaths, resolve_paths
from core.tree import EnhancedTree, Node, NodeType, enhance_tree, find_node_by_id
from core.walker import walk_tree

__all__ = [
    # Tree
    "Node",
    "NodeType",
    "EnhancedTree",
    "enhance_tree",
    "find_node_by_id",
    "walk_tree",
    "NodePaths",
    "resolve_paths",
    # Exceptions
    "SnapGenError",
    "ConfigurationError",
    "UnknownBackendError",
    "StyleSelectionError",
    "MissingSourceError",
    "DataFetchError",
    "DirectoryNotFoundError",
    "FilesystemError",
    "BackendError",
    "UnsafePathError",
]
