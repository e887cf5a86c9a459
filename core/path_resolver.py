"""
Path Resolver
計算每個節點的 folder path，以及葉節點回到產生目錄頂層的相對路徑。

    folder path : 由祖先 module 組成、以 "/" 串接、全小寫
    path to root: 每跨過一層資料夾就加一段 "../"

範例 (root 標記為 root=True，不貢獻路徑)：
    root
    └── Suite           folder_path="suite"
        └── Login       folder_path="suite/login"
            └── <test>  folder_path="suite/login", path_to_root="../"
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from core.exceptions import UnsafePathError
from core.tree import EnhancedTree, Node

_UNSAFE_PARTS = {"", ".", ".."}


@dataclass(frozen=True)
class NodePaths:
    folder_path: str
    path_to_root: str = ""


def _module_segment(node: Node) -> str:
    """取出 node 的 module；含 "..", "." 或空片段 (如開頭的 "/") 時拒絕"""
    module = node.module or ""
    if module and any(part in _UNSAFE_PARTS for part in re.split(r"[\\/]", module)):
        raise UnsafePathError(node.id, module)
    return module


def resolve_paths(node: Node, tree: EnhancedTree) -> NodePaths:
    """
    計算單一節點的路徑。

    Args:
        node: 要計算的節點 (必須屬於 tree)
        tree: 已 enhance 的樹；tree.root 即本次選定的頂層目錄

    Returns:
        NodePaths

    Raises:
        UnsafePathError: module 會讓路徑跑出輸出目錄
    """
    top = tree.root
    # 頂層為真正的 root 時，第一個子節點視同頂層本身
    top_alias = None
    if top.root and top.children:
        top_alias = top.children[0]

    segments: list[str] = [] if node.is_leaf_type else [_module_segment(node)]
    ups: list[str] = []

    def _visit(parent: Node) -> bool:
        if parent.root:
            return False
        segments.insert(0, _module_segment(parent))
        if parent is not top and parent is not top_alias:
            ups.append("../")
        return True

    tree.walk_up_parents(node, _visit)

    folder_path = "/".join(s for s in segments if s).lower()
    return NodePaths(folder_path=folder_path, path_to_root="".join(ups))
