"""
Tree Walker
深度優先、前序走訪整棵樹，visitor 拿到 (node, parent, index)。
"""

from __future__ import annotations

from typing import Callable

from core.tree import Node

Visitor = Callable[[Node, "Node | None", int], None]


def walk_tree(tree: Node, visitor: Visitor) -> None:
    """
    從頂層節點開始前序走訪。

    頂層節點：parent=None, index=0。
    其他節點：index 為在父節點 children 中的位置 (0 起算)。
    走訪順序與 children 排列一致；walker 本身不改動樹。
    """
    _walk(tree, None, 0, visitor)


def _walk(node: Node, parent: Node | None, index: int, visitor: Visitor) -> None:
    visitor(node, parent, index)
    # 先複製一份 children，visitor 改動列表時不影響本次走訪
    for idx, child in enumerate(list(node.children)):
        _walk(child, node, idx, visitor)
