"""
目錄樹模型 (Tree Model)

SnapTest 的測試目錄是一棵樹：root → folder → test / component。
Node 只是純資料；祖先走訪、搜尋等能力放在 EnhancedTree
這張「側表」裡，不會寫回節點本身。

用法：
    tree = Node.from_dict(payload["directory"])
    node = find_node_by_id(tree, "abc")

    enhanced = enhance_tree(tree)
    enhanced.walk_up_parents(node, lambda parent: print(parent.module))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator


class NodeType(Enum):
    ROOT = "root"
    FOLDER = "folder"
    TEST = "test"
    COMPONENT = "component"


LEAF_TYPES = (NodeType.TEST.value, NodeType.COMPONENT.value)

# 已知欄位之外的 key 都收進 Node.extra
_KNOWN_KEYS = {"id", "type", "module", "testId", "children", "root"}


@dataclass
class Node:
    """單一樹節點"""
    id: str
    type: str = NodeType.FOLDER.value
    module: str = ""                        # 顯示名稱 / 資料夾名稱
    test_id: str | None = None              # 指向 test / component 紀錄，只有葉節點有
    children: list[Node] = field(default_factory=list)
    root: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_leaf_type(self) -> bool:
        return self.type in LEAF_TYPES

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def iter_nodes(self) -> Iterator[Node]:
        """前序走訪：自己 → 子節點由左至右"""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def to_dict(self) -> dict:
        """轉回 JSON 形狀 (camelCase)"""
        data = dict(self.extra)
        data["id"] = self.id
        data["type"] = self.type
        if self.module:
            data["module"] = self.module
        if self.test_id is not None:
            data["testId"] = self.test_id
        if self.root:
            data["root"] = True
        if self.children:
            data["children"] = [c.to_dict() for c in self.children]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        """從 JSON dict 建立 (遞迴)"""
        if not isinstance(data, dict):
            raise ValueError(f"Node 必須是 object，收到 {type(data).__name__}")
        if "id" not in data:
            raise ValueError(f"Node 缺少 id: {sorted(data)}")

        children = data.get("children") or []
        if not isinstance(children, list):
            raise ValueError(f"Node {data['id']} 的 children 必須是 list")

        test_id = data.get("testId")
        return cls(
            id=str(data["id"]),
            type=data.get("type") or (
                NodeType.ROOT.value if data.get("root") else NodeType.FOLDER.value
            ),
            module=data.get("module") or "",
            test_id=str(test_id) if test_id is not None else None,
            children=[cls.from_dict(c) for c in children],
            root=bool(data.get("root", False)),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )


def find_node_by_id(tree: Node, node_id: str) -> Node | None:
    """
    依 id 找節點。

    走訪順序固定為前序 (自己 → 子節點由左至右)，回傳第一個符合者。
    找不到回傳 None，是否算錯誤由呼叫端決定。
    """
    if tree.id == node_id:
        return tree
    for child in tree.children:
        found = find_node_by_id(child, node_id)
        if found is not None:
            return found
    return None


class EnhancedTree:
    """
    加上祖先走訪能力的樹。

    parent / index 以節點物件身分 (id()) 為 key 存在側表，
    不建立新節點、不改動任何既有節點。同一棵樹重複 enhance
    會得到等價的結果。
    """

    def __init__(self, root: Node):
        self.root = root
        self._parents: dict[int, Node] = {}
        self._indexes: dict[int, int] = {id(root): 0}
        self._index(root)

    def _index(self, node: Node) -> None:
        for idx, child in enumerate(node.children):
            self._parents[id(child)] = node
            self._indexes[id(child)] = idx
            self._index(child)

    def __contains__(self, node: Node) -> bool:
        return id(node) in self._indexes

    def parent_of(self, node: Node) -> Node | None:
        return self._parents.get(id(node))

    def index_of(self, node: Node) -> int:
        """節點在父節點 children 中的位置；頂層節點為 0"""
        return self._indexes[id(node)]

    def walk_up_parents(self, node: Node,
                        visitor: Callable[[Node], bool | None]) -> None:
        """
        從直屬父節點往上走到頂層，逐一呼叫 visitor。

        visitor 回傳 False 時立即停止。
        """
        parent = self.parent_of(node)
        while parent is not None:
            if visitor(parent) is False:
                return
            parent = self.parent_of(parent)

    def parents(self, node: Node) -> list[Node]:
        """祖先列表，由直屬父節點到頂層"""
        result: list[Node] = []
        self.walk_up_parents(node, result.append)
        return result

    def find(self, node_id: str) -> Node | None:
        return find_node_by_id(self.root, node_id)


def enhance_tree(tree: Node) -> EnhancedTree:
    """替整棵樹 (或任一子樹) 建立祖先走訪側表"""
    return EnhancedTree(tree)
