"""
core/path_resolver.py 單元測試

驗證 folder path (小寫、"/" 串接、root 不貢獻) 與 path to root ("../" 數量)。
"""

import pytest

from core.exceptions import UnsafePathError
from core.path_resolver import NodePaths, resolve_paths
from core.tree import Node, enhance_tree, find_node_by_id


@pytest.fixture
def tree(sample_payload):
    return Node.from_dict(sample_payload["directory"])


def _paths(top: Node, node_id: str) -> NodePaths:
    return resolve_paths(find_node_by_id(top, node_id), enhance_tree(top))


@pytest.mark.unit
class TestFolderPath:
    """folder path"""

    @pytest.mark.unit
    def test_folder_uses_own_module(self, tree):
        """資料夾本身的 module 也算一段"""
        assert _paths(tree, "f-auth").folder_path == "auth"

    @pytest.mark.unit
    def test_nested_folder(self, tree):
        """巢狀資料夾以 / 串接且全小寫"""
        assert _paths(tree, "f-social").folder_path == "auth/social"
        assert _paths(tree, "f-cart").folder_path == "shop/cart"

    @pytest.mark.unit
    def test_leaf_inherits_parent_path(self, tree):
        """葉節點的 folder path 等於父資料夾"""
        assert _paths(tree, "n-login").folder_path == "auth"
        assert _paths(tree, "n-addcart").folder_path == "shop/cart"

    @pytest.mark.unit
    def test_root_contributes_no_segment(self, tree):
        """root 的 module 不出現在子孫路徑中"""
        for node in tree.iter_nodes():
            if node is tree:
                continue
            assert not _paths(tree, node.id).folder_path.startswith("root")

    @pytest.mark.unit
    def test_pruned_subtree_keeps_own_segment(self, tree):
        """裁切後的子樹頂層 (非 root) 仍貢獻自己的 module"""
        shop = find_node_by_id(tree, "f-shop")
        assert _paths(shop, "f-cart").folder_path == "shop/cart"
        assert _paths(shop, "n-stale").folder_path == "shop"

    @pytest.mark.unit
    def test_mixed_case_lowered(self):
        """大小寫混合一律轉小寫"""
        top = Node.from_dict({
            "id": "r", "root": True, "children": [
                {"id": "a", "module": "MyApp", "children": [
                    {"id": "b", "module": "Sub Folder", "children": [
                        {"id": "t", "type": "test", "testId": "x"},
                    ]},
                ]},
            ],
        })
        assert _paths(top, "t").folder_path == "myapp/sub folder"


@pytest.mark.unit
class TestPathToRoot:
    """path to root"""

    @pytest.mark.unit
    def test_first_level_leaf(self, tree):
        """root 底下第一個資料夾內的葉節點不需往上"""
        assert _paths(tree, "n-login").path_to_root == ""

    @pytest.mark.unit
    def test_nested_under_first_folder(self, tree):
        """多一層資料夾多一段 ../"""
        assert _paths(tree, "n-google").path_to_root == "../"

    @pytest.mark.unit
    def test_nested_under_second_folder(self, tree):
        """非第一個子資料夾本身也算一層"""
        assert _paths(tree, "n-checkout").path_to_root == "../../"

    @pytest.mark.unit
    @pytest.mark.parametrize("top_id, leaf_id, expected", [
        ("f-shop", "n-checkout", "../"),
        ("f-shop", "n-stale", ""),
        ("f-auth", "n-login", ""),
        ("f-auth", "n-google", "../"),
        ("f-cart", "n-checkout", ""),
    ])
    def test_pruned_counts_folders_between(self, tree, top_id, leaf_id, expected):
        """裁切後：等於葉節點與子樹頂層之間的資料夾數"""
        top = find_node_by_id(tree, top_id)
        assert _paths(top, leaf_id).path_to_root == expected


@pytest.mark.unit
class TestIdempotence:
    """重複 enhance 不影響結果"""

    @pytest.mark.unit
    def test_same_result_after_re_enhance(self, tree):
        first = enhance_tree(tree)
        second = enhance_tree(tree)
        for node in tree.iter_nodes():
            assert resolve_paths(node, first) == resolve_paths(node, second)


def _tree_with_module(module: str) -> Node:
    return Node.from_dict({
        "id": "r", "root": True, "children": [{
            "id": "x", "module": "X", "children": [{
                "id": "bad", "module": module, "children": [
                    {"id": "leaf", "type": "test", "testId": "t"},
                ],
            }],
        }],
    })


@pytest.mark.unit
class TestUnsafeModule:
    """module 不能讓路徑跑出輸出目錄"""

    @pytest.mark.unit
    @pytest.mark.parametrize("module", [
        "..", "../../escape", "/etc", "a/../b", "a//b", ".", "..\\up",
    ])
    def test_rejected(self, module):
        top = _tree_with_module(module)
        with pytest.raises(UnsafePathError) as exc_info:
            _paths(top, "bad")
        assert exc_info.value.context == {"node_id": "bad", "module": module}

    @pytest.mark.unit
    def test_leaf_under_unsafe_folder_rejected(self):
        """祖先的 module 也會被檢查"""
        with pytest.raises(UnsafePathError):
            _paths(_tree_with_module("../escape"), "leaf")

    @pytest.mark.unit
    def test_nested_module_allowed(self):
        """module 內含 "/" 仍視為多層資料夾"""
        assert _paths(_tree_with_module("Sub/Dir"), "leaf").folder_path == "x/sub/dir"

    @pytest.mark.unit
    def test_dotted_name_allowed(self):
        assert _paths(_tree_with_module("v1.2"), "bad").folder_path == "x/v1.2"
