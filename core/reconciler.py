"""
Data Reconciler
把樹上的葉節點 (只帶 testId) 與平面的 test / component 紀錄對起來，
蓋上產生所需的 metadata，並收集要建立的資料夾。

流程：
    1. (可選) 依 folder id 裁切成子樹
    2. 完整樹與選定樹各自 deep copy + enhance
    3. 走訪選定樹：資料夾 → folders；test / component → 對應紀錄加上
       nodeId / folderPath / pathToRoot
    4. 組成 PreparedData

原始 payload 一律不改動 (copy-on-read)。
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path

from config.config import Config
from core.exceptions import ConfigurationError, DirectoryNotFoundError
from core.path_resolver import resolve_paths
from core.tree import EnhancedTree, Node, NodeType, enhance_tree, find_node_by_id
from core.walker import walk_tree
from generator.schema import PreparedData, RawData, SourceData
from utils.logger import logger


@dataclass
class Reconciliation:
    """一次走訪的結果"""
    folders: list[str] = field(default_factory=list)
    tests: list[dict] = field(default_factory=list)
    components: list[dict] = field(default_factory=list)


def _index_records(records: list[dict]) -> dict[str, dict]:
    """id → 第一筆同 id 的紀錄"""
    index: dict[str, dict] = {}
    for record in records:
        if "id" in record:
            index.setdefault(str(record["id"]), record)
    return index


def reconcile(tree: EnhancedTree, tests: list[dict],
              components: list[dict]) -> Reconciliation:
    """
    走訪 tree 一次，產生 folders / tests / components。

    - 有 children 的節點 (頂層節點除外) → folders
    - test 葉節點 → 以 testId 找 test 紀錄，找不到就略過
    - component 葉節點 → 以 testId 找 component 紀錄，找不到就略過

    輸出順序依走訪順序，不依輸入列表順序。回傳的紀錄都是複本。
    """
    result = Reconciliation()
    lookups = {
        NodeType.TEST.value: (_index_records(tests), result.tests),
        NodeType.COMPONENT.value: (_index_records(components), result.components),
    }

    def _visit(node: Node, parent: Node | None, idx: int) -> None:
        paths = resolve_paths(node, tree)

        if node.has_children:
            # 頂層節點 (index 0、無 parent) 本身不建資料夾，只建它底下的
            if parent is not None:
                result.folders.append(paths.folder_path)
            return

        if node.type not in lookups:
            return

        index, bucket = lookups[node.type]
        record = index.get(node.test_id) if node.test_id is not None else None
        if record is None:
            logger.debug(f"略過 {node.type} 節點 {node.id}: 找不到 {node.test_id}")
            return

        stamped = copy.deepcopy(record)
        stamped["nodeId"] = node.id
        stamped["folderPath"] = paths.folder_path
        stamped["pathToRoot"] = paths.path_to_root
        bucket.append(stamped)

    walk_tree(tree.root, _visit)
    return result


def select_directory(source: SourceData, folder: str | None = None) -> Node:
    """
    取得要產生的目錄 (deep copy)。

    Raises:
        DirectoryNotFoundError: folder id 不存在
    """
    if not folder:
        return copy.deepcopy(source.directory)
    node = find_node_by_id(source.directory, folder)
    if node is None:
        raise DirectoryNotFoundError(folder)
    return copy.deepcopy(node)


def resolve_output_dir(top_dir_name: str | None = None,
                       cwd: str | Path | None = None) -> Path:
    """
    計算輸出頂層目錄 <cwd>/<top_dir_name>。

    結果必須落在 cwd 底下 (不能是 cwd 本身)，因為產生前會整個刪除。

    Raises:
        ConfigurationError: 絕對路徑、"."、".." 等會跑出 cwd 的名稱
    """
    top_dir_name = top_dir_name or Config.TOP_DIR_NAME
    base = Path(cwd) if cwd is not None else Path(os.getcwd())
    target = base / top_dir_name

    root = base.resolve()
    resolved = target.resolve()
    if Path(top_dir_name).is_absolute() or resolved == root or root not in resolved.parents:
        raise ConfigurationError(
            f"Output directory '{top_dir_name}' must be a sub-directory of {root}.",
            context={"top_dir_name": top_dir_name, "cwd": str(root)},
        )
    return target


def prep_data(
    source: SourceData,
    folder: str | None = None,
    top_dir_name: str | None = None,
    style: str | None = None,
    framework: str | None = None,
    cwd: str | Path | None = None,
) -> PreparedData:
    """
    將原始資料整理成交給 backend 的 PreparedData。

    Args:
        source: 原始資料 (不會被改動)
        folder: 只產生此 id 的子樹
        top_dir_name: 輸出頂層目錄名稱 (預設 Config.TOP_DIR_NAME)
        style / framework: 原樣傳給 backend
        cwd: 輸出目錄的基準位置 (預設目前工作目錄)

    Raises:
        DirectoryNotFoundError: folder id 不存在
        ConfigurationError: 輸出目錄不在 cwd 底下
        UnsafePathError: module 名稱含 ".." 等會跑出輸出目錄的片段
    """
    top_dir_name = top_dir_name or Config.TOP_DIR_NAME
    top_dir_path = str(resolve_output_dir(top_dir_name, cwd))

    directory = select_directory(source, folder)
    full_directory = copy.deepcopy(source.directory)

    full_tree = enhance_tree(full_directory)
    tree = enhance_tree(directory)

    result = reconcile(tree, source.tests, source.components)

    logger.info(
        f"整理完成: {len(result.folders)} 個資料夾, "
        f"{len(result.tests)} 個 test, {len(result.components)} 個 component"
    )

    return PreparedData(
        top_dir_name=top_dir_name,
        top_dir_path=top_dir_path,
        raw=RawData(
            directory=full_directory,
            tests=copy.deepcopy(source.tests),
            components=copy.deepcopy(source.components),
            tree=full_tree,
        ),
        directory=directory,
        tree=tree,
        components=result.components,
        tests=result.tests,
        folders=result.folders,
        folder=folder,
        style=style,
        framework=framework,
    )
