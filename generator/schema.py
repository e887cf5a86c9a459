"""
資料結構定義
資料來源 payload 與交給 generator backend 的 PreparedData 統一格式。
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from core.tree import EnhancedTree, Node


@dataclass
class SourceData:
    """遠端 / 本地載入的原始資料"""
    directory: Node
    tests: list[dict] = field(default_factory=list)
    components: list[dict] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "SourceData":
        """
        從 payload 建立。

        directory 可以是節點本身，也可以包在 {"tree": ...} 裡
        (伺服器回應的格式)。

        Raises:
            ValueError: payload 結構不符
        """
        if not isinstance(data, dict):
            raise ValueError(f"payload 必須是 object，收到 {type(data).__name__}")
        directory = data.get("directory")
        if isinstance(directory, dict) and "tree" in directory:
            directory = directory["tree"]
        if directory is None:
            raise ValueError("payload 缺少 directory")

        tests = data.get("tests") or []
        components = data.get("components") or []
        for key, records in (("tests", tests), ("components", components)):
            if not isinstance(records, list):
                raise ValueError(f"{key} 必須是 list")
            if not all(isinstance(r, dict) for r in records):
                raise ValueError(f"{key} 內每筆紀錄都必須是 object")

        return cls(
            directory=Node.from_dict(directory),
            tests=tests,
            components=components,
        )


@dataclass(frozen=True)
class RawData:
    """未裁切的完整資料，給需要全域資訊 (跨資料夾 import) 的 backend 使用"""
    directory: Node
    tests: list[dict]
    components: list[dict]
    tree: EnhancedTree

    def to_dict(self) -> dict:
        return {
            "directory": self.directory.to_dict(),
            "tests": copy.deepcopy(self.tests),
            "components": copy.deepcopy(self.components),
        }


@dataclass(frozen=True)
class PreparedData:
    """交給 generator backend 的唯一契約，backend 只讀不寫"""
    top_dir_name: str
    top_dir_path: str
    raw: RawData
    directory: Node                        # 可能已裁切成子樹
    tree: EnhancedTree                     # directory 的祖先走訪側表
    components: list[dict] = field(default_factory=list)
    tests: list[dict] = field(default_factory=list)
    folders: list[str] = field(default_factory=list)
    folder: str | None = None
    style: str | None = None
    framework: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """轉為原始 camelCase 契約 (給只吃 dict 的自訂 generator)"""
        return {
            "topDirName": self.top_dir_name,
            "topDirPath": self.top_dir_path,
            "raw": self.raw.to_dict(),
            "directory": self.directory.to_dict(),
            "components": copy.deepcopy(self.components),
            "tests": copy.deepcopy(self.tests),
            "folder": self.folder,
            "style": self.style,
            "framework": self.framework,
            "folders": list(self.folders),
        }
