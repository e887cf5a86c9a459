"""
Generator Backend 基底類別

每個目標測試框架一個 backend，只要實作 generate() 即可。
styles 列出此 backend 支援的風格；超過一個時，執行前必須指定 -s。
GeneratorBackend 子類別收到 PreparedData；用 -c 載入的自訂模組則收到
PreparedData.to_dict() 的 camelCase dict。

範例：
    class MyBackend(GeneratorBackend):
        name = "my_framework"
        styles = ["es5", "es6"]

        def generate(self, data):
            self.create_folders(data)
            for test in data.tests:
                self.write_file(..., render(test))
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from generator.schema import PreparedData
from utils.logger import logger


class GeneratorBackend(ABC):
    """
    Backend 基底類別

    create_folders / write_file 是共用的檔案輸出工具，
    子類別可直接使用。
    """

    name: str = "unnamed_backend"
    description: str = ""
    styles: list[str] = []

    @abstractmethod
    def generate(self, data: PreparedData) -> None:
        """依 PreparedData 產生檔案"""

    # ── 共用工具 ──

    def create_folders(self, data: PreparedData) -> list[Path]:
        """建立頂層目錄與 data.folders 列出的所有資料夾"""
        top = Path(data.top_dir_path)
        top.mkdir(parents=True, exist_ok=True)
        created = [top]
        for folder in data.folders:
            path = top / folder
            path.mkdir(parents=True, exist_ok=True)
            created.append(path)
        return created

    def write_file(self, path: str | Path, content: str) -> Path:
        """寫入文字檔 (自動建立上層目錄)"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.debug(f"  ✓ {path}")
        return path
