"""
Generator Engine (核心引擎)
串接整個流程，一次產生完整的測試目錄：

    選項檢查 → 取得 backend → 讀取資料 → 整理 (裁切 / 路徑 / 對應紀錄)
    → 清除舊輸出 → backend.generate()

每一步都等前一步完成才開始；任何錯誤都會中止整次執行，
且所有選項檢查都在動到檔案系統之前完成。

使用方式：
    1. 程式化呼叫：
        options = GeneratorOptions(framework="pytest", style="class",
                                   input_file="tests.json")
        GeneratorEngine(options).run()

    2. CLI：
        python -m generator -r pytest -s class -i tests.json
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from config.config import Config
from core.exceptions import (
    ConfigurationError,
    DataFetchError,
    FilesystemError,
    MissingSourceError,
)
from core.reconciler import prep_data, resolve_output_dir
from generator.backends.base import GeneratorBackend
from generator.registry import get_backend, load_custom_backend, validate_style
from generator.schema import PreparedData, SourceData
from utils.api_client import ApiClient
from utils.data_loader import load_input_file
from utils.logger import logger


@dataclass
class GeneratorOptions:
    """一次產生所需的選項 (對應 CLI 參數)"""
    framework: str | None = None           # 官方 backend 名稱 (-r)
    path_to_gen: str | None = None         # 自訂 backend 路徑 (-c)
    style: str | None = None               # 風格 (-s)
    token: str | None = None               # SnapTest auth token (-t)
    input_file: str | None = None          # 本地 JSON 檔 (-i)
    folder: str | None = None              # 只產生此 id 的子樹 (-f)
    top_dir_name: str | None = None        # 輸出頂層目錄名稱 (-o)
    cwd: str | None = None                 # 基準目錄，預設目前工作目錄


class GeneratorEngine:
    """測試目錄產生引擎"""

    def __init__(self, options: GeneratorOptions):
        self.options = options
        self.cwd = Path(options.cwd or os.getcwd())
        self.backend: Any = None

    # ── 1. 選項 / backend ──

    def resolve_backend(self) -> Any:
        """
        取得 backend：-r 查官方清單，否則 -c 載入自訂檔案。

        Raises:
            ConfigurationError: 兩者都沒給
            UnknownBackendError / BackendError
        """
        if self.options.framework:
            self.backend = get_backend(self.options.framework)
        elif self.options.path_to_gen:
            self.backend = load_custom_backend(self.options.path_to_gen, cwd=self.cwd)
        else:
            raise ConfigurationError(
                "Please specify an official generator with -r, or a custom "
                "generator path with -c (--help for more info)."
            )
        return self.backend

    def validate(self) -> None:
        """檢查 backend、style、輸出目錄與資料來源，全部在動到檔案之前完成"""
        if self.backend is None:
            self.resolve_backend()
        validate_style(self.backend, self.options.style, self.options.framework or "")
        resolve_output_dir(self.options.top_dir_name, self.cwd)
        if not self.token and not self.options.input_file:
            raise MissingSourceError()

    @property
    def token(self) -> str | None:
        return self.options.token or Config.API_TOKEN

    # ── 2. 資料 ──

    def load_source(self) -> SourceData:
        """
        有 token 從伺服器讀取，否則讀本地檔案。

        Raises:
            DataFetchError
        """
        if self.token:
            with ApiClient(self.token) as client:
                payload = client.load()
            source = Config.load_url()
        else:
            payload = load_input_file(self.options.input_file, cwd=self.cwd)
            source = str(self.options.input_file)

        try:
            return SourceData.from_dict(payload)
        except ValueError as e:
            raise DataFetchError("malformed test data", source=source, original=e)

    def prepare(self, source: SourceData) -> PreparedData:
        return prep_data(
            source,
            folder=self.options.folder,
            top_dir_name=self.options.top_dir_name,
            style=self.options.style,
            framework=self.options.framework,
            cwd=self.cwd,
        )

    # ── 3. 檔案系統 ──

    def clear_output(self, data: PreparedData) -> None:
        """
        遞迴刪除舊的輸出目錄；目錄不存在不算錯誤。

        Raises:
            FilesystemError
        """
        top = Path(data.top_dir_path)
        if not top.exists() and not top.is_symlink():
            return
        logger.info(f"清除舊輸出: {top}")
        try:
            if top.is_dir() and not top.is_symlink():
                shutil.rmtree(top)
            else:
                top.unlink()
        except OSError as e:
            raise FilesystemError(str(top), original=e)

    # ── 4. 產生 ──

    def run(self) -> PreparedData:
        """
        執行完整流程。

        Returns:
            交給 backend 的 PreparedData
        """
        self.validate()

        logger.info("讀取測試資料...")
        source = self.load_source()

        logger.info("整理目錄樹...")
        data = self.prepare(source)

        self.clear_output(data)

        name = self.options.framework or self.options.path_to_gen
        logger.info(f"產生中: {name} → {data.top_dir_path}")
        if isinstance(self.backend, GeneratorBackend):
            self.backend.generate(data)
        else:
            # 自訂 generator 模組收到原始 camelCase dict
            self.backend.generate(data.to_dict())
        logger.info("產生完成！")
        return data
