"""
Manifest Backend
不產生任何框架程式碼，只建立資料夾並輸出 manifest.json，
方便檢查整理後的資料或給外部工具串接。
"""

import json
from pathlib import Path

from generator.backends.base import GeneratorBackend
from generator.schema import PreparedData
from utils.logger import logger


class ManifestBackend(GeneratorBackend):
    """輸出 manifest.json"""

    name = "manifest"
    description = "manifest.json (folders / tests / components)"
    styles = ["json"]

    filename = "manifest.json"

    def generate(self, data: PreparedData) -> None:
        self.create_folders(data)
        manifest = {
            "topDirName": data.top_dir_name,
            "folder": data.folder,
            "style": data.style,
            "framework": data.framework,
            "folders": list(data.folders),
            "tests": data.tests,
            "components": data.components,
        }
        path = self.write_file(
            Path(data.top_dir_path) / self.filename,
            json.dumps(manifest, ensure_ascii=False, indent=4),
        )
        logger.info(f"[manifest] {path}")
