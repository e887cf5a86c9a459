"""
本地測試資料載入器
從 JSON / YAML 檔載入整包測試資料 (與伺服器回應相同的結構)。

用法：
    from utils.data_loader import load_input_file

    payload = load_input_file("my_tests.json")
    payload = load_input_file("my_tests.yaml", cwd="/path/to/project")
"""

import json
from pathlib import Path

from core.exceptions import DataFetchError


def load_json(filepath: Path) -> dict:
    """從 JSON 檔載入"""
    with open(filepath, "r", encoding="utf-8") as f:
        return json.load(f)


def load_yaml(filepath: Path) -> dict:
    """從 YAML 檔載入"""
    import yaml

    with open(filepath, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


_LOADERS = {
    ".json": load_json,
    ".yaml": load_yaml,
    ".yml": load_yaml,
}


def load_input_file(filename: str | Path, cwd: str | Path | None = None) -> dict:
    """
    自動偵測檔案格式並載入。

    相對路徑以 cwd (預設目前工作目錄) 為基準。
    無副檔名或未知副檔名一律當 JSON 讀。

    Raises:
        DataFetchError: 檔案不存在或無法解析
    """
    filepath = Path(filename)
    if not filepath.is_absolute():
        filepath = Path(cwd or Path.cwd()) / filepath

    if not filepath.is_file():
        raise DataFetchError(f"input file not found: {filepath}", source=str(filepath))

    loader = _LOADERS.get(filepath.suffix.lower(), load_json)
    try:
        data = loader(filepath)
    except Exception as e:
        raise DataFetchError("input file could not be parsed",
                             source=str(filepath), original=e)

    if not isinstance(data, dict):
        raise DataFetchError("input file must contain an object", source=str(filepath))
    return data
