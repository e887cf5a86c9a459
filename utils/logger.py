"""
日誌模組
統一的 logging 設定，預設只輸出到 console。

支援：
- Console 輸出（人類可讀格式）
- 檔案輸出（純文字 + 可選 JSON 結構化格式）
- 環境變數控制:
    LOG_LEVEL: console 日誌等級 (預設 INFO)
    LOG_FILE:  設定後同時寫入此檔案
    LOG_JSON:  設為 "1" 且有 LOG_FILE 時，另寫一份 <LOG_FILE>.json
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path


class JsonFormatter(logging.Formatter):
    """JSON 結構化日誌格式器，一行一筆"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def _create_logger() -> logging.Logger:
    _logger = logging.Logger("snapgen")
    _logger.setLevel(logging.DEBUG)

    console_level = getattr(
        logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO
    )

    fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)-7s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console handler（人類可讀）
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    _logger.addHandler(console)

    log_file = os.getenv("LOG_FILE", "").strip()
    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # File handler（純文字）
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(fmt)
        _logger.addHandler(file_handler)

        # JSON file handler（可選，設 LOG_JSON=1 啟用）
        if os.getenv("LOG_JSON", "").strip() == "1":
            json_handler = logging.FileHandler(
                log_path.with_name(log_path.name + ".json"), encoding="utf-8"
            )
            json_handler.setLevel(logging.DEBUG)
            json_handler.setFormatter(JsonFormatter())
            _logger.addHandler(json_handler)

    return _logger


logger = _create_logger()
