"""
設定管理模組
統一管理 SnapTest API 位置、認證 token、輸出目錄名稱等設定。
支援透過環境變數覆蓋預設值，方便 CI/CD 整合。
"""

import os


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in ("0", "false", "no", "off", "")


class Config:
    """產生器全域設定"""

    # SnapTest API
    API_URL = os.getenv("SNAPTEST_API", "https://www.snaptest.io/api").rstrip("/")
    API_TOKEN = os.getenv("SNAPTEST_TOKEN") or None

    # HTTP
    REQUEST_TIMEOUT = int(os.getenv("SNAPTEST_TIMEOUT", "30"))
    VERIFY_SSL = _env_flag("SNAPTEST_VERIFY_SSL", "1")

    # 輸出
    TOP_DIR_NAME = os.getenv("SNAPTEST_TOP_DIR", "snaptests")

    @classmethod
    def load_url(cls) -> str:
        """讀取整包測試資料的 endpoint"""
        return f"{cls.API_URL}/load"
