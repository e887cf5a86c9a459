"""
API Client 工具
向 SnapTest 伺服器讀取使用者的整包測試資料 (directory / tests / components)。
"""

import requests

from config.config import Config
from core.exceptions import DataFetchError
from utils.logger import logger


class ApiClient:
    """SnapTest REST API 客戶端"""

    def __init__(self, token: str, base_url: str | None = None,
                 timeout: int | None = None, verify: bool | None = None):
        self.base_url = (base_url or Config.API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else Config.REQUEST_TIMEOUT
        self.verify = verify if verify is not None else Config.VERIFY_SSL
        self.session = requests.Session()
        self.session.headers.update({"apikey": token})

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def get(self, path: str, params: dict | None = None) -> requests.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.info(f"[API] GET {url}")
        resp = self.session.get(
            url, params=params, timeout=self.timeout, verify=self.verify,
        )
        logger.info(f"[API] Status: {resp.status_code}")
        return resp

    def load(self) -> dict:
        """
        讀取整包測試資料。

        回應中的 directory.tree 會被攤平成 directory。

        Raises:
            DataFetchError: 連線失敗、回應不是 JSON、或伺服器回傳 error
        """
        try:
            resp = self.get("/load")
        except requests.RequestException as e:
            raise DataFetchError("request failed", source=self.base_url, original=e)

        try:
            data = resp.json()
        except ValueError as e:
            raise DataFetchError(
                f"invalid JSON response (HTTP {resp.status_code})",
                source=self.base_url, original=e,
            )

        if not isinstance(data, dict):
            raise DataFetchError("unexpected response shape", source=self.base_url)
        if data.get("error"):
            raise DataFetchError(str(data["error"]), source=self.base_url)

        directory = data.get("directory")
        if not isinstance(directory, dict) or "tree" not in directory:
            raise DataFetchError("response has no directory tree", source=self.base_url)
        data["directory"] = directory["tree"]
        return data
