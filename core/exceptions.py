"""
自訂 Exception 體系

產生流程中每種失敗都有明確的分類與訊息。
上層 (CLI) 只要 catch SnapGenError 即可攔截一切流程錯誤，
也可以精準 catch 子類別 (如 DirectoryNotFoundError)。

Exception 樹：
    SnapGenError
    ├── ConfigurationError
    │   ├── UnknownBackendError
    │   ├── StyleSelectionError
    │   └── MissingSourceError
    ├── DataFetchError
    ├── DirectoryNotFoundError
    ├── UnsafePathError
    ├── FilesystemError
    └── BackendError

所有錯誤對單次執行都是終止性的：不重試、不做部分產生。
"""


class SnapGenError(Exception):
    """產生器所有例外的基底，catch 這個就能攔截一切流程錯誤"""

    def __init__(self, message: str = "", context: dict | None = None):
        self.context = context or {}
        super().__init__(message)


# ── 設定 / 命令列選項 ──

class ConfigurationError(SnapGenError):
    """命令列選項缺漏或互相矛盾，流程尚未開始"""


class UnknownBackendError(ConfigurationError):
    """指定的官方 generator 不存在"""

    def __init__(self, name: str = "", available: list[str] | None = None):
        available = available or []
        msg = f"Official framework '{name}' doesn't exist."
        if available:
            msg += f" Available: {', '.join(available)}"
        super().__init__(msg, context={"name": name, "available": available})


class StyleSelectionError(ConfigurationError):
    """多風格 generator 未指定 style，或 style 不存在"""

    def __init__(self, framework: str = "", style: str | None = None,
                 styles: list[str] | None = None):
        styles = list(styles or [])
        if style is None:
            msg = (
                "Please select the framework style with -s.  "
                f"Options:  {','.join(styles)}"
            )
        else:
            msg = f"Style {style} for framework {framework} doesn't exist."
        super().__init__(
            msg, context={"framework": framework, "style": style, "styles": styles},
        )


class MissingSourceError(ConfigurationError):
    """既沒有 token 也沒有本地輸入檔"""

    def __init__(self, message: str = (
        "Please supply an auth token via -t <token> "
        "or supply a test JSON file with -i <inputFile>."
    )):
        super().__init__(message)


# ── 資料來源 ──

class DataFetchError(SnapGenError):
    """遠端讀取失敗、回應格式錯誤、本地檔案不存在或無法解析"""

    def __init__(self, message: str = "", source: str = "",
                 original: Exception | None = None):
        self.original = original
        msg = f"Could not obtain the content for this user. reason: {message}"
        if original:
            msg += f" ({type(original).__name__}: {original})"
        super().__init__(msg, context={"source": source})


class DirectoryNotFoundError(SnapGenError, LookupError):
    """指定的子樹 (folder id) 在目錄樹中找不到"""

    def __init__(self, folder_id: str = ""):
        super().__init__(
            f"Couldn't find directory: {folder_id}.  Has it been deleted?",
            context={"folder_id": folder_id},
        )


class UnsafePathError(SnapGenError, ValueError):
    """module 名稱會讓資料夾跑出輸出目錄 (如 "..", 絕對路徑)"""

    def __init__(self, node_id: str = "", module: str = ""):
        super().__init__(
            f"Folder {node_id} has an unsafe module name: '{module}'",
            context={"node_id": node_id, "module": module},
        )


# ── 檔案系統 ──

class FilesystemError(SnapGenError):
    """輸出目錄無法清除"""

    def __init__(self, path: str = "", original: Exception | None = None):
        self.original = original
        msg = f"Could not remove old output directory: {path}"
        if original:
            msg += f" ({type(original).__name__}: {original})"
        super().__init__(msg, context={"path": path})


# ── Backend ──

class BackendError(SnapGenError):
    """自訂 generator 載入失敗或缺少 generate"""

    def __init__(self, path: str = "", message: str = ""):
        msg = f"Custom generator error [{path}]: {message}" if path else message
        super().__init__(msg, context={"path": path})
