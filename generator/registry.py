"""
Generator Registry — 官方 backend 清單 + 自訂 backend 載入

兩種取得 backend 的方式，最後都收斂成同一個介面
(有 generate(data)，可選 styles)：

    1. 官方 backend：依名稱查表
        backend = get_backend("pytest")

    2. 自訂 backend：從檔案路徑載入 (.py 檔或含 __init__.py 的目錄)
        backend = load_custom_backend("my_gen/generator.py")

自訂 backend 模組只要有 generate(data) 函式即可，
也可以宣告 styles = [...]。

官方 backend (GeneratorBackend 子類別) 收到 PreparedData；
自訂模組收到 PreparedData.to_dict() 的 camelCase dict：
    {topDirName, topDirPath, raw, directory, components, tests,
     folder, style, framework, folders}
"""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from typing import Any

from core.exceptions import BackendError, StyleSelectionError, UnknownBackendError
from generator.backends import GeneratorBackend, ManifestBackend, PytestBackend
from utils.logger import logger


BUILTIN_BACKENDS: dict[str, GeneratorBackend] = {
    backend.name: backend
    for backend in (PytestBackend(), ManifestBackend())
}


def available_backends() -> list[dict]:
    """列出所有官方 backend"""
    return [
        {
            "name": b.name,
            "description": b.description,
            "styles": list(b.styles),
        }
        for b in BUILTIN_BACKENDS.values()
    ]


def get_backend(name: str) -> GeneratorBackend:
    """
    依名稱取得官方 backend。

    Raises:
        UnknownBackendError: 名稱不存在
    """
    backend = BUILTIN_BACKENDS.get(name)
    if backend is None:
        raise UnknownBackendError(name, sorted(BUILTIN_BACKENDS))
    return backend


def load_custom_backend(path: str | Path, cwd: str | Path | None = None) -> Any:
    """
    從檔案路徑載入自訂 backend 模組。

    Args:
        path: .py 檔或 package 目錄；相對路徑以 cwd 為基準
        cwd: 基準目錄 (預設目前工作目錄)

    Returns:
        已載入的模組

    Raises:
        BackendError: 載入失敗或沒有可呼叫的 generate
    """
    target = Path(path)
    if not target.is_absolute():
        target = Path(cwd or Path.cwd()) / target

    if target.is_dir():
        target = target / "__init__.py"
    elif not target.exists() and target.suffix != ".py":
        target = target.with_suffix(".py")

    if not target.is_file():
        raise BackendError(str(path), f"找不到檔案: {target}")

    module_name = f"snapgen_custom_{target.parent.name}_{target.stem}"
    try:
        spec = importlib.util.spec_from_file_location(
            module_name, target,
            submodule_search_locations=[str(target.parent)]
            if target.name == "__init__.py" else None,
        )
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(module_name, None)
        raise BackendError(str(path), f"{type(e).__name__}: {e}") from e

    if not callable(getattr(module, "generate", None)):
        raise BackendError(
            str(path), f"Custom generator at path {target} does not export a generate method.",
        )

    logger.info(f"自訂 generator 已載入: {target}")
    return module


def backend_styles(backend: Any) -> list[str]:
    """取得 backend 宣告的 styles (未宣告回傳空列表)"""
    return list(getattr(backend, "styles", None) or [])


def validate_style(backend: Any, style: str | None, framework: str = "") -> None:
    """
    多風格 backend 必須指定存在的 style。

    只有一種 (或沒有宣告) style 的 backend 不檢查。

    Raises:
        StyleSelectionError
    """
    styles = backend_styles(backend)
    if len(styles) <= 1:
        return
    if not style:
        raise StyleSelectionError(framework, None, styles)
    if style not in styles:
        raise StyleSelectionError(framework, style, styles)
