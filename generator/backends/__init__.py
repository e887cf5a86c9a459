"""
官方 generator backends

    pytest   — pytest + Selenium 測試檔
    manifest — 只輸出 manifest.json
"""

from generator.backends.base import GeneratorBackend
from generator.backends.manifest import ManifestBackend
from generator.backends.pytest_backend import PytestBackend

__all__ = ["GeneratorBackend", "ManifestBackend", "PytestBackend"]
