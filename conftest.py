"""
pytest 全域 fixtures

提供：
- 範例 payload (root → folder → test / component)
- 寫到 tmp_path 的本地輸入檔
- 每個測試獨立的工作目錄
"""

import copy
import json

import pytest


SAMPLE_PAYLOAD = {
    "directory": {
        "id": "root",
        "type": "root",
        "root": True,
        "module": "Root",
        "children": [
            {
                "id": "f-auth",
                "type": "folder",
                "module": "Auth",
                "children": [
                    {"id": "n-login", "type": "test", "testId": "t-login"},
                    {
                        "id": "f-social",
                        "type": "folder",
                        "module": "Social",
                        "children": [
                            {"id": "n-google", "type": "test", "testId": "t-google"},
                        ],
                    },
                ],
            },
            {
                "id": "f-shop",
                "type": "folder",
                "module": "Shop",
                "children": [
                    {
                        "id": "f-cart",
                        "type": "folder",
                        "module": "Cart",
                        "children": [
                            {"id": "n-checkout", "type": "test", "testId": "t-checkout"},
                            {"id": "n-addcart", "type": "component", "testId": "c-addcart"},
                        ],
                    },
                    {"id": "n-stale", "type": "test", "testId": "t-deleted"},
                ],
            },
        ],
    },
    "tests": [
        {
            "id": "t-login",
            "name": "Login works",
            "actions": [
                {"type": "FULL_PAGELOAD", "value": "https://example.com/login"},
                {"type": "INPUT", "selector": "#email", "value": "a@b.c"},
                {"type": "MOUSEDOWN", "selector": "#submit"},
            ],
        },
        {"id": "t-google", "name": "Google login", "actions": []},
        {"id": "t-checkout", "name": "Checkout", "actions": [{"type": "PAUSE", "value": 500}]},
        {"id": "t-unused", "name": "Never referenced"},
    ],
    "components": [
        {"id": "c-addcart", "name": "Add to cart", "actions": []},
    ],
}


@pytest.fixture
def sample_payload():
    """每個測試拿到一份獨立的範例 payload"""
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """切換到乾淨的工作目錄"""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def input_file(workdir, sample_payload):
    """寫出本地 JSON 輸入檔，回傳相對檔名"""
    path = workdir / "tests.json"
    path.write_text(json.dumps(sample_payload), encoding="utf-8")
    return "tests.json"
