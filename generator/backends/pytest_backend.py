"""
pytest Backend
根據 PreparedData 產生 pytest + Selenium 測試專案：

    <topDir>/
    ├── conftest.py          (driver fixture + 失敗截圖)
    ├── pytest.ini
    └── <folderPath>/
        ├── test_<name>.py       每個 test 一個檔案
        └── <name>_component.py  每個 component 一個檔案

步驟 (actions) 能對應到 Selenium 呼叫的就直接產生，其餘保留為註解。
"""

from __future__ import annotations

import re
from pathlib import Path

from generator.backends.base import GeneratorBackend
from generator.schema import PreparedData
from utils.logger import logger


# action type → 產生的程式碼樣板
_ACTION_MAP = {
    "FULL_PAGELOAD": 'driver.get({value!r})',
    "PAGELOAD": 'driver.get({value!r})',
    "URL_CHANGE_INDICATOR": 'driver.get({value!r})',
    "MOUSEDOWN": 'driver.find_element(By.CSS_SELECTOR, {selector!r}).click()',
    "CLICK": 'driver.find_element(By.CSS_SELECTOR, {selector!r}).click()',
    "INPUT": 'driver.find_element(By.CSS_SELECTOR, {selector!r}).send_keys({value!r})',
    "TEXT_INPUT": 'driver.find_element(By.CSS_SELECTOR, {selector!r}).send_keys({value!r})',
    "EL_PRESENT_ASSERT": 'assert driver.find_elements(By.CSS_SELECTOR, {selector!r})',
    "EL_NOT_PRESENT_ASSERT": 'assert not driver.find_elements(By.CSS_SELECTOR, {selector!r})',
    "TEXT_ASSERT": (
        'assert {value!r} in driver.find_element(By.CSS_SELECTOR, {selector!r}).text'
    ),
    "PAUSE": 'time.sleep({seconds})',
}


def to_slug(name: str) -> str:
    """任意名稱 → 合法的 Python 識別字 (小寫底線)"""
    slug = re.sub(r"[^0-9a-zA-Z]+", "_", name or "").strip("_").lower()
    if not slug:
        slug = "unnamed"
    if slug[0].isdigit():
        slug = f"t_{slug}"
    return slug


def _doc_text(text) -> str:
    """可安全放進 docstring 的單行文字"""
    return " ".join(str(text).split()).replace("\\", "/").replace('"', "'")


def to_class_name(name: str) -> str:
    parts = to_slug(name).split("_")
    return "".join(p.capitalize() for p in parts if p)


class PytestBackend(GeneratorBackend):
    """產生 pytest 測試檔案"""

    name = "pytest"
    description = "pytest + Selenium WebDriver"
    styles = ["function", "class"]

    def generate(self, data: PreparedData) -> None:
        top = Path(data.top_dir_path)
        style = data.style or self.styles[0]

        self.create_folders(data)
        self.write_conftest(top)
        self.write_pytest_ini(top)

        used: set[Path] = set()
        for component in data.components:
            path = self._unique_path(
                top / component["folderPath"], f"{self._record_slug(component)}_component",
                component, used,
            )
            self.write_file(path, self.render_component(component))

        for test in data.tests:
            path = self._unique_path(
                top / test["folderPath"], f"test_{self._record_slug(test)}", test, used,
            )
            self.write_file(path, self.render_test(test, style))

        logger.info(
            f"[pytest] {len(data.tests)} 個測試, {len(data.components)} 個 component "
            f"→ {top}"
        )

    # ── 專案檔 ──

    def write_conftest(self, top: Path) -> Path:
        """產生 conftest.py (driver fixture + 失敗截圖)"""
        code = '''\
"""
pytest fixtures — 自動產生
"""

import os
from pathlib import Path

import pytest
from selenium import webdriver

SCREENSHOT_DIR = Path(__file__).resolve().parent / "screenshots"


@pytest.fixture(scope="function")
def driver():
    """建立 Chrome WebDriver (HEADLESS=0 可關閉 headless)"""
    options = webdriver.ChromeOptions()
    if os.getenv("HEADLESS", "1") != "0":
        options.add_argument("--headless=new")
    drv = webdriver.Chrome(options=options)
    yield drv
    drv.quit()


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """測試失敗時自動截圖"""
    outcome = yield
    report = outcome.get_result()
    if report.when == "call" and report.failed:
        driver = item.funcargs.get("driver")
        if driver:
            SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)
            path = SCREENSHOT_DIR / f"FAIL_{item.name}.png"
            driver.save_screenshot(str(path))
'''
        return self.write_file(top / "conftest.py", code)

    def write_pytest_ini(self, top: Path) -> Path:
        """產生 pytest.ini"""
        content = """\
[pytest]
python_files = test_*.py
python_classes = Test*
python_functions = test_*
addopts = -v --tb=short --import-mode=importlib
markers =
    snaptest: 由 SnapTest 產生的測試
"""
        return self.write_file(top / "pytest.ini", content)

    # ── 單一檔案 ──

    def render_test(self, test: dict, style: str = "function") -> str:
        """產生單一測試檔內容"""
        title = _doc_text(test.get("name") or test["id"])
        slug = self._record_slug(test)
        steps = self._render_steps(test.get("actions") or [])

        lines: list[str] = []
        lines.append('"""')
        lines.append(f'{title} — 自動產生 (SnapTest)')
        lines.append(f'node: {test.get("nodeId", "")}')
        lines.append('"""')
        lines.append('')
        lines.append('import time  # noqa: F401')
        lines.append('from pathlib import Path')
        lines.append('')
        lines.append('import pytest')
        lines.append('from selenium.webdriver.common.by import By  # noqa: F401')
        lines.append('')
        lines.append(
            f'ROOT_DIR = (Path(__file__).resolve().parent / '
            f'{test.get("pathToRoot") or "."!r}).resolve()'
        )
        lines.append('')
        lines.append('')

        if style == "class":
            lines.append(f'@pytest.mark.snaptest')
            lines.append(f'class Test{to_class_name(title)}:')
            lines.append(f'    """{title}"""')
            lines.append('')
            lines.append(f'    def test_{slug}(self, driver):')
            lines.extend(f'        {s}' for s in steps)
        else:
            lines.append(f'@pytest.mark.snaptest')
            lines.append(f'def test_{slug}(driver):')
            lines.append(f'    """{title}"""')
            lines.extend(f'    {s}' for s in steps)
        lines.append('')
        return "\n".join(lines)

    def render_component(self, component: dict) -> str:
        """產生單一 component 檔內容 (一個可重用函式)"""
        title = _doc_text(component.get("name") or component["id"])
        steps = self._render_steps(component.get("actions") or [])

        lines: list[str] = []
        lines.append('"""')
        lines.append(f'{title} — 可重用 component，自動產生 (SnapTest)')
        lines.append('"""')
        lines.append('')
        lines.append('import time  # noqa: F401')
        lines.append('')
        lines.append('from selenium.webdriver.common.by import By  # noqa: F401')
        lines.append('')
        lines.append('')
        lines.append(f'def {self._record_slug(component)}(driver):')
        lines.append(f'    """{title}"""')
        lines.extend(f'    {s}' for s in steps)
        lines.append('')
        return "\n".join(lines)

    # ── 內部 ──

    def _render_steps(self, actions: list[dict]) -> list[str]:
        steps: list[str] = []
        for i, action in enumerate(actions, 1):
            kind = str(action.get("type", "")).upper()
            note = _doc_text(action.get("description") or action.get("selector") or "")
            steps.append(f"# {i}. {kind}: {note}" if note else f"# {i}. {kind}")
            template = _ACTION_MAP.get(kind)
            if template is None:
                continue
            value = action.get("value")
            fields = {
                "selector": str(action.get("selector", "")),
                "value": "" if value is None else str(value),
            }
            if kind == "PAUSE":
                # value 為毫秒
                try:
                    fields["seconds"] = float(value or 0) / 1000
                except (TypeError, ValueError):
                    logger.debug(f"[pytest] 無法轉換 PAUSE: {action}")
                    continue
            steps.append(template.format(**fields))
        if not steps or all(s.startswith("#") for s in steps):
            steps.append("pass")
        return steps

    def _record_slug(self, record: dict) -> str:
        return to_slug(record.get("name") or str(record["id"]))

    def _unique_path(self, folder: Path, stem: str, record: dict,
                     used: set[Path]) -> Path:
        """同資料夾同名時在檔名後加上 nodeId"""
        path = folder / f"{stem}.py"
        if path in used:
            path = folder / f"{stem}_{to_slug(str(record.get('nodeId', record['id'])))}.py"
        used.add(path)
        return path
