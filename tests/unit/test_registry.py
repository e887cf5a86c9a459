"""
generator/registry.py 單元測試

驗證官方 backend 查表、自訂 backend 載入與 style 檢查。
"""

import textwrap

import pytest

from core.exceptions import (
    BackendError,
    ConfigurationError,
    StyleSelectionError,
    UnknownBackendError,
)
from generator.backends import ManifestBackend, PytestBackend
from generator.registry import (
    available_backends,
    backend_styles,
    get_backend,
    load_custom_backend,
    validate_style,
)


@pytest.mark.unit
class TestBuiltinRegistry:
    """官方 backend"""

    @pytest.mark.unit
    def test_get_pytest(self):
        assert isinstance(get_backend("pytest"), PytestBackend)

    @pytest.mark.unit
    def test_get_manifest(self):
        assert isinstance(get_backend("manifest"), ManifestBackend)

    @pytest.mark.unit
    def test_unknown_raises(self):
        """不存在的名稱拋出 UnknownBackendError (屬於設定錯誤)"""
        with pytest.raises(UnknownBackendError) as exc_info:
            get_backend("nightwatch")
        assert isinstance(exc_info.value, ConfigurationError)
        assert "nightwatch" in str(exc_info.value)
        assert "pytest" in str(exc_info.value)

    @pytest.mark.unit
    def test_available(self):
        names = {b["name"]: b for b in available_backends()}
        assert set(names) == {"pytest", "manifest"}
        assert names["pytest"]["styles"] == ["function", "class"]


@pytest.mark.unit
class TestLoadCustomBackend:
    """load_custom_backend"""

    @pytest.mark.unit
    def test_load_py_file(self, tmp_path):
        (tmp_path / "my_gen.py").write_text(textwrap.dedent("""\
            styles = ["a", "b"]
            calls = []

            def generate(data):
                calls.append(data)
        """), encoding="utf-8")
        module = load_custom_backend("my_gen.py", cwd=tmp_path)
        assert callable(module.generate)
        assert backend_styles(module) == ["a", "b"]

    @pytest.mark.unit
    def test_load_without_suffix(self, tmp_path):
        """省略 .py 也能找到"""
        (tmp_path / "gen.py").write_text("def generate(data):\n    pass\n", encoding="utf-8")
        module = load_custom_backend("gen", cwd=tmp_path)
        assert callable(module.generate)

    @pytest.mark.unit
    def test_load_package_dir(self, tmp_path):
        """目錄形式的 package (含相對 import)"""
        pkg = tmp_path / "my_pkg"
        pkg.mkdir()
        (pkg / "render.py").write_text("def render():\n    return 'ok'\n", encoding="utf-8")
        (pkg / "__init__.py").write_text(textwrap.dedent("""\
            from .render import render

            def generate(data):
                return render()
        """), encoding="utf-8")
        module = load_custom_backend("my_pkg", cwd=tmp_path)
        assert module.generate(None) == "ok"

    @pytest.mark.unit
    def test_absolute_path(self, tmp_path):
        path = tmp_path / "abs_gen.py"
        path.write_text("def generate(data):\n    pass\n", encoding="utf-8")
        assert callable(load_custom_backend(str(path)).generate)

    @pytest.mark.unit
    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(BackendError):
            load_custom_backend("nope.py", cwd=tmp_path)

    @pytest.mark.unit
    def test_no_generate_raises(self, tmp_path):
        """沒有 generate 拋出 BackendError"""
        (tmp_path / "bad.py").write_text("styles = []\n", encoding="utf-8")
        with pytest.raises(BackendError) as exc_info:
            load_custom_backend("bad.py", cwd=tmp_path)
        assert "does not export a generate method" in str(exc_info.value)

    @pytest.mark.unit
    def test_generate_not_callable_raises(self, tmp_path):
        (tmp_path / "bad2.py").write_text("generate = 42\n", encoding="utf-8")
        with pytest.raises(BackendError):
            load_custom_backend("bad2.py", cwd=tmp_path)

    @pytest.mark.unit
    def test_import_error_wrapped(self, tmp_path):
        """模組本身執行失敗也包成 BackendError"""
        (tmp_path / "boom.py").write_text("raise RuntimeError('boom')\n", encoding="utf-8")
        with pytest.raises(BackendError) as exc_info:
            load_custom_backend("boom.py", cwd=tmp_path)
        assert "boom" in str(exc_info.value)


class _Backend:
    def __init__(self, styles):
        self.styles = styles

    def generate(self, data):
        pass


@pytest.mark.unit
class TestValidateStyle:
    """validate_style"""

    @pytest.mark.unit
    def test_multi_style_requires_style(self):
        with pytest.raises(StyleSelectionError) as exc_info:
            validate_style(_Backend(["es5", "es6"]), None, "nightwatch")
        assert "-s" in str(exc_info.value)
        assert "es5,es6" in str(exc_info.value)

    @pytest.mark.unit
    def test_multi_style_unknown_style(self):
        with pytest.raises(StyleSelectionError) as exc_info:
            validate_style(_Backend(["es5", "es6"]), "es7", "nightwatch")
        assert "es7" in str(exc_info.value)

    @pytest.mark.unit
    def test_multi_style_valid(self):
        validate_style(_Backend(["es5", "es6"]), "es6")

    @pytest.mark.unit
    @pytest.mark.parametrize("styles", [None, [], ["only"]])
    def test_single_or_no_style_not_checked(self, styles):
        """只有一種或沒有宣告 style 時不檢查"""
        validate_style(_Backend(styles), None)
        validate_style(_Backend(styles), "anything")

    @pytest.mark.unit
    def test_module_without_styles(self):
        """沒有 styles 屬性的物件視為空列表"""
        assert backend_styles(object()) == []
