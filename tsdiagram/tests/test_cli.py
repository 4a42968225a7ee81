"""Tests for the command line entry point and settings."""

import pytest
from tsdiagram.__main__ import main, output_path_for
from tsdiagram.core.settings import ConverterSettings, get_settings, reset_settings


SOURCE = '''
interface Product {
  owner: User;
}

interface User {
  id: string;
}
'''


@pytest.fixture
def ts_file(tmp_path):
    path = tmp_path / "models.ts"
    path.write_text(SOURCE)
    return path


@pytest.fixture
def clean_settings(monkeypatch):
    for name in (
        "TSDIAGRAM_MAX_REPORTED_ERRORS",
        "TSDIAGRAM_SIMPLE_UNION_MAX",
        "TSDIAGRAM_SHOW_TYPE_PARAMETERS",
        "TSDIAGRAM_GENERIC_WRAPPERS",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


# =========================================================================
# Tests: CLI
# =========================================================================

class TestMain:
    def test_prints_diagram(self, ts_file, capsys):
        assert main([str(ts_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("classDiagram")
        assert "  Product --* User : owner" in out
        assert not ts_file.with_suffix(".mermaid").exists()

    def test_save_next_to_input(self, ts_file, capsys):
        assert main([str(ts_file), "--save"]) == 0
        saved = ts_file.resolve().with_suffix(".mermaid")
        assert saved.exists()
        assert saved.read_text(encoding="utf-8").startswith("classDiagram")
        assert f"Saved to: {saved}" in capsys.readouterr().out

    def test_save_into_directory(self, ts_file, tmp_path):
        out_dir = tmp_path / "diagrams" / "nested"
        assert main([str(ts_file), "--save", str(out_dir)]) == 0
        assert (out_dir / "models.mermaid").exists()

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "absent.ts")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_unsupported_file(self, tmp_path, capsys):
        path = tmp_path / "script.py"
        path.write_text("x = 1\n")
        assert main([str(path)]) == 1
        assert "Failed to convert" in capsys.readouterr().err

    def test_requires_file_argument(self):
        with pytest.raises(SystemExit):
            main([])


class TestOutputPath:
    def test_default(self, tmp_path):
        source = tmp_path / "shapes.ts"
        assert output_path_for(source, None) == tmp_path / "shapes.mermaid"

    def test_tsx(self, tmp_path):
        source = tmp_path / "view.tsx"
        assert output_path_for(source, None).name == "view.mermaid"

    def test_directory_created(self, tmp_path):
        target = tmp_path / "out"
        assert output_path_for(tmp_path / "a.ts", str(target)) == target.resolve() / "a.mermaid"
        assert target.is_dir()


# =========================================================================
# Tests: Settings
# =========================================================================

class TestSettings:
    def test_defaults(self, clean_settings):
        settings = ConverterSettings.from_env()
        assert settings == ConverterSettings()
        assert settings.max_reported_errors == 5
        assert settings.simple_union_max_members == 5
        assert settings.show_type_parameters is False
        assert "Observable" in settings.generic_wrappers

    def test_from_env(self, clean_settings, monkeypatch):
        monkeypatch.setenv("TSDIAGRAM_MAX_REPORTED_ERRORS", "10")
        monkeypatch.setenv("TSDIAGRAM_SIMPLE_UNION_MAX", "3")
        monkeypatch.setenv("TSDIAGRAM_SHOW_TYPE_PARAMETERS", "true")
        monkeypatch.setenv("TSDIAGRAM_GENERIC_WRAPPERS", "Array, Stream ,")
        settings = ConverterSettings.from_env()
        assert settings.max_reported_errors == 10
        assert settings.simple_union_max_members == 3
        assert settings.show_type_parameters is True
        assert settings.generic_wrappers == ("Array", "Stream")

    def test_invalid_values_fall_back(self, clean_settings, monkeypatch):
        monkeypatch.setenv("TSDIAGRAM_MAX_REPORTED_ERRORS", "many")
        monkeypatch.setenv("TSDIAGRAM_SIMPLE_UNION_MAX", "-1")
        settings = ConverterSettings.from_env()
        assert settings.max_reported_errors == 5
        assert settings.simple_union_max_members == 5

    def test_cached_until_reset(self, clean_settings, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("TSDIAGRAM_MAX_REPORTED_ERRORS", "1")
        assert get_settings() is first
        reset_settings()
        assert get_settings().max_reported_errors == 1
