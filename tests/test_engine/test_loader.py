"""Tests for SourceLoader."""

from pathlib import Path

import pytest

from var_fallback.engine.loader import SourceLoader, SourceLoadError


class TestResolve:
    def test_relative_to_base(self, tmp_path):
        loader = SourceLoader()
        assert loader.resolve("a.css", tmp_path) == (tmp_path / "a.css").resolve()

    def test_relative_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert SourceLoader().resolve("sub/a.css") == (tmp_path / "sub" / "a.css").resolve()

    def test_absolute_path_unchanged(self, tmp_path):
        target = tmp_path / "a.css"
        assert SourceLoader().resolve(str(target), "/elsewhere") == target


class TestLoad:
    def test_parses_file(self, tmp_path):
        (tmp_path / "a.css").write_text(":root { --c: red; }")
        ss = SourceLoader().load("a.css", tmp_path)
        assert [d.value for d in ss.walk_declarations()] == ["red"]
        assert ss.path == str((tmp_path / "a.css").resolve())

    def test_cache_hit(self, tmp_path):
        (tmp_path / "a.css").write_text(":root { --c: red; }")
        loader = SourceLoader()
        first = loader.load("a.css", tmp_path)
        assert loader.load("a.css", tmp_path) is first
        assert len(loader) == 1

    def test_changed_file_reparsed(self, tmp_path):
        path = tmp_path / "a.css"
        path.write_text(":root { --c: red; }")
        loader = SourceLoader()
        loader.load("a.css", tmp_path)
        path.write_text(":root { --c: green; }")
        ss = loader.load("a.css", tmp_path)
        assert [d.value for d in ss.walk_declarations()] == ["green"]

    def test_clear(self, tmp_path):
        (tmp_path / "a.css").write_text(":root { --c: red; }")
        loader = SourceLoader()
        loader.load("a.css", tmp_path)
        loader.clear()
        assert len(loader) == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceLoadError) as excinfo:
            SourceLoader().load("missing.css", tmp_path)
        assert excinfo.value.source == "missing.css"

    def test_parse_failure_reports_location(self, tmp_path):
        (tmp_path / "bad.css").write_text(".a {\n  color\n}")
        with pytest.raises(SourceLoadError) as excinfo:
            SourceLoader().load("bad.css", tmp_path)
        assert excinfo.value.line == 2
        assert "cannot parse" in excinfo.value.reason

    def test_invalid_utf8(self, tmp_path):
        (tmp_path / "bin.css").write_bytes(b"\xff\xfe\x00:root")
        with pytest.raises(SourceLoadError):
            SourceLoader().load(Path("bin.css"), tmp_path)
