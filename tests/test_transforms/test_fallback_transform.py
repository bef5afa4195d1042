"""Tests for VarFallbackTransform and the fallbacks configuration."""

from pathlib import Path

import pytest

from var_fallback.config import INVALID_CONFIG, FallbackConfig
from var_fallback.engine.loader import SourceLoader
from var_fallback.model.diagnostic import DiagnosticSink
from var_fallback.parser import parse_css
from var_fallback.transforms import VarFallbackTransform, apply_transforms


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write(directory: Path, name: str, css: str) -> str:
    (directory / name).write_text(css)
    return name


def _apply(css: str, fallbacks: list[str], directory: Path) -> tuple[str, DiagnosticSink]:
    sink = DiagnosticSink()
    ss = parse_css(css, path=str(directory / "target.css"))
    transform = VarFallbackTransform(FallbackConfig(fallbacks=tuple(fallbacks)))
    return transform.apply(ss, sink).to_css(), sink


# ---------------------------------------------------------------------------
# FallbackConfig
# ---------------------------------------------------------------------------


class TestFallbackConfig:
    def test_default_is_empty(self):
        assert FallbackConfig().fallbacks == ()

    def test_from_options(self):
        sink = DiagnosticSink()
        config = FallbackConfig.from_options({"fallbacks": ["a.css", Path("b.css")]}, sink)
        assert config.fallbacks == ("a.css", "b.css")
        assert len(sink) == 0

    def test_tuple_accepted(self):
        sink = DiagnosticSink()
        assert FallbackConfig.from_options({"fallbacks": ("a.css",)}, sink).fallbacks == ("a.css",)

    @pytest.mark.parametrize("options", [None, {}, {"fallbacks": None}, {"fallbacks": "a.css"}])
    def test_invalid_shapes_warn(self, options):
        sink = DiagnosticSink()
        assert FallbackConfig.from_options(options, sink).fallbacks == ()
        assert len(sink.by_rule(INVALID_CONFIG)) == 1

    def test_empty_list_is_silent(self):
        sink = DiagnosticSink()
        assert FallbackConfig.from_options({"fallbacks": []}, sink).fallbacks == ()
        assert len(sink) == 0

    def test_bad_entries_skipped(self):
        sink = DiagnosticSink()
        config = FallbackConfig.from_options({"fallbacks": ["a.css", 3, None]}, sink)
        assert config.fallbacks == ("a.css",)
        assert len(sink.by_rule(INVALID_CONFIG)) == 2


# ---------------------------------------------------------------------------
# VarFallbackTransform
# ---------------------------------------------------------------------------


class TestVarFallbackTransform:
    def test_end_to_end_example(self, tmp_path):
        src = _write(tmp_path, "vars.css", ":root{--size:16px;--pad:var(--size);}")
        css, sink = _apply(".b{padding:var(--pad);}", [src], tmp_path)
        assert css == ".b{padding:var(--pad, 16px);}"
        assert len(sink) == 0

    def test_no_fallbacks_is_noop(self, tmp_path):
        css, sink = _apply(".b{color:var(--c);}", [], tmp_path)
        assert css == ".b{color:var(--c);}"
        assert len(sink) == 0

    def test_sources_relative_to_stylesheet(self, tmp_path):
        sub = tmp_path / "styles"
        sub.mkdir()
        _write(sub, "vars.css", ":root { --c: red; }")
        css, _ = _apply(".b{color:var(--c);}", ["vars.css"], sub)
        assert css == ".b{color:var(--c, red);}"

    def test_sources_relative_to_cwd_without_path(self, tmp_path, monkeypatch):
        _write(tmp_path, "vars.css", ":root { --c: red; }")
        monkeypatch.chdir(tmp_path)
        ss = parse_css(".b{color:var(--c);}")
        transform = VarFallbackTransform(FallbackConfig(fallbacks=("vars.css",)))
        assert transform.apply(ss, DiagnosticSink()).to_css() == ".b{color:var(--c, red);}"

    def test_missing_source_leaves_document_unchanged(self, tmp_path):
        css, sink = _apply(".b{color:var(--c);}", ["does-not-exist.css"], tmp_path)
        assert css == ".b{color:var(--c);}"
        assert len(sink.warnings) == 1

    def test_cycles_warn_and_stay_unchanged(self, tmp_path):
        src = _write(tmp_path, "vars.css", ":root { --a: var(--b); --b: var(--a); --c: 1px; }")
        css, sink = _apply(".b{width:var(--a); height:var(--c)}", [src], tmp_path)
        assert css == ".b{width:var(--a); height:var(--c, 1px)}"
        assert sink.by_rule("circular-reference")

    def test_loader_reused_across_runs(self, tmp_path):
        path = tmp_path / "vars.css"
        path.write_text(":root { --c: red; }")
        loader = SourceLoader()
        transform = VarFallbackTransform(FallbackConfig(fallbacks=("vars.css",)), loader)
        target = str(tmp_path / "t.css")

        first = transform.apply(parse_css(".b{color:var(--c)}", path=target), DiagnosticSink())
        assert first.to_css() == ".b{color:var(--c, red)}"

        path.write_text(":root { --c: green; }")
        second = transform.apply(parse_css(".b{color:var(--c)}", path=target), DiagnosticSink())
        assert second.to_css() == ".b{color:var(--c, green)}"

    def test_from_options(self, tmp_path):
        sink = DiagnosticSink()
        transform = VarFallbackTransform.from_options({"fallbacks": ["a.css"]}, sink)
        assert transform.config.fallbacks == ("a.css",)
        assert not sink.warnings

    def test_from_options_keeps_loader(self):
        loader = SourceLoader()
        transform = VarFallbackTransform.from_options({"fallbacks": []}, DiagnosticSink(), loader)
        assert transform.loader is loader

    def test_from_options_invalid_shape(self):
        sink = DiagnosticSink()
        transform = VarFallbackTransform.from_options({"fallbacks": "a.css"}, sink)
        assert transform.config.fallbacks == ()
        assert sink.by_rule(INVALID_CONFIG)

    def test_apply_transforms(self, tmp_path):
        src = _write(tmp_path, "vars.css", ":root { --c: red; }")
        ss = parse_css(".b{color:var(--c)}", path=str(tmp_path / "t.css"))
        transform = VarFallbackTransform(FallbackConfig(fallbacks=(src,)))
        result = apply_transforms(ss, [transform], DiagnosticSink())
        assert result.to_css() == ".b{color:var(--c, red)}"
