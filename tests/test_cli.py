"""Tests for the batch converter and the command line entry point."""

import pytest

from GladestMarkdown import GladestMarkdown, main

from conftest import FakeRenderer


@pytest.fixture
def source_tree(tmp_path):
    root = tmp_path / "notes"
    (root / "sub").mkdir(parents=True)
    (root / ".hidden").mkdir()
    (root / "a note.md").write_text("# Energy\n\nSee $E = mc^2$ here.\n", encoding="utf-8")
    (root / "sub" / "doc.htex").write_text('<p>Sum: <eq env="displaymath">\\sum_i x_i</eq></p>\n', encoding="utf-8")
    (root / "readme.txt").write_text("$ignored$", encoding="utf-8")
    (root / ".hidden" / "skip.md").write_text("$skip$", encoding="utf-8")
    (root / "~draft.md").write_text("$draft$", encoding="utf-8")
    return root


class TestGladestMarkdown:
    def test_collects_sources(self, source_tree, tmp_path) -> None:
        converter = GladestMarkdown(source_tree, tmp_path / "out", renderer=FakeRenderer())
        assert converter.files == [source_tree / "a note.md", source_tree / "sub" / "doc.htex"]

    def test_compiles_pages(self, source_tree, tmp_path) -> None:
        renderer = FakeRenderer()
        out = tmp_path / "out"
        converter = GladestMarkdown(source_tree, out, renderer=renderer)
        assert converter.compile_webpages() == 0

        page = (out / "a-note.html").read_text(encoding="utf-8")
        assert page.startswith("<!DOCTYPE html>")
        assert "<title>a note</title>" in page
        assert "<h1>Energy</h1>" in page
        assert '<span class="gladest gladest-inline"><img class="fake"' in page

        htex = (out / "sub" / "doc.html").read_text(encoding="utf-8")
        assert htex.startswith('<p>Sum: <div class="gladest gladest-block">')
        assert [call[:2] for call in renderer.calls] == [("E = mc^2", "$"), ("\\sum_i x_i", "$$")]

    def test_single_file(self, source_tree, tmp_path) -> None:
        out = tmp_path / "out"
        converter = GladestMarkdown(source_tree / "sub" / "doc.htex", out, renderer=FakeRenderer())
        assert converter.compile_webpages() == 0
        assert (out / "doc.html").is_file()

    def test_write_failures_counted(self, source_tree, tmp_path) -> None:
        out = tmp_path / "out"
        out.write_text("not a directory", encoding="utf-8")
        converter = GladestMarkdown(source_tree, out, renderer=FakeRenderer())
        assert converter.compile_webpages() == 2

    def test_missing_input(self, tmp_path) -> None:
        with pytest.raises(ValueError, match="does not exist"):
            GladestMarkdown(tmp_path / "missing", tmp_path / "out", renderer=FakeRenderer())


class TestMain:
    def test_missing_input(self, tmp_path, capsys) -> None:
        assert main([str(tmp_path / "missing")]) == 2
        assert "does not exist" in capsys.readouterr().err

    def test_conflicting_font_config(self, source_tree, tmp_path, capsys) -> None:
        config = tmp_path / "gladest.yaml"
        config.write_text("fonts:\n  body_font:\n    system: Times\n    file: /fonts/times.ttf\n", encoding="utf-8")
        assert main([str(source_tree), "-o", str(tmp_path / "out"), "-c", str(config)]) == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_renders_png(self, tmp_path) -> None:
        source = tmp_path / "page.md"
        source.write_text("Inline $x^2$ math.\n", encoding="utf-8")
        out = tmp_path / "out"
        assert main([str(source), "-o", str(out), "-f", "png", "-p", "72"]) == 0
        assert "data:image/png;base64," in (out / "page.html").read_text(encoding="utf-8")
