"""Unit tests for the Markdown renderer and extensions."""

import pytest

from samwiki.core.errors import RenderError
from samwiki.core.models import Page
from samwiki.core.renderer import create_renderer, render_markdown, render_page, resolve_wikilink


# ============================================================
# Wiki links
# ============================================================


class TestResolveWikilink:
    def test_target_only(self):
        assert resolve_wikilink("Target", None) == "Target"

    def test_with_fragment(self):
        assert resolve_wikilink("Target", "Fragment") == "Target#Fragment"

    def test_empty_fragment_omitted(self):
        assert resolve_wikilink("Target", "") == "Target"


class TestWikiLinks:
    def test_plain_link(self):
        html = render_markdown("See [[HomePage]]")
        assert 'href="HomePage"' in html
        assert ">HomePage</a>" in html

    def test_pipe_fragment(self):
        html = render_markdown("[[Target|Fragment]]")
        assert 'href="Target#Fragment"' in html

    def test_hash_fragment(self):
        html = render_markdown("[[Target#Section]]")
        assert 'href="Target#Section"' in html
        assert ">Target</a>" in html

    def test_nested_target(self):
        html = render_markdown("[[docs/Setup]]")
        assert 'href="docs/Setup"' in html

    def test_multiple_links_on_one_line(self):
        html = render_markdown("See [[Page1]] and [[Page2]]")
        assert 'href="Page1"' in html
        assert 'href="Page2"' in html

    def test_embed_image(self):
        html = render_markdown("![[diagram.png|Architecture]]")
        assert "<img" in html
        assert 'src="diagram.png"' in html
        assert 'alt="Architecture"' in html


# ============================================================
# Front matter
# ============================================================


class TestFrontMatter:
    def test_stripped(self):
        html = render_markdown("---\ntags: [a, b]\n---\n# Title\n")
        assert "tags" not in html
        assert "Title</h1>" in html

    def test_thematic_break_kept(self):
        html = render_markdown("Text\n\n---\n\nMore")
        assert "<hr" in html


# ============================================================
# Extensions
# ============================================================


class TestExtensions:
    def test_heading_has_id(self):
        html = render_markdown("# Hi")
        assert '<h1 id="hi">Hi</h1>' in html

    def test_strikethrough(self):
        html = render_markdown("This is ~~removed~~ text.")
        assert "<del>removed</del>" in html

    def test_table(self):
        html = render_markdown("| A | B |\n|---|---|\n| 1 | 2 |")
        assert "<table>" in html
        assert "<td>1</td>" in html

    def test_autolink(self):
        html = render_markdown("Visit https://example.com today")
        assert 'href="https://example.com"' in html

    def test_highlighted_code(self):
        html = render_markdown("```python\nprint('hi')\n```")
        assert 'class="highlight"' in html
        assert "print" in html

    def test_mermaid_block(self):
        html = render_markdown("```mermaid\ngraph TD\n  A --> B\n```")
        assert 'class="mermaid"' in html
        assert "graph TD" in html

    def test_emoji(self):
        html = render_markdown("Good job :smile:")
        assert ":smile:" not in html
        assert "\U0001f604" in html

    def test_hard_wraps(self):
        html = render_markdown("line one\nline two")
        assert "<br />" in html

    def test_task_list(self):
        html = render_markdown("- [ ] todo\n- [x] done")
        assert 'type="checkbox"' in html


# ============================================================
# Pages
# ============================================================


class TestRenderPage:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "Home.md"
        path.write_text("# Hi\n", encoding="utf-8")
        page = Page(name="Home", file_path=path, uri="/Home")
        assert "Hi</h1>" in render_page(page)

    def test_missing_file(self, tmp_path):
        page = Page(name="Gone", file_path=tmp_path / "Gone.md", uri="/Gone")
        with pytest.raises(RenderError):
            render_page(page)


class TestCreateRenderer:
    def test_returns_markdown_instance(self):
        from markdown import Markdown

        assert isinstance(create_renderer(), Markdown)
