"""Tests for slug, Markdown, and excerpt helpers."""

from qanda.markup import excerpt, render_markdown, slugify


class TestSlugify:
    """Tests for slugify."""

    def test_lowercases_and_hyphenates(self) -> None:
        assert slugify("How Do I Use FastAPI?") == "how-do-i-use-fastapi"

    def test_collapses_runs_and_trims(self) -> None:
        assert slugify("  --Hello,   World!--  ") == "hello-world"

    def test_transliterates_accents(self) -> None:
        assert slugify("Café à la crème") == "cafe-a-la-creme"

    def test_non_latin_title_gives_empty_slug(self) -> None:
        assert slugify("日本語") == ""


class TestRenderMarkdown:
    """Tests for render_markdown."""

    def test_renders_emphasis(self) -> None:
        assert "<strong>bold</strong>" in render_markdown("some **bold** text")

    def test_raw_html_is_neutralised(self) -> None:
        html = render_markdown("<script>alert(1)</script>")

        assert "<script>" not in html
        assert "&lt;script" in html

    def test_javascript_link_loses_its_url(self) -> None:
        html = render_markdown("[click](javascript:alert(document.cookie))")

        assert "javascript:" not in html
        assert "click" in html

    def test_reference_style_javascript_link_loses_its_url(self) -> None:
        html = render_markdown("[click][x]\n\n[x]: javascript:alert(1)")

        assert "javascript:" not in html

    def test_javascript_image_source_is_dropped(self) -> None:
        assert "javascript:" not in render_markdown("![pic](javascript:alert(1))")

    def test_http_links_are_kept(self) -> None:
        html = render_markdown("[docs](https://docs.python.org/3/)")

        assert 'href="https://docs.python.org/3/"' in html

    def test_empty_body(self) -> None:
        assert render_markdown(None) == ""
        assert render_markdown("") == ""


class TestExcerpt:
    """Tests for excerpt."""

    def test_short_text_is_unchanged_plain_text(self) -> None:
        assert excerpt("Some *emphasis* here") == "Some emphasis here"

    def test_long_text_is_cut_on_word_boundary(self) -> None:
        text = "word " * 100

        result = excerpt(text, length=22)

        assert result == "word word word word..."

    def test_entities_are_unescaped_to_plain_text(self) -> None:
        assert excerpt("Tom & Jerry say 1 < 2") == "Tom & Jerry say 1 < 2"
