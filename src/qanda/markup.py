"""Text helpers for rendering user-submitted content."""

import html
import re
import unicodedata

import markdown as markdown_lib
import nh3

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_TAGS = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")

ALLOWED_URL_SCHEMES = frozenset({"http", "https", "mailto"})


def render_markdown(text: str | None) -> str:
    """Render Markdown to sanitised HTML.

    Raw HTML in the source is shown as text, and links or images whose URL
    scheme is not http, https or mailto lose the URL.
    """
    if not text:
        return ""
    rendered = markdown_lib.markdown(
        text.replace("<", "&lt;"),
        extensions=["extra", "nl2br", "sane_lists"],
        output_format="html",
    )
    return nh3.clean(rendered, url_schemes=set(ALLOWED_URL_SCHEMES))


def excerpt(text: str | None, length: int = 250) -> str:
    """Plain-text preview of a Markdown body, cut on a word boundary.

    The result is unescaped text; templates escape it on output.
    """
    if not text:
        return ""
    stripped = _TAGS.sub("", render_markdown(text))
    plain = _WHITESPACE.sub(" ", html.unescape(stripped)).strip()
    if len(plain) <= length:
        return plain
    cut = plain[:length].rsplit(" ", 1)[0]
    return f"{cut}..."


def slugify(value: str) -> str:
    """Lowercase ASCII slug with runs of other characters collapsed to '-'."""
    normalized = (
        unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    )
    return _NON_ALNUM.sub("-", normalized.lower()).strip("-")
