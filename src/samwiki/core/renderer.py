"""Markdown renderer with wiki link, emoji, diagram and front-matter support."""

import re
from xml.etree.ElementTree import Element

import pymdownx.emoji
import pymdownx.superfences
from markdown import Markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor
from markdown.preprocessors import Preprocessor

from samwiki.core.errors import RenderError
from samwiki.core.metadata import split_front_matter
from samwiki.core.models import Page


# Wiki links: [[Target]], [[Target#Fragment]], [[Target|Fragment]]
WIKI_LINK_PATTERN = r"\[\[([^\]|#]+)(?:#([^\]|]+))?(?:\|([^\]]+))?\]\]"

# Embedded form: ![[image.png]] or ![[image.png|alt text]]
WIKI_EMBED_PATTERN = r"!\[\[([^\]|]+)(?:\|([^\]]+))?\]\]"


def resolve_wikilink(target: str, fragment: str | None) -> str:
    """Build the link destination ``Target#Fragment``.

    The fragment part is omitted when absent.
    """
    if fragment:
        return f"{target}#{fragment}"
    return target


class WikiLinkInlineProcessor(InlineProcessor):
    """Inline processor for wiki links."""

    def handleMatch(self, m: re.Match, data: str) -> tuple[Element | None, int, int]:
        """Convert wiki link match to HTML anchor element."""
        target = m.group(1).strip()
        fragment = m.group(2) or m.group(3)
        if fragment:
            fragment = fragment.strip()

        el = Element("a")
        el.text = m.group(3).strip() if m.group(3) else target
        el.set("href", resolve_wikilink(target, fragment))
        el.set("class", "wikilink")
        return el, m.start(0), m.end(0)


class WikiEmbedInlineProcessor(InlineProcessor):
    """Inline processor for embedded wiki images."""

    def handleMatch(self, m: re.Match, data: str) -> tuple[Element | None, int, int]:
        src = m.group(1).strip()
        alt = m.group(2).strip() if m.group(2) else src

        el = Element("img")
        el.set("src", src)
        el.set("alt", alt)
        return el, m.start(0), m.end(0)


class WikiLinkExtension(Extension):
    """Markdown extension for wiki links."""

    def extendMarkdown(self, md: Markdown) -> None:
        """Add wiki link patterns to markdown parser."""
        md.inlinePatterns.register(
            WikiEmbedInlineProcessor(WIKI_EMBED_PATTERN, md), "wiki_embed", 76
        )
        md.inlinePatterns.register(
            WikiLinkInlineProcessor(WIKI_LINK_PATTERN, md), "wiki_link", 75
        )


class FrontMatterPreprocessor(Preprocessor):
    """Drop the front-matter block so it never reaches the output."""

    def run(self, lines: list[str]) -> list[str]:
        meta, body = split_front_matter("\n".join(lines))
        if meta is None:
            return lines
        return body.split("\n")


class FrontMatterExtension(Extension):
    """Markdown extension stripping ``---`` delimited front matter."""

    def extendMarkdown(self, md: Markdown) -> None:
        # Must run ahead of normalize_whitespace (30) and fences (25).
        md.preprocessors.register(FrontMatterPreprocessor(md), "front_matter", 40)


def create_renderer() -> Markdown:
    """Create a Markdown renderer with the wiki's extension set.

    Returns:
        Configured Markdown instance. Instances keep state between
        conversions, so use one per request.
    """
    return Markdown(
        extensions=[
            # GitHub-flavoured basics
            "tables",
            "sane_lists",
            "toc",  # Heading ids
            "nl2br",  # Hard wraps
            "pymdownx.tilde",  # ~~strikethrough~~
            "pymdownx.magiclink",  # Bare URL autolinks
            "pymdownx.tasklist",
            # Code and diagrams
            "pymdownx.highlight",
            "pymdownx.superfences",
            # Emoji shortcodes
            "pymdownx.emoji",
            # Custom extensions
            FrontMatterExtension(),
            WikiLinkExtension(),  # [[WikiLinks]]
        ],
        extension_configs={
            "pymdownx.tilde": {"subscript": False},
            "pymdownx.highlight": {"use_pygments": True, "css_class": "highlight"},
            "pymdownx.superfences": {
                "custom_fences": [
                    {
                        "name": "mermaid",
                        "class": "mermaid",
                        "format": pymdownx.superfences.fence_div_format,
                    }
                ]
            },
            "pymdownx.emoji": {
                "emoji_index": pymdownx.emoji.gemoji,
                "emoji_generator": pymdownx.emoji.to_alt,
            },
        },
        output_format="xhtml",
    )


def render_markdown(content: str) -> str:
    """Render Markdown text to an HTML fragment."""
    return create_renderer().convert(content)


def render_page(page: Page) -> str:
    """Read a page from disk and render it.

    Raises:
        RenderError: the file could not be read or converted.
    """
    try:
        return render_markdown(page.markdown())
    except Exception as e:
        raise RenderError(f"error converting {page.name} to HTML: {e}") from e
