"""Markdown rendering for post bodies."""

import logging
from xml.etree.ElementTree import Element

from markdown import Markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import SimpleTagInlineProcessor
from markdown.treeprocessors import Treeprocessor
from markdown.util import HTML_PLACEHOLDER_RE
from pygments.formatters import HtmlFormatter
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

# Pattern for strikethrough: ~~text~~
# Group 2 must contain the text (SimpleTagInlineProcessor expectation)
STRIKETHROUGH_PATTERN = r"(~~)(.*?)~~"

HIGHLIGHT_CSS_CLASS = "highlight"

# CSS class added to each rendered element, keyed by tag
DEFAULT_CLASSES: dict[str, str] = {
    "h1": "post-h1",
    "h2": "post-h2",
    "h3": "post-h3",
    "h4": "post-h4",
    "p": "post-p",
    "a": "post-link",
    "strong": "post-strong",
    "em": "post-em",
    "ul": "post-ul",
    "ol": "post-ol",
    "li": "post-li",
    "blockquote": "post-quote",
    "code": "post-code",
    "hr": "post-hr",
    "table": "post-table",
}


class StrikethroughExtension(Extension):
    """Markdown extension for ~~strikethrough~~ text."""

    def extendMarkdown(self, md: Markdown) -> None:
        """Add strikethrough pattern to markdown parser."""
        md.inlinePatterns.register(
            SimpleTagInlineProcessor(STRIKETHROUGH_PATTERN, "del"),
            "strikethrough",
            50,
        )


def _is_placeholder(el: Element) -> bool:
    """True for the bare <p> that stands in for a stashed HTML block."""
    return (
        len(el) == 0
        and el.text is not None
        and HTML_PLACEHOLDER_RE.fullmatch(el.text.strip()) is not None
    )


class ElementClassTreeprocessor(Treeprocessor):
    """Add display classes to rendered elements."""

    def __init__(self, md: Markdown, classes: dict[str, str]):
        super().__init__(md)
        self.classes = classes

    def run(self, root: Element) -> None:
        # Code blocks keep their highlighter markup
        block_code = {code for pre in root.iter("pre") for code in pre.iter("code")}

        for el in root.iter():
            if el.tag == "code" and el in block_code:
                continue
            if el.tag == "p" and _is_placeholder(el):
                continue
            css_class = self.classes.get(el.tag)
            if css_class:
                existing = el.get("class")
                el.set("class", f"{existing} {css_class}" if existing else css_class)
            if el.tag == "a" and el.get("href", "").startswith(("http://", "https://")):
                el.set("rel", "noopener noreferrer")
                el.set("target", "_blank")


class ElementClassExtension(Extension):
    """Markdown extension mapping element tags to CSS classes."""

    def __init__(self, classes: dict[str, str] | None = None, **kwargs):
        self.classes = DEFAULT_CLASSES if classes is None else classes
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:
        """Run after inline processing so inline tags are present."""
        md.treeprocessors.register(
            ElementClassTreeprocessor(md, self.classes),
            "element_classes",
            4,
        )


def create_renderer(classes: dict[str, str] | None = None) -> Markdown:
    """Create a Markdown renderer for post bodies.

    Args:
        classes: Tag to CSS class mapping. Defaults to DEFAULT_CLASSES.

    Returns:
        Configured Markdown instance.
    """
    return Markdown(
        extensions=[
            "extra",  # Includes: abbreviations, attr_list, def_list, fenced_code, footnotes, md_in_html, tables
            "sane_lists",
            "codehilite",  # Pygments syntax highlighting
            "toc",
            "pymdownx.tasklist",  # Task lists with checkboxes
            "pymdownx.magiclink",  # Bare URLs become links
            StrikethroughExtension(),
            ElementClassExtension(classes=classes),
        ],
        extension_configs={
            "codehilite": {
                "css_class": HIGHLIGHT_CSS_CLASS,
                "guess_lang": False,
            },
        },
    )


def render_markdown(content: str, classes: dict[str, str] | None = None) -> str:
    """Render a post body to HTML."""
    return create_renderer(classes).convert(content)


def render_markdown_with_toc(
    content: str, classes: dict[str, str] | None = None
) -> tuple[str, str]:
    """Render a post body and its table of contents.

    Returns:
        Tuple of (html, toc_html).
    """
    renderer = create_renderer(classes)
    html = renderer.convert(content)
    return html, renderer.toc  # type: ignore[attr-defined]


def highlight_css(style: str = "github-dark") -> str:
    """Pygments stylesheet for highlighted code blocks."""
    try:
        formatter = HtmlFormatter(style=style)
    except ClassNotFound:
        logger.warning("Unknown Pygments style %r, using default", style)
        formatter = HtmlFormatter()
    return formatter.get_style_defs(f".{HIGHLIGHT_CSS_CLASS}")
