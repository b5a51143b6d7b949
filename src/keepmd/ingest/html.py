"""Render a note's HTML content as Markdown."""

import logging
import posixpath
import re
from enum import Enum
from pathlib import Path

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction

from ..tags.hashtags import escape_invalid_hashtags

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    TEXT = "text"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    LIST_ITEM = "list_item"
    LINE_BREAK = "line_break"
    LINK = "link"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    IMAGE = "image"
    CONTAINER = "container"
    OTHER = "other"


TAG_KINDS = {
    **{f"h{level}": NodeKind.HEADING for level in range(1, 7)},
    "p": NodeKind.PARAGRAPH,
    "ul": NodeKind.LIST,
    "ol": NodeKind.LIST,
    "li": NodeKind.LIST_ITEM,
    "br": NodeKind.LINE_BREAK,
    "a": NodeKind.LINK,
    "em": NodeKind.EMPHASIS,
    "i": NodeKind.EMPHASIS,
    "strong": NodeKind.STRONG,
    "b": NodeKind.STRONG,
    "img": NodeKind.IMAGE,
    "html": NodeKind.CONTAINER,
    "body": NodeKind.CONTAINER,
    "div": NodeKind.CONTAINER,
    "section": NodeKind.CONTAINER,
    "article": NodeKind.CONTAINER,
    "main": NodeKind.CONTAINER,
}

# Containers that do not end a line of their own.
TOP_LEVEL_CONTAINERS = {"html", "body"}
BLOCK_TAGS = {
    "html", "body", "div", "section", "article", "main", "p", "li", "ul", "ol", "br",
    "h1", "h2", "h3", "h4", "h5", "h6",
}
REMOVED_TAGS = ["style", "script"]


def node_kind(node) -> NodeKind | None:
    """Classify a parsed node. Comments and other markup noise return None."""
    if isinstance(node, (Comment, Declaration, Doctype, ProcessingInstruction)):
        return None
    if isinstance(node, NavigableString):
        return NodeKind.TEXT
    if isinstance(node, Tag):
        return TAG_KINDS.get(node.name.lower(), NodeKind.OTHER)
    return None


def _is_block(node) -> bool:
    return isinstance(node, Tag) and node.name.lower() in BLOCK_TAGS


def _between_inline(node) -> bool:
    """Whether a text node separates two inline siblings."""
    prev, following = node.previous_sibling, node.next_sibling
    if prev is None or following is None:
        return False
    return not (_is_block(prev) or _is_block(following))


def _collapse(text: str) -> str:
    return re.sub(r"\s+", " ", text)


def _cleanup(markdown: str) -> str:
    markdown = re.sub(r"[ \t]+\n", "\n", markdown)
    markdown = re.sub(r"\n (?=\S)", "\n", markdown)
    markdown = re.sub(r"\n{3,}", "\n\n", markdown)
    return markdown.strip()


class HtmlRenderer:
    """Convert note HTML into Markdown, escaping untrusted hashtags."""

    def __init__(self, valid_tags: frozenset[str] = frozenset()):
        self.valid_tags = valid_tags
        self._renderers = {
            NodeKind.TEXT: self._render_text,
            NodeKind.HEADING: self._render_heading,
            NodeKind.PARAGRAPH: self._render_paragraph,
            NodeKind.LIST: self._render_list,
            NodeKind.LIST_ITEM: self._render_children,
            NodeKind.LINE_BREAK: self._render_line_break,
            NodeKind.LINK: self._render_link,
            NodeKind.EMPHASIS: self._render_emphasis,
            NodeKind.STRONG: self._render_strong,
            NodeKind.IMAGE: self._render_image,
            NodeKind.CONTAINER: self._render_container,
            NodeKind.OTHER: self._render_other,
        }

    def render(self, markup: str) -> str:
        """Render an HTML document or fragment.

        Malformed markup never raises: the renderer falls back to the plain
        text of the document.
        """
        try:
            soup = BeautifulSoup(markup, "lxml")
        except Exception as e:
            logger.warning(f"Could not parse HTML, stripping tags instead: {e}")
            text = _cleanup(re.sub(r"<[^>]*>", " ", markup))
            return escape_invalid_hashtags(text, self.valid_tags)

        for tag in soup(REMOVED_TAGS):
            tag.decompose()

        root = soup.body or soup
        try:
            markdown = _cleanup(self._render_children(root))
        except Exception as e:
            logger.warning(f"Could not convert HTML structure, using plain text: {e}")
            markdown = _cleanup(root.get_text(separator="\n"))

        return escape_invalid_hashtags(markdown, self.valid_tags)

    def render_file(self, file_path: Path) -> str:
        text = file_path.read_text(encoding="utf-8", errors="replace")
        return self.render(text)

    def render_node(self, node) -> str:
        kind = node_kind(node)
        if kind is None:
            return ""
        return self._renderers[kind](node)

    def _render_children(self, node) -> str:
        return "".join(self.render_node(child) for child in node.children)

    def _inline_text(self, node) -> str:
        return _collapse(self._render_children(node)).strip()

    def _render_text(self, node) -> str:
        text = str(node)
        if not text.strip() and "\n" in text and not _between_inline(node):
            # Indentation around block elements in pretty-printed markup.
            return ""
        return _collapse(text)

    def _render_heading(self, node) -> str:
        level = int(node.name[1])
        return f"\n{'#' * level} {_collapse(node.get_text()).strip()}\n\n"

    def _render_paragraph(self, node) -> str:
        return f"{self._render_children(node).strip()}\n\n"

    def _render_list(self, node, depth: int = 0) -> str:
        indent = "  " * depth
        lines = []
        number = 0
        for item in node.find_all("li", recursive=False):
            number += 1
            prefix = f"{number}. " if node.name.lower() == "ol" else "- "
            text_parts = []
            nested = []
            for child in item.children:
                if node_kind(child) is NodeKind.LIST:
                    nested.append(self._render_list(child, depth + 1))
                else:
                    text_parts.append(self.render_node(child))
            item_lines = [_collapse(line).strip() for line in "".join(text_parts).split("\n")]
            item_lines = [line for line in item_lines if line] or [""]
            lines.append(f"{indent}{prefix}{item_lines[0]}\n")
            continuation = indent + " " * len(prefix)
            lines.extend(f"{continuation}{line}\n" for line in item_lines[1:])
            lines.extend(nested)

        if depth:
            return "".join(lines)
        return "\n" + "".join(lines) + "\n"

    def _render_line_break(self, node) -> str:
        return "\n"

    def _render_link(self, node) -> str:
        text = self._inline_text(node)
        href = node.get("href")
        return f"[{text}]({href})" if href else text

    def _render_emphasis(self, node) -> str:
        text = self._inline_text(node)
        return f"*{text}*" if text else ""

    def _render_strong(self, node) -> str:
        text = self._inline_text(node)
        return f"**{text}**" if text else ""

    def _render_image(self, node) -> str:
        src = node.get("src")
        if not src:
            return ""
        return f"![]({posixpath.basename(src)})"

    def _render_container(self, node) -> str:
        content = self._render_children(node)
        if node.name.lower() in TOP_LEVEL_CONTAINERS:
            return content
        return f"{content.strip(' ')}\n"

    def _render_other(self, node) -> str:
        return _collapse(node.get_text())


def render_html(markup: str, valid_tags: frozenset[str] = frozenset()) -> str:
    """Render HTML markup to Markdown with untrusted hashtags escaped."""
    return HtmlRenderer(valid_tags).render(markup)
