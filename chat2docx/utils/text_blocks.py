"""
Markdown text block parsing for the chat-to-DOCX pipeline.

Provides:
- Block token data model (heading, list item, paragraph)
- markdown-it-py based tokenization of text spans
- Heading level clamping and list flattening
"""

import logging
from dataclasses import dataclass
from typing import List, Union

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

logger = logging.getLogger(__name__)


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class HeadingToken:
    level: int
    text: str


@dataclass(frozen=True)
class ListItemToken:
    text: str
    indent_level: int = 0


@dataclass(frozen=True)
class ParagraphToken:
    text: str


BlockToken = Union[HeadingToken, ListItemToken, ParagraphToken]

_LIST_TYPES = ("bullet_list", "ordered_list")


# ============================================================================
# Text Block Parser
# ============================================================================

class TextBlockParser:
    """
    Maps the block structure of a Markdown span onto block tokens.

    Headings keep their level when it is within 1..max_heading_level and
    fall back to level 1 otherwise. Every list item, nested ones included,
    becomes an unindented ListItemToken. Everything else is a paragraph.
    """

    def __init__(self, max_heading_level: int = 3):
        self.max_heading_level = max_heading_level
        self._md = self._create_tokenizer()

    def _create_tokenizer(self) -> MarkdownIt:
        md = MarkdownIt("commonmark")
        md.enable("table")
        md.enable("strikethrough")
        return md

    def parse(self, text: str) -> List[BlockToken]:
        """
        Tokenize a text span into block tokens.

        Args:
            text: Markdown source of one text span

        Returns:
            Block tokens in source order
        """
        try:
            root = SyntaxTreeNode(self._md.parse(text))
        except Exception as e:
            logger.warning(f"Markdown tokenizer failed, keeping span as plain text: {e}")
            stripped = text.strip()
            return [ParagraphToken(stripped)] if stripped else []

        source_lines = text.splitlines()
        tokens: List[BlockToken] = []
        for node in root.children:
            tokens.extend(self._transform_node(node, source_lines))

        logger.debug(f"Parsed {len(tokens)} block token(s) from {len(text)} chars")
        return tokens

    def _transform_node(self, node: SyntaxTreeNode, source_lines: List[str]) -> List[BlockToken]:
        if node.type == "heading":
            return self._transform_heading(node)
        if node.type in _LIST_TYPES:
            return self._transform_list(node)

        text = self._node_text(node) or self._node_source(node, source_lines)
        if not text:
            return []
        return [ParagraphToken(text)]

    def _transform_heading(self, node: SyntaxTreeNode) -> List[BlockToken]:
        level = int(node.tag[1:])  # h1 -> 1
        if not 1 <= level <= self.max_heading_level:
            level = 1
        return [HeadingToken(level=level, text=self._inline_text(node))]

    def _transform_list(self, node: SyntaxTreeNode) -> List[BlockToken]:
        items: List[BlockToken] = []
        for list_item in node.children:
            parts = []
            nested: List[BlockToken] = []
            for child in list_item.children:
                if child.type in _LIST_TYPES:
                    nested.extend(self._transform_list(child))
                else:
                    text = self._node_text(child)
                    if text:
                        parts.append(text)
            items.append(ListItemToken(text="\n".join(parts), indent_level=0))
            items.extend(nested)
        return items

    def _node_text(self, node: SyntaxTreeNode) -> str:
        """Text content of a block node; inline markup is kept as written."""
        if node.type == "inline":
            return node.content.strip()
        if node.type in ("fence", "code_block", "html_block"):
            return node.content.rstrip("\n")
        if node.type == "tr":
            cells = [self._inline_text(cell) for cell in node.children]
            return " | ".join(cells)

        parts = [self._node_text(child) for child in node.children]
        return "\n".join(part for part in parts if part)

    def _inline_text(self, node: SyntaxTreeNode) -> str:
        inline = node.children[0] if node.children else None
        if inline is None:
            return ""
        return inline.content.strip()

    def _node_source(self, node: SyntaxTreeNode, source_lines: List[str]) -> str:
        """Raw source lines a node was parsed from."""
        line_map = node.map
        if not line_map:
            return ""
        start, end = line_map
        return "\n".join(source_lines[start:end]).strip()


# ============================================================================
# Module-level helpers
# ============================================================================

def parse_text(text: str, max_heading_level: int = 3) -> List[BlockToken]:
    """Parse one text span with a fresh parser."""
    return TextBlockParser(max_heading_level=max_heading_level).parse(text)
