"""
Document model and builder for the chat-to-DOCX pipeline.

Provides:
- DocumentElement variants (Heading, Paragraph, ListItem, ImageBlock)
- Spacing and alignment rules per element type
- Order-preserving accumulation of block tokens and equation images
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from ..config import BlockType, LayoutConfig
from .math_render import EquationImage
from .text_blocks import HeadingToken, ListItemToken, ParagraphToken

logger = logging.getLogger(__name__)


ALIGN_LEFT = "left"
ALIGN_CENTER = "center"


# ============================================================================
# Document Elements
# ============================================================================

@dataclass
class Heading:
    level: int
    text: str
    space_before_pt: float = 0.0
    space_after_pt: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": BlockType.HEADING,
            "level": self.level,
            "text": self.text,
            "spacing": {"before": self.space_before_pt, "after": self.space_after_pt},
        }


@dataclass
class Paragraph:
    text: str
    space_after_pt: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": BlockType.PARAGRAPH,
            "text": self.text,
            "spacing": {"after": self.space_after_pt},
        }


@dataclass
class ListItem:
    text: str
    indent_level: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": BlockType.LIST_ITEM,
            "text": self.text,
            "indent_level": self.indent_level,
        }


@dataclass
class ImageBlock:
    """A centered equation picture at a fixed display size."""
    data: bytes
    width_px: int
    height_px: int
    alignment: str = ALIGN_CENTER
    space_before_pt: float = 0.0
    space_after_pt: float = 0.0
    latex: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": BlockType.EQUATION,
            "latex": self.latex,
            "width_px": self.width_px,
            "height_px": self.height_px,
            "alignment": self.alignment,
            "spacing": {"before": self.space_before_pt, "after": self.space_after_pt},
        }


DocumentElement = Union[Heading, Paragraph, ListItem, ImageBlock]
BuilderInput = Union[HeadingToken, ListItemToken, ParagraphToken, EquationImage, None]


# ============================================================================
# Document Builder
# ============================================================================

class DocumentBuilder:
    """
    Accumulates document elements in the order items are appended.

    Block tokens from text spans and equation images from math spans go
    through the same append(), so their relative order is the order of the
    spans they came from. A failed render (None) appends nothing.
    """

    def __init__(self, layout: Optional[LayoutConfig] = None):
        self.layout = layout or LayoutConfig()
        self.elements: List[DocumentElement] = []

    def append(self, item: BuilderInput) -> Optional[DocumentElement]:
        """
        Map one token or equation image to an element and append it.

        Args:
            item: Block token, EquationImage, or None for a failed render

        Returns:
            The appended element, or None if nothing was appended
        """
        element = self.to_element(item)
        if element is not None:
            self.elements.append(element)
        return element

    def extend(self, items) -> None:
        for item in items:
            self.append(item)

    def to_element(self, item: BuilderInput) -> Optional[DocumentElement]:
        layout = self.layout

        if item is None:
            return None

        if isinstance(item, HeadingToken):
            return Heading(
                level=item.level,
                text=item.text,
                space_before_pt=layout.heading_space_before_pt,
                space_after_pt=layout.heading_space_after_pt,
            )

        if isinstance(item, ListItemToken):
            return ListItem(text=item.text, indent_level=0)

        if isinstance(item, ParagraphToken):
            return Paragraph(text=item.text, space_after_pt=layout.paragraph_space_after_pt)

        if isinstance(item, EquationImage):
            return ImageBlock(
                data=item.data,
                width_px=layout.equation_width_px,
                height_px=layout.equation_height_px,
                alignment=ALIGN_CENTER,
                space_before_pt=layout.equation_space_before_pt,
                space_after_pt=layout.equation_space_after_pt,
                latex=item.latex,
            )

        raise TypeError(f"Cannot build a document element from {type(item).__name__}")

    def manifest(self) -> Dict[str, Any]:
        """JSON-friendly description of the elements built so far."""
        return {"elements": [element.to_dict() for element in self.elements]}
