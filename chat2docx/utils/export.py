"""
Export module for the chat-to-DOCX pipeline.

Provides:
- DOCX serialization of document elements (using python-docx)
- Writing the serialized document to disk
"""

import io
import logging
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from .builder import (
    ALIGN_CENTER,
    DocumentElement,
    Heading,
    ImageBlock,
    ListItem,
    Paragraph,
)

logger = logging.getLogger(__name__)

# python-docx measures pictures in EMU; Word lays pixels out at 96 per inch
EMU_PER_PIXEL = 9525


class DocxSerializationError(RuntimeError):
    """Raised when the element sequence cannot be written as a DOCX file."""


# ============================================================================
# DOCX Exporter
# ============================================================================

class DocxExporter:
    """Serialize document elements to DOCX using python-docx."""

    def __init__(
        self,
        template_path: Optional[str] = None,
        bullet_style: str = "List Bullet"
    ):
        self.template_path = template_path
        self.bullet_style = bullet_style

    def serialize(self, elements: Sequence[DocumentElement]) -> bytes:
        """
        Build a single-section DOCX document from elements.

        Args:
            elements: Ordered document elements

        Returns:
            DOCX file contents

        Raises:
            DocxSerializationError: If python-docx cannot build or save the document
        """
        try:
            from docx import Document as DocxDocument
        except ImportError:
            raise ImportError(
                "python-docx is required for DOCX export. "
                "Install with: pip install python-docx"
            )

        try:
            if self.template_path and Path(self.template_path).exists():
                doc = DocxDocument(self.template_path)
            else:
                if self.template_path:
                    logger.warning(f"Template not found, using blank document: {self.template_path}")
                doc = DocxDocument()

            for element in elements:
                self._add_element(doc, element)

            buffer = io.BytesIO()
            doc.save(buffer)
        except Exception as e:
            raise DocxSerializationError(f"DOCX serialization failed: {e}") from e

        data = buffer.getvalue()
        logger.debug(f"Serialized {len(elements)} element(s) into {len(data)} bytes")
        return data

    def export(
        self,
        elements: Sequence[DocumentElement],
        output_path: Union[str, Path]
    ) -> Path:
        """
        Serialize elements and write the DOCX file.

        Args:
            elements: Ordered document elements
            output_path: Output file path

        Returns:
            Path to the generated DOCX file
        """
        from .io import save_bytes

        output_path = save_bytes(self.serialize(elements), output_path)
        logger.info(f"Exported DOCX to: {output_path}")
        return output_path

    def _add_element(self, doc: Any, element: DocumentElement):
        """Add one element to the DOCX document."""
        from docx.shared import Emu, Pt
        from docx.enum.text import WD_ALIGN_PARAGRAPH

        if isinstance(element, Heading):
            p = doc.add_heading(element.text, level=element.level)
            p.paragraph_format.space_before = Pt(element.space_before_pt)
            p.paragraph_format.space_after = Pt(element.space_after_pt)

        elif isinstance(element, ListItem):
            doc.add_paragraph(element.text, style=self.bullet_style)

        elif isinstance(element, Paragraph):
            p = doc.add_paragraph(element.text)
            p.paragraph_format.space_after = Pt(element.space_after_pt)

        elif isinstance(element, ImageBlock):
            p = doc.add_paragraph()
            if element.alignment == ALIGN_CENTER:
                p.alignment = WD_ALIGN_PARAGRAPH.CENTER
            p.paragraph_format.space_before = Pt(element.space_before_pt)
            p.paragraph_format.space_after = Pt(element.space_after_pt)
            p.add_run().add_picture(
                io.BytesIO(element.data),
                width=Emu(element.width_px * EMU_PER_PIXEL),
                height=Emu(element.height_px * EMU_PER_PIXEL),
            )

        else:
            raise TypeError(f"Unsupported document element: {type(element).__name__}")
