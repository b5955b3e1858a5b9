"""
Utility modules for the chat-to-DOCX conversion pipeline.
"""

from .io import load_text, save_bytes, save_json, ensure_dir
from .segmenter import Segmenter, Span, SpanKind, MathSubtype, segment, significant_spans, clean_math
from .math_render import MathRenderer, MathtextSurface, EquationImage, MathRenderError
from .text_blocks import TextBlockParser, HeadingToken, ListItemToken, ParagraphToken
from .builder import DocumentBuilder, Heading, Paragraph, ListItem, ImageBlock
from .export import DocxExporter, DocxSerializationError
from .assembler import HybridConverter, ConversionResult

__all__ = [
    # IO
    "load_text", "save_bytes", "save_json", "ensure_dir",
    # Segmentation
    "Segmenter", "Span", "SpanKind", "MathSubtype", "segment", "significant_spans", "clean_math",
    # Math
    "MathRenderer", "MathtextSurface", "EquationImage", "MathRenderError",
    # Text
    "TextBlockParser", "HeadingToken", "ListItemToken", "ParagraphToken",
    # Document model
    "DocumentBuilder", "Heading", "Paragraph", "ListItem", "ImageBlock",
    # Export
    "DocxExporter", "DocxSerializationError",
    # Orchestration
    "HybridConverter", "ConversionResult",
]
