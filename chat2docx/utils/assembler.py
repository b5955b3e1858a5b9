"""
Conversion orchestrator for the chat-to-DOCX pipeline.

Provides:
- Conversion result model and run summary
- Pipeline orchestration (segment -> render/parse -> build -> serialize)
- Progress reporting and partial-failure handling
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from ..config import PipelineConfig, get_config
from .builder import DocumentBuilder, DocumentElement

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]

PROGRESS_PARSING = "Parsing text..."
PROGRESS_RENDERING = "Rendering equation {index}..."
PROGRESS_FINALIZING = "Finalizing .docx..."


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class ConversionResult:
    """Outcome of one conversion run."""
    data: bytes
    elements: List[DocumentElement] = field(default_factory=list)
    equations_total: int = 0
    equations_rendered: int = 0
    processing_time_seconds: float = 0.0

    @property
    def equations_failed(self) -> int:
        return self.equations_total - self.equations_rendered

    def save(self, output_path: Union[str, Path]) -> Path:
        from .io import save_bytes

        output_path = save_bytes(self.data, output_path)
        logger.info(f"Saved DOCX: {output_path}")
        return output_path

    def to_dict(self) -> Dict[str, Any]:
        return {
            "elements": [element.to_dict() for element in self.elements],
            "equations": {
                "total": self.equations_total,
                "rendered": self.equations_rendered,
                "failed": self.equations_failed,
            },
            "size_bytes": len(self.data),
            "processing_time_seconds": round(self.processing_time_seconds, 2),
        }


# ============================================================================
# Hybrid Converter
# ============================================================================

class HybridConverter:
    """
    Orchestrates the text-to-DOCX conversion.

    Coordinates:
    - Segmentation into text and math spans
    - Equation rendering
    - Markdown block parsing
    - Document building
    - DOCX serialization

    Components are created lazily and may be injected, which is how tests
    swap in fake rendering surfaces. One converter owns one renderer, so
    renders within a run never overlap.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        renderer: Optional[Any] = None,
        text_parser: Optional[Any] = None,
        exporter: Optional[Any] = None
    ):
        self.config = config or get_config()

        self._segmenter = None
        self._renderer = renderer
        self._text_parser = text_parser
        self._exporter = exporter

    @property
    def segmenter(self):
        if self._segmenter is None:
            from .segmenter import Segmenter
            self._segmenter = Segmenter()
        return self._segmenter

    @property
    def renderer(self):
        if self._renderer is None:
            from .math_render import MathRenderer
            self._renderer = MathRenderer(config=self.config.render)
        return self._renderer

    @property
    def text_parser(self):
        if self._text_parser is None:
            from .text_blocks import TextBlockParser
            self._text_parser = TextBlockParser(
                max_heading_level=self.config.layout.max_heading_level
            )
        return self._text_parser

    @property
    def exporter(self):
        if self._exporter is None:
            from .export import DocxExporter
            self._exporter = DocxExporter(
                template_path=self.config.export.docx_template,
                bullet_style=self.config.export.bullet_style
            )
        return self._exporter

    def convert(
        self,
        raw_text: str,
        progress: Optional[ProgressCallback] = None
    ) -> Optional[ConversionResult]:
        """
        Convert raw chat text into a DOCX document.

        Args:
            raw_text: Markdown prose with embedded LaTeX math
            progress: Optional callback receiving human-readable stage labels

        Returns:
            ConversionResult, or None if the input is empty or whitespace

        Raises:
            DocxSerializationError: If the final document cannot be written
        """
        if not raw_text or not raw_text.strip():
            logger.info("Input is empty, nothing to convert")
            return None

        from .segmenter import significant_spans

        start_time = time.time()

        self._report(progress, PROGRESS_PARSING)
        spans = significant_spans(self.segmenter.segment(raw_text))
        logger.info(
            f"Found {len(spans)} span(s), "
            f"{sum(1 for s in spans if s.is_math)} equation(s)"
        )

        builder = DocumentBuilder(self.config.layout)
        equations_total = 0
        equations_rendered = 0

        for span in spans:
            if span.is_math:
                equations_total += 1
                self._report(progress, PROGRESS_RENDERING.format(index=equations_total))
                image = self.renderer.render(span.cleaned, span.math_subtype)
                if image is None:
                    logger.warning(
                        f"Equation {equations_total} could not be rendered, skipping"
                    )
                else:
                    equations_rendered += 1
                builder.append(image)
            else:
                builder.extend(self.text_parser.parse(span.raw))

        self._report(progress, PROGRESS_FINALIZING)
        data = self.exporter.serialize(builder.elements)

        elapsed = time.time() - start_time
        logger.info(
            f"Converted {len(builder.elements)} element(s) in {elapsed:.2f}s "
            f"({equations_rendered}/{equations_total} equations rendered)"
        )

        return ConversionResult(
            data=data,
            elements=builder.elements,
            equations_total=equations_total,
            equations_rendered=equations_rendered,
            processing_time_seconds=elapsed,
        )

    def convert_to_file(
        self,
        raw_text: str,
        output_path: Union[str, Path],
        progress: Optional[ProgressCallback] = None
    ) -> Optional[ConversionResult]:
        """Convert and write the DOCX file; returns None for empty input."""
        result = self.convert(raw_text, progress=progress)
        if result is not None:
            result.save(output_path)
        return result

    def _report(self, progress: Optional[ProgressCallback], label: str):
        logger.debug(label)
        if progress is not None:
            progress(label)
