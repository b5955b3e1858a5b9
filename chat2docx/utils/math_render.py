"""
Math rendering module for the chat-to-DOCX pipeline.

Provides:
- LaTeX to PNG rasterization via matplotlib (mathtext or usetex)
- Serialized access to the shared rendering surface
- "No asset" failure contract for malformed equations
"""

import io
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

import numpy as np

from ..config import RenderConfig
from .segmenter import MathSubtype

logger = logging.getLogger(__name__)


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class EquationImage:
    """Rendered equation raster."""
    data: bytes
    width_px: int
    height_px: int
    latex: str = ""
    subtype: MathSubtype = MathSubtype.BLOCK
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latex": self.latex,
            "type": self.subtype.value,
            "width_px": self.width_px,
            "height_px": self.height_px,
            "size_bytes": len(self.data),
            "metadata": self.metadata,
        }


class MathRenderError(Exception):
    """Raised by a surface when an equation cannot be typeset or rasterized."""


# ============================================================================
# Matplotlib Surface
# ============================================================================

class MathtextSurface:
    """
    Off-screen matplotlib surface that turns LaTeX into PNG bytes.

    matplotlib's mathtext parser and font caches are process-global, so
    every instance shares one lock.
    """

    lock = threading.Lock()

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    @contextmanager
    def acquire(self) -> Iterator[Any]:
        """Create a throwaway figure and always close it afterwards."""
        try:
            from matplotlib.figure import Figure
            from matplotlib.backends.backend_agg import FigureCanvasAgg
        except ImportError:
            raise ImportError(
                "matplotlib is required for equation rendering. "
                "Install with: pip install matplotlib"
            )

        figure = Figure(figsize=(0.01, 0.01), facecolor=self.config.background)
        FigureCanvasAgg(figure)
        try:
            yield figure
        finally:
            figure.clear()

    def rasterize(self, latex: str, display_mode: bool = True) -> bytes:
        """
        Typeset and rasterize one equation.

        Args:
            latex: LaTeX source without delimiters
            display_mode: Use the display font size instead of the inline one

        Returns:
            PNG bytes

        Raises:
            MathRenderError: If typesetting or rasterization fails
        """
        try:
            from matplotlib import rc_context
        except ImportError:
            raise ImportError(
                "matplotlib is required for equation rendering. "
                "Install with: pip install matplotlib"
            )

        font_size = (
            self.config.display_font_size if display_mode
            else self.config.inline_font_size
        )
        rc = {"text.usetex": self.config.use_tex}
        if self.config.use_tex:
            rc["text.latex.preamble"] = r"\usepackage{amsmath}\usepackage{amssymb}"

        buffer = io.BytesIO()
        with rc_context(rc), self.acquire() as figure:
            text_kwargs = {"fontsize": font_size, "va": "bottom"}
            if not self.config.use_tex:
                text_kwargs["math_fontfamily"] = self.config.math_font_family
            figure.text(0, 0, f"${latex}$", **text_kwargs)
            try:
                figure.savefig(
                    buffer,
                    format="png",
                    dpi=self.config.dpi,
                    bbox_inches="tight",
                    pad_inches=self.config.padding_inches,
                    facecolor=self.config.background,
                )
            except (ValueError, RuntimeError) as e:
                raise MathRenderError(str(e)) from e

        return buffer.getvalue()


# ============================================================================
# Math Renderer
# ============================================================================

class MathRenderer:
    """
    Converts cleaned LaTeX into an EquationImage.

    The surface is injected; it must expose ``lock``, and ``rasterize(latex,
    display_mode)`` returning PNG bytes or raising. Any failure comes back
    as None so one bad equation never aborts a conversion.
    """

    def __init__(self, surface: Optional[Any] = None, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()
        self.surface = surface if surface is not None else MathtextSurface(self.config)

    def render(
        self,
        latex: str,
        subtype: MathSubtype = MathSubtype.BLOCK
    ) -> Optional[EquationImage]:
        """
        Render one equation.

        Args:
            latex: LaTeX source without delimiters
            subtype: BLOCK for $$ and \\[ math, INLINE for \\( math

        Returns:
            EquationImage, or None if the equation could not be rendered
        """
        # mathtext is single-line
        source = " ".join(latex.split())
        if not source:
            logger.warning("Skipping empty equation")
            return None

        try:
            with self.surface.lock:
                data = self.surface.rasterize(
                    source,
                    display_mode=subtype is MathSubtype.BLOCK
                )
            width, height = self._validate_raster(data)
        except ImportError:
            raise
        except Exception as e:
            logger.warning(f"Math render error for {latex!r}: {e}")
            return None

        logger.debug(f"Rendered equation {source!r} at {width}x{height}px")
        return EquationImage(
            data=data,
            width_px=width,
            height_px=height,
            latex=source,
            subtype=subtype,
            metadata={"pixel_ratio": self.config.pixel_ratio},
        )

    def _validate_raster(self, data: bytes):
        """Return (width, height) of a PNG, rejecting empty or blank images."""
        from PIL import Image

        if not data:
            raise MathRenderError("Surface returned no image data")

        with Image.open(io.BytesIO(data)) as image:
            width, height = image.size
            gray = np.asarray(image.convert("L"))

        if width <= 1 or height <= 1:
            raise MathRenderError(f"Rendered image too small ({width}x{height})")
        if gray.size == 0 or int(gray.min()) == int(gray.max()):
            raise MathRenderError("Rendered image is blank")

        return width, height
