"""
Configuration and constants for the chat-to-DOCX conversion pipeline.

This module provides:
- Equation rendering settings
- Document layout rules (spacing, image size, heading range)
- Export settings
- Environment overrides
"""

import os
from dataclasses import dataclass, field
from typing import Optional
import logging

logger = logging.getLogger("chat2docx")


# ============================================================================
# Processing Configuration
# ============================================================================

@dataclass
class RenderConfig:
    """Equation rendering configuration."""
    # Raster density multiplier over base_dpi; below 3 equations blur in Word
    pixel_ratio: int = 3
    base_dpi: int = 100
    # Point sizes for display ($$, \[) and inline (\() math
    display_font_size: float = 18.0
    inline_font_size: float = 14.0
    # White border around the equation, in inches
    padding_inches: float = 0.2
    math_font_family: str = "cm"
    # Route through a real LaTeX install instead of mathtext
    use_tex: bool = False
    background: str = "white"

    @property
    def dpi(self) -> int:
        return self.base_dpi * self.pixel_ratio


@dataclass
class LayoutConfig:
    """Document layout rules applied by the builder."""
    heading_space_before_pt: float = 12.0
    heading_space_after_pt: float = 6.0
    paragraph_space_after_pt: float = 6.0
    equation_space_before_pt: float = 10.0
    equation_space_after_pt: float = 10.0
    # Fixed display size of every equation image, in pixels (96 per inch)
    equation_width_px: int = 300
    equation_height_px: int = 100
    # Headings deeper than this collapse to level 1
    max_heading_level: int = 3


@dataclass
class ExportConfig:
    """Export configuration."""
    docx_template: Optional[str] = None
    output_filename: str = "AI_Export_With_Math.docx"
    bullet_style: str = "List Bullet"


@dataclass
class PipelineConfig:
    """Main pipeline configuration."""
    render: RenderConfig = field(default_factory=RenderConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    debug_mode: bool = False


# ============================================================================
# Default Configuration Instance
# ============================================================================

def get_config() -> PipelineConfig:
    """Get the default pipeline configuration with environment overrides."""
    config = PipelineConfig()

    if os.environ.get("CHAT2DOCX_USE_TEX", "").lower() == "true":
        config.render.use_tex = True

    pixel_ratio = os.environ.get("CHAT2DOCX_PIXEL_RATIO")
    if pixel_ratio:
        try:
            config.render.pixel_ratio = max(MIN_PIXEL_RATIO, int(pixel_ratio))
        except ValueError:
            logger.warning(f"Ignoring invalid CHAT2DOCX_PIXEL_RATIO: {pixel_ratio!r}")

    if os.environ.get("CHAT2DOCX_DEBUG", "").lower() == "true":
        config.debug_mode = True

    template = os.environ.get("CHAT2DOCX_TEMPLATE")
    if template:
        config.export.docx_template = template

    return config


# ============================================================================
# Block Types Enumeration
# ============================================================================

class BlockType:
    """Standard element type identifiers."""
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list_item"
    EQUATION = "equation"


MIN_PIXEL_RATIO = 3
