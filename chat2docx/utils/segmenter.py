"""
Segmentation of raw chat text into ordered Text/Math spans.

Provides:
- Span data model (text vs. math, block vs. inline)
- Delimiter-aware scanner for $$...$$, \\[...\\] and \\(...\\)
- Delimiter cleaning for math spans
- Blank-span filtering

The span sequence returned by segment() is a partition of the input:
joining every span's raw text gives back the original string.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


# ============================================================================
# Data Classes
# ============================================================================

class SpanKind(Enum):
    TEXT = "text"
    MATH = "math"


class MathSubtype(Enum):
    BLOCK = "block"
    INLINE = "inline"


@dataclass(frozen=True)
class MathDelimiter:
    """An opening/closing delimiter pair for one math form."""
    opener: str
    closer: str
    subtype: MathSubtype


# Checked in this order at every position
MATH_DELIMITERS: Tuple[MathDelimiter, ...] = (
    MathDelimiter("$$", "$$", MathSubtype.BLOCK),
    MathDelimiter("\\[", "\\]", MathSubtype.BLOCK),
    MathDelimiter("\\(", "\\)", MathSubtype.INLINE),
)


@dataclass(frozen=True)
class Span:
    """A contiguous slice of the input, in original order."""
    kind: SpanKind
    raw: str
    start: int = 0
    math_subtype: Optional[MathSubtype] = None
    delimiter: Optional[MathDelimiter] = None

    @property
    def end(self) -> int:
        return self.start + len(self.raw)

    @property
    def is_math(self) -> bool:
        return self.kind is SpanKind.MATH

    @property
    def is_blank(self) -> bool:
        return not self.raw.strip()

    @property
    def cleaned(self) -> Optional[str]:
        """Math source without its delimiters; None for text spans."""
        if not self.is_math:
            return None
        return clean_math(self.raw, self.delimiter)


# ============================================================================
# Scanner
# ============================================================================

class _State(Enum):
    OUTSIDE = "outside"
    IN_DOLLAR_BLOCK = "in_dollar_block"
    IN_BRACKET_BLOCK = "in_bracket_block"
    IN_PAREN_INLINE = "in_paren_inline"


_STATE_FOR_OPENER = {
    "$$": _State.IN_DOLLAR_BLOCK,
    "\\[": _State.IN_BRACKET_BLOCK,
    "\\(": _State.IN_PAREN_INLINE,
}


class Segmenter:
    """
    Splits raw text into Text and Math spans.

    The scanner walks the input in the OUTSIDE state. When an opening
    delimiter is seen it enters the matching in-math state and looks for the
    first closing delimiter after it (non-greedy, may cross newlines). If a
    closer exists the math span is emitted and scanning resumes OUTSIDE after
    it; otherwise the opener is ordinary text and scanning moves on by one
    character.
    """

    def __init__(self, delimiters: Iterable[MathDelimiter] = MATH_DELIMITERS):
        self.delimiters = tuple(delimiters)

    def segment(self, text: str) -> List[Span]:
        spans: List[Span] = []
        text_start = 0
        pos = 0
        state = _State.OUTSIDE
        # Delimiters whose closer no longer occurs in the rest of the input
        exhausted = set()

        while pos < len(text):
            delimiter = self._opener_at(text, pos, exhausted)
            if delimiter is None:
                pos += 1
                continue

            state = _STATE_FOR_OPENER[delimiter.opener]
            close_at = text.find(delimiter.closer, pos + len(delimiter.opener))
            if close_at < 0:
                logger.debug(
                    f"Unmatched {delimiter.opener!r} at offset {pos}, keeping as text"
                )
                exhausted.add(delimiter)
                state = _State.OUTSIDE
                pos += 1
                continue

            if text_start < pos:
                spans.append(Span(SpanKind.TEXT, text[text_start:pos], start=text_start))

            end = close_at + len(delimiter.closer)
            spans.append(Span(
                SpanKind.MATH,
                text[pos:end],
                start=pos,
                math_subtype=delimiter.subtype,
                delimiter=delimiter,
            ))
            logger.debug(f"Math span ({state.value}) at {pos}-{end}")
            state = _State.OUTSIDE
            pos = text_start = end

        if text_start < len(text):
            spans.append(Span(SpanKind.TEXT, text[text_start:], start=text_start))

        return spans

    def _opener_at(self, text: str, pos: int, exhausted: set) -> Optional[MathDelimiter]:
        for delimiter in self.delimiters:
            if delimiter in exhausted:
                continue
            if text.startswith(delimiter.opener, pos):
                return delimiter
        return None


# ============================================================================
# Module-level helpers
# ============================================================================

_default_segmenter = Segmenter()


def segment(text: str) -> List[Span]:
    """Split text into an ordered partition of Text and Math spans."""
    return _default_segmenter.segment(text)


def significant_spans(spans: Iterable[Span]) -> List[Span]:
    """Drop empty and whitespace-only spans, keeping the order of the rest."""
    return [span for span in spans if not span.is_blank]


def clean_math(raw: str, delimiter: Optional[MathDelimiter] = None) -> str:
    """
    Strip exactly one matched delimiter pair from a math span.

    No whitespace trimming or unescaping is applied. When no delimiter is
    given it is inferred from the opening characters.
    """
    if delimiter is None:
        for candidate in MATH_DELIMITERS:
            if (raw.startswith(candidate.opener) and raw.endswith(candidate.closer)
                    and len(raw) >= len(candidate.opener) + len(candidate.closer)):
                delimiter = candidate
                break
        else:
            return raw
    return raw[len(delimiter.opener):len(raw) - len(delimiter.closer)]
