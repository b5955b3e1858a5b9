"""
I/O utilities for the chat-to-DOCX pipeline.

Handles:
- Reading input text from a file or stdin
- Writing document bytes
- JSON serialization
- Directory management
"""

import json
import logging
import sys
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)


# ============================================================================
# Text Input
# ============================================================================

def load_text(input_path: Union[str, Path] = "-", encoding: str = "utf-8") -> str:
    """
    Read the raw text to convert.

    Args:
        input_path: Path to a text/Markdown file, or "-" for stdin
        encoding: File encoding

    Returns:
        File contents

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    if str(input_path) == "-":
        logger.debug("Reading input from stdin")
        return sys.stdin.read()

    input_path = Path(input_path)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    with open(input_path, 'r', encoding=encoding) as f:
        text = f.read()

    logger.debug(f"Read {len(text)} chars from {input_path}")
    return text


# ============================================================================
# Binary Output
# ============================================================================

def save_bytes(data: bytes, output_path: Union[str, Path]) -> Path:
    """
    Write bytes to a file, creating parent directories.

    Args:
        data: File contents
        output_path: Destination path

    Returns:
        Path to the written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'wb') as f:
        f.write(data)

    return output_path


# ============================================================================
# JSON Serialization
# ============================================================================

class EnhancedJSONEncoder(json.JSONEncoder):
    """JSON encoder that handles dataclasses, enums, paths and bytes."""

    def default(self, obj):
        if hasattr(obj, '__dataclass_fields__'):
            return asdict(obj)
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, bytes):
            return len(obj)
        return super().default(obj)


def save_json(
    data: Any,
    output_path: Union[str, Path],
    indent: int = 2,
    ensure_ascii: bool = False
) -> Path:
    """
    Save data to a JSON file.

    Args:
        data: Data to serialize (dict, list, dataclass, etc.)
        output_path: Path to save the JSON file
        indent: Indentation level for pretty printing
        ensure_ascii: If True, escape non-ASCII characters

    Returns:
        Path to the saved file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, ensure_ascii=ensure_ascii, cls=EnhancedJSONEncoder)

    logger.debug(f"Saved JSON: {output_path}")
    return output_path


# ============================================================================
# Directory Management
# ============================================================================

def ensure_dir(path: Union[str, Path]) -> Path:
    """Ensure a directory exists, creating it if necessary."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path
