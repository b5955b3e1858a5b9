#!/usr/bin/env python
"""
Command-line interface for the chat-to-DOCX converter.

Usage:
    chat2docx --input <text_file> --output <docx_file> [options]

Examples:
    # Convert a saved chat answer
    chat2docx --input answer.md --output answer.docx

    # Pipe text in from the clipboard
    xclip -o | chat2docx --output answer.docx

    # Render equations with a full LaTeX installation
    chat2docx --input answer.md --use-tex
"""

import sys
import argparse
import logging
from pathlib import Path

from . import __version__

logger = logging.getLogger("chat2docx")


def setup_argparser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        description="AI Chat to Word - Export Markdown + LaTeX text to DOCX with equations as images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Convert a file:
    chat2docx --input answer.md --output answer.docx

  Read from stdin:
    cat answer.md | chat2docx -o answer.docx

  Also write a JSON summary of the generated elements:
    chat2docx --input answer.md --json
        """
    )

    parser.add_argument(
        "--input", "-i",
        default="-",
        help="Input text/Markdown file, or '-' for stdin (default: stdin)"
    )

    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output DOCX file (default: AI_Export_With_Math.docx)"
    )

    parser.add_argument(
        "--template",
        default=None,
        help="DOCX file whose styles are used for the output"
    )

    parser.add_argument(
        "--use-tex",
        action="store_true",
        help="Typeset equations with a LaTeX installation instead of mathtext"
    )

    parser.add_argument(
        "--pixel-ratio",
        type=int,
        default=None,
        help="Equation raster density multiplier, at least 3 (default: 3)"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Write a JSON summary next to the DOCX file"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-error output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def build_config(args):
    """Apply command-line options on top of the environment configuration."""
    from .config import get_config, MIN_PIXEL_RATIO

    config = get_config()

    if args.template:
        config.export.docx_template = args.template

    if args.use_tex:
        config.render.use_tex = True

    if args.pixel_ratio is not None:
        if args.pixel_ratio < MIN_PIXEL_RATIO:
            logger.warning(
                f"Pixel ratio {args.pixel_ratio} is below {MIN_PIXEL_RATIO}, using {MIN_PIXEL_RATIO}"
            )
        config.render.pixel_ratio = max(MIN_PIXEL_RATIO, args.pixel_ratio)

    return config


def run_pipeline(args) -> int:
    """Run the conversion pipeline."""
    from .utils.io import load_text, save_json, ensure_dir
    from .utils.assembler import HybridConverter

    config = build_config(args)
    if config.debug_mode:
        logging.getLogger().setLevel(logging.DEBUG)

    output_path = Path(args.output or config.export.output_filename)
    ensure_dir(output_path.parent)

    try:
        raw_text = load_text(args.input)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1

    converter = HybridConverter(config=config)

    def report(label: str):
        if not args.quiet:
            print(label, file=sys.stderr)

    result = converter.convert_to_file(raw_text, output_path, progress=report)
    if result is None:
        logger.error("Input is empty, no document written")
        return 1

    if args.json:
        json_path = output_path.with_suffix(".json")
        save_json(result.to_dict(), json_path)
        logger.info(f"Saved JSON: {json_path}")

    if not args.quiet:
        print("\n" + "="*60)
        print("CONVERSION COMPLETE")
        print("="*60)
        print(f"Source: {args.input if args.input != '-' else '<stdin>'}")
        print(f"Output: {output_path}")
        print(f"Elements: {len(result.elements)}")
        print(f"Equations: {result.equations_total} "
              f"(rendered: {result.equations_rendered}, "
              f"failed: {result.equations_failed})")
        print(f"Processing time: {result.processing_time_seconds:.2f}s")
        print("="*60)

    return 0


def main(argv=None):
    """Main entry point."""
    parser = setup_argparser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Configure logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger().setLevel(logging.ERROR)

    try:
        exit_code = run_pipeline(args)
        sys.exit(exit_code)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if args.verbose:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
