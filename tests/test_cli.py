"""
Tests for the command-line interface.
"""

import io
import json
import sys

import pytest


class TestArgParser:
    """Test argument parsing and config overrides."""

    def test_defaults(self):
        """Input defaults to stdin and output to the standard file name."""
        from chat2docx.cli import setup_argparser

        args = setup_argparser().parse_args([])

        assert args.input == "-"
        assert args.output is None
        assert args.use_tex is False

    def test_build_config_overrides(self):
        """Command-line flags override configuration."""
        from chat2docx.cli import setup_argparser, build_config

        args = setup_argparser().parse_args(
            ["--use-tex", "--pixel-ratio", "4", "--template", "styles.docx"]
        )
        config = build_config(args)

        assert config.render.use_tex is True
        assert config.render.pixel_ratio == 4
        assert config.export.docx_template == "styles.docx"

    def test_pixel_ratio_floor(self):
        """Pixel ratios below 3 are raised to 3."""
        from chat2docx.cli import setup_argparser, build_config

        config = build_config(setup_argparser().parse_args(["--pixel-ratio", "1"]))

        assert config.render.pixel_ratio == 3


class TestMain:
    """Test the CLI entry point."""

    def test_convert_file(self, tmp_path):
        """A text file is converted and a JSON summary written."""
        from chat2docx.cli import main

        source = tmp_path / "answer.md"
        source.write_text("# Result\n\nThe area is $$\\pi r^2$$ units.", encoding="utf-8")
        output = tmp_path / "out" / "answer.docx"

        with pytest.raises(SystemExit) as exc:
            main(["--input", str(source), "--output", str(output), "--json", "--quiet"])

        assert exc.value.code == 0
        assert output.exists()
        summary = json.loads(output.with_suffix(".json").read_text(encoding="utf-8"))
        assert summary["equations"]["rendered"] == 1

    def test_read_stdin(self, tmp_path, monkeypatch):
        """'-' reads the text from stdin."""
        from chat2docx.cli import main

        monkeypatch.setattr(sys, "stdin", io.StringIO("Plain paragraph only."))
        output = tmp_path / "stdin.docx"

        with pytest.raises(SystemExit) as exc:
            main(["--output", str(output), "--quiet"])

        assert exc.value.code == 0
        assert output.exists()

    def test_empty_input_fails(self, tmp_path):
        """Blank input writes nothing and exits with 1."""
        from chat2docx.cli import main

        source = tmp_path / "empty.md"
        source.write_text("   \n", encoding="utf-8")
        output = tmp_path / "empty.docx"

        with pytest.raises(SystemExit) as exc:
            main(["--input", str(source), "--output", str(output), "--quiet"])

        assert exc.value.code == 1
        assert not output.exists()

    def test_missing_input_fails(self, tmp_path):
        """A missing input file exits with 1."""
        from chat2docx.cli import main

        with pytest.raises(SystemExit) as exc:
            main(["--input", str(tmp_path / "missing.md"),
                  "--output", str(tmp_path / "x.docx"), "--quiet"])

        assert exc.value.code == 1


class TestConfig:
    """Test environment overrides."""

    def test_env_overrides(self, monkeypatch):
        """Environment variables adjust the default configuration."""
        from chat2docx.config import get_config

        monkeypatch.setenv("CHAT2DOCX_USE_TEX", "true")
        monkeypatch.setenv("CHAT2DOCX_PIXEL_RATIO", "5")
        monkeypatch.setenv("CHAT2DOCX_DEBUG", "true")
        monkeypatch.setenv("CHAT2DOCX_TEMPLATE", "t.docx")

        config = get_config()

        assert config.render.use_tex is True
        assert config.render.pixel_ratio == 5
        assert config.render.dpi == 500
        assert config.debug_mode is True
        assert config.export.docx_template == "t.docx"

    def test_invalid_pixel_ratio_ignored(self, monkeypatch):
        """A non-numeric pixel ratio keeps the default."""
        from chat2docx.config import get_config

        monkeypatch.setenv("CHAT2DOCX_PIXEL_RATIO", "lots")

        assert get_config().render.pixel_ratio == 3
