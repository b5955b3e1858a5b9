"""
Tests for Markdown text block parsing.
"""

import pytest


class TestTextBlockParser:
    """Test mapping of Markdown blocks to block tokens."""

    @pytest.fixture
    def parser(self):
        from chat2docx.utils.text_blocks import TextBlockParser
        return TextBlockParser()

    def test_heading(self, parser):
        """A single ATX heading yields exactly one heading token."""
        from chat2docx.utils.text_blocks import HeadingToken

        assert parser.parse("# Title") == [HeadingToken(level=1, text="Title")]

    def test_heading_levels(self, parser):
        """Supported levels are kept."""
        from chat2docx.utils.text_blocks import HeadingToken

        tokens = parser.parse("## Section\n\n### Subsection")

        assert tokens == [
            HeadingToken(level=2, text="Section"),
            HeadingToken(level=3, text="Subsection"),
        ]

    def test_deep_heading_collapses_to_level_one(self, parser):
        """Headings beyond the supported range fall back to level 1."""
        from chat2docx.utils.text_blocks import HeadingToken

        tokens = parser.parse("#### Deep\n\n###### Deeper")

        assert tokens == [
            HeadingToken(level=1, text="Deep"),
            HeadingToken(level=1, text="Deeper"),
        ]

    def test_custom_heading_range(self):
        """max_heading_level widens the kept range."""
        from chat2docx.utils.text_blocks import TextBlockParser, HeadingToken

        parser = TextBlockParser(max_heading_level=6)

        assert parser.parse("#### Deep") == [HeadingToken(level=4, text="Deep")]

    def test_bullet_list(self, parser):
        """Each list item becomes an unindented list item token."""
        from chat2docx.utils.text_blocks import ListItemToken

        tokens = parser.parse("- first\n- second\n- third")

        assert tokens == [
            ListItemToken("first", 0),
            ListItemToken("second", 0),
            ListItemToken("third", 0),
        ]

    def test_ordered_list(self, parser):
        """Ordered lists map to list items as well."""
        from chat2docx.utils.text_blocks import ListItemToken

        tokens = parser.parse("1. one\n2. two")

        assert tokens == [ListItemToken("one"), ListItemToken("two")]

    def test_nested_list_is_flattened(self, parser):
        """Nested items follow their parent at indent level 0."""
        from chat2docx.utils.text_blocks import ListItemToken

        tokens = parser.parse("- a\n  - b\n- c")

        assert tokens == [ListItemToken("a"), ListItemToken("b"), ListItemToken("c")]
        assert all(t.indent_level == 0 for t in tokens)

    def test_paragraphs(self, parser):
        """Blank-line separated text gives one paragraph each."""
        from chat2docx.utils.text_blocks import ParagraphToken

        tokens = parser.parse("First paragraph.\n\nSecond paragraph.")

        assert tokens == [ParagraphToken("First paragraph."), ParagraphToken("Second paragraph.")]

    def test_inline_markup_kept(self, parser):
        """Inline Markdown is kept as written."""
        from chat2docx.utils.text_blocks import ParagraphToken

        assert parser.parse("Some **bold** text") == [ParagraphToken("Some **bold** text")]

    def test_code_block_is_paragraph(self, parser):
        """Fenced code falls back to a paragraph of its content."""
        from chat2docx.utils.text_blocks import ParagraphToken

        tokens = parser.parse("```python\nx = 1\n```")

        assert tokens == [ParagraphToken("x = 1")]

    def test_rule_uses_raw_source(self, parser):
        """Blocks without text content use their source lines."""
        from chat2docx.utils.text_blocks import ParagraphToken

        assert parser.parse("---") == [ParagraphToken("---")]

    def test_blockquote_is_paragraph(self, parser):
        """Quoted text becomes a paragraph."""
        from chat2docx.utils.text_blocks import ParagraphToken

        assert parser.parse("> quoted words") == [ParagraphToken("quoted words")]

    def test_order_is_preserved(self, parser):
        """Tokens come out in source order without merging."""
        from chat2docx.utils.text_blocks import HeadingToken, ListItemToken, ParagraphToken

        tokens = parser.parse("# Intro\n\nText here.\n\n- point\n\n## Next")

        assert tokens == [
            HeadingToken(1, "Intro"),
            ParagraphToken("Text here."),
            ListItemToken("point"),
            HeadingToken(2, "Next"),
        ]

    def test_whitespace_only(self, parser):
        """Whitespace produces no tokens."""
        assert parser.parse("  \n\n ") == []

    def test_tokenizer_failure_keeps_text(self, parser, monkeypatch):
        """If the tokenizer raises, the span becomes one paragraph."""
        from chat2docx.utils.text_blocks import ParagraphToken

        def broken(text):
            raise RuntimeError("tokenizer exploded")

        monkeypatch.setattr(parser._md, "parse", broken)

        assert parser.parse("  some text  ") == [ParagraphToken("some text")]

    def test_parse_text_helper(self):
        """parse_text uses a fresh parser."""
        from chat2docx.utils.text_blocks import parse_text, HeadingToken

        assert parse_text("# Hi") == [HeadingToken(1, "Hi")]
