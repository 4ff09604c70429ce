"""
Tests for render/markdown_subset.py - Description parser
"""
import pytest

from rpp_copilot.render.markdown_subset import (
    HEADER,
    PARAGRAPH,
    Block,
    blocks_as_tuples,
    parse_description,
    plain_block,
)


def parse(text, **kwargs):
    return blocks_as_tuples(parse_description(text, **kwargs))


class TestParseDescription:
    """Test parse_description"""

    def test_header_then_list(self):
        assert parse("**Title**\n1. First\n2. Second") == [
            ("header", "Title"),
            ("list", ["First", "Second"]),
        ]

    def test_header_splits_lists(self):
        text = "**Pembuka**\n1. Salam\n2. Doa\n**Inti**\n1. Diskusi"
        assert parse(text) == [
            ("header", "Pembuka"),
            ("list", ["Salam", "Doa"]),
            ("header", "Inti"),
            ("list", ["Diskusi"]),
        ]

    def test_paragraph_ends_list(self):
        assert parse("1. Satu\nCatatan guru\n2. Dua") == [
            ("list", ["Satu"]),
            ("paragraph", "Catatan guru"),
            ("list", ["Dua"]),
        ]

    def test_blank_lines_and_whitespace_ignored(self):
        assert parse("\n   **Judul**  \n\n  1.   Item  \n\n") == [
            ("header", "Judul"),
            ("list", ["Item"]),
        ]

    def test_inline_bold_is_stripped(self):
        assert parse("Siswa **aktif** bertanya") == [("paragraph", "Siswa aktif bertanya")]

    def test_number_without_space_is_paragraph(self):
        assert parse("2025 adalah tahun ajaran") == [("paragraph", "2025 adalah tahun ajaran")]

    @pytest.mark.parametrize("text", ["", None, "\n\n  \n"])
    def test_empty_input(self, text):
        assert parse_description(text) == []

    def test_bullets_pass_through_by_default(self):
        assert parse("- Satu\n* Dua", bullet_policy="passthrough") == [
            ("paragraph", "- Satu"),
            ("paragraph", "* Dua"),
        ]

    def test_bullets_normalized(self):
        assert parse("**Langkah**\n- Satu\n• Dua\n3. Tiga", bullet_policy="normalize") == [
            ("header", "Langkah"),
            ("list", ["Satu", "Dua", "Tiga"]),
        ]

    def test_header_kind_constants(self):
        blocks = parse_description("**A**\nteks")
        assert [b.kind for b in blocks] == [HEADER, PARAGRAPH]


class TestPlainBlock:
    """Test plain_block"""

    def test_one_paragraph_per_line(self):
        assert plain_block("Tercapai: 75 - 100\nBelum Tercapai: 0 - 64") == [
            Block(PARAGRAPH, text="Tercapai: 75 - 100"),
            Block(PARAGRAPH, text="Belum Tercapai: 0 - 64"),
        ]

    def test_markdown_is_not_parsed(self):
        assert plain_block("**Bukan judul**") == [Block(PARAGRAPH, text="**Bukan judul**")]
