"""Tests for CSV record parsing."""

import pytest

from nikkei_yprice.ingestion.record_iterator import Record, parse
from nikkei_yprice.shared.errors import RecordFormatError


class TestParse:
    """Test record numbering and header skipping."""

    def test_skips_one_header_row(self):
        """Should skip the header and index data rows from 0."""
        text = "企業名\nトヨタ自動車\nソニーグループ\n"
        assert list(parse(text, 1)) == [
            Record(original_index=0, entity_name="トヨタ自動車"),
            Record(original_index=1, entity_name="ソニーグループ"),
        ]

    def test_skips_multiple_header_rows(self):
        """Should skip exactly header_skip_count rows."""
        text = "title\nname\nA社\nB社\n"
        records = list(parse(text, 2))
        assert [r.entity_name for r in records] == ["A社", "B社"]
        assert [r.original_index for r in records] == [0, 1]

    def test_no_header(self):
        """Should yield every row when no header is skipped."""
        records = list(parse("A社\nB社\n", 0))
        assert [r.original_index for r in records] == [0, 1]

    def test_uses_first_column(self):
        """Should take the company name from column 0."""
        text = "name,code\n\"株式会社A, Inc.\",1\nB社,2\n"
        records = list(parse(text, 1))
        assert records[0].entity_name == "株式会社A, Inc."
        assert records[1].entity_name == "B社"

    def test_header_longer_than_input(self):
        """Should yield nothing when input ends during the skip."""
        assert list(parse("only header\n", 3)) == []

    def test_empty_input(self):
        """Should treat empty text as no records."""
        assert list(parse("", 1)) == []

    def test_blank_lines_are_not_records(self):
        """Should ignore entirely blank lines."""
        records = list(parse("name\nA社\n\nB社\n", 1))
        assert [r.original_index for r in records] == [0, 1]

    def test_crlf_line_endings(self):
        """Should handle Windows line endings."""
        records = list(parse("name\r\nA社\r\nB社\r\n", 1))
        assert [r.entity_name for r in records] == ["A社", "B社"]

    def test_is_lazy(self):
        """Should not parse rows before they are requested."""
        records = parse("name\nA社\nB社,extra\n", 1)
        assert next(records) == Record(original_index=0, entity_name="A社")
        with pytest.raises(RecordFormatError):
            next(records)

    def test_negative_header_count(self):
        """Should reject a negative header count."""
        with pytest.raises(ValueError):
            list(parse("A社\n", -1))


class TestMalformedRows:
    """Test fatal format errors."""

    def test_field_count_mismatch_reports_line(self):
        """Should report the 1-based line number of the bad row."""
        text = "name\nA社\nB社\nC社\nD社,extra\nE社\n"
        with pytest.raises(RecordFormatError) as exc_info:
            list(parse(text, 1))
        assert exc_info.value.row == 5

    def test_header_sets_field_count(self):
        """Header rows count toward the expected field count."""
        text = "name,code\nA社\n"
        with pytest.raises(RecordFormatError) as exc_info:
            list(parse(text, 1))
        assert exc_info.value.row == 2

    def test_bad_quoting(self):
        """Should reject text after a closing quote."""
        text = 'name\n"A社"x\n'
        with pytest.raises(RecordFormatError) as exc_info:
            list(parse(text, 1))
        assert exc_info.value.row == 2

    def test_empty_company_name(self):
        """Should reject a row with a blank company name."""
        text = "name,code\n ,1\n"
        with pytest.raises(RecordFormatError, match="empty company name"):
            list(parse(text, 1))
