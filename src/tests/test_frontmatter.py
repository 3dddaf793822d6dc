"""Unit tests for frontmatter parsing."""

from datetime import date

import pytest

from inkwell.core.frontmatter import (
    FrontmatterError,
    parse_frontmatter,
    split_frontmatter,
)


# ============================================================
# Valid headers
# ============================================================


class TestParseFrontmatter:
    def test_quoted_fields(self):
        text = '---\ntitle: "X"\nsummary: "Y"\npublishedAt: "2025-01-01"\n---\nBody'
        metadata, body = parse_frontmatter(text)
        assert metadata == {"title": "X", "summary": "Y", "publishedAt": "2025-01-01"}
        assert body == "Body"

    def test_keys_are_exactly_those_present(self):
        metadata, _ = parse_frontmatter("---\ntitle: Only\n---\n")
        assert metadata == {"title": "Only"}

    def test_unquoted_date_is_typed(self):
        metadata, _ = parse_frontmatter("---\npublishedAt: 2025-01-01\n---\n")
        assert metadata["publishedAt"] == date(2025, 1, 1)

    def test_nested_values(self):
        text = "---\nauthor:\n  name: Ann\ntags:\n  - python\n  - notes\n---\nBody"
        metadata, _ = parse_frontmatter(text)
        assert metadata["author"] == {"name": "Ann"}
        assert metadata["tags"] == ["python", "notes"]

    def test_empty_header(self):
        metadata, body = parse_frontmatter("---\n---\nBody text")
        assert metadata == {}
        assert body == "Body text"

    def test_blank_header(self):
        metadata, body = parse_frontmatter("---\n\n---\nBody text")
        assert metadata == {}
        assert body == "Body text"

    def test_body_kept_verbatim(self):
        body_text = "\n# Heading\n\nParagraph.\n\n---\n\nAfter rule.\n"
        _, body = parse_frontmatter("---\ntitle: T\n---\n" + body_text)
        assert body == body_text

    def test_closing_marker_at_end_of_file(self):
        metadata, body = parse_frontmatter("---\ntitle: X\n---")
        assert metadata == {"title": "X"}
        assert body == ""

    def test_marker_trailing_whitespace(self):
        metadata, body = parse_frontmatter("---  \ntitle: X\n--- \nBody")
        assert metadata == {"title": "X"}
        assert body == "Body"

    def test_crlf_line_endings(self):
        metadata, body = parse_frontmatter("---\r\ntitle: Hi\r\n---\r\nBody")
        assert metadata == {"title": "Hi"}
        assert body == "Body"

    def test_byte_order_mark_ignored(self):
        metadata, body = parse_frontmatter("\ufeff---\ntitle: Hi\n---\nBody")
        assert metadata == {"title": "Hi"}
        assert body == "Body"


# ============================================================
# No header
# ============================================================


class TestNoFrontmatter:
    def test_plain_markdown(self):
        text = "# Just a heading\n\nSome text."
        metadata, body = parse_frontmatter(text)
        assert metadata == {}
        assert body == text

    def test_marker_not_on_first_line(self):
        text = "Intro\n---\ntitle: X\n---\n"
        metadata, body = parse_frontmatter(text)
        assert metadata == {}
        assert body == text

    def test_unclosed_header(self):
        text = "---\ntitle: X\nno closing marker"
        metadata, body = parse_frontmatter(text)
        assert metadata == {}
        assert body == text

    def test_empty_file(self):
        assert parse_frontmatter("") == ({}, "")


# ============================================================
# Malformed headers
# ============================================================


class TestMalformedFrontmatter:
    def test_invalid_yaml(self):
        with pytest.raises(FrontmatterError) as exc_info:
            parse_frontmatter("---\ntitle: [unclosed\n---\nBody")
        assert "Invalid YAML" in exc_info.value.detail

    def test_header_not_a_mapping(self):
        with pytest.raises(FrontmatterError) as exc_info:
            parse_frontmatter("---\n- a\n- b\n---\nBody")
        assert "mapping" in exc_info.value.detail

    def test_scalar_header(self):
        with pytest.raises(FrontmatterError):
            parse_frontmatter("---\njust a string\n---\nBody")

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            parse_frontmatter("---\n: : invalid: yaml: [[\n---\n\nBody")


class TestSplitFrontmatter:
    def test_returns_raw_header(self):
        header, body = split_frontmatter("---\ntitle: X\n---\nBody")
        assert header == "title: X\n"
        assert body == "Body"

    def test_no_header(self):
        assert split_frontmatter("Body") == (None, "Body")
