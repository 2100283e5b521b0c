"""Tests for the markup scanning functions."""

import pytest

from streamxml.tokenization.scanner import (
    RawAttribute,
    find_markup,
    find_tag_close,
    has_unterminated_quote,
    is_blank,
    is_name_char,
    match_keyword,
    scan_attributes,
    scan_balanced,
    scan_name,
    scan_quoted,
    skip_whitespace,
    split_tag_name,
)


class TestCharacterPredicates:
    """Tests for character-class predicates."""

    @pytest.mark.parametrize("char", ["a", "Z", "0", "-", ":", "_", "é"])
    def test_name_chars(self, char):
        """Test characters accepted in names."""
        assert is_name_char(char)

    @pytest.mark.parametrize("char", [" ", "=", '"', ">", "/", ".", ""])
    def test_non_name_chars(self, char):
        """Test characters rejected in names."""
        assert not is_name_char(char)

    def test_is_blank(self):
        """Test whitespace-only detection."""
        assert is_blank("")
        assert is_blank(" \t\r\n")
        assert not is_blank("  x ")


class TestPrimitiveScans:
    """Tests for skip and scan helpers."""

    def test_skip_whitespace(self):
        """Test skipping runs of whitespace."""
        assert skip_whitespace("  \n x", 0) == 4
        assert skip_whitespace("x", 0) == 0
        assert skip_whitespace("   ", 1) == 3

    def test_scan_name(self):
        """Test scanning a run of name characters."""
        assert scan_name("ab-c:d e", 0) == 6
        assert scan_name("=x", 0) == 0

    def test_scan_quoted(self):
        """Test scanning quoted literals with either quote."""
        assert scan_quoted('"abc" rest', 0) == (5, "abc")
        assert scan_quoted("x='a\"b'", 2) == (7, 'a"b')
        assert scan_quoted('"open', 0) is None
        assert scan_quoted("plain", 0) is None
        assert scan_quoted("", 0) is None

    def test_scan_balanced(self):
        """Test nested bracket scanning includes the outer brackets."""
        assert scan_balanced("[a[b]c]>", 0) == (7, "[a[b]c]")
        assert scan_balanced("x [] y", 2) == (4, "[]")
        assert scan_balanced("[a[b]", 0) is None
        assert scan_balanced("a]", 0) is None

    def test_match_keyword(self):
        """Test keyword matching at an exact position."""
        assert match_keyword("  SYSTEM x", 2, "SYSTEM") == 8
        assert match_keyword("  system x", 2, "SYSTEM") == -1


class TestFindMarkup:
    """Tests for first-pass tag boundary detection."""

    def test_start_tag_with_leading_text(self):
        """Test boundary for text followed by a start tag."""
        boundary = find_markup("hello <a x='1'>", 0)

        assert boundary.text_start == 0
        assert boundary.tag_start == 6
        assert boundary.tag_end == 14
        assert boundary.body == "a x='1'"
        assert not boundary.closing
        assert not boundary.self_closing
        assert boundary.has_leading_text

    def test_end_tag(self):
        """Test the leading slash is split off the body."""
        boundary = find_markup("</a>", 0)
        assert boundary.closing
        assert boundary.body == "a"
        assert not boundary.has_leading_text

    def test_self_closing_tag(self):
        """Test the trailing slash is split off the body."""
        boundary = find_markup("<br/>", 0)
        assert boundary.self_closing
        assert boundary.body == "br"
        assert boundary.tag_end == 4

    def test_bare_slash_tag(self):
        """Test </> is a closing tag with an empty body."""
        boundary = find_markup("</>", 0)
        assert boundary.closing
        assert not boundary.self_closing
        assert boundary.body == ""

    def test_body_stops_at_first_gt(self):
        """Test the first pass does not look inside quotes."""
        boundary = find_markup('<a b="1>2">', 0)
        assert boundary.body == 'a b="1'
        assert boundary.tag_end == 7

    def test_no_markup(self):
        """Test that missing '<' or '>' yields None."""
        assert find_markup("plain text", 0) is None
        assert find_markup("text <a", 0) is None
        assert find_markup("<a>", 3) is None


class TestTagExtension:
    """Tests for quote-aware tag extension helpers."""

    @pytest.mark.parametrize("body", [
        'a b="1',
        "a b='x",
        'a b="1" c = "2',
        "a b='\"' c='",
    ])
    def test_unterminated(self, body):
        """Test bodies that end inside a quoted value."""
        assert has_unterminated_quote(body)

    @pytest.mark.parametrize("body", [
        "a",
        'a b="1"',
        "a b='1' c=\"x>y\"",
        'a b="x=y"',
        "a b=1 c",
        "a b=",
    ])
    def test_terminated(self, body):
        """Test bodies whose quoted values are all closed."""
        assert not has_unterminated_quote(body)

    def test_find_tag_close(self):
        """Test locating the next boundary and its self-closing slash."""
        assert find_tag_close('2">rest', 0) == (2, False)
        assert find_tag_close('2"/>', 0) == (3, True)
        assert find_tag_close("/>", 1) == (1, False)
        assert find_tag_close("none", 0) is None


class TestTagSplitting:
    """Tests for tag name and attribute extraction."""

    def test_split_tag_name(self):
        """Test the name ends at the first whitespace."""
        assert split_tag_name('item id="1"') == ("item", 4)
        assert split_tag_name("item\n\tid='1'") == ("item", 4)
        assert split_tag_name("item") == ("item", 4)
        assert split_tag_name("") == ("", 0)

    def test_scan_attributes(self):
        """Test collecting quoted attribute pairs."""
        attributes = scan_attributes("a X = \"1\" y='two' junk z=3 w=\"4\"", 1)
        assert attributes == [
            RawAttribute("X", "1"),
            RawAttribute("y", "two"),
            RawAttribute("w", "4"),
        ]

    def test_scan_attributes_keeps_gt_and_equals(self):
        """Test values containing markup characters."""
        assert scan_attributes('a b="1>2" c="k=v"', 1) == [
            RawAttribute("b", "1>2"),
            RawAttribute("c", "k=v"),
        ]

    def test_scan_attributes_none(self):
        """Test a body without attributes."""
        assert scan_attributes("target free text", 6) == []
