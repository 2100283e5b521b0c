"""Tests for entity expansion."""

import pytest

from streamxml.tokenization.entities import PREDEFINED_ENTITIES, expand_entities


class TestExpandEntities:
    """Tests for the closed entity expansion routine."""

    @pytest.mark.parametrize("name, expected", sorted(PREDEFINED_ENTITIES.items()))
    def test_predefined_entities(self, name, expected):
        """Test each of the five predefined entities."""
        assert expand_entities(f"&{name};") == expected

    def test_decimal_reference(self):
        """Test decimal character references in range."""
        assert expand_entities("&#65;") == "A"
        assert expand_entities("&#0065;") == "A"
        assert expand_entities("&#255;") == "\xff"

    def test_hex_reference(self):
        """Test hexadecimal character references in either case."""
        assert expand_entities("&#x41;") == "A"
        assert expand_entities("&#x6a;&#x6A;") == "jj"

    def test_out_of_range_reference_is_verbatim(self):
        """Test references above 255 are left as written."""
        assert expand_entities("&#999;") == "&#999;"
        assert expand_entities("&#x100;") == "&#x100;"
        assert expand_entities("&#256;") == "&#256;"

    def test_single_pass(self):
        """Test replacement output is never rescanned."""
        assert expand_entities("&amp;lt;") == "&lt;"
        assert expand_entities("&amp;#65;") == "&#65;"

    def test_unknown_and_malformed_references(self):
        """Test text that is not a recognised reference is unchanged."""
        assert expand_entities("&nbsp; &lt &#; &#xZZ; & x") == "&nbsp; &lt &#; &#xZZ; & x"
        assert expand_entities("&LT;") == "&LT;"

    def test_mixed_text(self):
        """Test references embedded in ordinary text."""
        assert expand_entities("a &lt; b &amp;&amp; c &gt; d") == "a < b && c > d"

    def test_text_without_ampersand(self):
        """Test plain text passes through unchanged."""
        assert expand_entities("plain text") == "plain text"
        assert expand_entities("") == ""
