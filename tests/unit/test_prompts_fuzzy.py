"""
Unit tests for fuzzy matching.
"""

from openskills.prompts import Choice, Separator, filter_indexes, fuzzy_score


class TestFuzzyScore:
    """Tests for the default scorer."""

    def test_no_match(self):
        """Test that a non-subsequence does not match."""
        assert fuzzy_score("an", "Cherry") is None
        assert fuzzy_score("xyz", "abc") is None

    def test_empty_query(self):
        """Test that an empty query is not a match by itself."""
        assert fuzzy_score("", "abc") is None

    def test_case_insensitive(self):
        """Test case folding."""
        assert fuzzy_score("PDF", "pdf tools") == fuzzy_score("pdf", "PDF Tools")

    def test_contiguous_beats_scattered(self):
        """Test that contiguous runs outrank gaps."""
        assert fuzzy_score("an", "answer") > fuzzy_score("an", "a long name")

    def test_prefix_beats_inner(self):
        """Test that a match at the start ranks higher."""
        assert fuzzy_score("doc", "docx") > fuzzy_score("doc", "markdown-docs")

    def test_word_start_bonus(self):
        """Test that word starts count as better than mid-word hits."""
        assert fuzzy_score("s", "web-search") > fuzzy_score("s", "web-xsearch")

    def test_query_longer_than_text(self):
        """Test that a longer query never matches."""
        assert fuzzy_score("abcd", "abc") is None


class TestFilterIndexes:
    """Tests for computing the filtered view."""

    def test_empty_query_keeps_everything(self):
        """Test that separators stay when not filtering."""
        items = [Choice("a", name="a"), Separator(), Choice("b", name="b")]
        assert filter_indexes(items, "") == (0, 1, 2)

    def test_orders_by_score_then_index(self):
        """Test ordering of matches."""
        items = [
            Choice("x", name="cabana"),
            Choice("y", name="ban"),
            Separator(),
            Choice("z", name="bandana"),
        ]
        assert filter_indexes(items, "ban") == (1, 3, 0)

    def test_custom_scorer(self):
        """Test that a scorer returning zero excludes items."""
        items = [Choice("a", name="a"), Choice("b", name="b")]
        assert filter_indexes(items, "q", lambda query, text: 1.0 if text == "b" else 0) == (1,)
