"""Tests for fuzzy ranking"""

from dnsboard.table.ranking import PASS_THRESHOLD, Rank, rank_item, rank_value


class TestRankTiers:
    """Tests for the match tiers"""

    def test_case_sensitive_equal(self):
        assert rank_value("example.com", "example.com") == Rank.CASE_SENSITIVE_EQUAL

    def test_equal_ignoring_case(self):
        assert rank_value("Example.com", "example.COM") == Rank.EQUAL

    def test_starts_with(self):
        assert rank_value("example.com", "exa") == Rank.STARTS_WITH

    def test_word_starts_with(self):
        assert rank_value("my router", "rou") == Rank.WORD_STARTS_WITH

    def test_contains(self):
        assert rank_value("ads.example.com", "example") == Rank.CONTAINS

    def test_acronym(self):
        assert rank_value("ads-example-com", "aec") == Rank.ACRONYM

    def test_in_order_characters(self):
        """Test scattered in-order characters land between MATCHES and ACRONYM"""
        rank = rank_value("router.lan", "rtl")

        assert Rank.MATCHES <= rank < Rank.ACRONYM

    def test_closer_matches_rank_higher(self):
        assert rank_value("rxtxl", "rtl") > rank_value("router.lan", "rtl")

    def test_no_match(self):
        assert rank_value("router", "xyz") == Rank.NO_MATCH

    def test_query_longer_than_item(self):
        assert rank_value("lan", "router.lan") == Rank.NO_MATCH

    def test_single_character_must_be_contained(self):
        assert rank_value("abc", "z") == Rank.NO_MATCH
        assert rank_value("abc", "b") == Rank.CONTAINS

    def test_numbers_ranked_as_text(self):
        assert rank_value(28, "28") == Rank.CASE_SENSITIVE_EQUAL
        assert rank_value(1234, "23") == Rank.CONTAINS


class TestRankItem:
    """Tests for rank_item"""

    def test_passes_threshold(self):
        result = rank_item("router.lan", "rtl")

        assert result.passed
        assert result.rank >= PASS_THRESHOLD

    def test_fails_threshold(self):
        result = rank_item("router.lan", "zzz")

        assert not result.passed
        assert result.rank == Rank.NO_MATCH

    def test_custom_threshold(self):
        assert not rank_item("ads.example.com", "example", threshold=Rank.STARTS_WITH).passed
