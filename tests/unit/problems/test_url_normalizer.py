"""Unit tests for problems.url_normalizer module."""

import pytest

from src.problems.url_normalizer import extract_slug, normalize_url

CANONICAL = "https://leetcode.com/problems/two-sum/"


class TestNormalizeUrl:

    @pytest.mark.parametrize("url", [
        "https://leetcode.com/problems/two-sum",
        "https://leetcode.com/problems/two-sum/",
        "https://leetcode.com/problems/two-sum/description/",
        "https://leetcode.com/problems/two-sum/?tab=description",
        "https://leetcode.com/problems/two-sum/solutions/123/abc#top",
        "HTTPS://LeetCode.com/problems/two-sum",
    ])
    def test_variants_collapse_to_one_key(self, url):
        assert normalize_url(url) == CANONICAL

    def test_idempotent(self):
        assert normalize_url(normalize_url("https://leetcode.com/problems/two-sum/x/")) == CANONICAL

    def test_strips_userinfo(self):
        assert normalize_url("https://user:pw@leetcode.com/problems/two-sum/") == CANONICAL

    def test_keeps_port(self):
        assert normalize_url("http://localhost:8080/problems/a/b") == "http://localhost:8080/problems/a/"

    @pytest.mark.parametrize("url, expected", [
        ("https://leetcode.com:443/problems/two-sum/", CANONICAL),
        ("HTTPS://LeetCode.com:443/problems/two-sum", CANONICAL),
        ("http://leetcode.com:80/problems/two-sum/", "http://leetcode.com/problems/two-sum/"),
        ("http://leetcode.com:443/problems/two-sum/", "http://leetcode.com:443/problems/two-sum/"),
    ])
    def test_default_port_dropped(self, url, expected):
        assert normalize_url(url) == expected

    def test_default_port_matches_portless_url(self):
        assert normalize_url("https://leetcode.com:443/problems/two-sum/") == \
            normalize_url("https://leetcode.com/problems/two-sum")

    def test_invalid_port_returned_unchanged(self):
        url = "https://leetcode.com:notaport/problems/two-sum/"
        assert normalize_url(url) == url

    @pytest.mark.parametrize("url", [
        "https://leetcode.com/contest/weekly-1/",
        "https://leetcode.com/problems/",
        "https://leetcode.com/",
    ])
    def test_non_problem_urls_unchanged(self, url):
        assert normalize_url(url) == url

    @pytest.mark.parametrize("url", ["not a url", "", "/problems/two-sum/"])
    def test_unparseable_returned_unchanged(self, url):
        assert normalize_url(url) == url

    def test_non_string_returned_unchanged(self):
        assert normalize_url(None) is None


class TestExtractSlug:

    def test_problem_url(self):
        assert extract_slug("https://leetcode.com/problems/two-sum/description/") == "two-sum"

    def test_last_segment_fallback(self):
        assert extract_slug("https://example.com/practice/reverse-list") == "reverse-list"

    def test_input_when_no_segments(self):
        assert extract_slug("https://example.com/") == "https://example.com/"
        assert extract_slug("garbage") == "garbage"
