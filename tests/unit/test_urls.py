"""
Unit tests for URL and title utilities.

Tests verify:
1. URL normalization collapses scheme/www/case/trailing-slash variants
2. YouTube id and thumbnail extraction
3. Title cleaning rules and idempotence
"""

import pytest

from src.utils.urls import (
    clean_title,
    is_video_uri,
    normalize_url,
    source_hostname,
    youtube_thumbnail,
    youtube_video_id,
)


class TestNormalizeUrl:
    """Tests for normalize_url."""

    def test_equivalent_forms_collapse(self) -> None:
        """Scheme, www, and case differences share one key."""
        keys = {
            normalize_url("http://Example.com/X"),
            normalize_url("https://www.example.com/x"),
            normalize_url("example.com/x"),
        }
        assert keys == {"example.com/x"}

    def test_single_trailing_slash_stripped(self) -> None:
        assert normalize_url("https://sqlbolt.com/") == "sqlbolt.com"
        assert normalize_url("https://sqlbolt.com//") == "sqlbolt.com/"

    def test_uppercase_scheme(self) -> None:
        assert normalize_url("HTTPS://WWW.YouTube.com/") == "youtube.com"

    def test_normalization_is_stable(self) -> None:
        key = normalize_url("https://www.example.com/a/")
        assert normalize_url(key) == key


class TestYouTube:
    """Tests for YouTube id/thumbnail helpers."""

    @pytest.mark.parametrize("url", [
        "https://www.youtube.com/watch?v=abc12345678",
        "https://youtu.be/abc12345678",
        "https://www.youtube.com/embed/abc12345678",
        "https://www.youtube.com/shorts/abc12345678",
        "https://www.youtube.com/watch?feature=share&v=abc12345678",
    ])
    def test_video_id_forms(self, url: str) -> None:
        assert youtube_video_id(url) == "abc12345678"

    def test_wrong_length_id_rejected(self) -> None:
        assert youtube_video_id("https://www.youtube.com/watch?v=short") is None

    def test_homepage_has_no_thumbnail(self) -> None:
        assert youtube_thumbnail("https://www.youtube.com/") is None

    def test_thumbnail_url(self) -> None:
        assert (
            youtube_thumbnail("https://www.youtube.com/watch?v=abc12345678")
            == "https://img.youtube.com/vi/abc12345678/hqdefault.jpg"
        )


class TestHostHelpers:
    """Tests for hostname and video-host detection."""

    def test_source_hostname_strips_www(self) -> None:
        assert source_hostname("https://www.w3schools.com/sql/") == "w3schools.com"
        assert source_hostname("https://docs.python.org/3/") == "docs.python.org"

    def test_source_hostname_without_host(self) -> None:
        assert source_hostname("not a url") is None

    def test_video_hosts(self) -> None:
        assert is_video_uri("https://vimeo.com/123")
        assert is_video_uri("https://youtu.be/abc12345678")
        assert not is_video_uri("https://sqlbolt.com/")


class TestCleanTitle:
    """Tests for clean_title."""

    def test_empty_title_video(self) -> None:
        assert clean_title("  ", "https://youtu.be/abc12345678", "Joins") == "Joins (Video)"

    def test_missing_title_article(self) -> None:
        assert clean_title(None, "https://sqlbolt.com/", "Joins") == "Joins Guide"

    def test_site_suffix_stripped(self) -> None:
        assert clean_title("SQL Joins - YouTube", "https://youtube.com/watch?v=x", "Joins") == "SQL Joins"
        assert clean_title("Databases | Coursera", "https://coursera.org/learn/db", "DB") == "Databases"
        assert clean_title("SQL - Wikipedia", "https://en.wikipedia.org/wiki/SQL", "SQL") == "SQL"

    @pytest.mark.parametrize("generic", ["YouTube", "youtube.com", "Video", "article", "Home", "index"])
    def test_generic_titles_replaced(self, generic: str) -> None:
        assert clean_title(generic, "https://sqlbolt.com/", "Joins") == "Joins Guide"

    def test_url_like_title_replaced(self) -> None:
        assert (
            clean_title("https://www.youtube.com/watch?v=abc", "https://www.youtube.com/watch?v=abc", "Joins")
            == "Joins (Video)"
        )

    def test_suffix_only_title_falls_back(self) -> None:
        assert clean_title(" - YouTube", "https://www.youtube.com/watch?v=a", "Joins") == "Joins (Video)"

    @pytest.mark.parametrize("title,uri,topic", [
        ("SQL Joins - YouTube - YouTube", "https://youtube.com/watch?v=x", "Joins"),
        ("", "https://vimeo.com/1", "Joins"),
        ("http://example.com", "https://example.com", "http basics"),
        ("  Index  ", "https://example.com", ""),
        ("Learn SQL | Coursera", "https://coursera.org/", "SQL"),
        ("Plain Title", "https://example.com", "Topic"),
    ])
    def test_idempotent(self, title: str, uri: str, topic: str) -> None:
        once = clean_title(title, uri, topic)
        assert clean_title(once, uri, topic) == once

    @pytest.mark.parametrize("title", ["Intro - youtube", "Intro | COURSERA", "Intro - w3schools"])
    def test_site_suffix_case_insensitive(self, title: str) -> None:
        assert clean_title(title, "https://example.com/intro", "Topic") == "Intro"
