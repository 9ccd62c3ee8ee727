"""Tests for the publication, author, date and content extractors."""

import pytest
from bs4 import BeautifulSoup
from article_enricher.extractors import platforms
from article_enricher.extractors.author import clean_author, extract_author
from article_enricher.extractors.content import extract_content
from article_enricher.extractors.date import extract_date
from article_enricher.extractors.pipeline import extract_metadata_from_html
from article_enricher.extractors.publication import (
    UNKNOWN_PUBLICATION,
    extract_publication,
    publication_from_url,
)


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


class TestPublication:
    """Tests for extract_publication."""

    def test_og_site_name_first(self, article_html: str):
        assert extract_publication(soup_of(article_html), "https://dailyledger.com/a") == "The Daily Ledger"

    def test_json_ld_publisher(self):
        html = """
        <html><head><script type="application/ld+json">
        {"@type": "NewsArticle", "publisher": {"name": "Daily Ledger Media"}}
        </script></head><body></body></html>
        """
        assert extract_publication(soup_of(html), "https://dailyledger.com/a") == "Daily Ledger Media"

    def test_publisher_meta(self):
        html = '<html><head><meta name="publisher" content="Metro Times"></head></html>'
        assert extract_publication(soup_of(html), "https://metro.example/a") == "Metro Times"

    def test_header_brand_text(self):
        html = '<html><body><header><div class="logo">Metro Times</div></header></body></html>'
        assert extract_publication(soup_of(html), "https://metro.example/a") == "Metro Times"

    def test_logo_image_alt(self):
        html = '<html><body><div class="logo"><img src="logo.png" alt="Metro Times"></div></body></html>'
        assert extract_publication(soup_of(html), "https://metro.example/a") == "Metro Times"

    def test_long_brand_text_falls_back_to_domain(self):
        tagline = "Independent reporting on the city, its people and its politics since 1901"
        html = f'<html><body><header><div class="logo">{tagline}</div></header></body></html>'
        assert extract_publication(soup_of(html), "https://www.the-verge.com/a") == "The Verge"

    @pytest.mark.parametrize("url,expected", [
        ("https://www.the-verge.com/2021/story", "The Verge"),
        ("https://news.example.co.uk/item", "News"),
        ("https://example.com", "Example"),
        ("not a url", UNKNOWN_PUBLICATION),
    ])
    def test_publication_from_url(self, url: str, expected: str):
        assert publication_from_url(url) == expected

    def test_never_empty(self):
        assert extract_publication(soup_of("<html></html>"), "") == UNKNOWN_PUBLICATION


class TestAuthor:
    """Tests for extract_author."""

    def test_no_byline_returns_empty(self):
        html = "<html><body><article><p>Plain text with nothing.</p></article></body></html>"
        assert extract_author(soup_of(html), "https://example.com/a") == ""

    def test_json_ld_author(self, article_html: str):
        attempts = []
        author = extract_author(soup_of(article_html), "https://dailyledger.com/a", attempts=attempts)
        assert author == "Maria Lopez"
        assert attempts[-1].strategy == "json-ld"

    def test_byline_class_with_and(self):
        html = """
        <html><body><article>
          <div class="byline">By Jane Doe and John Smith</div>
          <p>Story text.</p>
        </article></body></html>
        """
        assert extract_author(soup_of(html), "https://example.com/a") == "Jane Doe, John Smith"

    def test_sidebar_byline_ignored(self):
        html = """
        <html><body>
          <article><p>Story text without a byline.</p></article>
          <aside><div class="author">Robert Jones</div></aside>
        </body></html>
        """
        assert extract_author(soup_of(html), "https://example.com/a") == ""

    def test_failed_candidate_falls_through(self):
        """A byline that fails validation does not stop the cascade."""
        html = """
        <html><head><meta name="author" content="Jane Doe"></head><body>
          <article><div class="byline">Staff</div><p>Council news.</p></article>
          <footer>Contact Jane Doe</footer>
        </body></html>
        """
        attempts = []
        assert extract_author(soup_of(html), "https://example.com/a", attempts=attempts) == "Jane Doe"
        assert [a.accepted for a in attempts] == [False, True]

    def test_meta_author_not_on_page_rejected(self):
        html = """
        <html><head><meta name="author" content="Robert Jones"></head>
        <body><article><p>Story.</p></article></body></html>
        """
        assert extract_author(soup_of(html), "https://example.com/a") == ""

    def test_meta_profile_url_skipped(self):
        html = """
        <html><head><meta property="article:author" content="https://facebook.com/jane"></head>
        <body><article><p>Story.</p></article></body></html>
        """
        assert extract_author(soup_of(html), "https://example.com/a") == ""

    def test_multi_author_container(self):
        html = """
        <html><body><article>
          <div class="authors"><a href="/a/1">Jane Doe</a><a href="/a/2">John Smith</a></div>
          <p>Story.</p>
        </article></body></html>
        """
        assert extract_author(soup_of(html), "https://example.com/a") == "Jane Doe, John Smith"

    def test_itemprop_author(self):
        html = """
        <html><body><article>
          <span itemprop="author" itemscope><span itemprop="name">Jane Doe</span></span>
          <p>Story.</p>
        </article></body></html>
        """
        assert extract_author(soup_of(html), "https://example.com/a") == "Jane Doe"

    def test_text_pattern(self):
        html = "<html><body><article><p>Written by Jane Doe, the story continues.</p></article></body></html>"
        assert extract_author(soup_of(html), "https://example.com/a") == "Jane Doe"

    def test_apnews_site_extractor(self):
        html = """
        <html><head><script type="application/ld+json">{"author": "Associated Press"}</script></head>
        <body>
          <div class="Page-authors">By <a href="/a">Jane Doe</a> and <a href="/b">John Smith</a></div>
          <article><p>Story.</p></article>
        </body></html>
        """
        attempts = []
        author = extract_author(soup_of(html), "https://apnews.com/article/x", attempts=attempts)
        assert author == "Jane Doe, John Smith"
        assert attempts[0].strategy == "site:apnews"

    def test_registered_site_runs_first(self, monkeypatch):
        monkeypatch.setattr(platforms, "_REGISTRY", list(platforms._REGISTRY))

        @platforms.register_site("examplewire", platforms.matches_domain("examplewire.test"))
        def extract_examplewire(soup, scope):
            return soup.select_one(".wire-credit").get_text(strip=True)

        html = """
        <html><body>
          <div class="wire-credit">Jane Doe</div>
          <article><div class="byline">By John Smith</div></article>
        </body></html>
        """
        assert "examplewire" in platforms.registered_sites()
        assert extract_author(soup_of(html), "https://news.examplewire.test/a") == "Jane Doe"
        assert extract_author(soup_of(html), "https://other.test/a") == "John Smith"

    @pytest.mark.parametrize("raw,expected", [
        ("By Jane Doe", "Jane Doe"),
        ("Byline: Jane Doe", "Jane Doe"),
        ("Written by  Jane Doe", "Jane Doe"),
        ("Author(s): Jane Doe", "Jane Doe"),
        ("Jane Doe • 5 min read", "Jane Doe"),
    ])
    def test_clean_author(self, raw: str, expected: str):
        assert clean_author(raw) == expected


class TestDate:
    """Tests for extract_date."""

    def test_json_ld_date_first(self, article_html: str):
        assert extract_date(soup_of(article_html)) == "2023-03-14"

    def test_time_near_byline_preferred(self):
        html = """
        <html><body><article>
          <div class="updated-box"><time datetime="2022-06-03">Updated June 3, 2022</time></div>
          <div class="header"><span class="byline">By Jane Doe</span>
            <time datetime="2022-06-01">June 1, 2022</time></div>
        </article></body></html>
        """
        assert extract_date(soup_of(html)) == "2022-06-01"

    def test_updated_stamps_skipped(self):
        html = """
        <html><body><article>
          <span class="date">Updated March 5, 2022</span>
          <span class="timestamp">March 1, 2022</span>
        </article></body></html>
        """
        assert extract_date(soup_of(html)) == "2022-03-01"

    def test_meta_fallback_skips_implausible(self):
        html = """
        <html><head>
          <meta property="article:published_time" content="1970-01-01T00:00:00Z">
          <meta name="date" content="2019-01-02">
        </head><body><p>No dates here.</p></body></html>
        """
        assert extract_date(soup_of(html)) == "2019-01-02"

    def test_implausible_json_ld_falls_through(self):
        html = """
        <html><head>
          <script type="application/ld+json">{"datePublished": "1970-01-01"}</script>
          <meta property="article:published_time" content="2020-05-06T10:00:00+02:00">
        </head><body><p>Story.</p></body></html>
        """
        assert extract_date(soup_of(html)) == "2020-05-06"

    def test_date_in_first_paragraph(self):
        html = "<html><body><article><p>NEW YORK (March 2, 2021) - The story.</p></article></body></html>"
        assert extract_date(soup_of(html)) == "2021-03-02"

    def test_no_date(self):
        html = "<html><body><article><p>Nothing to see.</p></article></body></html>"
        assert extract_date(soup_of(html)) == ""


class TestContent:
    """Tests for extract_content."""

    def test_long_description_kept(self):
        description = "A detailed description of the article that is long enough to stand on its own as content. " * 2
        html = f'<html><head><meta name="description" content="{description}"></head><body><article><p>Body</p></article></body></html>'
        assert extract_content(soup_of(html)) == description.strip()

    def test_short_description_replaced_by_paragraphs(self, article_html: str):
        assert extract_content(soup_of(article_html)) == (
            "The city council voted 7-2 on Tuesday to approve next year's budget. "
            "The plan raises spending on parks and transit."
        )

    def test_at_most_ten_paragraphs(self):
        paragraphs = "".join(f"<p>Paragraph {i}.</p>" for i in range(12))
        content = extract_content(soup_of(f"<html><body><article>{paragraphs}</article></body></html>"))
        assert "Paragraph 9." in content
        assert "Paragraph 10." not in content

    def test_container_without_paragraphs(self):
        html = '<html><body><div class="article-body">Just   text here</div></body></html>'
        assert extract_content(soup_of(html)) == "Just text here"

    def test_short_description_when_no_container(self):
        html = '<html><head><meta property="og:description" content="Teaser"></head><body><div>x</div></body></html>'
        assert extract_content(soup_of(html)) == "Teaser"

    def test_nothing_found(self):
        assert extract_content(soup_of("<html><body><div>x</div></body></html>")) == ""


class TestExtractMetadataFromHtml:
    """Tests for the single-parse orchestrator."""

    def test_all_fields(self, article_html: str):
        metadata = extract_metadata_from_html(article_html, "https://dailyledger.com/budget")
        assert metadata.publication == "The Daily Ledger"
        assert metadata.author == "Maria Lopez"
        assert metadata.date == "2023-03-14"
        assert metadata.content.startswith("The city council voted")
        assert metadata.strategy_for("publication") == "og:site_name"
        assert metadata.strategy_for("date") == "json-ld"

    def test_attempts_not_serialized(self, article_html: str):
        metadata = extract_metadata_from_html(article_html, "https://dailyledger.com/budget")
        assert metadata.attempts
        assert "attempts" not in metadata.model_dump()

    def test_empty_page(self):
        metadata = extract_metadata_from_html("<html></html>", "https://www.quiet-news.com/x")
        assert metadata.publication == "Quiet News"
        assert metadata.author == ""
        assert metadata.date == ""
        assert metadata.content == ""
