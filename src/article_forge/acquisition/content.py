# ABOUTME: Heuristic article extraction built from ordered fallback strategies
# ABOUTME: Each strategy is a pure soup -> optional string function; the first non-empty result wins

from collections.abc import Callable, Sequence

from bs4 import BeautifulSoup, Tag

from article_forge.acquisition.base import ArticleDocument, PageSource
from article_forge.utils.logging import get_logger

Strategy = Callable[[BeautifulSoup], str | None]


def _meta_property(soup: BeautifulSoup, name: str) -> str | None:
    tag = soup.find("meta", attrs={"property": name})
    if isinstance(tag, Tag):
        content = tag.get("content")
        if isinstance(content, str):
            return content.strip()
    return None


def _first_text(soup: BeautifulSoup, name: str) -> str | None:
    tag = soup.find(name)
    return tag.get_text().strip() if isinstance(tag, Tag) else None


def _first_inner_html(soup: BeautifulSoup, name: str) -> str | None:
    tag = soup.find(name)
    return tag.decode_contents() if isinstance(tag, Tag) else None


# --- Title ---------------------------------------------------------------------------


def title_from_heading(soup: BeautifulSoup) -> str | None:
    return _first_text(soup, "h1")


def title_from_og_meta(soup: BeautifulSoup) -> str | None:
    return _meta_property(soup, "og:title")


def title_from_title_tag(soup: BeautifulSoup) -> str | None:
    return _first_text(soup, "title")


# --- Published date ------------------------------------------------------------------


def date_from_time_attribute(soup: BeautifulSoup) -> str | None:
    tag = soup.find("time")
    if isinstance(tag, Tag):
        value = tag.get("datetime")
        if isinstance(value, str):
            return value.strip()
    return None


def date_from_time_text(soup: BeautifulSoup) -> str | None:
    return _first_text(soup, "time")


def date_from_published_meta(soup: BeautifulSoup) -> str | None:
    return _meta_property(soup, "article:published_time")


# --- Content -------------------------------------------------------------------------


def content_from_main(soup: BeautifulSoup) -> str | None:
    return _first_inner_html(soup, "main")


def content_from_article(soup: BeautifulSoup) -> str | None:
    return _first_inner_html(soup, "article")


def content_from_section(soup: BeautifulSoup) -> str | None:
    return _first_inner_html(soup, "section")


def content_from_paragraphs(soup: BeautifulSoup) -> str | None:
    return "\n".join(str(paragraph) for paragraph in soup.find_all("p"))


TITLE_STRATEGIES: tuple[Strategy, ...] = (title_from_heading, title_from_og_meta, title_from_title_tag)
DATE_STRATEGIES: tuple[Strategy, ...] = (date_from_time_attribute, date_from_time_text, date_from_published_meta)
CONTENT_STRATEGIES: tuple[Strategy, ...] = (
    content_from_main,
    content_from_article,
    content_from_section,
    content_from_paragraphs,
)


def first_non_empty(soup: BeautifulSoup, strategies: Sequence[Strategy], default: str = "") -> str:
    """Run strategies in priority order and return the first non-empty result."""
    for strategy in strategies:
        value = strategy(soup)
        if value and value.strip():
            return value
    return default


def extract_from_html(html: str, url: str) -> ArticleDocument:
    """Extract title, published date and content HTML from an article page.

    Never raises on malformed markup: the title falls back to the URL and the
    other fields fall back to an empty string.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    return ArticleDocument(
        url=url,
        title=first_non_empty(soup, TITLE_STRATEGIES, default=url),
        published_date=first_non_empty(soup, DATE_STRATEGIES),
        content_html=first_non_empty(soup, CONTENT_STRATEGIES),
    )


class ContentExtractor:
    """Fetches origin article pages and runs the extraction strategies on them."""

    def __init__(self, fetcher: PageSource):
        self.fetcher = fetcher
        self.logger = get_logger(__name__)

    async def extract(self, url: str) -> ArticleDocument:
        """Fetch and extract a single article. Only the fetch can fail (NetworkError)."""
        html = await self.fetcher.fetch(url)
        document = extract_from_html(html, url)
        self.logger.debug(
            "Extracted article",
            url=url,
            title=document.title,
            published_date=document.published_date,
            content_length=len(document.content_html),
        )
        return document
