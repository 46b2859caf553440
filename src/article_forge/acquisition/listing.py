# ABOUTME: Pagination resolution and article link harvesting for the origin listing
# ABOUTME: Both work on anchor heuristics only, so a listing without pagination is simply page 1

import re
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup

from article_forge.acquisition.base import PageSource
from article_forge.utils.logging import get_logger

PAGE_IN_PATH_RE = re.compile(r"/page/(\d+)")
PAGE_IN_QUERY_RE = re.compile(r"[?&]page=(\d+)")
NUMERIC_TEXT_RE = re.compile(r"^\d+$")


def max_page_number(html: str) -> int:
    """Return the highest page number referenced by any anchor, or 1.

    An anchor counts when its text is purely numeric, or when its href carries
    a page number in the path (``/page/7/``) or in the query (``?page=7``).
    """
    soup = BeautifulSoup(html, "html.parser")
    highest = 1
    for anchor in soup.find_all("a"):
        text = anchor.get_text().strip()
        if NUMERIC_TEXT_RE.match(text):
            highest = max(highest, int(text))

        href = anchor.get("href") or ""
        match = PAGE_IN_PATH_RE.search(href) or PAGE_IN_QUERY_RE.search(href)
        if match:
            highest = max(highest, int(match.group(1)))
    return highest


class ListingCrawler:
    """Walks the paginated article listing of the origin site."""

    def __init__(self, fetcher: PageSource, origin_base_url: str, listing_path: str = "/blogs/"):
        self.fetcher = fetcher
        self.origin = origin_base_url.rstrip("/")
        self.origin_netloc = urlparse(self.origin).netloc
        self.section_path = "/" + listing_path.strip("/") + "/"
        self.listing_url = self.origin + self.section_path
        self._listing_page_re = re.compile(re.escape(self.section_path) + r"(page/\d+/?)?")
        self.logger = get_logger(__name__)

    def page_url(self, page_number: int) -> str:
        """Return the listing URL for a 1-based page number."""
        if page_number > 1:
            return f"{self.listing_url}page/{page_number}/"
        return self.listing_url

    async def resolve_last_page(self) -> int:
        """Fetch the listing root and return its highest page number (at least 1)."""
        html = await self.fetcher.fetch(self.listing_url)
        last_page = max_page_number(html)
        self.logger.info("Resolved last listing page", listing_url=self.listing_url, last_page=last_page)
        return last_page

    async def harvest_links(self, page_number: int = 1) -> list[str]:
        """Return the article URLs linked from a listing page, in page order, without duplicates."""
        page_url = self.page_url(page_number)
        html = await self.fetcher.fetch(page_url)
        links = self.links_from_html(html)
        self.logger.info("Harvested article links", page_url=page_url, link_count=len(links))
        return links

    def links_from_html(self, html: str) -> list[str]:
        """Extract candidate article URLs from listing markup."""
        soup = BeautifulSoup(html, "html.parser")
        links: list[str] = []

        for anchor in soup.find_all("a", href=True):
            href = anchor["href"].strip()
            # Icon-only navigation has no text
            if not anchor.get_text().strip():
                continue

            if self._is_same_origin(href):
                candidate = href
            elif href.startswith(self.section_path) and href.rstrip("/") != self.section_path.rstrip("/"):
                candidate = urljoin(self.origin + "/", href)
            else:
                continue

            absolute, _fragment = urldefrag(candidate)
            path = urlparse(absolute).path
            if self.section_path not in path:
                continue
            if self._listing_page_re.fullmatch(path):
                continue
            links.append(absolute)

        return list(dict.fromkeys(links))

    def _is_same_origin(self, href: str) -> bool:
        parsed = urlparse(href)
        return parsed.scheme in ("http", "https") and parsed.netloc == self.origin_netloc
