# ABOUTME: Discovery and validation of external reference articles for a given title
# ABOUTME: Exact-title search first, then one keyword-query retry; failed candidates are skipped

import re
from urllib.parse import urlparse

from pydantic import BaseModel

from article_forge.acquisition.base import PageSource
from article_forge.enrichment.readability import extract_readable
from article_forge.enrichment.search import SearchClient
from article_forge.errors import NetworkError
from article_forge.utils.logging import get_logger

ARTICLE_PATH_MARKERS = ("/blog", "/blogs", "/article", "/posts/", "/news/", "/insights/")
DATE_PATH_RE = re.compile(r"/\d{4}/\d{2}/")

STOPWORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "of", "for", "to", "in", "on", "with", "without", "by", "about",
        "is", "are", "was", "were", "be", "being", "been", "how", "what", "which", "why", "when",
    }
)  # fmt: skip
MAX_KEYWORDS = 5


class ReferenceCandidate(BaseModel):
    """An external article accepted as a reference."""

    url: str
    title: str = ""
    html: str = ""
    text: str = ""

    @property
    def display_title(self) -> str:
        return self.title or self.url


def is_http_url(url: str) -> bool:
    """True for well-formed absolute http(s) URLs."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def looks_like_article(url: str) -> bool:
    """Heuristic: blog/article/post/news/insights path segment or a /yyyy/mm/ date path."""
    lowered = urlparse(url).path.lower()
    return any(marker in lowered for marker in ARTICLE_PATH_MARKERS) or bool(DATE_PATH_RE.search(lowered))


def extract_keywords(title: str) -> str:
    """Reduce a title to at most five distinctive keywords joined by spaces."""
    normalised = re.sub(r"[^a-z0-9\s]", " ", (title or "").lower())
    words = [word for word in normalised.split() if word not in STOPWORDS and len(word) > 3]
    return " ".join(list(dict.fromkeys(words))[:MAX_KEYWORDS])


def build_query(phrase: str, origin_domain: str) -> str:
    """Exact-phrase query excluding the origin domain."""
    return f'"{phrase}" -site:{origin_domain}'


class ReferenceDiscovery:
    """Finds external articles that corroborate an origin article."""

    def __init__(
        self,
        search_client: SearchClient,
        fetcher: PageSource,
        origin_domain: str,
        target: int = 2,
        min_text_length: int = 800,
        result_count: int = 10,
    ):
        self.search_client = search_client
        self.fetcher = fetcher
        self.origin_domain = origin_domain
        self.target = target
        self.min_text_length = min_text_length
        self.result_count = result_count
        self.logger = get_logger(__name__)

    async def find_references(self, title: str) -> list[ReferenceCandidate]:
        """Return up to ``target`` validated references; fewer when not enough validate."""
        accepted: list[ReferenceCandidate] = []

        await self._collect(build_query(title, self.origin_domain), accepted)
        if len(accepted) >= self.target:
            return accepted[: self.target]

        keywords = extract_keywords(title)
        if keywords:
            self.logger.info(
                "Retrying reference search with keywords", title=title, keywords=keywords, accepted=len(accepted)
            )
            await self._collect(build_query(keywords, self.origin_domain), accepted)

        return accepted[: self.target]

    async def _collect(self, query: str, accepted: list[ReferenceCandidate]) -> None:
        """Run one search pass, appending validated candidates until the target is reached."""
        try:
            links = await self.search_client.search(query, self.result_count)
        except NetworkError as e:
            self.logger.warning("Reference search failed", query=query, error=str(e))
            return

        seen = {candidate.url for candidate in accepted}
        for url in links:
            if len(accepted) >= self.target:
                break
            if url in seen or not is_http_url(url) or self._is_origin(url):
                continue

            candidate = await self._validate(url)
            if candidate is not None:
                accepted.append(candidate)
                seen.add(url)
                self.logger.info("Accepted reference", url=url, text_length=len(candidate.text))

    async def _validate(self, url: str) -> ReferenceCandidate | None:
        if not looks_like_article(url):
            self.logger.debug("Rejected reference: not an article path", url=url)
            return None

        try:
            html = await self.fetcher.fetch(url)
        except NetworkError as e:
            self.logger.debug("Skipping unreachable reference", url=url, error=str(e))
            return None

        readable = extract_readable(html, url)
        if len(readable.text_content) <= self.min_text_length:
            self.logger.debug("Rejected reference: text too short", url=url, text_length=len(readable.text_content))
            return None

        return ReferenceCandidate(
            url=url,
            title=readable.title,
            html=readable.content_html,
            text=readable.text_content,
        )

    def _is_origin(self, url: str) -> bool:
        host = (urlparse(url).hostname or "").lower()
        return host == self.origin_domain or host.endswith("." + self.origin_domain)
