# ABOUTME: httpx-based page fetcher with a browser-like identity and bounded timeout
# ABOUTME: Normalises every transport or status failure into NetworkError; no retries here

import httpx

from article_forge.errors import NetworkError
from article_forge.utils.logging import get_logger

DEFAULT_TIMEOUT = 20.0

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


class PageFetcher:
    """Fetches HTML documents over HTTP. This includes an httpx client that can be injected."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, client: httpx.AsyncClient | None = None):
        self.timeout = timeout
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers=BROWSER_HEADERS,
            timeout=timeout,
            follow_redirects=True,
        )
        self.logger = get_logger(__name__)

    async def fetch(self, url: str) -> str:
        """Fetch the document at the given URL and return its text."""
        self.logger.debug("Fetching page", url=url)

        try:
            response = await self.http_client.get(url, headers=BROWSER_HEADERS, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise NetworkError(url, f"Timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise NetworkError(url, f"Request failed: {type(e).__name__}") from e

        if not response.is_success:
            raise NetworkError(url, f"HTTP {response.status_code}", status_code=response.status_code)

        self.logger.debug("Fetched page", url=url, status_code=response.status_code, length=len(response.text))
        return response.text

    async def close(self) -> None:
        await self.http_client.aclose()
