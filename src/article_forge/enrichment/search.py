# ABOUTME: SerpAPI client returning organic result links in provider order
# ABOUTME: Only the `link` field of each organic result is consumed

from typing import Protocol

import httpx

from article_forge.errors import ConfigurationError, NetworkError
from article_forge.utils.logging import get_logger, log_api_call

SERPAPI_URL = "https://serpapi.com/search.json"


class SearchClient(Protocol):
    """Protocol for web search backends used by reference discovery."""

    async def search(self, query: str, num: int = 10) -> list[str]:
        """Return result URLs for the query in provider order."""
        ...


class SerpApiSearchClient:
    """Google search through SerpAPI."""

    def __init__(
        self,
        api_key: str,
        engine: str = "google",
        timeout: float = 20.0,
        client: httpx.AsyncClient | None = None,
    ):
        if not api_key:
            raise ConfigurationError("Search API key required - set ARTICLE_FORGE_SERPAPI_API_KEY")
        self.api_key = api_key
        self.engine = engine
        self.timeout = timeout
        self.http_client = client or httpx.AsyncClient(timeout=timeout)
        self.logger = get_logger(__name__)

    @log_api_call("serpapi")
    async def search(self, query: str, num: int = 10) -> list[str]:
        params = {"engine": self.engine, "q": query, "api_key": self.api_key, "num": num}
        try:
            response = await self.http_client.get(SERPAPI_URL, params=params, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise NetworkError(SERPAPI_URL, f"Search timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise NetworkError(SERPAPI_URL, f"Search request failed: {type(e).__name__}") from e

        if not response.is_success:
            raise NetworkError(SERPAPI_URL, f"HTTP {response.status_code}", status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise NetworkError(SERPAPI_URL, "Search returned a non-JSON response") from e
        if not isinstance(data, dict):
            raise NetworkError(SERPAPI_URL, f"Unexpected search response type: {type(data).__name__}")

        links = [result.get("link") for result in data.get("organic_results") or []]
        links = [link for link in links if isinstance(link, str) and link]
        self.logger.debug("Search results", query=query, result_count=len(links))
        return links

    async def close(self) -> None:
        await self.http_client.aclose()
