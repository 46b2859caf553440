# ABOUTME: httpx client for the external article REST service (/api/articles)
# ABOUTME: Same store contract as DatabaseManager; insert-if-absent is search, exact match, then create

import httpx

from article_forge.errors import StoreError
from article_forge.persistence.base import ArticlePayload, ArticleRecord, ArticleType
from article_forge.utils.logging import get_logger


class ArticleApiClient:
    """Article store backed by the article REST service."""

    def __init__(self, base_url: str = "http://localhost:5000", timeout: float = 20.0, client: httpx.AsyncClient | None = None):
        self.base_url = base_url.rstrip("/")
        self.articles_url = f"{self.base_url}/api/articles"
        self.http_client = client or httpx.AsyncClient(timeout=timeout)
        self.logger = get_logger(__name__)

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self.http_client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise StoreError(f"Article store unreachable: {type(e).__name__}: {e}") from e
        if not response.is_success:
            raise StoreError(f"Article store returned HTTP {response.status_code} for {method} {url}")
        return response

    async def list_articles(
        self, article_type: ArticleType | None = None, limit: int = 20, search: str | None = None
    ) -> list[ArticleRecord]:
        params: dict[str, str | int] = {"limit": limit}
        if article_type is not None:
            params["type"] = article_type.value
        if search:
            params["search"] = search

        response = await self._request("GET", self.articles_url, params=params)
        items = response.json().get("items") or []
        return [ArticleRecord.model_validate(item) for item in items]

    async def create(self, payload: ArticlePayload) -> ArticleRecord:
        body = payload.model_dump(mode="json", by_alias=True)
        if not body.get("publishedDate"):
            body.pop("publishedDate", None)
        response = await self._request("POST", self.articles_url, json=body)
        return ArticleRecord.model_validate(response.json())

    async def insert_if_absent(self, payload: ArticlePayload) -> tuple[ArticleRecord, bool]:
        """Create the article unless the service already holds the same (title, sourceUrl, type)."""
        candidates = await self.list_articles(payload.type, limit=100, search=payload.title)
        for candidate in candidates:
            if candidate.title == payload.title and candidate.source_url == payload.source_url:
                return candidate, False
        return await self.create(payload), True

    async def close(self) -> None:
        await self.http_client.aclose()
