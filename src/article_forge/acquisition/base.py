# ABOUTME: Protocol and result model shared by the acquisition stage
# ABOUTME: Anything that can fetch a URL into document text satisfies PageSource

from typing import Protocol

from pydantic import BaseModel


class PageSource(Protocol):
    """Protocol for fetching a URL into raw document text."""

    async def fetch(self, url: str) -> str:
        """Fetch the document at the given URL.

        Args:
            url: Absolute URL to fetch

        Returns:
            Raw response text

        Raises:
            NetworkError: On timeout, connection failure or non-success status
        """
        ...


class ArticleDocument(BaseModel):
    """Fields extracted from a single origin article page."""

    url: str
    title: str
    published_date: str = ""
    content_html: str = ""

    @property
    def has_content(self) -> bool:
        return bool(self.content_html)
