# ABOUTME: Exception taxonomy shared across acquisition, enrichment and persistence
# ABOUTME: Item-scope errors are caught at the item boundary; configuration errors are fatal


class ArticleForgeError(Exception):
    """Base exception for all pipeline errors."""

    pass


class NetworkError(ArticleForgeError):
    """Raised when a fetch times out, cannot connect, or returns a non-success status."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status_code = status_code


class GenerationError(ArticleForgeError):
    """Raised when a generation provider fails to produce text."""

    pass


class ConfigurationError(ArticleForgeError):
    """Raised when a required credential or setting is missing."""

    pass


class StoreError(ArticleForgeError):
    """Raised when the article store cannot be reached or rejects a request."""

    pass
