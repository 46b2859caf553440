# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Immutable settings for origin site, search API, LLM providers, article store and logging

from pathlib import Path
from typing import Literal
from urllib.parse import urljoin, urlparse

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support.

    Built once at process start and passed explicitly to every component.
    """

    model_config = SettingsConfigDict(
        env_prefix="ARTICLE_FORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
        frozen=True,
    )

    # Origin site
    origin_base_url: str = Field(default="https://beyondchats.com", description="Origin site base URL")
    listing_path: str = Field(default="/blogs/", description="Path of the paginated article listing")
    fetch_timeout: float = Field(default=20.0, description="Timeout in seconds for every HTTP fetch")

    # Search API
    serpapi_api_key: str = Field(default="", description="SerpAPI key for reference discovery")
    search_engine: str = Field(default="google", description="SerpAPI engine name")
    search_result_count: int = Field(default=10, description="Number of organic results requested per query")

    # Generation providers (OpenAI is preferred when both keys are set)
    openai_api_key: str = Field(default="", description="OpenAI API key (primary generation provider)")
    openai_model: str = Field(default="openai/gpt-4o-mini", description="DSPy model string for OpenAI")
    gemini_api_key: str = Field(default="", description="Google Gemini API key (secondary generation provider)")
    gemini_model: str = Field(default="gemini/gemini-1.5-flash", description="DSPy model string for Gemini")
    generation_temperature: float = Field(default=0.4, description="Sampling temperature for rewrites")
    generation_calls_per_second: float = Field(
        default=1.0, description="Upper bound on generation calls per second (0 disables spacing)"
    )
    generation_max_attempts: int = Field(
        default=1, description="Attempts per generation call for transient provider errors"
    )

    # Article store
    store_backend: Literal["database", "api"] = Field(default="database", description="Article store adapter")
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/article_forge.db", description="Database URL for the local article store"
    )
    article_api_base: str = Field(default="http://localhost:5000", description="Base URL of the article REST service")

    # Pipeline sizing
    enrichment_batch_size: int = Field(default=50, description="Original articles read per enrichment run")
    ingestion_cohort_size: int = Field(default=5, description="Oldest articles ingested per run")
    reference_target: int = Field(default=2, description="Validated references required for a rewrite")
    min_reference_text_length: int = Field(
        default=800, description="Reference text must be strictly longer than this many characters"
    )
    reference_text_limit: int = Field(default=2000, description="Characters of reference text embedded in prompts")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")

    @property
    def listing_url(self) -> str:
        """Absolute URL of the listing root."""
        return urljoin(self.origin_base_url.rstrip("/") + "/", self.listing_path.lstrip("/"))

    @property
    def origin_domain(self) -> str:
        """Host name of the origin site, without a leading ``www.``."""
        host = urlparse(self.origin_base_url).hostname or ""
        return host.removeprefix("www.")


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Only the CLI entry point should call this; pipeline components receive
    the config they need as constructor arguments.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
