# ABOUTME: Acquisition of origin articles: fetching, pagination, link harvesting, extraction
# ABOUTME: Pipeline Stage 1: Listing pages → Article URLs → ArticleDocument

"""
Acquisition Layer: Get articles from the origin site

This layer handles:
- HTTP fetching with a browser-like identity
- Pagination resolution and article link harvesting
- Heuristic title, date and content extraction

Data Flow: Origin listing → Article URLs → ArticleDocument → core/ ingestion
"""

from .base import ArticleDocument, PageSource
from .content import ContentExtractor, extract_from_html
from .fetcher import PageFetcher
from .listing import ListingCrawler, max_page_number

__all__ = [
    "ArticleDocument",
    "ContentExtractor",
    "ListingCrawler",
    "PageFetcher",
    "PageSource",
    "extract_from_html",
    "max_page_number",
]
