# ABOUTME: Reference discovery, prompt assembly and text generation
# ABOUTME: Pipeline Stage 2: Original article → References → Prompt → Rewritten HTML

"""
Enrichment Layer: Ground a rewrite in external references

This layer handles:
- Web search and readability extraction of candidate references
- Reference validation (article-like path, minimum text length)
- Deterministic prompt assembly
- Provider-agnostic text generation

Data Flow: persistence/ originals → References + prompt → LLM → core/ orchestration
"""

from .llm import GeminiProvider, GenerationProvider, LLMClient, OpenAIProvider, select_provider
from .prompt import build_prompt, render_references_section
from .readability import ReadableContent, extract_readable
from .references import ReferenceCandidate, ReferenceDiscovery, extract_keywords, looks_like_article
from .search import SearchClient, SerpApiSearchClient

__all__ = [
    "GeminiProvider",
    "GenerationProvider",
    "LLMClient",
    "OpenAIProvider",
    "ReadableContent",
    "ReferenceCandidate",
    "ReferenceDiscovery",
    "SearchClient",
    "SerpApiSearchClient",
    "build_prompt",
    "extract_keywords",
    "extract_readable",
    "looks_like_article",
    "render_references_section",
    "select_provider",
]
