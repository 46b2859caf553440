# ABOUTME: Generation providers (OpenAI, Gemini) behind one interface, selected once from config
# ABOUTME: Each provider runs the shared DSPy rewrite module under its own language model

import re
from abc import ABC
from typing import cast

import dspy

from article_forge.config import Config
from article_forge.errors import ConfigurationError, GenerationError
from article_forge.utils.logging import get_logger, log_api_call
from article_forge.utils.retry import configure_generation_rate_limit, generation_retry, to_generation_error

CODE_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n(.*?)\n?```$", re.DOTALL)


class ArticleRewriteSignature(dspy.Signature):
    """Follow the rewrite instructions and return only the rewritten article body as HTML."""

    prompt: str = dspy.InputField(description="Rewrite instructions, original article and reference excerpts")
    rewritten_html: str = dspy.OutputField(
        description="Rewritten article body using semantic HTML tags only, without <html> or <body> wrappers"
    )


class ArticleRewriter(dspy.Module):
    """DSPy module producing a rewritten article body from a complete prompt."""

    def __init__(self):
        super().__init__()
        self.rewrite = dspy.Predict(ArticleRewriteSignature)

    async def aforward(self, prompt: str) -> str:
        result = await self.rewrite.acall(prompt=prompt)
        result = cast("ArticleRewriteSignature", result)
        return result.rewritten_html

    def forward(self, prompt: str) -> str:
        """Sync wrapper around aforward()."""
        import anyio

        return anyio.run(self.aforward, prompt)


def _strip_code_fence(text: str) -> str:
    match = CODE_FENCE_RE.match(text.strip())
    return match.group(1).strip() if match else text.strip()


class GenerationProvider(ABC):
    """Base class for generation backends.

    Subclasses only name the provider and its default model; all of them
    surface plain text and raise GenerationError on failure.
    """

    name: str = "base"
    default_model: str = ""

    def __init__(self, api_key: str, model: str | None = None, temperature: float = 0.4):
        if not api_key:
            raise ConfigurationError(f"{self.name} API key required")
        self.model = model or self.default_model
        self.lm = dspy.LM(self.model, api_key=api_key, temperature=temperature)
        self.rewriter = ArticleRewriter()
        self.logger = get_logger(__name__)

    async def generate(self, prompt: str) -> str:
        """Generate text for the prompt."""
        try:
            with dspy.context(lm=self.lm):
                output = await self.rewriter.acall(prompt=prompt)
        except GenerationError:
            raise
        except Exception as e:
            raise to_generation_error(e) from e

        text = _strip_code_fence(output or "")
        if not text:
            raise GenerationError(f"{self.name} returned an empty completion")
        return text


class OpenAIProvider(GenerationProvider):
    """Primary provider."""

    name = "openai"
    default_model = "openai/gpt-4o-mini"


class GeminiProvider(GenerationProvider):
    """Secondary provider."""

    name = "gemini"
    default_model = "gemini/gemini-1.5-flash"


def select_provider(config: Config) -> GenerationProvider:
    """Pick the generation provider by credential priority: OpenAI, then Gemini.

    Raises:
        ConfigurationError: If neither credential is configured
    """
    if config.openai_api_key:
        return OpenAIProvider(config.openai_api_key, config.openai_model, config.generation_temperature)
    if config.gemini_api_key:
        return GeminiProvider(config.gemini_api_key, config.gemini_model, config.generation_temperature)
    raise ConfigurationError(
        "Missing LLM API key: set ARTICLE_FORGE_OPENAI_API_KEY or ARTICLE_FORGE_GEMINI_API_KEY"
    )


class LLMClient:
    """Generation client bound to a single provider chosen at startup."""

    def __init__(self, provider: GenerationProvider, max_attempts: int = 1):
        self.provider = provider
        self._generate = generation_retry(max_attempts=max_attempts)(provider.generate)
        self.logger = get_logger(__name__)
        self.logger.info("Initialized LLM client", provider=provider.name, model=provider.model)

    @classmethod
    def from_config(cls, config: Config) -> "LLMClient":
        provider = select_provider(config)
        configure_generation_rate_limit(config.generation_calls_per_second)
        return cls(provider, max_attempts=config.generation_max_attempts)

    @log_api_call("generation")
    async def generate(self, prompt: str) -> str:
        """Generate text for the prompt, raising GenerationError on any provider failure."""
        return await self._generate(prompt)
