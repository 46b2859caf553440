# ABOUTME: Enrichment orchestrator: original articles → references → rewrite → updated records
# ABOUTME: Each article is isolated; a skipped or failed item never stops the batch

from article_forge.core.models import RunReport
from article_forge.enrichment import (
    LLMClient,
    ReferenceDiscovery,
    build_prompt,
    render_references_section,
)
from article_forge.enrichment.prompt import REFERENCE_TEXT_LIMIT
from article_forge.errors import GenerationError
from article_forge.persistence import ArticlePayload, ArticleRecord, ArticleStore, ArticleType
from article_forge.utils.logging import get_logger, log_pipeline_step, with_article_context


class EnrichmentOrchestrator:
    """Creates an ``updated`` rewrite for each stored original article.

    Originals are never modified: every rewrite is a new record carrying the
    original's source URL, original content and publication date, plus the
    URLs of the references it was written from.
    """

    def __init__(
        self,
        store: ArticleStore,
        discovery: ReferenceDiscovery,
        llm_client: LLMClient,
        reference_target: int = 2,
        reference_text_limit: int = REFERENCE_TEXT_LIMIT,
    ):
        self.store = store
        self.discovery = discovery
        self.llm_client = llm_client
        self.reference_target = reference_target
        self.reference_text_limit = reference_text_limit
        self.logger = get_logger(__name__)

    @log_pipeline_step("enrich")
    async def run(self, batch_size: int = 50) -> RunReport:
        """Enrich up to ``batch_size`` original articles.

        Raises:
            StoreError: If the originals cannot be listed
        """
        report = RunReport(pipeline="enrich")
        originals = await self.store.list_articles(ArticleType.ORIGINAL, limit=batch_size)
        self.logger.info("Loaded original articles", count=len(originals), batch_size=batch_size)

        for article in originals:
            await self._enrich_one(article, report)

        self.logger.info("Enrichment finished", **report.summary())
        return report

    async def _enrich_one(self, article: ArticleRecord, report: RunReport) -> None:
        with with_article_context(title=article.title, url=article.source_url) as logger:
            try:
                references = await self.discovery.find_references(article.title)
                if len(references) < self.reference_target:
                    logger.warning(
                        "Skipping article: not enough references",
                        found=len(references),
                        required=self.reference_target,
                    )
                    report.skipped(
                        article.title,
                        article.source_url,
                        f"found {len(references)} of {self.reference_target} references",
                    )
                    return

                prompt = build_prompt(
                    article.title, article.original_content, references, limit=self.reference_text_limit
                )

                try:
                    body = await self.llm_client.generate(prompt)
                except GenerationError as e:
                    logger.error("Generation failed", error=str(e), error_type=type(e).__name__)
                    report.failed(article.title, article.source_url, f"generation failed: {e}")
                    return

                payload = ArticlePayload(
                    title=article.title,
                    content=body + "\n\n" + render_references_section(references),
                    original_content=article.original_content,
                    source_url=article.source_url,
                    published_date=article.published_date,
                    type=ArticleType.UPDATED,
                    references=[reference.url for reference in references],
                )
                record = await self.store.create(payload)
            except Exception as e:
                logger.error("Failed to enrich article", error=str(e), error_type=type(e).__name__)
                report.failed(article.title, article.source_url, f"{type(e).__name__}: {e}")
                return

            logger.info("Created updated article", record_id=record.id, references=payload.references)
            report.succeeded(article.title, article.source_url, record.id)
