# ABOUTME: Ingestion service: oldest articles from the listing into the article store
# ABOUTME: Resolves the last listing page, takes its trailing cohort and inserts each article if absent

from article_forge.acquisition import ContentExtractor, ListingCrawler
from article_forge.core.models import RunReport
from article_forge.persistence import ArticlePayload, ArticleStore, ArticleType
from article_forge.utils.logging import get_logger, log_pipeline_step, with_article_context


class IngestionService:
    """Captures the oldest origin articles as ``original`` records.

    The last listing page is assumed to hold the oldest entries, and the
    harvest order of a page is assumed to follow publication order, so the
    cohort is the trailing window of the last page's links.
    """

    def __init__(
        self,
        crawler: ListingCrawler,
        extractor: ContentExtractor,
        store: ArticleStore,
        cohort_size: int = 5,
    ):
        self.crawler = crawler
        self.extractor = extractor
        self.store = store
        self.cohort_size = cohort_size
        self.logger = get_logger(__name__)

    @staticmethod
    def select_oldest(urls: list[str], n: int = 5) -> list[str]:
        """Return the last ``n`` URLs in their original order."""
        if n <= 0:
            return []
        return urls[-n:]

    @log_pipeline_step("ingest")
    async def ingest(self, n: int | None = None) -> RunReport:
        """Ingest the oldest ``n`` articles.

        Raises:
            NetworkError: If the listing itself cannot be fetched
        """
        cohort_size = self.cohort_size if n is None else n
        report = RunReport(pipeline="ingest")

        last_page = await self.crawler.resolve_last_page()
        links = await self.crawler.harvest_links(last_page)
        cohort = self.select_oldest(links, cohort_size)
        self.logger.info("Selected ingestion cohort", last_page=last_page, harvested=len(links), selected=len(cohort))

        for url in cohort:
            await self._ingest_one(url, report)

        self.logger.info("Ingestion finished", **report.summary())
        return report

    async def _ingest_one(self, url: str, report: RunReport) -> None:
        with with_article_context(url=url) as logger:
            try:
                document = await self.extractor.extract(url)
                payload = ArticlePayload(
                    title=document.title,
                    content=document.content_html,
                    original_content=document.content_html,
                    source_url=url,
                    published_date=document.published_date or None,
                    type=ArticleType.ORIGINAL,
                    references=[],
                )
                record, created = await self.store.insert_if_absent(payload)
            except Exception as e:
                logger.error("Failed to ingest article", error=str(e), error_type=type(e).__name__)
                report.failed(None, url, f"{type(e).__name__}: {e}")
                return

            if created:
                logger.info("Inserted article", title=record.title, record_id=record.id)
                report.succeeded(record.title, url, record.id)
            else:
                logger.info("Article already stored", title=record.title, record_id=record.id)
                report.skipped(record.title, url, "already stored", record.id)
