# ABOUTME: Tests for the enrichment orchestrator: skip, failure isolation and updated record creation
# ABOUTME: The end-to-end case wires real discovery over fakes to a SQLite store

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from article_forge.core.enrichment import EnrichmentOrchestrator
from article_forge.core.models import OutcomeStatus
from article_forge.enrichment.readability import ReadableContent
from article_forge.enrichment.references import ReferenceCandidate, ReferenceDiscovery
from article_forge.errors import GenerationError, StoreError
from article_forge.persistence import ArticlePayload, ArticleType, DatabaseManager

REF_A = "https://alpha.example.com/blog/support-automation"
REF_B = "https://beta.example.com/news/2023/05/chatbot-guide"


def _original(title: str = "Chatbots 101", index: int = 1) -> ArticlePayload:
    return ArticlePayload(
        title=title,
        content=f"<p>Original body {index}</p>",
        original_content=f"<p>Original body {index}</p>",
        source_url=f"https://beyondchats.com/blogs/post-{index}/",
        published_date="2023-04-01",
    )


def _references(*urls: str) -> list[ReferenceCandidate]:
    return [ReferenceCandidate(url=url, title=f"Ref {i}", text="t" * 900) for i, url in enumerate(urls, 1)]


def _llm(generate: AsyncMock) -> MagicMock:
    client = MagicMock()
    client.generate = generate
    return client


def _discovery(references_by_title: dict[str, list[ReferenceCandidate]]) -> MagicMock:
    discovery = MagicMock()
    discovery.find_references = AsyncMock(side_effect=lambda title: references_by_title.get(title, []))
    return discovery


class TestEnrichmentOrchestrator:
    @pytest.mark.asyncio
    async def test_creates_updated_record_and_keeps_original(self, temp_db: DatabaseManager):
        original = await temp_db.create(_original())
        generate = AsyncMock(return_value="<h2>Rewritten</h2><p>Better body</p>")
        orchestrator = EnrichmentOrchestrator(
            temp_db, _discovery({"Chatbots 101": _references(REF_A, REF_B)}), _llm(generate)
        )

        report = await orchestrator.run()

        assert report.succeeded_count == 1
        updated = await temp_db.list_articles(ArticleType.UPDATED)
        assert len(updated) == 1
        record = updated[0]
        assert report.outcomes[0].record_id == record.id
        assert record.title == original.title
        assert record.source_url == original.source_url
        assert record.original_content == original.original_content
        assert record.published_date == "2023-04-01"
        assert record.references == [REF_A, REF_B]
        assert record.content.startswith("<h2>Rewritten</h2><p>Better body</p>")
        assert record.content.endswith("</ol>\n</section>")

        prompt = generate.await_args.args[0]
        assert "<p>Original body 1</p>" in prompt
        assert f"Reference 1: {REF_A}" in prompt

        originals = await temp_db.list_articles(ArticleType.ORIGINAL)
        assert [(r.id, r.content, r.references) for r in originals] == [
            (original.id, "<p>Original body 1</p>", [])
        ]

    @pytest.mark.asyncio
    async def test_rerun_adds_another_updated_record(self, temp_db: DatabaseManager):
        await temp_db.create(_original())
        generate = AsyncMock(side_effect=["<p>First rewrite</p>", "<p>Second rewrite</p>"])
        orchestrator = EnrichmentOrchestrator(
            temp_db, _discovery({"Chatbots 101": _references(REF_A, REF_B)}), _llm(generate)
        )

        first = await orchestrator.run()
        second = await orchestrator.run()

        assert first.summary() == {"total": 1, "succeeded": 1, "skipped": 0, "failed": 0}
        assert second.summary() == {"total": 1, "succeeded": 1, "skipped": 0, "failed": 0}
        assert generate.await_count == 2
        updated = await temp_db.list_articles(ArticleType.UPDATED)
        assert len(updated) == 2
        assert {record.references[0] for record in updated} == {REF_A}
        assert len(await temp_db.list_articles(ArticleType.ORIGINAL)) == 1

    @pytest.mark.asyncio
    async def test_one_reference_is_skipped_without_writing(self, temp_db: DatabaseManager):
        await temp_db.create(_original())
        generate = AsyncMock()
        orchestrator = EnrichmentOrchestrator(temp_db, _discovery({"Chatbots 101": _references(REF_A)}), _llm(generate))

        with patch("article_forge.core.enrichment.with_article_context") as context:
            logger = context.return_value.__enter__.return_value
            report = await orchestrator.run()

        assert report.outcomes[0].status is OutcomeStatus.SKIPPED
        assert "1 of 2" in report.outcomes[0].reason
        context.assert_called_with(title="Chatbots 101", url="https://beyondchats.com/blogs/post-1/")
        logger.warning.assert_called_once()
        assert logger.warning.call_args.args[0] == "Skipping article: not enough references"
        generate.assert_not_awaited()
        assert await temp_db.list_articles(ArticleType.UPDATED) == []

    @pytest.mark.asyncio
    async def test_generation_failure_is_isolated(self, temp_db: DatabaseManager):
        await temp_db.create(_original("First", 1))
        await temp_db.create(_original("Second", 2))
        generate = AsyncMock(side_effect=[GenerationError("provider down"), "<p>Rewritten second</p>"])
        references = {"First": _references(REF_A, REF_B), "Second": _references(REF_A, REF_B)}
        orchestrator = EnrichmentOrchestrator(temp_db, _discovery(references), _llm(generate))

        report = await orchestrator.run()

        by_title = {outcome.title: outcome for outcome in report.outcomes}
        # Listing is newest first, so "Second" is processed before "First"
        assert [outcome.title for outcome in report.outcomes] == ["Second", "First"]
        assert by_title["Second"].status is OutcomeStatus.FAILED
        assert "provider down" in by_title["Second"].reason
        assert by_title["First"].status is OutcomeStatus.SUCCEEDED
        updated = await temp_db.list_articles(ArticleType.UPDATED)
        assert [record.title for record in updated] == ["First"]

    @pytest.mark.asyncio
    async def test_unexpected_item_error_is_recorded_as_failed(self, temp_db: DatabaseManager):
        await temp_db.create(_original())
        discovery = MagicMock()
        discovery.find_references = AsyncMock(side_effect=RuntimeError("parser exploded"))
        orchestrator = EnrichmentOrchestrator(temp_db, discovery, _llm(AsyncMock()))

        report = await orchestrator.run()

        assert report.failed_count == 1
        assert "RuntimeError: parser exploded" in report.outcomes[0].reason

    @pytest.mark.asyncio
    async def test_only_originals_are_enriched_up_to_batch_size(self, temp_db: DatabaseManager):
        for index in range(3):
            await temp_db.create(_original(f"Post {index}", index))
        await temp_db.create(_original("Already rewritten", 9).model_copy(update={"type": ArticleType.UPDATED}))
        discovery = _discovery({})
        orchestrator = EnrichmentOrchestrator(temp_db, discovery, _llm(AsyncMock()))

        report = await orchestrator.run(batch_size=2)

        assert len(report) == 2
        assert [call.args[0] for call in discovery.find_references.await_args_list] == ["Post 2", "Post 1"]

    @pytest.mark.asyncio
    async def test_store_listing_failure_is_fatal(self):
        store = MagicMock()
        store.list_articles = AsyncMock(side_effect=StoreError("Article store unreachable"))
        orchestrator = EnrichmentOrchestrator(store, _discovery({}), _llm(AsyncMock()))

        with pytest.raises(StoreError):
            await orchestrator.run()


class TestEnrichmentEndToEnd:
    @pytest.mark.asyncio
    async def test_two_references_produce_one_updated_record(self, temp_db: DatabaseManager):
        await temp_db.create(_original("Customer Support Automation"))

        class FakeSearch:
            async def search(self, query: str, num: int = 10) -> list[str]:
                return ["https://beyondchats.com/blogs/self/", "https://example.com/pricing", REF_A, REF_B]

        class FakeFetcher:
            async def fetch(self, url: str) -> str:
                return f"<html><body><p>{url}</p></body></html>"

        def fake_readable(html: str, base_url: str) -> ReadableContent:
            return ReadableContent(title=f"Guide at {base_url}", content_html="<p>x</p>", text_content="x" * 1500)

        discovery = ReferenceDiscovery(FakeSearch(), FakeFetcher(), "beyondchats.com")
        generate = AsyncMock(return_value="<h2>Automation</h2><p>Rewritten</p>")
        orchestrator = EnrichmentOrchestrator(temp_db, discovery, _llm(generate))

        with patch("article_forge.enrichment.references.extract_readable", side_effect=fake_readable):
            report = await orchestrator.run(batch_size=50)

        assert report.succeeded_count == 1
        updated = await temp_db.list_articles(ArticleType.UPDATED)
        assert len(updated) == 1
        record = updated[0]
        assert record.references == [REF_A, REF_B]
        section = record.content.split("<hr/>")[-1]
        assert "<h3>References</h3>" in section
        assert f'href="{REF_A}"' in section
        assert f'href="{REF_B}"' in section
        assert section.index(REF_A) < section.index(REF_B)
        assert len(await temp_db.list_articles(ArticleType.ORIGINAL)) == 1
