# ABOUTME: Tests for the rich table helpers used by the CLI
# ABOUTME: Renders tables to a recording console and checks the visible text

from datetime import datetime

from rich.console import Console

from article_forge.core.models import RunReport
from article_forge.persistence import ArticleRecord, ArticleType
from article_forge.utils.rich_tables import (
    create_articles_table,
    create_run_report_table,
    create_run_summary_table,
    print_rich_table,
)


def _render(table) -> str:
    console = Console(record=True, width=200)
    print_rich_table(console, table)
    return console.export_text()


def test_run_report_table_shows_each_outcome():
    report = RunReport(pipeline="ingest")
    report.succeeded("Chatbots 101", "https://beyondchats.com/blogs/chatbots-101/", record_id="7")
    report.failed(None, "https://beyondchats.com/blogs/broken/", "NetworkError: HTTP 404")

    text = _render(create_run_report_table(report))

    assert "Ingest Run" in text
    assert "succeeded" in text
    assert "record 7" in text
    assert "NetworkError: HTTP 404" in text


def test_run_summary_table_counts():
    report = RunReport(pipeline="enrich")
    report.skipped("A", None, "found 0 of 2 references")

    text = _render(create_run_summary_table(report))

    assert "Enrich Summary" in text
    assert "Skipped" in text


def test_articles_table():
    record = ArticleRecord(
        id="3",
        title="Chatbots 101",
        content="<p>x</p>",
        original_content="<p>x</p>",
        source_url="https://beyondchats.com/blogs/chatbots-101/",
        type=ArticleType.UPDATED,
        references=["https://a.example.com/blog/x", "https://b.example.com/blog/y"],
        created_at=datetime(2024, 1, 12, 9, 30),
    )

    text = _render(create_articles_table([record]))

    assert "Chatbots 101" in text
    assert "updated" in text
    assert "2024-01-12 09:30:00" in text
