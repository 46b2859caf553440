# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands for article ingestion, enrichment, listing and logging status

from typing import NoReturn

import asyncclick as click
from rich.console import Console
from rich.panel import Panel

from article_forge.acquisition import ContentExtractor, ListingCrawler, PageFetcher
from article_forge.config import Config, get_config
from article_forge.core import EnrichmentOrchestrator, IngestionService, RunReport
from article_forge.enrichment import LLMClient, ReferenceDiscovery, SerpApiSearchClient
from article_forge.errors import ArticleForgeError
from article_forge.persistence import ArticleType, open_store
from article_forge.utils.logging import (
    LoggingMode,
    configure_logging,
    get_logging_status,
    with_pipeline_context,
)
from article_forge.utils.rich_tables import (
    create_articles_table,
    create_logging_status_table,
    create_run_report_table,
    create_run_summary_table,
    print_rich_table,
)

console = Console()


def _fail(message: str, json_output: bool) -> NoReturn:
    """Report a fatal error and exit non-zero."""
    if not json_output:
        console.print(f"[red]❌ {message}[/red]")
    raise SystemExit(1)


def _display_report(report: RunReport, json_output: bool) -> None:
    if json_output:
        return
    if report.outcomes:
        print_rich_table(console, create_run_report_table(report))
    print_rich_table(console, create_run_summary_table(report))


async def _ingest(config: Config, cohort_size: int | None) -> RunReport:
    store = await open_store(config)
    fetcher = PageFetcher(timeout=config.fetch_timeout)
    try:
        crawler = ListingCrawler(fetcher, config.origin_base_url, config.listing_path)
        service = IngestionService(crawler, ContentExtractor(fetcher), store, cohort_size=config.ingestion_cohort_size)
        return await service.ingest(cohort_size)
    finally:
        await fetcher.close()
        await store.close()


async def _enrich(config: Config, batch_size: int | None) -> RunReport:
    # Credentials are checked before anything touches the store
    llm_client = LLMClient.from_config(config)
    search_client = SerpApiSearchClient(
        config.serpapi_api_key, engine=config.search_engine, timeout=config.fetch_timeout
    )
    fetcher = PageFetcher(timeout=config.fetch_timeout)
    try:
        store = await open_store(config)
        try:
            discovery = ReferenceDiscovery(
                search_client,
                fetcher,
                config.origin_domain,
                target=config.reference_target,
                min_text_length=config.min_reference_text_length,
                result_count=config.search_result_count,
            )
            orchestrator = EnrichmentOrchestrator(
                store,
                discovery,
                llm_client,
                reference_target=config.reference_target,
                reference_text_limit=config.reference_text_limit,
            )
            return await orchestrator.run(batch_size or config.enrichment_batch_size)
        finally:
            await store.close()
    finally:
        await fetcher.close()
        await search_client.close()


async def _ingest_async(cohort_size: int | None, json_output: bool) -> None:
    config = get_config()
    with with_pipeline_context("ingest", listing_url=config.listing_url) as logger:
        if not json_output:
            console.print(
                Panel.fit(
                    f"📥 [bold cyan]Article Ingestion[/bold cyan]\nListing: {config.listing_url}",
                    border_style="magenta",
                )
            )
        try:
            report = await _ingest(config, cohort_size)
        except ArticleForgeError as e:
            logger.error("Ingestion aborted", error=str(e), error_type=type(e).__name__)
            _fail(f"Ingestion aborted: {e}", json_output)

        _display_report(report, json_output)


async def _enrich_async(batch_size: int | None, json_output: bool) -> None:
    config = get_config()
    with with_pipeline_context("enrich", origin_domain=config.origin_domain) as logger:
        if not json_output:
            console.print(
                Panel.fit(
                    f"✨ [bold cyan]Article Enrichment[/bold cyan]\nOrigin: {config.origin_domain}",
                    border_style="magenta",
                )
            )
        try:
            report = await _enrich(config, batch_size)
        except ArticleForgeError as e:
            logger.error("Enrichment aborted", error=str(e), error_type=type(e).__name__)
            _fail(f"Enrichment aborted: {e}", json_output)

        _display_report(report, json_output)


@click.command()
@click.option("--cohort-size", type=int, default=None, help="Number of oldest articles to ingest")
@click.pass_context
async def ingest(ctx, cohort_size: int | None):
    """
    📥 Ingest the oldest articles from the origin listing.

    Existing articles are left untouched, so the command is safe to rerun.
    """
    await _ingest_async(cohort_size, ctx.obj["json_output"])


@click.command()
@click.option("--batch-size", type=int, default=None, help="Maximum number of original articles to enrich")
@click.pass_context
async def enrich(ctx, batch_size: int | None):
    """
    ✨ Rewrite stored originals using two external references each.

    Articles without enough validated references are skipped.
    """
    await _enrich_async(batch_size, ctx.obj["json_output"])


@click.command(name="run")
@click.option("--cohort-size", type=int, default=None, help="Number of oldest articles to ingest")
@click.option("--batch-size", type=int, default=None, help="Maximum number of original articles to enrich")
@click.pass_context
async def run_all(ctx, cohort_size: int | None, batch_size: int | None):
    """
    🔄 Ingest, then enrich.
    """
    await _ingest_async(cohort_size, ctx.obj["json_output"])
    await _enrich_async(batch_size, ctx.obj["json_output"])


@click.command(name="list-articles")
@click.option("--type", "article_type", type=click.Choice([t.value for t in ArticleType]), default=None)
@click.option("--limit", type=int, default=20, show_default=True, help="Maximum number of articles to show")
@click.pass_context
async def list_articles(ctx, article_type: str | None, limit: int):
    """
    📰 Show stored articles, newest first.
    """
    json_output = ctx.obj["json_output"]
    config = get_config()
    store = await open_store(config)
    try:
        articles = await store.list_articles(ArticleType(article_type) if article_type else None, limit=limit)
    except ArticleForgeError as e:
        _fail(f"Could not list articles: {e}", json_output)
    finally:
        await store.close()

    if json_output:
        for article in articles:
            click.echo(article.model_dump_json(by_alias=True))
        return

    if not articles:
        console.print("[yellow]No articles stored yet.[/yellow]")
        return
    print_rich_table(console, create_articles_table(articles))


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    try:
        config = get_config()
        mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

        # Use config defaults when CLI parameters are not provided
        final_log_level = log_level or config.log_level
        final_log_file = log_file or (str(config.log_file) if config.log_file else None)

        configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)
    except (FileNotFoundError, PermissionError, OSError):
        # Log directory not writable; configure without the file override
        mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE
        configure_logging(mode=mode, log_level=log_level or "INFO", log_file=None)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_rich_table(console, logging_table)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    📰 Article Forge - Article ingestion and reference-backed rewriting

    Capture the oldest articles from a blog listing, then produce rewritten
    versions grounded in two independently found external references.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(ingest)
app.add_command(enrich)
app.add_command(run_all)
app.add_command(list_articles)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
