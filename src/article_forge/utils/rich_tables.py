# ABOUTME: Rich table helpers for CLI output
# ABOUTME: Key-value and multi-column builders plus tables for run reports, articles and logging status

from typing import Any

from rich.box import ROUNDED, SIMPLE
from rich.console import Console
from rich.table import Table

STATUS_STYLES = {
    "succeeded": "[bold green]✅ succeeded[/bold green]",
    "skipped": "[bold yellow]⏭️ skipped[/bold yellow]",
    "failed": "[bold red]❌ failed[/bold red]",
}


def _truncate(text: str, length: int) -> str:
    return text[:length] + "..." if len(text) > length else text


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a two-column Field/Value table.

    Args:
        title: Table title
        data: Key-value pairs to display, in order
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, no_wrap=False)
    table.add_column("Value", style=value_style, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_multi_column_table(
    title: str,
    columns: list[tuple[str, str]],
    rows: list[list[str]],
    title_style: str = "bold cyan",
    header_style: str = "bold magenta",
    alternate_row_styles: list[str] | None = None,
    box_style=ROUNDED,
) -> Table:
    """Create a multi-column table with zebra striping.

    Args:
        title: Table title
        columns: List of (column_name, column_style) tuples
        rows: Row values, one list per row
        title_style: Style for the table title
        header_style: Style for column headers
        alternate_row_styles: Alternating row styles
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style=header_style,
        border_style="cyan",
        title_justify="left",
        row_styles=alternate_row_styles or ["", "dim"],
        expand=True,
    )

    for name, style in columns:
        table.add_column(name, style=style)

    for row in rows:
        table.add_row(*row)

    return table


def create_run_report_table(report: Any) -> Table:
    """Create a per-item outcome table for an ingestion or enrichment run."""
    columns = [
        ("Status", "white"),
        ("Title", "bold white"),
        ("URL", "cyan"),
        ("Detail", "dim white"),
    ]

    rows = []
    for outcome in report.outcomes:
        status = outcome.status.value
        detail = outcome.reason or (f"record {outcome.record_id}" if outcome.record_id else "")
        rows.append(
            [
                STATUS_STYLES.get(status, status),
                _truncate(outcome.title or "-", 60),
                outcome.url or "-",
                _truncate(detail, 80),
            ]
        )

    return create_multi_column_table(title=f"🔄 {report.pipeline.title()} Run", columns=columns, rows=rows)


def create_run_summary_table(report: Any) -> Table:
    """Create a compact count summary for a run."""
    summary = report.summary()
    summary_data = {
        "📦 Processed": str(summary["total"]),
        "✅ Succeeded": str(summary["succeeded"]),
        "⏭️ Skipped": str(summary["skipped"]),
        "❌ Failed": str(summary["failed"]),
    }

    return create_key_value_table(
        title=f"📊 {report.pipeline.title()} Summary",
        data=summary_data,
        title_style="bold green",
        key_style="cyan",
        value_style="white",
        box_style=SIMPLE,
    )


def create_articles_table(articles: list[Any]) -> Table:
    """Create a table of stored articles.

    Args:
        articles: ArticleRecord objects, newest first

    Returns:
        Styled articles table
    """
    columns = [
        ("ID", "cyan"),
        ("Type", "magenta"),
        ("Title", "bold white"),
        ("Published", "green"),
        ("References", "yellow"),
        ("Created", "white"),
    ]

    rows = []
    for article in articles:
        rows.append(
            [
                article.id,
                article.type.value,
                _truncate(article.title, 60),
                article.published_date or "-",
                str(len(article.references)),
                article.created_at.strftime("%Y-%m-%d %H:%M:%S") if article.created_at else "-",
            ]
        )

    return create_multi_column_table(title="📰 Stored Articles", columns=columns, rows=rows)


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["json"]:
        logging_data["📊 JSON Log"] = status["log_files"]["json"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()
    console.print(table)
    console.print()
