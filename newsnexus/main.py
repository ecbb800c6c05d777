from __future__ import annotations

import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, BarColumn, TaskProgressColumn, TextColumn
from rich.rule import Rule
from rich.table import Table

from newsnexus.config import load_config
from newsnexus.models import Article, Category
from newsnexus.reader import NewsReader

console = Console()


def _resolve_args(argv: list[str]) -> tuple[Path, str]:
    """Return ``(config_path, query)`` from ``newsnexus [CONFIG] [QUERY...]``."""
    if not argv:
        return Path("config.toml"), ""
    return Path(argv[0]), " ".join(argv[1:]).strip()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _category(name: str) -> Category:
    try:
        return Category(name.lower())
    except ValueError:
        console.print(f"  [yellow]warn[/yellow] unknown category: {escape(name)}, using general")
        return Category.GENERAL


def main() -> None:
    config_path, query = _resolve_args(sys.argv[1:])
    if not config_path.exists():
        console.print(f"[red]Config file not found:[/red] {escape(str(config_path))}")
        sys.exit(1)

    config = load_config(config_path)
    _configure_logging(config.log_level)

    reader = NewsReader(config)
    query = query or config.news.query
    if query:
        console.print(Rule(f"[bold]News Nexus[/bold] search: {escape(query)}"))
        articles = reader.search(query)
    else:
        category = _category(config.news.category)
        console.print(Rule(f"[bold]News Nexus[/bold] {category.display_name}"))
        articles = reader.fetch_top_headlines(category)

    if reader.error_message:
        console.print(f"[red]✗[/red] {escape(reader.error_message)}")
    if not articles:
        sys.exit(1)

    console.print(_headline_table(articles))

    detail = articles[: config.detail_count]
    if detail:
        _prefetch(reader, detail)
        summarize = config.summarizer.enabled and reader.summarizer_available()
        if config.summarizer.enabled and not summarize:
            console.print("  [yellow]warn[/yellow] summarizer not reachable, skipping summaries")
        for article in detail:
            _print_article(reader, article, summarize=summarize)

    console.print(Rule("[green]done[/green]"))


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _headline_table(articles: list[Article]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Headline")
    table.add_column("Source", style="cyan")
    table.add_column("Published", style="dim")
    for idx, article in enumerate(articles, start=1):
        table.add_row(
            str(idx),
            escape(article.headline),
            escape(article.source.name),
            escape(article.formatted_date),
        )
    return table


def _prefetch(reader: NewsReader, articles: list[Article]) -> None:
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TextColumn("[dim]{task.fields[title]}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("loading articles", total=len(articles), title="")

        def _done(article: Article, text: str | None) -> None:
            status = escape(article.title[:50]) if text is not None else "[red]failed"
            progress.update(task, title=status)
            progress.advance(task)

        reader.prefetch_content(articles, on_done=_done)


def _print_article(reader: NewsReader, article: Article, *, summarize: bool) -> None:
    console.print(Rule(f"[bold cyan]{escape(article.headline)}[/bold cyan]"))
    if article.subheading:
        console.print(f"[italic]{escape(article.subheading)}[/italic]")
    byline = " · ".join(p for p in (article.author, article.source.name, article.formatted_date) if p)
    console.print(f"[dim]{escape(byline)}[/dim]\n")

    if summarize:
        summary = reader.generate_summary(article)
        state = reader.state(article)
        if summary:
            console.print(Panel(escape(summary), title="AI summary", border_style="magenta"))
        elif state.summary_error:
            console.print(f"  [red]✗[/red] {escape(state.summary_error)}")

    for paragraph in reader.segments_for(article):
        console.print(paragraph, "\n", markup=False)
    console.print(f"[dim]{escape(article.url)}[/dim]")


if __name__ == "__main__":
    main()
