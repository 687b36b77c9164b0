# filmwiki/cli/generic.py
from __future__ import annotations

import json
from dataclasses import asdict

import typer
from rich import print, print_json
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from filmwiki import config
from filmwiki.datatypes import LegacyResult, SearchRequest, WikipediaFullResult
from filmwiki.errors import FilmWikiError, NotFoundError
from filmwiki.handler import find_page, lookup
from filmwiki.queries import generate_queries
from filmwiki.sanitize import strip_tags
from filmwiki.utils import configure_logging
from filmwiki.wiki_client import WikiClient

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _media_type(value: str) -> str:
    if value not in ("movie", "tv"):
        raise typer.BadParameter("media type must be 'movie' or 'tv'")
    return value


def _client(api_url: str, timeout: float) -> WikiClient:
    return WikiClient(api_url=api_url, timeout=timeout)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """
    Find the Wikipedia article for a film or TV show and extract its sections.
    """
    configure_logging(verbose)


@app.command()
def queries(
    title: str = typer.Argument(..., help="Film or TV show title"),
    year: str = typer.Option(None, help="Release year, e.g. 1999"),
    media_type: str = typer.Option(
        "movie", "--media-type", callback=_media_type, help="movie or tv"
    ),
) -> None:
    """
    Show the candidate search queries, most specific first.
    """
    table = Table(title=f"Search queries for: {title!r}")
    table.add_column("#", justify="right", style="bold")
    table.add_column("Query")
    for i, query in enumerate(generate_queries(title, year, media_type), start=1):
        table.add_row(str(i), query)
    print(table)


@app.command()
def search(
    query: str = typer.Argument(..., help="Free-form query to search Wikipedia"),
    k: int = typer.Option(config.SEARCH_LIMIT, "--k", help="Number of results (max 50)"),
    json_out: bool = typer.Option(False, "--json", help="Emit JSON instead of table"),
    api_url: str = typer.Option(config.DEFAULT_API_URL, help="MediaWiki action API URL"),
    timeout: float = typer.Option(config.DEFAULT_TIMEOUT, help="Request timeout (s)"),
) -> None:
    """
    Run one full-text search and list the raw hits.
    """
    with _client(api_url, timeout) as client:
        hits = client.search(query, limit=k)

    if json_out:
        print_json(json.dumps([asdict(hit) for hit in hits], ensure_ascii=False))
        return

    if not hits:
        print(Panel.fit(f"[bold red]No results for:[/bold red] {query!r}"))
        return

    table = Table(title=f"Search results for: {query!r}")
    table.add_column("#", justify="right", style="bold")
    table.add_column("Title")
    table.add_column("Page ID", justify="right")
    table.add_column("Snippet")
    for i, hit in enumerate(hits, start=1):
        table.add_row(str(i), hit.title, str(hit.page_id), strip_tags(hit.snippet)[:160])
    print(table)


@app.command()
def resolve(
    title: str = typer.Argument(..., help="Film or TV show title"),
    year: str = typer.Option(None, help="Release year, e.g. 1999"),
    media_type: str = typer.Option(
        "movie", "--media-type", callback=_media_type, help="movie or tv"
    ),
    api_url: str = typer.Option(config.DEFAULT_API_URL, help="MediaWiki action API URL"),
    timeout: float = typer.Option(config.DEFAULT_TIMEOUT, help="Request timeout (s)"),
) -> None:
    """
    Resolve a title to a single Wikipedia article without fetching it.
    """
    request = SearchRequest.from_payload(
        {"title": title, "year": year, "mediaType": media_type}
    )
    try:
        with _client(api_url, timeout) as client:
            page = find_page(request, client=client)
    except NotFoundError as exc:
        print(Panel.fit(f"[bold red]{exc}[/bold red]: {title!r}"))
        raise typer.Exit(code=1)

    print(Panel.fit(f"[bold]Resolved:[/bold] {page.title} (page ID {page.page_id})"))


def _print_full(result: WikipediaFullResult) -> None:
    print(Panel.fit(f"[bold]{result.title}[/bold]\n{result.url}"))
    if result.lead_section:
        print(Text(strip_tags(result.lead_section)[:600]))

    if result.infobox:
        facts = Table(title="Infobox", show_header=False)
        for label, value in result.infobox.data.items():
            facts.add_row(Text(label, style="bold"), Text(value))
        print(facts)

    table = Table(title=f"Sections ({len(result.sections)})")
    table.add_column("Title")
    table.add_column("Level", justify="right")
    table.add_column("Chars", justify="right")
    for section in result.sections:
        table.add_row(section.title, str(section.level), str(len(strip_tags(section.content))))
    if result.is_limited:
        table.caption = "[bold yellow]Limited content: only the lead is available.[/bold yellow]"
    print(table)


def _print_legacy(result: LegacyResult) -> None:
    print(Panel.fit(f"[bold]{result.title}[/bold]\n{result.url}"))
    for name, text in result.sections.items():
        print(Panel(Text(text[:800]), title=name))


@app.command()
def fetch(
    title: str = typer.Argument(..., help="Film or TV show title"),
    year: str = typer.Option(None, help="Release year, e.g. 1999"),
    media_type: str = typer.Option(
        "movie", "--media-type", callback=_media_type, help="movie or tv"
    ),
    full: bool = typer.Option(
        True, "--full/--legacy", help="Structured HTML sections or plain-text sections"
    ),
    json_out: bool = typer.Option(True, "--json/--no-json", help="Emit JSON output"),
    api_url: str = typer.Option(config.DEFAULT_API_URL, help="MediaWiki action API URL"),
    timeout: float = typer.Option(config.DEFAULT_TIMEOUT, help="Request timeout (s)"),
) -> None:
    """
    End-to-end: generate queries -> resolve -> parse -> extract sections.
    """
    request = SearchRequest.from_payload(
        {"title": title, "year": year, "mediaType": media_type, "fullContent": full}
    )
    try:
        with _client(api_url, timeout) as client:
            result = lookup(request, client=client)
    except NotFoundError as exc:
        print(Panel.fit(f"[bold red]{exc}[/bold red]: {title!r}"))
        raise typer.Exit(code=1)
    except FilmWikiError as exc:
        print(Panel.fit(f"[bold red]Lookup failed:[/bold red] {exc}"))
        raise typer.Exit(code=2)

    if json_out:
        print_json(json.dumps(result.to_dict(), ensure_ascii=False))
    elif isinstance(result, WikipediaFullResult):
        _print_full(result)
    else:
        _print_legacy(result)
