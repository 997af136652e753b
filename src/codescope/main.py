import json
import logging
import os

from typer import Exit, Option, Typer
from typing import Annotated
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from .config import SearchSettings
from .errors import CodeScopeError
from .models import SearchResult
from .search import DEFAULT_TOP_K, create_engine

app = Typer()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def render_results(
    console: Console, results: list[SearchResult], base_dir: str
) -> None:
    if not results:
        console.print("[bold yellow]No matching code found.[/]")
        return
    for result in results:
        path = result.file_path
        if os.path.isabs(path):
            path = os.path.relpath(path, base_dir)
        title = f"{path}:{result.start_line}-{result.end_line}"
        subtitle = f"score {result.score:.3f}"
        if result.parent_scope:
            subtitle += f" | {result.parent_scope}"
        panel = Panel(
            Syntax(result.content, "csharp", line_numbers=False),
            title=title,
            title_align="left",
            subtitle=subtitle,
            subtitle_align="left",
            border_style="bold green",
        )
        console.print(panel)


@app.command()
def search(
    query: Annotated[
        str,
        Option("--query", "-q", help="Natural language description of the code to find."),
    ],
    top_k: Annotated[
        int,
        Option("--top-k", "-k", min=0, help="Number of results to return."),
    ] = DEFAULT_TOP_K,
    base_dir: Annotated[
        str | None,
        Option("--base-dir", "-d", help="Directory to search (defaults to CODESCOPE_BASE_DIR or '.')."),
    ] = None,
    as_json: Annotated[
        bool, Option("--json", help="Print results as a JSON array.")
    ] = False,
    verbose: Annotated[bool, Option("--verbose", "-v")] = False,
) -> None:
    """Run one semantic search over the source files of a directory."""
    _configure_logging(verbose)
    console = Console()
    try:
        settings = SearchSettings.from_env(base_dir=base_dir)
        engine = create_engine(settings)
        with console.status(status="Indexing and searching..."):
            results = engine.search(query, top_k)
    except CodeScopeError as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        raise Exit(code=1)

    if as_json:
        print(json.dumps([r.to_json_dict() for r in results], indent=2))
    else:
        render_results(console, results, settings.base_dir)


@app.command()
def status(
    base_dir: Annotated[
        str | None, Option("--base-dir", "-d", help="Directory to search.")
    ] = None,
) -> None:
    """Show whether semantic search is available."""
    console = Console()
    try:
        engine = create_engine(SearchSettings.from_env(base_dir=base_dir))
    except CodeScopeError as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        raise Exit(code=1)
    enabled = "[bold green]enabled[/]" if engine.is_available else "[bold red]unavailable[/]"
    console.print(f"Semantic search: {enabled}")
    console.print(f"Base directory: {engine.catalog.base_dir}")


@app.command()
def serve(
    host: Annotated[str, Option("--host")] = "127.0.0.1",
    port: Annotated[int, Option("--port")] = 8000,
    verbose: Annotated[bool, Option("--verbose", "-v")] = False,
) -> None:
    """Serve the search endpoint over HTTP."""
    from .server import run_server

    _configure_logging(verbose)
    run_server(host=host, port=port)
