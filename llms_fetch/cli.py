"""
CLI entry point: outline Markdown files and fetch documentation from the shell.

    llms-fetch toc path/to/doc.md              # print the ToC (if the file is large enough)
    llms-fetch headings path/to/doc.md         # list every heading with its line
    llms-fetch fetch https://docs.example.com  # fetch + cache, print files and ToCs
    llms-fetch config show
    llms-fetch config set toc_budget 2000
"""

import logging
from pathlib import Path

import typer

from llms_fetch import config as config_module
from llms_fetch.api import fetch_docs
from llms_fetch.errors import LlmsFetchError
from llms_fetch.models import TocConfig
from llms_fetch.toc import extract_headings, generate_toc

app = typer.Typer(
    name="llms-fetch",
    help="Fetch documentation as Markdown and build compact tables of contents.",
)
config_app = typer.Typer(help="Show or change the config in use (.llms_fetch.json + LLMS_FETCH_* env vars).")
app.add_typer(config_app, name="config")


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(message)s")


def _read_markdown(path: Path) -> str:
    if not path.is_file():
        typer.echo(f"Error: file not found: {path}", err=True)
        raise typer.Exit(1)
    # newline="" keeps \r\n so line numbers match the file as stored
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        return f.read()


@app.command("toc")
def toc_cmd(
    path: Path = typer.Argument(..., help="Markdown file", path_type=Path),
    budget: int | None = typer.Option(None, "--budget", "-b", min=0, help="Max ToC size in bytes"),
    threshold: int | None = typer.Option(
        None,
        "--threshold",
        "-t",
        min=0,
        help="Min document size in bytes before a ToC is produced",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Print diagnostic info"),
) -> None:
    """Print the table of contents of a Markdown file."""
    _setup_logging(verbose)
    markdown = _read_markdown(path)
    defaults = config_module.get_toc_config()
    toc_config = TocConfig(
        toc_budget=defaults.toc_budget if budget is None else budget,
        full_content_threshold=defaults.full_content_threshold if threshold is None else threshold,
    )
    size = len(markdown.encode("utf-8"))
    toc = generate_toc(markdown, size, toc_config)
    if toc is None:
        if size < toc_config.full_content_threshold:
            reason = f"document is {size} bytes, below the {toc_config.full_content_threshold} byte threshold"
        else:
            reason = f"no headings, or none fit in {toc_config.toc_budget} bytes"
        typer.echo(f"No ToC: {reason}", err=True)
        raise typer.Exit(1)
    typer.echo(toc)


@app.command("headings")
def headings_cmd(
    path: Path = typer.Argument(..., help="Markdown file", path_type=Path),
    depth: int = typer.Option(6, "--depth", "-d", min=1, max=6, help="Max heading level to list"),
) -> None:
    """List headings with level and line number."""
    markdown = _read_markdown(path)
    headings = [h for h in extract_headings(markdown) if h.level <= depth]
    if not headings:
        typer.echo("No headings found.")
        return
    for h in headings:
        typer.echo(f"L{h.level} {h.line_number}: {h.text}")


@app.command("fetch")
def fetch_cmd(
    url: str = typer.Argument(..., help="Page or documentation root URL"),
    cache_dir: Path | None = typer.Option(
        None,
        "-c",
        "--cache-dir",
        help="Cache root (default: from config, .llms-fetch-mcp)",
        path_type=Path,
    ),
    timeout: float | None = typer.Option(None, "--timeout", help="Per-request timeout in seconds"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Print diagnostic info"),
) -> None:
    """Fetch a URL (and its .md / llms.txt variations) into the cache."""
    _setup_logging(verbose)
    try:
        output = fetch_docs(url, cache_dir=cache_dir, timeout=timeout)
    except LlmsFetchError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for info in output.files:
        typer.echo(f"{info.path}")
        typer.echo(f"  source → {info.source_url}")
        typer.echo(f"  type   → {info.content_type}")
        typer.echo(f"  stats  → {info.lines} lines, {info.words} words, {info.characters} characters")
        if info.toc:
            typer.echo("  toc:")
            for line in info.toc.splitlines():
                typer.echo(f"    {line}")
    if verbose and output.errors:
        typer.echo("\nFailed variations:", err=True)
        for err in output.errors:
            typer.echo(f"  {err}", err=True)


@config_app.command("show")
def _show() -> None:
    """Show config file, values and resolved cache dir."""
    data = config_module.load_config()
    cf = data.get("_config_file", "")
    if data.get("_no_file"):
        typer.echo(f"Config file: {cf} (not found; using defaults)")
    else:
        typer.echo(f"Config file: {cf}")
    typer.echo(f"Cache dir: {data.get('cache_dir')}")
    typer.echo(f"Resolved cache dir: {config_module.get_cache_dir(data)}")
    typer.echo(f"ToC budget: {data.get('toc_budget')} bytes")
    typer.echo(f"ToC threshold: {data.get('full_content_threshold')} bytes")
    typer.echo(f"Timeout: {data.get('timeout')} s")
    if data.get("_env"):
        typer.echo(f"Env overrides: {', '.join(data['_env'])}")


@config_app.command("set")
def _set(
    key: str = typer.Argument(..., help="cache_dir, toc_budget, full_content_threshold or timeout"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Write one value to the config file."""
    result = config_module.set_value(key, value)
    if not result["ok"]:
        typer.echo(f"Error: {result['error']}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Set {result['key']} = {result['value']} in {result['path']}")


@config_app.command("path")
def _path() -> None:
    """Print the config file path in use."""
    typer.echo(config_module.get_config_path())


def main() -> None:
    """Entry point for the llms-fetch console script."""
    app()


if __name__ == "__main__":
    main()
