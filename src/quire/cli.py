"""CLI interface for quire."""

import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from quire.config import QuireConfig, load_config, merge_cli_overrides
from quire.content import category_label
from quire.errors import QuireError
from quire.pages.publishers import OutputFormat

app = typer.Typer(
    name="quire",
    help="Generate static category pages from markdown posts.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from quire import __version__

        console.print(f"quire {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    """Route package logs through rich; DEBUG with --verbose, else WARNING."""
    logger = logging.getLogger("quire")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False))


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    """Quire - static category page generator."""
    _setup_logging(verbose)


ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to a .quire.toml file."),
]
ContentOption = Annotated[
    Optional[Path],
    typer.Option("--content", help="Directory containing markdown posts."),
]


def _resolve_config(config_path: Optional[Path], **overrides: object) -> QuireConfig:
    config = load_config(config_path)
    return merge_cli_overrides(config, **overrides)


def _fail(exc: QuireError) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
    raise typer.Exit(code=1)


@app.command()
def build(
    config_path: ConfigOption = None,
    content: ContentOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output directory. Defaults to ./build/"),
    ] = None,
    formats: Annotated[
        Optional[list[OutputFormat]],
        typer.Option("--format", "-f", help="Output format (repeatable)."),
    ] = None,
    drafts: Annotated[
        Optional[bool],
        typer.Option("--drafts/--no-drafts", help="Include draft posts in listings."),
    ] = None,
    workers: Annotated[
        Optional[int],
        typer.Option("--workers", "-w", min=1, help="Bind category pages in parallel."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Compute every page but write nothing."),
    ] = False,
) -> None:
    """Build every category page."""
    from quire.pipeline import build_site

    try:
        config = _resolve_config(
            config_path,
            content_directory=str(content) if content else None,
            output_directory=str(output) if output else None,
            output_formats=list(formats) if formats else None,
            include_drafts=drafts,
            workers=workers,
            dry_run=dry_run or None,
        )
        result = build_site(config)
    except QuireError as exc:
        _fail(exc)

    verb = "Would write" if result.dry_run else "Wrote"
    console.print(
        f"[green]{verb} {len(result.written)} files[/green] "
        f"({result.page_count} pages, {result.post_count} posts)"
    )
    for path in result.written:
        console.print(f"  {path}")


@app.command()
def check(
    config_path: ConfigOption = None,
    content: ContentOption = None,
) -> None:
    """Validate every post's front matter."""
    from quire.pipeline import check_content

    try:
        config = _resolve_config(
            config_path, content_directory=str(content) if content else None
        )
        store = check_content(config)
    except QuireError as exc:
        _fail(exc)

    console.print(f"[green]OK[/green] {len(store)} posts in {config.content_dir}")


@app.command()
def categories(
    config_path: ConfigOption = None,
    content: ContentOption = None,
) -> None:
    """List categories with their published post counts."""
    from quire.pipeline import check_content

    try:
        config = _resolve_config(
            config_path, content_directory=str(content) if content else None
        )
        store = check_content(config)
    except QuireError as exc:
        _fail(exc)

    table = Table(title="Categories")
    table.add_column("Key")
    table.add_column("Label")
    table.add_column("Posts", justify="right")
    for category, count in store.category_counts().items():
        table.add_row(category.value, category_label(category), str(count))
    console.print(table)
