"""
Command-line interface for pdfpageimage.
"""

import sys

import click
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from pdfpageimage.config import RenderConfig
from pdfpageimage.exceptions import PageImageError
from pdfpageimage.session import DocumentSession
from pdfpageimage.utils import configure_logging

console = Console()


def _build_config(output_dir, scratch_dir):
    overrides = {"persistent_dir": output_dir, "scratch_dir": scratch_dir}
    return RenderConfig().with_updates(**overrides)


def _fail(exc):
    console.print(f"[bold red]✗ {exc.code}:[/bold red] {exc.message}")
    sys.exit(1)


def _artifact_table(title, rows):
    table = Table(title=title)
    table.add_column("Page", style="cyan")
    table.add_column("URI", style="green")
    table.add_column("Size", style="magenta")
    for label, artifact in rows:
        table.add_row(label, artifact.uri, f"{artifact.width}x{artifact.height}")
    return table


@click.group()
@click.version_option(version="1.0.0")
@click.option('--output-dir', type=click.Path(file_okay=False), default=None,
              help='Directory receiving named output groups')
@click.option('--scratch-dir', type=click.Path(file_okay=False), default=None,
              help='Directory for downloads and ungrouped images')
@click.option('--verbose', '-v', is_flag=True, help='Log session activity to stderr')
@click.pass_context
def cli(ctx, output_dir, scratch_dir, verbose):
    """
    PDF Page Image - Render PDF pages to PNG images.
    """
    if verbose:
        configure_logging("DEBUG")
    ctx.obj = _build_config(output_dir, scratch_dir)


@cli.command()
@click.argument('locator')
@click.pass_obj
def info(config, locator):
    """
    Show the page count of a document.

    Examples:

        pdf-page-image info /path/to/file.pdf

        pdf-page-image info https://example.com/file.pdf
    """
    try:
        with DocumentSession.open(locator, config=config) as session:
            details = session.info()
    except PageImageError as exc:
        _fail(exc)

    table = Table(title="Document Information", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Locator", details.locator if len(details.locator) < 80 else details.locator[:77] + "...")
    table.add_row("Pages", str(details.page_count))
    console.print(table)


@cli.command()
@click.argument('locator')
@click.argument('page', type=int)
@click.option('--scale', '-s', default=None, type=float, help='Render scale (default 2.0)')
@click.option('--output-group', '-g', default=None, help='Named folder under the output directory')
@click.pass_obj
def generate(config, locator, page, scale, output_group):
    """
    Render a single page (zero-based index).

    Examples:

        pdf-page-image generate input.pdf 0

        pdf-page-image --output-dir out generate input.pdf 2 -s 1.5 -g report
    """
    try:
        session = DocumentSession.open(locator, config=config)
        try:
            artifact = session.get_page(page, scale, output_group)
        finally:
            session.close(keep_artifacts=True)
    except PageImageError as exc:
        _fail(exc)

    console.print(_artifact_table("Rendered page", [(str(page), artifact)]))


@cli.command(name="generate-all")
@click.argument('locator')
@click.option('--scale', '-s', default=None, type=float, help='Render scale (default 2.0)')
@click.option('--output-group', '-g', default=None, help='Named folder under the output directory')
@click.pass_obj
def generate_all(config, locator, scale, output_group):
    """
    Render every page, plus a thumbnail when an output group is given.

    Examples:

        pdf-page-image --output-dir out generate-all input.pdf -g report
    """
    try:
        session = DocumentSession.open(locator, config=config)
        try:
            total = session.page_count()
            artifacts = []
            with Progress(
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console,
            ) as progress:
                task = progress.add_task("Rendering pages", total=total)
                for index in range(total):
                    artifacts.append(session.get_page(index, scale, output_group))
                    progress.update(task, completed=index + 1)
            thumbnail = session.get_thumbnail(output_group) if output_group else None
        finally:
            session.close(keep_artifacts=True)
    except PageImageError as exc:
        _fail(exc)

    rows = [(str(index), artifact) for index, artifact in enumerate(artifacts)]
    if thumbnail is not None:
        rows.append(("thumbnail", thumbnail))
    console.print(_artifact_table("Rendered pages", rows))
    console.print(f"\n[bold green]✓ Rendered {len(artifacts)} pages[/bold green]")


if __name__ == '__main__':
    cli()
