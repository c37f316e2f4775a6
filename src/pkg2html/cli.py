"""CLI interface for pkg2html."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from pkg2html import __version__
from pkg2html.builder.site import generate_package_html
from pkg2html.errors import Pkg2HtmlError
from pkg2html.model.descriptor import load_descriptor
from pkg2html.model.options import HtmlOptions
from pkg2html.ui.progress import ProgressReporter

app = typer.Typer(
    name="pkg2html",
    help="Generate cross-linked HTML reference documentation for a package.",
    no_args_is_help=True,
)


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, markup=False)],
        force=True,
    )


@app.command()
def generate(
    descriptor_file: Annotated[
        Path,
        typer.Argument(
            help="Package descriptor JSON (name, description, categories, metadata)",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    out_dir: Annotated[
        Path,
        typer.Option("--out-dir", help="Output directory (default: htdocs)"),
    ] = Path("htdocs"),
    options_file: Annotated[
        Path | None,
        typer.Option(
            "--options",
            help="JSON file with generation options (sections, templates, manual)",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every decision, not only warnings"),
    ] = False,
) -> None:
    """
    Generate the HTML documentation of one package.

    The pages land in <out-dir>/<package name>/: index.html, the function
    overview, one page per function, the alphabetical index database, NEWS,
    COPYING, the converted manual and description.json.

    Examples:

        # Default sections into ./htdocs
        pkg2html generate mypkg/descriptor.json

        # Custom options, verbose logging
        pkg2html generate mypkg/descriptor.json --out-dir site --options html.json -v
    """
    configure_logging(verbose)
    try:
        descriptor = load_descriptor(descriptor_file)
        options = HtmlOptions.from_json_file(options_file) if options_file else HtmlOptions()
    except Pkg2HtmlError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc

    typer.echo(f"📦 Package: {descriptor.name}")
    typer.echo(f"📁 Output Directory: {out_dir}")
    typer.echo(f"🗂️  Categories: {len(descriptor.categories)}")
    if options.package_doc:
        typer.echo(f"📘 Manual: {options.package_doc}")

    try:
        with ProgressReporter() as pr:
            result = generate_package_html(descriptor, out_dir, options, on_progress=pr.emit)
    except Pkg2HtmlError as exc:
        typer.secho(f"\n❌ Generation failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc

    if pr.missing:
        typer.echo(f"⚠️  Not implemented: {', '.join(pr.missing)}")
    typer.echo(
        f"\n✅ Wrote {result.tree.implemented_count} function pages to {result.package_dir}"
    )


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"pkg2html version {__version__}")


def version_callback(value: bool) -> None:
    """Version callback for --version flag."""
    if value:
        typer.echo(f"pkg2html version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """
    pkg2html - Turn a package's function inventory and help text into a website.

    Features:
    - One page per function, laid out by namespace and class
    - Function overview grouped by category
    - Alphabetical index database
    - Optional texinfo manual with its images and stylesheets

    For detailed usage, run: pkg2html generate --help
    """
    pass


if __name__ == "__main__":  # pragma: no cover - executed only via `python -m`
    app()
