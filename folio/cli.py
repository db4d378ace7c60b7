"""Command-line interface for Folio.

This module defines the CLI commands using Click framework.

Commands:
- build: Build the site into the output directory.
- serve: Run development server with live reload.
- post: Create a new post interactively.
"""

from __future__ import annotations

import re
from pathlib import Path

import click
import questionary
import yaml

from . import __version__
from .config import load_config
from .utils import parse_iso_date, slugify, today_iso

DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
DATE_HINT = "Use the YYYY-MM-DD format"
SLUG_HINT = "Use lowercase letters, digits and hyphens only"


@click.group()
@click.version_option(version=__version__, prog_name="folio")
def cli():
    """Folio static site generator."""


@cli.command()
def build():
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import BuildError, build_site

    try:
        result = build_site(project_root)
    except BuildError as exc:
        _report_build_error(exc, project_root)
        raise SystemExit(1) from None
    click.echo(f"Built {len(result.pages)} pages into {result.output_dir}")


@cli.command()
@click.option(
    "--port",
    type=int,
    required=False,
    help="Port to run the dev server (overrides folio.yaml)",
)
@click.option(
    "--ws-port",
    type=int,
    required=False,
    help="Port for the live reload websocket server (defaults to port + 1)",
)
@click.option("--open", "open_browser", is_flag=True, help="Open the site in a browser")
def serve(port: int | None, ws_port: int | None, open_browser: bool):
    """Run dev server with live reload."""
    project_root = Path.cwd()
    from .build import BuildError
    from .server import DevServer

    server = DevServer(project_root, http_port=port, ws_port=ws_port)
    try:
        server.start(open_browser=open_browser)
    except BuildError as exc:
        _report_build_error(exc, project_root)
        raise SystemExit(1) from None


@cli.command()
def post():
    """Create a new post interactively."""
    project_root = Path.cwd()
    content_dir = load_config(project_root).content_dir

    title = questionary.text(
        "Title:",
        validate=lambda x: len(x.strip()) > 0 or "Title cannot be empty",
        style=_questionary_style(),
    ).ask()
    if title is None:
        raise click.Abort()
    title = title.strip()

    description = questionary.text(
        "Description:",
        style=_questionary_style(),
    ).ask()
    if description is None:
        raise click.Abort()

    slug = questionary.text(
        "Slug:",
        default=slugify(title),
        validate=lambda x: _valid_slug(x) or SLUG_HINT,
        style=_questionary_style(),
    ).ask()
    if slug is None:
        raise click.Abort()
    slug = slug.strip()
    if not _valid_slug(slug):
        raise click.ClickException(f"Invalid slug '{slug}': {SLUG_HINT}")

    date = questionary.text(
        "Date (YYYY-MM-DD):",
        default=today_iso(),
        validate=lambda x: _valid_date(x) or DATE_HINT,
        style=_questionary_style(),
    ).ask()
    if date is None:
        raise click.Abort()
    date = date.strip()
    if not _valid_date(date):
        raise click.ClickException(f"Invalid date '{date}': {DATE_HINT}")

    target_path = content_dir / f"{slug}.md"
    if target_path.exists():
        raise click.ClickException(
            f"File already exists: {_relative(target_path, project_root)}"
        )

    content_dir.mkdir(parents=True, exist_ok=True)
    target_path.write_text(
        _post_source(title, date, description.strip(), slug), encoding="utf-8"
    )
    click.echo(f"Created {_relative(target_path, project_root)}")


def _valid_slug(value: str) -> bool:
    """Check that a slug is already in slugified form (no spaces, slashes or dots)."""
    value = value.strip()
    return bool(value) and slugify(value) == value


def _valid_date(value: str) -> bool:
    """Check for a real calendar date written exactly as YYYY-MM-DD."""
    value = value.strip()
    return DATE_RE.fullmatch(value) is not None and parse_iso_date(value) is not None


def _post_source(title: str, date: str, description: str, slug: str) -> str:
    """Return the Markdown source of a new post with YAML front-matter."""
    frontmatter = yaml.safe_dump(
        {"title": title, "date": date, "description": description, "slug": slug},
        allow_unicode=True,
        sort_keys=False,
        default_flow_style=False,
    )
    return f"---\n{frontmatter}---\n\n# {title}\n\n"


def _report_build_error(exc, project_root: Path) -> None:
    """Print a build failure with the offending file."""
    click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
    click.echo(
        click.style(f"  File: {_relative(exc.source_path, project_root)}", fg="yellow"),
        err=True,
    )
    click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)


def _relative(path: Path, root: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()
