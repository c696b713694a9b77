"""Command-line interface for Folio.

This module defines the CLI commands using Click framework.

Commands:
- new: Scaffold a new site project.
- check: Validate the site configuration and every content collection.
- optimize-images: Convert site images to WebP.
- post: Create a new blog post interactively.
"""

from __future__ import annotations

import json
import os
import shutil
import subprocess
from datetime import date
from pathlib import Path
from typing import NoReturn

import click
import questionary
import yaml

from . import __version__
from .collections import COLLECTIONS, CollectionLoader
from .config import CONFIG_FILENAME, DEFAULT_CONFIG, load_config
from .errors import FolioError, ValidationError
from .images import SOURCE_DIR, ImageOptimizer
from .schemas import BlogPost
from .utils import slugify


@click.group()
@click.version_option(version=__version__, prog_name="folio")
def cli():
    """Folio personal-site toolkit."""


@cli.command()
@click.argument("name")
def new(name: str):
    """Scaffold a new site project."""
    target = Path(name).resolve()
    if target.exists() and any(target.iterdir()):
        raise click.ClickException(
            f"Refusing to initialize into non-empty directory: {target}"
        )
    _scaffold(target)
    click.echo(f"New Folio site created at {target}")


@cli.command()
def check():
    """Validate the configuration and all content collections."""
    project_root = Path.cwd()
    try:
        config = load_config(project_root)
        collections = CollectionLoader(project_root).load_all()
    except FolioError as exc:
        _report_failure("Check failed:", exc, project_root)
    for name, entries in collections.items():
        click.echo(f"{name}: {len(entries)} entries")
    click.echo(f"Content OK for {config.site}")


@cli.command("optimize-images")
def optimize_images():
    """Convert site images to WebP."""
    project_root = Path.cwd()
    try:
        ImageOptimizer.for_project(project_root).run()
    except FolioError as exc:
        _report_failure("Image optimization failed:", exc, project_root)
    click.echo("Images optimized")


@cli.command()
def post():
    """Create a new blog post interactively."""
    project_root = Path.cwd()
    blog_dir = project_root / COLLECTIONS["blog"].base

    if not (project_root / CONFIG_FILENAME).exists():
        raise click.ClickException(
            f"No {CONFIG_FILENAME} found. Run this command from a Folio project root."
        )

    title = questionary.text(
        "Title:",
        validate=lambda x: len(x.strip()) > 0 or "Title cannot be empty",
        style=_questionary_style(),
    ).ask()
    if title is None:
        raise click.Abort()

    author = questionary.text(
        "Author:",
        validate=lambda x: len(x.strip()) > 0 or "Author cannot be empty",
        style=_questionary_style(),
    ).ask()
    if author is None:
        raise click.Abort()

    tags = questionary.text(
        "Tags (comma separated, optional):",
        style=_questionary_style(),
    ).ask()
    if tags is None:
        raise click.Abort()

    today = date.today()
    slug = slugify(title.strip())
    existing = _get_existing_slugs(blog_dir)
    if slug in existing:
        raise click.ClickException(
            f"A post with slug '{slug}' already exists: {existing[slug]}"
        )

    frontmatter = {"title": title.strip(), "author": author.strip(), "date": today}
    tag_list = [t.strip() for t in tags.split(",") if t.strip()]
    if tag_list:
        frontmatter["tags"] = tag_list
    BlogPost.model_validate(frontmatter)

    target_path = blog_dir / f"{today.isoformat()}-{slug}.mdx"
    blog_dir.mkdir(parents=True, exist_ok=True)
    header = yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True)
    target_path.write_text(
        f"---\n{header}---\n\n# {title.strip()}\n\n", encoding="utf-8"
    )
    click.echo(f"Created {target_path.relative_to(project_root)}")


def _report_failure(header: str, exc: FolioError, project_root: Path) -> NoReturn:
    """Print a failure with its file context and exit with status 1."""
    try:
        rel_path = exc.source_path.relative_to(project_root)
    except ValueError:
        rel_path = exc.source_path
    click.echo(click.style(header, fg="red", bold=True), err=True)
    click.echo(click.style(f"  File: {rel_path}", fg="yellow"), err=True)
    if isinstance(exc, ValidationError) and exc.errors:
        for loc, msg in exc.errors:
            click.echo(click.style(f"  {loc}: {msg}", fg="white"), err=True)
    else:
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
    raise SystemExit(1)


def _get_existing_slugs(folder: Path) -> dict[str, str]:
    """Map slugs of existing posts (date prefix removed) to their filenames."""
    slugs = {}
    if folder.exists():
        for f in folder.iterdir():
            if f.is_file() and f.suffix == ".mdx":
                slugs[_extract_slug(f.name)] = f.name
    return slugs


def _extract_slug(filename: str) -> str:
    """Extract slug from filename, removing date prefix and extension."""
    name = Path(filename).stem
    parts = name.split("-")
    if len(parts) >= 4 and all(p.isdigit() for p in parts[:3]):
        name = "-".join(parts[3:])
    return slugify(name)


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


def _scaffold(root: Path) -> None:
    """Create the directory structure and sample content for a new site.

    Args:
        root: Root directory for the new project.
    """
    root.mkdir(parents=True, exist_ok=True)
    (root / CONFIG_FILENAME).write_text(
        yaml.safe_dump(DEFAULT_CONFIG, sort_keys=False), encoding="utf-8"
    )

    blog_dir = root / COLLECTIONS["blog"].base
    blog_dir.mkdir(parents=True, exist_ok=True)
    (blog_dir / "hello-world.mdx").write_text(
        "---\n"
        "title: Hello World\n"
        "author: Folio\n"
        f"date: {date.today().isoformat()}\n"
        "tags: [meta]\n"
        "---\n\n"
        "# Hello World\n\nFirst post.\n",
        encoding="utf-8",
    )

    samples = {
        "projects": (
            "folio.json",
            {
                "title": "Folio",
                "description": "The site you are looking at.",
                "link": "https://example.com",
            },
        ),
        "work": (
            "example.json",
            {"title": "Engineer", "company": "Example Inc.", "date": "2020-2023"},
        ),
    }
    for name, (filename, record) in samples.items():
        target_dir = root / COLLECTIONS[name].base
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / filename).write_text(
            json.dumps(record, indent=2) + "\n", encoding="utf-8"
        )

    (root / SOURCE_DIR).mkdir(parents=True, exist_ok=True)
    _try_git_init(root)


def _try_git_init(root: Path) -> None:
    """Initialize a git repository if git is available."""
    if os.environ.get("FOLIO_SKIP_GIT_INIT") == "1":
        return
    git_bin = shutil.which("git")
    if not git_bin:
        return
    try:
        subprocess.run(
            [git_bin, "init"],
            cwd=root,
            check=True,
            capture_output=True,
        )
    except (OSError, subprocess.CalledProcessError):
        # Non-fatal: user can run git init manually
        pass
