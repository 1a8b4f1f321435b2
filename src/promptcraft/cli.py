"""PromptCraft CLI."""

import asyncio
import sys
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from .config import Settings, get_settings
from .engine import PromptLab
from .errors import NothingToDoError
from .logging_config import setup_colored_logging
from .prompts import DocumentKind, FieldState, LibraryStore, NotionKind, copy_document


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx, verbose):
    """PromptCraft - turn plain descriptions into structured prompts."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_colored_logging(verbose)


def _get_settings(ctx) -> Settings:
    if "settings" not in ctx.obj:
        try:
            ctx.obj["settings"] = get_settings()
        except ValidationError as e:
            click.echo(f"Error loading settings: {e}", err=True)
            click.echo("Check promptcraft.yaml and PROMPTCRAFT_* environment variables", err=True)
            sys.exit(1)
    return ctx.obj["settings"]


def _get_lab(ctx) -> PromptLab:
    if "lab" not in ctx.obj:
        ctx.obj["lab"] = PromptLab(_get_settings(ctx), rng=ctx.obj.get("rng"))
    return ctx.obj["lab"]


def _fail(error: NothingToDoError) -> None:
    click.echo(f"{error.title}: {error.message}", err=True)
    sys.exit(1)


def _generate(
    ctx,
    kind: DocumentKind,
    text: str,
    before: dict | None = None,
    after: dict | None = None,
    save: bool = False,
) -> FieldState:
    """Generate output for a lab, print its copy text and optionally save it."""
    lab = _get_lab(ctx)
    state = lab.initial_state(kind).merge(before or {})

    try:
        state = asyncio.run(lab.generate(kind, text, state))
        state = state.merge(after or {})
        click.echo(lab.copy_text(kind, state))

        if save:
            document = lab.save(kind, state)
            click.echo(f"Saved: {document.name} [{document.id}]", err=True)
    except NothingToDoError as e:
        _fail(e)
    return state


def _present(**options) -> dict:
    return {key: value for key, value in options.items() if value is not None}


@cli.command()
@click.option("--force", is_flag=True, help="Overwrite existing files")
def init(force):
    """Create a promptcraft.yaml and library folder in the current directory."""
    root = Path.cwd()

    config_path = root / "promptcraft.yaml"
    if not config_path.exists() or force:
        config_path.write_text(
            """# PromptCraft Configuration

# Where saved prompts are kept (one JSON file per store)
data_dir: .promptcraft

# Seconds to wait before showing generated image/video/notion/threads output
generation_delay: 1.0

# Image command defaults
image_aspect: "16:9"
image_version: "7"
image_profile: true
"""
        )
        click.echo("  Created: promptcraft.yaml")

    data_dir = root / ".promptcraft"
    data_dir.mkdir(parents=True, exist_ok=True)
    click.echo(f"  Created: {data_dir.relative_to(root)}/")

    env_example = root / ".env.example"
    if not env_example.exists():
        env_example.write_text(
            """# Any setting can be overridden with a PROMPTCRAFT_ variable
# PROMPTCRAFT_DATA_DIR=/path/to/library
# PROMPTCRAFT_GENERATION_DELAY=0
"""
        )
        click.echo("  Created: .env.example")

    click.echo("")
    click.echo("Ready! Try: promptcraft story \"Act as a bard, a fantasy tale\" --save")


@cli.command()
@click.argument("text")
@click.option("--rule", "-r", "rules", multiple=True, help="Task rule (repeatable)")
@click.option("--specifics", default=None, help="Specific plot details")
@click.option("--min-words", default=None, help="Minimum words per chapter")
@click.option("--max-words", default=None, help="Maximum words per chapter")
@click.option("--max-chapters", default=None, help="Chapters per output")
@click.option("--uniqueness", default=None, help="Uniqueness level (percent)")
@click.option("--save", is_flag=True, help="Save to the library")
@click.pass_context
def story(ctx, text, rules, specifics, min_words, max_words, max_chapters, uniqueness, save):
    """Build a storyteller JSON prompt from a description."""
    after = _present(
        specifics=specifics,
        min_words=min_words,
        max_words=max_words,
        max_chapter_per_output=max_chapters,
        uniqueness_level=uniqueness,
    )
    if rules:
        after["task_rules"] = tuple(rules)
    _generate(ctx, DocumentKind.STORY, text, after=after, save=save)


@cli.command()
@click.argument("text")
@click.option("--aspect", default=None, help="Aspect ratio (--ar)")
@click.option("--version", "version_", default=None, help="Model version (--v)")
@click.option("--profile/--no-profile", default=None, help="Include --profile")
@click.option("--sref", default=None, help="Style reference code (random if omitted)")
@click.option("--structured", is_flag=True, help="Also print the detected fields")
@click.option("--save", is_flag=True, help="Save to the library")
@click.pass_context
def image(ctx, text, aspect, version_, profile, sref, structured, save):
    """Build a Midjourney image command from a description."""
    after = _present(aspect=aspect, version=version_, profile=profile, sref=sref)
    state = _generate(ctx, DocumentKind.IMAGE, text, after=after, save=save)

    if structured:
        click.echo("")
        click.echo(state.structured_text())


@cli.command()
@click.argument("text")
@click.option("--aspect", type=click.Choice(["91:51", "16:9", "9:16", "1:1"]), default=None)
@click.option("--motion", type=click.Choice(["low", "medium", "high"]), default=None)
@click.option("--save", is_flag=True, help="Save to the library")
@click.pass_context
def video(ctx, text, aspect, motion, save):
    """Build a Midjourney video command from a scene description."""
    after = _present(aspect=aspect, motion=motion)
    _generate(ctx, DocumentKind.VIDEO, text, after=after, save=save)


@cli.command()
@click.argument("text")
@click.option(
    "--kind",
    "-k",
    "output_kind",
    type=click.Choice([kind.value for kind in NotionKind]),
    default=NotionKind.SUMMARY.value,
    show_default=True,
    help="What to produce",
)
@click.option("--save", is_flag=True, help="Save to the Notion store")
@click.pass_context
def notion(ctx, text, output_kind, save):
    """Produce Notion-ready content from text (printed without markdown)."""
    _generate(ctx, DocumentKind.NOTION, text, before={"kind": output_kind}, save=save)


@cli.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option("--save", is_flag=True, help="Save to the library")
@click.pass_context
def threads(ctx, source, save):
    """Turn a pasted conversation (file or stdin) into a role-play prompt."""
    _generate(ctx, DocumentKind.THREADS, source.read(), save=save)


@cli.group()
def library():
    """Browse and manage saved prompts."""


def _store(ctx, notion_store: bool) -> LibraryStore:
    kind = DocumentKind.NOTION if notion_store else DocumentKind.STORY
    return _get_lab(ctx).store_for(kind)


@library.command("list")
@click.option("--search", "-s", "term", default="", help="Filter by name, genre or task")
@click.option("--notion", "notion_store", is_flag=True, help="Use the Notion content store")
@click.pass_context
def list_prompts(ctx, term, notion_store):
    """List saved prompts, newest first."""
    store = _store(ctx, notion_store)
    documents = store.search(term) if term else store.list()

    if not documents:
        click.echo("No saved prompts.")
        return

    for doc in documents:
        click.echo(f"{doc.id}  {doc.created_at:%Y-%m-%d %H:%M}  {doc.name}")


@library.command()
@click.argument("document_id")
@click.option("--format", "fmt", type=click.Choice(["json", "yaml", "text"]), default="json", show_default=True)
@click.option("--notion", "notion_store", is_flag=True, help="Use the Notion content store")
@click.pass_context
def show(ctx, document_id, fmt, notion_store):
    """Print a saved prompt's payload, or its copy text with --format text."""
    doc = _store(ctx, notion_store).get(document_id)
    if doc is None:
        click.echo(f"No saved prompt with id {document_id}", err=True)
        sys.exit(1)

    if fmt == "text":
        click.echo(copy_document(doc))
    elif fmt == "yaml":
        click.echo(
            yaml.dump(
                doc.data.model_dump(mode="json", by_alias=True),
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
            ).rstrip()
        )
    else:
        click.echo(doc.payload_json())


@library.command()
@click.argument("document_id")
@click.option("--notion", "notion_store", is_flag=True, help="Use the Notion content store")
@click.pass_context
def delete(ctx, document_id, notion_store):
    """Delete a saved prompt permanently."""
    if _store(ctx, notion_store).delete(document_id):
        click.echo("Deleted.")
    else:
        click.echo(f"No saved prompt with id {document_id}")


if __name__ == "__main__":
    cli()
