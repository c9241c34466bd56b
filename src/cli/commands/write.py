"""Content generation CLI command."""

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from cli.utils import get_components
from ghostwriter import GENERATION_FAILED, frameworks
from shared_types import MemoryType, Platform
from store import ContentDraft
from store.workflows import new_id, now_iso, record_memory_usage, save_draft

console = Console()


@click.command()
@click.argument("topic")
@click.option(
    "--platform", "-p", default=Platform.LINKEDIN.value,
    type=click.Choice([p.value for p in Platform]),
)
@click.option("--focus", "-f", multiple=True, help="Memory types to prioritise (repeatable)")
@click.option("--memory", "-m", "memory_ids", multiple=True, help="Memory ids to build on (repeatable)")
@click.option("--product", "product_id", default=None, help="Product id to weave in")
@click.option("--source", default=None, help="Source material or context")
@click.option("--style", default=None, help="Reference post whose structure to borrow")
@click.option(
    "--framework", "framework_id", default=None,
    type=click.Choice([f.id for f in frameworks.FRAMEWORKS]),
    help="Blueprint to follow (see `authos frameworks`)",
)
@click.option(
    "--format", "format_id", default=None,
    type=click.Choice([f.id for f in frameworks.FORMATS]),
    help="Structure rules replacing the platform default",
)
@click.option("--humanize", is_flag=True, help="Run an extra editing pass")
@click.option("--save", is_flag=True, help="Save the result as a draft")
def write(
    topic, platform, focus, memory_ids, product_id, source, style, framework_id, format_id, humanize, save
):
    """Generate a content piece about TOPIC in your voice."""
    c = get_components()
    repo = c["repo"]
    writer = c["writer"]

    try:
        focus_types = [MemoryType(f.upper()) for f in focus]
    except ValueError as e:
        console.print(f"[red]Unknown memory type:[/] {e}")
        return

    profile = repo.load_profile()
    if not profile:
        console.print("[yellow]No profile found. Run [cyan]authos profile onboard[/] first.[/]")
        return

    memories = repo.list_memories()
    if memory_ids:
        wanted = set(memory_ids)
        memories = [m for m in memories if m.id in wanted] + [m for m in memories if m.id not in wanted]

    product = None
    if product_id:
        product = next((p for p in repo.list_products() if p.id == product_id), None)
        if product is None:
            console.print(f"[red]Product not found: {product_id}[/]")
            return

    with console.status("Writing..."):
        content = writer.generate_content(
            profile,
            memories,
            topic,
            platform,
            focus_types=focus_types or None,
            source_material=source,
            style_reference=style,
            product=product,
            framework=frameworks.get_framework(framework_id) if framework_id else None,
            content_format=frameworks.get_format(format_id) if format_id else None,
        )
        if content == GENERATION_FAILED:
            console.print(f"[red]{content}[/]")
            raise SystemExit(1)
        if humanize:
            content = writer.humanize(content, profile)

    console.print(Markdown(content))

    if memory_ids:
        record_memory_usage(repo, list(memory_ids))

    if save:
        d = ContentDraft(
            id=new_id("draft"),
            title=topic,
            content=content,
            platform=Platform(platform),
            date=now_iso(),
        )
        save_draft(repo, d)
        console.print(f"\n[green]Saved draft[/] [dim]({d.id})[/]")


@click.command("frameworks")
@click.option("--intention", "-i", default=None, type=click.Choice([i.id for i in frameworks.INTENTIONS]))
@click.option("--format", "format_id", default=None, type=click.Choice([f.id for f in frameworks.FORMATS]))
def list_frameworks(intention, format_id):
    """List content frameworks and the formats they suit."""
    matches = frameworks.frameworks_for(intention, format_id)
    if not matches:
        console.print("No frameworks match.")
        return

    table = Table(title="Frameworks")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Intention")
    table.add_column("Formats", style="dim")
    for f in matches:
        table.add_row(f.id, f.title, f.intention_id, ", ".join(f.format_ids))
    console.print(table)
