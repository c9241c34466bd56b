"""Memory CLI commands: list, add, edit, delete, unused."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components
from shared_types import MemoryType
from store import Memory
from store.workflows import memory_bank, new_id, now_iso, unused_memories

console = Console()


def _print_memories(memories: list[Memory], title: str):
    if not memories:
        console.print("No memories stored.")
        return

    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Type", width=10)
    table.add_column("Title")
    table.add_column("Tags", style="dim")
    table.add_column("Used", width=4, justify="right")

    for m in memories:
        table.add_row(m.id, m.type.value, m.title[:50], ", ".join(m.tags[:3]), str(m.usage_count or 0))

    console.print(table)


@click.group()
def memory():
    """Memory bank: the stories, beliefs and lessons your content draws on."""
    pass


@memory.command("list")
@click.option("--type", "-t", "memory_type", default=None, help="Filter by memory type")
@click.option("--all", "show_all", is_flag=True, help="Include voice training entries")
def memory_list(memory_type: str | None, show_all: bool):
    """List memories, newest first."""
    c = get_components(skip_writer=True)
    memories = c["repo"].list_memories()
    if not show_all:
        memories = memory_bank(memories)

    if memory_type:
        try:
            wanted = MemoryType(memory_type.upper())
        except ValueError:
            console.print(f"[red]Unknown type: {memory_type}[/]")
            console.print(f"Valid: {[t.value for t in MemoryType]}")
            return
        memories = [m for m in memories if m.type == wanted]

    _print_memories(memories, "Memory Bank")


@memory.command("add")
@click.argument("content")
@click.option("--title", default=None)
@click.option("--type", "-t", "memory_type", default=None, help="Memory type (default STORY)")
@click.option("--tags", default=None, help="Comma-separated tags")
@click.option("--tone", default=None, help="Emotional tone")
@click.option("--enrich", is_flag=True, help="Let the model suggest title, type, tags and tone")
def memory_add(content, title, memory_type, tags, tone, enrich):
    """Add a memory to the bank."""
    c = get_components(skip_writer=not enrich)

    suggested = {}
    if enrich:
        with console.status("Analyzing memory..."):
            suggested = c["writer"].enrich_memory(content)

    try:
        resolved_type = MemoryType((memory_type or suggested.get("type") or "STORY").upper())
    except ValueError:
        console.print(f"[red]Unknown type: {memory_type}[/]")
        return

    tag_list = [t.strip() for t in tags.split(",") if t.strip()] if tags else suggested.get("tags", [])
    memory = Memory(
        id=new_id("mem"),
        type=resolved_type,
        title=title or suggested.get("title") or content[:40],
        content=content,
        tags=tag_list,
        created_at=now_iso(),
        emotional_tone=tone or suggested.get("emotionalTone"),
    )
    c["repo"].add_memory(memory)
    console.print(f"[green]Added:[/] {memory.title} [dim]({memory.id})[/]")


@memory.command("edit")
@click.argument("memory_id")
@click.option("--title", default=None)
@click.option("--content", default=None)
@click.option("--tags", default=None, help="Comma-separated tags (replaces existing)")
@click.option("--tone", default=None)
def memory_edit(memory_id, title, content, tags, tone):
    """Edit a memory's title, content, tags or tone."""
    c = get_components(skip_writer=True)
    repo = c["repo"]
    existing = next((m for m in repo.list_memories() if m.id == memory_id), None)
    if not existing:
        console.print(f"[red]Memory not found: {memory_id}[/]")
        return

    updates = {"title": title, "content": content, "emotional_tone": tone}
    if tags is not None:
        updates["tags"] = [t.strip() for t in tags.split(",") if t.strip()]
    updates = {k: v for k, v in updates.items() if v is not None}
    if not updates:
        console.print("[yellow]Nothing to update.[/]")
        return

    repo.update_memory(existing.model_copy(update=updates))
    console.print(f"[green]Updated:[/] {memory_id}")


@memory.command("delete")
@click.argument("memory_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def memory_delete(memory_id: str, yes: bool):
    """Delete a memory."""
    if not yes and not click.confirm(f"Delete memory {memory_id}?"):
        return
    c = get_components(skip_writer=True)
    c["repo"].delete_memory(memory_id)
    console.print(f"Deleted {memory_id}")


@memory.command("unused")
def memory_unused():
    """Memories no generated piece has drawn on yet."""
    c = get_components(skip_writer=True)
    _print_memories(unused_memories(c["repo"].list_memories()), "Unused Memories")
