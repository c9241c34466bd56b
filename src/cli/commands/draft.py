"""Draft CLI commands: list, delete, schedule."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components
from store.workflows import delete_draft, schedule_draft

console = Console()


@click.group()
def draft():
    """Saved content drafts."""
    pass


@draft.command("list")
@click.option("--status", "-s", default=None, help="Filter by status (draft, scheduled, published)")
def draft_list(status: str | None):
    """List drafts, most recently edited first."""
    c = get_components(skip_writer=True)
    drafts = c["repo"].list_drafts()
    if status:
        drafts = [d for d in drafts if d.status == status]

    if not drafts:
        console.print("No drafts.")
        return

    table = Table(title="Drafts")
    table.add_column("ID", style="dim")
    table.add_column("Platform", width=10)
    table.add_column("Status", width=10)
    table.add_column("Title")
    table.add_column("When", style="cyan")
    for d in drafts:
        when = (d.scheduled_date or d.date)[:16]
        table.add_row(d.id, d.platform.value, d.status.value, d.title[:50], when)
    console.print(table)


@draft.command("delete")
@click.argument("draft_id")
def draft_delete(draft_id: str):
    """Delete a draft."""
    c = get_components(skip_writer=True)
    delete_draft(c["repo"], draft_id)
    console.print(f"Deleted {draft_id}")


@draft.command("schedule")
@click.argument("draft_id")
@click.argument("when", type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"]))
def draft_schedule(draft_id: str, when):
    """Schedule a draft for publishing at WHEN."""
    c = get_components(skip_writer=True)
    scheduled = schedule_draft(c["repo"], draft_id, when)
    if scheduled is None:
        console.print(f"[red]Draft not found: {draft_id}[/]")
        return
    console.print(f"[green]Scheduled[/] {scheduled.title} for {scheduled.scheduled_date}")
