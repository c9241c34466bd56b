"""Voice DNA CLI commands."""

import click
from rich.console import Console

from cli.utils import get_components
from ghostwriter.prompts import VOICE_LABELS, voice_dna
from store.workflows import save_voice_setting

console = Console()

_SHORT_NAMES = {tag.removeprefix("voice_"): tag for tag in VOICE_LABELS}


@click.group()
def voice():
    """Voice DNA: jargon, audience name, intensity and sacred words."""
    pass


@voice.command("set")
@click.argument("setting", type=click.Choice(sorted(_SHORT_NAMES)))
@click.argument("content")
def voice_set(setting: str, content: str):
    """Set one voice DNA SETTING to CONTENT."""
    c = get_components(skip_writer=True)
    save_voice_setting(c["repo"], _SHORT_NAMES[setting], content)
    console.print(f"[green]Saved[/] {setting}")


@voice.command("show")
def voice_show():
    """Show the stored voice DNA."""
    c = get_components(skip_writer=True)
    dna = voice_dna(c["repo"].list_memories())
    if not dna:
        console.print("No voice settings yet. Try [cyan]authos voice set jargon \"...\"[/]")
        return
    for tag, value in dna.items():
        console.print(f"[bold]{VOICE_LABELS[tag]}:[/] {value}")
