"""Profile CLI commands."""

import click
from rich.console import Console

from cli.utils import get_components
from shared_types import EmojiUsage
from store import UserProfile
from store.workflows import complete_onboarding

console = Console()


def _split(value: str | None) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()] if value else []


@click.group()
def profile():
    """View and manage your creator profile."""
    pass


@profile.command("show")
def profile_show():
    """View current profile."""
    c = get_components(skip_writer=True)
    p = c["repo"].load_profile()
    if not p:
        console.print("[yellow]No profile found. Run [cyan]authos profile onboard[/] to create one.[/]")
        return

    console.print(f"\n[cyan bold]{p.name or 'Unnamed creator'}[/] ({p.niche or 'no niche'})")
    if p.audience:
        console.print(f"[bold]Audience:[/] {p.audience}")
    if p.tone:
        console.print(f"[bold]Tone:[/] {p.tone}")
    console.print(f"[bold]Emoji usage:[/] {p.emoji_usage}")
    if p.values:
        console.print(f"[bold]Values:[/] {', '.join(p.values)}")
    if p.contrarian_views:
        console.print(f"[bold]Contrarian views:[/] {', '.join(p.contrarian_views)}")
    if p.voice_analysis:
        console.print(f"\n[dim]Voice: {p.voice_analysis}[/]")
    if not p.onboarding_complete:
        console.print("[yellow]Onboarding not finished.[/]")


@profile.command("set")
@click.option("--name")
@click.option("--niche")
@click.option("--audience")
@click.option("--tone")
@click.option("--emoji", type=click.Choice([e.value for e in EmojiUsage]))
@click.option("--values", help="Comma-separated")
@click.option("--contrarian", help="Comma-separated contrarian views")
@click.option("--voice", "voice_analysis", help="Free-form voice analysis")
def profile_set(name, niche, audience, tone, emoji, values, contrarian, voice_analysis):
    """Update individual profile fields."""
    c = get_components(skip_writer=True)
    repo = c["repo"]
    current = repo.load_profile() or UserProfile()

    updates = {
        "name": name,
        "niche": niche,
        "audience": audience,
        "tone": tone,
        "emoji_usage": EmojiUsage(emoji) if emoji else None,
        "values": _split(values) if values is not None else None,
        "contrarian_views": _split(contrarian) if contrarian is not None else None,
        "voice_analysis": voice_analysis,
    }
    updates = {k: v for k, v in updates.items() if v is not None}
    if not updates:
        console.print("[yellow]Nothing to update.[/]")
        return

    repo.store_profile(current.model_copy(update=updates))
    console.print(f"[green]Profile updated:[/] {', '.join(sorted(updates))}")


@profile.command("onboard")
@click.option("--name", prompt="Your name")
@click.option("--niche", prompt="Your niche")
@click.option("--audience", prompt="Who you write for")
@click.option("--tone", prompt="Your tone", default="conversational")
@click.option("--values", prompt="Core values (comma-separated)")
@click.option("--contrarian", prompt="A belief most people in your niche disagree with", default="")
def profile_onboard(name, niche, audience, tone, values, contrarian):
    """Create the profile and seed the memory bank with your core values."""
    c = get_components(skip_writer=True)
    p = UserProfile(
        name=name,
        niche=niche,
        audience=audience,
        tone=tone,
        values=_split(values),
        contrarian_views=_split(contrarian),
    )
    memory = complete_onboarding(c["repo"], p)
    console.print(f"[green]Welcome, {name}![/] Saved your profile and first memory: {memory.title}")
