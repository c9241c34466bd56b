"""Session CLI commands: login, logout, status, reset."""

import click
import structlog
from rich.console import Console

from cli.config import clear_session, save_session
from cli.utils import get_components
from store import Authenticated, RecordStoreError

console = Console()
logger = structlog.get_logger()


@click.command()
@click.option("--email", prompt=True)
@click.option("--password", prompt=True, hide_input=True)
def login(email: str, password: str):
    """Sign in to the hosted record store."""
    c = get_components(skip_writer=True)
    remote = c["remote"]
    if remote is None:
        console.print(
            "[red]Remote store not configured.[/] Set record_store.url and "
            "record_store.anon_key (or SUPABASE_URL / SUPABASE_ANON_KEY)."
        )
        raise SystemExit(1)

    try:
        session = remote.sign_in(email, password)
    except RecordStoreError as e:
        console.print(f"[red]Login failed:[/] {e}")
        raise SystemExit(1)

    save_session(
        c["paths"].session_file,
        {
            "access_token": session.access_token,
            "refresh_token": session.refresh_token,
            "user_id": session.user_id,
            "email": session.email,
        },
    )
    console.print(f"[green]Signed in[/] as {session.email or session.user_id}")


@click.command()
def logout():
    """Sign out and forget the saved session."""
    c = get_components(skip_writer=True)
    remote = c["remote"]
    if remote is not None:
        try:
            remote.sign_out()
        except RecordStoreError as e:
            logger.warning("cli.sign_out_failed", error=str(e))
    clear_session(c["paths"].session_file)
    console.print("Signed out. Local data is kept on this device.")


@click.command()
def status():
    """Show storage mode and how much is stored."""
    c = get_components(skip_writer=True)
    repo = c["repo"]

    state = repo.auth_state()
    if isinstance(state, Authenticated):
        console.print(f"Mode: [green]synced[/] (user {state.user_id})")
    elif c["remote"] is None:
        console.print("Mode: [yellow]local only[/] (no remote store configured)")
    else:
        console.print("Mode: [yellow]local only[/] (signed out, run [cyan]authos login[/])")
    console.print(f"[dim]Local store: {c['paths'].local_db}[/]")

    profile = repo.load_profile()
    if profile:
        console.print(f"Profile: {profile.name or 'unnamed'}")
    else:
        console.print("Profile: not set up")
    console.print(f"Memories: {len(repo.list_memories())}")
    console.print(f"Products: {len(repo.list_products())}")
    console.print(f"Drafts: {len(repo.list_drafts())}")


@click.command()
@click.confirmation_option(prompt="Delete all data stored on this device?")
def reset():
    """Wipe this device's copy of every collection. Remote rows are untouched."""
    c = get_components(skip_writer=True)
    c["repo"].clear_all_data()
    console.print("[green]Local data cleared.[/]")
