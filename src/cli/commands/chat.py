"""Chat CLI command: a conversation grounded in the memory bank."""

import time

import click
from rich.console import Console
from rich.markdown import Markdown

from cli.utils import get_components
from shared_types import ChatRole
from store import ChatMessage

console = Console()


@click.command()
@click.argument("message")
@click.option("--news", default=None, help="Headline to newsjack")
def chat(message: str, news: str | None):
    """Send MESSAGE to the assistant. `authos chat clear` forgets the history."""
    if message.strip().lower() == "clear":
        c = get_components(skip_writer=True)
        c["repo"].clear_chat_history()
        console.print("Chat history cleared.")
        return

    c = get_components()
    repo = c["repo"]
    profile = repo.load_profile()
    if not profile:
        console.print("[yellow]No profile found. Run [cyan]authos profile onboard[/] first.[/]")
        return

    history = repo.load_chat_history()
    with console.status("Thinking..."):
        reply = c["writer"].chat_reply(history, message, profile, repo.list_memories(), news_title=news)

    now = int(time.time() * 1000)
    history = history + [
        ChatMessage(role=ChatRole.USER, text=message, timestamp=now),
        ChatMessage(role=ChatRole.MODEL, text=reply, timestamp=now),
    ]
    repo.store_chat_history(history)
    console.print(Markdown(reply))
