"""AuthOS command line."""

import sys
from pathlib import Path

import click
from rich.console import Console

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.commands import (
    chat,
    draft,
    list_frameworks,
    login,
    logout,
    memory,
    product,
    profile,
    reset,
    status,
    voice,
    write,
)
from cli.config import load_config_model
from cli.logging_config import setup_logging

console = Console()


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """AuthOS - ghostwriting from your own stories, beliefs and voice."""
    try:
        config_model = load_config_model()
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)

    log_cfg = config_model.logging
    setup_logging(
        json_mode=log_cfg.json_mode,
        level="DEBUG" if verbose else log_cfg.level,
        log_file=config_model.paths.log_file if log_cfg.to_file else None,
    )


for command in (
    login, logout, status, reset, profile, memory, product, draft, write, list_frameworks, chat, voice
):
    cli.add_command(command)


if __name__ == "__main__":
    cli()
