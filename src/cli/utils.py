"""Shared CLI utilities."""

import sys

import structlog
from rich.console import Console

console = Console()
logger = structlog.get_logger()


def build_record_store(config_model, access_token: str | None = None):
    """PostgrestRecordStore when remote credentials are configured, else None."""
    from store import PostgrestRecordStore

    rs = config_model.record_store
    if not rs.is_configured:
        return None
    return PostgrestRecordStore(rs.url, rs.anon_key, access_token=access_token, timeout=rs.timeout)


def build_writer(config_model):
    """Ghostwriter over the configured LLM provider. Raises LLMError without a key."""
    from ghostwriter import Ghostwriter, TextGenerationService
    from llm import create_llm_provider

    llm_cfg = config_model.llm
    provider = create_llm_provider(
        provider=llm_cfg.provider, api_key=llm_cfg.api_key, model=llm_cfg.model
    )
    service = TextGenerationService(
        provider, max_tokens=llm_cfg.max_tokens, temperature=llm_cfg.temperature
    )
    return Ghostwriter(service, language=config_model.language)


def get_components(skip_writer: bool = False):
    """Initialize all components from config.

    Args:
        skip_writer: If True, skip LLM init (for commands that don't generate text)
    """
    from cli.config import load_config_model, load_session_token
    from llm import LLMError
    from store import ContentRepository, LocalStore

    config_model = load_config_model()
    paths = config_model.paths

    local = LocalStore(paths.local_db)
    remote = build_record_store(config_model, load_session_token(paths.session_file))
    repo = ContentRepository(local, remote)

    writer = None
    if not skip_writer:
        try:
            writer = build_writer(config_model)
        except LLMError as e:
            console.print(f"[red]Config error:[/] {e}")
            sys.exit(1)

    return {
        "config_model": config_model,
        "paths": paths,
        "local": local,
        "remote": remote,
        "repo": repo,
        "writer": writer,
    }
