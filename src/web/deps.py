"""Dependency injection for FastAPI routes."""

from functools import lru_cache
from typing import Iterator, Optional

import structlog
from fastapi import Depends, HTTPException

from cli.config import load_config_model
from cli.utils import build_record_store, build_writer
from ghostwriter import Ghostwriter
from llm import LLMError
from store import ContentRepository, LocalStore
from web.auth import get_access_token

logger = structlog.get_logger()


@lru_cache
def get_config():
    """Load shared config (./config.yaml or ~/.authos/config.yaml)."""
    return load_config_model()


@lru_cache
def get_local_store() -> LocalStore:
    return LocalStore(get_config().paths.local_db)


def get_repository(
    access_token: Optional[str] = Depends(get_access_token),
) -> Iterator[ContentRepository]:
    """Repository for one request. A bearer token selects the remote session."""
    remote = build_record_store(get_config(), access_token) if access_token else None
    try:
        yield ContentRepository(get_local_store(), remote)
    finally:
        if remote is not None:
            remote.close()


@lru_cache
def get_writer() -> Ghostwriter:
    try:
        return build_writer(get_config())
    except LLMError as e:
        logger.warning("web.writer_unavailable", error=str(e))
        raise HTTPException(status_code=503, detail=str(e))
