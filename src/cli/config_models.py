"""Pydantic configuration models for AuthOS."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from shared_types import Language
from store.remote import remote_configured

VALID_LLM_PROVIDERS = {"auto", "gemini"}


def _expand_env(value: Optional[str]) -> Optional[str]:
    """Resolve a ``${VAR}`` placeholder from the environment."""
    if value and value.startswith("${") and value.endswith("}"):
        return os.getenv(value[2:-1], "")
    return value


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = "auto"
    model: Optional[str] = None  # None = provider default
    api_key: Optional[str] = None
    temperature: float = 0.85
    max_tokens: int = 4000

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        if v not in VALID_LLM_PROVIDERS:
            raise ValueError(f"Invalid LLM provider: {v}. Must be one of {VALID_LLM_PROVIDERS}")
        return v

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError(f"temperature must be 0-2, got {v}")
        return v


class RecordStoreConfig(BaseModel):
    """Hosted record store credentials. Empty = local-only mode."""

    url: Optional[str] = None
    anon_key: Optional[str] = None
    timeout: float = 15.0

    @property
    def is_configured(self) -> bool:
        return remote_configured(self.url, self.anon_key)


class PathsConfig(BaseModel):
    """File paths configuration."""

    local_db: Path = Path("~/authos/local.db")
    session_file: Path = Path("~/authos/session.json")
    log_file: Path = Path("~/authos/authos.log")

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.local_db = self.local_db.expanduser()
        self.session_file = self.session_file.expanduser()
        self.log_file = self.log_file.expanduser()
        return self


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = False
    to_file: bool = False  # also write JSON lines to paths.log_file

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class AuthosConfig(BaseModel):
    """Main configuration model."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    record_store: RecordStoreConfig = Field(default_factory=RecordStoreConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    language: Language = Language.EN

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand ${VAR} secrets; remote credentials fall back to SUPABASE_* env."""
        self.llm.api_key = _expand_env(self.llm.api_key)
        self.record_store.url = _expand_env(self.record_store.url) or os.getenv("SUPABASE_URL")
        self.record_store.anon_key = _expand_env(self.record_store.anon_key) or os.getenv(
            "SUPABASE_ANON_KEY"
        )
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "AuthosConfig":
        if "paths" in data:
            for key in ["local_db", "session_file", "log_file"]:
                if key in data["paths"] and isinstance(data["paths"][key], str):
                    data["paths"][key] = Path(data["paths"][key])
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
