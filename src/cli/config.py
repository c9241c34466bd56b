"""Configuration loading and session persistence."""

import json
from pathlib import Path
from typing import Optional

import structlog
import yaml

from .config_models import AuthosConfig

logger = structlog.get_logger()


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / ".authos" / "config.yaml",
        Path.home() / "authos" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config_model(config_path: Optional[Path] = None) -> AuthosConfig:
    """Load configuration as Pydantic model with validation."""
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    try:
        return AuthosConfig.from_dict(base_config)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")


def load_session_token(session_file: Path) -> Optional[str]:
    """Saved access token from `authos login`, if any."""
    if not session_file.exists():
        return None
    try:
        data = json.loads(session_file.read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("session_file.unreadable", path=str(session_file), error=str(e))
        return None
    return data.get("access_token")


def save_session(session_file: Path, data: dict) -> None:
    session_file.parent.mkdir(parents=True, exist_ok=True)
    session_file.write_text(json.dumps(data))
    session_file.chmod(0o600)


def clear_session(session_file: Path) -> None:
    session_file.unlink(missing_ok=True)
