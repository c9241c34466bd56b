"""Shared test fixtures for AuthOS."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add src (and this directory, for helpers) to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from helpers import FakeRecordStore  # noqa: E402
from store.local import LocalStore  # noqa: E402
from store.models import UserProfile  # noqa: E402
from store.remote import Session  # noqa: E402
from store.repository import ContentRepository  # noqa: E402


@pytest.fixture
def local_store(tmp_path):
    return LocalStore(tmp_path / "local.db")


@pytest.fixture
def fake_remote():
    return FakeRecordStore(session=Session(user_id="user-1", access_token="token-1"))


@pytest.fixture
def local_repo(local_store):
    """Repository with no remote configured."""
    return ContentRepository(local_store)


@pytest.fixture
def synced_repo(local_store, fake_remote):
    """Repository signed in as user-1 against the fake remote."""
    return ContentRepository(local_store, fake_remote)


@pytest.fixture
def sample_profile():
    return UserProfile(
        name="Ana",
        niche="bootstrapped SaaS",
        audience="indie founders",
        tone="direct",
        values=["honesty", "craft"],
        contrarian_views=["funding is a distraction"],
        onboarding_complete=True,
    )


@pytest.fixture
def mock_provider():
    """LLM provider double; set .generate.return_value / side_effect per test."""
    provider = MagicMock()
    provider.provider_name = "mock"
    provider.generate.return_value = "mocked reply"
    return provider
