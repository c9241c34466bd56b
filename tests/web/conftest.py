"""Shared fixtures for web API tests."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from cli.config_models import AuthosConfig
from store import ContentRepository


@pytest.fixture
def writer():
    w = MagicMock()
    w.generate_content.return_value = "Generated post"
    w.humanize.return_value = "Humanized post"
    w.chat_reply.return_value = "Model reply"
    w.enrich_memory.return_value = {
        "title": "Enriched",
        "type": "FACT",
        "tags": ["auto"],
        "emotionalTone": "Calm",
    }
    return w


@pytest.fixture
def repo(local_store):
    return ContentRepository(local_store)


@pytest.fixture
def client(repo, writer):
    """Test client on a temp Local Store with a mocked Ghostwriter."""
    from web.app import app
    from web.deps import get_repository, get_writer

    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_writer] = lambda: writer
    patches = [
        patch("web.app.get_config", return_value=AuthosConfig()),
        patch("web.routes.memories.get_writer", return_value=writer),
    ]
    for p in patches:
        p.start()

    yield TestClient(app)

    for p in reversed(patches):
        p.stop()
    app.dependency_overrides.clear()


@pytest.fixture
def onboarded(client, sample_profile):
    res = client.post("/api/profile/onboarding", json=sample_profile.to_local())
    assert res.status_code == 200
    return res.json()
