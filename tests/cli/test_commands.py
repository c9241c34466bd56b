"""CLI command tests using Click CliRunner.

Strategy: patch get_components at each command module's import point so
commands run against a real repository on a temp Local Store and a mocked
Ghostwriter, never touching real config, network or API keys.
"""

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner
from helpers import make_draft, make_memory

from cli.config import load_session_token
from cli.config_models import AuthosConfig, PathsConfig
from cli.main import cli
from ghostwriter import GENERATION_FAILED
from shared_types import DraftStatus, MemoryType
from store import ContentRepository, RecordStoreError, Session

COMMAND_MODULES = ["auth", "profile", "memory", "product", "draft", "write", "chat", "voice"]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def writer():
    w = MagicMock()
    w.generate_content.return_value = "A post about focus"
    w.humanize.return_value = "A humanized post"
    w.chat_reply.return_value = "Try the contrarian angle."
    w.enrich_memory.return_value = {
        "title": "Quitting day",
        "type": "LESSON",
        "tags": ["career"],
        "emotionalTone": "Relief",
    }
    return w


@pytest.fixture
def components(tmp_path, local_store, writer):
    paths = PathsConfig(
        local_db=tmp_path / "local.db",
        session_file=tmp_path / "session.json",
        log_file=tmp_path / "authos.log",
    )
    return {
        "config_model": AuthosConfig(),
        "paths": paths,
        "local": local_store,
        "remote": None,
        "repo": ContentRepository(local_store),
        "writer": writer,
    }


@pytest.fixture
def patch_components(components):
    """Patch get_components in every command module."""

    def fake_get_components(skip_writer=False):
        c = dict(components)
        if skip_writer:
            c["writer"] = None
        return c

    patches = [
        patch(f"cli.commands.{name}.get_components", side_effect=fake_get_components)
        for name in COMMAND_MODULES
    ]
    patches.append(patch("cli.main.load_config_model", return_value=AuthosConfig()))
    for p in patches:
        p.start()
    yield components
    for p in patches:
        p.stop()


def _onboard(repo, sample_profile):
    from store.workflows import complete_onboarding

    complete_onboarding(repo, sample_profile)


# -- Session commands --


class TestSessionCommands:
    def test_status_local_only(self, runner, patch_components):
        result = runner.invoke(cli, ["status"])
        assert result.exit_code == 0
        assert "local only" in result.output
        assert "Memories: 0" in result.output
        assert "not set up" in result.output

    def test_status_synced(self, runner, patch_components, fake_remote, local_store):
        patch_components["remote"] = fake_remote
        patch_components["repo"] = ContentRepository(local_store, fake_remote)
        result = runner.invoke(cli, ["status"])
        assert result.exit_code == 0
        assert "synced" in result.output
        assert "user-1" in result.output

    def test_login_without_remote(self, runner, patch_components):
        result = runner.invoke(cli, ["login", "--email", "a@b.co", "--password", "pw"])
        assert result.exit_code == 1
        assert "not configured" in result.output

    def test_login_saves_session(self, runner, patch_components):
        remote = MagicMock()
        remote.sign_in.return_value = Session(
            user_id="u1", access_token="tok", refresh_token="r", email="a@b.co"
        )
        patch_components["remote"] = remote
        result = runner.invoke(cli, ["login", "--email", "a@b.co", "--password", "pw"])
        assert result.exit_code == 0
        assert "Signed in" in result.output
        remote.sign_in.assert_called_once_with("a@b.co", "pw")
        assert load_session_token(patch_components["paths"].session_file) == "tok"

    def test_login_failure(self, runner, patch_components):
        remote = MagicMock()
        remote.sign_in.side_effect = RecordStoreError("400 invalid_grant")
        patch_components["remote"] = remote
        result = runner.invoke(cli, ["login", "--email", "a@b.co", "--password", "bad"])
        assert result.exit_code == 1
        assert "Login failed" in result.output

    def test_logout_clears_session_even_if_remote_fails(self, runner, patch_components):
        session_file = patch_components["paths"].session_file
        session_file.write_text('{"access_token": "tok"}')
        remote = MagicMock()
        remote.sign_out.side_effect = RecordStoreError("offline")
        patch_components["remote"] = remote
        result = runner.invoke(cli, ["logout"])
        assert result.exit_code == 0
        assert not session_file.exists()

    def test_reset(self, runner, patch_components):
        patch_components["repo"].add_memory(make_memory("m1"))
        result = runner.invoke(cli, ["reset", "--yes"])
        assert result.exit_code == 0
        assert patch_components["repo"].list_memories() == []


# -- Profile commands --


class TestProfileCommands:
    def test_show_without_profile(self, runner, patch_components):
        result = runner.invoke(cli, ["profile", "show"])
        assert result.exit_code == 0
        assert "No profile found" in result.output

    def test_onboard(self, runner, patch_components):
        result = runner.invoke(
            cli,
            [
                "profile", "onboard",
                "--name", "Ana", "--niche", "SaaS", "--audience", "founders",
                "--tone", "direct", "--values", "honesty, craft", "--contrarian", "VC is optional",
            ],
        )
        assert result.exit_code == 0
        assert "My Core Values" in result.output

        repo = patch_components["repo"]
        profile = repo.load_profile()
        assert profile.onboarding_complete is True
        assert profile.values == ["honesty", "craft"]
        assert repo.list_memories()[0].content == "I value honesty, craft. I believe VC is optional."

    def test_set_and_show(self, runner, patch_components, sample_profile):
        patch_components["repo"].store_profile(sample_profile)
        result = runner.invoke(cli, ["profile", "set", "--tone", "playful", "--emoji", "heavy"])
        assert result.exit_code == 0
        assert "emoji_usage, tone" in result.output

        result = runner.invoke(cli, ["profile", "show"])
        assert "playful" in result.output
        assert "heavy" in result.output

    def test_set_nothing(self, runner, patch_components):
        result = runner.invoke(cli, ["profile", "set"])
        assert "Nothing to update" in result.output


# -- Memory commands --


class TestMemoryCommands:
    def test_add_and_list(self, runner, patch_components):
        result = runner.invoke(
            cli, ["memory", "add", "I shipped on a Friday", "--title", "Friday ship", "-t", "failure", "--tags", "a,b"]
        )
        assert result.exit_code == 0
        (m,) = patch_components["repo"].list_memories()
        assert m.type == MemoryType.FAILURE
        assert m.tags == ["a", "b"]

        result = runner.invoke(cli, ["memory", "list"])
        assert "Friday ship" in result.output

    def test_add_enriched(self, runner, patch_components, writer):
        result = runner.invoke(cli, ["memory", "add", "The day I quit", "--enrich"])
        assert result.exit_code == 0
        writer.enrich_memory.assert_called_once_with("The day I quit")
        (m,) = patch_components["repo"].list_memories()
        assert m.title == "Quitting day"
        assert m.type == MemoryType.LESSON
        assert m.emotional_tone == "Relief"

    def test_list_hides_voice_training(self, runner, patch_components):
        repo = patch_components["repo"]
        repo.add_memory(make_memory("s1", title="Visible story"))
        repo.add_memory(make_memory("v1", type=MemoryType.STYLE_REFERENCE, title="Hidden sample"))
        result = runner.invoke(cli, ["memory", "list"])
        assert "Visible story" in result.output
        assert "Hidden sample" not in result.output

        result = runner.invoke(cli, ["memory", "list", "--all"])
        assert "Hidden sample" in result.output

    def test_list_bad_type(self, runner, patch_components):
        result = runner.invoke(cli, ["memory", "list", "-t", "rant"])
        assert "Unknown type" in result.output

    def test_edit(self, runner, patch_components):
        patch_components["repo"].add_memory(make_memory("m1"))
        result = runner.invoke(cli, ["memory", "edit", "m1", "--content", "Edited", "--tags", "x"])
        assert result.exit_code == 0
        (m,) = patch_components["repo"].list_memories()
        assert m.content == "Edited"
        assert m.tags == ["x"]

    def test_edit_missing(self, runner, patch_components):
        result = runner.invoke(cli, ["memory", "edit", "ghost", "--content", "x"])
        assert "not found" in result.output

    def test_delete(self, runner, patch_components):
        patch_components["repo"].add_memory(make_memory("m1"))
        result = runner.invoke(cli, ["memory", "delete", "m1", "-y"])
        assert result.exit_code == 0
        assert patch_components["repo"].list_memories() == []

    def test_unused(self, runner, patch_components):
        repo = patch_components["repo"]
        repo.add_memory(make_memory("m1", title="Fresh one"))
        repo.add_memory(make_memory("m2", title="Used one", usage_count=4))
        result = runner.invoke(cli, ["memory", "unused"])
        assert "Fresh one" in result.output
        assert "Used one" not in result.output


# -- Product and draft commands --


class TestProductCommands:
    def test_add_list_delete(self, runner, patch_components):
        result = runner.invoke(cli, ["product", "add", "Course", "--link", "https://x.io"])
        assert result.exit_code == 0
        (p,) = patch_components["repo"].list_products()
        assert p.link == "https://x.io"

        result = runner.invoke(cli, ["product", "list"])
        assert "Course" in result.output

        runner.invoke(cli, ["product", "delete", p.id])
        assert patch_components["repo"].list_products() == []


class TestDraftCommands:
    def test_list_and_schedule(self, runner, patch_components):
        patch_components["repo"].save_drafts([make_draft("d1", title="Launch post")])
        result = runner.invoke(cli, ["draft", "list"])
        assert "Launch post" in result.output

        result = runner.invoke(cli, ["draft", "schedule", "d1", "2024-06-01 09:30"])
        assert result.exit_code == 0
        (d,) = patch_components["repo"].list_drafts()
        assert d.status == DraftStatus.SCHEDULED
        assert d.scheduled_date == "2024-06-01T09:30:00"

    def test_schedule_missing(self, runner, patch_components):
        result = runner.invoke(cli, ["draft", "schedule", "ghost", "2024-06-01"])
        assert "not found" in result.output

    def test_delete(self, runner, patch_components):
        patch_components["repo"].save_drafts([make_draft("d1"), make_draft("d2")])
        runner.invoke(cli, ["draft", "delete", "d1"])
        assert [d.id for d in patch_components["repo"].list_drafts()] == ["d2"]


# -- Generation commands --


class TestWriteCommand:
    def test_requires_profile(self, runner, patch_components, writer):
        result = runner.invoke(cli, ["write", "focus"])
        assert "No profile found" in result.output
        writer.generate_content.assert_not_called()

    def test_write_and_save(self, runner, patch_components, writer, sample_profile):
        repo = patch_components["repo"]
        _onboard(repo, sample_profile)
        repo.add_memory(make_memory("m1"))

        result = runner.invoke(
            cli, ["write", "focus", "-p", "twitter", "-f", "lesson", "-m", "m1", "--humanize", "--save"]
        )
        assert result.exit_code == 0
        assert "A humanized post" in result.output

        kwargs = writer.generate_content.call_args.kwargs
        assert kwargs["focus_types"] == [MemoryType.LESSON]
        args = writer.generate_content.call_args.args
        assert args[1][0].id == "m1"
        assert args[2:] == ("focus", "twitter")

        (d,) = repo.list_drafts()
        assert d.content == "A humanized post"
        assert d.title == "focus"
        m1 = next(m for m in repo.list_memories() if m.id == "m1")
        assert m1.usage_count == 1

    def test_generation_failure(self, runner, patch_components, writer, sample_profile):
        _onboard(patch_components["repo"], sample_profile)
        writer.generate_content.return_value = GENERATION_FAILED
        result = runner.invoke(cli, ["write", "focus", "--save"])
        assert result.exit_code == 1
        assert patch_components["repo"].list_drafts() == []

    def test_unknown_product(self, runner, patch_components, sample_profile):
        _onboard(patch_components["repo"], sample_profile)
        result = runner.invoke(cli, ["write", "focus", "--product", "ghost"])
        assert "Product not found" in result.output

    def test_framework_and_format(self, runner, patch_components, writer, sample_profile):
        _onboard(patch_components["repo"], sample_profile)
        result = runner.invoke(
            cli, ["write", "burnout", "--framework", "scars-to-stars", "--format", "li_long"]
        )
        assert result.exit_code == 0
        kwargs = writer.generate_content.call_args.kwargs
        assert kwargs["framework"].id == "scars-to-stars"
        assert kwargs["content_format"].label == "LinkedIn Long"

    def test_unknown_framework_rejected(self, runner, patch_components, writer):
        result = runner.invoke(cli, ["write", "t", "--framework", "nope"])
        assert result.exit_code == 2
        writer.generate_content.assert_not_called()


class TestFrameworksCommand:
    def test_lists_catalog(self, runner, patch_components):
        result = runner.invoke(cli, ["frameworks"])
        assert result.exit_code == 0
        assert "unpopular-opinion" in result.output

    def test_filter_by_format(self, runner, patch_components):
        result = runner.invoke(cli, ["frameworks", "--format", "ig_carousel"])
        assert "how-to-guide" in result.output
        assert "unpopular-opinion" not in result.output


class TestChatCommand:
    def test_chat_stores_history(self, runner, patch_components, writer, sample_profile):
        repo = patch_components["repo"]
        _onboard(repo, sample_profile)
        result = runner.invoke(cli, ["chat", "What should I post?"])
        assert result.exit_code == 0
        assert "contrarian angle" in result.output

        history = repo.load_chat_history()
        assert [m.text for m in history] == ["What should I post?", "Try the contrarian angle."]

        runner.invoke(cli, ["chat", "And then?"])
        prior = writer.chat_reply.call_args.args[0]
        assert len(prior) == 2

    def test_clear(self, runner, patch_components, sample_profile):
        repo = patch_components["repo"]
        _onboard(repo, sample_profile)
        runner.invoke(cli, ["chat", "hi"])
        result = runner.invoke(cli, ["chat", "clear"])
        assert "cleared" in result.output
        assert repo.load_chat_history() == []


class TestVoiceCommands:
    def test_set_and_show(self, runner, patch_components):
        result = runner.invoke(cli, ["voice", "set", "jargon", "ship it"])
        assert result.exit_code == 0
        (m,) = patch_components["repo"].list_memories()
        assert m.type == MemoryType.STYLE_REFERENCE
        assert "voice_jargon" in m.tags

        result = runner.invoke(cli, ["voice", "show"])
        assert "ship it" in result.output

    def test_bad_setting(self, runner, patch_components):
        result = runner.invoke(cli, ["voice", "set", "volume", "loud"])
        assert result.exit_code != 0
