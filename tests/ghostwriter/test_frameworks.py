"""Tests for the guided-creation catalog."""

import pytest

from ghostwriter import frameworks
from shared_types import MemoryType


def test_framework_references_resolve():
    intentions = {i.id for i in frameworks.INTENTIONS}
    for framework in frameworks.FRAMEWORKS:
        assert framework.intention_id in intentions
        for format_id in framework.format_ids:
            frameworks.get_format(format_id)
        frameworks.focus_types_for(framework)


def test_focus_types():
    assert frameworks.focus_types_for(frameworks.get_framework("scars-to-stars")) == [
        MemoryType.FAILURE,
        MemoryType.LESSON,
    ]
    assert frameworks.focus_types_for(frameworks.get_framework("how-to-guide")) == []


def test_frameworks_for_filters():
    ids = [f.id for f in frameworks.frameworks_for(intention_id="polarize")]
    assert ids == ["unpopular-opinion", "stop-doing-this"]
    ids = [f.id for f in frameworks.frameworks_for(format_id="ig_carousel")]
    assert ids == ["how-to-guide"]


def test_unknown_ids():
    with pytest.raises(KeyError):
        frameworks.get_framework("nope")
    with pytest.raises(KeyError):
        frameworks.get_format("fax")


def test_rule_blocks():
    assert frameworks.format_rules(frameworks.get_format("blog")).startswith(
        "STRICT FORMATTING RULES (Blog Article):"
    )
    assert "THE SIMPLIFIER" in frameworks.framework_blueprint(frameworks.get_framework("complex-simple"))
