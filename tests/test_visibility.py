"""
Unit tests for the tool visibility policy (authentik_mcp/visibility.py).

should_expose() is a pure function of (access level, category, runtime
config). The properties checked here hold for every combination, so they
are exercised over the full grid rather than a handful of examples.
"""

import itertools
from dataclasses import dataclass

import pytest

from authentik_mcp.config import CATEGORIES, RuntimeConfig
from authentik_mcp.visibility import should_expose


@dataclass(frozen=True)
class Descriptor:
    access: str
    category: str


ACCESS_LEVELS = ("read-only", "full")
ALLOWLISTS = (None, frozenset({"core"}), frozenset({"core", "admin"}), frozenset())
DESCRIPTORS = [
    Descriptor(access, category)
    for access, category in itertools.product(ACCESS_LEVELS, sorted(CATEGORIES) + ["anything"])
]


class TestScenarios:
    def test_read_only_tier_hides_full_tool(self):
        runtime = RuntimeConfig(access_tier="read-only", categories=None)
        assert should_expose(Descriptor("full", "core"), runtime) is False

    def test_category_outside_allowlist_is_hidden(self):
        runtime = RuntimeConfig(access_tier="full", categories=frozenset({"core", "admin"}))
        assert should_expose(Descriptor("read-only", "flows"), runtime) is False

    def test_default_posture_exposes_everything(self):
        runtime = RuntimeConfig(access_tier="full", categories=None)
        assert should_expose(Descriptor("full", "anything"), runtime) is True

    def test_defaults_are_full_and_all_categories(self):
        assert RuntimeConfig() == RuntimeConfig(access_tier="full", categories=None)


class TestProperties:
    @pytest.mark.parametrize("categories", ALLOWLISTS)
    def test_full_tier_is_superset_of_read_only(self, categories):
        read_only = RuntimeConfig("read-only", categories)
        full = RuntimeConfig("full", categories)

        for descriptor in DESCRIPTORS:
            if should_expose(descriptor, read_only):
                assert should_expose(descriptor, full)

    @pytest.mark.parametrize("categories", ALLOWLISTS)
    def test_read_only_tools_ignore_tier(self, categories):
        for descriptor in DESCRIPTORS:
            if descriptor.access != "read-only":
                continue
            assert should_expose(descriptor, RuntimeConfig("read-only", categories)) == should_expose(
                descriptor, RuntimeConfig("full", categories)
            )

    @pytest.mark.parametrize("tier", ACCESS_LEVELS)
    def test_category_gate_does_not_change_tier_outcome(self, tier):
        for descriptor in DESCRIPTORS:
            tier_allows = should_expose(descriptor, RuntimeConfig(tier, None))
            allowlist = frozenset({descriptor.category})
            assert should_expose(descriptor, RuntimeConfig(tier, allowlist)) == tier_allows

    def test_empty_allowlist_hides_everything(self):
        runtime = RuntimeConfig("full", frozenset())
        assert not any(should_expose(descriptor, runtime) for descriptor in DESCRIPTORS)

    def test_decision_does_not_depend_on_evaluation_order(self):
        runtime = RuntimeConfig("read-only", frozenset({"core", "flows"}))

        forward = [should_expose(descriptor, runtime) for descriptor in DESCRIPTORS]
        backward = [should_expose(descriptor, runtime) for descriptor in reversed(DESCRIPTORS)]

        assert forward == list(reversed(backward))
