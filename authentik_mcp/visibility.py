"""
Tool visibility policy.

Decides whether a tool exists at all from the agent's point of view. Two
independent filters must both pass:

- **Access tier**: tools are declared "read-only" (they never modify authentik)
  or "full" (they create, change or delete something). A server started with
  AUTHENTIK_ACCESS_TIER=read-only never registers a "full" tool.
- **Category**: every tool belongs to one category (e.g. "core", "flows").
  If AUTHENTIK_CATEGORIES is set, tools outside the listed categories are
  never registered.

The default posture is full exposure; both filters are opt-in restrictions.

Example (tier, categories) and what a descriptor needs to be visible:
    ("full", None)              -> every tool
    ("read-only", None)         -> read-only tools of any category
    ("full", {"core"})          -> any tool in "core"
    ("read-only", {"core"})     -> read-only tools in "core"
"""

from typing import Protocol

from authentik_mcp.config import AccessTier, RuntimeConfig


class Classified(Protocol):
    access: AccessTier
    category: str


def should_expose(descriptor: Classified, runtime: RuntimeConfig) -> bool:
    if descriptor.access == "full" and runtime.access_tier == "read-only":
        return False
    if runtime.categories is not None and descriptor.category not in runtime.categories:
        return False
    return True
