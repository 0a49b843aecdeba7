"""
The complete tool catalog.

Each family module exposes one register_*_tools(registry, client) function
that feeds its descriptors to the registry. The order below is the order the
tools appear in tools/list.
"""

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.admin import register_admin_tools
from authentik_mcp.tools.applications import register_application_tools
from authentik_mcp.tools.authenticators import register_authenticator_tools
from authentik_mcp.tools.brands import register_brand_tools
from authentik_mcp.tools.crypto import register_crypto_tools
from authentik_mcp.tools.enterprise import register_enterprise_tools
from authentik_mcp.tools.events import register_event_tools
from authentik_mcp.tools.flows import register_flow_tools
from authentik_mcp.tools.groups import register_group_tools
from authentik_mcp.tools.managed import register_managed_tools
from authentik_mcp.tools.oauth2 import register_oauth2_tools
from authentik_mcp.tools.outposts import register_outpost_tools
from authentik_mcp.tools.policies import register_policy_tools
from authentik_mcp.tools.property_mappings import register_property_mapping_tools
from authentik_mcp.tools.providers import register_provider_tools
from authentik_mcp.tools.rac import register_rac_tools
from authentik_mcp.tools.rbac import register_rbac_tools
from authentik_mcp.tools.root import register_root_tools
from authentik_mcp.tools.sources import register_source_tools
from authentik_mcp.tools.ssf import register_ssf_tools
from authentik_mcp.tools.stages import register_stage_tools
from authentik_mcp.tools.tasks import register_task_tools
from authentik_mcp.tools.tenants import register_tenant_tools
from authentik_mcp.tools.tokens import register_token_tools
from authentik_mcp.tools.users import register_user_tools

FAMILIES = (
    register_user_tools,
    register_group_tools,
    register_application_tools,
    register_token_tools,
    register_brand_tools,
    register_admin_tools,
    register_task_tools,
    register_root_tools,
    register_flow_tools,
    register_stage_tools,
    register_provider_tools,
    register_policy_tools,
    register_source_tools,
    register_property_mapping_tools,
    register_rbac_tools,
    register_event_tools,
    register_crypto_tools,
    register_outpost_tools,
    register_managed_tools,
    register_oauth2_tools,
    register_authenticator_tools,
    register_enterprise_tools,
    register_rac_tools,
    register_ssf_tools,
    register_tenant_tools,
)


def register_all_tools(registry: ToolRegistry, client: AuthentikClient) -> int:
    """Register every visible tool. Returns how many were registered."""
    for register in FAMILIES:
        register(registry, client)
    return len(registry.registered)
