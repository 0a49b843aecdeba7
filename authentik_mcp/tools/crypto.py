"""Certificate keypair tools (category: crypto)."""

from typing import Annotated

from pydantic import Field

from authentik_mcp.client import AuthentikClient
from authentik_mcp.registry import ToolRegistry
from authentik_mcp.tools.common import Ordering, Page, PageSize, Search, fields, to_json

KeypairUuid = Annotated[str, Field(description="Certificate keypair UUID")]

RESOURCE = "certificatekeypairs"


def register_crypto_tools(registry: ToolRegistry, client: AuthentikClient) -> None:
    tool = registry.tool

    @tool("authentik_crypto_list", "List certificate keypairs with optional filters.", category="crypto")
    async def crypto_list(
        name: Annotated[str | None, Field(description="Filter by exact name")] = None,
        has_key: Annotated[
            bool | None, Field(description="Filter by whether keypair has a private key")
        ] = None,
        search: Search = None,
        ordering: Ordering = None,
        page: Page = None,
        page_size: PageSize = None,
    ) -> str:
        result = await client.crypto.list(
            RESOURCE,
            name=name,
            has_key=has_key,
            search=search,
            ordering=ordering,
            page=page,
            page_size=page_size,
        )
        return to_json(result)

    @tool("authentik_crypto_get", "Get a single certificate keypair by its UUID.", category="crypto")
    async def crypto_get(kp_uuid: KeypairUuid) -> str:
        return to_json(await client.crypto.retrieve(RESOURCE, kp_uuid))

    @tool(
        "authentik_crypto_create",
        "Create a new certificate keypair from PEM-encoded certificate and optional private key data.",
        category="crypto",
        access="full",
    )
    async def crypto_create(
        name: Annotated[str, Field(description="Keypair name")],
        certificate_data: Annotated[str, Field(description="PEM-encoded certificate data")],
        key_data: Annotated[
            str | None, Field(description="PEM-encoded private key data (enables encryption)")
        ] = None,
    ) -> str:
        body = fields(name=name, certificate_data=certificate_data, key_data=key_data)
        return to_json(await client.crypto.create(RESOURCE, body))

    @tool(
        "authentik_crypto_update",
        "Update an existing certificate keypair. Only provided fields are modified (partial update).",
        category="crypto",
        access="full",
    )
    async def crypto_update(
        kp_uuid: KeypairUuid,
        name: Annotated[str | None, Field(description="New keypair name")] = None,
        certificate_data: Annotated[
            str | None, Field(description="New PEM-encoded certificate data")
        ] = None,
        key_data: Annotated[str | None, Field(description="New PEM-encoded private key data")] = None,
    ) -> str:
        body = fields(name=name, certificate_data=certificate_data, key_data=key_data)
        return to_json(await client.crypto.partial_update(RESOURCE, kp_uuid, body))

    @tool(
        "authentik_crypto_delete",
        "Delete a certificate keypair by its UUID. This action is irreversible.",
        category="crypto",
        access="full",
        destructive=True,
    )
    async def crypto_delete(kp_uuid: KeypairUuid) -> str:
        await client.crypto.destroy(RESOURCE, kp_uuid)
        return f'Certificate keypair "{kp_uuid}" deleted successfully.'

    @tool(
        "authentik_crypto_generate",
        "Generate a new self-signed certificate keypair.",
        category="crypto",
        access="full",
    )
    async def crypto_generate(
        common_name: Annotated[str, Field(description="Certificate common name (CN)")],
        validity_days: Annotated[int, Field(description="Number of days the certificate is valid")],
        subject_alt_name: Annotated[
            str | None, Field(description="Subject alternative name (SAN)")
        ] = None,
    ) -> str:
        body = fields(
            common_name=common_name, subject_alt_name=subject_alt_name, validity_days=validity_days
        )
        return to_json(await client.crypto.post(RESOURCE, "generate", body=body))

    @tool(
        "authentik_crypto_view_certificate",
        "View the PEM-encoded certificate data for a keypair. Access is logged.",
        category="crypto",
    )
    async def crypto_view_certificate(kp_uuid: KeypairUuid) -> str:
        return to_json(await client.crypto.get(RESOURCE, kp_uuid, "view_certificate"))

    @tool(
        "authentik_crypto_view_private_key",
        "View the PEM-encoded private key data for a keypair. Access is logged. Sensitive operation.",
        category="crypto",
        access="full",
    )
    async def crypto_view_private_key(kp_uuid: KeypairUuid) -> str:
        return to_json(await client.crypto.get(RESOURCE, kp_uuid, "view_private_key"))
