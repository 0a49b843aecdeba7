"""
Type dispatch tables for the "by type" tools.

Several authentik resources come in many concrete variants that share one
logical shape: there are 24 kinds of stage, 9 kinds of provider, and so on.
The API exposes each variant under its own path with its own request type
(/providers/oauth2/ takes an OAuth2ProviderRequest, /providers/saml/ a
SAMLProviderRequest). Rather than one tool per variant, each family gets a
single set of "by type" tools that take a discriminator argument, e.g.

    authentik_providers_by_type_create(provider_type="oauth2", ...)

A TypeDispatchTable maps that discriminator to the concrete operation:

    PROVIDERS.resolve("oauth2", "create")
    -> Operation(name="providers_oauth2_create", kind="create",
                 resource="oauth2", body_key="oauth2_provider_request")

Every (discriminator, kind) row is computed once when the table is built,
so a malformed table fails at import time rather than on a tool call. An
unknown discriminator raises InvalidDiscriminatorError before any request is
sent; the message lists the valid values and is safe to show to the agent.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Literal, get_args

from authentik_mcp.client import ApiFacet, Lookup

OperationKind = Literal["list", "get", "create", "update", "delete"]

OPERATION_KINDS: tuple[str, ...] = get_args(OperationKind)

# Operation name suffix per kind, following the generated SDK naming.
_SUFFIXES = {
    "list": "list",
    "get": "retrieve",
    "create": "create",
    "update": "partial_update",
    "delete": "destroy",
}


class InvalidDiscriminatorError(ValueError):
    """Raised when a by-type tool receives a type the table does not know."""

    def __init__(self, discriminator: str, value: object, valid: Iterable[str]):
        self.discriminator = discriminator
        self.value = value
        self.valid = tuple(valid)
        super().__init__(
            f'Invalid {discriminator} "{value}". Valid types: {", ".join(self.valid)}'
        )


@dataclass(frozen=True)
class DispatchEntry:
    """
    One concrete variant within a family.

    Attributes:
        discriminator: Value the caller passes, e.g. "oauth2"
        resource: Path of the variant relative to the family, e.g. "oauth2"
            or "authenticator/duo"; also the operation-name fragment
        create_body_key: Keyword carrying the body of a create call
        update_body_key: Keyword carrying the body of a partial update
    """

    discriminator: str
    resource: str
    create_body_key: str | None = None
    update_body_key: str | None = None

    @classmethod
    def for_request(cls, discriminator: str, resource: str, request_type: str) -> "DispatchEntry":
        """Build an entry whose body keys follow the SDK naming for `request_type`."""
        return cls(
            discriminator,
            resource,
            create_body_key=f"{request_type}_request",
            update_body_key=f"patched_{request_type}_request",
        )

    @property
    def fragment(self) -> str:
        return self.resource.replace("/", "_")


@dataclass(frozen=True)
class Operation:
    """A resolved backend operation, ready to hand to ApiFacet.execute()."""

    name: str
    kind: str
    resource: str
    body_key: str | None = None


class TypeDispatchTable:
    """
    Discriminator -> operation table for one resource family.

    Args:
        family: API family the operations live in, e.g. "providers"
        discriminator: Name of the tool argument carrying the type, used in
            error messages, e.g. "provider_type"
        entries: One DispatchEntry per supported variant
        kinds: Operation kinds the family supports (all five by default)
    """

    def __init__(
        self,
        family: str,
        discriminator: str,
        entries: Iterable[DispatchEntry],
        kinds: Iterable[str] = OPERATION_KINDS,
    ):
        self.family = family
        self.discriminator = discriminator
        self.kinds = tuple(kinds)
        self._entries: dict[str, DispatchEntry] = {}
        self._operations: dict[tuple[str, str], Operation] = {}

        unknown_kinds = set(self.kinds) - set(OPERATION_KINDS)
        if unknown_kinds:
            raise ValueError(f"{family}: unknown operation kinds {sorted(unknown_kinds)}")

        for entry in entries:
            if entry.discriminator in self._entries:
                raise ValueError(f"{family}: duplicate {discriminator} '{entry.discriminator}'")
            self._entries[entry.discriminator] = entry
            for kind in self.kinds:
                self._operations[entry.discriminator, kind] = self._build(entry, kind)

    def _build(self, entry: DispatchEntry, kind: str) -> Operation:
        body_key = None
        if kind == "create":
            body_key = entry.create_body_key
        elif kind == "update":
            body_key = entry.update_body_key
        if kind in ("create", "update") and not body_key:
            raise ValueError(
                f"{self.family}: {self.discriminator} '{entry.discriminator}' has no {kind} body key"
            )
        return Operation(
            name=f"{self.family}_{entry.fragment}_{_SUFFIXES[kind]}",
            kind=kind,
            resource=entry.resource,
            body_key=body_key,
        )

    @property
    def types(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def __contains__(self, value: object) -> bool:
        return value in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def resolve(self, value: str, kind: str) -> Operation:
        if value not in self._entries:
            raise InvalidDiscriminatorError(self.discriminator, value, self.types)
        if kind not in self.kinds:
            raise ValueError(
                f"{self.family} does not support '{kind}' by {self.discriminator}. "
                f"Supported: {', '.join(self.kinds)}"
            )
        return self._operations[value, kind]

    async def invoke(
        self,
        api: ApiFacet,
        value: str,
        kind: str,
        *,
        lookup: Lookup | None = None,
        query: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Resolve the operation for `value` and run it against `api`."""
        operation = self.resolve(value, kind)
        request: dict[str, Any] = {}
        if operation.body_key is not None:
            request[operation.body_key] = dict(payload or {})
        return await api.execute(operation, lookup=lookup, query=query, **request)


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------

StageType = Literal[
    "authenticator_duo",
    "authenticator_email",
    "authenticator_endpoint_gdtc",
    "authenticator_sms",
    "authenticator_static",
    "authenticator_totp",
    "authenticator_validate",
    "authenticator_webauthn",
    "captcha",
    "consent",
    "deny",
    "dummy",
    "email",
    "identification",
    "invitation",
    "mtls",
    "password",
    "prompt",
    "redirect",
    "source",
    "user_delete",
    "user_login",
    "user_logout",
    "user_write",
]

STAGES = TypeDispatchTable(
    "stages",
    "stage_type",
    [
        DispatchEntry.for_request("authenticator_duo", "authenticator/duo", "authenticator_duo_stage"),
        DispatchEntry.for_request("authenticator_email", "authenticator/email", "authenticator_email_stage"),
        DispatchEntry.for_request(
            "authenticator_endpoint_gdtc", "authenticator/endpoint_gdtc", "authenticator_endpoint_gdtc_stage"
        ),
        DispatchEntry.for_request("authenticator_sms", "authenticator/sms", "authenticator_sms_stage"),
        DispatchEntry.for_request("authenticator_static", "authenticator/static", "authenticator_static_stage"),
        DispatchEntry.for_request("authenticator_totp", "authenticator/totp", "authenticator_totp_stage"),
        DispatchEntry.for_request(
            "authenticator_validate", "authenticator/validate", "authenticator_validate_stage"
        ),
        DispatchEntry.for_request(
            "authenticator_webauthn", "authenticator/webauthn", "authenticator_web_authn_stage"
        ),
        DispatchEntry.for_request("captcha", "captcha", "captcha_stage"),
        DispatchEntry.for_request("consent", "consent", "consent_stage"),
        DispatchEntry.for_request("deny", "deny", "deny_stage"),
        DispatchEntry.for_request("dummy", "dummy", "dummy_stage"),
        DispatchEntry.for_request("email", "email", "email_stage"),
        DispatchEntry.for_request("identification", "identification", "identification_stage"),
        DispatchEntry.for_request("invitation", "invitation/stages", "invitation_stage"),
        DispatchEntry.for_request("mtls", "mtls", "mutual_tls_stage"),
        DispatchEntry.for_request("password", "password", "password_stage"),
        DispatchEntry.for_request("prompt", "prompt/stages", "prompt_stage"),
        DispatchEntry.for_request("redirect", "redirect", "redirect_stage"),
        DispatchEntry.for_request("source", "source", "source_stage"),
        DispatchEntry.for_request("user_delete", "user_delete", "user_delete_stage"),
        DispatchEntry.for_request("user_login", "user_login", "user_login_stage"),
        DispatchEntry.for_request("user_logout", "user_logout", "user_logout_stage"),
        DispatchEntry.for_request("user_write", "user_write", "user_write_stage"),
    ],
)

# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------

ProviderType = Literal[
    "oauth2",
    "saml",
    "ldap",
    "proxy",
    "radius",
    "scim",
    "rac",
    "google_workspace",
    "microsoft_entra",
]

PROVIDERS = TypeDispatchTable(
    "providers",
    "provider_type",
    [
        DispatchEntry.for_request("oauth2", "oauth2", "oauth2_provider"),
        DispatchEntry.for_request("saml", "saml", "saml_provider"),
        DispatchEntry.for_request("ldap", "ldap", "ldap_provider"),
        DispatchEntry.for_request("proxy", "proxy", "proxy_provider"),
        DispatchEntry.for_request("radius", "radius", "radius_provider"),
        DispatchEntry.for_request("scim", "scim", "scim_provider"),
        DispatchEntry.for_request("rac", "rac", "rac_provider"),
        DispatchEntry.for_request("google_workspace", "google_workspace", "google_workspace_provider"),
        DispatchEntry.for_request("microsoft_entra", "microsoft_entra", "microsoft_entra_provider"),
    ],
)

# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------

PolicyType = Literal[
    "dummy",
    "event_matcher",
    "expression",
    "geoip",
    "password",
    "password_expiry",
    "reputation",
    "unique_password",
]

POLICIES = TypeDispatchTable(
    "policies",
    "policy_type",
    [
        DispatchEntry.for_request("dummy", "dummy", "dummy_policy"),
        DispatchEntry.for_request("event_matcher", "event_matcher", "event_matcher_policy"),
        DispatchEntry.for_request("expression", "expression", "expression_policy"),
        DispatchEntry.for_request("geoip", "geoip", "geo_ip_policy"),
        DispatchEntry.for_request("password", "password", "password_policy"),
        DispatchEntry.for_request("password_expiry", "password_expiry", "password_expiry_policy"),
        DispatchEntry.for_request("reputation", "reputation", "reputation_policy"),
        DispatchEntry.for_request("unique_password", "unique_password", "unique_password_policy"),
    ],
)

# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------

SourceType = Literal["oauth", "saml", "ldap", "plex", "kerberos", "scim"]

SOURCES = TypeDispatchTable(
    "sources",
    "source_type",
    [
        DispatchEntry.for_request("oauth", "oauth", "oauth_source"),
        DispatchEntry.for_request("saml", "saml", "saml_source"),
        DispatchEntry.for_request("ldap", "ldap", "ldap_source"),
        DispatchEntry.for_request("plex", "plex", "plex_source"),
        DispatchEntry.for_request("kerberos", "kerberos", "kerberos_source"),
        DispatchEntry.for_request("scim", "scim", "scim_source"),
    ],
)

# ---------------------------------------------------------------------------
# Property mappings
# ---------------------------------------------------------------------------

PropertyMappingType = Literal[
    "notification",
    "provider_google_workspace",
    "provider_microsoft_entra",
    "provider_rac",
    "provider_radius",
    "provider_saml",
    "provider_scim",
    "provider_scope",
    "source_kerberos",
    "source_ldap",
    "source_oauth",
    "source_plex",
    "source_saml",
    "source_scim",
]

PROPERTY_MAPPINGS = TypeDispatchTable(
    "propertymappings",
    "mapping_type",
    [
        DispatchEntry.for_request("notification", "notification", "notification_webhook_mapping"),
        DispatchEntry.for_request(
            "provider_google_workspace", "provider/google_workspace", "google_workspace_provider_mapping"
        ),
        DispatchEntry.for_request(
            "provider_microsoft_entra", "provider/microsoft_entra", "microsoft_entra_provider_mapping"
        ),
        DispatchEntry.for_request("provider_rac", "provider/rac", "rac_property_mapping"),
        DispatchEntry.for_request("provider_radius", "provider/radius", "radius_provider_property_mapping"),
        DispatchEntry.for_request("provider_saml", "provider/saml", "saml_property_mapping"),
        DispatchEntry.for_request("provider_scim", "provider/scim", "scim_mapping"),
        DispatchEntry.for_request("provider_scope", "provider/scope", "scope_mapping"),
        DispatchEntry.for_request("source_kerberos", "source/kerberos", "kerberos_source_property_mapping"),
        DispatchEntry.for_request("source_ldap", "source/ldap", "ldap_source_property_mapping"),
        DispatchEntry.for_request("source_oauth", "source/oauth", "oauth_source_property_mapping"),
        DispatchEntry.for_request("source_plex", "source/plex", "plex_source_property_mapping"),
        DispatchEntry.for_request("source_saml", "source/saml", "saml_source_property_mapping"),
        DispatchEntry.for_request("source_scim", "source/scim", "scim_source_property_mapping"),
    ],
)

# ---------------------------------------------------------------------------
# Authenticator devices (no create/update through the API)
# ---------------------------------------------------------------------------

DeviceType = Literal["duo", "email", "endpoint", "sms", "static", "totp", "webauthn"]

AUTHENTICATOR_DEVICES_ADMIN = TypeDispatchTable(
    "authenticators",
    "device_type",
    [DispatchEntry(device, f"admin/{device}") for device in get_args(DeviceType)],
    kinds=("list", "get", "delete"),
)

AUTHENTICATOR_DEVICES_USER = TypeDispatchTable(
    "authenticators",
    "device_type",
    [DispatchEntry(device, device) for device in get_args(DeviceType)],
    kinds=("list",),
)
