"""
Async client for the authentik REST API (/api/v3).

authentik groups its API by resource family: /core/users/, /flows/instances/,
/providers/oauth2/, and so on. AuthentikClient exposes one ApiFacet per
family. Facets are created on first access and cached for the lifetime of
the client; all of them share a single httpx.AsyncClient, so there is one
connection pool and one set of default headers per process.

Failures are not translated here:
- a non-2xx answer raises httpx.HTTPStatusError (the response is attached)
- a request that never got an answer raises an httpx.RequestError subclass
Turning them into agent-facing text is the job of authentik_mcp.errors.
"""

import logging
from functools import cached_property
from urllib.parse import quote
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from authentik_mcp.dispatch import Operation

logger = logging.getLogger(__name__)

Lookup = int | str


def _query(params: dict[str, Any]) -> dict[str, Any]:
    """Drop unset filters; authentik treats an empty value as a real filter."""
    return {key: value for key, value in params.items() if value is not None}


def _segment(part: Lookup) -> str:
    """
    Encode a lookup value (slug, UUID, ID, action name) as exactly one path segment.

    "/" is percent-encoded, and values that would collapse or climb the path
    ("", ".", "..") are rejected, so a lookup can never leave its resource.
    """
    segment = quote(str(part), safe="")
    if segment in ("", ".", ".."):
        raise ValueError(f"Invalid path segment: {str(part)!r}")
    return segment


class ApiFacet:
    """
    The operations of one resource family, e.g. "core" or "providers".

    Paths passed to the verbs are relative to the family, so
    `client.core.list("users")` requests GET /api/v3/core/users/.
    """

    def __init__(self, http: httpx.AsyncClient, family: str):
        self._http = http
        self.family = family

    def _path(self, resource: str, *lookups: Lookup) -> str:
        # The resource comes from code and may span segments ("invitation/stages").
        segments = [self.family, resource.strip("/"), *(_segment(part) for part in lookups)]
        return "/".join(segment for segment in segments if segment) + "/"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: Any = None,
        form: dict[str, Any] | None = None,
        files: dict[str, tuple[str, str, str]] | None = None,
    ) -> Any:
        logger.debug("%s %s", method, path)
        # Form fields go out as multipart parts without a filename.
        parts: dict[str, Any] = {key: (None, str(value)) for key, value in (form or {}).items()}
        parts.update(files or {})
        response = await self._http.request(
            method,
            path,
            params=_query(params or {}),
            json=body,
            files=parts or None,
        )
        response.raise_for_status()

        if response.status_code == 204 or not response.content:
            return None
        content_type = response.headers.get("content-type", "")
        if "json" in content_type:
            return response.json()
        # Flow exports (YAML) and SAML metadata (XML) are plain text.
        return response.text

    # --- Collection verbs ---

    async def list(self, resource: str, **query: Any) -> Any:
        return await self._request("GET", self._path(resource), params=query)

    async def retrieve(self, resource: str, lookup: Lookup, **query: Any) -> Any:
        return await self._request("GET", self._path(resource, lookup), params=query)

    async def create(self, resource: str, body: dict[str, Any]) -> Any:
        return await self._request("POST", self._path(resource), body=body)

    async def update(self, resource: str, lookup: Lookup, body: dict[str, Any]) -> Any:
        return await self._request("PUT", self._path(resource, lookup), body=body)

    async def partial_update(self, resource: str, lookup: Lookup, body: dict[str, Any]) -> Any:
        return await self._request("PATCH", self._path(resource, lookup), body=body)

    async def destroy(self, resource: str, lookup: Lookup) -> None:
        await self._request("DELETE", self._path(resource, lookup))

    # --- Custom actions, e.g. /core/users/{id}/set_password/ ---

    async def get(self, resource: str, *path: Lookup, **query: Any) -> Any:
        return await self._request("GET", self._path(resource, *path), params=query)

    async def post(self, resource: str, *path: Lookup, body: Any = None, **query: Any) -> Any:
        return await self._request("POST", self._path(resource, *path), params=query, body=body)

    async def post_form(
        self,
        resource: str,
        *path: Lookup,
        form: dict[str, Any] | None = None,
        files: dict[str, tuple[str, str, str]] | None = None,
    ) -> Any:
        """POST multipart/form-data; `files` maps field -> (filename, content, content type)."""
        return await self._request("POST", self._path(resource, *path), form=form, files=files)

    async def patch(self, resource: str, *path: Lookup, body: Any = None) -> Any:
        return await self._request("PATCH", self._path(resource, *path), body=body)

    async def put(self, resource: str, *path: Lookup, body: Any = None) -> Any:
        return await self._request("PUT", self._path(resource, *path), body=body)

    async def execute(
        self,
        operation: "Operation",
        *,
        lookup: Lookup | None = None,
        query: dict[str, Any] | None = None,
        **request: Any,
    ) -> Any:
        """
        Run a dispatch-resolved operation.

        Create and update operations take their body as a keyword argument
        named after the operation's request type (operation.body_key), the
        same way the generated authentik SDKs do. Any other keyword is a
        programming error.
        """
        body = None
        if operation.body_key is not None:
            if operation.body_key not in request:
                raise TypeError(f"{operation.name}() missing request body '{operation.body_key}'")
            body = request.pop(operation.body_key)
        if request:
            raise TypeError(
                f"{operation.name}() got unexpected arguments: {', '.join(sorted(request))}"
            )

        if operation.kind == "list":
            return await self.list(operation.resource, **(query or {}))
        if operation.kind == "create":
            return await self.create(operation.resource, body)
        if lookup is None:
            raise TypeError(f"{operation.name}() requires a lookup value")
        if operation.kind == "get":
            return await self.retrieve(operation.resource, lookup, **(query or {}))
        if operation.kind == "update":
            return await self.partial_update(operation.resource, lookup, body)
        if operation.kind == "delete":
            return await self.destroy(operation.resource, lookup)
        raise TypeError(f"{operation.name}(): unsupported operation kind '{operation.kind}'")


class AuthentikClient:
    """
    Entry point to the authentik API.

    Usage:
        async with AuthentikClient(url, token) as client:
            users = await client.core.list("users", is_active=True)

    Args:
        base_url: API root, already normalized to end with /api/v3
        token: API token sent as "Authorization: Bearer <token>"
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "AuthentikClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def validate_connection(self) -> str:
        """Return the running authentik version, failing if it is unreachable."""
        version = await self.admin.get("version")
        return version["version_current"]

    # --- Resource families (created on first use) ---

    @cached_property
    def admin(self) -> ApiFacet:
        return ApiFacet(self._http, "admin")

    @cached_property
    def authenticators(self) -> ApiFacet:
        return ApiFacet(self._http, "authenticators")

    @cached_property
    def core(self) -> ApiFacet:
        return ApiFacet(self._http, "core")

    @cached_property
    def crypto(self) -> ApiFacet:
        return ApiFacet(self._http, "crypto")

    @cached_property
    def enterprise(self) -> ApiFacet:
        return ApiFacet(self._http, "enterprise")

    @cached_property
    def events(self) -> ApiFacet:
        return ApiFacet(self._http, "events")

    @cached_property
    def flows(self) -> ApiFacet:
        return ApiFacet(self._http, "flows")

    @cached_property
    def managed(self) -> ApiFacet:
        return ApiFacet(self._http, "managed")

    @cached_property
    def oauth2(self) -> ApiFacet:
        return ApiFacet(self._http, "oauth2")

    @cached_property
    def outposts(self) -> ApiFacet:
        return ApiFacet(self._http, "outposts")

    @cached_property
    def policies(self) -> ApiFacet:
        return ApiFacet(self._http, "policies")

    @cached_property
    def propertymappings(self) -> ApiFacet:
        return ApiFacet(self._http, "propertymappings")

    @cached_property
    def providers(self) -> ApiFacet:
        return ApiFacet(self._http, "providers")

    @cached_property
    def rac(self) -> ApiFacet:
        return ApiFacet(self._http, "rac")

    @cached_property
    def rbac(self) -> ApiFacet:
        return ApiFacet(self._http, "rbac")

    @cached_property
    def root(self) -> ApiFacet:
        return ApiFacet(self._http, "root")

    @cached_property
    def sources(self) -> ApiFacet:
        return ApiFacet(self._http, "sources")

    @cached_property
    def ssf(self) -> ApiFacet:
        return ApiFacet(self._http, "ssf")

    @cached_property
    def stages(self) -> ApiFacet:
        return ApiFacet(self._http, "stages")

    @cached_property
    def tenants(self) -> ApiFacet:
        return ApiFacet(self._http, "tenants")
