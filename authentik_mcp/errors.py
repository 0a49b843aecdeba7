"""
Error rendering and secret redaction.

Every failure that leaves a tool is turned into display text here before the
agent sees it. Rendering happens in two steps:

1. Classify the failure and build a candidate message:
   - **Structured backend error** (httpx.HTTPStatusError): authentik answered
     with a 4xx/5xx. The JSON body usually maps field names to lists of
     validation messages, e.g. {"name": ["This field is required."]}, which
     renders as "400 Bad Request: name: This field is required."
   - **Transport failure** (httpx.RequestError): no response was received
     (DNS, refused connection, timeout). The underlying cause is rendered.
   - **Anything else**: the exception message. Objects that are not
     exceptions never have their repr rendered, only a fixed message.

2. Scrub the candidate: the configured token and base URL are replaced with
   fixed markers, then anything shaped like a bearer token or an
   Authorization header is replaced too. The second pass catches tokens we
   were never told about (a rotated token, a token echoed back by authentik).

redact() never raises. If anything goes wrong while rendering, the generic
message is returned instead of the original text.
"""

import json
import re

import httpx

from authentik_mcp.config import API_SUFFIX, RedactionSecrets

UNKNOWN_ERROR = "An unknown error occurred"
UNKNOWN_FETCH_ERROR = "Unknown fetch error"

TOKEN_MARKER = "[REDACTED]"
URL_MARKER = "[AUTHENTIK_URL]"

_BEARER_PATTERN = re.compile(r"Bearer\s+\S+", re.IGNORECASE)
# An optional scheme word ("Basic", "Token", ...) is consumed with the credential.
_AUTHORIZATION_PATTERN = re.compile(r"Authorization:\s*(?:\w+\s+)?\S+", re.IGNORECASE)


def scrub(message: str, secrets: RedactionSecrets) -> str:
    """
    Remove secrets from a message.

    Order matters: literal secrets go first so that the URL marker never
    swallows part of a token, and the pattern pass runs last so it also
    covers credentials that are not the configured ones.
    """
    if secrets.token:
        message = message.replace(secrets.token, TOKEN_MARKER)

    if secrets.base_url:
        message = message.replace(secrets.base_url, URL_MARKER)
        # Redirects and proxies report the instance root, not the API root.
        instance_root = secrets.base_url.removesuffix(API_SUFFIX)
        if instance_root and instance_root != secrets.base_url:
            message = message.replace(instance_root, URL_MARKER)

    message = _BEARER_PATTERN.sub(f"Bearer {TOKEN_MARKER}", message)
    message = _AUTHORIZATION_PATTERN.sub(f"Authorization: {TOKEN_MARKER}", message)
    return message


def _format_value(value: object) -> str:
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


def _describe_status_error(error: httpx.HTTPStatusError) -> str:
    response = error.response
    summary = f"{response.status_code} {response.reason_phrase}"
    try:
        body = response.json()
    except (ValueError, httpx.ResponseNotRead):
        # Not JSON, or the body was never read (streamed response).
        return summary
    if not isinstance(body, dict) or not body:
        return summary
    details = "; ".join(f"{key}: {_format_value(value)}" for key, value in body.items())
    return f"{summary}: {details}"


def _describe_transport_error(error: httpx.RequestError) -> str:
    cause = error.__cause__
    message = str(cause) if cause is not None else ""
    return message or str(error) or UNKNOWN_FETCH_ERROR


def describe(error: object) -> str:
    """Build the unscrubbed message for a failure."""
    if isinstance(error, httpx.HTTPStatusError):
        return _describe_status_error(error)
    if isinstance(error, httpx.RequestError):
        return _describe_transport_error(error)
    if isinstance(error, BaseException):
        message = getattr(error, "message", None)
        if isinstance(message, str) and message:
            return message
        return str(error) or type(error).__name__
    return UNKNOWN_ERROR


def redact(error: object, secrets: RedactionSecrets) -> str:
    """Render a failure as display text with every secret removed."""
    try:
        return scrub(describe(error), secrets)
    except Exception:
        return UNKNOWN_ERROR
