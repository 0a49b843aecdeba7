"""
Unit tests for error rendering and secret redaction (authentik_mcp/errors.py).

The three failure shapes a tool can produce are built the way httpx builds
them: HTTPStatusError from raise_for_status() on a real Response, and
RequestError subclasses chained onto their underlying cause.
"""

import httpx
import pytest

from authentik_mcp.dispatch import PROVIDERS, InvalidDiscriminatorError
from authentik_mcp.errors import (
    TOKEN_MARKER,
    UNKNOWN_ERROR,
    UNKNOWN_FETCH_ERROR,
    URL_MARKER,
    describe,
    redact,
    scrub,
)

from conftest import TEST_HOST, TEST_TOKEN, TEST_URL


def status_error(status: int, **kwargs) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", f"{TEST_URL}/core/users/")
    response = httpx.Response(status, request=request, **kwargs)
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        return exc
    raise AssertionError("expected an error status")


def transport_error(cause: Exception) -> httpx.ConnectError:
    request = httpx.Request("GET", f"{TEST_URL}/core/users/")
    try:
        raise httpx.ConnectError(str(cause), request=request) from cause
    except httpx.ConnectError as exc:
        return exc


class TestStructuredBackendErrors:
    def test_field_errors_are_listed(self, secrets):
        error = status_error(400, json={"name": ["This field is required."]})

        assert redact(error, secrets) == "400 Bad Request: name: This field is required."

    def test_multiple_fields_and_messages(self, secrets):
        error = status_error(
            400,
            json={"username": ["Too long.", "Invalid characters."], "non_field_errors": ["Nope."]},
        )

        assert redact(error, secrets) == (
            "400 Bad Request: username: Too long., Invalid characters.; non_field_errors: Nope."
        )

    def test_detail_string(self, secrets):
        error = status_error(403, json={"detail": "You do not have permission to perform this action."})

        assert redact(error, secrets) == (
            "403 Forbidden: detail: You do not have permission to perform this action."
        )

    def test_nested_object_is_rendered_as_json(self, secrets):
        error = status_error(400, json={"provider": {"client_id": ["Required."]}})

        assert redact(error, secrets) == '400 Bad Request: provider: {"client_id": ["Required."]}'

    @pytest.mark.parametrize(
        "kwargs",
        [{"text": "<html>Bad Gateway</html>"}, {"json": []}, {"json": {}}, {}],
    )
    def test_unusable_body_falls_back_to_status(self, secrets, kwargs):
        assert redact(status_error(502, **kwargs), secrets) == "502 Bad Gateway"


class TestTransportErrors:
    def test_cause_message_is_used(self, secrets):
        error = transport_error(OSError("[Errno 111] Connection refused"))

        assert redact(error, secrets) == "[Errno 111] Connection refused"

    def test_url_in_cause_is_redacted(self, secrets):
        error = transport_error(OSError(f"Name or service not known: {TEST_HOST}"))

        rendered = redact(error, secrets)

        assert TEST_HOST not in rendered
        assert rendered == f"Name or service not known: {URL_MARKER}"

    def test_without_any_message(self, secrets):
        error = httpx.ReadTimeout("", request=httpx.Request("GET", TEST_URL))

        assert redact(error, secrets) == UNKNOWN_FETCH_ERROR


class TestOpaqueErrors:
    def test_exception_message(self, secrets):
        assert redact(RuntimeError("something broke"), secrets) == "something broke"

    def test_exception_without_message_uses_type_name(self, secrets):
        assert redact(KeyError(), secrets) == "KeyError"

    @pytest.mark.parametrize("value", ["a string", 42, {"token": TEST_TOKEN}, None])
    def test_non_exception_values_are_never_rendered(self, secrets, value):
        assert redact(value, secrets) == UNKNOWN_ERROR

    def test_invalid_discriminator_passes_unchanged(self, secrets):
        with pytest.raises(InvalidDiscriminatorError) as exc_info:
            PROVIDERS.resolve("bogus_type", "create")

        assert redact(exc_info.value, secrets) == str(exc_info.value)

    def test_describe_failure_yields_generic_message(self, secrets):
        class Exploding(Exception):
            def __str__(self):
                raise RuntimeError("cannot render")

        assert redact(Exploding(), secrets) == UNKNOWN_ERROR


class TestScrub:
    def test_every_token_occurrence_is_replaced(self, secrets):
        message = f"{TEST_TOKEN} was rejected; retry with {TEST_TOKEN}?"

        assert scrub(message, secrets) == f"{TOKEN_MARKER} was rejected; retry with {TOKEN_MARKER}?"

    def test_token_and_unrelated_bearer_are_both_redacted(self, secrets):
        message = f"token {TEST_TOKEN} failed, request had Authorization: Bearer xyz"

        rendered = scrub(message, secrets)

        assert TEST_TOKEN not in rendered
        assert "xyz" not in rendered
        assert rendered.startswith(f"token {TOKEN_MARKER} failed")

    def test_bare_authorization_header(self, secrets):
        rendered = scrub("echoed Authorization:abc123", secrets)

        assert rendered == f"echoed Authorization: {TOKEN_MARKER}"

    @pytest.mark.parametrize("scheme", ["Basic", "Token", "Digest"])
    def test_authorization_scheme_takes_its_credential_along(self, secrets, scheme):
        rendered = scrub(f"sent Authorization: {scheme} dXNlcjpwYXNz", secrets)

        assert rendered == f"sent Authorization: {TOKEN_MARKER}"
        assert scrub(rendered, secrets) == rendered

    def test_api_url_and_instance_root(self, secrets):
        message = f"GET {TEST_URL}/core/users/ redirected to {TEST_HOST}/if/flow/login/"

        assert scrub(message, secrets) == (
            f"GET {URL_MARKER}/core/users/ redirected to {URL_MARKER}/if/flow/login/"
        )

    def test_idempotent(self, secrets):
        message = f"Bearer {TEST_TOKEN} at {TEST_URL} and Authorization: Bearer other"

        once = scrub(message, secrets)

        assert scrub(once, secrets) == once

    def test_message_without_secrets_is_untouched(self, secrets):
        assert scrub("400 Bad Request: name: This field is required.", secrets) == (
            "400 Bad Request: name: This field is required."
        )

    def test_redacting_twice_is_a_no_op(self, secrets):
        error = status_error(401, json={"detail": f"Token invalid/expired: {TEST_TOKEN}"})

        once = redact(error, secrets)

        assert TEST_TOKEN not in once
        assert scrub(once, secrets) == once


class TestDescribe:
    def test_prefers_message_attribute(self):
        class ApiError(Exception):
            def __init__(self):
                super().__init__("raw args")
                self.message = "readable message"

        assert describe(ApiError()) == "readable message"
