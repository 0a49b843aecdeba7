"""
Shared argument types and output helpers for the tool catalog.

Tool handlers declare their input shape with typing.Annotated and pydantic
Field descriptions; FastMCP turns those into the JSON schema the agent sees.
The aliases below cover the arguments nearly every list tool accepts.
"""

import json
from typing import Annotated, Any

from pydantic import Field

Page = Annotated[int | None, Field(description="Page number")]
PageSize = Annotated[int | None, Field(description="Number of results per page")]
Search = Annotated[str | None, Field(description="Search across fields")]
Ordering = Annotated[
    str | None, Field(description="Field to order by (prefix with - for descending)")
]
ExtraFields = Annotated[
    dict[str, Any] | None,
    Field(description="Additional fields to send as-is (snake_case API field names)"),
]


def to_json(result: Any) -> str:
    """Render an API result for the agent. Text payloads pass through."""
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2, default=str)


def fields(**values: Any) -> dict[str, Any]:
    """Request body from keyword arguments, leaving out the ones not given."""
    return {key: value for key, value in values.items() if value is not None}


def merge(body: dict[str, Any], extra: dict[str, Any] | None) -> dict[str, Any]:
    return {**body, **(extra or {})}
