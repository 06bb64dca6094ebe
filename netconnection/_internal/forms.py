"""Request builders for RequestDispatcher.

Builds httpx.Request objects for the three POST shapes: multipart form from a
string mapping, multipart form from a JSON object, and a raw JSON body.
"""

import json
from collections.abc import Mapping
from typing import Any

import httpx

JSON_CONTENT_TYPE = "application/json"


def stringify_json_value(value: Any) -> str:
    """Render a JSON value as form field text.

    Strings pass through, booleans and null use their JSON spelling, and
    nested objects/arrays become compact JSON text.
    """
    if isinstance(value, str):
        return value
    if value is None or isinstance(value, (bool, dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def fields_from_object(parameters: Mapping[str, Any] | str) -> dict[str, str]:
    """Flatten a JSON object's own entries into form fields.

    Args:
        parameters: A mapping, or JSON text that decodes to an object.

    Raises:
        ValueError: If JSON text does not decode to an object.
    """
    if isinstance(parameters, str):
        parameters = json.loads(parameters)
        if not isinstance(parameters, dict):
            raise ValueError("JSON parameters must decode to an object")
    return {str(key): stringify_json_value(value) for key, value in parameters.items()}


def build_form_request(
    client: httpx.Client,
    url: str,
    fields: Mapping[str, str],
) -> httpx.Request:
    """Build a multipart/form-data POST with one part per field.

    Raises:
        ValueError: If there are no fields; a multipart body needs one part.
    """
    if not fields:
        raise ValueError("multipart body must have at least one part")
    # (None, value) parts have no filename, so they render as plain form fields
    files = {key: (None, value) for key, value in fields.items()}
    return client.build_request("POST", url, files=files)


def build_json_request(
    client: httpx.Client,
    url: str,
    body: str,
    headers: Mapping[str, str] | None = None,
) -> httpx.Request:
    """Build a POST carrying `body` verbatim as application/json.

    Extra headers are added on top of the forced Content-Type.
    """
    request_headers = httpx.Headers(headers or {})
    request_headers["Content-Type"] = JSON_CONTENT_TYPE
    return client.build_request(
        "POST",
        url,
        content=body.encode("utf-8"),
        headers=request_headers,
    )
