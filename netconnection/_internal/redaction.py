"""Redaction of sensitive header and field values in debug output."""

from collections.abc import Mapping

REDACT_KEYS: frozenset[str] = frozenset({
    "api_key",
    "token",
    "secret",
    "password",
    "access_key",
    "refresh_token",
    "authorization",
    "proxy-authorization",
    "auth_token",
    "private_key",
    "secret_key",
    "credentials",
    "cookie",
    "x-api-key",
})

REDACTED_VALUE = "[REDACTED]"


def is_sensitive(key: object) -> bool:
    """Return True if a header or form field name should be redacted."""
    key_lower = key.lower() if isinstance(key, str) else key
    return key_lower in REDACT_KEYS


def redact_mapping(values: Mapping[str, str] | None) -> dict[str, str]:
    """Copy a flat string mapping with sensitive values replaced by "[REDACTED]".

    The input is never mutated. `None` yields an empty dict.
    """
    if not values:
        return {}
    return {
        key: REDACTED_VALUE if is_sensitive(key) else value
        for key, value in values.items()
    }
