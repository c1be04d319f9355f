"""Sanitization of sensitive values before they reach the logs.

Provider credentials travel in request headers and settings objects; this
module keeps them out of structured log events.
"""

from typing import Any


# Sensitive field patterns that should be redacted
SENSITIVE_PATTERNS = {
    # Authentication & Authorization
    "password",
    "secret",
    "api_key",
    "apikey",
    "token",
    "authorization",
    "auth",
    "credentials",
    # Provider credentials
    "server_token",
    "x-postmark-server-token",
    "sparkpost_api_key",
}

REDACTED = "***REDACTED***"


def is_sensitive_key(key: str, patterns: set[str] | None = None) -> bool:
    """Check if a key matches any sensitive pattern.

    Args:
        key: The key to check (case-insensitive, normalized)
        patterns: Optional custom patterns (defaults to SENSITIVE_PATTERNS)

    Returns:
        True if key matches any sensitive pattern, False otherwise

    Example:
        >>> is_sensitive_key("X-Postmark-Server-Token")
        True
        >>> is_sensitive_key("template_id")
        False
    """
    if patterns is None:
        patterns = SENSITIVE_PATTERNS

    # Normalize key: lowercase, replace separators with underscores
    normalized_key = key.lower().replace("-", "_").replace(".", "_").replace(" ", "_")

    for pattern in patterns:
        normalized_pattern = pattern.replace(".", "_").replace("-", "_")
        if normalized_pattern in normalized_key:
            return True

    return False


def sanitize_dict(
    data: dict[str, Any],
    patterns: set[str] | None = None,
    recursive: bool = True,
) -> dict[str, Any]:
    """Return a copy of ``data`` with sensitive values redacted.

    Example:
        >>> sanitize_dict({"api_key": "secret", "provider": "sparkpost"})
        {'api_key': '***REDACTED***', 'provider': 'sparkpost'}
    """
    sanitized: dict[str, Any] = {}

    for key, value in data.items():
        if is_sensitive_key(key, patterns):
            sanitized[key] = REDACTED
        elif recursive and isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, patterns, recursive)
        elif recursive and isinstance(value, list):
            sanitized[key] = [
                sanitize_dict(item, patterns, recursive) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            sanitized[key] = value

    return sanitized
