"""Credential redaction for log output.

Carrier credentials travel inside every UPS request (the AccessRequest
document) and sit in the options handed to each carrier, so both are passed
through here before reaching a log handler.
"""

import re
from typing import Any, Mapping

REDACTED = "***REDACTED***"

# Matched case-insensitively as substrings of option names
SENSITIVE_OPTION_PATTERNS = frozenset({"key", "login", "password", "secret", "token", "credential"})

# AccessRequest children carrying the account credentials
CREDENTIAL_ELEMENTS = ("AccessLicenseNumber", "UserId", "Password")

_CREDENTIAL_ELEMENT_PATTERN = re.compile(
    r"<(?P<tag>" + "|".join(CREDENTIAL_ELEMENTS) + r")>[^<]*</(?P=tag)>"
)


def is_sensitive(name: str, patterns: frozenset[str] = SENSITIVE_OPTION_PATTERNS) -> bool:
    lowered = name.lower()
    return any(pattern in lowered for pattern in patterns)


def redact_for_logging(
    options: Mapping[str, Any],
    sensitive_patterns: frozenset[str] = SENSITIVE_OPTION_PATTERNS,
) -> dict[str, Any]:
    """Return a copy of ``options`` with credential values masked.

    Unset (None) values are kept so the log still shows what is missing.
    Nested mappings, and mappings inside lists, are masked the same way.

    Example:
        >>> redact_for_logging({"login": "shipper", "test": True})
        {'login': '***REDACTED***', 'test': True}
    """
    return {
        name: _redact_value(str(name), value, sensitive_patterns)
        for name, value in options.items()
    }


def _redact_value(name: str, value: Any, patterns: frozenset[str]) -> Any:
    if value is None:
        return None
    if is_sensitive(name, patterns):
        return REDACTED
    if isinstance(value, Mapping):
        return redact_for_logging(value, patterns)
    if isinstance(value, (list, tuple)):
        return [redact_for_logging(item, patterns) if isinstance(item, Mapping) else item for item in value]
    return value


def redact_xml(xml: str | None) -> str | None:
    """Mask the text of the credential elements in a request body.

    Example:
        >>> redact_xml("<Password>hunter2</Password>")
        '<Password>***REDACTED***</Password>'
    """
    if xml is None:
        return None
    return _CREDENTIAL_ELEMENT_PATTERN.sub(lambda m: f"<{m['tag']}>{REDACTED}</{m['tag']}>", xml)
