"""Error code registry with E-XXXX format codes.

This module defines the error code system for shipbridge, organizing errors
into categories:
- E-2xxx: Request validation errors
- E-3xxx: Carrier API errors
- E-4xxx: System/internal errors
- E-5xxx: Authentication errors

Each error includes a code, title, message template, and remediation steps.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error codes."""

    VALIDATION = "validation"  # E-2xxx: Request validation errors
    CARRIER_API = "carrier_api"  # E-3xxx: Carrier API errors
    SYSTEM = "system"  # E-4xxx: System/internal errors
    AUTH = "auth"  # E-5xxx: Authentication errors


@dataclass(frozen=True)
class ErrorCode:
    """Definition of an error code with metadata.

    Attributes:
        code: Error code in E-XXXX format.
        category: Error category for grouping.
        title: Short title for display.
        message_template: Message with {placeholders} for context.
        remediation: Action user should take to resolve.
        is_retryable: Whether the operation can be retried without user action.
    """

    code: str
    category: ErrorCategory
    title: str
    message_template: str
    remediation: str
    is_retryable: bool = False


ERROR_REGISTRY: dict[str, ErrorCode] = {
    # Validation errors (E-2xxx)
    "E-2001": ErrorCode(
        code="E-2001",
        category=ErrorCategory.VALIDATION,
        title="Invalid Postal Code",
        message_template="The carrier rejected a postal code: {carrier_message}",
        remediation="Check the origin and destination postal codes and retry.",
    ),
    "E-2002": ErrorCode(
        code="E-2002",
        category=ErrorCategory.VALIDATION,
        title="Invalid State or Province",
        message_template="The carrier rejected a state or province code: {carrier_message}",
        remediation="Use the carrier's 2-letter state/province codes and retry.",
    ),
    "E-2004": ErrorCode(
        code="E-2004",
        category=ErrorCategory.VALIDATION,
        title="Invalid Weight or Dimensions",
        message_template="The carrier rejected a package measurement: {carrier_message}",
        remediation="Correct the package weight or dimensions and retry.",
    ),
    "E-2006": ErrorCode(
        code="E-2006",
        category=ErrorCategory.VALIDATION,
        title="Invalid Tracking Number",
        message_template="The carrier does not recognize the tracking number: {carrier_message}",
        remediation="Verify the tracking number. New labels may take a few hours to appear.",
    ),
    # Carrier API errors (E-3xxx)
    "E-3001": ErrorCode(
        code="E-3001",
        category=ErrorCategory.CARRIER_API,
        title="Carrier Unreachable",
        message_template="The {carrier} {action} endpoint could not be reached: {reason}",
        remediation="Wait a few minutes and retry. Check the carrier's system status if the issue persists.",
        is_retryable=True,
    ),
    "E-3003": ErrorCode(
        code="E-3003",
        category=ErrorCategory.CARRIER_API,
        title="Address Validation Failed",
        message_template="The carrier could not validate an address: {carrier_message}",
        remediation="Verify the address is complete and correct. Check for typos.",
    ),
    "E-3004": ErrorCode(
        code="E-3004",
        category=ErrorCategory.CARRIER_API,
        title="Service Not Available",
        message_template="The requested service is not available: {carrier_message}",
        remediation="Try a different service level or verify the delivery address is serviceable.",
    ),
    "E-3005": ErrorCode(
        code="E-3005",
        category=ErrorCategory.CARRIER_API,
        title="Carrier Unknown Error",
        message_template="The carrier returned an unexpected error: {carrier_message}",
        remediation="Contact support with error code E-3005 and the carrier message for assistance.",
    ),
    "E-3006": ErrorCode(
        code="E-3006",
        category=ErrorCategory.CARRIER_API,
        title="Malformed Carrier Response",
        message_template="The {carrier} {action} response is missing {element}.",
        remediation="The carrier response did not match the expected schema. Contact support with the raw response.",
    ),
    "E-3007": ErrorCode(
        code="E-3007",
        category=ErrorCategory.CARRIER_API,
        title="Label Purchase Outcome Unknown",
        message_template="The {carrier} accept request failed after it may have been delivered: {reason}",
        remediation=(
            "Do not retry automatically. Check the carrier account for a shipment "
            "with this digest before buying again."
        ),
    ),
    # System errors (E-4xxx)
    "E-4002": ErrorCode(
        code="E-4002",
        category=ErrorCategory.SYSTEM,
        title="Configuration Error",
        message_template="Could not load configuration: {reason}",
        remediation="Check the shipbridge.yaml file and environment variables.",
    ),
    # Auth errors (E-5xxx)
    "E-5001": ErrorCode(
        code="E-5001",
        category=ErrorCategory.AUTH,
        title="Carrier Authentication Failed",
        message_template="The carrier rejected the account credentials: {carrier_message}",
        remediation="Check the access key, login and password for this carrier.",
    ),
    "E-5003": ErrorCode(
        code="E-5003",
        category=ErrorCategory.AUTH,
        title="Missing Carrier Credentials",
        message_template="{carrier} requires credentials that are not set: {missing_keys}",
        remediation="Add the missing keys to shipbridge.yaml or set SHIPBRIDGE_<CARRIER>_<KEY>.",
    ),
}


def get_error(code: str) -> ErrorCode | None:
    """Get error definition by code.

    Args:
        code: Error code in E-XXXX format.

    Returns:
        ErrorCode if found, None otherwise.
    """
    return ERROR_REGISTRY.get(code)


def get_errors_by_category(category: ErrorCategory) -> list[ErrorCode]:
    """Get all errors in a category."""
    return [e for e in ERROR_REGISTRY.values() if e.category == category]


def format_message(template: str, **kwargs: object) -> str:
    """Format a message template with context, ignoring missing keys.

    Args:
        template: Message template with {placeholder} syntax.
        **kwargs: Values to substitute into the template.

    Returns:
        Formatted message string, or the raw template when a placeholder
        has no value.
    """
    try:
        return template.format(**kwargs)
    except KeyError:
        return template
