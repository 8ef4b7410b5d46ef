"""Carrier error code translation to shipbridge error codes.

Maps the numeric error codes found in ``Response/Error/ErrorCode`` of the
carrier's XML replies onto the E-XXXX registry, so business failures carry a
stable code and remediation alongside the carrier's own wording.
"""

from shipbridge.errors.registry import format_message, get_error

# UPS XML API error codes
CARRIER_ERROR_MAP: dict[str, str] = {
    # Authentication
    "250001": "E-5001",  # Invalid access license for the tool
    "250002": "E-5001",  # Invalid authentication information
    "250003": "E-5001",  # Invalid access license number
    # Addresses
    "111285": "E-2001",  # Postal code is invalid for the state
    "111286": "E-2002",  # State/province code is invalid
    "120802": "E-3003",  # Address validation error on ShipTo
    "120206": "E-3003",  # Missing or invalid ShipTo city
    # Service availability
    "111210": "E-3004",  # Service unavailable between locations
    "111100": "E-3004",  # Service invalid from selected origin
    "120119": "E-3004",  # Service not available to destination
    # Measurements
    "111035": "E-2004",  # Maximum weight exceeded
    "111050": "E-2004",  # Package length exceeded
    "111057": "E-2004",  # Package size exceeded
    # Tracking
    "151018": "E-2006",  # Invalid tracking number
    "151044": "E-2006",  # No tracking information available
}

CARRIER_MESSAGE_PATTERNS: dict[str, str] = {
    "postal code": "E-2001",
    "state/province": "E-2002",
    "authentication": "E-5001",
    "access license": "E-5001",
    "tracking number": "E-2006",
    "address": "E-3003",
    "service": "E-3004",
    "weight": "E-2004",
}


def translate_carrier_error(
    carrier_code: str | None,
    carrier_message: str | None,
) -> tuple[str, str, str]:
    """Translate a carrier error to a shipbridge error.

    Args:
        carrier_code: Carrier error code (e.g., "111285").
        carrier_message: Carrier error description.

    Returns:
        Tuple of (error_code, formatted_message, remediation).
    """
    sa_code = None
    if carrier_code and carrier_code in CARRIER_ERROR_MAP:
        sa_code = CARRIER_ERROR_MAP[carrier_code]
    elif carrier_message:
        lowered = carrier_message.lower()
        for pattern, code in CARRIER_MESSAGE_PATTERNS.items():
            if pattern in lowered:
                sa_code = code
                break

    error = get_error(sa_code or "E-3005")
    message = format_message(
        error.message_template,
        carrier_message=carrier_message or f"Code: {carrier_code}",
    )
    return (error.code, message, error.remediation)
