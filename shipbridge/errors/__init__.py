"""Error handling framework for shipbridge.

This package provides:
- Error code registry with E-XXXX format codes
- Carrier error translation to registry codes
- Typed exceptions for transport and malformed-response failures

Error categories:
- E-2xxx: Request validation errors
- E-3xxx: Carrier API errors
- E-4xxx: System/internal errors
- E-5xxx: Authentication errors
"""

from shipbridge.errors.carrier_translation import (
    CARRIER_ERROR_MAP,
    translate_carrier_error,
)
from shipbridge.errors.domain import (
    AcceptOutcomeUnknownError,
    CarrierTransportError,
    ConfigError,
    MalformedResponseError,
    MissingCredentialsError,
    ShipbridgeError,
)
from shipbridge.errors.registry import (
    ERROR_REGISTRY,
    ErrorCategory,
    ErrorCode,
    get_error,
    get_errors_by_category,
)

__all__ = [
    # Registry
    "ErrorCode",
    "ErrorCategory",
    "ERROR_REGISTRY",
    "get_error",
    "get_errors_by_category",
    # Carrier translation
    "CARRIER_ERROR_MAP",
    "translate_carrier_error",
    # Exceptions
    "ShipbridgeError",
    "CarrierTransportError",
    "MalformedResponseError",
    "AcceptOutcomeUnknownError",
    "MissingCredentialsError",
    "ConfigError",
]
