"""Typed exceptions for failures that abort a carrier operation.

Carrier-reported business failures (invalid address, unknown tracking
number) are never raised; they come back as unsuccessful response objects
or a FailedShipment. The exceptions here cover the fatal classes only:

    try:
        response = carrier.find_rates(origin, destination, packages)
    except CarrierTransportError as e:
        if e.is_retryable:
            ...
    except MalformedResponseError:
        ...
"""

from dataclasses import dataclass, field, fields
from typing import Any

from shipbridge.errors.registry import format_message, get_error


@dataclass
class ShipbridgeError(Exception):
    """Base error with code, message and remediation.

    Attributes:
        code: Error code in E-XXXX format.
        message: Human-readable error message.
        remediation: Action the caller should take to resolve.
        is_retryable: Whether the operation can be retried without user action.
        details: Additional context dictionary.
    """

    code: str
    message: str
    remediation: str = ""
    is_retryable: bool = False
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        """Return formatted error message."""
        return f"[{self.code}] {self.message}"

    @classmethod
    def from_code(cls, code: str, **kwargs: Any) -> "ShipbridgeError":
        """Create an error from a registry code with context substitution.

        Args:
            code: Error code in E-XXXX format.
            **kwargs: Context values for message template substitution.
                Keys naming a field of the exception class (``details`` or a
                subclass field) are also set on the instance.

        Returns:
            Instance of ``cls`` with the formatted message.
        """
        field_names = {f.name for f in fields(cls)}
        extra = {k: v for k, v in kwargs.items() if k in field_names}
        error_def = get_error(code)
        if error_def is None:
            return cls(
                code=code,
                message=f"Unknown error: {code}",
                remediation="Contact support.",
                **extra,
            )
        return cls(
            code=error_def.code,
            message=format_message(error_def.message_template, **kwargs),
            remediation=error_def.remediation,
            is_retryable=error_def.is_retryable,
            **extra,
        )


@dataclass
class CarrierTransportError(ShipbridgeError):
    """Network failure or non-2xx reply from a carrier endpoint.

    Attributes:
        reached_carrier: False only when the request certainly never left
            this process (connection refused, DNS failure). Timeouts and
            error statuses leave the outcome unknown.
    """

    reached_carrier: bool = True


@dataclass
class MalformedResponseError(ShipbridgeError):
    """Carrier reported success but the reply lacks a required element."""


@dataclass
class AcceptOutcomeUnknownError(ShipbridgeError):
    """Accept request failed after it may have committed a purchase.

    Attributes:
        confirmed: The ConfirmedShipment whose digest was being accepted.
    """

    confirmed: Any = None


@dataclass
class MissingCredentialsError(ShipbridgeError):
    """Required carrier credentials are absent from the loaded options."""

    missing: tuple[str, ...] = ()


@dataclass
class ConfigError(ShipbridgeError):
    """Configuration file could not be read or validated."""
