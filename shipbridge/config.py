"""YAML configuration loader with env var resolution and Pydantic validation.

Loads config from (priority order):
1. An explicit path passed to load_config
2. ./shipbridge.yaml (working directory)
3. ~/.shipbridge/config.yaml (user home)

Environment variables override YAML: SHIPBRIDGE_<CARRIER>_<KEY>, e.g.
SHIPBRIDGE_UPS_PASSWORD or SHIPBRIDGE_UPS_ORIGIN_ACCOUNT.
${VAR} references in YAML values resolve from environment at load time.

Example shipbridge.yaml:

    carriers:
      ups:
        key: ${UPS_ACCESS_KEY}
        login: ${UPS_USER}
        password: ${UPS_PASSWORD}
        origin_account: "A1B2C3"
        test: true
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from shipbridge.carriers import CARRIERS, Carrier, get_carrier_class
from shipbridge.errors import ConfigError, MissingCredentialsError
from shipbridge.transport import PostFunction, Transport
from shipbridge.utils.redaction import redact_for_logging

logger = logging.getLogger(__name__)

ENV_PREFIX = "SHIPBRIDGE_"

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def resolve_env_vars(value: str) -> str:
    """Resolve ${VAR} references in a string from environment variables.

    Args:
        value: String potentially containing ${VAR} references.

    Returns:
        String with all ${VAR} references replaced by their env values.
        Missing env vars resolve to empty string.
    """
    def _replace(match: re.Match) -> str:
        return os.environ.get(match.group(1), "")

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, str):
        return resolve_env_vars(data)
    elif isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    return data


class CarrierSettings(BaseModel):
    """Default options for one carrier.

    Every field maps onto the carrier option of the same name.
    """

    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)

    key: str | None = None
    login: str | None = None
    password: str | None = None
    origin_account: str | None = None
    destination_account: str | None = None
    service: str | None = None
    pickup_type: str | None = None
    log_xml: bool = False
    test: bool = False

    def as_options(self) -> dict[str, Any]:
        """Options dict with unset and blank values dropped."""
        return {
            name: value
            for name, value in self.model_dump().items()
            if value is not None and value != ""
        }


class ShipbridgeConfig(BaseModel):
    """Top-level configuration: carrier settings keyed by registry name."""

    carriers: dict[str, CarrierSettings] = {}

    def for_carrier(self, name: str) -> CarrierSettings:
        return self.carriers.get(name.strip().lower(), CarrierSettings())


def _find_config_file() -> Path | None:
    """Search for config file in standard locations.

    Returns:
        Path to config file if found, None otherwise.
    """
    candidates = [
        Path.cwd() / "shipbridge.yaml",
        Path.cwd() / "shipbridge.yml",
        Path.home() / ".shipbridge" / "config.yaml",
        Path.home() / ".shipbridge" / "config.yml",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply SHIPBRIDGE_<CARRIER>_<KEY> env var overrides to config data.

    The carrier is a registry key matched after the prefix; the rest is the
    setting, so ``SHIPBRIDGE_UPS_ORIGIN_ACCOUNT`` sets
    ``carriers.ups.origin_account``. Variables naming an unregistered
    carrier or an unknown setting are ignored. "true"/"false" become
    booleans; every other value stays a string, since account numbers and
    passwords may be all digits.

    Args:
        data: Parsed YAML config dict.

    Returns:
        Config dict with env var overrides applied.
    """
    if data.get("carriers") is None:
        data["carriers"] = {}
    carriers = data["carriers"]
    if not isinstance(carriers, dict):
        return data
    # Longest first so a carrier key containing "_" wins over its prefix
    known_carriers = sorted(CARRIERS, key=len, reverse=True)
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        suffix = key[len(ENV_PREFIX):].lower()
        carrier = next((name for name in known_carriers if suffix.startswith(name + "_")), None)
        if carrier is None:
            continue
        field_name = suffix[len(carrier) + 1:]
        if field_name not in CarrierSettings.model_fields:
            continue
        section = carriers.setdefault(carrier, {})
        if section is None:
            section = carriers[carrier] = {}
        if value.lower() in ("true", "false"):
            section[field_name] = value.lower() == "true"
        else:
            section[field_name] = value
    return data


def load_config(config_path: str | Path | None = None) -> ShipbridgeConfig:
    """Load shipbridge configuration from YAML with env var resolution.

    With no file found, the configuration comes from environment
    overrides alone.

    Args:
        config_path: Explicit path to config file. If None, searches
            standard locations (cwd, then ~/.shipbridge/).

    Returns:
        Parsed and validated ShipbridgeConfig.

    Raises:
        ConfigError: If an explicit path does not exist, the YAML is
            invalid, or validation fails.
    """
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError.from_code("E-4002", reason=f"file not found: {config_path}")
    else:
        path = _find_config_file()

    raw_data: Any = {}
    if path is not None:
        logger.info("Loading config from %s", path)
        try:
            with open(path) as f:
                raw_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError.from_code("E-4002", reason=f"invalid YAML in {path}: {e}") from e
        if not isinstance(raw_data, dict):
            raise ConfigError.from_code("E-4002", reason=f"{path} must contain a mapping")

    data = _resolve_env_vars_recursive(raw_data)
    data = _apply_env_overrides(data)

    try:
        return ShipbridgeConfig(**data)
    except ValidationError as e:
        raise ConfigError.from_code("E-4002", reason=str(e)) from e


def load_carrier(
    name: str,
    config: ShipbridgeConfig | None = None,
    *,
    transport: Transport | PostFunction | None = None,
    **overrides: Any,
) -> Carrier:
    """Build a configured carrier and check its credentials.

    Args:
        name: Carrier registry key or display name ("ups", "UPS").
        config: Loaded configuration. Loaded from the standard locations
            when None.
        transport: Transport passed through to the carrier.
        **overrides: Options applied over the configured settings.

    Returns:
        Carrier instance with every required option set.

    Raises:
        KeyError: If the carrier name is unknown.
        ConfigError: If configuration cannot be loaded.
        MissingCredentialsError: If a required option is unset.
    """
    carrier_class = get_carrier_class(name)
    if config is None:
        config = load_config()

    registry_key = next(key for key, cls in CARRIERS.items() if cls is carrier_class)
    options = {**config.for_carrier(registry_key).as_options(), **overrides}
    carrier = carrier_class(options, transport=transport)
    logger.debug("Configured %s with %s", carrier.name, redact_for_logging(options))

    missing = carrier.missing_credentials()
    if missing:
        raise MissingCredentialsError.from_code(
            "E-5003",
            carrier=carrier.name,
            missing_keys=", ".join(missing),
            missing=tuple(missing),
        )
    return carrier
