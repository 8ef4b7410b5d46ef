"""Postal address value object shared by every carrier."""

from dataclasses import dataclass
from typing import Any, Mapping

RESIDENTIAL = "residential"
COMMERCIAL = "commercial"

# Loose input keys accepted by Location.from_mapping, mapped to field names
_MAPPING_ALIASES: dict[str, str] = {
    "company": "name",
    "company_name": "name",
    "attention_name": "attention",
    "address": "address1",
    "address_line1": "address1",
    "address_line2": "address2",
    "address_line3": "address3",
    "state": "province",
    "state_province_code": "province",
    "territory": "province",
    "region": "province",
    "zip": "postal_code",
    "postal": "postal_code",
    "country_code": "country",
    "account": "number",
    "account_number": "number",
    "shipper_number": "number",
}


def is_blank(value: Any) -> bool:
    """Return True for None, empty strings and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True)
class Location:
    """A postal address.

    Attributes:
        name: Person or company name.
        attention: Attention line (ignored for the shipping party).
        phone: Phone number in any format; serializers keep digits only.
        fax: Fax number in any format.
        address1: First street address line.
        address2: Second street address line.
        address3: Third street address line.
        city: City name.
        province: State or province code. Not every country uses one.
        postal_code: Postal or ZIP code.
        country: Country code (2-letter preferred).
        number: Carrier account/shipper number tied to this address.
        address_type: "residential", "commercial" or None when unknown.
    """

    name: str | None = None
    attention: str | None = None
    phone: str | None = None
    fax: str | None = None
    address1: str | None = None
    address2: str | None = None
    address3: str | None = None
    city: str | None = None
    province: str | None = None
    postal_code: str | None = None
    country: str | None = None
    number: str | None = None
    address_type: str | None = None

    def __post_init__(self) -> None:
        if self.address_type not in (None, RESIDENTIAL, COMMERCIAL):
            raise ValueError(
                f"address_type must be {RESIDENTIAL!r}, {COMMERCIAL!r} or None, "
                f"got {self.address_type!r}"
            )

    @property
    def country_code(self) -> str | None:
        """2-letter upper-case country code, or None when blank."""
        if is_blank(self.country):
            return None
        return self.country.strip().upper()[:2]

    @property
    def commercial(self) -> bool:
        """True only when the address is asserted to be commercial."""
        return self.address_type == COMMERCIAL

    @property
    def residential(self) -> bool:
        return not self.commercial

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Location":
        """Build a Location from loosely keyed data.

        Accepts the field names plus common aliases (``zip``, ``state``,
        ``company``...). Unknown keys are ignored. A ``commercial`` or
        ``residential`` boolean sets ``address_type`` when it is not given.

        Example:
            >>> Location.from_mapping({"zip": "90210", "country": "us"}).country_code
            'US'
        """
        if isinstance(data, Location):
            return data

        known = set(cls.__dataclass_fields__)
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _MAPPING_ALIASES.get(key, key)
            if name in known and name not in values:
                values[name] = value

        if "address_type" not in values:
            if data.get("commercial") is True:
                values["address_type"] = COMMERCIAL
            elif data.get("residential") is True:
                values["address_type"] = RESIDENTIAL
        return cls(**values)
