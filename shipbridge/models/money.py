"""Decimal money amounts tagged with a currency."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

CENT = Decimal("0.01")

Amount = Union[Decimal, int, float, str]


def to_decimal(value: Amount) -> Decimal:
    """Convert a numeric or string amount to Decimal.

    Floats go through ``str`` so 10.3 becomes Decimal("10.3") rather than its
    binary expansion.

    Raises:
        ValueError: If the value is not a number.
    """
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Not a monetary amount: {value!r}") from None


@dataclass(frozen=True)
class Money:
    """An amount in one currency.

    Arithmetic and comparison are only defined between amounts of the same
    currency; mixing currencies raises ValueError.
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))
        object.__setattr__(self, "currency", self.currency.strip().upper())

    @classmethod
    def parse(cls, value: "Money | Amount", currency: str) -> "Money":
        """Return ``value`` as Money, reading bare numbers in ``currency``."""
        if isinstance(value, Money):
            return value
        return cls(to_decimal(value), currency)

    @property
    def cents(self) -> int:
        """Amount in minor units, rounded half-up."""
        return int((self.amount / CENT).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def _check_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise ValueError(f"Currency mismatch: {self.currency} vs {other.currency}")

    def __sub__(self, other: "Money") -> "Money":
        self._check_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def __add__(self, other: "Money") -> "Money":
        self._check_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __lt__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.amount >= other.amount

    def __str__(self) -> str:
        return f"{self.amount.quantize(CENT, rounding=ROUND_HALF_UP)} {self.currency}"
