"""Fixed-point currency amounts."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from schooldesk.config import settings


@dataclass(frozen=True, order=True)
class Money:
    """An amount held as integer minor units (cents)."""

    cents: int = 0

    @classmethod
    def from_amount(cls, amount: float | int | str | Decimal) -> "Money":
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation as e:
            raise ValueError(f"Not a currency amount: {amount!r}") from e
        return cls(int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)))

    @classmethod
    def parse(cls, text: str) -> "Money":
        """Read the wire form (``$1,042.50``) back into an amount."""
        cleaned = text.strip().replace(settings.currency_symbol, "").replace(",", "")
        negative = cleaned.startswith("-")
        money = cls.from_amount(cleaned.lstrip("-"))
        return cls(-money.cents) if negative else money

    @property
    def amount(self) -> Decimal:
        return Decimal(self.cents) / 100

    def format(self) -> str:
        sign = "-" if self.cents < 0 else ""
        whole, frac = divmod(abs(self.cents), 100)
        return f"{sign}{settings.currency_symbol}{whole}.{frac:02d}"

    def __add__(self, other: "Money") -> "Money":
        return Money(self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        return Money(self.cents - other.cents)

    def __str__(self) -> str:
        return self.format()


def format_currency(amount: float | int | str | Decimal) -> str:
    return Money.from_amount(amount).format()
