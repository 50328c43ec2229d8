"""Amount — currency-aware money held as exact integer minor units.

Invariants:
    - minor_units is an int; no float ever touches the value
    - currency is an upper-case ISO 4217 code present in CURRENCY_DECIMALS
    - str(Amount) is canonical "<CCY> <decimal>" with exactly the currency's
      decimal places ("USD 125.00"); parse(str(a)) == a
    - Parsing rejects more fractional digits than the currency allows
    - validate() bounds minor_units to 0..2**63-1 (a signed 64-bit column)

Design Decisions:
    - Registry limited to currencies with known minor-unit exponents
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from paygate.core.errors import InvalidAmountError


CURRENCY_DECIMALS: dict[str, int] = {
    "USD": 2, "EUR": 2, "GBP": 2, "CAD": 2, "MXN": 2, "AUD": 2, "NZD": 2,
    "CHF": 2, "SEK": 2, "NOK": 2, "DKK": 2, "PLN": 2, "CZK": 2, "HKD": 2,
    "SGD": 2, "CNY": 2, "INR": 2, "BRL": 2, "ZAR": 2, "ILS": 2, "PHP": 2,
    "JPY": 0, "KRW": 0, "CLP": 0, "ISK": 0, "VND": 0, "PYG": 0, "UGX": 0,
    "BHD": 3, "KWD": 3, "JOD": 3, "OMR": 3, "TND": 3, "IQD": 3, "LYD": 3,
}

MAX_MINOR_UNITS = 2**63 - 1
MAX_ADJUSTED_EXPONENT = 18  # coarse parse-time cap; validate() applies MAX_MINOR_UNITS


@dataclass(frozen=True)
class Amount:
    currency: str
    minor_units: int

    @classmethod
    def parse(cls, text: str) -> "Amount":
        """Parse "USD 12.53" into an Amount. Raises InvalidAmountError."""
        if not isinstance(text, str):
            raise InvalidAmountError(str(text), "expected a string")
        parts = text.split()
        if len(parts) != 2:
            raise InvalidAmountError(text, "expected '<currency> <number>'")
        return cls.of(parts[0], parts[1], original=text)

    @classmethod
    def of(
        cls, currency: str, number: str | Decimal | int, *, original: str | None = None,
    ) -> "Amount":
        """Build from a currency code and a decimal quantity in major units."""
        shown = original or f"{currency} {number}"
        code = (currency or "").upper()
        if code not in CURRENCY_DECIMALS:
            raise InvalidAmountError(shown, f"unknown currency {currency!r}")
        try:
            value = number if isinstance(number, Decimal) else Decimal(str(number))
        except InvalidOperation:
            raise InvalidAmountError(shown, f"unable to read {number!r}")
        if not value.is_finite():
            raise InvalidAmountError(shown, "not a finite number")
        if value and value.adjusted() > MAX_ADJUSTED_EXPONENT:
            raise InvalidAmountError(shown, "amount is too large")
        decimals = CURRENCY_DECIMALS[code]
        exponent = value.normalize().as_tuple().exponent
        if isinstance(exponent, int) and exponent < -decimals:
            raise InvalidAmountError(
                shown, f"{code} allows at most {decimals} decimal places",
            )
        return cls(currency=code, minor_units=int(value.scaleb(decimals)))

    @property
    def decimals(self) -> int:
        return CURRENCY_DECIMALS.get(self.currency, 2)

    @property
    def quantity(self) -> Decimal:
        """Major-unit Decimal, quantized to the currency's precision."""
        return Decimal(self.minor_units).scaleb(-self.decimals).quantize(
            Decimal(1).scaleb(-self.decimals),
        )

    def validate(self) -> None:
        if self.currency not in CURRENCY_DECIMALS:
            raise InvalidAmountError(str(self), f"unknown currency {self.currency!r}")
        if not isinstance(self.minor_units, int) or isinstance(self.minor_units, bool):
            raise InvalidAmountError(str(self), "minor units must be an integer")
        if self.minor_units > MAX_MINOR_UNITS:
            raise InvalidAmountError(
                f"{self.currency} {self.minor_units} minor units", "amount is too large",
            )
        if self.minor_units < 0:
            raise InvalidAmountError(str(self), "amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.currency} {self.quantity}"
