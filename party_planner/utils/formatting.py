from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[int, float, Decimal]


def format_amount(value: Number) -> str:
    # "5000" stays "5000", "5000.50" becomes "5000.5" (no exponent, no trailing zeros).
    d = value if isinstance(value, Decimal) else Decimal(str(value))
    text = f"{d.normalize():f}"
    return text


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def json_number(value: Decimal) -> Union[int, float]:
    # Whole amounts serialize as 5000, not 5000.0.
    return int(value) if value == value.to_integral_value() else float(value)


def people(count: int) -> str:
    return f"{count} {'person' if count == 1 else 'people'}"
