"""Money / rounding helpers.

Centralized so the quote solver, rate service, and routers use identical
rounding semantics. Rounding always goes through ``Decimal`` built from the
float's shortest repr, so 2.675 rounds the way it reads.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Union

_NON_AMOUNT_CHARS = re.compile(r"[^\d,]")
_CENTS_AFTER_DOT = re.compile(r"\.\d{2}$")

# decimal's default context precision, widened by the operands' magnitude.
_BASE_PRECISION = 28


def _precision_for(*values: Decimal) -> int:
    """Context precision wide enough to quantize ``values`` without trapping."""
    return _BASE_PRECISION + sum(abs(v.adjusted()) for v in values)


def round2(value: float) -> float:
    return quantize(value, 2)


def quantize(value: float, decimals: int) -> float:
    """Round half away from zero to ``decimals`` places."""
    exponent = Decimal(1).scaleb(-decimals)
    number = Decimal(str(value))
    with localcontext() as ctx:
        ctx.prec = _precision_for(number) + decimals
        return float(number.quantize(exponent, rounding=ROUND_HALF_UP))


def round_to_note(amount: float, note_size: float) -> float:
    """Return the multiple of ``note_size`` nearest to ``amount``.

    Ties resolve away from zero (``ROUND_HALF_UP`` on a Decimal), so with
    50 000 guaraní notes 75 000 becomes 100 000 and -75 000 becomes -100 000.
    """
    if note_size <= 0:
        raise ValueError("note_size must be positive")
    if not math.isfinite(amount):
        raise ValueError("amount must be finite")
    size = Decimal(str(note_size))
    number = Decimal(str(amount))
    with localcontext() as ctx:
        ctx.prec = _precision_for(number, size)
        notes = (number / size).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return float(notes * size)


def parse_amount(value: Union[str, int, float, None]) -> float | None:
    """Parse a driving amount typed by a customer.

    Numbers pass through. Strings follow the pt-BR masked input the widgets
    produce: dots group thousands and the comma is the decimal separator
    ("2.000,00" -> 2000.0, "1.500.000" -> 1500000.0). Currency symbols and
    spaces are ignored; a leading minus is kept so the solver can decline it.

    Text with a dot, no comma and exactly two digits after the last dot
    ("100.50") reads as a dot-decimal amount rather than a grouped one, so it
    is refused instead of guessed. Returns None when nothing usable is left.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    text = value.strip()
    if "," not in text and _CENTS_AFTER_DOT.search(text):
        return None
    negative = text.startswith("-")
    clean = _NON_AMOUNT_CHARS.sub("", text).replace(",", ".", 1)
    if not clean or clean == ".":
        return None
    try:
        number = float(Decimal(clean))
    except InvalidOperation:
        return None
    if not math.isfinite(number):
        return None
    return -number if negative else number
