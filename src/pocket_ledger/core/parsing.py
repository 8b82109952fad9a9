from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation

from ..models import TX_KINDS, TxKind
from .errors import ValidationError

# 0 < amount <= MAX_AMOUNT, at most MAX_FRACTION_DIGITS decimal places
MAX_AMOUNT = Decimal("1000000000000")
MAX_FRACTION_DIGITS = 8

_FRACTION_QUANTUM = Decimal(1).scaleb(-MAX_FRACTION_DIGITS)


def parse_kind(value: str | None) -> TxKind:
    k = (value or "").strip().lower()
    for kind in TX_KINDS:
        if k == kind:
            return kind
    raise ValidationError(f"unknown transaction kind: {value!r}")


def ensure_positive_amount(value: object) -> Decimal:
    """
    Accepts Decimal / int / float and returns a Decimal > 0.
    bool, NaN, infinities, zero, negatives, amounts above MAX_AMOUNT and
    more than MAX_FRACTION_DIGITS decimal places are rejected.
    """
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, float)):
        raise ValidationError(f"amount must be a number, got {type(value).__name__}")

    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    if not amount.is_finite():
        raise ValidationError("amount must be a finite number")
    if amount <= 0:
        raise ValidationError("amount must be greater than zero")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"amount must not exceed {MAX_AMOUNT}")
    if amount.quantize(_FRACTION_QUANTUM) != amount:
        raise ValidationError(f"amount must have at most {MAX_FRACTION_DIGITS} decimal places")
    return amount


def parse_amount(text: str | None) -> Decimal:
    """
    Raw form text -> positive Decimal.

    "12.50" and " 1000 " are accepted; "", "abc", "12abc", "1,5", "1_000", "0" and
    "-5" raise ValidationError.
    """
    raw = (text or "").strip()
    if not raw:
        raise ValidationError("amount is required")
    if "_" in raw:
        raise ValidationError(f"amount must not contain digit separators: {text!r}")

    try:
        amount = Decimal(raw)
    except InvalidOperation as e:
        raise ValidationError(f"amount is not a number: {text!r}") from e

    return ensure_positive_amount(amount)


def parse_date(text: str | None, *, default: date) -> date:
    raw = (text or "").strip()
    if not raw:
        return default

    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise ValidationError(f"date must be YYYY-MM-DD, got {text!r}") from e


def clean_description(text: str | None) -> str | None:
    d = (text or "").strip()
    return d or None
