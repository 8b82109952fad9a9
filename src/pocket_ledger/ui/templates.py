from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..models import TxKind

CURRENCY = "₪"

MONTH_NAMES = [
    "ינואר",
    "פברואר",
    "מרץ",
    "אפריל",
    "מאי",
    "יוני",
    "יולי",
    "אוגוסט",
    "ספטמבר",
    "אוקטובר",
    "נובמבר",
    "דצמבר",
]

KIND_LABELS: dict[str, str] = {
    "income": "הכנסה",
    "expense": "הוצאה",
}

DELETE_LABEL = "מחק"
EMPTY_DESCRIPTION = "-"

_CENT = Decimal("0.01")


def info(message: str) -> str:
    return f"ℹ️ {message}"


def success(message: str) -> str:
    return f"✅ {message}"


def warning(message: str) -> str:
    return f"⚠️ {message}"


def error(message: str) -> str:
    return f"❌ {message}"


def divider() -> str:
    return "──────────────────"


def section(title: str, lines: Iterable[str]) -> str:
    body = "\n".join(line for line in lines if line)
    return f"*{title}*\n{body}".strip()


def fmt_money(value: Decimal, currency: str = CURRENCY) -> str:
    """1234.5 -> '1,234.50 ₪'; negatives keep their sign."""
    q = Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)
    return f"{q:,.2f} {currency}"


def fmt_signed_amount(kind: TxKind, amount: Decimal, currency: str = CURRENCY) -> str:
    sign = "+" if kind == "income" else "-"
    return f"{sign} {fmt_money(amount, currency)}"


def fmt_date(d: date) -> str:
    return d.strftime("%d.%m.%Y")


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]


def kind_label(kind: str) -> str:
    return KIND_LABELS.get(kind, kind)


def description_or_placeholder(description: str | None) -> str:
    d = (description or "").strip()
    return d or EMPTY_DESCRIPTION


def amount_required_message() -> str:
    return error("אנא הכנס סכום")


def invalid_input_message(detail: str) -> str:
    return error(f"קלט לא תקין: {detail}")


def transaction_added_message() -> str:
    return success("התנועה נוספה")


def transaction_deleted_message() -> str:
    return success("התנועה נמחקה")


def not_saved_warning() -> str:
    return warning("השמירה נכשלה. השינויים עלולים לא להישמר לאחר טעינה מחדש.")


def empty_month_message(year: int, month: int) -> str:
    return info(f"אין תנועות ב{month_name(month)} {year}")
