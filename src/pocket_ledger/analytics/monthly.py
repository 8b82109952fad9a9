from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from ..core.time_ranges import MonthSelector
from ..models import Transaction


@dataclass(frozen=True)
class Summary:
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    count: int


@dataclass(frozen=True)
class MonthFacts:
    selector: MonthSelector
    transactions: list[Transaction]  # newest first
    summary: Summary


def filter_by_month(transactions: Iterable[Transaction], year: int, month: int) -> list[Transaction]:
    selector = MonthSelector(year=int(year), month=int(month))
    return [t for t in transactions if selector.contains(t.date)]


def sort_by_date_descending(transactions: Iterable[Transaction]) -> list[Transaction]:
    # sorted() is stable, so same-day entries keep their input order
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def summarize(transactions: Iterable[Transaction]) -> Summary:
    income_total = Decimal(0)
    expense_total = Decimal(0)
    count = 0

    for t in transactions:
        count += 1
        if t.kind == "income":
            income_total += t.amount
        elif t.kind == "expense":
            expense_total += t.amount

    return Summary(
        total_income=income_total,
        total_expense=expense_total,
        balance=income_total - expense_total,
        count=count,
    )


def month_facts(transactions: Sequence[Transaction], year: int, month: int) -> MonthFacts:
    visible = sort_by_date_descending(filter_by_month(transactions, year, month))
    return MonthFacts(
        selector=MonthSelector(year=int(year), month=int(month)),
        transactions=visible,
        summary=summarize(visible),
    )
