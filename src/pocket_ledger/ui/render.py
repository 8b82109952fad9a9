from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from ..analytics.monthly import Summary, month_facts
from ..models import Transaction
from . import templates

Tone = Literal["positive", "negative"]


@dataclass(frozen=True)
class RowView:
    tx_id: str
    delete_label: str
    amount_text: str
    amount_tone: Tone
    description_text: str
    date_text: str
    kind_label: str
    row_class: str


@dataclass(frozen=True)
class SummaryView:
    income_text: str
    expense_text: str
    balance_text: str
    balance_tone: Tone


@dataclass(frozen=True)
class LedgerView:
    year: int
    month: int
    rows: list[RowView]
    summary: SummaryView


def render_row(tx: Transaction, currency: str = templates.CURRENCY) -> RowView:
    return RowView(
        tx_id=tx.id,
        delete_label=templates.DELETE_LABEL,
        amount_text=templates.fmt_signed_amount(tx.kind, tx.amount, currency),
        amount_tone="positive" if tx.is_income else "negative",
        description_text=templates.description_or_placeholder(tx.description),
        date_text=templates.fmt_date(tx.date),
        kind_label=templates.kind_label(tx.kind),
        row_class=f"{tx.kind}-row",
    )


def render_summary(summary: Summary, currency: str = templates.CURRENCY) -> SummaryView:
    return SummaryView(
        income_text=templates.fmt_money(summary.total_income, currency),
        expense_text=templates.fmt_money(summary.total_expense, currency),
        balance_text=templates.fmt_money(summary.balance, currency),
        balance_tone="positive" if summary.balance >= 0 else "negative",
    )


def render(
    transactions: Sequence[Transaction],
    year: int,
    month: int,
    currency: str = templates.CURRENCY,
) -> LedgerView:
    """
    Full month view from the ledger contents and the selected (year, month).
    Pure: the same inputs always give an equal view.
    """
    facts = month_facts(transactions, year, month)
    return LedgerView(
        year=facts.selector.year,
        month=facts.selector.month,
        rows=[render_row(t, currency) for t in facts.transactions],
        summary=render_summary(facts.summary, currency),
    )


def render_text(view: LedgerView) -> str:
    header = f"{templates.month_name(view.month)} {view.year}"

    if view.rows:
        lines = [
            " | ".join(
                [r.tx_id, r.amount_text, r.description_text, r.date_text, r.kind_label]
            )
            for r in view.rows
        ]
        table = "\n".join(lines)
    else:
        table = templates.empty_month_message(view.year, view.month)

    totals = templates.section(
        "סיכום",
        [
            f"הכנסות: {view.summary.income_text}",
            f"הוצאות: {view.summary.expense_text}",
            f"יתרה: {view.summary.balance_text}",
        ],
    )

    return "\n\n".join([f"*{header}*", table, templates.divider(), totals]).strip()
