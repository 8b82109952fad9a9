from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from ..config import Settings
from ..core.errors import ValidationError
from ..core.parsing import parse_amount, parse_date
from ..core.time_ranges import MonthSelector, today, year_range
from ..models import Transaction
from ..storage.kv_store import KeyValueStore
from ..storage.persistence import TransactionPersistence
from ..storage.tx_store import TransactionStore
from . import templates
from .render import LedgerView, RowView, SummaryView, render

logger = logging.getLogger(__name__)


@dataclass
class FormDraft:
    kind: str = "expense"
    amount_text: str = ""
    description: str = ""
    date_text: str = ""


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    message: str
    warnings: list[str] = field(default_factory=list)
    transaction: Transaction | None = None


class LedgerApp:
    """
    Glue between form/selector inputs and the ledger.

    Holds only the draft and the (year, month) selector; every view is
    rendered from the store on demand.
    """

    def __init__(
        self,
        store: TransactionStore,
        *,
        today_fn: Callable[[], date] | None = None,
        currency: str = templates.CURRENCY,
    ):
        self.store = store
        self._today = today_fn or today
        self.currency = currency

        t = self._today()
        self.selector = MonthSelector(year=t.year, month=t.month)
        self.draft = FormDraft(date_text=t.isoformat())

    @classmethod
    def from_settings(cls, settings: Settings) -> LedgerApp:
        persistence = TransactionPersistence(
            KeyValueStore(settings.data_dir),
            key=settings.storage_key,
        )
        store = TransactionStore(persistence)
        store.initialize()

        tz = settings.tz
        return cls(store, today_fn=lambda: today(tz), currency=settings.currency_symbol)

    # --- selector ---

    def set_filter(self, year: int, month: int) -> None:
        self.selector = MonthSelector(year=int(year), month=int(month))

    def year_options(self) -> list[int]:
        return year_range(self._today().year)

    def month_options(self) -> list[tuple[int, str]]:
        return [(i + 1, name) for i, name in enumerate(templates.MONTH_NAMES)]

    # --- actions ---

    def add_transaction(
        self,
        kind: str,
        amount_text: str,
        description: str | None = None,
        date_text: str | None = None,
    ) -> ActionResult:
        self.draft = FormDraft(
            kind=kind,
            amount_text=amount_text,
            description=description or "",
            date_text=date_text or "",
        )
        return self.submit_draft()

    def submit_draft(self) -> ActionResult:
        d = self.draft

        try:
            amount = parse_amount(d.amount_text)
        except ValidationError as e:
            logger.info("Add rejected: %s", e)
            return ActionResult(ok=False, message=templates.amount_required_message())

        try:
            tx_date = parse_date(d.date_text, default=self._today())
            tx = self.store.add(d.kind, amount, d.description, tx_date)
        except ValidationError as e:
            logger.info("Add rejected: %s", e)
            return ActionResult(ok=False, message=templates.invalid_input_message(str(e)))

        self.draft = FormDraft(kind=d.kind, date_text=self._today().isoformat())
        return ActionResult(
            ok=True,
            message=templates.transaction_added_message(),
            warnings=self._persist_warnings(),
            transaction=tx,
        )

    def delete_transaction(self, tx_id: str) -> ActionResult:
        self.store.remove(tx_id)
        return ActionResult(
            ok=True,
            message=templates.transaction_deleted_message(),
            warnings=self._persist_warnings(),
        )

    def _persist_warnings(self) -> list[str]:
        if self.store.persist_error is None:
            return []
        return [templates.not_saved_warning()]

    # --- views ---

    def view(self) -> LedgerView:
        return render(
            self.store.all(),
            self.selector.year,
            self.selector.month,
            currency=self.currency,
        )

    def get_visible_rows(self) -> list[RowView]:
        return self.view().rows

    def get_summary(self) -> SummaryView:
        return self.view().summary
