from __future__ import annotations

import logging
import time
from datetime import date
from decimal import Decimal
from typing import Callable

from ..core.errors import PersistenceWriteError
from ..core.parsing import clean_description, ensure_positive_amount, parse_kind
from ..models import Transaction
from .persistence import TransactionPersistence

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class TransactionStore:
    """
    Owns the ledger in memory. Every mutation writes the full collection
    through the persistence adapter before returning.

    A failed write does not undo the mutation: it is logged and kept in
    `persist_error` until the next successful write.
    """

    def __init__(
        self,
        persistence: TransactionPersistence,
        clock_ms: Callable[[], int] | None = None,
    ):
        self._persistence = persistence
        self._clock_ms = clock_ms or _now_ms
        self._items: list[Transaction] = []
        self._ids: set[str] = set()
        self.persist_error: PersistenceWriteError | None = None

    def initialize(self) -> None:
        self._items = list(self._persistence.load())
        self._ids = {t.id for t in self._items}
        logger.debug("Ledger loaded: %s transactions", len(self._items))

    def all(self) -> tuple[Transaction, ...]:
        return tuple(self._items)

    def get(self, tx_id: str) -> Transaction | None:
        for t in self._items:
            if t.id == tx_id:
                return t
        return None

    def _next_id(self) -> str:
        # creation time in ms; bumped while taken
        n = self._clock_ms()
        while str(n) in self._ids:
            n += 1
        return str(n)

    def add(
        self,
        kind: str,
        amount: Decimal | int | float,
        description: str | None,
        date: date,
    ) -> Transaction:
        tx_kind = parse_kind(kind)
        tx_amount = ensure_positive_amount(amount)

        tx = Transaction(
            id=self._next_id(),
            kind=tx_kind,
            amount=tx_amount,
            description=clean_description(description),
            date=date,
        )
        self._items.append(tx)
        self._ids.add(tx.id)
        logger.info("Added %s id=%s amount=%s date=%s", tx.kind, tx.id, tx.amount, tx.date)

        self._persist()
        return tx

    def remove(self, tx_id: str) -> bool:
        before = len(self._items)
        self._items = [t for t in self._items if t.id != tx_id]
        removed = len(self._items) != before
        self._ids.discard(tx_id)

        if removed:
            logger.info("Removed id=%s", tx_id)
        else:
            logger.debug("Remove ignored, unknown id=%s", tx_id)

        self._persist()
        return removed

    def _persist(self) -> None:
        try:
            self._persistence.save(self._items)
        except PersistenceWriteError as e:
            logger.warning("Ledger not saved, keeping in-memory state. err=%s", e)
            self.persist_error = e
            return
        self.persist_error = None
