from __future__ import annotations

import datetime as dt
import json
import logging
from decimal import Decimal
from typing import Iterable, Literal, Protocol

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import PersistenceReadError, PersistenceWriteError
from ..core.parsing import ensure_positive_amount
from ..models import Transaction

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "expenseTrackerTransactions"


class SlotStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class StoredTransaction(BaseModel):
    """
    One persisted record. Records saved by the legacy web page carry
    the kind under "type" and an empty string for a missing description.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    kind: Literal["income", "expense"] = Field(validation_alias=AliasChoices("kind", "type"))
    amount: Decimal
    description: str | None = None
    date: dt.date

    @field_validator("amount")
    @classmethod
    def _amount_in_range(cls, v: Decimal) -> Decimal:
        return ensure_positive_amount(v)

    def to_transaction(self) -> Transaction:
        return Transaction(
            id=self.id,
            kind=self.kind,
            amount=self.amount,
            description=self.description,
            date=self.date,
        )


def _json_amount(amount: Decimal) -> str:
    # exact decimal text, e.g. Decimal("12.50") -> 12.50, Decimal("1E+3") -> 1000
    return format(amount, "f")


def _encode_record(t: Transaction) -> str:
    fields: list[tuple[str, str]] = [
        ("id", json.dumps(t.id, ensure_ascii=False)),
        ("kind", json.dumps(t.kind)),
        ("amount", _json_amount(t.amount)),
    ]
    if t.description is not None:
        fields.append(("description", json.dumps(t.description, ensure_ascii=False)))
    fields.append(("date", json.dumps(t.date.isoformat())))
    return "{" + ", ".join(f"\"{k}\": {v}" for k, v in fields) + "}"


def encode(transactions: Iterable[Transaction]) -> str:
    """
    Transactions -> JSON array text. Amounts are written as JSON numbers
    carrying the exact Decimal digits, so decode(encode(T)) == T.
    """
    return "[" + ", ".join(_encode_record(t) for t in transactions) + "]"


def decode(text: str) -> list[Transaction]:
    """
    JSON text -> transactions in stored order.

    Raises PersistenceReadError if the payload is not a JSON array.
    Malformed records and repeated ids are skipped.
    """
    try:
        data = json.loads(text, parse_float=Decimal)
    except ValueError as e:
        raise PersistenceReadError(f"stored ledger is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise PersistenceReadError(f"stored ledger must be a JSON array, got {type(data).__name__}")

    out: list[Transaction] = []
    seen: set[str] = set()
    for i, obj in enumerate(data):
        try:
            rec = StoredTransaction.model_validate(obj)
        except PydanticValidationError as e:
            logger.warning("Skipping malformed ledger record #%s: %s", i, e.errors()[:1])
            continue

        if rec.id in seen:
            logger.warning("Skipping duplicate ledger record id=%s", rec.id)
            continue

        seen.add(rec.id)
        out.append(rec.to_transaction())
    return out


class TransactionPersistence:
    """
    Saves the whole ledger as one JSON array under a single storage key.
    """

    def __init__(self, storage: SlotStorage, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key

    def save(self, transactions: Iterable[Transaction]) -> None:
        try:
            payload = encode(transactions)
        except (TypeError, ValueError) as e:
            raise PersistenceWriteError(f"failed to encode ledger for {self.key!r}: {e}") from e

        try:
            self.storage.set_item(self.key, payload)
        except OSError as e:
            raise PersistenceWriteError(f"failed to write ledger to {self.key!r}: {e}") from e

    def _read(self) -> list[Transaction]:
        try:
            text = self.storage.get_item(self.key)
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceReadError(f"failed to read ledger from {self.key!r}: {e}") from e

        if text is None or not text.strip():
            return []
        return decode(text)

    def load(self) -> list[Transaction]:
        try:
            return self._read()
        except PersistenceReadError as e:
            logger.warning("Stored ledger ignored, starting empty. err=%s", e)
            return []
