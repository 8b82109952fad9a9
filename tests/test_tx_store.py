from datetime import date
from decimal import Decimal

import pytest

from pocket_ledger.core.errors import ValidationError
from pocket_ledger.storage.kv_store import KeyValueStore
from pocket_ledger.storage.persistence import TransactionPersistence
from pocket_ledger.storage.tx_store import TransactionStore


class FixedClock:
    def __init__(self, start: int = 1_710_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now


class FailingStorage:
    def get_item(self, key: str) -> str | None:
        return None

    def set_item(self, key: str, value: str) -> None:
        raise PermissionError(13, "read-only")


class FlakyStorage:
    def __init__(self):
        self.broken = False
        self.saved: str | None = None

    def get_item(self, key: str) -> str | None:
        return self.saved

    def set_item(self, key: str, value: str) -> None:
        if self.broken:
            raise OSError("disk full")
        self.saved = value


def _store(tmp_path, clock=None) -> TransactionStore:
    s = TransactionStore(TransactionPersistence(KeyValueStore(tmp_path)), clock_ms=clock)
    s.initialize()
    return s


def test_add_appends_one_entry_with_new_id(tmp_path):
    s = _store(tmp_path)
    before = s.all()

    tx = s.add("income", Decimal("250.00"), "bonus", date(2024, 3, 15))

    after = s.all()
    assert len(after) == len(before) + 1
    assert after[-1] == tx
    assert tx.kind == "income"
    assert tx.amount == Decimal("250.00")
    assert tx.description == "bonus"
    assert tx.date == date(2024, 3, 15)
    assert tx.id not in {t.id for t in before}


def test_ids_are_unique_within_same_millisecond(tmp_path):
    clock = FixedClock()
    s = _store(tmp_path, clock)

    a = s.add("expense", 10, None, date(2024, 1, 1))
    b = s.add("expense", 20, None, date(2024, 1, 1))
    c = s.add("income", 30, None, date(2024, 1, 1))

    assert a.id == "1710000000000"
    assert len({a.id, b.id, c.id}) == 3


@pytest.mark.parametrize("amount", [0, -5, Decimal("-0.01"), float("nan"), float("inf"), "12"])
def test_add_invalid_amount_leaves_store_unchanged(tmp_path, amount):
    s = _store(tmp_path)
    s.add("income", 100, None, date(2024, 1, 1))
    before = s.all()

    with pytest.raises(ValidationError):
        s.add("expense", amount, "x", date(2024, 1, 2))

    assert s.all() == before


def test_add_unknown_kind_is_rejected(tmp_path):
    s = _store(tmp_path)
    with pytest.raises(ValidationError):
        s.add("loan", 10, None, date(2024, 1, 1))
    assert s.all() == ()


def test_blank_description_is_stored_as_absent(tmp_path):
    s = _store(tmp_path)
    tx = s.add("expense", 5, "   ", date(2024, 1, 1))
    assert tx.description is None


def test_remove_existing_and_unknown(tmp_path):
    s = _store(tmp_path, FixedClock())
    a = s.add("income", 1, None, date(2024, 1, 1))
    b = s.add("expense", 2, None, date(2024, 1, 2))

    assert s.remove(a.id) is True
    assert [t.id for t in s.all()] == [b.id]

    before = s.all()
    assert s.remove("does-not-exist") is False
    assert s.all() == before


def test_every_mutation_is_persisted(tmp_path):
    s = _store(tmp_path, FixedClock())
    a = s.add("income", 1000, "salary", date(2024, 3, 1))
    s.add("expense", 300, None, date(2024, 3, 2))

    reloaded = _store(tmp_path)
    assert reloaded.all() == s.all()

    s.remove(a.id)
    reloaded = _store(tmp_path)
    assert [t.id for t in reloaded.all()] == [t.id for t in s.all()]


def test_insertion_order_is_kept(tmp_path):
    s = _store(tmp_path, FixedClock())
    s.add("expense", 1, "late", date(2024, 5, 1))
    s.add("expense", 1, "early", date(2024, 1, 1))
    assert [t.description for t in s.all()] == ["late", "early"]


def test_initialize_with_corrupt_slot_starts_empty(tmp_path):
    (tmp_path / "expenseTrackerTransactions.json").write_text("{{{", encoding="utf-8")
    s = _store(tmp_path)
    assert s.all() == ()


def test_write_failure_keeps_memory_state(tmp_path):
    s = TransactionStore(TransactionPersistence(FailingStorage()))
    s.initialize()

    tx = s.add("income", 10, None, date(2024, 1, 1))

    assert s.all() == (tx,)
    assert s.persist_error is not None


def test_persist_error_clears_after_successful_write():
    storage = FlakyStorage()
    s = TransactionStore(TransactionPersistence(storage))
    s.initialize()

    storage.broken = True
    s.add("income", 10, None, date(2024, 1, 1))
    assert s.persist_error is not None
    assert storage.saved is None

    storage.broken = False
    s.add("expense", 5, None, date(2024, 1, 2))
    assert s.persist_error is None
    assert storage.saved is not None and storage.saved.count('"id"') == 2


@pytest.mark.parametrize("amount", [Decimal("1e27"), Decimal("1e5000"), Decimal("1E-400")])
def test_add_out_of_range_amount_is_rejected(amount):
    storage = FlakyStorage()
    s = TransactionStore(TransactionPersistence(storage))
    s.initialize()

    with pytest.raises(ValidationError):
        s.add("income", amount, None, date(2024, 1, 1))

    assert s.all() == ()
    assert storage.saved is None


def test_get(tmp_path):
    s = _store(tmp_path)
    tx = s.add("income", 10, None, date(2024, 1, 1))
    assert s.get(tx.id) == tx
    assert s.get("missing") is None
