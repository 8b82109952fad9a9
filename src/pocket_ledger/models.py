from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Literal

TxKind = Literal["income", "expense"]

TX_KINDS: tuple[TxKind, ...] = ("income", "expense")


@dataclass(frozen=True)
class Transaction:
    id: str
    kind: TxKind
    amount: Decimal  # currency units, always > 0
    description: str | None
    date: date

    @property
    def is_income(self) -> bool:
        return self.kind == "income"
