from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class Transaction:
    id: str
    vendor: str
    amount: Decimal  # currency prefix stripped, always finite and >= 0
    date: date
    category: str
    type: str  # debit | credit, carried but not used by any filter or total
    raw_amount: str
    raw_date: str


@dataclass(frozen=True)
class RejectedRecord:
    id: str
    reason: str
    raw: dict[str, object] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class ParsedLedger:
    transactions: tuple[Transaction, ...]
    rejected: tuple[RejectedRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.transactions)


@dataclass(frozen=True)
class MonthlySpending:
    month: str  # YYYY-MM
    total: int


@dataclass(frozen=True)
class CategorySpending:
    name: str
    value: int
    percentage: float


@dataclass(frozen=True)
class VendorSpending:
    vendor: str
    total: int
    count: int


@dataclass(frozen=True)
class SpendingStats:
    total: Decimal
    count: int
    average: Decimal
    active_months: int
    max_amount: Decimal | None  # None when nothing matched
    min_amount: Decimal | None
