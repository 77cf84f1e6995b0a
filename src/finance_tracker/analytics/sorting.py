from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Literal, get_args

from .models import Transaction

SortKey = Literal["date", "amount", "vendor"]
SortDirection = Literal["asc", "desc"]


@dataclass(frozen=True)
class SortSpec:
    key: SortKey = "date"
    direction: SortDirection = "desc"

    def __post_init__(self) -> None:
        if self.key not in get_args(SortKey):
            raise ValueError(f"Unknown sort key: {self.key!r}")
        if self.direction not in get_args(SortDirection):
            raise ValueError(f"Unknown sort direction: {self.direction!r}")


def collation_key(text: str) -> tuple[str, str]:
    """
    Accent- and case-insensitive primary order ("école" next to "Ecole"),
    raw text as the secondary order so only identical names tie.
    """
    decomposed = unicodedata.normalize("NFKD", text or "")
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text or ""


_KEYS: dict[str, Callable[[Transaction], Any]] = {
    "date": lambda t: t.date,
    "amount": lambda t: t.amount,
    "vendor": lambda t: collation_key(t.vendor),
}


def sort_transactions(
    transactions: Iterable[Transaction],
    key: SortKey = "date",
    direction: SortDirection = "desc",
) -> list[Transaction]:
    # sorted() keeps equal elements in input order for reverse=True as well
    spec = SortSpec(key=key, direction=direction)
    return sorted(transactions, key=_KEYS[spec.key], reverse=spec.direction == "desc")
