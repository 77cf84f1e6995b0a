from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .models import Transaction

ALL = "all"


class FilterCriteria(BaseModel):
    """
    Conjunctive filter state. ``None`` (or an empty search) means the
    criterion is inactive; the default instance matches everything.
    """

    model_config = ConfigDict(frozen=True)

    month: int | None = Field(default=None, ge=1, le=12)
    year: int | None = Field(default=None, ge=1000, le=9999)
    category: str | None = None
    vendor_search: str = ""
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None

    @model_validator(mode="after")
    def _finite_bounds(self) -> "FilterCriteria":
        for name in ("min_amount", "max_amount"):
            v = getattr(self, name)
            if v is not None and not v.is_finite():
                raise ValueError(f"{name} must be a finite number")
        return self

    @classmethod
    def from_options(
        cls,
        month: str | int | None = ALL,
        year: str | int | None = ALL,
        category: str | None = ALL,
        vendor_search: str | None = "",
        min_amount: str | float | Decimal | None = "",
        max_amount: str | float | Decimal | None = "",
    ) -> "FilterCriteria":
        """Build criteria from selector-style values ("all", "", "3", "2025")."""
        return cls(
            month=_optional_int(month),
            year=_optional_int(year),
            category=None if category in (None, "", ALL) else category,
            vendor_search=(vendor_search or ""),
            min_amount=_optional_decimal(min_amount),
            max_amount=_optional_decimal(max_amount),
        )


def _optional_int(v: str | int | None) -> int | None:
    if v is None:
        return None
    if isinstance(v, int):
        return v
    s = v.strip()
    if not s or s.lower() == ALL:
        return None
    return int(s)


def _optional_decimal(v: str | float | Decimal | None) -> Decimal | None:
    if v is None:
        return None
    if isinstance(v, Decimal):
        return v
    s = str(v).strip()
    if not s:
        return None
    try:
        return Decimal(s)
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {v!r}") from e


def active_filter_count(criteria: FilterCriteria) -> int:
    return sum(
        1
        for active in (
            criteria.month is not None,
            criteria.category is not None,
            criteria.year is not None,
            bool(criteria.vendor_search),
            criteria.min_amount is not None,
            criteria.max_amount is not None,
        )
        if active
    )


def matches(t: Transaction, criteria: FilterCriteria, needle: str | None = None) -> bool:
    if criteria.month is not None and t.date.month != criteria.month:
        return False
    if criteria.year is not None and t.date.year != criteria.year:
        return False
    if criteria.category is not None and t.category != criteria.category:
        return False
    if needle is None:
        needle = criteria.vendor_search.lower()
    if needle and needle not in t.vendor.lower():
        return False
    if criteria.min_amount is not None and t.amount < criteria.min_amount:
        return False
    if criteria.max_amount is not None and t.amount > criteria.max_amount:
        return False
    return True


def filter_transactions(
    transactions: Iterable[Transaction], criteria: FilterCriteria
) -> list[Transaction]:
    needle = criteria.vendor_search.lower()
    return [t for t in transactions if matches(t, criteria, needle)]
