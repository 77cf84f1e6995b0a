from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

CURRENCY_SIGN = "₹"


def section(title: str, lines: Iterable[str]) -> str:
    body = "\n".join(line for line in lines if line)
    return f"{title}\n{body}".strip()


def info(message: str) -> str:
    return f"ℹ️ {message}"


def warning(message: str) -> str:
    return f"⚠️ {message}"


def error(message: str) -> str:
    return f"❌ {message}"


def divider() -> str:
    return "──────────────────"


def bullets(items: Iterable[str], *, prefix: str = "• ") -> str:
    xs = [x for x in items if x]
    return "\n".join(prefix + x for x in xs)


def group_indian(digits: str) -> str:
    """'12345678' -> '1,23,45,678' (last three, then pairs)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs: list[str] = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs) + "," + tail


def money(value: Decimal | int | float | None, *, decimals: int = 0) -> str:
    """₹ with en-IN grouping. None renders as N/A."""
    if value is None:
        return "N/A"
    d = Decimal(str(value))
    q = Decimal(1).scaleb(-decimals) if decimals > 0 else Decimal(1)
    d = d.quantize(q, rounding=ROUND_HALF_UP)
    sign = "-" if d < 0 else ""
    text = f"{abs(d):f}"
    whole, _, frac = text.partition(".")
    out = group_indian(whole)
    if frac and frac.strip("0"):
        out += "." + frac
    return f"{sign}{CURRENCY_SIGN}{out}"


def report_layout(header: str, blocks: Iterable[str | None]) -> str:
    parts: list[str] = [header]
    for b in blocks:
        if b:
            parts.append(divider())
            parts.append(b)
    return "\n\n".join(parts).strip()
