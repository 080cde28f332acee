"""Runtime configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence, Tuple

SUMMARY_FIXED = "fixed"
SUMMARY_DERIVED = "derived"
SUMMARY_NONE = "none"
SUMMARY_STRATEGIES = (SUMMARY_FIXED, SUMMARY_DERIVED, SUMMARY_NONE)

POLICY_EXCLUDE = "exclude"
POLICY_REJECT = "reject"
UNBRACKETED_POLICIES = (POLICY_EXCLUDE, POLICY_REJECT)

DEFAULT_BRACKETS: Tuple[Decimal, ...] = (
    Decimal("5"),
    Decimal("12"),
    Decimal("18"),
    Decimal("28"),
)
DEFAULT_MIN_TABLE_ROWS = 10


def env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def env_choice(name: str, default: str, choices: Sequence[str]) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    return value if value in choices else default


def env_path(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def parse_brackets(raw: str) -> Tuple[Decimal, ...]:
    """Parse ``"5,12,18,28"`` into a sorted tuple of distinct rates.

    Raises ValueError for empty, negative or non-numeric entries.
    """
    rates = set()
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            rate = Decimal(part)
        except InvalidOperation as exc:
            raise ValueError(f"invalid tax bracket {part!r}") from exc
        if not rate.is_finite() or rate < 0:
            raise ValueError(f"invalid tax bracket {part!r}")
        rates.add(rate)
    if not rates:
        raise ValueError("at least one tax bracket is required")
    return tuple(sorted(rates))


def env_brackets(name: str, default: Tuple[Decimal, ...]) -> Tuple[Decimal, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return parse_brackets(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class RenderConfig:
    summary_strategy: str = SUMMARY_FIXED
    brackets: Tuple[Decimal, ...] = DEFAULT_BRACKETS
    unbracketed_policy: str = POLICY_EXCLUDE
    min_table_rows: int = DEFAULT_MIN_TABLE_ROWS
    font_path: Optional[str] = None
    font_bold_path: Optional[str] = None
    font_italic_path: Optional[str] = None

    @classmethod
    def from_env(cls) -> "RenderConfig":
        return cls(
            summary_strategy=env_choice(
                "INVOICE_SUMMARY_STRATEGY", SUMMARY_FIXED, SUMMARY_STRATEGIES
            ),
            brackets=env_brackets("INVOICE_TAX_BRACKETS", DEFAULT_BRACKETS),
            unbracketed_policy=env_choice(
                "INVOICE_UNBRACKETED_POLICY", POLICY_EXCLUDE, UNBRACKETED_POLICIES
            ),
            min_table_rows=env_int("INVOICE_MIN_TABLE_ROWS", DEFAULT_MIN_TABLE_ROWS, minimum=0),
            font_path=env_path("INVOICE_FONT_PATH"),
            font_bold_path=env_path("INVOICE_FONT_BOLD_PATH"),
            font_italic_path=env_path("INVOICE_FONT_ITALIC_PATH"),
        )
