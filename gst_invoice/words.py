"""Amounts in words under the Indian numbering system (crore, lakh, thousand)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Union

ONES = (
    "",
    "One",
    "Two",
    "Three",
    "Four",
    "Five",
    "Six",
    "Seven",
    "Eight",
    "Nine",
    "Ten",
    "Eleven",
    "Twelve",
    "Thirteen",
    "Fourteen",
    "Fifteen",
    "Sixteen",
    "Seventeen",
    "Eighteen",
    "Nineteen",
)
TENS = ("", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety")

# Most significant first; whatever is left below 100 is worded without a magnitude.
MAGNITUDES = (
    (10_000_000, "Crore"),
    (100_000, "Lakh"),
    (1_000, "Thousand"),
    (100, "Hundred"),
)

# Groups are composed from the two-digit tables only, so 100 crore is out of range.
MAX_RUPEES = 100 * 10_000_000 - 1

ZERO_SENTENCE = "Rupees Zero Only"

Amount = Union[Decimal, int, float, str]


@dataclass(frozen=True)
class AmountWords:
    rupees: str
    paise: Optional[str] = None

    def sentence(self) -> str:
        if not self.paise:
            return f"Rupees {self.rupees} Only"
        return f"Rupees {self.rupees} and Paise {self.paise} Only"


def two_digit_words(value: int) -> List[str]:
    if value < 20:
        return [ONES[value]] if value else []
    words = [TENS[value // 10]]
    if value % 10:
        words.append(ONES[value % 10])
    return words


def integer_words(value: int) -> str:
    """Words for ``0 <= value <= MAX_RUPEES``; zero is ``"Zero"``."""
    if value < 0 or value > MAX_RUPEES:
        raise ValueError(f"{value} is outside the supported range 0..{MAX_RUPEES}")
    if value == 0:
        return "Zero"

    words: List[str] = []
    remainder = value
    for size, name in MAGNITUDES:
        group, remainder = divmod(remainder, size)
        if group:
            words.extend(two_digit_words(group))
            words.append(name)
    words.extend(two_digit_words(remainder))
    return " ".join(words)


def amount_words(amount: Amount) -> AmountWords:
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    rupees = int(value)
    paise = int((value - rupees) * 100)
    return AmountWords(
        rupees=integer_words(rupees),
        paise=integer_words(paise) if paise else None,
    )


def to_words(amount: Amount) -> str:
    """``to_words(100.50) == "Rupees One Hundred and Paise Fifty Only"``.

    Supports amounts below 100 crore (``MAX_RUPEES``); larger amounts raise ValueError.
    """
    return amount_words(amount).sentence()
