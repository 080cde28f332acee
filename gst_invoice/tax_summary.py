"""Per-bracket GST summary: taxable value split into CGST and SGST halves."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from .calculator import ZERO, line_taxable, q2
from .config import POLICY_REJECT, SUMMARY_DERIVED, SUMMARY_NONE, RenderConfig
from .models import LineItem

logger = logging.getLogger(__name__)

HALF_DIVISOR = Decimal("200")


class UnsupportedTaxRateError(ValueError):
    """Raised under the ``reject`` policy for items outside the bracket set."""

    def __init__(self, rates: Sequence[Decimal]) -> None:
        self.rates = tuple(rates)
        listed = ", ".join(f"{rate}%" for rate in self.rates)
        super().__init__(f"unsupported tax rate(s): {listed}")


@dataclass(frozen=True)
class TaxSummaryRow:
    rate: Optional[Decimal]
    taxable: Decimal
    cgst: Decimal
    sgst: Decimal
    total: Decimal


@dataclass(frozen=True)
class TaxSummary:
    rows: Tuple[TaxSummaryRow, ...]
    totals: TaxSummaryRow
    excluded: Tuple[LineItem, ...] = field(default_factory=tuple)


def bracket_row(items: Iterable[LineItem], rate: Decimal) -> TaxSummaryRow:
    taxable = sum((line_taxable(item) for item in items if item.tax_rate == rate), ZERO)
    half_tax = q2(taxable * rate / HALF_DIVISOR)
    taxable = q2(taxable)
    return TaxSummaryRow(
        rate=rate,
        taxable=taxable,
        cgst=half_tax,
        sgst=half_tax,
        total=taxable + 2 * half_tax,
    )


def summarize(items: Sequence[LineItem], brackets: Sequence[Decimal]) -> TaxSummary:
    """One row per bracket in ascending order, empty brackets included.

    The TOTAL row sums the already rounded bracket rows, so it matches what is
    printed even where it differs from a global total by a paisa.
    """
    rates = sorted(set(brackets))
    rows = tuple(bracket_row(items, rate) for rate in rates)
    totals = TaxSummaryRow(
        rate=None,
        taxable=sum((row.taxable for row in rows), ZERO),
        cgst=sum((row.cgst for row in rows), ZERO),
        sgst=sum((row.sgst for row in rows), ZERO),
        total=sum((row.total for row in rows), ZERO),
    )
    excluded = tuple(item for item in items if item.tax_rate not in rates)
    return TaxSummary(rows=rows, totals=totals, excluded=excluded)


def unbracketed_rates(items: Iterable[LineItem], brackets: Sequence[Decimal]) -> List[Decimal]:
    allowed = set(brackets)
    return sorted({item.tax_rate for item in items if item.tax_rate not in allowed})


def check_brackets(items: Sequence[LineItem], config: RenderConfig) -> None:
    if config.unbracketed_policy != POLICY_REJECT:
        return
    rates = unbracketed_rates(items, config.brackets)
    if rates:
        raise UnsupportedTaxRateError(rates)


def summary_for(items: Sequence[LineItem], config: RenderConfig) -> Optional[TaxSummary]:
    """Apply the configured summary strategy; ``None`` means no summary table."""
    check_brackets(items, config)
    if config.summary_strategy == SUMMARY_NONE:
        return None
    if config.summary_strategy == SUMMARY_DERIVED:
        brackets: Sequence[Decimal] = sorted({item.tax_rate for item in items})
    else:
        brackets = config.brackets

    summary = summarize(items, brackets)
    if summary.excluded:
        logger.warning(
            "%d item(s) at unsupported tax rate(s) %s left out of the tax summary",
            len(summary.excluded),
            ", ".join(str(rate) for rate in unbracketed_rates(summary.excluded, brackets)),
        )
    return summary
