"""
Display formatting and export for projection results.

Kept apart from the engine: nothing in ``retireplan.core`` imports this module.
"""

from __future__ import annotations

import csv
import io
from typing import Any, Dict, List

from retireplan.models import Phase, ProjectionResult, YearlyRecord

CSV_HEADERS = [
    "Year",
    "Age",
    "Phase",
    "Annual Income",
    "Annual Contribution",
    "Investment Return",
    "Beginning Balance",
    "Year End Balance",
    "Withdrawal Rate",
    "Annual Withdrawal",
]


def format_currency(amount: float) -> str:
    """Whole dollars with thousands separators, e.g. ``$1,234`` or ``-$50``."""
    rounded = round(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def format_compact_currency(amount: float) -> str:
    """Short form for chart axes and cards: ``$1.2M``, ``$65K``, ``$950``."""
    if amount >= 1_000_000:
        text = f"{amount / 1_000_000:.1f}"
        if text.endswith(".0"):
            text = text[:-2]
        return f"${text}M"
    if amount >= 1_000:
        return f"${amount / 1_000:.0f}K"
    return format_currency(amount)


def format_percentage(rate: float, decimals: int = 1) -> str:
    """``rate`` is a decimal fraction (0.045 -> ``4.5%``)."""
    return f"{rate * 100:.{decimals}f}%"


def _csv_row(row: YearlyRecord) -> List[str]:
    if row.phase == Phase.ACCUMULATION:
        contribution, withdrawal, rate = row.cashFlow, 0.0, 0.0
        phase = "Accumulation"
    else:
        contribution, withdrawal, rate = 0.0, -row.cashFlow, row.withdrawalRate
        phase = "Withdrawal"
    return [
        str(row.year),
        str(row.age),
        phase,
        format_currency(row.annualIncome),
        format_currency(contribution),
        format_currency(row.investmentReturn),
        format_currency(row.beginningBalance),
        format_currency(row.endingBalance),
        format_percentage(rate, 2),
        format_currency(withdrawal),
    ]


def export_csv(result: ProjectionResult) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for row in [*result.accumulationSeries, *result.decumulationSeries]:
        writer.writerow(_csv_row(row))
    return buffer.getvalue()


def export_json(result: ProjectionResult) -> str:
    return result.model_dump_json(indent=2)


def chart_data(result: ProjectionResult) -> Dict[str, Any]:
    """Flatten both phases into parallel lists for a balance/cash-flow chart."""
    rows = [*result.accumulationSeries, *result.decumulationSeries]
    return {
        "labels": [row.year for row in rows],
        "ages": [row.age for row in rows],
        "balances": [row.endingBalance for row in rows],
        "cashFlows": [row.cashFlow for row in rows],
        "phases": [row.phase.value for row in rows],
        "withdrawalRates": [row.withdrawalRate for row in rows],
    }
