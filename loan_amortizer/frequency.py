"""
Payment Frequency Module

Maps a payment frequency to the number of periods per year and the label
used for a single period in tables and exports.
"""

from enum import Enum


class PaymentFrequency(Enum):
    """Payment frequency options"""
    MONTHLY = "monthly"        # 12 payments per year
    BI_WEEKLY = "bi_weekly"    # 26 payments per year
    WEEKLY = "weekly"          # 52 payments per year


_PERIODS_PER_YEAR = {
    PaymentFrequency.MONTHLY: 12,
    PaymentFrequency.BI_WEEKLY: 26,
    PaymentFrequency.WEEKLY: 52,
}

_PERIOD_LABELS = {
    PaymentFrequency.MONTHLY: "Month",
    PaymentFrequency.BI_WEEKLY: "Period",
    PaymentFrequency.WEEKLY: "Week",
}


def periods_per_year(frequency: PaymentFrequency) -> int:
    """Get number of payments per year"""
    return _PERIODS_PER_YEAR[frequency]


def period_label(frequency: PaymentFrequency) -> str:
    """Get the display label for one period"""
    return _PERIOD_LABELS[frequency]
