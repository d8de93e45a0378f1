"""
Loan Amortizer

Period-by-period loan amortization schedules with insurance premiums,
extra capital payments and re-amortization strategies. All financial
math uses Decimal.
"""

from .frequency import PaymentFrequency, periods_per_year, period_label
from .insurance import InsuranceConfig, InsuranceBreakdown, compute_insurance
from .strategy import ExtraPaymentStrategy
from .schedule import (
    LoanConfig, ExtraPayment, ExtraPaymentBook, FirstPaymentOverride,
    AmortizationRow, ScheduleSummary, generate_schedule, summarize_schedule
)
from .errors import InvalidConfiguration, InvalidExtraPayment

__version__ = "1.0.0"
