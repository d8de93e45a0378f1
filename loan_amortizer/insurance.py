"""
Insurance Premium Module

Computes the per-period insurance charge of a loan as the sum of a fixed
amount, a percentage of the outstanding balance and a percentage of the
scheduled payment.
"""

from decimal import Decimal
from dataclasses import dataclass

from .decimal_utils import ZERO, HUNDRED, to_decimal


@dataclass(frozen=True)
class InsuranceConfig:
    """
    Insurance premium rules applied to every period.

    Percentages are expressed in percent (0.5 means 0.5%). Negative values are
    not rejected here; the input boundary is responsible for that.
    """
    enabled: bool = False
    fixed_amount_per_period: Decimal = ZERO
    percent_of_balance: Decimal = ZERO
    percent_of_payment: Decimal = ZERO

    def __post_init__(self):
        for name in ('fixed_amount_per_period', 'percent_of_balance', 'percent_of_payment'):
            object.__setattr__(self, name, to_decimal(getattr(self, name), name))

    @classmethod
    def disabled(cls) -> 'InsuranceConfig':
        return cls(enabled=False)


@dataclass(frozen=True)
class InsuranceBreakdown:
    """Decomposition of a period's insurance premium"""
    fixed: Decimal = ZERO
    percent_of_balance: Decimal = ZERO
    percent_of_payment: Decimal = ZERO
    total: Decimal = ZERO

    @classmethod
    def lump_sum(cls, total: Decimal) -> 'InsuranceBreakdown':
        """Premium known only as a total (e.g. a first-payment override)"""
        return cls(total=total)


def compute_insurance(balance: Decimal, payment: Decimal, config: InsuranceConfig) -> InsuranceBreakdown:
    """
    Calculate insurance for a period

    Args:
        balance: Balance at the start of the period
        payment: Scheduled payment (principal + interest) of the period
        config: Insurance rules

    Returns:
        InsuranceBreakdown with all components zero when insurance is disabled
    """
    if not config.enabled:
        return InsuranceBreakdown()

    fixed = config.fixed_amount_per_period
    of_balance = balance * config.percent_of_balance / HUNDRED
    of_payment = payment * config.percent_of_payment / HUNDRED

    return InsuranceBreakdown(
        fixed=fixed,
        percent_of_balance=of_balance,
        percent_of_payment=of_payment,
        total=fixed + of_balance + of_payment
    )
