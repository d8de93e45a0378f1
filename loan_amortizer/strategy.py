"""
Extra Payment Strategy Module

Decides how an extra capital payment reshapes the rest of a schedule. After
an extra payment the loan has two degrees of freedom left: the periodic
payment and the number of remaining periods. REDUCE_QUOTA keeps the period
count and lets the next annuity shrink; REDUCE_TERM keeps the original
payment and shortens the term; AUTO picks between them by comparing the
extra payment with the scheduled installment.
"""

import math
from decimal import Decimal
from enum import Enum
from typing import Optional

from .decimal_utils import ZERO
from .logging_config import get_logger, log_action


logger = get_logger("loan_amortizer.strategy")

# Fractional periods within this distance above an integer round down to it
_PERIOD_EPSILON = Decimal('1e-12')


class ExtraPaymentStrategy(Enum):
    """How an extra payment is absorbed by later periods"""
    REDUCE_QUOTA = "reduce_quota"  # Same term, smaller installments
    REDUCE_TERM = "reduce_term"    # Same installment, fewer periods
    AUTO = "auto"                  # Term when extra < installment, quota otherwise


def effective_strategy(
    strategy: ExtraPaymentStrategy,
    extra_payment: Decimal,
    current_payment: Decimal
) -> ExtraPaymentStrategy:
    """Resolve AUTO into one of the two concrete strategies"""
    if strategy != ExtraPaymentStrategy.AUTO:
        return strategy
    if extra_payment < current_payment:
        return ExtraPaymentStrategy.REDUCE_TERM
    return ExtraPaymentStrategy.REDUCE_QUOTA


def periods_to_amortize(balance: Decimal, period_rate: Decimal, payment: Decimal) -> Optional[int]:
    """
    Number of payments of a fixed size needed to repay a balance.

    Returns None when the payment does not cover the period interest, in
    which case the balance never amortizes.
    """
    if payment <= ZERO:
        return None

    growth = (Decimal('1') + period_rate).ln()
    if growth == ZERO:
        # Rate too small to register at context precision
        periods = balance / payment
    else:
        coverage = balance * period_rate / payment
        if coverage >= Decimal('1'):
            return None
        periods = -(Decimal('1') - coverage).ln() / growth

    return math.ceil(periods - _PERIOD_EPSILON)


def resolve_remaining_periods(
    strategy: ExtraPaymentStrategy,
    current_payment: Decimal,
    extra_payment: Decimal,
    balance: Decimal,
    period_rate: Decimal,
    pinned_payment: Decimal,
    remaining_periods: int,
    period: Optional[int] = None
) -> int:
    """
    Remaining period count used to re-amortize after an extra payment

    Args:
        strategy: Active extra payment strategy
        current_payment: Scheduled payment of the period, before the extra payment
        extra_payment: Extra capital paid in the period
        balance: Balance left after the period (scheduled principal and extra applied)
        period_rate: Interest rate per period
        pinned_payment: Payment the loan would have with no extra payments
        remaining_periods: Periods left after this one under the current plan
        period: Period number, for logging only

    Returns:
        Periods left after this one; at least 1 while balance is positive
    """
    resolved = effective_strategy(strategy, extra_payment, current_payment)

    if resolved == ExtraPaymentStrategy.REDUCE_QUOTA:
        return remaining_periods

    needed = periods_to_amortize(balance, period_rate, pinned_payment)
    if needed is None:
        # Pinned payment cannot outpace interest: no term to give back
        return remaining_periods

    new_remaining = min(needed, remaining_periods)

    if new_remaining <= 0 and balance > ZERO:
        log_action(
            logger, "info", "Remaining term collapsed; clamped to one period",
            action="clamp_remaining_periods", resource=f"period:{period}",
            details={
                "computed_periods": new_remaining,
                "balance": str(balance),
                "strategy": resolved.value
            }
        )
        new_remaining = 1

    return new_remaining
