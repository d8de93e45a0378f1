"""
Schedule Module

Generates the period-by-period amortization schedule of a loan: annuity
payment, interest/principal split, insurance premiums, extra capital
payments and re-amortization after an extra payment. The generator is a
pure function of its inputs and builds a fresh row list on every call.
"""

from decimal import Decimal
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, Iterator, List, Optional
import uuid

from .config import get_config
from .decimal_utils import ZERO, HUNDRED, to_decimal
from .errors import InvalidConfiguration, InvalidExtraPayment
from .frequency import PaymentFrequency, periods_per_year, period_label
from .insurance import InsuranceConfig, InsuranceBreakdown, compute_insurance
from .logging_config import get_logger, log_action
from .strategy import ExtraPaymentStrategy, resolve_remaining_periods


logger = get_logger("loan_amortizer.schedule")


@dataclass(frozen=True)
class LoanConfig:
    """Loan parameters for one calculation run"""
    principal: Decimal
    annual_rate_percent: Decimal        # e.g., 12 for 12% APR
    total_periods: int
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY

    def __post_init__(self):
        principal = to_decimal(self.principal, "principal", InvalidConfiguration)
        rate = to_decimal(self.annual_rate_percent, "annual_rate_percent", InvalidConfiguration)
        object.__setattr__(self, 'principal', principal)
        object.__setattr__(self, 'annual_rate_percent', rate)

        if not isinstance(self.frequency, PaymentFrequency):
            try:
                object.__setattr__(self, 'frequency', PaymentFrequency(self.frequency))
            except ValueError:
                raise InvalidConfiguration(f"Unknown payment frequency: {self.frequency!r}")

        if principal <= ZERO:
            raise InvalidConfiguration("Principal must be positive")
        if rate < ZERO:
            raise InvalidConfiguration("Annual interest rate cannot be negative")
        if isinstance(self.total_periods, bool) or not isinstance(self.total_periods, int):
            raise InvalidConfiguration("Total periods must be an integer")
        if self.total_periods <= 0:
            raise InvalidConfiguration("Total periods must be at least 1")

        max_periods = get_config().max_total_periods
        if self.total_periods > max_periods:
            raise InvalidConfiguration(
                f"Total periods {self.total_periods} exceeds the maximum of {max_periods}"
            )

    @property
    def periods_per_year(self) -> int:
        return periods_per_year(self.frequency)

    @property
    def period_label(self) -> str:
        return period_label(self.frequency)

    @property
    def period_rate(self) -> Decimal:
        """Interest rate applied to the balance each period"""
        return self.annual_rate_percent / HUNDRED / Decimal(self.periods_per_year)


@dataclass(frozen=True)
class ExtraPayment:
    """Extra capital paid in addition to the scheduled payment of a period"""
    period: int
    amount: Decimal

    def __post_init__(self):
        amount = to_decimal(self.amount, "amount", InvalidExtraPayment)
        object.__setattr__(self, 'amount', amount)

        if isinstance(self.period, bool) or not isinstance(self.period, int):
            raise InvalidExtraPayment("Extra payment period must be an integer")
        if self.period < 1:
            raise InvalidExtraPayment(f"Extra payment period must be at least 1, got {self.period}")
        if amount <= ZERO:
            raise InvalidExtraPayment("Extra payment amount must be positive")

    def validate_for(self, total_periods: int) -> None:
        """Reject a payment that falls after the last period of the loan"""
        if self.period > total_periods:
            raise InvalidExtraPayment(
                f"Extra payment period {self.period} is outside the loan term of {total_periods} periods"
            )


class ExtraPaymentBook:
    """
    Editable set of extra payments keyed by id

    Entries are validated on entry against the loan term and kept in
    insertion order. The schedule generator only needs the payments
    themselves, see payments().
    """

    def __init__(self, total_periods: int):
        if total_periods <= 0:
            raise InvalidConfiguration("Total periods must be at least 1")
        self.total_periods = total_periods
        self._entries: Dict[str, ExtraPayment] = {}

    def add(self, period: int, amount) -> str:
        """
        Add an extra payment

        Args:
            period: Period the payment is made in (1-based)
            amount: Amount of extra capital

        Returns:
            Generated payment id
        """
        payment = ExtraPayment(period=period, amount=amount)
        payment.validate_for(self.total_periods)

        payment_id = str(uuid.uuid4())
        self._entries[payment_id] = payment
        return payment_id

    def update(self, payment_id: str, period: Optional[int] = None, amount=None) -> ExtraPayment:
        """Replace the period and/or amount of an existing payment"""
        current = self.get(payment_id)
        if not current:
            raise KeyError(f"Extra payment {payment_id} not found")

        payment = ExtraPayment(
            period=current.period if period is None else period,
            amount=current.amount if amount is None else amount
        )
        payment.validate_for(self.total_periods)
        self._entries[payment_id] = payment
        return payment

    def remove(self, payment_id: str) -> bool:
        """Remove a payment, returning False if it was not present"""
        return self._entries.pop(payment_id, None) is not None

    def get(self, payment_id: str) -> Optional[ExtraPayment]:
        return self._entries.get(payment_id)

    def clear(self) -> None:
        self._entries.clear()

    def items(self) -> List[tuple]:
        return list(self._entries.items())

    def payments(self) -> List[ExtraPayment]:
        """Plain payment list in insertion order"""
        return list(self._entries.values())

    def total_for_period(self, period: int) -> Decimal:
        return sum((p.amount for p in self._entries.values() if p.period == period), ZERO)

    def __iter__(self) -> Iterator[ExtraPayment]:
        return iter(self.payments())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, payment_id: str) -> bool:
        return payment_id in self._entries


@dataclass(frozen=True)
class FirstPaymentOverride:
    """Externally supplied breakdown for period 1"""
    principal: Decimal
    interest: Decimal
    insurance: Decimal = ZERO

    def __post_init__(self):
        for name in ('principal', 'interest', 'insurance'):
            value = to_decimal(getattr(self, name), name, InvalidConfiguration)
            if value < ZERO:
                raise InvalidConfiguration(f"First payment {name} cannot be negative")
            object.__setattr__(self, name, value)

    @property
    def payment(self) -> Decimal:
        return self.principal + self.interest


@dataclass(frozen=True)
class AmortizationRow:
    """Single period of an amortization schedule"""
    period: int
    initial_balance: Decimal
    payment: Decimal                    # Principal + interest
    insurance: Decimal
    insurance_breakdown: InsuranceBreakdown
    total_payment: Decimal              # Payment + insurance
    interest: Decimal
    principal: Decimal
    extra_payment: Decimal
    final_balance: Decimal

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class ScheduleSummary:
    """Totals derived from a row sequence"""
    period_count: int
    total_interest: Decimal
    total_principal: Decimal
    total_insurance: Decimal
    total_extra_payments: Decimal
    total_paid: Decimal                 # Sum of total payment + extra payment
    final_balance: Decimal

    @property
    def is_fully_repaid(self) -> bool:
        return self.final_balance == ZERO

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['is_fully_repaid'] = self.is_fully_repaid
        return data


def annuity_payment(balance: Decimal, period_rate: Decimal, remaining_periods: int) -> Decimal:
    """
    Payment that fully amortizes balance over remaining_periods

    Standard loan payment formula: B * r / (1 - (1 + r)^-n). With a zero
    rate, or one too small to move (1 + r) at the context precision, the
    formula degenerates and the balance is split linearly.
    """
    periods = max(remaining_periods, 1)

    if period_rate == ZERO:
        return balance / Decimal(periods)
    if periods == 1:
        return balance * (Decimal('1') + period_rate)

    denominator = Decimal('1') - (Decimal('1') + period_rate) ** -periods
    if denominator == ZERO:
        return balance / Decimal(periods)
    return balance * period_rate / denominator


def standard_payment(config: LoanConfig) -> Decimal:
    """Payment of the loan with no extra payments"""
    return annuity_payment(config.principal, config.period_rate, config.total_periods)


def _extra_payments_by_period(extra_payments: Iterable[ExtraPayment]) -> Dict[int, Decimal]:
    totals: Dict[int, Decimal] = {}
    for payment in extra_payments:
        totals[payment.period] = totals.get(payment.period, ZERO) + payment.amount
    return totals


def generate_schedule(
    config: LoanConfig,
    extra_payments: Iterable[ExtraPayment] = (),
    insurance: Optional[InsuranceConfig] = None,
    strategy: ExtraPaymentStrategy = ExtraPaymentStrategy.REDUCE_QUOTA,
    first_payment_override: Optional[FirstPaymentOverride] = None
) -> List[AmortizationRow]:
    """
    Generate the amortization schedule of a loan

    Args:
        config: Validated loan configuration
        extra_payments: Extra capital payments; several may target one period
        insurance: Insurance premium rules (disabled when None)
        strategy: How extra payments reshape later periods
        first_payment_override: Breakdown replacing the computed one for period 1

    Returns:
        Rows from period 1 until the balance reaches zero or the term ends
    """
    insurance = insurance or InsuranceConfig.disabled()
    strategy = ExtraPaymentStrategy(strategy)
    payoff_tolerance = Decimal(get_config().payoff_tolerance)
    extras = _extra_payments_by_period(extra_payments)

    period_rate = config.period_rate
    pinned_payment = standard_payment(config)

    rows: List[AmortizationRow] = []
    balance = config.principal
    remaining_periods = config.total_periods
    period = 1

    while period <= config.total_periods and balance > ZERO:
        payment = annuity_payment(balance, period_rate, remaining_periods)
        interest = balance * period_rate
        principal = payment - interest

        overridden = period == 1 and first_payment_override is not None
        if overridden:
            principal = first_payment_override.principal
            interest = first_payment_override.interest
            payment = first_payment_override.payment

        extra_payment = extras.get(period, ZERO)

        final_balance = balance - principal - extra_payment
        if abs(final_balance) <= payoff_tolerance and not overridden:
            # Rounding residual: settle it in this row's principal
            principal += final_balance
            payment = principal + interest
            final_balance = ZERO
        elif final_balance <= payoff_tolerance:
            final_balance = ZERO

        if overridden:
            breakdown = InsuranceBreakdown.lump_sum(first_payment_override.insurance)
        else:
            breakdown = compute_insurance(balance, payment, insurance)

        rows.append(AmortizationRow(
            period=period,
            initial_balance=balance,
            payment=payment,
            insurance=breakdown.total,
            insurance_breakdown=breakdown,
            total_payment=payment + breakdown.total,
            interest=interest,
            principal=principal,
            extra_payment=extra_payment,
            final_balance=final_balance
        ))

        remaining_periods -= 1
        if extra_payment > ZERO and final_balance > ZERO:
            remaining_periods = resolve_remaining_periods(
                strategy,
                current_payment=payment,
                extra_payment=extra_payment,
                balance=final_balance,
                period_rate=period_rate,
                pinned_payment=pinned_payment,
                remaining_periods=remaining_periods,
                period=period
            )

        balance = final_balance
        period += 1

    # Every period re-amortizes over its remaining count, so the last period
    # normally settles the loan; a balance left here means the horizon ran out.
    if balance > ZERO:
        log_action(
            logger, "warning", "Loan term exhausted with an outstanding balance",
            action="generate_schedule", resource="schedule",
            details={
                "total_periods": config.total_periods,
                "outstanding_balance": str(balance)
            }
        )

    log_action(
        logger, "debug", f"Schedule generated: {len(rows)} periods",
        action="generate_schedule", resource="schedule",
        details={
            "principal": str(config.principal),
            "annual_rate_percent": str(config.annual_rate_percent),
            "total_periods": config.total_periods,
            "frequency": config.frequency.value,
            "strategy": strategy.value,
            "extra_payment_periods": sorted(extras),
            "first_payment_override": first_payment_override is not None
        }
    )

    return rows


def summarize_schedule(rows: List[AmortizationRow]) -> ScheduleSummary:
    """Aggregate totals over a row sequence"""
    return ScheduleSummary(
        period_count=len(rows),
        total_interest=sum((r.interest for r in rows), ZERO),
        total_principal=sum((r.principal for r in rows), ZERO),
        total_insurance=sum((r.insurance for r in rows), ZERO),
        total_extra_payments=sum((r.extra_payment for r in rows), ZERO),
        total_paid=sum((r.total_payment + r.extra_payment for r in rows), ZERO),
        final_balance=rows[-1].final_balance if rows else ZERO
    )
