"""
Pydantic schemas for API requests and responses
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from ..decimal_utils import ZERO
from ..errors import InvalidConfiguration
from ..insurance import InsuranceConfig, InsuranceBreakdown
from ..schedule import (
    LoanConfig, ExtraPayment, FirstPaymentOverride, AmortizationRow, ScheduleSummary
)
from ..strategy import ExtraPaymentStrategy


class LoanModel(BaseModel):
    principal: str = Field(..., description="Decimal amount as string")
    annual_rate_percent: str = Field(..., description="Annual rate in percent, e.g. '12' for 12%")
    total_periods: int
    frequency: Optional[str] = Field(None, description="Payment frequency (monthly, bi_weekly, weekly)")

    def to_loan_config(self, default_frequency: str = "monthly") -> LoanConfig:
        return LoanConfig(
            principal=self.principal,
            annual_rate_percent=self.annual_rate_percent,
            total_periods=self.total_periods,
            frequency=self.frequency or default_frequency
        )


class InsuranceModel(BaseModel):
    enabled: bool = False
    fixed_amount_per_period: str = "0"
    percent_of_balance: str = "0"
    percent_of_payment: str = "0"

    def to_insurance_config(self) -> InsuranceConfig:
        insurance = InsuranceConfig(
            enabled=self.enabled,
            fixed_amount_per_period=self.fixed_amount_per_period,
            percent_of_balance=self.percent_of_balance,
            percent_of_payment=self.percent_of_payment
        )
        for name in ("fixed_amount_per_period", "percent_of_balance", "percent_of_payment"):
            if getattr(insurance, name) < ZERO:
                raise InvalidConfiguration(f"Insurance {name} cannot be negative")
        return insurance


class ExtraPaymentModel(BaseModel):
    id: Optional[str] = None  # Client-side identifier, ignored by the engine
    period: int
    amount: str = Field(..., description="Decimal amount as string")

    def to_extra_payment(self) -> ExtraPayment:
        return ExtraPayment(period=self.period, amount=self.amount)


class FirstPaymentOverrideModel(BaseModel):
    principal: str
    interest: str
    insurance: str = "0"

    def to_override(self) -> FirstPaymentOverride:
        return FirstPaymentOverride(
            principal=self.principal,
            interest=self.interest,
            insurance=self.insurance
        )


class ScheduleRequest(BaseModel):
    loan: LoanModel
    insurance: Optional[InsuranceModel] = None
    extra_payments: List[ExtraPaymentModel] = Field(default_factory=list)
    strategy: Optional[str] = Field(None, description="Extra payment strategy (reduce_quota, reduce_term, auto)")
    first_payment_override: Optional[FirstPaymentOverrideModel] = None

    def to_strategy(self, default: str) -> ExtraPaymentStrategy:
        return ExtraPaymentStrategy(self.strategy or default)


class InsuranceBreakdownModel(BaseModel):
    fixed: str
    percent_of_balance: str
    percent_of_payment: str
    total: str

    @classmethod
    def from_breakdown(cls, breakdown: InsuranceBreakdown) -> 'InsuranceBreakdownModel':
        return cls(
            fixed=str(breakdown.fixed),
            percent_of_balance=str(breakdown.percent_of_balance),
            percent_of_payment=str(breakdown.percent_of_payment),
            total=str(breakdown.total)
        )


class AmortizationRowModel(BaseModel):
    period: int
    initial_balance: str
    payment: str
    insurance: str
    insurance_breakdown: InsuranceBreakdownModel
    total_payment: str
    interest: str
    principal: str
    extra_payment: str
    final_balance: str

    @classmethod
    def from_row(cls, row: AmortizationRow) -> 'AmortizationRowModel':
        return cls(
            period=row.period,
            initial_balance=str(row.initial_balance),
            payment=str(row.payment),
            insurance=str(row.insurance),
            insurance_breakdown=InsuranceBreakdownModel.from_breakdown(row.insurance_breakdown),
            total_payment=str(row.total_payment),
            interest=str(row.interest),
            principal=str(row.principal),
            extra_payment=str(row.extra_payment),
            final_balance=str(row.final_balance)
        )


class ScheduleSummaryModel(BaseModel):
    period_count: int
    total_interest: str
    total_principal: str
    total_insurance: str
    total_extra_payments: str
    total_paid: str
    final_balance: str
    is_fully_repaid: bool

    @classmethod
    def from_summary(cls, summary: ScheduleSummary) -> 'ScheduleSummaryModel':
        return cls(
            period_count=summary.period_count,
            total_interest=str(summary.total_interest),
            total_principal=str(summary.total_principal),
            total_insurance=str(summary.total_insurance),
            total_extra_payments=str(summary.total_extra_payments),
            total_paid=str(summary.total_paid),
            final_balance=str(summary.final_balance),
            is_fully_repaid=summary.is_fully_repaid
        )


class ScheduleResponse(BaseModel):
    period_label: str
    strategy: str
    rows: List[AmortizationRowModel]
    summary: ScheduleSummaryModel


class FrequencyModel(BaseModel):
    frequency: str
    periods_per_year: int
    period_label: str
