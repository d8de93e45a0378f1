"""
Schedule endpoints
"""

from fastapi import APIRouter, HTTPException, Response

from .schemas import (
    ScheduleRequest, ScheduleResponse, AmortizationRowModel, ScheduleSummaryModel
)
from ..config import get_config
from ..export import ExportFormat, export_schedule
from ..logging_config import get_logger
from ..schedule import generate_schedule, summarize_schedule


router = APIRouter()
logger = get_logger("loan_amortizer.api")


def _run_schedule(request: ScheduleRequest):
    """Convert the request into engine inputs and generate the rows"""
    settings = get_config()
    loan = request.loan.to_loan_config(settings.default_frequency)
    strategy = request.to_strategy(settings.default_strategy)
    extra_payments = []
    for payment_model in request.extra_payments:
        payment = payment_model.to_extra_payment()
        payment.validate_for(loan.total_periods)
        extra_payments.append(payment)

    rows = generate_schedule(
        loan,
        extra_payments=extra_payments,
        insurance=request.insurance.to_insurance_config() if request.insurance else None,
        strategy=strategy,
        first_payment_override=(
            request.first_payment_override.to_override()
            if request.first_payment_override else None
        )
    )
    return loan, strategy, rows


@router.post("", response_model=ScheduleResponse)
async def create_schedule(request: ScheduleRequest):
    """Generate an amortization schedule"""
    try:
        loan, strategy, rows = _run_schedule(request)
    except ValueError as e:
        logger.info(f"Rejected schedule request: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return ScheduleResponse(
        period_label=loan.period_label,
        strategy=strategy.value,
        rows=[AmortizationRowModel.from_row(row) for row in rows],
        summary=ScheduleSummaryModel.from_summary(summarize_schedule(rows))
    )


@router.post("/export")
async def export_schedule_endpoint(request: ScheduleRequest, format: str = "csv"):
    """Generate a schedule and export it as CSV or JSON"""
    try:
        export_format = ExportFormat(format)
        if export_format == ExportFormat.DICT:
            raise ValueError("Use POST /schedules for structured output")
        loan, _, rows = _run_schedule(request)
    except ValueError as e:
        logger.info(f"Rejected export request: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    content = export_schedule(
        rows,
        export_format,
        period_label=loan.period_label,
        show_insurance=bool(request.insurance and request.insurance.enabled),
        show_extra_payments=bool(request.extra_payments),
        loan=loan
    )

    if export_format == ExportFormat.CSV:
        return Response(
            content=content,
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="amortization.csv"'}
        )
    return Response(content=content, media_type="application/json")
