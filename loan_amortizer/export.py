"""
Schedule Export Module

Renders an amortization schedule as plain dicts, JSON or CSV. Exports are
a derived view of the row list: amounts are rounded here and nowhere else.
"""

import csv
import io
import json
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Union

from .config import get_config
from .decimal_utils import quantize_amount
from .schedule import AmortizationRow, LoanConfig, summarize_schedule


class ExportFormat(Enum):
    """Export formats"""
    DICT = "dict"
    JSON = "json"
    CSV = "csv"


def schedule_headers(period_label: str = "Month", show_insurance: bool = False,
                     show_extra_payments: bool = False) -> List[str]:
    """Column headers of the tabular export"""
    headers = [period_label, "Initial Balance", "Payment"]
    if show_insurance:
        headers += ["Fixed Insurance", "% of Balance", "% of Payment", "Total Insurance"]
    headers += ["Total Payment", "Interest", "Principal"]
    if show_extra_payments:
        headers.append("Extra Payment")
    headers.append("Final Balance")
    return headers


def _row_values(row: AmortizationRow, places: int, show_insurance: bool,
                show_extra_payments: bool) -> List:
    def fmt(value: Decimal) -> str:
        return str(quantize_amount(value, places))

    values = [row.period, fmt(row.initial_balance), fmt(row.payment)]
    if show_insurance:
        breakdown = row.insurance_breakdown
        values += [
            fmt(breakdown.fixed),
            fmt(breakdown.percent_of_balance),
            fmt(breakdown.percent_of_payment),
            fmt(row.insurance)
        ]
    values += [fmt(row.total_payment), fmt(row.interest), fmt(row.principal)]
    if show_extra_payments:
        values.append(fmt(row.extra_payment))
    values.append(fmt(row.final_balance))
    return values


def _summary_dict(rows: List[AmortizationRow], places: int) -> Dict:
    summary = summarize_schedule(rows)
    return {
        'period_count': summary.period_count,
        'total_interest': str(quantize_amount(summary.total_interest, places)),
        'total_principal': str(quantize_amount(summary.total_principal, places)),
        'total_insurance': str(quantize_amount(summary.total_insurance, places)),
        'total_extra_payments': str(quantize_amount(summary.total_extra_payments, places)),
        'total_paid': str(quantize_amount(summary.total_paid, places)),
        'final_balance': str(quantize_amount(summary.final_balance, places)),
        'is_fully_repaid': summary.is_fully_repaid
    }


def _loan_dict(loan: LoanConfig) -> Dict:
    return {
        'principal': str(loan.principal),
        'annual_rate_percent': str(loan.annual_rate_percent),
        'total_periods': loan.total_periods,
        'frequency': loan.frequency.value,
        'period_label': loan.period_label
    }


def export_schedule(
    rows: List[AmortizationRow],
    format: ExportFormat,
    period_label: str = "Month",
    show_insurance: bool = False,
    show_extra_payments: bool = False,
    loan: Optional[LoanConfig] = None
) -> Union[Dict, str]:
    """
    Export schedule rows in specified format

    Args:
        rows: Schedule rows, as returned by generate_schedule
        format: Target format
        period_label: Header of the period column
        show_insurance: Include the insurance breakdown columns
        show_extra_payments: Include the extra payment column
        loan: Loan parameters added to DICT/JSON exports when given

    Returns:
        Dict for DICT, str for JSON and CSV
    """
    places = get_config().export_precision
    headers = schedule_headers(period_label, show_insurance, show_extra_payments)

    if format == ExportFormat.DICT:
        export = {
            'headers': headers,
            'rows': [
                dict(zip(headers, _row_values(row, places, show_insurance, show_extra_payments)))
                for row in rows
            ],
            'summary': _summary_dict(rows, places)
        }
        if loan is not None:
            export['loan'] = _loan_dict(loan)
        return export

    elif format == ExportFormat.JSON:
        export_dict = export_schedule(
            rows, ExportFormat.DICT, period_label, show_insurance, show_extra_payments, loan
        )
        return json.dumps(export_dict, indent=2, default=str)

    elif format == ExportFormat.CSV:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(headers)

        for row in rows:
            writer.writerow(_row_values(row, places, show_insurance, show_extra_payments))

        csv_content = output.getvalue()
        output.close()
        return csv_content

    else:
        raise ValueError(f"Unsupported export format: {format}")
