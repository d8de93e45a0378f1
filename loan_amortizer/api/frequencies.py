"""
Payment frequency endpoints
"""

from typing import List
from fastapi import APIRouter

from .schemas import FrequencyModel
from ..frequency import PaymentFrequency, periods_per_year, period_label


router = APIRouter()


@router.get("", response_model=List[FrequencyModel])
async def list_frequencies():
    """List supported payment frequencies"""
    return [
        FrequencyModel(
            frequency=frequency.value,
            periods_per_year=periods_per_year(frequency),
            period_label=period_label(frequency)
        )
        for frequency in PaymentFrequency
    ]
