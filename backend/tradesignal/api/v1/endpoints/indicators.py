"""
Indicator API Endpoints

Endpoints for technical indicator calculations.
"""

import logging

from fastapi import APIRouter

from tradesignal.api.errors import to_http_exception
from tradesignal.schemas.market import PriceBar
from tradesignal.schemas.indicators import IndicatorBundle
from tradesignal.services.base import InsufficientDataError, InvalidBarError
from tradesignal.services.indicators import get_indicator_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{symbol}", response_model=IndicatorBundle)
async def get_indicators(symbol: str, bars: list[PriceBar]):
    """
    Calculate the indicator bundle for the latest bar.

    Bars must be ordered oldest first. Short series are accepted; indicators
    without enough history are listed under `degraded`.
    """
    symbol = symbol.upper().strip()
    service = get_indicator_service()

    try:
        return service.compute(bars)
    except (InvalidBarError, InsufficientDataError) as e:
        logger.info(f"Rejected series for {symbol}: {e.message}")
        raise to_http_exception(e)
