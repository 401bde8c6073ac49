"""
Signal API Endpoints

Endpoints for fused BUY/SELL/HOLD trading signals.
"""

import logging

from fastapi import APIRouter

from tradesignal.api.errors import to_http_exception
from tradesignal.schemas.market import PriceBar, SymbolSeries
from tradesignal.schemas.signals import TradingSignal, BatchSignalResponse
from tradesignal.services.base import (
    DuplicateSymbolError,
    InsufficientDataError,
    InvalidBarError,
)
from tradesignal.services.signals import get_signal_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/batch", response_model=BatchSignalResponse)
async def get_signals(series: list[SymbolSeries]):
    """
    Generate signals for several symbols at once.

    Symbols with a malformed series are reported under `errors`; the rest
    still get a signal. Each symbol may appear only once.
    """
    service = get_signal_service()

    try:
        return await service.analyze_symbols(series)
    except DuplicateSymbolError as e:
        logger.info(f"Rejected batch: {e.message}")
        raise to_http_exception(e)


@router.post("/{symbol}", response_model=TradingSignal)
async def get_signal(symbol: str, bars: list[PriceBar]):
    """
    Generate the trading signal for one symbol.

    Returns BUY/SELL/HOLD with confidence (50-90), strength (0-100), the
    reasons that agreed with the call and each indicator's vote.
    """
    symbol = symbol.upper().strip()
    service = get_signal_service()

    try:
        return await service.execute(SymbolSeries(symbol=symbol, bars=bars))
    except (InvalidBarError, InsufficientDataError) as e:
        logger.info(f"Rejected series for {symbol}: {e.message}")
        raise to_http_exception(e)
