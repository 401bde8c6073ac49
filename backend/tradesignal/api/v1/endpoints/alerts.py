"""
Market Alert API Endpoints
"""

from fastapi import APIRouter

from tradesignal.schemas.market import MarketSnapshot
from tradesignal.schemas.alerts import MarketAlert
from tradesignal.services.alerts import get_alert_service

router = APIRouter()


@router.post("", response_model=list[MarketAlert])
async def get_market_alerts(snapshot: MarketSnapshot):
    """
    Generate prioritized market alerts from a market snapshot.

    Leave a source out (null) when it could not be fetched; only that
    category is skipped.
    """
    service = get_alert_service()
    return await service.execute(snapshot)
