"""
Market Alert Rules

Independent threshold analyses over a MarketSnapshot. Each analysis returns
zero or more alerts, or raises PartialSourceFailure when the data it needs
is missing from the snapshot.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from tradesignal.schemas.alerts import (
    AlertType,
    AlertCategory,
    AlertThresholds,
    MarketAlert,
)
from tradesignal.schemas.market import MarketSnapshot, SectorPerformance
from tradesignal.services.base import PartialSourceFailure

logger = logging.getLogger(__name__)

SERVICE_NAME = "AlertService"
VIX_SYMBOL = "VIX"


def _alert(
    kind: str,
    alert_type: AlertType,
    category: AlertCategory,
    title: str,
    description: str,
    priority: int,
    data: dict,
    now: Optional[datetime] = None,
) -> MarketAlert:
    return MarketAlert(
        id=f"{kind}-{uuid4().hex}",
        type=alert_type,
        category=category,
        title=title,
        description=description,
        timestamp=now or datetime.now(timezone.utc),
        priority=priority,
        data=data,
    )


# =============================================================================
# VOLATILITY (VIX)
# =============================================================================


def _vix_reading(snapshot: MarketSnapshot) -> tuple[float, float]:
    if snapshot.vix is not None:
        return snapshot.vix, snapshot.vix_change
    if snapshot.index_returns and VIX_SYMBOL in snapshot.index_returns:
        quote = snapshot.index_returns[VIX_SYMBOL]
        return quote.value, quote.change
    raise PartialSourceFailure(SERVICE_NAME, "VIX data not available", {"source": "vix"})


def analyze_vix(
    snapshot: MarketSnapshot,
    thresholds: AlertThresholds,
    now: Optional[datetime] = None,
) -> list[MarketAlert]:
    """VIX level tier alert plus an independent spike alert."""
    vix, vix_change = _vix_reading(snapshot)
    alerts = []

    if vix >= thresholds.vix_high:
        alerts.append(_alert(
            "vix-critical",
            AlertType.CRITICAL,
            AlertCategory.VOLATILITY,
            "VIX at danger level",
            f"VIX reached {vix:.1f}, signalling extreme market instability. "
            "Tighten risk management.",
            9,
            {"vix": vix, "vix_change": vix_change, "threshold": thresholds.vix_high},
            now,
        ))
    elif vix > thresholds.vix_elevated:
        alerts.append(_alert(
            "vix-warning",
            AlertType.WARNING,
            AlertCategory.VOLATILITY,
            "VIX rising",
            f"VIX climbed to {vix:.1f}; market volatility is increasing.",
            6,
            {"vix": vix, "vix_change": vix_change, "threshold": thresholds.vix_elevated},
            now,
        ))
    elif vix < thresholds.vix_low:
        alerts.append(_alert(
            "vix-low",
            AlertType.INFO,
            AlertCategory.VOLATILITY,
            "VIX at low level",
            f"VIX is low at {vix:.1f}; watch for excessive market complacency.",
            3,
            {"vix": vix, "vix_change": vix_change, "threshold": thresholds.vix_low},
            now,
        ))

    if abs(vix_change) > thresholds.vix_spike:
        rising = vix_change > 0
        direction = "spike" if rising else "drop"
        alerts.append(_alert(
            "vix-spike",
            AlertType.WARNING if rising else AlertType.INFO,
            AlertCategory.VOLATILITY,
            f"VIX {direction}",
            f"VIX moved {abs(vix_change):.1f} points in one session, a sharp shift "
            "in market sentiment.",
            7 if rising else 4,
            {"vix": vix, "vix_change": vix_change},
            now,
        ))

    return alerts


# =============================================================================
# SECTOR ROTATION
# =============================================================================


def relative_strength(sector: SectorPerformance, thresholds: AlertThresholds) -> float:
    """Weighted 1d/5d/1m return, scaled by the weight divisor."""
    weighted = (
        sector.change_1d * thresholds.rs_weight_1d
        + sector.change_5d * thresholds.rs_weight_5d
        + sector.change_1m * thresholds.rs_weight_1m
    )
    return weighted / thresholds.rs_divisor


def _sector_name(sector: SectorPerformance, thresholds: AlertThresholds) -> str:
    return sector.sector or thresholds.sector_names.get(sector.symbol, sector.symbol)


def _sector_data(sector: SectorPerformance, thresholds: AlertThresholds) -> dict:
    data = sector.model_dump()
    data["sector"] = _sector_name(sector, thresholds)
    data["relative_strength"] = relative_strength(sector, thresholds)
    return data


def analyze_sector_rotation(
    snapshot: MarketSnapshot,
    thresholds: AlertThresholds,
    now: Optional[datetime] = None,
) -> list[MarketAlert]:
    """Rotation between strongest/weakest sectors and single-sector spikes."""
    if snapshot.sector_returns is None:
        raise PartialSourceFailure(
            SERVICE_NAME, "Sector performance not available", {"source": "sector_returns"}
        )

    sectors = snapshot.sector_returns
    alerts = []
    if not sectors:
        return alerts

    strongest = max(sectors, key=lambda s: relative_strength(s, thresholds))
    weakest = min(sectors, key=lambda s: relative_strength(s, thresholds))
    spread = relative_strength(strongest, thresholds) - relative_strength(weakest, thresholds)

    if spread > thresholds.rotation_spread:
        alerts.append(_alert(
            "sector-rotation",
            AlertType.INFO,
            AlertCategory.SECTOR,
            "Sector rotation",
            f"Capital is moving from {_sector_name(weakest, thresholds)} "
            f"into {_sector_name(strongest, thresholds)}.",
            5,
            {
                "strongest_sector": _sector_data(strongest, thresholds),
                "weakest_sector": _sector_data(weakest, thresholds),
                "strength_difference": spread,
            },
            now,
        ))

    for sector in sectors:
        move = abs(sector.change_1d)
        if move <= thresholds.sector_spike:
            continue
        major = move > thresholds.sector_spike_warning
        direction = "surges" if sector.change_1d > 0 else "plunges"
        name = _sector_name(sector, thresholds)
        alerts.append(_alert(
            f"sector-spike-{sector.symbol}",
            AlertType.WARNING if major else AlertType.INFO,
            AlertCategory.SECTOR,
            f"{name} sector {direction}",
            f"The {name} sector ({sector.symbol}) {direction} {move:.1f}% today.",
            7 if major else 4,
            _sector_data(sector, thresholds),
            now,
        ))

    return alerts


# =============================================================================
# HEADLINE INDEX VOLATILITY
# =============================================================================


def analyze_index_volatility(
    snapshot: MarketSnapshot,
    thresholds: AlertThresholds,
    now: Optional[datetime] = None,
) -> list[MarketAlert]:
    """Average absolute daily move of the headline indices."""
    if snapshot.index_returns is None:
        raise PartialSourceFailure(
            SERVICE_NAME, "Index returns not available", {"source": "index_returns"}
        )

    measures = [
        abs(snapshot.index_returns[name].change_percent)
        for name in thresholds.headline_indices
        if name in snapshot.index_returns
    ]
    if not measures:
        raise PartialSourceFailure(
            SERVICE_NAME,
            "No headline index in index returns",
            {"source": "index_returns", "expected": list(thresholds.headline_indices)},
        )

    avg_volatility = sum(measures) / len(measures)
    if avg_volatility <= thresholds.index_volatility:
        return []

    return [_alert(
        "high-volatility",
        AlertType.WARNING,
        AlertCategory.VOLATILITY,
        "High volatility environment",
        f"Headline indices moved {avg_volatility:.1f}% on average today.",
        6,
        {"avg_volatility": avg_volatility, "measures": measures},
        now,
    )]


# =============================================================================
# VOLUME ANOMALIES
# =============================================================================


def analyze_volume_anomalies(
    snapshot: MarketSnapshot,
    thresholds: AlertThresholds,
    now: Optional[datetime] = None,
) -> list[MarketAlert]:
    """One alert per symbol trading above `volume_ratio` x its average."""
    if snapshot.symbol_volumes is None:
        raise PartialSourceFailure(
            SERVICE_NAME, "Symbol volumes not available", {"source": "symbol_volumes"}
        )

    alerts = []
    for symbol, stat in snapshot.symbol_volumes.items():
        if stat.average <= 0:
            logger.debug(f"Skipping volume check for {symbol}: no average volume")
            continue

        ratio = stat.current / stat.average
        if ratio > thresholds.volume_ratio:
            alerts.append(_alert(
                f"volume-spike-{symbol}",
                AlertType.INFO,
                AlertCategory.VOLUME,
                f"{symbol} unusual volume",
                f"{symbol} is trading at {ratio:.1f}x its average volume.",
                4,
                {
                    "symbol": symbol,
                    "volume_ratio": ratio,
                    "current_volume": stat.current,
                    "avg_volume": stat.average,
                },
                now,
            ))

    return alerts


# =============================================================================
# FALLBACK
# =============================================================================


def fallback_alerts(now: Optional[datetime] = None) -> list[MarketAlert]:
    """Fixed alert set returned when no analysis could run."""
    return [
        _alert(
            "fallback-vix",
            AlertType.WARNING,
            AlertCategory.VOLATILITY,
            "VIX rising",
            "Market volatility is increasing.",
            6,
            {"source": "fallback"},
            now,
        ),
        _alert(
            "fallback-sector",
            AlertType.INFO,
            AlertCategory.SECTOR,
            "Sector rotation",
            "Capital is moving from technology into financials.",
            5,
            {"source": "fallback"},
            now,
        ),
    ]
