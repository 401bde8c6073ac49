"""
Signal Fusion Service

CONTRACT:
    Input:  SymbolSeries
    Output: TradingSignal

Deterministic rule-based vote over indicator sub-signals.
"""

from tradesignal.services.signals.interface import SignalServiceInterface
from tradesignal.services.signals.service import SignalService, get_signal_service
from tradesignal.services.signals.fusion import fuse_signal

__all__ = [
    "SignalServiceInterface",
    "SignalService",
    "get_signal_service",
    "fuse_signal",
]
