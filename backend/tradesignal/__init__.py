"""
Trade Signal Engine

Technical indicators, fused BUY/SELL/HOLD signals and market alerts.
"""

__version__ = "0.1.0"
