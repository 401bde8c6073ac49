"""
Trade Signal Engine - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tradesignal.core.config import settings
from tradesignal.api.v1 import router as api_v1_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"MACD state tracking: {settings.track_macd_state}")

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Trade Signal Engine API

    ## Architecture
    - **Series Validator**: Guards OHLCV input (ordering, OHLC invariants)
    - **Indicator Engine**: RSI, MACD, SMA/EMA, Bollinger, Stochastic, Williams %R, ATR
    - **Signal Fusion**: Majority vote into BUY / SELL / HOLD
    - **Market Alerts**: VIX, sector rotation, index volatility, volume anomalies

    ## Core Principles
    - Deterministic, rule-based decisions
    - Short history degrades to neutral values instead of failing
    - Malformed bars fail loudly
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Trade Signal Engine API",
        "docs": "/docs",
        "health": "/health",
    }
