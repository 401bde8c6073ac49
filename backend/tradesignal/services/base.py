"""
Base Service Interface

Indicator, signal and alert services inherit from BaseService and report
failures through the ServiceError hierarchy below.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """
    Base class for the engine services.

    Each service:
    - Takes one validated schema as input (a series or a snapshot)
    - Returns one schema as output (bundle, signal or alert list)
    - Is a pure computation, so health checks only probe dependencies
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging and error attribution."""
        pass

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """
        Run the service on one input.

        Raises:
            ServiceError: If the input cannot be processed
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if service is healthy and can process requests."""
        pass


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")

    def to_detail(self) -> dict:
        """Flat payload for API error responses."""
        return {"message": self.message, "service": self.service_name, **self.details}


class InsufficientDataError(ServiceError):
    """Series is shorter than the minimum a computation needs."""
    pass


class InvalidBarError(ServiceError):
    """A price bar violates the OHLCV invariants."""
    pass


class PartialSourceFailure(ServiceError):
    """One market-data source is unavailable; its analysis is skipped."""
    pass


class TotalSourceFailure(ServiceError):
    """No market-data analysis could run."""
    pass


class DuplicateSymbolError(ServiceError):
    """A batch request names the same symbol more than once."""
    pass
