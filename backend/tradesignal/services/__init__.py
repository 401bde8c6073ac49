"""
Trade Signal Services

Service layer containing all business logic.
Each service has a defined interface (contract) and implementation.
"""

from tradesignal.services.base import BaseService

__all__ = ["BaseService"]
