"""
HTTP mapping for service errors.
"""

from fastapi import HTTPException

from tradesignal.services.base import ServiceError


def to_http_exception(error: ServiceError, status_code: int = 422) -> HTTPException:
    return HTTPException(status_code=status_code, detail=error.to_detail())
