from typing import Dict
from fastapi import HTTPException, status
import logging

logger = logging.getLogger(__name__)


def error_response(
    message: str,
    field_errors: Dict[str, str],
    code: int = status.HTTP_422_UNPROCESSABLE_ENTITY,
) -> HTTPException:
    """Return an HTTPException with a consistent structure and log details."""
    logger.error("%s %s", message, field_errors)
    detail = {"message": message, "field_errors": field_errors}
    return HTTPException(status_code=code, detail=detail)


def not_found(entity: str, field: str) -> HTTPException:
    """404 for a missing row, e.g. ``not_found("Booking", "booking_id")``."""
    return error_response(f"{entity} not found", {field: "not_found"}, status.HTTP_404_NOT_FOUND)


def missing_fields(message: str, names: list[str]) -> HTTPException:
    """422 listing configuration parameters that were absent or unusable."""
    return error_response(message, {name: "required" for name in names})
