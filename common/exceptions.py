"""
Domain exceptions raised by the service functions, plus the DRF exception
handler that turns them into envelope-shaped HTTP errors.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class LeasingError(Exception):
    """Base exception for all leasing business errors"""
    default_message = "The operation could not be completed."
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(LeasingError):
    default_message = "Resource not found."
    status_code = status.HTTP_404_NOT_FOUND


class BusinessRuleError(LeasingError):
    """Raised when a delete/update would break a relationship rule"""
    default_message = "Business rule violation."


class DuplicateEmailError(LeasingError):
    default_message = "This email is already registered."


def api_exception_handler(exc, context):
    """
    LeasingError -> {"is_success": false, "message": ..., "errors": ...}
    Anything DRF knows about keeps its status but gets the same envelope keys.
    """
    if isinstance(exc, LeasingError):
        body = {"is_success": False, "message": exc.message}
        if exc.details:
            body["errors"] = exc.details
        return Response(body, status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.error("Unhandled error in %s", type(view).__name__ if view else "view", exc_info=exc)
        return None

    detail = response.data
    if isinstance(detail, dict) and "detail" in detail:
        message = str(detail["detail"])
    else:
        message = "Invalid request."
    response.data = {"is_success": False, "message": message, "errors": detail}
    return response
