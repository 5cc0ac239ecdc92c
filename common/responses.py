# common/responses.py
import functools

from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from .exceptions import LeasingError


def envelope(is_success: bool = True, message: str = "", result=None, total: int | None = None) -> dict:
    body = {"is_success": is_success, "message": message, "result": result}
    if total is not None:
        body["total"] = total
    return body


def ok(result=None, message: str = "", total: int | None = None) -> Response:
    return Response(envelope(True, message, result, total))


def fail(message: str, result=None) -> Response:
    """Web-surface failures are still HTTP 200; the flag carries the outcome."""
    return Response(envelope(False, message, result))


def fail_from(exc: LeasingError) -> Response:
    return fail(exc.message)


def page(queryset, index: int, count: int):
    """
    Skip `index` rows, take `count` rows. Returns (rows, total) where total
    is the size of the full queryset.
    """
    index = max(int(index), 0)
    count = max(int(count), 0)
    total = queryset.count()
    return list(queryset[index:index + count]), total


def first_error(errors) -> str:
    """Flatten a serializer.errors structure into one readable message."""
    if isinstance(errors, dict):
        for field, value in errors.items():
            msg = first_error(value)
            if field in ("non_field_errors", "detail"):
                return msg
            return f"{field}: {msg}"
    if isinstance(errors, (list, tuple)) and errors:
        return first_error(errors[0])
    return str(errors)


def web_action(func):
    """
    Wrap a web-surface view method: domain and validation errors come back
    as HTTP 200 with is_success=false instead of 4xx.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except LeasingError as e:
            return fail_from(e)
        except ValidationError as e:
            return fail(first_error(e.detail))
    return wrapper
