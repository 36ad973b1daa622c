"""Result → HTTP response pipeline.

``render`` is a pure mapping from a use-case ``Result`` to a status code and
envelope; ``to_response`` wraps it in a ``JSONResponse``.
"""
from __future__ import annotations

from dataclasses import asdict, is_dataclass
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from gatehouse.application.common.results import ErrorKind, Failure, Result, Success

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}

_unmapped = set(ErrorKind) - set(STATUS_BY_KIND)
if _unmapped:
    raise RuntimeError(f"No HTTP status mapped for error kinds: {sorted(k.value for k in _unmapped)}")


def error_envelope(message: str, kind: ErrorKind) -> dict[str, Any]:
    return {"message": message, "errorCode": kind.value}


def render(result: Result[Any]) -> tuple[int, dict[str, Any]]:
    if isinstance(result, Success):
        value = result.value
        data = asdict(value) if is_dataclass(value) else value
        return status.HTTP_200_OK, {"data": data, "success": True}
    if isinstance(result, Failure):
        return STATUS_BY_KIND[result.kind], error_envelope(result.message, result.kind)
    raise TypeError(f"Not a Result: {type(result).__name__}")


def to_response(result: Result[Any]) -> JSONResponse:
    status_code, body = render(result)
    return JSONResponse(status_code=status_code, content=body)


def failure_response(message: str, kind: ErrorKind) -> JSONResponse:
    return to_response(Failure(message, kind))
