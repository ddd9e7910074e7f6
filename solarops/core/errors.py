"""
Error formatting and the database error handler.

Exceptions coming back from the driver or from SQLAlchemy carry their useful
text in different places. ``describe_error`` pulls out the first readable
message so that API clients always get a string ``detail``.
"""
import json
import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

# Checked in order; the first non-empty string wins
MESSAGE_KEYS = ("message", "msg", "error", "description", "details", "hint", "code", "statusText")


def describe_error(error: Any) -> str:
    """
    Convert an arbitrary error value into a human-readable message.

    Handles plain strings, mappings (as returned by REST backends), objects
    exposing message-like attributes, and SQLAlchemy exceptions wrapping a
    driver error.
    """
    if error is None:
        return "Unknown error"
    if isinstance(error, str):
        return error

    if isinstance(error, SQLAlchemyError):
        orig = getattr(error, "orig", None)
        if orig is not None:
            return describe_error(orig)

    if isinstance(error, dict):
        for key in MESSAGE_KEYS:
            value = error.get(key)
            if isinstance(value, str) and value.strip():
                return value
        try:
            return json.dumps(error, default=str)
        except (TypeError, ValueError):
            return str(error)

    for key in MESSAGE_KEYS:
        value = getattr(error, key, None)
        if isinstance(value, str) and value.strip():
            return value

    text = str(error)
    if text:
        return text
    return error.__class__.__name__


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Return database failures as a 500 with a readable detail."""
    message = describe_error(exc)
    logger.error("Database error on %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=500, content={"detail": message})
