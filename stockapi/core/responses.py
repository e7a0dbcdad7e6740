"""
Response envelopes and the mapping from application codes to HTTP statuses.

Every endpoint answers with ``{"isOk": bool, "data": ...}``. Failures carry
only the numeric ``rcode`` unless the app runs in a development environment,
in which case a ``debug`` block with the error details is attached.
"""
from __future__ import annotations

from enum import IntEnum
import logging
import traceback
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from stockapi.core.config import get_settings
from stockapi.domain.filters import FilterError
from stockapi.domain.schema import ValidationError

logger = logging.getLogger(__name__)


class ResponseCode(IntEnum):
    OK = 2000
    CREATED = 2001
    OK_BUT_EMPTY = 2002
    INVALID_REQUEST_INPUT = 4000
    INVALID_QUERY_INPUT = 4001
    NOT_PRIVILEGED_ENOUGH = 4304
    USER_NOT_FOUND = 4400
    ITEM_NOT_FOUND = 4401
    PARTNER_NOT_FOUND = 4402
    TRANSACTION_NOT_FOUND = 4403
    IMPORT_NOT_FOUND = 4404
    BUSINESS_NOT_FOUND = 4405
    STOREHOUSE_NOT_FOUND = 4406
    SERVER_ERROR = 5000
    DATABASE_ERROR = 7000
    DATABASE_BAD_REQUEST = 7001
    DATABASE_UNAVAILABLE = 7002
    DATABASE_VALIDATION_ERROR = 7003
    DATABASE_CREATION_CONFLICT = 7004
    UNKNOWN_ERROR = -9999


_HTTP_STATUS = {
    ResponseCode.OK: 200,
    ResponseCode.CREATED: 201,
    ResponseCode.OK_BUT_EMPTY: 200,
    ResponseCode.INVALID_REQUEST_INPUT: 400,
    ResponseCode.INVALID_QUERY_INPUT: 400,
    ResponseCode.DATABASE_BAD_REQUEST: 400,
    ResponseCode.NOT_PRIVILEGED_ENOUGH: 403,
    ResponseCode.USER_NOT_FOUND: 404,
    ResponseCode.ITEM_NOT_FOUND: 404,
    ResponseCode.PARTNER_NOT_FOUND: 404,
    ResponseCode.TRANSACTION_NOT_FOUND: 404,
    ResponseCode.IMPORT_NOT_FOUND: 404,
    ResponseCode.BUSINESS_NOT_FOUND: 404,
    ResponseCode.STOREHOUSE_NOT_FOUND: 404,
    ResponseCode.DATABASE_CREATION_CONFLICT: 409,
    ResponseCode.DATABASE_VALIDATION_ERROR: 422,
    ResponseCode.SERVER_ERROR: 500,
    ResponseCode.DATABASE_ERROR: 500,
    ResponseCode.DATABASE_UNAVAILABLE: 503,
    ResponseCode.UNKNOWN_ERROR: 500,
}

_MESSAGES = {
    ResponseCode.OK: "OK",
    ResponseCode.CREATED: "Created",
    ResponseCode.OK_BUT_EMPTY: "OK but empty",
    ResponseCode.INVALID_REQUEST_INPUT: "Invalid request input",
    ResponseCode.INVALID_QUERY_INPUT: "Invalid query input",
    ResponseCode.NOT_PRIVILEGED_ENOUGH: "Not privileged enough",
    ResponseCode.USER_NOT_FOUND: "User not found",
    ResponseCode.ITEM_NOT_FOUND: "Item not found",
    ResponseCode.PARTNER_NOT_FOUND: "Partner not found",
    ResponseCode.TRANSACTION_NOT_FOUND: "Transaction not found",
    ResponseCode.IMPORT_NOT_FOUND: "Import not found",
    ResponseCode.BUSINESS_NOT_FOUND: "Business not found",
    ResponseCode.STOREHOUSE_NOT_FOUND: "StoreHouse not found",
    ResponseCode.SERVER_ERROR: "Internal server error",
    ResponseCode.DATABASE_ERROR: "Database error",
    ResponseCode.DATABASE_BAD_REQUEST: "Database bad request",
    ResponseCode.DATABASE_UNAVAILABLE: "Database unavailable",
    ResponseCode.DATABASE_VALIDATION_ERROR: "Database validation error",
    ResponseCode.DATABASE_CREATION_CONFLICT: "Database creation conflict",
}


def http_status(code: ResponseCode | int) -> int:
    """Map an application response code to the HTTP status sent to clients."""
    try:
        return _HTTP_STATUS.get(ResponseCode(code), 500)
    except ValueError:
        return 500


def default_message(code: ResponseCode | int) -> str:
    try:
        return _MESSAGES.get(ResponseCode(code), "Unknown error")
    except ValueError:
        return "Unknown error"


def error_code_for(exc: BaseException) -> ResponseCode:
    """Pick the response code for an exception raised below the routers."""
    if isinstance(exc, ValidationError):
        if exc.rule == "unique":
            return ResponseCode.DATABASE_CREATION_CONFLICT
        return ResponseCode.DATABASE_VALIDATION_ERROR
    if isinstance(exc, FilterError):
        return ResponseCode.INVALID_QUERY_INPUT
    return ResponseCode.DATABASE_ERROR


def extract_error_details(error: Any, *, include_stack: bool = False) -> dict:
    if error is None:
        return {"message": "Unknown error occurred"}
    if isinstance(error, BaseException):
        info: dict = {"message": str(error) or error.__class__.__name__, "name": error.__class__.__name__}
        if isinstance(error, ValidationError):
            info["details"] = {error.field: error.message, "rule": error.rule}
        if include_stack and error.__traceback__ is not None:
            info["stack"] = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        return info
    if isinstance(error, str):
        return {"message": error}
    if isinstance(error, dict) and "message" in error:
        return {"message": str(error["message"]), "details": error}
    return {"message": "An error occurred", "details": error}


def success_response(code: ResponseCode, data: Any) -> JSONResponse:
    return JSONResponse(jsonable_encoder({"isOk": True, "data": data}), status_code=http_status(code))


def failure_response(code: ResponseCode, error: Any = None) -> JSONResponse:
    settings = get_settings()
    status = http_status(code)
    body: dict = {"isOk": False, "data": {"rcode": int(code)}}
    if error is not None and settings.is_development:
        info = extract_error_details(error, include_stack=True)
        debug = {"message": info.get("message") or default_message(code)}
        if info.get("details") is not None:
            debug["details"] = info["details"]
        if info.get("name"):
            debug["errorType"] = info["name"]
        if info.get("stack"):
            debug["stack"] = info["stack"]
        body["data"]["debug"] = debug
    if status >= 500:
        logger.error("Failure response rcode=%s status=%s error=%r", int(code), status, error)
    else:
        logger.debug("Failure response rcode=%s status=%s error=%r", int(code), status, error)
    return JSONResponse(jsonable_encoder(body), status_code=status)
