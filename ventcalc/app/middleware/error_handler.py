import logging
import traceback
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ventcalc.services.error_types import SavedCalculationError, ValidationError

logger = logging.getLogger(__name__)


def create_error_response(error_type: str, message: str,
                          fields: Optional[List[str]] = None) -> Dict[str, Any]:
    """Create structured error response"""
    error: Dict[str, Any] = {
        "type": error_type,
        "message": message
    }
    if fields is not None:
        error["fields"] = fields
    return {"error": error}


async def validation_exception_handler(request: Request, exc: ValidationError):
    logger.info(f"Rejected calculation request: {exc.message}")
    return JSONResponse(
        status_code=422,
        content=create_error_response("ValidationError", exc.message, exc.fields)
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request body parsing failures in the same shape as calculation validation"""
    fields = []
    messages = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        name = ".".join(location) or "body"
        if name not in fields:
            fields.append(name)
        messages.append(f"{name}: {error.get('msg', 'invalid value')}")
    return JSONResponse(
        status_code=422,
        content=create_error_response(
            "ValidationError", "Validation failed: " + "; ".join(messages), fields
        )
    )


async def saved_calculation_exception_handler(request: Request, exc: SavedCalculationError):
    return JSONResponse(
        status_code=400,
        content=create_error_response("SavedCalculationError", exc.message)
    )


def make_traceback_exception_handler(debug: bool):
    async def traceback_exception_handler(request: Request, exc: Exception):
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        logger.error(tb)
        message = tb if debug else "Internal server error"
        return JSONResponse(
            status_code=500,
            content=create_error_response("InternalServerError", message)
        )
    return traceback_exception_handler


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(SavedCalculationError, saved_calculation_exception_handler)
    app.add_exception_handler(Exception, make_traceback_exception_handler(debug))
