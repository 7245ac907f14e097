"""
Global error handlers for the application.
"""

from fastapi import Request, FastAPI
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

from crosstab.communication import CrossTabCommunicationError
from crosstab.schemas.common import ErrorResponse


logger = logging.getLogger(__name__)


_CATEGORY_STATUS = {
    "initialization": 400,
    "send": 409,
    "broadcast": 409,
    "close": 409,
}


def register_error_handlers(app: FastAPI):
    """Register global error handlers for the application."""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors."""
        logger.error(f"Validation error: {exc}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error="validation_error",
                detail="Invalid input data"
            ).model_dump()
        )

    @app.exception_handler(CrossTabCommunicationError)
    async def communication_exception_handler(request: Request, exc: CrossTabCommunicationError):
        """Handle manager errors, reporting their category."""
        logger.error(f"Communication error ({exc.category}): {exc}")

        return JSONResponse(
            status_code=_CATEGORY_STATUS.get(exc.category, 500),
            content=ErrorResponse(
                error=exc.category,
                detail=str(exc)
            ).model_dump()
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error(f"General error: {exc}", exc_info=True)

        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="internal_error",
                detail="An internal server error occurred"
            ).model_dump()
        )
