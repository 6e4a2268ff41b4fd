"""
Error handlers for the FastAPI application.
Every error is returned in the same envelope as successful responses.
"""

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import time
from typing import Dict, Any, Optional

from skatespot.core.exceptions import SkateSpotException, ErrorCode

logger = logging.getLogger(__name__)


class ErrorHandler:
    """
    Error handling with logging and per-code counters.
    """

    def __init__(self):
        self.error_counts: Dict[str, int] = {}
        self.last_error_time: Dict[str, float] = {}

    async def handle_skatespot_exception(
        self,
        request: Request,
        exc: SkateSpotException
    ) -> JSONResponse:
        """
        Handle SkateSpotException with detailed logging.

        Args:
            request: FastAPI request object
            exc: SkateSpotException instance

        Returns:
            JSONResponse with structured error information
        """
        request_id = getattr(request.state, 'request_id', 'unknown')

        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            f"SkateSpotException in request {request_id}: {exc.message}",
            extra={
                'request_id': request_id,
                'error_code': exc.error_code.value,
                'status_code': exc.status_code,
                'details': exc.details,
                'request_path': request.url.path,
                'request_method': request.method,
            }
        )

        self._track_error(exc.error_code.value)

        return self._create_error_response(
            error_code=exc.error_code.value,
            message=exc.message,
            details=exc.details,
            request_id=request_id,
            status_code=exc.status_code
        )

    async def handle_validation_error(
        self,
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        """
        Handle Pydantic validation errors with detailed field information.
        """
        request_id = getattr(request.state, 'request_id', 'unknown')

        validation_errors = []
        for error in exc.errors():
            validation_errors.append({
                'field': '.'.join(str(loc) for loc in error['loc']),
                'message': error['msg'],
                'type': error['type'],
            })

        logger.warning(
            f"Validation error in request {request_id}: {len(validation_errors)} field errors",
            extra={
                'request_id': request_id,
                'validation_errors': validation_errors,
                'request_path': request.url.path
            }
        )

        self._track_error(ErrorCode.VALIDATION_ERROR.value)

        return self._create_error_response(
            error_code=ErrorCode.VALIDATION_ERROR.value,
            message="Request validation failed",
            details={'validation_errors': validation_errors},
            request_id=request_id,
            status_code=422
        )

    async def handle_http_exception(
        self,
        request: Request,
        exc: HTTPException
    ) -> JSONResponse:
        request_id = getattr(request.state, 'request_id', 'unknown')

        error_code_map = {
            400: ErrorCode.VALIDATION_ERROR,
            404: ErrorCode.NOT_FOUND,
            413: ErrorCode.IMAGE_TOO_LARGE,
        }
        error_code = error_code_map.get(exc.status_code, ErrorCode.INTERNAL_SERVER_ERROR)

        logger.warning(
            f"HTTP exception in request {request_id}: {exc.status_code} - {exc.detail}",
            extra={
                'request_id': request_id,
                'status_code': exc.status_code,
                'request_path': request.url.path
            }
        )

        self._track_error(error_code.value)

        return self._create_error_response(
            error_code=error_code.value,
            message=str(exc.detail),
            request_id=request_id,
            status_code=exc.status_code
        )

    async def handle_generic_exception(
        self,
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """
        Handle unexpected exceptions with full error logging.
        """
        request_id = getattr(request.state, 'request_id', 'unknown')

        logger.error(
            f"Unhandled exception in request {request_id}: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                'request_id': request_id,
                'exception_type': type(exc).__name__,
                'request_path': request.url.path,
                'request_method': request.method,
            }
        )

        self._track_error(ErrorCode.INTERNAL_SERVER_ERROR.value)

        return self._create_error_response(
            error_code=ErrorCode.INTERNAL_SERVER_ERROR.value,
            message="An internal server error occurred",
            request_id=request_id,
            status_code=500
        )

    def _create_error_response(
        self,
        error_code: str,
        message: str,
        request_id: str,
        status_code: int,
        details: Optional[Dict[str, Any]] = None
    ) -> JSONResponse:
        """
        Create an error envelope: ``{"status": "error", "data": null, "error": ...}``
        with the code, details and request id alongside.
        """
        content = {
            "status": "error",
            "data": None,
            "error": message,
            "error_code": error_code,
            "details": details or {},
            "request_id": request_id,
        }
        return JSONResponse(status_code=status_code, content=jsonable_encoder(content))

    def _track_error(self, error_code: str) -> None:
        self.error_counts[error_code] = self.error_counts.get(error_code, 0) + 1
        self.last_error_time[error_code] = time.time()

        if self.error_counts[error_code] % 10 == 0:
            logger.warning(
                f"High frequency error detected: {error_code} occurred {self.error_counts[error_code]} times"
            )

    def get_error_statistics(self) -> Dict[str, Any]:
        current_time = time.time()

        return {
            'error_counts': dict(self.error_counts),
            'recent_errors': {
                code: count for code, count in self.error_counts.items()
                if current_time - self.last_error_time.get(code, 0) < 3600  # Last hour
            },
            'total_errors': sum(self.error_counts.values())
        }


def setup_error_handlers(app) -> ErrorHandler:
    """
    Set up all error handlers for the FastAPI application.

    Each application gets its own ErrorHandler, kept on ``app.state.error_handler``.

    Args:
        app: FastAPI application instance

    Returns:
        The ErrorHandler whose counters back the health endpoint
    """
    error_handler = ErrorHandler()
    app.state.error_handler = error_handler

    @app.exception_handler(SkateSpotException)
    async def skatespot_exception_handler(request: Request, exc: SkateSpotException):
        return await error_handler.handle_skatespot_exception(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return await error_handler.handle_validation_error(request, exc)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return await error_handler.handle_http_exception(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException):
        fastapi_exc = HTTPException(status_code=exc.status_code, detail=exc.detail)
        return await error_handler.handle_http_exception(request, fastapi_exc)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        return await error_handler.handle_generic_exception(request, exc)

    return error_handler
