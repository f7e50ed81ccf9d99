"""
Common decorators and helpers for API Gateway Lambda handlers.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import ValidationError as PydanticValidationError

from imagetransform.core.models.errors import (
    AccessDeniedError,
    DecodeError,
    EncodeError,
    ImageServiceError,
    NotFoundError,
    RepositoryFailureError,
    StorageFailureError,
    TransformationFailedError,
    UnauthorizedError,
    ValidationError,
)
from imagetransform.core.utils.constants import ERROR_CODE_INTERNAL_ERROR
from imagetransform.core.utils.response import ResponseBuilder
from imagetransform.core.utils.validators import sanitize_validation_errors

logger = Logger(service="api-gateway-handler", utc=True)

JsonDict = dict[str, Any]


def _log_error(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: Exception,
    level: str = "warning",
) -> None:
    """
    Log error with consistent structure and full context.

    Args:
        message: Log message
        handler_name: Name of the handler function
        request_id: AWS request ID
        exc: Exception that was raised
        level: Log level ('warning' or 'exception')
    """
    log_extra: dict[str, Any] = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if isinstance(exc, ImageServiceError):
        log_extra["error_code"] = exc.error_code
        log_extra["details"] = exc.details

    if level == "exception":
        # logger.exception automatically includes traceback
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Provides:
    - Automatic CORS preflight (OPTIONS) handling
    - Mapping of domain errors to HTTP responses
    - Request ID tracking and structured logging

    Client errors carry their own message. Storage, repository and codec
    failures are logged with full context and answered with a generic
    message; storage keys and tracebacks never reach the response.

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"status": "ok"})
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        # Handle CORS preflight requests
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.preflight(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)

        # Client errors (4xx) - request body or parameters
        except PydanticValidationError as exc:
            _log_error(
                "Request validation failed",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.bad_request(
                "Invalid request params",
                details={"errors": sanitize_validation_errors(exc.errors())},
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except ValidationError as exc:
            _log_error(
                "Validation error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.bad_request(
                exc.message,
                error=exc.error_code,
                details=exc.details or None,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        # Any failed transformation is reported to the caller as a bad request
        except TransformationFailedError as exc:
            _log_error(
                "Transformation failed",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="warning" if exc.is_client_error else "exception",
            )
            return ResponseBuilder.bad_request(
                exc.message,
                error=exc.cause.error_code,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except UnauthorizedError as exc:
            _log_error(
                "Unauthenticated request",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.unauthorized(
                exc.message,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except AccessDeniedError as exc:
            _log_error(
                "Permission denied in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.forbidden(
                "You don't have permission to perform this action.",
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except NotFoundError as exc:
            _log_error(
                "Resource not found",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.not_found(
                exc.message,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        # Server errors (5xx) - infrastructure and codec failures
        except (StorageFailureError, RepositoryFailureError, DecodeError, EncodeError) as exc:
            _log_error(
                "Infrastructure error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception",
            )
            return ResponseBuilder.internal_error(
                "Unable to complete the request at this time. Please try again later.",
                error=exc.error_code,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        # Catch-all for unexpected errors
        except Exception as exc:
            _log_error(
                "Unexpected error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception",
            )
            return ResponseBuilder.error(
                status=HTTPStatus.INTERNAL_SERVER_ERROR,
                message="We're experiencing technical difficulties. Please try again in a few moments.",
                error=ERROR_CODE_INTERNAL_ERROR,
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper
