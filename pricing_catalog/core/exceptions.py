"""
Application Exception Handling

AppException base class for all catalog errors with FastAPI integration.
Catalog failures use the subclasses below so callers can catch the precise
cause while the API still renders one consistent error envelope.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides consistent error response format across the entire API.

    Usage:
        raise AppException("Filter key is empty", "INVALID_FILTER", 422)
        raise UnknownProductError("NotARealProduct")

    Error Codes:
        Retrieval:
            - RETRIEVAL_FAILED (502)
            - SOURCE_NOT_FOUND (404)
            - UNKNOWN_PRODUCT (404)

        Parsing:
            - PARSE_FAILED (502)

        Request:
            - INVALID_FILTER (422)
            - LOCAL_PATH_DISABLED (403)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "UNKNOWN_PRODUCT")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


# ============================================
# CATALOG ERROR TAXONOMY
# ============================================

class RetrievalError(AppException):
    """Network/transport failure or non-success HTTP status."""

    def __init__(self, message: str, url: Optional[str] = None, status: Optional[int] = None):
        details: Dict[str, Any] = {}
        if url:
            details["url"] = url
        if status is not None:
            details["status"] = status
        super().__init__(message, "RETRIEVAL_FAILED", 502, details)
        self.url = url
        self.status = status


class NotFoundError(AppException):
    """Local catalog path does not exist."""

    def __init__(self, path: str):
        super().__init__(
            f"Catalog file not found: {path}",
            "SOURCE_NOT_FOUND",
            404,
            {"path": path}
        )
        self.path = path


class UnknownProductError(AppException):
    """Product name is not present in the offer index."""

    def __init__(self, product_name: str):
        super().__init__(
            f"Unknown product '{product_name}'",
            "UNKNOWN_PRODUCT",
            404,
            {"product_name": product_name}
        )
        self.product_name = product_name


class ParseError(AppException):
    """Malformed document or missing expected collection."""

    def __init__(self, message: str, source: Optional[str] = None):
        details = {"source": source} if source else {}
        super().__init__(message, "PARSE_FAILED", 502, details)
        self.source = source


# ============================================
# FASTAPI INTEGRATION
# ============================================

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    FastAPI exception handler for AppException.

    Converts AppException to consistent JSON error response.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def invalid_filter(reason: str) -> AppException:
    """Create invalid filter exception."""
    return AppException(f"Invalid filter: {reason}", "INVALID_FILTER", 422, {"reason": reason})


def local_path_disabled() -> AppException:
    """Create local path disabled exception."""
    return AppException(
        "Local catalog paths are disabled for this API",
        "LOCAL_PATH_DISABLED",
        403
    )
