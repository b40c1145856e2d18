"""Custom exceptions for API layer."""

from typing import Any, Dict, Optional


class APIError(Exception):
    """Base class for API errors."""

    def __init__(
        self,
        error_code: str,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class NotFoundError(APIError):
    """Resource not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Any,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            error_code=f"{resource_type.upper().replace(' ', '_')}_NOT_FOUND",
            message=f"{resource_type.capitalize()} '{resource_id}' not found",
            status_code=404,
            details=details,
        )


class ValidationError(APIError):
    """Request validation failed."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            error_code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details=details,
        )


class TransitionRejectedError(APIError):
    """Status transition is not allowed, or its requirements are unmet."""

    def __init__(
        self,
        message: str,
        current_status: Optional[str] = None,
        next_status: Optional[str] = None,
    ):
        super().__init__(
            error_code="INVALID_TRANSITION",
            message=message,
            status_code=400,
            details={"current_status": current_status, "next_status": next_status},
        )


class ConflictError(APIError):
    """Operation conflicts with current state."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            error_code="CONFLICT",
            message=message,
            status_code=409,
            details=details,
        )
