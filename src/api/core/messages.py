"""Centralized message codes and default messages for API responses."""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel


class MessageCode(str, Enum):
    """Centralized message codes for API responses."""

    # Success codes
    SUCCESS = "SUCCESS"

    # Authentication
    AUTH_REQUIRED = "AUTH_REQUIRED"
    INVALID_API_KEY = "INVALID_API_KEY"

    # Credit gate
    CREDIT_ALREADY_COUNTED = "CREDIT_ALREADY_COUNTED"
    INSUFFICIENT_CREDITS = "INSUFFICIENT_CREDITS"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"

    # Video catalog
    NO_VIDEOS_AVAILABLE = "NO_VIDEOS_AVAILABLE"
    NO_ENGLISH_VIDEOS_AVAILABLE = "NO_ENGLISH_VIDEOS_AVAILABLE"

    # Rate limiting
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Validation errors
    INVALID_INPUT = "INVALID_INPUT"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"

    # Generic errors
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"


# Default messages for each message code
DEFAULT_MESSAGES = {
    MessageCode.SUCCESS: "Operation completed successfully",
    # Authentication
    MessageCode.AUTH_REQUIRED: "Authentication required",
    MessageCode.INVALID_API_KEY: "Invalid internal API key",
    # Credit gate
    MessageCode.CREDIT_ALREADY_COUNTED: "Credit already counted for this video",
    MessageCode.INSUFFICIENT_CREDITS: "Insufficient credits",
    MessageCode.ACCOUNT_NOT_FOUND: "Account not found",
    # Video catalog
    MessageCode.NO_VIDEOS_AVAILABLE: "No analyzed videos are available yet.",
    MessageCode.NO_ENGLISH_VIDEOS_AVAILABLE: "No English analyzed videos are available yet.",
    # Rate limiting
    MessageCode.RATE_LIMIT_EXCEEDED: "Rate limit exceeded",
    # Validation errors
    MessageCode.INVALID_INPUT: "Invalid input provided",
    MessageCode.FILE_TOO_LARGE: "Request body too large",
    # Generic errors
    MessageCode.SERVICE_UNAVAILABLE: "Service temporarily unavailable, retry later",
    MessageCode.INTERNAL_ERROR: "Internal server error",
    MessageCode.BAD_REQUEST: "Bad request",
    MessageCode.NOT_FOUND: "Resource not found",
}

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Base API response model with consistent structure and proper typing."""

    message_code: MessageCode
    message: str
    data: T | None = None

    @classmethod
    def success(
        cls,
        message_code: MessageCode = MessageCode.SUCCESS,
        message: str | None = None,
        data: T | None = None,
    ) -> "APIResponse[T]":
        """Create a success response."""
        return cls(
            message_code=message_code,
            message=message or get_default_message(message_code),
            data=data,
        )


def get_default_message(message_code: MessageCode) -> str:
    """Get default message for a message code."""
    return DEFAULT_MESSAGES.get(message_code, "Operation completed")
