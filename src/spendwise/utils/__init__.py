"""Utility modules."""
from .logger import get_logger, set_request_context, reset_request_context
from .exceptions import (
    SpendwiseError,
    ConfigError,
    NetworkError,
    LLMError,
    UpstreamError,
    ValidationError,
    InsightRequestError
)

__all__ = [
    "get_logger",
    "set_request_context",
    "reset_request_context",
    "SpendwiseError",
    "ConfigError",
    "NetworkError",
    "LLMError",
    "UpstreamError",
    "ValidationError",
    "InsightRequestError"
]
