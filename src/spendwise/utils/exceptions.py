"""Custom exception classes for Spendwise."""


class SpendwiseError(Exception):
    """Base exception for Spendwise."""
    pass


class ConfigError(SpendwiseError):
    """Configuration-related errors."""
    pass


class NetworkError(SpendwiseError):
    """Network and API-related errors."""
    pass


class LLMError(SpendwiseError):
    """LLM processing errors."""
    pass


class UpstreamError(LLMError):
    """The completion call to the model provider failed outright."""
    pass


class ValidationError(SpendwiseError):
    """Data validation errors."""
    pass


class InsightRequestError(NetworkError):
    """The insight service returned a non-success response or was unreachable."""

    def __init__(self, message: str = "Failed to fetch insights", status_code: int = None):
        super().__init__(message)
        self.status_code = status_code
