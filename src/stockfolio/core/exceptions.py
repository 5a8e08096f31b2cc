"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when caller input is rejected before any work begins."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class ProviderError(AppError):
    """
    Failure of an upstream market data source that the caller must see.

    Raised by ticker search. Quote resolution never raises it; provider
    failures there become error messages on the quote partial.
    """

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(message, code="PROVIDER_ERROR")
