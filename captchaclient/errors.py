"""Exception hierarchy raised by the captcha client."""

from __future__ import annotations


class TwoCaptchaError(Exception):
    """Base class for every error raised by the client."""

    label = "Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


class ValidationError(TwoCaptchaError):
    """Input given to the client was rejected before it was sent."""

    label = "Validation error"


class NetworkError(TwoCaptchaError):
    """The service answered with an unexpected HTTP status or is not ready yet."""

    label = "Network error"


class ApiError(TwoCaptchaError):
    """The service reported an error or answered with something unrecognised."""

    label = "API error"


class CaptchaTimeoutError(TwoCaptchaError):
    """No answer arrived within the allowed time."""

    label = "Timeout error"


class RequestError(TwoCaptchaError):
    """The HTTP request itself failed."""

    label = "Request error"