"""Error taxonomy for Skylight API failures and their MCP rendering."""

from typing import Optional


class SkylightError(Exception):
    """Base class for every classified Skylight failure."""

    def __init__(
        self,
        message: str,
        code: str = "HTTP_ERROR",
        status_code: Optional[int] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.recoverable = recoverable


class AuthenticationError(SkylightError):
    """Credentials were rejected (HTTP 401). May self-heal via re-login."""

    def __init__(
        self, message: str = "Authentication failed. Your token may be expired or invalid."
    ) -> None:
        super().__init__(message, "AUTH_FAILED", 401, True)


class ConfigurationError(SkylightError):
    """Missing or invalid environment configuration. Fatal at startup."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "CONFIG_ERROR", None, False)


class NotFoundError(SkylightError):
    def __init__(self, resource: str = "Resource") -> None:
        super().__init__(f"{resource} not found", "NOT_FOUND", 404, False)


class RateLimitError(SkylightError):
    def __init__(self, retry_after: Optional[int] = None) -> None:
        hint = f"Retry after {retry_after}s" if retry_after else "Please wait and try again."
        super().__init__(f"Rate limited by Skylight API. {hint}", "RATE_LIMITED", 429, True)
        self.retry_after = retry_after


class ParseError(SkylightError):
    """The API answered, but not in the shape we expected."""

    def __init__(self, message: str = "Unexpected API response format") -> None:
        super().__init__(message, "PARSE_ERROR", None, False)


class TransportError(SkylightError):
    """The request never produced a response (connection failure, timeout)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "TRANSPORT_ERROR", None, True)


def format_error_for_mcp(error: BaseException) -> str:
    """Render an exception as user-facing text with remediation guidance."""
    if isinstance(error, AuthenticationError):
        return (
            f"Authentication Error: {error.message}\n\n"
            "Your Skylight session could not be authenticated. To fix this:\n"
            "1. Check SKYLIGHT_EMAIL and SKYLIGHT_PASSWORD (or SKYLIGHT_TOKEN)\n"
            "2. If you use a captured token, capture a fresh one and update SKYLIGHT_TOKEN\n"
            "3. Make sure SKYLIGHT_FRAME_ID belongs to this account"
        )
    if isinstance(error, NotFoundError):
        return (
            f"Not Found: {error.message}\n\n"
            "This could mean:\n"
            "- The requested item doesn't exist\n"
            "- Your frame ID is incorrect\n"
            "- The item was deleted from Skylight"
        )
    if isinstance(error, RateLimitError):
        wait = (
            f"Wait {error.retry_after} seconds before trying again."
            if error.retry_after
            else "Please wait a moment and try again."
        )
        return (
            f"Rate Limited: {error.message}\n\n"
            f"The Skylight API is temporarily limiting requests. {wait}"
        )
    if isinstance(error, ConfigurationError):
        return (
            f"Configuration Error: {error.message}\n\n"
            "Please check your environment variables are set correctly."
        )
    if isinstance(error, TransportError):
        return f"Connection Error: {error.message}\n\nCould not reach Skylight. Try again shortly."
    if isinstance(error, SkylightError):
        return f"Skylight Error: {error.message}"
    return f"Error: {error}"
