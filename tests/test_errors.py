"""Tests for skylight_mcp.errors."""

from skylight_mcp.errors import (
    AuthenticationError,
    ConfigurationError,
    NotFoundError,
    ParseError,
    RateLimitError,
    SkylightError,
    TransportError,
    format_error_for_mcp,
)


class TestTaxonomy:
    def test_authentication_is_recoverable_401(self):
        err = AuthenticationError()
        assert err.status_code == 401
        assert err.code == "AUTH_FAILED"
        assert err.recoverable is True
        assert "expired or invalid" in err.message

    def test_not_found(self):
        err = NotFoundError("Chore")
        assert err.message == "Chore not found"
        assert err.status_code == 404
        assert err.recoverable is False

    def test_rate_limit_carries_retry_after(self):
        err = RateLimitError(30)
        assert err.retry_after == 30
        assert "30" in err.message
        assert err.recoverable is True

    def test_rate_limit_without_retry_after(self):
        err = RateLimitError()
        assert err.retry_after is None
        assert "wait" in err.message.lower()

    def test_configuration_and_parse_are_fatal(self):
        assert ConfigurationError("bad").recoverable is False
        assert ParseError().recoverable is False
        assert ParseError().code == "PARSE_ERROR"

    def test_transport_is_recoverable(self):
        err = TransportError("connection refused")
        assert err.code == "TRANSPORT_ERROR"
        assert err.recoverable is True

    def test_all_share_base_class(self):
        for err in (AuthenticationError(), NotFoundError(), RateLimitError(), ParseError()):
            assert isinstance(err, SkylightError)


class TestFormatErrorForMcp:
    def test_authentication_guidance(self):
        text = format_error_for_mcp(AuthenticationError())
        assert text.startswith("Authentication Error:")
        assert "SKYLIGHT_EMAIL" in text

    def test_not_found_guidance(self):
        text = format_error_for_mcp(NotFoundError())
        assert "Not Found" in text
        assert "doesn't exist" in text
        assert "frame ID" in text

    def test_rate_limit_mentions_wait_time(self):
        assert "Wait 45 seconds" in format_error_for_mcp(RateLimitError(45))
        assert "Please wait a moment" in format_error_for_mcp(RateLimitError())

    def test_configuration(self):
        assert "environment variables" in format_error_for_mcp(ConfigurationError("x"))

    def test_generic_skylight_error(self):
        text = format_error_for_mcp(SkylightError("HTTP 500: boom", status_code=500))
        assert text == "Skylight Error: HTTP 500: boom"

    def test_transport(self):
        assert format_error_for_mcp(TransportError("timed out")).startswith("Connection Error:")

    def test_plain_exception(self):
        assert format_error_for_mcp(ValueError("oops")) == "Error: oops"
