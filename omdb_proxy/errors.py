from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when startup configuration is missing or malformed."""


class OmdbError(Exception):
    """Base class for failures talking to OMDB."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UpstreamHttpError(OmdbError):
    """OMDB answered with a non-2xx status, or could not be reached at all."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_transient(self) -> bool:
        return self.status_code is None or self.status_code >= 500


class UpstreamTimeoutError(OmdbError, TimeoutError):
    """A single attempt ran past the request timeout."""

    is_transient = True


class DecodeError(OmdbError):
    """The response body was not JSON or did not have the expected shape."""

    is_transient = False


class InvalidRequestError(UpstreamHttpError):
    """The request could not be sent at all, e.g. a malformed base URL."""

    is_transient = False
