from typing import Any, Optional


class TDAError(Exception):
    """Base exception for every error raised by the client."""


class TransportError(TDAError):
    """
    Network failure below the HTTP layer (connection, DNS, TLS, timeout).

    The underlying `requests` exception is kept in `original` and as
    `__cause__`.
    """

    def __init__(
        self,
        message: str,
        *,
        original: Optional[BaseException] = None
    ) -> None:
        self.original = original
        super().__init__(message)


class _HTTPStatusError(TDAError):
    """Shared shape for errors carrying an HTTP status and error body."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        body: Any = None,
        raw_body: Optional[str] = None,
        decode_failed: bool = False
    ) -> None:
        self.status = status
        self.body = body
        self.raw_body = raw_body
        self.decode_failed = decode_failed
        super().__init__(message)


class AuthError(TDAError):
    """Authentication failure."""


class RefreshFailed(AuthError, _HTTPStatusError):
    """The token endpoint answered with a non-2xx status."""

    def __init__(self, *, status: int, **kwargs) -> None:
        super().__init__(
            f"Token refresh failed with HTTP {status}",
            status=status,
            **kwargs
        )


class MissingToken(AuthError):
    """An authenticated call was attempted with no access token set."""

    def __init__(self) -> None:
        super().__init__(
            "Client does not have an access token set. "
            "Call set_access_token() first."
        )


class ApiError(_HTTPStatusError):
    """A resource endpoint answered with a non-2xx status."""

    def __init__(self, *, status: int, **kwargs) -> None:
        super().__init__(
            f"API request failed with HTTP {status}",
            status=status,
            **kwargs
        )


class DecodeError(TDAError):
    """A response body does not match the expected shape."""


class MissingField(DecodeError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Missing required field: {name}")


class InvalidField(DecodeError):
    def __init__(self, name: str, expected: str) -> None:
        self.name = name
        self.expected = expected
        super().__init__(f"Field {name!r} is not a valid {expected}")


class UnknownVariant(DecodeError):
    def __init__(self, value: Any, *, field: str = "type") -> None:
        self.value = value
        self.field = field
        super().__init__(f"Unknown {field} discriminator value: {value!r}")


class MalformedResponse(TDAError):
    """A token refresh payload has an empty token or negative lifetime."""
