from .auth import AccessToken, UNKNOWN_EXPIRY
from .client import TDAClient
from .config import ClientConfig
from .exceptions import (
    TDAError,
    TransportError,
    AuthError,
    RefreshFailed,
    MissingToken,
    ApiError,
    DecodeError,
    MissingField,
    InvalidField,
    UnknownVariant,
    MalformedResponse,
)
from .responses import TokenRefreshResponse

__all__ = [
    "AccessToken",
    "UNKNOWN_EXPIRY",
    "TDAClient",
    "ClientConfig",
    "TokenRefreshResponse",
    "TDAError",
    "TransportError",
    "AuthError",
    "RefreshFailed",
    "MissingToken",
    "ApiError",
    "DecodeError",
    "MissingField",
    "InvalidField",
    "UnknownVariant",
    "MalformedResponse",
]
