from dataclasses import dataclass
from typing import Optional, Tuple
import time

from .exceptions import MalformedResponse
from .responses import TokenRefreshResponse


# Sentinel expiry meaning "unknown", which always reads as expired.
UNKNOWN_EXPIRY = 0


def _now() -> int:
    return int(time.time())


@dataclass(frozen=True)
class AccessToken:
    """
    An OAuth2 bearer token and its absolute expiry.

    Instances are immutable. Refreshing means building a new `AccessToken`
    and handing it to `TDAClient.set_access_token()`.

    Attributes
    ----------
    token : str
        Opaque bearer string sent in the ``Authorization`` header.
    expires_at : int
        Expiry as seconds since epoch. ``UNKNOWN_EXPIRY`` (0) when the
        caller supplies a token whose lifetime is not known.
    scope : tuple of str
        Capabilities granted to the token.
    """

    token: str
    expires_at: int = UNKNOWN_EXPIRY
    scope: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "scope", tuple(self.scope))

    @classmethod
    def from_refresh_response(
        cls,
        response: TokenRefreshResponse,
        now: Optional[int] = None
    ) -> "AccessToken":
        """
        Convert a token endpoint response into an `AccessToken`.

        The relative ``expires_in`` is anchored at `now`, so the reference
        time is controlled by the caller.

        Parameters
        ----------
        response : TokenRefreshResponse
            Decoded payload returned by `TDAClient.get_access_token()`.
        now : int, optional
            Reference time in epoch seconds. Defaults to the current time.

        Returns
        -------
        AccessToken

        Raises
        ------
        MalformedResponse
            If the token string is empty or ``expires_in`` is negative.
        """
        if not response.access_token:
            raise MalformedResponse("Token response has an empty access_token.")

        if response.expires_in < 0:
            raise MalformedResponse(
                f"Token response has a negative expires_in: "
                f"{response.expires_in}"
            )

        if now is None:
            now = _now()

        return cls(
            token=response.access_token,
            expires_at=now + response.expires_in,
            scope=response.scopes(),
        )

    def has_expired(self, now: Optional[int] = None) -> bool:
        """Return True once `now` has reached ``expires_at``."""
        if now is None:
            now = _now()
        return now >= self.expires_at

    def expires_in(self, now: Optional[int] = None) -> int:
        """Seconds left before expiry, never negative."""
        if now is None:
            now = _now()
        return max(self.expires_at - now, 0)
