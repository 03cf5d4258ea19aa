from typing import Optional

from .auth import AccessToken
from .base_client import _decode_error_body
from .config import ClientConfig
from .endpoints import AccountsAPI, MarketDataAPI
from .exceptions import RefreshFailed
from .responses import TokenRefreshResponse


class TDAClient(AccountsAPI, MarketDataAPI):
    """
    Central entry point for the TD Ameritrade API.

    Holds the OAuth2 credentials and the current access token, and exposes
    every endpoint method from `AccountsAPI` and `MarketDataAPI`.

    The client never refreshes on its own. Fetch a token with
    `get_access_token()`, convert it with
    `AccessToken.from_refresh_response()` and hand it back through
    `set_access_token()`; use `AccessToken.has_expired()` to decide when to
    do it again.

    Examples
    --------
    >>> client = TDAClient("CLIENT_ID", "REFRESH_TOKEN")
    >>> response = client.get_access_token()
    >>> client.set_access_token(AccessToken.from_refresh_response(response))
    >>> accounts = client.get_accounts()
    """

    def __init__(
        self,
        client_id: str,
        refresh_token: str,
        access_token: Optional[AccessToken] = None,
        *,
        config: Optional[ClientConfig] = None
    ) -> None:
        super().__init__(access_token, config=config)
        self._client_id = client_id
        self._refresh_token = refresh_token

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def refresh_token(self) -> str:
        return self._refresh_token

    @property
    def is_authenticated(self) -> bool:
        """True once a token is set, whether or not it has expired."""
        return self.access_token is not None

    def set_access_token(self, access_token: Optional[AccessToken]) -> None:
        """
        Replace the stored token. Expiry is not checked; passing ``None``
        returns the client to the unauthenticated state.
        """
        self.access_token = access_token

    def get_access_token(self) -> TokenRefreshResponse:
        """
        Exchange the refresh token for a new access token.

        The stored token is left untouched: the caller converts the response
        with `AccessToken.from_refresh_response()` at a reference time of its
        choosing and stores it with `set_access_token()`.

        Returns
        -------
        TokenRefreshResponse

        Raises
        ------
        RefreshFailed
            If the token endpoint answers with a non-2xx status. The
            provider's error body is attached when it is valid JSON.
        TransportError
            On connection, DNS, TLS or timeout failures.
        DecodeError
            If the success body is not a valid token payload.
        """
        payload = {
            "grant_type": "refresh_token",
            "refresh_token": self._refresh_token,
            "client_id": self._client_id,
        }

        headers = {"Content-Type": "application/x-www-form-urlencoded"}

        resp = self._send(
            "POST",
            self.config.token_url,
            headers=headers,
            data=payload
        )
        if not 200 <= resp.status_code < 300:
            raise RefreshFailed(
                status=resp.status_code, **_decode_error_body(resp)
            )

        return TokenRefreshResponse.from_json(self._json(resp))
