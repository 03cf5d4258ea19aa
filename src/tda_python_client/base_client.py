from typing import Any, List, Optional, Tuple
import requests
import logging

from .auth import AccessToken
from .config import ClientConfig
from .exceptions import (
    ApiError,
    DecodeError,
    MissingToken,
    TransportError,
)


logger = logging.getLogger("tda.client")


def _decode_error_body(resp: requests.Response) -> dict:
    """
    Best-effort decode of an error body into keyword arguments for
    `ApiError` / `RefreshFailed`. An unparseable body is kept raw and
    flagged instead of being dropped.
    """
    try:
        return {"body": resp.json(), "raw_body": resp.text}
    except ValueError:
        return {"body": None, "raw_body": resp.text, "decode_failed": True}


class BaseAPIClient:
    """
    Base HTTP client for TD Ameritrade API endpoints.

    Holds the current access token and the endpoint configuration, builds
    bearer-authenticated requests and maps transport and HTTP failures onto
    the client's exception types. Endpoint groups (accounts, market data)
    inherit from it and add one method per API call.

    Nothing is retried or refreshed here: a 401 surfaces as `ApiError` and
    the caller decides whether to fetch a new token.
    """

    def __init__(
        self,
        access_token: Optional[AccessToken] = None,
        *,
        config: Optional[ClientConfig] = None
    ) -> None:
        self.access_token = access_token
        self.config = config or ClientConfig()

    def _url(self, path: str) -> str:
        return f"{self.config.api_base}/{path.lstrip('/')}"

    def _auth_headers(self) -> dict:
        # Read the token once so a concurrent set_access_token() can't
        # split a request between two tokens.
        token = self.access_token
        if token is None:
            raise MissingToken()
        return {"Authorization": f"Bearer {token.token}"}

    def _send(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[dict] = None,
        params: Optional[List[Tuple[str, str]]] = None,
        data: Optional[dict] = None
    ) -> requests.Response:
        """
        Dispatch one request through `requests`.

        Raises
        ------
        TransportError
            On any failure below the HTTP layer.
        """
        logger.debug(f"{method} {url} params={params}")
        try:
            resp = requests.request(
                method,
                url,
                headers=headers,
                params=params,
                data=data,
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(
                f"{method} {url} failed: {e}", original=e
            ) from e

        logger.debug(f"{method} {url} -> {resp.status_code}")
        return resp

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(f"Response body is not valid JSON: {e}") from e

    def make_request(
        self,
        method: str,
        path: str,
        params: Optional[List[Tuple[str, str]]] = None
    ) -> Any:
        """
        Execute an authenticated request and return the parsed JSON body.

        Parameters
        ----------
        method : str
            HTTP method.
        path : str
            Endpoint path relative to ``config.api_base``.
        params : list of (str, str), optional
            Encoded query parameters.

        Returns
        -------
        Any
            Parsed JSON response.

        Raises
        ------
        MissingToken
            If no access token is set. No request is sent.
        TransportError
            On connection, DNS, TLS or timeout failures.
        ApiError
            If the API answers with a non-2xx status.
        DecodeError
            If a 2xx body is not valid JSON.
        """
        headers = self._auth_headers()
        url = self._url(path)

        resp = self._send(method, url, headers=headers, params=params)
        if not 200 <= resp.status_code < 300:
            raise ApiError(
                status=resp.status_code, **_decode_error_body(resp)
            )

        return self._json(resp)
