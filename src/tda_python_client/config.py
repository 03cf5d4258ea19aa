from dataclasses import dataclass
from typing import Optional
import os


DEFAULT_API_BASE = "https://api.tdameritrade.com/v1"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ClientConfig:
    """
    Endpoint and transport settings for a `TDAClient`.

    Attributes
    ----------
    api_base : str
        Base URL of the REST API, without a trailing slash.
    token_url : str, optional
        OAuth2 token endpoint. Defaults to ``{api_base}/oauth2/token``.
    timeout : float
        Timeout in seconds handed to `requests` for every call.
    """

    api_base: str = DEFAULT_API_BASE
    token_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "api_base", self.api_base.rstrip("/"))
        if self.token_url is None:
            object.__setattr__(
                self, "token_url", f"{self.api_base}/oauth2/token"
            )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Build a configuration from ``TDA_API_BASE``, ``TDA_TOKEN_URL`` and
        ``TDA_TIMEOUT``. Unset variables fall back to the defaults.
        """
        timeout = os.getenv("TDA_TIMEOUT")
        return cls(
            api_base=os.getenv("TDA_API_BASE", DEFAULT_API_BASE),
            token_url=os.getenv("TDA_TOKEN_URL"),
            timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
        )
