from unittest.mock import patch
from tda_python_client.auth import AccessToken, UNKNOWN_EXPIRY
from tda_python_client.exceptions import MalformedResponse
from tda_python_client.responses import TokenRefreshResponse
import pytest


@pytest.fixture
def refresh_response():
    return TokenRefreshResponse(
        access_token="abc",
        expires_in=1800,
        scope=["read"],
        token_type="Bearer",
    )


def test_from_refresh_response_anchors_expiry(refresh_response):
    token = AccessToken.from_refresh_response(refresh_response, now=1000)

    assert token == AccessToken(token="abc", expires_at=2800, scope=["read"])


def test_has_expired_boundary(refresh_response):
    token = AccessToken.from_refresh_response(refresh_response, now=1000)

    assert token.has_expired(now=2799) is False
    assert token.has_expired(now=2800) is True
    assert token.has_expired(now=5000) is True


@pytest.mark.parametrize("now,lifetime", [(0, 0), (1_700_000_000, 1), (5, 7200)])
def test_expiry_is_now_plus_lifetime(now, lifetime):
    response = TokenRefreshResponse(
        access_token="t", expires_in=lifetime, scope=""
    )
    token = AccessToken.from_refresh_response(response, now=now)

    assert token.expires_at == now + lifetime
    assert token.has_expired(now=now + lifetime - 1) is False
    assert token.has_expired(now=now + lifetime) is True


def test_space_delimited_scope_is_split():
    response = TokenRefreshResponse(
        access_token="t",
        expires_in=60,
        scope="PlaceTrades AccountAccess MoveMoney",
    )
    token = AccessToken.from_refresh_response(response, now=0)

    assert token.scope == ("PlaceTrades", "AccountAccess", "MoveMoney")


@patch("tda_python_client.auth.time.time", return_value=1000.7)
def test_reference_time_defaults_to_clock(mock_time, refresh_response):
    token = AccessToken.from_refresh_response(refresh_response)

    assert token.expires_at == 2800
    assert token.has_expired() is False
    assert token.expires_in() == 1800


def test_empty_token_is_malformed():
    response = TokenRefreshResponse(access_token="", expires_in=60, scope="")
    with pytest.raises(MalformedResponse, match="empty access_token"):
        AccessToken.from_refresh_response(response, now=0)


def test_negative_lifetime_is_malformed():
    response = TokenRefreshResponse(access_token="t", expires_in=-1, scope="")
    with pytest.raises(MalformedResponse, match="negative expires_in"):
        AccessToken.from_refresh_response(response, now=0)


def test_caller_supplied_token_without_expiry_reads_expired():
    token = AccessToken(token="YOUR_TOKEN_STRING")

    assert token.expires_at == UNKNOWN_EXPIRY
    assert token.scope == ()
    assert token.has_expired(now=1) is True
    assert token.expires_in(now=1) == 0


def test_access_token_is_immutable(refresh_response):
    token = AccessToken.from_refresh_response(refresh_response, now=0)
    with pytest.raises(AttributeError):
        token.token = "other"


def test_scope_cannot_be_changed_in_place():
    token = AccessToken(token="abc", expires_at=2800, scope=["read"])

    assert token.scope == ("read",)
    with pytest.raises(AttributeError):
        token.scope.append("write")
    assert hash(token) == hash(
        AccessToken(token="abc", expires_at=2800, scope=("read",))
    )


def test_refresh_response_scope_list_is_frozen():
    scope = ["read", "trade"]
    response = TokenRefreshResponse(access_token="t", expires_in=60, scope=scope)
    token = AccessToken.from_refresh_response(response, now=0)
    scope.append("write")

    assert response.scopes() == ("read", "trade")
    assert token.scope == ("read", "trade")
    assert {token: "cached"}[token] == "cached"
