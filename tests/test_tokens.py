from types import SimpleNamespace

import jwt
import pytest

from tests.conftest import TEST_SECRET
from utils.auth import decode_token, generate_token
from utils.errors import InvalidTokenError, TokenExpiredError


@pytest.fixture
def account():
    return SimpleNamespace(id=7, user_id="driver_AB12CD", role="driver")


def test_fresh_token_round_trips_identity(app, account):
    claims = decode_token(generate_token(account))
    assert claims == {"id": 7, "user_id": "driver_AB12CD", "role": "driver"}


def test_token_lifetime_defaults_to_seven_days(app, account):
    payload = jwt.decode(generate_token(account), TEST_SECRET, algorithms=["HS256"])
    assert payload["exp"] - payload["iat"] == 7 * 24 * 3600


def test_expired_token_is_rejected_as_expired(app, account):
    token = generate_token(account, expires_in=-5)
    with pytest.raises(TokenExpiredError):
        decode_token(token)


def test_token_signed_with_other_secret_is_invalid(app, account):
    token = generate_token(account, secret="someone-else")
    with pytest.raises(InvalidTokenError):
        decode_token(token)


def test_tampered_token_is_invalid(app, account):
    token = generate_token(account)
    header, payload, signature = token.split(".")
    with pytest.raises(InvalidTokenError):
        decode_token(".".join([header, payload, signature[::-1]]))


def test_garbage_is_invalid(app):
    with pytest.raises(InvalidTokenError):
        decode_token("not-a-jwt")


def test_token_without_role_claims_is_invalid(app):
    token = jwt.encode({"user": {"user_id": "x"}}, TEST_SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        decode_token(token)


def test_expired_is_distinct_from_invalid():
    assert not issubclass(TokenExpiredError, InvalidTokenError)
    assert TokenExpiredError.code != InvalidTokenError.code
