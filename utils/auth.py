from datetime import datetime, timedelta, timezone
from functools import wraps

import jwt
from flask import current_app, g, request

from services.accounts import find_by_public_id
from utils.errors import (
    AuthenticationError,
    AuthorizationError,
    InvalidTokenError,
    NotFoundError,
    TokenExpiredError,
)
from utils.events import emit

ALGORITHM = "HS256"
DEFAULT_EXPIRES_IN = 7 * 24 * 3600
PROVIDER_ROLES = ("driver", "maid")


def generate_token(account, expires_in=None, secret=None):
    if expires_in is None:
        expires_in = current_app.config.get("JWT_EXPIRES_IN", DEFAULT_EXPIRES_IN)
    now = datetime.now(timezone.utc)
    payload = {
        "user": {
            "id": account.id,
            "user_id": account.user_id,
            "role": account.role,
        },
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, secret or current_app.config["JWT_SECRET"], algorithm=ALGORITHM)


def decode_token(token, secret=None):
    """Return the ``user`` claims of a token.

    Raises TokenExpiredError past expiry and InvalidTokenError for anything
    else wrong with it.
    """
    try:
        payload = jwt.decode(token, secret or current_app.config["JWT_SECRET"], algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError()
    except jwt.InvalidTokenError:
        raise InvalidTokenError()

    claims = payload.get("user")
    if not isinstance(claims, dict) or claims.get("role") not in PROVIDER_ROLES or not claims.get("user_id"):
        raise InvalidTokenError()
    return claims


def bearer_token():
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme != "Bearer" or not token.strip():
        raise AuthenticationError()
    return token.strip()


def authenticate_request():
    try:
        claims = decode_token(bearer_token())
    except AuthenticationError as e:
        emit("auth.rejected", path=request.path, reason=type(e).__name__)
        raise

    try:
        account = find_by_public_id(claims["user_id"], claims["role"])
    except NotFoundError:
        emit("auth.rejected", path=request.path, reason="AccountGone")
        raise InvalidTokenError()

    g.current_user = account
    g.current_role = claims["role"]
    return account


def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        authenticate_request()
        return f(*args, **kwargs)
    return decorated


def roles_required(*roles, message="Access denied"):
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            authenticate_request()
            if g.current_role not in roles:
                raise AuthorizationError(message)
            return f(*args, **kwargs)
        return decorated
    return decorator


driver_required = roles_required("driver", message="Access denied. Drivers only.")
maid_required = roles_required("maid", message="Access denied. Maids only.")
provider_required = roles_required(*PROVIDER_ROLES, message="Access denied. Service providers only.")
