"""Bearer token helpers.

Tokens are issued by the account service; this service only needs to verify
them. ``create_access_token`` exists for tooling and tests that need to mint a
token with the shared secret.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from fireguard.config import get_settings

ALGORITHM = "HS256"


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc
