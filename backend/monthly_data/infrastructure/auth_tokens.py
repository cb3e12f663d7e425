"""Access Tokens — HS256 JWT minting and verification via python-jose.

Invariants:
    - Tokens carry sub (user id) and exp
    - decode_access_token raises AuthenticationError for every failure mode
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt

from monthly_data.config import Settings, get_settings
from monthly_data.core.errors import AuthenticationError


def create_access_token(
    user_id: UUID | str,
    settings: Settings | None = None,
    expires_in: timedelta | None = None,
) -> str:
    settings = settings or get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_in or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims = {"sub": str(user_id), "exp": expire}
    return jwt.encode(
        claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str, settings: Settings | None = None) -> UUID:
    """Verify signature and expiry; return the user id from sub."""
    settings = settings or get_settings()
    try:
        claims = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        raise AuthenticationError() from None
    try:
        return UUID(str(claims.get("sub")))
    except ValueError:
        raise AuthenticationError() from None
