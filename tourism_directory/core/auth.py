from typing import Optional

from jose import JWTError, jwt

from tourism_directory.core.config import get_settings


def decode_access_token(token: str) -> Optional[str]:
    """Return the user id (``sub``) of a token issued by the hosted auth backend, or None."""
    s = get_settings()
    options = {"verify_aud": s.jwt_audience is not None}
    try:
        payload = jwt.decode(
            token,
            s.jwt_secret,
            algorithms=[s.jwt_algorithm],
            audience=s.jwt_audience,
            options=options,
        )
        sub = payload.get("sub")
        return str(sub) if sub is not None else None
    except JWTError:
        return None
