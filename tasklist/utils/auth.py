from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from typing import Optional
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from tasklist.config import SECRET_KEY, ALGORITHM, BCRYPT_ROUNDS
from tasklist.errors import Unauthorized

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


@dataclass(frozen=True)
class Principal:
    """Identity carried by a verified session token."""

    email: str


def hash_password(password: str):
    """Hash a password after validating bcrypt's 72-byte limit.

    Raises ValueError if the UTF-8 encoding of the password exceeds 72 bytes.
    """
    if isinstance(password, str):
        b = password.encode("utf-8")
        if len(b) > 72:
            # make the failure explicit and consistent
            raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
    return pwd_context.hash(password)


def verify_password(plain, hashed):
    """Verify a plaintext password against a hash.

    If verification raises a ValueError (for example plain >72 bytes), return False
    to allow the caller to respond with an authentication failure instead of an error.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def create_token(data: dict):
    data = data.copy()
    # read expiry at call-time so tests (and runtime overrides) that modify
    # tasklist.config.ACCESS_TOKEN_EXPIRE_MINUTES take effect immediately
    import tasklist.config as _cfg
    expire = datetime.now(UTC) + timedelta(minutes=_cfg.ACCESS_TOKEN_EXPIRE_MINUTES)
    data.update({"exp": int(expire.timestamp())})  # JWT spec uses Unix timestamp
    return jwt.encode(data, SECRET_KEY, algorithm=ALGORITHM)


def extract_token(authorization: Optional[str], cookie_token: Optional[str]) -> Optional[str]:
    """Return the session token from the cookie, or from an Authorization: Bearer header.
    The cookie has precedence.
    """
    if cookie_token:
        return cookie_token
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


def decode_session_token(token: Optional[str]) -> Principal:
    """Verify signature and expiry of a session token and return its principal.

    Raises Unauthorized for a missing, invalid or expired token.
    """
    if not token:
        raise Unauthorized()
    try:
        # jwt.decode validates exp automatically
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise Unauthorized("Session has expired")
    except JWTError:
        raise Unauthorized()
    email = payload.get("sub")
    if not email or not isinstance(email, str):
        raise Unauthorized()
    return Principal(email=email)


def is_authenticated(token: Optional[str]) -> bool:
    try:
        decode_session_token(token)
    except Unauthorized:
        return False
    return True
