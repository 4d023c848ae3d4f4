"""Password hashing and bearer token handling."""
import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from ..config import Settings, get_settings
from .errors import UnauthorizedError

# Suppress harmless bcrypt version warnings from Passlib
logging.getLogger("passlib.handlers.bcrypt").setLevel(logging.ERROR)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a plain password with bcrypt; plain text is never stored."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: str, settings: Settings | None = None) -> str:
    """Signed token identifying ``user_id``, valid for the configured number of days."""
    settings = settings or get_settings()
    expire = datetime.now(timezone.utc) + timedelta(days=settings.access_token_expire_days)
    payload = {"sub": user_id, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings | None = None) -> str:
    """
    Verify a token and return the user id it carries.

    Raises:
        UnauthorizedError: Bad signature, expired, or no subject.
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise UnauthorizedError("Invalid or expired token") from e

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedError("Invalid or expired token")
    return user_id
