"""User registration and credential checks."""
import logging
import sqlite3
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..database import DatabaseManager
from .errors import ConflictError, UnauthorizedError
from .security import hash_password, verify_password

logger = logging.getLogger(__name__)


@dataclass
class User:
    """Stored account."""

    id: str
    email: str
    password_hash: str
    created_at: str


def _row_to_user(row) -> User:
    return User(
        id=row["id"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=row["created_at"],
    )


def get_user(db: DatabaseManager, user_id: str) -> Optional[User]:
    with db.connect() as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
    return _row_to_user(row) if row else None


def find_user_by_email(db: DatabaseManager, email: str) -> Optional[User]:
    with db.connect() as conn:
        row = conn.execute("SELECT * FROM users WHERE email = ?", (email.lower(),)).fetchone()
    return _row_to_user(row) if row else None


def register_user(db: DatabaseManager, email: str, password: str) -> User:
    """
    Create an account.

    Raises:
        ConflictError: The email is already registered.
    """
    email = email.lower()
    if find_user_by_email(db, email) is not None:
        logger.warning(f"[AUTH] Registration rejected, email exists: {email}")
        raise ConflictError("User already exists")

    now = datetime.now(timezone.utc).isoformat()
    user = User(id=str(uuid.uuid4()), email=email, password_hash=hash_password(password), created_at=now)
    try:
        with db.connect() as conn:
            conn.execute(
                """
                INSERT INTO users (id, email, password_hash, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (user.id, user.email, user.password_hash, now, now),
            )
    except sqlite3.IntegrityError as e:
        # Lost a race with a concurrent registration
        raise ConflictError("User already exists") from e

    logger.info(f"[AUTH] Registered user {user.id}")
    return user


def authenticate_user(db: DatabaseManager, email: str, password: str) -> User:
    """
    Check credentials.

    Raises:
        UnauthorizedError: Unknown email or wrong password; the message
            does not reveal which.
    """
    user = find_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning(f"[AUTH] Failed login for {email}")
        raise UnauthorizedError("Invalid email or password")
    return user
