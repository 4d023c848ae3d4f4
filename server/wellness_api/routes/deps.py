"""Shared FastAPI dependencies."""
import datetime as dt
from typing import Optional

from fastapi import Depends, Query
from fastapi.security import OAuth2PasswordBearer

from ..database import DatabaseManager, db_manager
from ..services.accounts import User, get_user
from ..services.errors import UnauthorizedError
from ..services.metric_store import DateRange, MetricStore
from ..services.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_db() -> DatabaseManager:
    return db_manager


def get_metric_store(db: DatabaseManager = Depends(get_db)) -> MetricStore:
    return MetricStore(db)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: DatabaseManager = Depends(get_db),
) -> User:
    """Resolve the bearer token to a stored user or reject with 401."""
    if not token:
        raise UnauthorizedError("Not authenticated")

    user = get_user(db, decode_access_token(token))
    if user is None:
        raise UnauthorizedError("User no longer exists")
    return user


def get_date_range(
    start_date: Optional[dt.date] = Query(default=None, alias="startDate", description="First day, inclusive"),
    end_date: Optional[dt.date] = Query(default=None, alias="endDate", description="Last day, inclusive"),
) -> Optional[DateRange]:
    """Date filter; ignored unless both bounds are present."""
    return DateRange.from_bounds(start_date, end_date)
