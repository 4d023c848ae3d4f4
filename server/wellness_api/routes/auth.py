"""Authentication API routes."""
from fastapi import APIRouter, Depends

from ..database import DatabaseManager
from ..models.auth import AuthResponse, Credentials, RegisterRequest, UserProfile
from ..services.accounts import User, authenticate_user, register_user
from ..services.security import create_access_token
from .deps import get_current_user, get_db

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, response_model_by_alias=True, status_code=201)
async def register(payload: RegisterRequest, db: DatabaseManager = Depends(get_db)):
    """Create an account and return a bearer token for it."""
    user = register_user(db, payload.email, payload.password)
    return AuthResponse(
        message="User created successfully",
        token=create_access_token(user.id),
        user_id=user.id,
        email=user.email,
    )


@router.post("/login", response_model=AuthResponse, response_model_by_alias=True)
async def login(payload: Credentials, db: DatabaseManager = Depends(get_db)):
    user = authenticate_user(db, payload.email, payload.password)
    return AuthResponse(
        message="Login successful",
        token=create_access_token(user.id),
        user_id=user.id,
        email=user.email,
    )


@router.get("/me", response_model=UserProfile, response_model_by_alias=True)
async def me(user: User = Depends(get_current_user)):
    """Return the authenticated user."""
    return UserProfile(user_id=user.id, email=user.email)
