"""
Registration, login and current-user endpoints under /auth.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.errors import DuplicateKeyError

from ..auth import create_access_token, hash_password, verify_password
from ..crud import parse_object_id
from ..models import User
from ..schemas import AuthResponse, CurrentUserResponse, TokenClaims, UserCreate, UserLogin, UserOut
from ..dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: UserCreate):
    # Check if email already exists
    if await User.find_one(User.email == payload.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User with this email already exists")

    user = User(email=payload.email, password=hash_password(payload.password), role=payload.role)
    try:
        await user.insert()
    except DuplicateKeyError as e:
        # Lost a race with a concurrent registration for the same email
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="User with this email already exists"
        ) from e

    logger.info("AUTH register user_id=%s email=%s role=%s", user.id, user.email, user.role.value)
    return AuthResponse(
        message="User registered successfully",
        token=create_access_token(user),
        user=UserOut.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin):
    user = await User.find_one(User.email == credentials.email)
    if not user or not verify_password(credentials.password, user.password):
        logger.info("AUTH login_failure email=%s", credentials.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    logger.info("AUTH login_success user_id=%s email=%s", user.id, user.email)
    return AuthResponse(
        message="Login successful",
        token=create_access_token(user),
        user=UserOut.model_validate(user),
    )


@router.get("/me", response_model=CurrentUserResponse)
async def me(claims: TokenClaims = Depends(get_current_user)):
    user = await User.get(parse_object_id(claims.user_id, "user"))
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return CurrentUserResponse(user=UserOut.model_validate(user))
