import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from auth import PasswordHasher, TokenService, get_current_identity, get_password_hasher, get_token_service
from database import get_db
from schemas.user import Identity, TokenResponse, UserLogin, UserProfileUpdate, UserRegister, UserResponse
from schemas.response import StandardResponse
import crud.user as crud

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])

INVALID_CREDENTIALS = "Invalid username or password"


@router.post("/register", response_model=StandardResponse, status_code=status.HTTP_201_CREATED)
def register(
        user: UserRegister,
        db: Session = Depends(get_db),
        hasher: PasswordHasher = Depends(get_password_hasher)
):
    """Зарегистрировать нового пользователя"""
    if crud.get_user_by_username(db, username=user.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists"
        )
    if crud.get_user_by_email(db, email=user.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    user_created = crud.create_user(db, user=user, password_hash=hasher.hash(user.password))
    if not user_created:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists"
        )

    logger.info("Registered user %s (id=%s)", user_created.username, user_created.id)
    return StandardResponse(
        message="User registered successfully",
        data=UserResponse.model_validate(user_created)
    )


@router.post("/login", response_model=StandardResponse)
def login(
        credentials: UserLogin,
        db: Session = Depends(get_db),
        hasher: PasswordHasher = Depends(get_password_hasher),
        tokens: TokenService = Depends(get_token_service)
):
    """Проверить логин и пароль и выдать токен"""
    user = crud.get_user_by_username(db, username=credentials.username)
    if not user or not hasher.verify(credentials.password, user.password_hash):
        logger.info("Failed login for %s", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=INVALID_CREDENTIALS
        )

    crud.record_login(db, user)
    token = tokens.issue(user.id, user.username)
    logger.info("Login: %s (id=%s)", user.username, user.id)
    return StandardResponse(
        message="Login successful",
        data=TokenResponse(token=token, expires_in=int(tokens.expires_in.total_seconds()))
    )


@router.get("/profile", response_model=StandardResponse)
def read_profile(
        identity: Identity = Depends(get_current_identity),
        db: Session = Depends(get_db)
):
    """Профиль текущего пользователя без пароля"""
    db_user = crud.get_user(db, user_id=identity.id)
    if db_user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return StandardResponse(
        message="Profile retrieved successfully",
        data=UserResponse.model_validate(db_user)
    )


@router.put("/profile", response_model=StandardResponse)
def update_profile(
        profile: UserProfileUpdate,
        identity: Identity = Depends(get_current_identity),
        db: Session = Depends(get_db)
):
    """Обновить профиль текущего пользователя"""
    db_user = crud.get_user(db, user_id=identity.id)
    if db_user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    updated = crud.update_profile(db, db_user, profile)
    if updated is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )
    return StandardResponse(
        message="Profile updated successfully",
        data=UserResponse.model_validate(updated)
    )
