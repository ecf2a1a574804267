"""Registration and login endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import schemas
from app.api.dependencies import get_auth_service
from app.db.session import get_db, db_transaction
from app.services.auth import AuthService
from app.services.exceptions import InvalidCredentialsError, UserAlreadyExistsError

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=schemas.UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": schemas.ErrorResponse, "description": "Email already registered"}},
)
@db_transaction()
async def register(
    user_data: schemas.RegisterRequest,
    db: AsyncSession = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Create an account. Log in separately to obtain a token."""
    try:
        user = await auth_service.register(
            db,
            username=user_data.username,
            email=user_data.email,
            password=user_data.password,
        )
    except UserAlreadyExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return schemas.UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=schemas.TokenResponse,
    responses={401: {"model": schemas.ErrorResponse, "description": "Invalid credentials"}},
)
async def login(
    credentials: schemas.LoginRequest,
    db: AsyncSession = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Exchange email and password for a bearer token."""
    try:
        token = await auth_service.login(db, email=credentials.email, password=credentials.password)
    except InvalidCredentialsError:
        logger.info("Login failed")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return schemas.TokenResponse(token=token.encode(), expires_in=token.expires_in)
