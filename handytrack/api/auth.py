"""Registration, login and profile endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from handytrack.api.deps import get_current_user
from handytrack.database import get_session
from handytrack.models.user import User
from handytrack.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserProfileResponse,
)
from handytrack.services.auth_service import authenticate, register_user
from handytrack.utils.security import create_access_token

router = APIRouter(tags=["auth"])


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id),
        user=UserProfileResponse.model_validate(user),
    )


@router.post("/auth/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, session: Session = Depends(get_session)):
    """Create an account and log it in right away."""
    try:
        user = register_user(
            username=request.username.strip(),
            email=request.email.strip(),
            name=request.name.strip(),
            password=request.password,
            confirm_password=request.confirm_password,
            session=session,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _token_response(user)


@router.post("/auth/login", response_model=TokenResponse)
def login(request: LoginRequest, session: Session = Depends(get_session)):
    try:
        user = authenticate(request.username.strip(), request.password, session)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return _token_response(user)


@router.get("/users/me", response_model=UserProfileResponse)
def get_my_profile(user: User = Depends(get_current_user)):
    """Get current user's profile."""
    return UserProfileResponse.model_validate(user)
