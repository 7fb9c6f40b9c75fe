"""Common API dependencies: current user extraction, service wiring."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from handytrack.database import get_session
from handytrack.models.user import User
from handytrack.repositories.device_repository import DeviceRepository
from handytrack.services.device_service import DeviceService
from handytrack.utils.security import decode_token

bearer_scheme = HTTPBearer()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User:
    """Extract and validate user from JWT access token."""
    try:
        payload = decode_token(credentials.credentials)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
        )

    user = session.get(User, payload["sub"])
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


def get_device_service(session: Session = Depends(get_session)) -> DeviceService:
    """One service per request, bound to the request's session."""
    return DeviceService(DeviceRepository(session))
