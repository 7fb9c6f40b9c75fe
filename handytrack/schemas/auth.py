"""Auth and user request/response schemas."""

from typing import Optional

from pydantic import BaseModel


# --- Auth ---

class RegisterRequest(BaseModel):
    username: str = ""
    email: str = ""
    name: str = ""
    password: str = ""
    confirm_password: str = ""


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class UserProfileResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    username: str
    name: str
    email: Optional[str]


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserProfileResponse
