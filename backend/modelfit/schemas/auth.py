from datetime import datetime

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    email: str | None = None
    phone: str | None = None
    password: str = ""
    name: str | None = Field(default=None, max_length=255)


class LoginRequest(BaseModel):
    email: str | None = None
    phone: str | None = None
    password: str = ""


class AuthResponse(BaseModel):
    user_id: str
    username: str
    role: str
    token: str


class UserResponse(BaseModel):
    id: str
    email: str | None
    phone: str | None
    name: str | None
    role: str
    created_at: datetime

    model_config = {"from_attributes": True}


class SuperAdminInitRequest(BaseModel):
    identifier: str | None = None
    secret: str | None = None


class SuperAdminInitResponse(BaseModel):
    message: str
    user: UserResponse
