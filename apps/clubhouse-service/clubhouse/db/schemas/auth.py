from pydantic import BaseModel, Field

from .base import CamelInput


class LoginRequest(CamelInput):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)


class User(BaseModel):
    id: str
    username: str
    name: str
    role: str


class TokenResponse(BaseModel):
    token: str
    user: User
