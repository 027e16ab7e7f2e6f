"""Authentication related schemas."""

from pydantic import BaseModel, Field


class Token(BaseModel):
    access_token: str
    token_type: str
    role: str
    must_change_password: bool


class PasswordChangeRequest(BaseModel):
    password: str = Field(..., min_length=8)
