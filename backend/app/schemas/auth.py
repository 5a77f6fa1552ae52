"""Auth Schemas — bodies for the REST signup/login/status routes."""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: str
    password: str


class StatusUpdate(BaseModel):
    status: str
