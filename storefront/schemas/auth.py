"""
Admin login schemas.
"""
from typing import Optional
from pydantic import Field

from ..models.base import CamelModel


class AdminLoginRequest(CamelModel):
    """Credentials submitted to the admin login endpoint."""
    email: Optional[str] = Field(None, description="Admin email")
    password: Optional[str] = Field(None, description="Admin password")


class AdminProfile(CamelModel):
    email: str = Field(..., description="Admin email")
    role: str = Field("admin", description="Granted role")


class AdminLoginData(CamelModel):
    token: str = Field(..., description="Signed access token")
    admin: AdminProfile


class AdminLoginResponse(CamelModel):
    """Response schema for a successful admin login."""
    success: bool = Field(True, description="Operation success status")
    message: str = Field(..., description="Result message")
    data: AdminLoginData
