"""
Pydantic schemas for the admin gate
"""
from pydantic import BaseModel, Field


class AdminLogin(BaseModel):
    """Schema for admin login"""
    password: str = Field(..., min_length=1)


class Token(BaseModel):
    """Schema for JWT token response"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int
