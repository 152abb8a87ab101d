"""
Pydantic models for login.
"""

from typing import Optional

from pydantic import BaseModel


class LoginInput(BaseModel):
    password: Optional[str] = None


class LoginOutput(BaseModel):
    token: str
    expires_at: int   # epoch milliseconds
    expires_in: int   # seconds
