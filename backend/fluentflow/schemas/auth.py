"""
Schémas Pydantic pour l'authentification.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, EmailStr


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # secondes


class UserResponse(BaseModel):
    id: uuid.UUID
    email: str
    name: Optional[str]
    role: str

    model_config = {"from_attributes": True}
