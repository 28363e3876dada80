"""
Router d'authentification.
POST /api/v1/auth/login : échange email + mot de passe contre un jeton Bearer
GET  /api/v1/auth/me    : utilisateur connecté
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fluentflow.config import settings
from fluentflow.database import get_db
from fluentflow.dependencies import get_current_user
from fluentflow.models.user import User
from fluentflow.schemas.auth import LoginRequest, TokenResponse, UserResponse
from fluentflow.services import auth_service

router = APIRouter(prefix="/api/v1/auth", tags=["Authentification"])


@router.post("/login", response_model=TokenResponse, summary="Se connecter")
def login(data: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, data.email, data.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Identifiants invalides.")
    return TokenResponse(
        access_token=auth_service.create_access_token(user.id),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.get("/me", response_model=UserResponse, summary="Utilisateur connecté")
def me(user: User = Depends(get_current_user)):
    return user
