"""
Service d'authentification : hachage des mots de passe (bcrypt) et jetons JWT (python-jose).
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.orm import Session

from fluentflow.config import settings
from fluentflow.models.user import User

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Hash mal formé en base
        return False


def create_access_token(user_id: uuid.UUID, expires_minutes: Optional[int] = None) -> str:
    """Émet un jeton signé dont le `sub` est l'identifiant de l'utilisateur."""
    minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[uuid.UUID]:
    """
    Vérifie la signature et l'expiration du jeton.
    Retourne l'identifiant utilisateur, ou None si le jeton est invalide.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.info("Jeton refusé : %s", e)
        return None

    sub = payload.get("sub")
    if not sub:
        return None
    try:
        return uuid.UUID(sub)
    except ValueError:
        return None


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    """Retourne l'utilisateur si les identifiants sont valides, sinon None."""
    user = db.execute(
        select(User).where(User.email == email.lower())
    ).scalar()
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Échec de connexion pour %s", email)
        return None
    return user
