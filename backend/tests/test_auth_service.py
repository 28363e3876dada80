"""
Tests du service d'authentification : mots de passe et jetons JWT.
"""

import uuid

from fluentflow.models.user import User
from fluentflow.services import auth_service


def test_hash_et_verification():
    hashed = auth_service.hash_password("password123")

    assert hashed != "password123"
    assert auth_service.verify_password("password123", hashed) is True
    assert auth_service.verify_password("wrong", hashed) is False


def test_verification_hash_invalide():
    assert auth_service.verify_password("password123", "not-a-bcrypt-hash") is False


def test_jeton_aller_retour():
    user_id = uuid.uuid4()
    token = auth_service.create_access_token(user_id)
    assert auth_service.decode_access_token(token) == user_id


def test_jeton_expire():
    token = auth_service.create_access_token(uuid.uuid4(), expires_minutes=-1)
    assert auth_service.decode_access_token(token) is None


def test_jeton_invalide():
    assert auth_service.decode_access_token("not.a.token") is None


def test_authenticate(db_session):
    db_session.add(User(
        email="slp@fluentflow.com",
        password_hash=auth_service.hash_password("password123"),
        name="Demo SLP",
    ))
    db_session.commit()

    assert auth_service.authenticate(db_session, "SLP@fluentflow.com", "password123").name == "Demo SLP"
    assert auth_service.authenticate(db_session, "slp@fluentflow.com", "nope") is None
    assert auth_service.authenticate(db_session, "other@fluentflow.com", "password123") is None
