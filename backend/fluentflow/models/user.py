"""
Modèle SQLAlchemy pour les utilisateurs (orthophonistes connectés au tableau de bord).
"""

import uuid
from sqlalchemy import Column, DateTime, String, Uuid, func

from fluentflow.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(200), nullable=True)
    role = Column(String(50), nullable=False, default="SLP")  # SLP, ADMIN
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
