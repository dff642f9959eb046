"""
Modèles SQLAlchemy pour les comptes utilisateurs et leurs rôles.
Un utilisateur peut être lié à au plus un profil étudiant (students.user_id).
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func, true
from sqlalchemy.orm import relationship

from app.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(DateTime, server_default=func.now())

    roles = relationship("Role", secondary="user_roles", lazy="selectin")


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False)  # student, staff, admin


class UserRole(Base):
    """Association utilisateur ↔ rôles."""
    __tablename__ = "user_roles"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    role_id = Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True)
