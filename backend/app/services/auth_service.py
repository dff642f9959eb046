"""
Service métier pour l'authentification : inscription, connexion et validation des jetons.

États d'un compte : anonyme → inscrit (actif par défaut) → authentifié (jeton valide)
→ jeton expiré ou invalide (rejeté).
"""

import logging
import re
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import AuthError, ConflictError, InputValidationError, NotFoundError
from app.models.user import User
from app.schemas.auth import AuthRequest, LoginResponse, UserMeResponse, UserResponse
from app.security import create_access_token, decode_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

INVALID_CREDENTIALS = "Email ou mot de passe invalide."


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.match(email) is not None


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def register(db: Session, data: AuthRequest) -> User:
    """
    Crée un compte actif.

    Vérifications, dans l'ordre :
    1. email et mot de passe présents
    2. format de l'email
    3. longueur minimale du mot de passe
    4. email pas encore utilisé (recherche explicite, pour une erreur propre)
    """
    if not data.email:
        raise InputValidationError("L'email est requis.")
    if not data.password:
        raise InputValidationError("Le mot de passe est requis.")
    if not is_valid_email(data.email):
        raise InputValidationError("Format d'email invalide.")
    if len(data.password) < settings.PASSWORD_MIN_LENGTH:
        raise InputValidationError(
            f"Le mot de passe doit contenir au moins {settings.PASSWORD_MIN_LENGTH} caractères."
        )

    if get_user_by_email(db, data.email) is not None:
        raise ConflictError("Un compte existe déjà pour cet email.")

    user = User(email=data.email, password_hash=hash_password(data.password), is_active=True)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # inscription concurrente avec le même email
        db.rollback()
        raise ConflictError("Un compte existe déjà pour cet email.")
    db.refresh(user)

    logger.info("Compte créé : %s (id=%s)", user.email, user.id)
    return user


def login(db: Session, data: AuthRequest) -> LoginResponse:
    """
    Authentifie un compte et émet un jeton signé valable 24 h.

    Un email inconnu et un mot de passe erroné renvoient le même message.
    Un compte inactif est signalé par un message distinct.
    """
    if not data.email:
        raise InputValidationError("L'email est requis.")
    if not data.password:
        raise InputValidationError("Le mot de passe est requis.")

    user = get_user_by_email(db, data.email)
    if user is None:
        logger.warning("Connexion refusée : email inconnu")
        raise AuthError(INVALID_CREDENTIALS)

    if not user.is_active:
        logger.warning("Connexion refusée : compte inactif (id=%s)", user.id)
        raise AuthError("Ce compte est inactif.")

    if not verify_password(data.password, user.password_hash):
        logger.warning("Connexion refusée : mot de passe erroné (id=%s)", user.id)
        raise AuthError(INVALID_CREDENTIALS)

    token = create_access_token(user.id, user.email)
    logger.info("Connexion réussie (id=%s)", user.id)
    return LoginResponse(token=token, user=UserResponse.model_validate(user))


def extract_user_id(claims: Dict[str, Any]) -> str:
    """
    Retourne l'identifiant canonique (entier en chaîne) contenu dans les claims.
    Les nombres JSON pouvant être décodés en float, 5 et 5.0 donnent tous deux "5".
    """
    if "user_id" not in claims:
        raise AuthError("user_id absent du jeton.")

    value = claims["user_id"]
    # bool est une sous-classe de int
    if isinstance(value, bool):
        raise AuthError("Type de user_id invalide dans le jeton.")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    raise AuthError("Type de user_id invalide dans le jeton.")


def validate_token(token: str) -> str:
    """Vérifie un jeton et retourne l'identifiant de l'utilisateur."""
    return extract_user_id(decode_access_token(token))


def get_current_user(db: Session, user_id: str) -> UserMeResponse:
    """Retourne le compte courant et la liste des noms de ses rôles."""
    user = db.get(User, int(user_id))
    if user is None:
        raise NotFoundError("Utilisateur introuvable.")

    return UserMeResponse(
        id=user.id,
        email=user.email,
        is_active=user.is_active,
        created_at=user.created_at,
        roles=sorted(role.name for role in user.roles),
    )
