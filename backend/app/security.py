"""
Primitives de sécurité : hachage bcrypt des mots de passe et jetons JWT signés.

Le jeton porte user_id, email, iat et exp. Seul l'algorithme configuré
(JWT_ALGORITHM, HS256 par défaut) est accepté au décodage : un jeton signé avec
un autre algorithme est rejeté, même avec le bon secret.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from app.config import settings
from app.exceptions import AuthError

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Compare un mot de passe à son hash. Un hash illisible vaut un échec."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def create_access_token(user_id: int, email: str, now: Optional[datetime] = None) -> str:
    """Émet un jeton valable ACCESS_TOKEN_EXPIRE_HOURS heures à partir de `now`."""
    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    claims = {
        "user_id": user_id,
        "email": email,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Vérifie la signature et l'expiration, puis retourne les claims.
    Lève AuthError pour tout jeton expiré, mal formé, mal signé ou d'un autre algorithme.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise AuthError("Jeton expiré.")
    except JWTError:
        raise AuthError("Jeton invalide.")
