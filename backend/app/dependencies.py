"""
Dépendances FastAPI partagées par les routers.

get_current_user_id protège une route : si le jeton Bearer est absent ou rejeté,
le handler n'est jamais appelé et la réponse est un 401.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.exceptions import AuthError
from app.services import auth_service

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Valide le jeton et attache l'identifiant résolu à request.state.user_id."""
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthError("En-tête Authorization manquant ou invalide.")

    try:
        user_id = auth_service.validate_token(credentials.credentials)
    except AuthError as e:
        logger.warning("Jeton rejeté sur %s %s : %s", request.method, request.url.path, e.message)
        raise

    request.state.user_id = user_id
    return user_id
