"""
Schémas Pydantic pour l'authentification et le compte courant.
Le format de l'email et la longueur du mot de passe sont vérifiés par auth_service,
pour renvoyer des erreurs métier explicites plutôt qu'une erreur de schéma.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class AuthRequest(BaseModel):
    """Corps commun à l'inscription et à la connexion."""
    email: str = ""
    password: str = ""


class RegisterResponse(BaseModel):
    id: int
    email: str

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    id: int
    email: str
    is_active: bool
    created_at: Optional[datetime]

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


class UserMeResponse(UserResponse):
    """Réponse de GET /api/users/me : compte + noms des rôles."""
    roles: List[str] = []
