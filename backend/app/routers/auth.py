"""
Router pour l'authentification.
POST /api/auth/register : inscription
POST /api/auth/login    : connexion, retourne un jeton signé valable 24 h
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.auth import AuthRequest, LoginResponse, RegisterResponse
from app.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["Authentification"])


@router.post("/register", response_model=RegisterResponse, status_code=201, summary="Créer un compte")
def register(data: AuthRequest, db: Session = Depends(get_db)):
    """
    Crée un compte actif.
    - Email au format valide
    - Mot de passe d'au moins 6 caractères
    - Email non encore utilisé
    """
    return auth_service.register(db, data)


@router.post("/login", response_model=LoginResponse, summary="Se connecter")
def login(data: AuthRequest, db: Session = Depends(get_db)):
    """Vérifie les identifiants et retourne un jeton Bearer avec le compte."""
    return auth_service.login(db, data)
