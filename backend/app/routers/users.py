"""
Router pour le compte de l'utilisateur connecté.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user_id
from app.schemas.auth import UserMeResponse
from app.services import auth_service

router = APIRouter(prefix="/api/users", tags=["Utilisateurs"])


@router.get("/me", response_model=UserMeResponse, summary="Compte courant")
def read_me(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Retourne le compte associé au jeton Bearer, avec ses rôles."""
    return auth_service.get_current_user(db, user_id)
