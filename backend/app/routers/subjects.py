"""
Router pour les matières et leurs statistiques.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user_id
from app.schemas.subject import SubjectCreate, SubjectResponse, SubjectStatsResponse, SubjectUpdate
from app.services import subject_service

router = APIRouter(prefix="/subjects", tags=["Matières"])

protected = [Depends(get_current_user_id)]


@router.get("", response_model=List[SubjectResponse], summary="Lister les matières")
def list_subjects(db: Session = Depends(get_db)):
    return subject_service.get_subjects(db)


@router.get("/stats", response_model=List[SubjectStatsResponse], summary="Statistiques par matière")
def subject_stats(db: Session = Depends(get_db)):
    """Nombre d'étudiants notés et moyenne par matière."""
    return subject_service.get_subject_stats(db)


@router.get("/{subject_id}", response_model=SubjectResponse, summary="Détail d'une matière")
def get_subject(subject_id: int, db: Session = Depends(get_db)):
    return subject_service.get_subject(db, subject_id)


@router.post("", response_model=SubjectResponse, status_code=201, dependencies=protected,
             summary="Créer une matière")
def create_subject(data: SubjectCreate, db: Session = Depends(get_db)):
    return subject_service.create_subject(db, data)


@router.patch("/{subject_id}", response_model=SubjectResponse, dependencies=protected,
              summary="Renommer une matière")
def update_subject(subject_id: int, data: SubjectUpdate, db: Session = Depends(get_db)):
    return subject_service.update_subject(db, subject_id, data)


@router.delete("/{subject_id}", status_code=204, dependencies=protected, summary="Supprimer une matière")
def delete_subject(subject_id: int, db: Session = Depends(get_db)):
    subject_service.delete_subject(db, subject_id)
