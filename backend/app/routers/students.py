"""
Router pour les étudiants.
Lecture publique ; création, modification et suppression réservées aux utilisateurs connectés.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user_id
from app.schemas.student import (
    StudentCreate,
    StudentGPAResponse,
    StudentListResponse,
    StudentResponse,
    StudentUpdate,
)
from app.services import student_service

router = APIRouter(prefix="/students", tags=["Étudiants"])

protected = [Depends(get_current_user_id)]


@router.get("", response_model=List[StudentListResponse], summary="Lister les étudiants")
def list_students(db: Session = Depends(get_db)):
    """Retourne tous les étudiants avec leur groupe et l'email du compte lié."""
    return student_service.get_students(db)


# Déclaré avant /{student_id} : "gpa" n'est pas un identifiant.
@router.get("/gpa", response_model=List[StudentGPAResponse], summary="Moyenne par étudiant")
def students_gpa(db: Session = Depends(get_db)):
    """Moyenne des notes de chaque étudiant noté, arrondie à 2 décimales."""
    return student_service.get_students_gpa(db)


@router.get("/{student_id}", response_model=StudentResponse, summary="Détail d'un étudiant")
def get_student(student_id: int, db: Session = Depends(get_db)):
    return student_service.get_student(db, student_id)


@router.post("", response_model=StudentResponse, status_code=201, dependencies=protected,
             summary="Créer un étudiant")
def create_student(data: StudentCreate, db: Session = Depends(get_db)):
    return student_service.create_student(db, data)


@router.patch("/{student_id}", response_model=StudentResponse, dependencies=protected,
              summary="Modifier un étudiant")
def update_student(student_id: int, data: StudentUpdate, db: Session = Depends(get_db)):
    """
    Met à jour les champs fournis d'un étudiant. Les champs absents ne sont pas modifiés.
    Le groupe se change par son nom (`group_name`).
    """
    return student_service.update_student(db, student_id, data)


@router.delete("/{student_id}", status_code=204, dependencies=protected, summary="Supprimer un étudiant")
def delete_student(student_id: int, db: Session = Depends(get_db)):
    """Supprime un étudiant. Refusé s'il a des présences ou des notes."""
    student_service.delete_student(db, student_id)
