"""
Router pour les présences aux cours.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user_id
from app.schemas.attendance import AttendanceCreate, AttendanceResponse, AttendanceUpdate
from app.services import attendance_service

router = APIRouter(prefix="/attendance", tags=["Présences"])

protected = [Depends(get_current_user_id)]


@router.get("", response_model=List[AttendanceResponse], summary="Lister les présences")
def list_attendance(db: Session = Depends(get_db)):
    return attendance_service.get_attendance_records(db)


@router.get("/student/{student_id}", response_model=List[AttendanceResponse],
            summary="Présences d'un étudiant")
def attendance_by_student(student_id: int, db: Session = Depends(get_db)):
    return attendance_service.get_attendance_by_student(db, student_id)


@router.get("/subject/{subject_id}", response_model=List[AttendanceResponse],
            summary="Présences pour une matière")
def attendance_by_subject(subject_id: int, db: Session = Depends(get_db)):
    return attendance_service.get_attendance_by_subject(db, subject_id)


@router.get("/{record_id}", response_model=AttendanceResponse, summary="Détail d'une présence")
def get_attendance(record_id: int, db: Session = Depends(get_db)):
    return attendance_service.get_attendance(db, record_id)


@router.post("", response_model=AttendanceResponse, status_code=201, dependencies=protected,
             summary="Enregistrer une présence")
def create_attendance(data: AttendanceCreate, db: Session = Depends(get_db)):
    return attendance_service.create_attendance(db, data)


@router.patch("/{record_id}", response_model=AttendanceResponse, dependencies=protected,
              summary="Modifier une présence")
def update_attendance(record_id: int, data: AttendanceUpdate, db: Session = Depends(get_db)):
    return attendance_service.update_attendance(db, record_id, data)


@router.delete("/{record_id}", status_code=204, dependencies=protected, summary="Supprimer une présence")
def delete_attendance(record_id: int, db: Session = Depends(get_db)):
    attendance_service.delete_attendance(db, record_id)
