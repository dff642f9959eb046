"""
Routers pour les facultés et les groupes.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user_id
from app.schemas.faculty import (
    FacultyCreate,
    FacultyResponse,
    FacultyUpdate,
    GroupCreate,
    GroupResponse,
    GroupUpdate,
)
from app.services import faculty_service

router = APIRouter(prefix="/faculties", tags=["Facultés"])
groups_router = APIRouter(prefix="/groups", tags=["Groupes"])

protected = [Depends(get_current_user_id)]


@router.get("", response_model=List[FacultyResponse], summary="Lister les facultés")
def list_faculties(db: Session = Depends(get_db)):
    return faculty_service.get_faculties(db)


@router.get("/{faculty_id}", response_model=FacultyResponse, summary="Détail d'une faculté")
def get_faculty(faculty_id: int, db: Session = Depends(get_db)):
    return faculty_service.get_faculty(db, faculty_id)


@router.post("", response_model=FacultyResponse, status_code=201, dependencies=protected,
             summary="Créer une faculté")
def create_faculty(data: FacultyCreate, db: Session = Depends(get_db)):
    return faculty_service.create_faculty(db, data)


@router.patch("/{faculty_id}", response_model=FacultyResponse, dependencies=protected,
              summary="Renommer une faculté")
def update_faculty(faculty_id: int, data: FacultyUpdate, db: Session = Depends(get_db)):
    return faculty_service.update_faculty(db, faculty_id, data)


@router.delete("/{faculty_id}", status_code=204, dependencies=protected, summary="Supprimer une faculté")
def delete_faculty(faculty_id: int, db: Session = Depends(get_db)):
    """Refusé si des groupes ou des créneaux y font référence."""
    faculty_service.delete_faculty(db, faculty_id)


# --- Groupes ---

@groups_router.get("", response_model=List[GroupResponse], summary="Lister les groupes")
def list_groups(db: Session = Depends(get_db)):
    return faculty_service.get_groups(db)


@groups_router.get("/{group_id}", response_model=GroupResponse, summary="Détail d'un groupe")
def get_group(group_id: int, db: Session = Depends(get_db)):
    return faculty_service.get_group(db, group_id)


@groups_router.post("", response_model=GroupResponse, status_code=201, dependencies=protected,
                    summary="Créer un groupe")
def create_group(data: GroupCreate, db: Session = Depends(get_db)):
    return faculty_service.create_group(db, data)


@groups_router.patch("/{group_id}", response_model=GroupResponse, dependencies=protected,
                     summary="Modifier un groupe")
def update_group(group_id: int, data: GroupUpdate, db: Session = Depends(get_db)):
    """Le rattachement se change par le nom de la faculté (`faculty_name`)."""
    return faculty_service.update_group(db, group_id, data)


@groups_router.delete("/{group_id}", status_code=204, dependencies=protected, summary="Supprimer un groupe")
def delete_group(group_id: int, db: Session = Depends(get_db)):
    faculty_service.delete_group(db, group_id)
