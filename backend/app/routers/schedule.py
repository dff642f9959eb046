"""
Router pour l'emploi du temps.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user_id
from app.schemas.schedule import ScheduleCreate, ScheduleResponse, ScheduleUpdate
from app.services import schedule_service

router = APIRouter(prefix="/schedule", tags=["Emploi du temps"])

protected = [Depends(get_current_user_id)]


@router.get("", response_model=List[ScheduleResponse], summary="Emploi du temps complet")
def list_schedules(db: Session = Depends(get_db)):
    return schedule_service.get_schedules(db)


@router.get("/group/{group_id}", response_model=List[ScheduleResponse], summary="Emploi du temps d'un groupe")
def group_schedule(group_id: int, db: Session = Depends(get_db)):
    return schedule_service.get_group_schedule(db, group_id)


@router.get("/{schedule_id}", response_model=ScheduleResponse, summary="Détail d'un créneau")
def get_schedule(schedule_id: int, db: Session = Depends(get_db)):
    return schedule_service.get_schedule(db, schedule_id)


@router.post("", response_model=ScheduleResponse, status_code=201, dependencies=protected,
             summary="Créer un créneau")
def create_schedule(data: ScheduleCreate, db: Session = Depends(get_db)):
    return schedule_service.create_schedule(db, data)


@router.patch("/{schedule_id}", response_model=ScheduleResponse, dependencies=protected,
              summary="Modifier un créneau")
def update_schedule(schedule_id: int, data: ScheduleUpdate, db: Session = Depends(get_db)):
    return schedule_service.update_schedule(db, schedule_id, data)


@router.delete("/{schedule_id}", status_code=204, dependencies=protected, summary="Supprimer un créneau")
def delete_schedule(schedule_id: int, db: Session = Depends(get_db)):
    schedule_service.delete_schedule(db, schedule_id)
