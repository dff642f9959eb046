"""
Modèle SQLAlchemy pour l'emploi du temps.
Ligne dénormalisée (faculté, groupe, matière, horaire) : aucune contrainte d'unicité hormis la clé.
"""

from sqlalchemy import Column, ForeignKey, Integer, String

from app.database import Base


class Schedule(Base):
    __tablename__ = "schedule"

    id = Column(Integer, primary_key=True, autoincrement=True)
    faculty_id = Column(Integer, ForeignKey("faculties.id"), nullable=False)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False)
    class_time = Column(String(100), nullable=False)  # ex. "Lundi 08:00-09:30"
