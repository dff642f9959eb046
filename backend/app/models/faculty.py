"""
Modèles SQLAlchemy pour les facultés et les groupes.
Une faculté possède plusieurs groupes ; un groupe appartient à une seule faculté.
"""

from sqlalchemy import Column, ForeignKey, Integer, String

from app.database import Base


class Faculty(Base):
    __tablename__ = "faculties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), unique=True, nullable=False)


class Group(Base):
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    faculty_id = Column(Integer, ForeignKey("faculties.id"), nullable=False)
