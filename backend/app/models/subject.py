"""
Modèles SQLAlchemy pour les matières et les notes.
Les notes ne sont exposées qu'à travers des agrégats (GPA, statistiques par matière).
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, func

from app.database import Base


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), unique=True, nullable=False)


class Grade(Base):
    __tablename__ = "grades"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False)
    grade = Column(Numeric(5, 2), nullable=False)
    graded_at = Column(DateTime, server_default=func.now())
