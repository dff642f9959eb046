"""
Tests du service étudiants sur une base SQLite en mémoire.
Vérifient le comportement réel de UPDATE ... RETURNING, des clés étrangères et des agrégats.
"""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from app.exceptions import ConflictError, NotFoundError, ReferencedEntityNotFoundError
from app.models.attendance import Attendance
from app.models.faculty import Faculty, Group
from app.models.student import Student
from app.models.subject import Grade, Subject
from app.models.user import User
from app.schemas.student import StudentCreate, StudentUpdate
from app.services import student_service


# --- Helpers ---

def seed(db):
    """Une faculté, deux groupes, un étudiant dans CS-101."""
    faculty = Faculty(name="Informatique")
    db.add(faculty)
    db.flush()
    cs101 = Group(name="CS-101", faculty_id=faculty.id)
    cs102 = Group(name="CS-102", faculty_id=faculty.id)
    db.add_all([cs101, cs102])
    db.flush()
    student = Student(
        first_name="Aruzhan",
        last_name="Y",
        gender="F",
        birth_date=date(2003, 4, 12),
        group_id=cs101.id,
    )
    db.add(student)
    db.commit()
    return student.id


# --- update_student ---

def test_patch_un_champ_laisse_les_autres_intacts(db_session):
    sid = seed(db_session)

    result = student_service.update_student(db_session, sid, StudentUpdate(first_name="X"))

    assert result.first_name == "X"
    assert result.last_name == "Y"
    assert result.gender == "F"
    assert result.birth_date == date(2003, 4, 12)
    assert result.group_name == "CS-101"


def test_patch_puis_relecture_egale_etat_fusionne(db_session):
    sid = seed(db_session)
    before = student_service.get_student(db_session, sid)

    patch = StudentUpdate(last_name="Nurlanovna", birth_date=date(2003, 5, 1))
    returned = student_service.update_student(db_session, sid, patch)
    reread = student_service.get_student(db_session, sid)

    expected = before.model_copy(update={"last_name": "Nurlanovna", "birth_date": date(2003, 5, 1)})
    assert returned == expected
    assert reread == expected


def test_patch_vide_retourne_l_etat_courant(db_session):
    sid = seed(db_session)
    before = student_service.get_student(db_session, sid)

    result = student_service.update_student(db_session, sid, StudentUpdate())

    assert result == before


def test_patch_vide_etudiant_inexistant(db_session):
    with pytest.raises(NotFoundError):
        student_service.update_student(db_session, 404, StudentUpdate())


def test_patch_etudiant_inexistant(db_session):
    seed(db_session)
    with pytest.raises(NotFoundError, match="introuvable"):
        student_service.update_student(db_session, 404, StudentUpdate(first_name="X"))


def test_patch_groupe_par_nom(db_session):
    sid = seed(db_session)

    result = student_service.update_student(db_session, sid, StudentUpdate(group_name="CS-102"))

    assert result.group_name == "CS-102"
    assert db_session.get(Student, sid).group_id == student_service.resolve_group_id(db_session, "CS-102")


def test_patch_groupe_inconnu_n_applique_rien(db_session):
    sid = seed(db_session)
    before = student_service.get_student(db_session, sid)

    with pytest.raises(ReferencedEntityNotFoundError, match="CS-999"):
        student_service.update_student(
            db_session, sid, StudentUpdate(first_name="Changed", group_name="CS-999")
        )

    db_session.expire_all()
    assert student_service.get_student(db_session, sid) == before


def test_patch_groupe_inconnu_aucun_update_emis():
    """La résolution échoue avant la construction de l'UPDATE : une seule requête (le SELECT)."""
    db = MagicMock()
    db.execute.return_value.scalar.return_value = None

    with pytest.raises(ReferencedEntityNotFoundError):
        student_service.update_student(db, 1, StudentUpdate(first_name="X", group_name="Inconnu"))

    assert db.execute.call_count == 1
    db.commit.assert_not_called()


# --- create / get / list ---

def test_create_student_avec_groupe(db_session):
    seed(db_session)
    group_id = student_service.resolve_group_id(db_session, "CS-102")

    result = student_service.create_student(
        db_session, StudentCreate(first_name=" Dana ", last_name="Sultan", group_id=group_id)
    )

    assert result.id is not None
    assert result.first_name == "Dana"
    assert result.group_name == "CS-102"


def test_create_student_groupe_inexistant(db_session):
    with pytest.raises(ConflictError):
        student_service.create_student(db_session, StudentCreate(first_name="A", last_name="B", group_id=999))


def test_get_student_inexistant(db_session):
    with pytest.raises(NotFoundError):
        student_service.get_student(db_session, 1)


def test_liste_avec_groupe_et_email(db_session):
    sid = seed(db_session)
    user = User(email="aruzhan@uni.kz", password_hash="x")
    db_session.add(user)
    db_session.flush()
    db_session.get(Student, sid).user_id = user.id
    db_session.add(Student(first_name="Sans", last_name="Groupe"))
    db_session.commit()

    rows = student_service.get_students(db_session)

    assert [(r.first_name, r.group, r.email) for r in rows] == [
        ("Aruzhan", "CS-101", "aruzhan@uni.kz"),
        ("Sans", None, None),
    ]


# --- delete ---

def test_delete_student(db_session):
    sid = seed(db_session)
    student_service.delete_student(db_session, sid)
    assert db_session.get(Student, sid) is None


def test_delete_student_inexistant(db_session):
    with pytest.raises(NotFoundError):
        student_service.delete_student(db_session, 12)


def test_delete_student_avec_presences_bloque(db_session):
    sid = seed(db_session)
    subject = Subject(name="Algèbre")
    db_session.add(subject)
    db_session.flush()
    db_session.add(Attendance(student_id=sid, subject_id=subject.id, visit_day=date(2024, 9, 2), visited=True))
    db_session.commit()

    with pytest.raises(ConflictError, match="présences ou des notes"):
        student_service.delete_student(db_session, sid)

    assert db_session.get(Student, sid) is not None


# --- GPA ---

def test_gpa_vide(db_session):
    assert student_service.get_students_gpa(db_session) == []


def test_gpa_moyenne_arrondie(db_session):
    sid = seed(db_session)
    math = Subject(name="Math")
    physics = Subject(name="Physique")
    db_session.add_all([math, physics])
    db_session.flush()
    db_session.add_all([
        Grade(student_id=sid, subject_id=math.id, grade=Decimal("90")),
        Grade(student_id=sid, subject_id=physics.id, grade=Decimal("85")),
        Grade(student_id=sid, subject_id=physics.id, grade=Decimal("77")),
    ])
    db_session.commit()

    result = student_service.get_students_gpa(db_session)

    assert len(result) == 1
    assert result[0].id == sid
    assert result[0].gpa == 84.0
