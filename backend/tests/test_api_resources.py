"""
Tests d'intégration API pour les facultés, groupes, matières, emploi du temps et présences.
Les services sont mockés : on teste les URLs, les codes HTTP et le format des réponses.
"""

from datetime import date
from unittest.mock import patch

from app.exceptions import ConflictError, NotFoundError, ReferencedEntityNotFoundError
from app.main import docs_urls
from app.schemas.attendance import AttendanceResponse
from app.schemas.faculty import FacultyResponse, GroupResponse
from app.schemas.schedule import ScheduleResponse
from app.schemas.subject import SubjectResponse, SubjectStatsResponse


def make_schedule_response(**kwargs) -> ScheduleResponse:
    return ScheduleResponse(
        id=kwargs.get("id", 1),
        faculty=kwargs.get("faculty", "Informatique"),
        group=kwargs.get("group", "CS-101"),
        subject=kwargs.get("subject", "Algèbre"),
        class_time=kwargs.get("class_time", "Lundi 08:00-09:30"),
    )


def make_attendance_response(**kwargs) -> AttendanceResponse:
    return AttendanceResponse(
        id=kwargs.get("id", 1),
        student_id=kwargs.get("student_id", 5),
        subject_id=kwargs.get("subject_id", 2),
        visit_day=kwargs.get("visit_day", date(2024, 9, 2)),
        visited=kwargs.get("visited", True),
    )


# ============================================================
# /faculties
# ============================================================

def test_create_faculty(client):
    with patch("app.routers.faculties.faculty_service.create_faculty") as mock:
        mock.return_value = FacultyResponse(id=1, name="Informatique")
        response = client.post("/faculties", json={"name": "Informatique"})

    assert response.status_code == 201
    assert response.json() == {"id": 1, "name": "Informatique"}


def test_create_faculty_doublon(client):
    with patch("app.routers.faculties.faculty_service.create_faculty") as mock:
        mock.side_effect = ConflictError("Une faculté avec le nom 'Informatique' existe déjà.")
        response = client.post("/faculties", json={"name": "Informatique"})

    assert response.status_code == 400
    assert "existe déjà" in response.json()["error"]


def test_faculty_introuvable(client):
    with patch("app.routers.faculties.faculty_service.get_faculty") as mock:
        mock.side_effect = NotFoundError("Faculté introuvable.")
        response = client.get("/faculties/3")

    assert response.status_code == 404
    assert response.json() == {"error": "Faculté introuvable."}


def test_delete_faculty_sans_jeton(anon_client):
    with patch("app.routers.faculties.faculty_service.delete_faculty") as mock:
        response = anon_client.delete("/faculties/3")

    assert response.status_code == 401
    mock.assert_not_called()


# ============================================================
# /groups
# ============================================================

def test_list_groups(client):
    with patch("app.routers.faculties.faculty_service.get_groups") as mock:
        mock.return_value = [GroupResponse(id=1, name="CS-101", faculty_id=1, faculty_name="Informatique")]
        response = client.get("/groups")

    assert response.status_code == 200
    assert response.json()[0]["faculty_name"] == "Informatique"


def test_patch_group_faculte_inconnue(client):
    with patch("app.routers.faculties.faculty_service.update_group") as mock:
        mock.side_effect = ReferencedEntityNotFoundError("Faculté 'Droit' introuvable.")
        response = client.patch("/groups/1", json={"faculty_name": "Droit"})

    assert response.status_code == 400
    assert response.json() == {"error": "Faculté 'Droit' introuvable."}


# ============================================================
# /subjects
# ============================================================

def test_subject_stats(client):
    with patch("app.routers.subjects.subject_service.get_subject_stats") as mock:
        mock.return_value = [SubjectStatsResponse(name="Algèbre", graded_students=12, avg_grade=81.5)]
        response = client.get("/subjects/stats")

    assert response.status_code == 200
    assert response.json() == [{"name": "Algèbre", "graded_students": 12, "avg_grade": 81.5}]


def test_subject_stats_vide(client):
    with patch("app.routers.subjects.subject_service.get_subject_stats") as mock:
        mock.return_value = []
        response = client.get("/subjects/stats")

    assert response.status_code == 200
    assert response.json() == []


def test_patch_subject(client):
    with patch("app.routers.subjects.subject_service.update_subject") as mock:
        mock.return_value = SubjectResponse(id=2, name="Analyse")
        response = client.patch("/subjects/2", json={"name": "Analyse"})

    assert response.status_code == 200
    assert response.json()["name"] == "Analyse"


# ============================================================
# /schedule
# ============================================================

def test_list_schedule(client):
    with patch("app.routers.schedule.schedule_service.get_schedules") as mock:
        mock.return_value = [make_schedule_response()]
        response = client.get("/schedule")

    assert response.status_code == 200
    assert response.json() == [{
        "id": 1,
        "faculty": "Informatique",
        "group": "CS-101",
        "subject": "Algèbre",
        "class_time": "Lundi 08:00-09:30",
    }]


def test_group_schedule(client):
    with patch("app.routers.schedule.schedule_service.get_group_schedule") as mock:
        mock.return_value = []
        response = client.get("/schedule/group/7")

    assert response.status_code == 200
    assert mock.call_args.args[1] == 7


def test_create_schedule_champ_manquant(client):
    response = client.post("/schedule", json={"faculty_id": 1, "group_id": 1, "class_time": "Mardi"})
    assert response.status_code == 400
    assert "subject_id" in response.json()["error"]


def test_patch_schedule(client):
    with patch("app.routers.schedule.schedule_service.update_schedule") as mock:
        mock.return_value = make_schedule_response(class_time="Mardi 10:00")
        response = client.patch("/schedule/1", json={"class_time": "Mardi 10:00"})

    assert response.status_code == 200
    assert response.json()["class_time"] == "Mardi 10:00"


# ============================================================
# /attendance
# ============================================================

def test_create_attendance(client):
    with patch("app.routers.attendance.attendance_service.create_attendance") as mock:
        mock.return_value = make_attendance_response()
        response = client.post("/attendance", json={
            "student_id": 5, "subject_id": 2, "visit_day": "2024-09-02", "visited": True,
        })

    assert response.status_code == 201
    assert response.json()["visit_day"] == "2024-09-02"


def test_create_attendance_date_invalide(client):
    response = client.post("/attendance", json={"student_id": 5, "subject_id": 2, "visit_day": "hier"})
    assert response.status_code == 400


def test_attendance_par_etudiant(client):
    with patch("app.routers.attendance.attendance_service.get_attendance_by_student") as mock:
        mock.return_value = [make_attendance_response(), make_attendance_response(id=2)]
        response = client.get("/attendance/student/5")

    assert response.status_code == 200
    assert len(response.json()) == 2


def test_attendance_par_matiere(client):
    with patch("app.routers.attendance.attendance_service.get_attendance_by_subject") as mock:
        mock.return_value = []
        response = client.get("/attendance/subject/2")

    assert response.status_code == 200
    assert response.json() == []


def test_patch_attendance_sans_jeton(anon_client):
    with patch("app.routers.attendance.attendance_service.update_attendance") as mock:
        response = anon_client.patch("/attendance/1", json={"visited": False})

    assert response.status_code == 401
    mock.assert_not_called()


def test_route_inconnue(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert "error" in response.json()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_documentation_disponible_hors_production(client):
    response = client.get("/api/openapi.json")
    assert response.status_code == 200
    assert response.json()["info"]["title"] == "University API"


def test_documentation_desactivee_en_production():
    assert docs_urls("production") == {"docs_url": None, "redoc_url": None, "openapi_url": None}
    assert docs_urls("development")["docs_url"] == "/api/docs"
