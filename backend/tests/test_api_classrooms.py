"""
Tests d'intégration API pour les classes, les demandes d'adhésion et les élèves d'une classe.
Testent les URLs, les gardes de rôle, la validation et le format des réponses.
"""

from datetime import datetime, timezone
from unittest.mock import patch

from classroom_api.exceptions import UnprocessableEntityError

NOW = datetime(2025, 3, 1, tzinfo=timezone.utc)


# --- Helpers ---

def make_classroom_dict(**kwargs):
    data = {
        "id": 1,
        "name": "Maths 6A",
        "description": None,
        "is_archived": False,
        "cover_media_id": None,
        "created_at": NOW,
        "updated_at": NOW,
        "deleted_at": None,
    }
    data.update(kwargs)
    return data


def make_join_request_dict(**kwargs):
    data = {
        "id": 3,
        "student_id": 7,
        "classroom_id": 1,
        "status": "pending",
        "requested_at": NOW,
        "handled_at": None,
    }
    data.update(kwargs)
    return data


def make_student_dict():
    return {
        "id": 7,
        "email": "eleve@ecole.be",
        "full_name": "Jean Dupont",
        "phone_number": "0470000007",
        "avatar_media_id": None,
    }


# ============================================================
# /api/v1/classroom
# ============================================================

def test_list_classrooms(admin_client):
    with patch("classroom_api.routers.classrooms.classroom_service.get_all_classrooms") as mock:
        mock.return_value = {"page": 1, "limit": 10, "total": 1, "data": [make_classroom_dict()]}
        response = admin_client.get("/api/v1/classroom?page=1&limit=10&sortBy=name&order=asc&is_archived=false")

    assert response.status_code == 200
    assert response.json()["total"] == 1
    query = mock.call_args.args[1]
    assert query.sort_by == "name"
    assert query.order == "asc"
    assert query.is_archived is False


def test_list_classrooms_tri_invalide(admin_client):
    response = admin_client.get("/api/v1/classroom?sortBy=password")
    assert response.status_code == 422


def test_list_classrooms_limite_trop_grande(admin_client):
    response = admin_client.get("/api/v1/classroom?limit=1000")
    assert response.status_code == 422


def test_list_classrooms_refuse_aux_eleves(student_client):
    response = student_client.get("/api/v1/classroom")
    assert response.status_code == 403


def test_deleted_list(admin_client):
    with patch("classroom_api.routers.classrooms.classroom_service.get_deleted_classrooms") as mock:
        mock.return_value = {"page": 1, "limit": 10, "total": 1, "data": [make_classroom_dict(deleted_at=NOW)]}
        response = admin_client.get("/api/v1/classroom/deleted-list")
    assert response.status_code == 200
    assert response.json()["data"][0]["deleted_at"] is not None


def test_get_classroom_detail(admin_client):
    with patch("classroom_api.routers.classrooms.classroom_service.get_classroom_by_id") as mock:
        mock.return_value = {
            **make_classroom_dict(),
            "join_requests": [{
                "id": 3, "status": "pending", "requested_at": NOW, "handled_at": None,
                "student": make_student_dict(),
            }],
            "classroom_students": [{
                "is_active": True, "joined_at": NOW, "deleted_at": None, "student": make_student_dict(),
            }],
        }
        response = admin_client.get("/api/v1/classroom/1")

    assert response.status_code == 200
    body = response.json()
    assert body["join_requests"][0]["student"]["full_name"] == "Jean Dupont"
    assert len(body["classroom_students"]) == 1


def test_get_classroom_introuvable(admin_client):
    with patch("classroom_api.routers.classrooms.classroom_service.get_classroom_by_id") as mock:
        mock.side_effect = UnprocessableEntityError("Classe introuvable.")
        response = admin_client.get("/api/v1/classroom/99")
    assert response.status_code == 422
    assert response.json()["detail"] == "Classe introuvable."


def test_create_classroom(admin_client):
    with patch("classroom_api.routers.classrooms.classroom_service.create_classroom") as mock:
        mock.return_value = make_classroom_dict()
        response = admin_client.post("/api/v1/classroom", json={"name": "Maths 6A"})
    assert response.status_code == 201
    assert response.json()["name"] == "Maths 6A"


def test_create_classroom_nom_vide(admin_client):
    response = admin_client.post("/api/v1/classroom", json={"name": "   "})
    assert response.status_code == 422


def test_update_classroom_archive(admin_client):
    with patch("classroom_api.routers.classrooms.classroom_service.update_classroom") as mock:
        mock.return_value = make_classroom_dict(is_archived=True)
        response = admin_client.put("/api/v1/classroom/1", json={"name": "Maths 6A", "is_archived": True})
    assert response.status_code == 200
    assert response.json()["is_archived"] is True


def test_delete_classroom(admin_client):
    with patch("classroom_api.routers.classrooms.classroom_service.delete_classroom") as mock:
        mock.return_value = {"message": "Classe supprimée avec succès."}
        response = admin_client.delete("/api/v1/classroom/1")
    assert response.status_code == 200
    mock.assert_called_once()


def test_restore_classroom_non_supprimee(admin_client):
    with patch("classroom_api.routers.classrooms.classroom_service.restore_classroom") as mock:
        mock.side_effect = UnprocessableEntityError("Classe introuvable.")
        response = admin_client.put("/api/v1/classroom/restore/1")
    assert response.status_code == 422


# ============================================================
# /api/v1/join-request
# ============================================================

def test_create_join_request(student_client, student_user):
    with patch("classroom_api.routers.join_requests.join_request_service.create_join_request") as mock:
        mock.return_value = make_join_request_dict()
        response = student_client.post("/api/v1/join-request", json={"classroom_id": 1})

    assert response.status_code == 201
    assert response.json()["status"] == "pending"
    assert mock.call_args.args[1] == student_user.id


def test_create_join_request_doublon(student_client):
    with patch("classroom_api.routers.join_requests.join_request_service.create_join_request") as mock:
        mock.side_effect = UnprocessableEntityError("Une demande d'adhésion existe déjà pour cette classe.")
        response = student_client.post("/api/v1/join-request", json={"classroom_id": 1})
    assert response.status_code == 422


def test_create_join_request_refusee_aux_admins(admin_client):
    response = admin_client.post("/api/v1/join-request", json={"classroom_id": 1})
    assert response.status_code == 403


def test_approve_join_request(admin_client):
    with patch("classroom_api.routers.join_requests.join_request_service.approve_join_request") as mock:
        mock.return_value = make_join_request_dict(status="approved", handled_at=NOW)
        response = admin_client.put("/api/v1/join-request/3/approve")
    assert response.status_code == 200
    assert response.json()["status"] == "approved"


def test_approve_refuse_aux_eleves(student_client):
    response = student_client.put("/api/v1/join-request/3/approve")
    assert response.status_code == 403


def test_reject_join_request_deja_approuvee(admin_client):
    with patch("classroom_api.routers.join_requests.join_request_service.reject_join_request") as mock:
        mock.side_effect = UnprocessableEntityError("Cette demande d'adhésion a déjà été approuvée, impossible de la refuser.")
        response = admin_client.put("/api/v1/join-request/3/reject")
    assert response.status_code == 422


def test_list_join_requests_admin(admin_client):
    with patch("classroom_api.routers.join_requests.join_request_service.list_join_requests") as mock:
        mock.return_value = {"page": 1, "limit": 10, "total": 1, "data": [make_join_request_dict()]}
        response = admin_client.get("/api/v1/join-request?status=pending&classroom_id=1")
    assert response.status_code == 200
    assert mock.call_args.args[1].status == "pending"


def test_list_join_requests_statut_invalide(admin_client):
    response = admin_client.get("/api/v1/join-request?status=unknown")
    assert response.status_code == 422


def test_student_view_classrooms(student_client):
    with patch("classroom_api.routers.join_requests.join_request_service.student_view_classrooms") as mock:
        mock.return_value = [
            {**make_classroom_dict(id=1), "is_joined": True, "join_request": None},
            {
                **make_classroom_dict(id=2, name="Sciences"),
                "is_joined": False,
                "join_request": {"id": 4, "status": "pending", "requested_at": NOW, "handled_at": None},
            },
        ]
        response = student_client.get("/api/v1/join-request/classrooms")

    assert response.status_code == 200
    body = response.json()
    assert body[0]["is_joined"] is True
    assert body[1]["join_request"]["status"] == "pending"


def test_student_view_joined_classrooms(student_client):
    with patch("classroom_api.routers.join_requests.join_request_service.student_view_joined_classrooms") as mock:
        mock.return_value = [make_classroom_dict()]
        response = student_client.get("/api/v1/join-request/joined-classrooms")
    assert response.status_code == 200
    assert response.json()[0]["name"] == "Maths 6A"


def test_leave_classroom(student_client, student_user):
    with patch("classroom_api.routers.join_requests.join_request_service.leave_classroom") as mock:
        mock.return_value = {"message": "Vous avez quitté la classe."}
        response = student_client.request("DELETE", "/api/v1/join-request/leave-classroom", json={"classroom_id": 1})
    assert response.status_code == 200
    assert mock.call_args.args[1:] == (student_user.id, 1)


# ============================================================
# /api/v1/classroom-student
# ============================================================

def test_deactivate_student(admin_client):
    with patch("classroom_api.routers.classroom_students.classroom_student_service.deactivate") as mock:
        mock.return_value = {"message": "L'élève a été bloqué dans la classe."}
        response = admin_client.put("/api/v1/classroom-student/deactivate", json={"classroom_id": 1, "student_id": 7})
    assert response.status_code == 200
    body = mock.call_args.args[1]
    assert (body.classroom_id, body.student_id) == (1, 7)


def test_activate_student_appartenance_inexistante(admin_client):
    with patch("classroom_api.routers.classroom_students.classroom_student_service.activate") as mock:
        mock.side_effect = UnprocessableEntityError("Cet élève ne fait pas partie de la classe.")
        response = admin_client.put("/api/v1/classroom-student/activate", json={"classroom_id": 1, "student_id": 7})
    assert response.status_code == 422


def test_delete_student(admin_client):
    with patch("classroom_api.routers.classroom_students.classroom_student_service.delete_student") as mock:
        mock.return_value = {"message": "L'élève a été retiré de la classe."}
        response = admin_client.request(
            "DELETE", "/api/v1/classroom-student/delete-student", json={"classroom_id": 1, "student_id": 7}
        )
    assert response.status_code == 200


def test_classroom_student_refuse_aux_eleves(student_client):
    response = student_client.put("/api/v1/classroom-student/activate", json={"classroom_id": 1, "student_id": 7})
    assert response.status_code == 403
