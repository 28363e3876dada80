"""
Tests des endpoints séances et notes : /api/v1/sessions, /api/v1/notes/generate
"""

import uuid
from datetime import date
from unittest.mock import patch

from fluentflow.schemas.session import NoteGenerateResponse, SessionResponse, SessionSaveResult

SERVICE = "fluentflow.routers.sessions.session_service"
NOTES_SERVICE = "fluentflow.routers.notes.session_service"


def make_session_response(**kwargs) -> SessionResponse:
    return SessionResponse(
        id=kwargs.get("id", uuid.uuid4()),
        date=date(2025, 1, 13),
        event_id=None,
        student_ids=kwargs.get("student_ids", []),
        goal_data=[],
        notes=[],
    )


def make_payload(**overrides):
    payload = {
        "date": "2025-01-13",
        "student_id": str(uuid.uuid4()),
        "duration": 30,
        "location": "Speech Room",
        "engagement": "good",
        "goal_data": [
            {"goal_id": str(uuid.uuid4()), "accuracy": 75, "trials": 10, "prompt_level": "min", "activity": "Drill"},
        ],
    }
    payload.update(overrides)
    return payload


# ============================================================
# POST /api/v1/sessions
# ============================================================

def test_save_session(client):
    skipped = uuid.uuid4()
    result = SessionSaveResult(session=make_session_response(), skipped_goal_ids=[skipped])
    with patch(f"{SERVICE}.save_session", return_value=result):
        response = client.post("/api/v1/sessions", json=make_payload())

    assert response.status_code == 201
    assert response.json()["skipped_goal_ids"] == [str(skipped)]


def test_save_session_precision_hors_bornes(client):
    payload = make_payload()
    payload["goal_data"][0]["accuracy"] = 101
    response = client.post("/api/v1/sessions", json=payload)
    assert response.status_code == 422


def test_save_session_essais_zero(client):
    payload = make_payload()
    payload["goal_data"][0]["trials"] = 0
    response = client.post("/api/v1/sessions", json=payload)
    assert response.status_code == 422


def test_save_session_sans_objectif(client):
    response = client.post("/api/v1/sessions", json=make_payload(goal_data=[]))
    assert response.status_code == 422


def test_save_session_niveau_incitation_invalide(client):
    payload = make_payload()
    payload["goal_data"][0]["prompt_level"] = "lots"
    response = client.post("/api/v1/sessions", json=payload)
    assert response.status_code == 422


def test_save_session_duree_hors_bornes(client):
    response = client.post("/api/v1/sessions", json=make_payload(duration=200))
    assert response.status_code == 422


def test_save_session_eleve_introuvable(client):
    with patch(f"{SERVICE}.save_session", side_effect=ValueError("Élève introuvable.")):
        response = client.post("/api/v1/sessions", json=make_payload())
    assert response.status_code == 404


def test_save_session_conflit(client):
    with patch(f"{SERVICE}.save_session", side_effect=ValueError("Conflit lors de l'enregistrement de la séance.")):
        response = client.post("/api/v1/sessions", json=make_payload())
    assert response.status_code == 409


# ============================================================
# GET /api/v1/sessions
# ============================================================

def test_list_sessions_filtres(client):
    student_id = uuid.uuid4()
    with patch(f"{SERVICE}.get_sessions", return_value=[make_session_response(student_ids=[student_id])]) as mock_get:
        response = client.get(f"/api/v1/sessions?student_id={student_id}&search=drill")

    assert response.status_code == 200
    assert mock_get.call_args.args[1:] == (student_id, "drill", None, None)


def test_list_sessions_periode_glissante(client):
    with patch(f"{SERVICE}.get_sessions", return_value=[]) as mock_get, \
         patch("fluentflow.routers.sessions.report_service.range_start", return_value=date(2024, 10, 15)):
        response = client.get("/api/v1/sessions?range=3months")

    assert response.status_code == 200
    assert mock_get.call_args.args[3:] == (date(2024, 10, 15), None)


def test_list_sessions_bornes_explicites(client):
    with patch(f"{SERVICE}.get_sessions", return_value=[]) as mock_get:
        response = client.get("/api/v1/sessions?start=2025-01-01&end=2025-01-31")

    assert response.status_code == 200
    assert mock_get.call_args.args[3:] == (date(2025, 1, 1), date(2025, 1, 31))


def test_list_sessions_periode_invalide(client):
    response = client.get("/api/v1/sessions?range=2weeks")
    assert response.status_code == 422


def test_get_session_introuvable(client):
    with patch(f"{SERVICE}.get_session", return_value=None):
        response = client.get(f"/api/v1/sessions/{uuid.uuid4()}")
    assert response.status_code == 404


# ============================================================
# POST /api/v1/notes/generate
# ============================================================

def test_generate_notes(client):
    goal_id = uuid.uuid4()
    result = NoteGenerateResponse(notes={goal_id: "Emma Thompson was engaged..."})
    with patch(f"{NOTES_SERVICE}.generate_notes", return_value=result):
        response = client.post("/api/v1/notes/generate", json=make_payload())

    assert response.status_code == 200
    assert response.json()["notes"][str(goal_id)].startswith("Emma Thompson")


def test_generate_notes_eleve_introuvable(client):
    with patch(f"{NOTES_SERVICE}.generate_notes", side_effect=ValueError("Élève introuvable.")):
        response = client.post("/api/v1/notes/generate", json=make_payload())
    assert response.status_code == 404
