"""
Tests des endpoints planning et jours fériés : /api/v1/schedule, /api/v1/holidays
"""

import uuid
from datetime import date
from unittest.mock import patch

from fluentflow.schemas.schedule import HolidayResponse, ScheduleEventResponse
from fluentflow.services.schedule_grid import build_week_grid

SERVICE = "fluentflow.routers.schedule.schedule_service"
HOLIDAY_SERVICE = "fluentflow.routers.holidays.schedule_service"


def make_event_response(**kwargs) -> ScheduleEventResponse:
    return ScheduleEventResponse(
        id=kwargs.get("id", uuid.uuid4()),
        date=kwargs.get("date", date(2025, 1, 13)),
        start_time=kwargs.get("start_time", "09:00"),
        end_time=kwargs.get("end_time", "09:30"),
        location="Speech Room",
        student_ids=[],
        session_type="Individual",
        status=kwargs.get("status", "Upcoming"),
        recurrence_rule=None,
    )


# ============================================================
# Créneaux
# ============================================================

def test_list_events(client):
    with patch(f"{SERVICE}.get_events", return_value=[make_event_response()]) as mock_get:
        response = client.get("/api/v1/schedule?week_start=2025-01-15")

    assert response.status_code == 200
    assert mock_get.call_args.args[1] == date(2025, 1, 15)


def test_create_event(client):
    with patch(f"{SERVICE}.create_event", return_value=make_event_response()):
        response = client.post("/api/v1/schedule", json={"date": "2025-01-13", "start_time": "09:00"})

    assert response.status_code == 201
    assert response.json()["status"] == "Upcoming"
    assert response.json()["end_time"] == "09:30"


def test_create_event_heure_invalide(client):
    response = client.post("/api/v1/schedule", json={"date": "2025-01-13", "start_time": "9h"})
    assert response.status_code == 422


def test_create_event_fin_avant_debut(client):
    response = client.post(
        "/api/v1/schedule",
        json={"date": "2025-01-13", "start_time": "10:00", "end_time": "09:30"},
    )
    assert response.status_code == 422


def test_create_event_type_invalide(client):
    response = client.post(
        "/api/v1/schedule",
        json={"date": "2025-01-13", "start_time": "10:00", "session_type": "Party"},
    )
    assert response.status_code == 422


def test_get_event_introuvable(client):
    with patch(f"{SERVICE}.get_event", return_value=None):
        response = client.get(f"/api/v1/schedule/{uuid.uuid4()}")
    assert response.status_code == 404


def test_update_event_statut(client):
    with patch(f"{SERVICE}.update_event", return_value=make_event_response(status="Seen")):
        response = client.patch(f"/api/v1/schedule/{uuid.uuid4()}", json={"status": "Seen"})

    assert response.status_code == 200
    assert response.json()["status"] == "Seen"


def test_update_event_statut_invalide(client):
    response = client.patch(f"/api/v1/schedule/{uuid.uuid4()}", json={"status": "Cancelled"})
    assert response.status_code == 422


def test_update_event_horaires_incoherents(client):
    with patch(f"{SERVICE}.update_event", side_effect=ValueError("L'heure de fin doit être postérieure")):
        response = client.patch(f"/api/v1/schedule/{uuid.uuid4()}", json={"end_time": "08:00"})
    assert response.status_code == 400


def test_update_event_introuvable(client):
    with patch(f"{SERVICE}.update_event", return_value=None):
        response = client.patch(f"/api/v1/schedule/{uuid.uuid4()}", json={"status": "Missed"})
    assert response.status_code == 404


def test_delete_event(client):
    with patch(f"{SERVICE}.delete_event", return_value=True):
        response = client.delete(f"/api/v1/schedule/{uuid.uuid4()}")
    assert response.status_code == 204


def test_delete_event_introuvable(client):
    with patch(f"{SERVICE}.delete_event", return_value=False):
        response = client.delete(f"/api/v1/schedule/{uuid.uuid4()}")
    assert response.status_code == 404


def test_week_grid(client):
    grid = build_week_grid([make_event_response()], date(2025, 1, 13))
    with patch(f"{SERVICE}.get_week_grid", return_value=grid):
        response = client.get("/api/v1/schedule/grid?week_start=2025-01-13")

    assert response.status_code == 200
    body = response.json()
    assert body["week_start"] == "2025-01-13"
    assert len(body["rows"]) == 22
    assert body["rows"][4]["time"] == "09:00"
    assert len(body["rows"][4]["cells"][0]["events"]) == 1


# ============================================================
# Jours fériés
# ============================================================

def test_list_holidays(client):
    holiday = HolidayResponse(id=uuid.uuid4(), name="MLK Day", date=date(2025, 1, 20))
    with patch(f"{HOLIDAY_SERVICE}.get_holidays", return_value=[holiday]):
        response = client.get("/api/v1/holidays?start=2025-01-01&end=2025-01-31")

    assert response.status_code == 200
    assert response.json()[0]["name"] == "MLK Day"


def test_create_holiday(client):
    holiday = HolidayResponse(id=uuid.uuid4(), name="MLK Day", date=date(2025, 1, 20))
    with patch(f"{HOLIDAY_SERVICE}.create_holiday", return_value=holiday):
        response = client.post("/api/v1/holidays", json={"name": "MLK Day", "date": "2025-01-20"})
    assert response.status_code == 201


def test_delete_holiday_introuvable(client):
    with patch(f"{HOLIDAY_SERVICE}.delete_holiday", return_value=False):
        response = client.delete(f"/api/v1/holidays/{uuid.uuid4()}")
    assert response.status_code == 404


def test_create_event_enseignant_introuvable(client):
    with patch(f"{SERVICE}.create_event", side_effect=ValueError("Enseignant introuvable.")):
        response = client.post(
            "/api/v1/schedule",
            json={"date": "2025-01-13", "start_time": "09:00", "teacher_id": str(uuid.uuid4())},
        )
    assert response.status_code == 404
    assert response.json()["detail"] == "Enseignant introuvable."


def test_create_event_fin_le_lendemain(client):
    with patch(f"{SERVICE}.create_event", side_effect=ValueError("Le créneau doit se terminer le jour même.")):
        response = client.post("/api/v1/schedule", json={"date": "2025-01-13", "start_time": "23:45"})
    assert response.status_code == 400
