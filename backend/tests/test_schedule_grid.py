"""
Tests unitaires de la grille hebdomadaire du planning.
"""

import uuid
from datetime import date
from types import SimpleNamespace

from fluentflow.schemas.schedule import ScheduleEventResponse
from fluentflow.services.schedule_grid import TIME_SLOTS, build_week_grid, slot_end_time, week_monday

MONDAY = date(2025, 1, 13)


# --- Helpers ---

def make_event(day=MONDAY, start="09:00", status="Upcoming") -> ScheduleEventResponse:
    return ScheduleEventResponse(
        id=uuid.uuid4(),
        date=day,
        start_time=start,
        end_time=slot_end_time(start),
        location="Speech Room",
        student_ids=[],
        session_type="Individual",
        status=status,
        recurrence_rule=None,
    )


def cells_containing(grid, event_id):
    return [
        (row.time, cell.date)
        for row in grid.rows
        for cell in row.cells
        if any(e.id == event_id for e in cell.events)
    ]


# --- Créneaux ---

def test_time_slots_07h_17h30():
    assert TIME_SLOTS[0] == "07:00"
    assert TIME_SLOTS[-1] == "17:30"
    assert len(TIME_SLOTS) == 22


def test_slot_end_time():
    assert slot_end_time("09:00") == "09:30"
    assert slot_end_time("09:30") == "10:00"
    assert slot_end_time("17:30") == "18:00"


def test_week_monday():
    assert week_monday(date(2025, 1, 16)) == MONDAY  # jeudi
    assert week_monday(MONDAY) == MONDAY
    assert week_monday(date(2025, 1, 19)) == MONDAY  # dimanche


# --- build_week_grid ---

def test_evenement_place_dans_une_seule_cellule():
    """Un créneau lundi 09:00 n'apparaît que dans la cellule lundi/09:00."""
    event = make_event(MONDAY, "09:00")
    grid = build_week_grid([event], MONDAY)

    assert cells_containing(grid, event.id) == [("09:00", MONDAY)]


def test_grille_dimensions():
    grid = build_week_grid([], date(2025, 1, 15))

    assert grid.week_start == MONDAY
    assert [d.label for d in grid.days] == ["Mon", "Tue", "Wed", "Thu", "Fri"]
    assert len(grid.rows) == len(TIME_SLOTS)
    assert all(len(row.cells) == 5 for row in grid.rows)


def test_heure_hors_grille_ignoree():
    """09:45 ne correspond à aucun créneau de 30 minutes."""
    event = make_event(MONDAY, "09:45")
    grid = build_week_grid([event], MONDAY)
    assert cells_containing(grid, event.id) == []


def test_evenement_du_week_end_ni_place_ni_compte():
    saturday = make_event(date(2025, 1, 18), "09:00", "Seen")
    sunday = make_event(date(2025, 1, 19), "10:00", "Missed")
    friday = make_event(date(2025, 1, 17), "09:00", "Seen")

    grid = build_week_grid([saturday, sunday, friday], MONDAY)

    assert cells_containing(grid, saturday.id) == []
    assert cells_containing(grid, sunday.id) == []
    assert grid.status_counts == {"Upcoming": 0, "Seen": 1, "Missed": 0}


def test_evenement_hors_semaine_ignore():
    event = make_event(date(2025, 1, 20), "09:00")
    grid = build_week_grid([event], MONDAY)

    assert cells_containing(grid, event.id) == []
    assert sum(grid.status_counts.values()) == 0


def test_compteurs_statut():
    events = [
        make_event(MONDAY, "09:00", "Seen"),
        make_event(date(2025, 1, 14), "10:00", "Missed"),
        make_event(date(2025, 1, 15), "13:00", "Upcoming"),
        make_event(date(2025, 1, 17), "09:00", "Upcoming"),
    ]
    grid = build_week_grid(events, MONDAY)
    assert grid.status_counts == {"Upcoming": 2, "Seen": 1, "Missed": 1}


def test_jour_ferie_signale():
    holidays = [SimpleNamespace(date=date(2025, 1, 20), name="MLK Day")]
    grid = build_week_grid([], date(2025, 1, 20), holidays)

    assert grid.days[0].holiday == "MLK Day"
    assert grid.days[1].holiday is None


def test_plusieurs_evenements_meme_cellule():
    first = make_event(MONDAY, "09:00")
    second = make_event(MONDAY, "09:00")
    grid = build_week_grid([first, second], MONDAY)

    row = next(r for r in grid.rows if r.time == "09:00")
    assert len(row.cells[0].events) == 2
