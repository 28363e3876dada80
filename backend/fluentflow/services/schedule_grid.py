"""
Grille hebdomadaire du planning : créneaux de 30 minutes (07:00–17:30) × lundi–vendredi.

Les créneaux sont placés par correspondance exacte (heure de début, date).
Pas de gestion des chevauchements ni des séances sur plusieurs créneaux.
"""

from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List

from fluentflow.schemas.schedule import GridCell, GridDay, GridRow, ScheduleEventResponse, WeekGridResponse

SLOT_MINUTES = 30
TIME_SLOTS = [f"{h:02d}:{m:02d}" for h in range(7, 18) for m in (0, SLOT_MINUTES)]
WEEK_DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri"]
EVENT_STATUSES = ["Upcoming", "Seen", "Missed"]


def week_monday(day: date) -> date:
    """Lundi de la semaine contenant `day`."""
    return day - timedelta(days=day.weekday())


def slot_end_time(start_time: str, minutes: int = SLOT_MINUTES) -> str:
    """Heure de fin d'un créneau : "09:30" → "10:00"."""
    start = datetime.strptime(start_time, "%H:%M")
    return (start + timedelta(minutes=minutes)).strftime("%H:%M")


def build_week_grid(
    events: Iterable[ScheduleEventResponse],
    week_start: date,
    holidays: Iterable = (),
) -> WeekGridResponse:
    """
    Construit la grille de la semaine contenant `week_start`.
    `holidays` : objets exposant `date` et `name`.
    """
    monday = week_monday(week_start)
    days = [monday + timedelta(days=i) for i in range(len(WEEK_DAYS))]

    holiday_names: Dict[date, str] = {}
    for holiday in holidays:
        holiday_names.setdefault(holiday.date, holiday.name)

    buckets: Dict[tuple, List[ScheduleEventResponse]] = {}
    status_counts = {status: 0 for status in EVENT_STATUSES}
    for event in events:
        # Samedi et dimanche n'ont pas de colonne : ni placés ni comptés
        if event.date not in days:
            continue
        status_counts[event.status] = status_counts.get(event.status, 0) + 1
        buckets.setdefault((event.start_time, event.date), []).append(event)

    rows = [
        GridRow(
            time=slot,
            cells=[GridCell(date=day, events=buckets.get((slot, day), [])) for day in days],
        )
        for slot in TIME_SLOTS
    ]

    return WeekGridResponse(
        week_start=monday,
        days=[
            GridDay(date=day, label=label, holiday=holiday_names.get(day))
            for day, label in zip(days, WEEK_DAYS)
        ],
        rows=rows,
        status_counts=status_counts,
    )
