"""
Service des rapports de progression.

Les agrégats sont calculés à partir des mesures enregistrées (session_goal_data).
La suggestion de palier indique s'il faut faire évoluer un objectif :
- Advance  : précision ≥ 80 %, au moins 30 essais et 3 séances
- Refine   : précision entre 60 % et 80 %
- Maintain : sinon
"""

import calendar
import uuid
import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from fluentflow.models.goal import GoalTemplate, StudentGoal
from fluentflow.models.schedule import ScheduleEvent
from fluentflow.models.session import SessionGoalData, TherapySession
from fluentflow.models.student import Student
from fluentflow.schemas.report import (
    AreaPerformance,
    GoalProgress,
    ReportOverviewResponse,
    StudentProgressResponse,
    WeeklyProgress,
)

logger = logging.getLogger(__name__)

ADVANCE_ACCURACY = 80
ADVANCE_TRIALS = 30
ADVANCE_SESSIONS = 3
REFINE_ACCURACY = 60
TIERS = ["Advance", "Refine", "Maintain"]

# Périodes proposées par la page des rapports (nombre de mois)
RANGE_MONTHS = {"1month": 1, "3months": 3, "6months": 6, "1year": 12}


def suggest_tier(accuracy: float, trials: int, sessions: int) -> str:
    if accuracy >= ADVANCE_ACCURACY and trials >= ADVANCE_TRIALS and sessions >= ADVANCE_SESSIONS:
        return "Advance"
    if REFINE_ACCURACY <= accuracy < ADVANCE_ACCURACY:
        return "Refine"
    return "Maintain"


def months_ago(day: date, months: int) -> date:
    """Même jour `months` mois plus tôt, ramené au dernier jour du mois si besoin."""
    month_index = day.year * 12 + day.month - 1 - months
    year, month = divmod(month_index, 12)
    month += 1
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def range_start(range_name: str, today: Optional[date] = None) -> date:
    """Premier jour d'une période glissante ("3months" → aujourd'hui moins 3 mois)."""
    if range_name not in RANGE_MONTHS:
        raise ValueError(f"Période invalide. Valeurs acceptées : {list(RANGE_MONTHS)}")
    return months_ago(today or date.today(), RANGE_MONTHS[range_name])


def get_student_progress(
    db: Session,
    student_id: uuid.UUID,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Optional[StudentProgressResponse]:
    """
    Progression par objectif actif de l'élève, sur la période `start`–`end` (bornes incluses).
    Retourne None si l'élève n'existe pas.
    """
    student = db.get(Student, student_id)
    if student is None:
        return None

    links = db.execute(
        select(StudentGoal)
        .join(GoalTemplate, GoalTemplate.id == StudentGoal.goal_id)
        .where(StudentGoal.student_id == student_id, StudentGoal.is_active.is_(True))
        .order_by(GoalTemplate.target_area, GoalTemplate.category)
    ).scalars().all()

    stats = _stats_by_student_goal(db, SessionGoalData.student_id == student_id, *_date_filters(start, end))

    goals = []
    for link in links:
        progress = GoalProgress(
            student_goal_id=link.id,
            goal_id=link.goal_id,
            target_area=link.goal.target_area,
            category=link.goal.category,
            goal_text=link.goal.goal_text,
        )
        row = stats.get(link.id)
        if row is not None:
            progress.average_accuracy = round(row["accuracy"], 1)
            progress.total_trials = row["total_trials"]
            progress.session_count = row["session_count"]
            progress.last_session_date = row["last_session_date"]
            progress.tier = suggest_tier(row["accuracy"], row["total_trials"], row["session_count"])
        goals.append(progress)

    return StudentProgressResponse(student_id=student.id, student_name=student.name, goals=goals)


def get_overview(
    db: Session,
    start: Optional[date] = None,
    end: Optional[date] = None,
    today: Optional[date] = None,
) -> ReportOverviewResponse:
    """
    Vue d'ensemble du tableau de bord.
    - compteurs du jour et de la semaine en cours (créneaux planifiés), objectifs suivis
    - performance par domaine, évolution hebdomadaire et paliers, limités à `start`–`end`
    """
    today = today or date.today()
    monday = today - timedelta(days=today.weekday())
    period = _date_filters(start, end)

    active_students = db.execute(
        select(func.count()).select_from(Student).where(Student.is_active.is_(True))
    ).scalar() or 0
    session_count = db.execute(
        select(func.count()).select_from(TherapySession).where(*period)
    ).scalar() or 0
    sessions_today = db.execute(
        select(func.count()).select_from(ScheduleEvent).where(ScheduleEvent.date == today)
    ).scalar() or 0
    sessions_this_week = db.execute(
        select(func.count()).select_from(ScheduleEvent).where(
            ScheduleEvent.date >= monday,
            ScheduleEvent.date < monday + timedelta(days=7),
        )
    ).scalar() or 0

    active_link_ids = set(db.execute(
        select(StudentGoal.id)
        .join(Student, Student.id == StudentGoal.student_id)
        .where(StudentGoal.is_active.is_(True), Student.is_active.is_(True))
    ).scalars().all())

    area_rows = db.execute(
        select(GoalTemplate.target_area, func.avg(SessionGoalData.accuracy), func.count(SessionGoalData.id))
        .join(StudentGoal, StudentGoal.id == SessionGoalData.student_goal_id)
        .join(GoalTemplate, GoalTemplate.id == StudentGoal.goal_id)
        .join(TherapySession, TherapySession.id == SessionGoalData.session_id)
        .where(*period)
        .group_by(GoalTemplate.target_area)
        .order_by(GoalTemplate.target_area)
    ).all()
    performance_by_area = [
        AreaPerformance(target_area=area, average_accuracy=round(float(avg), 1), data_points=count)
        for area, avg, count in area_rows
    ]

    data_rows = db.execute(
        select(TherapySession.date, SessionGoalData.accuracy, SessionGoalData.trials)
        .join(TherapySession, TherapySession.id == SessionGoalData.session_id)
        .where(*period)
    ).all()
    progress_over_time = weekly_progress(data_rows)

    tier_distribution = {tier: 0 for tier in TIERS}
    for link_id, row in _stats_by_student_goal(db, *period).items():
        if link_id not in active_link_ids:
            continue
        tier = suggest_tier(row["accuracy"], row["total_trials"], row["session_count"])
        tier_distribution[tier] += 1

    return ReportOverviewResponse(
        active_students=active_students,
        session_count=session_count,
        sessions_today=sessions_today,
        sessions_this_week=sessions_this_week,
        goals_tracked=len(active_link_ids),
        performance_by_area=performance_by_area,
        progress_over_time=progress_over_time,
        tier_distribution=tier_distribution,
    )


def weekly_progress(rows) -> List[WeeklyProgress]:
    """
    Regroupe des lignes (date, accuracy, trials) par semaine (lundi).
    Retourne les semaines dans l'ordre chronologique.
    """
    weeks: Dict[date, List] = {}
    for day, accuracy, trials in rows:
        monday = day - timedelta(days=day.weekday())
        weeks.setdefault(monday, []).append((accuracy, trials))

    return [
        WeeklyProgress(
            week_start=monday,
            average_accuracy=round(sum(a for a, _ in values) / len(values), 1),
            total_trials=sum(t for _, t in values),
        )
        for monday, values in sorted(weeks.items())
    ]


def _date_filters(start: Optional[date], end: Optional[date]) -> list:
    filters = []
    if start is not None:
        filters.append(TherapySession.date >= start)
    if end is not None:
        filters.append(TherapySession.date <= end)
    return filters


def _stats_by_student_goal(db: Session, *filters) -> Dict[uuid.UUID, dict]:
    """
    Précision moyenne, total d'essais, nombre de séances et dernière date par assignation.
    `accuracy` n'est pas arrondie : le palier se calcule sur la valeur exacte.
    """
    rows = db.execute(
        select(
            SessionGoalData.student_goal_id,
            func.avg(SessionGoalData.accuracy),
            func.sum(SessionGoalData.trials),
            func.count(func.distinct(SessionGoalData.session_id)),
            func.max(TherapySession.date),
        )
        .join(TherapySession, TherapySession.id == SessionGoalData.session_id)
        .where(*filters)
        .group_by(SessionGoalData.student_goal_id)
    ).all()

    return {
        link_id: {
            "accuracy": float(avg),
            "total_trials": int(total or 0),
            "session_count": int(count or 0),
            "last_session_date": last,
        }
        for link_id, avg, total, count, last in rows
    }


def resolve_period(
    start: Optional[date] = None,
    end: Optional[date] = None,
    range_name: Optional[str] = None,
    today: Optional[date] = None,
) -> Tuple[Optional[date], Optional[date]]:
    """Bornes effectives : `start` explicite prioritaire, sinon début de la période glissante."""
    if start is None and range_name:
        start = range_start(range_name, today)
    return start, end
