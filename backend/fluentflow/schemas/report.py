"""
Schémas Pydantic pour les rapports de progression.
"""

import uuid
import datetime as dt
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

Tier = Literal["Advance", "Refine", "Maintain"]
DateRange = Literal["1month", "3months", "6months", "1year"]


class TierSuggestionResponse(BaseModel):
    accuracy: float
    trials: int
    sessions: int
    tier: Tier


class GoalProgress(BaseModel):
    student_goal_id: uuid.UUID
    goal_id: uuid.UUID
    target_area: str
    category: str
    goal_text: str
    average_accuracy: Optional[float] = None  # None si aucune donnée
    total_trials: int = 0
    session_count: int = 0
    last_session_date: Optional[dt.date] = None
    tier: Optional[Tier] = None


class StudentProgressResponse(BaseModel):
    student_id: uuid.UUID
    student_name: str
    goals: List[GoalProgress]


class AreaPerformance(BaseModel):
    target_area: str
    average_accuracy: float
    data_points: int


class WeeklyProgress(BaseModel):
    week_start: dt.date
    average_accuracy: float
    total_trials: int


class ReportOverviewResponse(BaseModel):
    active_students: int
    session_count: int
    sessions_today: int = 0       # créneaux planifiés aujourd'hui
    sessions_this_week: int = 0   # créneaux planifiés du lundi au dimanche
    goals_tracked: int = 0        # objectifs actifs des élèves actifs
    performance_by_area: List[AreaPerformance]
    progress_over_time: List[WeeklyProgress]
    tier_distribution: Dict[str, int]
