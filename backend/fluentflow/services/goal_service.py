"""
Service métier pour la banque d'objectifs.
"""

import uuid
import logging
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from fluentflow.models.goal import GoalTemplate
from fluentflow.schemas.goal import GoalTemplateCreate

logger = logging.getLogger(__name__)


def get_goals(
    db: Session,
    target_area: Optional[str] = None,
    search: Optional[str] = None,
) -> List[GoalTemplate]:
    """
    Retourne les objectifs triés par domaine puis catégorie.
    - `target_area` : égalité stricte sur le domaine
    - `search` : sous-chaîne dans le texte, le domaine, la catégorie ou la description
    """
    query = select(GoalTemplate)
    if target_area:
        query = query.where(GoalTemplate.target_area == target_area)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.where(or_(
            GoalTemplate.goal_text.ilike(pattern),
            GoalTemplate.target_area.ilike(pattern),
            GoalTemplate.category.ilike(pattern),
            GoalTemplate.description.ilike(pattern),
        ))
    return db.execute(
        query.order_by(GoalTemplate.target_area, GoalTemplate.category)
    ).scalars().all()


def get_goal(db: Session, goal_id: uuid.UUID) -> Optional[GoalTemplate]:
    return db.get(GoalTemplate, goal_id)


def create_goal(db: Session, data: GoalTemplateCreate) -> GoalTemplate:
    goal = GoalTemplate(
        target_area=data.target_area,
        category=data.category,
        goal_text=data.goal_text,
        description=data.description,
    )
    db.add(goal)
    db.commit()
    db.refresh(goal)
    logger.info("Objectif créé : %s / %s (%s)", goal.target_area, goal.category, goal.id)
    return goal


def get_target_areas(db: Session) -> List[str]:
    """Liste des domaines distincts de la banque, triés."""
    return db.execute(
        select(GoalTemplate.target_area).distinct().order_by(GoalTemplate.target_area)
    ).scalars().all()
