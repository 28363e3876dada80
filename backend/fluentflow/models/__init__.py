# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.

from fluentflow.models.user import User  # noqa: F401
from fluentflow.models.teacher import Teacher, Classroom  # noqa: F401
from fluentflow.models.student import Student  # noqa: F401
from fluentflow.models.goal import GoalTemplate, StudentGoal  # noqa: F401
from fluentflow.models.schedule import ScheduleEvent, Holiday  # noqa: F401
from fluentflow.models.session import TherapySession, SessionGoalData, Note  # noqa: F401
