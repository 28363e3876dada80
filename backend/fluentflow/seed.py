"""
Données de démonstration.
Exécution : python -m fluentflow.seed

Crée les tables manquantes puis insère un compte orthophoniste, des enseignants,
des classes, une banque d'objectifs, des élèves avec leurs objectifs,
les créneaux de la semaine en cours et quelques jours fériés.
Ne fait rien si le compte de démonstration existe déjà.
"""

import logging
from datetime import date, timedelta

from sqlalchemy import select

from fluentflow.database import SessionLocal, init_db
from fluentflow.models.goal import GoalTemplate, StudentGoal
from fluentflow.models.schedule import Holiday, ScheduleEvent
from fluentflow.models.student import Student
from fluentflow.models.teacher import Classroom, Teacher
from fluentflow.models.user import User
from fluentflow.services.auth_service import hash_password

logger = logging.getLogger(__name__)

DEMO_EMAIL = "slp@fluentflow.com"
DEMO_PASSWORD = "password123"

GOAL_TEMPLATES = [
    ("Articulation", "Initial /s/", "Student will produce /s/ in initial position of words with 80% accuracy", "Targeting initial /s/ sound production"),
    ("Articulation", "Initial /r/", "Student will produce /r/ in initial position of words with 80% accuracy", "Targeting initial /r/ sound production"),
    ("Articulation", "Blends", "Student will produce /s/ blends in words with 80% accuracy", "Targeting /s/ blend production"),
    ("Articulation", "Conversation", "Student will produce target sounds correctly in conversation with 80% accuracy", "Carryover to conversational speech"),
    ("Phonology", "Final Consonant Deletion", "Student will produce final consonants in CVC words with 80% accuracy", "Eliminating final consonant deletion"),
    ("Phonology", "Fronting", "Student will produce back sounds /k/ and /g/ without fronting with 80% accuracy", "Eliminating fronting process"),
    ("Phonology", "Gliding", "Student will produce liquids /r/ and /l/ without gliding with 80% accuracy", "Eliminating gliding of liquids"),
    ("Expressive Language", "Sentence Structure", "Student will produce grammatically correct 5-7 word sentences with 80% accuracy", "Improving sentence structure"),
    ("Expressive Language", "Questions", "Student will formulate wh-questions appropriately with 80% accuracy", "Developing question formulation"),
    ("Expressive Language", "Past Tense", "Student will use regular past tense verbs correctly with 80% accuracy", "Targeting past tense morphology"),
    ("Receptive Language", "Following Directions", "Student will follow 2-step directions with 80% accuracy", "Following multi-step directions"),
    ("Receptive Language", "WH Questions", "Student will answer wh-questions about stories with 80% accuracy", "Comprehending questions"),
    ("Pragmatics", "Turn Taking", "Student will take appropriate conversational turns with 80% accuracy", "Conversational turn taking"),
    ("Pragmatics", "Topic Maintenance", "Student will maintain topic for 3+ exchanges with 80% accuracy", "Staying on topic"),
    ("Pragmatics", "Peer Interaction", "Student will initiate and maintain peer interactions appropriately with 80% accuracy", "Peer social skills"),
    ("Fluency", "Easy Onset", "Student will use easy onset of speech with 80% accuracy", "Gentle voice onset"),
    ("Fluency", "Pacing", "Student will use appropriate speech rate with 80% accuracy", "Controlling speech rate"),
    ("AAC", "Requesting", "Student will use AAC to make requests with 80% accuracy", "Functional requesting with AAC"),
    ("AAC", "Core Vocabulary", "Student will use core vocabulary on AAC with 80% accuracy", "High frequency word use"),
    ("AAC", "Combining Words", "Student will combine 2+ words on AAC with 80% accuracy", "Multi-word messages"),
    ("Vocabulary", "Synonyms", "Student will identify and use synonyms with 80% accuracy", "Understanding word relationships"),
    ("Narratives", "Story Grammar", "Student will include all story grammar elements when retelling with 80% accuracy", "Complete story structure"),
]

# (nom, naissance, niveau, classe, responsables, dates PPS, remarques, catégories d'objectifs)
STUDENTS = [
    ("Emma Thompson", date(2018, 3, 15), "K", 0, ["Sarah Thompson", "John Thompson"],
     ["2023-09-01", "2024-03-01"], "Very engaged, responds well to visual supports",
     [("Articulation", "Initial /s/"), ("Articulation", "Blends"), ("Articulation", "Conversation")]),
    ("Liam Chen", date(2017, 11, 22), "1", 1, ["Michelle Chen", "David Chen"],
     ["2023-10-15"], "Benefits from movement breaks",
     [("Receptive Language", "Following Directions"), ("Expressive Language", "Sentence Structure"),
      ("Expressive Language", "Questions")]),
    ("Sophia Rodriguez", date(2018, 7, 8), "K", 0, ["Maria Rodriguez", "Carlos Rodriguez"],
     ["2023-09-01"], "Bilingual - Spanish/English",
     [("Phonology", "Final Consonant Deletion"), ("Phonology", "Fronting")]),
    ("Noah Williams", date(2017, 5, 30), "1", 1, ["Ashley Williams", "Michael Williams"],
     ["2023-11-01", "2024-05-01"], "Peer model in group sessions",
     [("Pragmatics", "Turn Taking"), ("Pragmatics", "Topic Maintenance"), ("Pragmatics", "Peer Interaction")]),
    ("Ava Patel", date(2018, 9, 12), "K", 0, ["Priya Patel", "Raj Patel"],
     ["2024-01-15"], "Uses AAC device for communication",
     [("AAC", "Requesting"), ("AAC", "Core Vocabulary"), ("AAC", "Combining Words")]),
]

# (jour de la semaine, début, fin, lieu, élèves, enseignant, type, statut)
WEEK_EVENTS = [
    (0, "09:00", "09:30", "Speech Room", [0], 0, "Individual", "Seen"),
    (0, "10:00", "10:30", "Speech Room", [1, 3], 1, "Group", "Seen"),
    (1, "10:00", "10:30", "Classroom", [2], 0, "Individual", "Missed"),
    (2, "09:00", "09:30", "Speech Room", [0], 0, "Individual", "Upcoming"),
    (2, "13:00", "13:30", "Speech Room", [4], 0, "Individual", "Upcoming"),
    (3, "10:00", "10:30", "Speech Room", [1, 3], 1, "Group", "Upcoming"),
    (4, "09:00", "09:30", "Speech Room", [0], 0, "Individual", "Upcoming"),
    (4, "10:00", "10:30", "Speech Room", [2], 0, "Individual", "Upcoming"),
]

HOLIDAYS = [
    ("Winter Break", date(2024, 12, 23)),
    ("Winter Break", date(2024, 12, 24)),
    ("Winter Break", date(2024, 12, 25)),
    ("Winter Break", date(2024, 12, 26)),
    ("Winter Break", date(2024, 12, 27)),
    ("New Year's Day", date(2025, 1, 1)),
    ("MLK Day", date(2025, 1, 20)),
    ("Presidents Day", date(2025, 2, 17)),
    ("Spring Break", date(2025, 3, 24)),
    ("Spring Break", date(2025, 3, 25)),
    ("Spring Break", date(2025, 3, 26)),
    ("Spring Break", date(2025, 3, 27)),
    ("Spring Break", date(2025, 3, 28)),
]


def seed(db) -> bool:
    """Insère les données de démonstration. Retourne False si elles existent déjà."""
    if db.execute(select(User).where(User.email == DEMO_EMAIL)).scalar() is not None:
        logger.info("Données de démonstration déjà présentes, rien à faire.")
        return False

    db.add(User(email=DEMO_EMAIL, password_hash=hash_password(DEMO_PASSWORD), name="Demo SLP", role="SLP"))

    teachers = [
        Teacher(name="Ms. Johnson", email="johnson@school.edu", classroom="Room 101"),
        Teacher(name="Mr. Smith", email="smith@school.edu", classroom="Room 102"),
        Teacher(name="Mrs. Davis", email="davis@school.edu", classroom="Room 103"),
    ]
    db.add_all(teachers)
    db.flush()

    classrooms = [
        Classroom(name="Kindergarten - Room 101", grade="K", teacher_id=teachers[0].id),
        Classroom(name="1st Grade - Room 102", grade="1", teacher_id=teachers[1].id),
    ]
    db.add_all(classrooms)

    goals = {}
    for target_area, category, goal_text, description in GOAL_TEMPLATES:
        goal = GoalTemplate(target_area=target_area, category=category, goal_text=goal_text, description=description)
        db.add(goal)
        goals[(target_area, category)] = goal
    db.flush()

    students = []
    for name, dob, grade, classroom_idx, guardians, iep_dates, notes, goal_keys in STUDENTS:
        classroom = classrooms[classroom_idx]
        student = Student(
            name=name,
            date_of_birth=dob,
            grade=grade,
            classroom_id=classroom.id,
            teacher_id=classroom.teacher_id,
            guardians=guardians,
            iep_dates=iep_dates,
            notes=notes,
            is_active=True,
        )
        db.add(student)
        db.flush()
        for key in goal_keys:
            db.add(StudentGoal(student_id=student.id, goal_id=goals[key].id, is_active=True))
        students.append(student)

    monday = date.today() - timedelta(days=date.today().weekday())
    for offset, start, end, location, student_idx, teacher_idx, session_type, status in WEEK_EVENTS:
        db.add(ScheduleEvent(
            date=monday + timedelta(days=offset),
            start_time=start,
            end_time=end,
            location=location,
            student_ids=[str(students[i].id) for i in student_idx],
            teacher_id=teachers[teacher_idx].id,
            session_type=session_type,
            status=status,
        ))

    db.add_all(Holiday(name=name, date=day) for name, day in HOLIDAYS)

    db.commit()
    logger.info(
        "Données de démonstration créées : %d objectifs, %d élèves, %d créneaux.",
        len(GOAL_TEMPLATES), len(STUDENTS), len(WEEK_EVENTS),
    )
    return True


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    init_db()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
