"""
Tests des services élèves et objectifs assignés, sur une base SQLite en mémoire.
"""

import uuid
from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from fluentflow.models.goal import GoalTemplate, StudentGoal
from fluentflow.models.teacher import Classroom, Teacher
from fluentflow.schemas.goal import StudentGoalsAssign
from fluentflow.schemas.session import GoalDataInput, SessionSave
from fluentflow.schemas.student import StudentCreate, StudentUpdate
from fluentflow.services import session_service, student_service


# --- Helpers ---

def make_student(db, name="Emma Thompson", grade="K"):
    return student_service.create_student(db, StudentCreate(
        name=name,
        date_of_birth=date(2018, 3, 15),
        grade=grade,
        guardians=["Sarah Thompson"],
        iep_dates=[date(2024, 3, 1)],
    ))


def make_goal(db, target_area="Articulation", category="Initial /s/"):
    goal = GoalTemplate(target_area=target_area, category=category, goal_text=f"{category} goal")
    db.add(goal)
    db.commit()
    return goal


def active_links(db, student_id, goal_id):
    return db.query(StudentGoal).filter(
        StudentGoal.student_id == student_id,
        StudentGoal.goal_id == goal_id,
        StudentGoal.is_active.is_(True),
    ).count()


# --- Création / mise à jour ---

def test_create_student_dates_pps_en_iso(db_session):
    student = make_student(db_session)

    assert student.id is not None
    assert student.is_active is True
    assert student.iep_dates == ["2024-03-01"]
    assert student.guardians == ["Sarah Thompson"]


def test_update_student_champs_partiels(db_session):
    student = make_student(db_session)

    updated = student_service.update_student(db_session, student.id, StudentUpdate(grade="1"))

    assert updated.grade == "1"
    assert updated.name == "Emma Thompson"


def test_update_student_introuvable(db_session):
    assert student_service.update_student(db_session, uuid.uuid4(), StudentUpdate(grade="1")) is None


# --- Suppression logique ---

def test_eleve_desactive_absent_de_la_liste(db_session):
    emma = make_student(db_session, "Emma Thompson")
    liam = make_student(db_session, "Liam Chen", grade="1")

    student_service.deactivate_student(db_session, emma.id)

    names = [s.name for s in student_service.list_students(db_session)]
    assert names == ["Liam Chen"]
    # L'élève reste consultable par son ID
    assert student_service.get_student(db_session, emma.id).is_active is False
    assert liam.is_active is True


def test_seances_conservees_apres_desactivation(db_session):
    student = make_student(db_session)
    goal = make_goal(db_session)
    student_service.assign_goals(db_session, student.id, StudentGoalsAssign(goal_ids=[goal.id]))
    session_service.save_session(db_session, SessionSave(
        date=date(2025, 1, 13),
        student_id=student.id,
        goal_data=[GoalDataInput(goal_id=goal.id, accuracy=70, trials=10, activity="Drill")],
    ))

    student_service.deactivate_student(db_session, student.id)

    sessions = session_service.get_sessions(db_session, student_id=student.id)
    assert len(sessions) == 1
    assert len(sessions[0].goal_data) == 1
    assert len(sessions[0].notes) == 1


def test_recherche_nom_ou_niveau(db_session):
    make_student(db_session, "Emma Thompson", grade="K")
    make_student(db_session, "Liam Chen", grade="1")

    assert [s.name for s in student_service.list_students(db_session, "emma")] == ["Emma Thompson"]
    assert [s.name for s in student_service.list_students(db_session, "1")] == ["Liam Chen"]


# --- Assignation d'objectifs ---

def test_assign_goals_sans_doublon(db_session):
    student = make_student(db_session)
    goal = make_goal(db_session)

    student_service.assign_goals(db_session, student.id, StudentGoalsAssign(goal_ids=[goal.id, goal.id]))
    links = student_service.assign_goals(db_session, student.id, StudentGoalsAssign(goal_ids=[goal.id]))

    assert len(links) == 1
    assert active_links(db_session, student.id, goal.id) == 1


def test_assign_goals_reactive_assignation(db_session):
    student = make_student(db_session)
    goal = make_goal(db_session)
    student_service.assign_goals(db_session, student.id, StudentGoalsAssign(goal_ids=[goal.id]))
    assert student_service.deactivate_goal(db_session, student.id, goal.id) is True
    assert student_service.list_student_goals(db_session, student.id) == []

    links = student_service.assign_goals(db_session, student.id, StudentGoalsAssign(goal_ids=[goal.id]))

    assert len(links) == 1
    assert db_session.query(StudentGoal).filter(StudentGoal.student_id == student.id).count() == 1


def test_assign_goals_objectif_inconnu(db_session):
    student = make_student(db_session)

    with pytest.raises(ValueError, match="Objectif introuvable"):
        student_service.assign_goals(db_session, student.id, StudentGoalsAssign(goal_ids=[uuid.uuid4()]))


def test_assign_goals_eleve_inconnu(db_session):
    goal = make_goal(db_session)

    with pytest.raises(ValueError, match="Élève introuvable"):
        student_service.assign_goals(db_session, uuid.uuid4(), StudentGoalsAssign(goal_ids=[goal.id]))


def test_deactivate_goal_sans_assignation(db_session):
    student = make_student(db_session)
    goal = make_goal(db_session)
    assert student_service.deactivate_goal(db_session, student.id, goal.id) is False


def test_objectifs_tries_par_domaine(db_session):
    student = make_student(db_session)
    phono = make_goal(db_session, "Phonology", "Fronting")
    artic = make_goal(db_session, "Articulation", "Blends")

    links = student_service.assign_goals(db_session, student.id, StudentGoalsAssign(goal_ids=[phono.id, artic.id]))

    assert [link.goal.target_area for link in links] == ["Articulation", "Phonology"]


def test_index_unique_une_seule_assignation_active(db_session):
    """La base refuse deux assignations actives du même objectif au même élève."""
    student = make_student(db_session)
    goal = make_goal(db_session)
    db_session.add(StudentGoal(student_id=student.id, goal_id=goal.id, is_active=True))
    db_session.commit()

    db_session.add(StudentGoal(student_id=student.id, goal_id=goal.id, is_active=True))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_index_unique_autorise_les_assignations_inactives(db_session):
    student = make_student(db_session)
    goal = make_goal(db_session)
    db_session.add_all([
        StudentGoal(student_id=student.id, goal_id=goal.id, is_active=False),
        StudentGoal(student_id=student.id, goal_id=goal.id, is_active=False),
        StudentGoal(student_id=student.id, goal_id=goal.id, is_active=True),
    ])
    db_session.commit()

    assert db_session.query(StudentGoal).filter(StudentGoal.student_id == student.id).count() == 3
    assert active_links(db_session, student.id, goal.id) == 1


# --- Références classe / enseignant ---

def test_create_student_classe_inconnue(db_session):
    with pytest.raises(ValueError, match="Classe introuvable"):
        student_service.create_student(db_session, StudentCreate(
            name="Emma Thompson", date_of_birth=date(2018, 3, 15), grade="K", classroom_id=uuid.uuid4(),
        ))
    assert student_service.list_students(db_session) == []


def test_update_student_enseignant_inconnu(db_session):
    student = make_student(db_session)

    with pytest.raises(ValueError, match="Enseignant introuvable"):
        student_service.update_student(db_session, student.id, StudentUpdate(teacher_id=uuid.uuid4()))
    assert student_service.get_student(db_session, student.id).teacher_id is None


def test_create_student_classe_existante(db_session):
    teacher = Teacher(name="Ms. Johnson")
    db_session.add(teacher)
    db_session.flush()
    classroom = Classroom(name="Kindergarten - Room 101", grade="K", teacher_id=teacher.id)
    db_session.add(classroom)
    db_session.commit()

    student = student_service.create_student(db_session, StudentCreate(
        name="Emma Thompson", date_of_birth=date(2018, 3, 15), grade="K",
        classroom_id=classroom.id, teacher_id=teacher.id,
    ))

    assert student.classroom.name == "Kindergarten - Room 101"
    assert student.teacher.name == "Ms. Johnson"
