"""
Rédaction automatique des notes d'évolution.

Une note est un paragraphe assemblé à partir de tables de formulations fixes
(niveau d'incitation, engagement, palier de performance) et des champs saisis
pendant la séance. Fonction pure : mêmes entrées, même texte.
"""

PROMPT_PHRASES = {
    "none": "independently",
    "min": "with minimal prompting",
    "mod": "with moderate prompting",
    "max": "with maximum support",
}

ENGAGEMENT_PHRASES = {
    "poor": "showed limited engagement and required frequent redirection",
    "fair": "demonstrated variable engagement throughout the session",
    "good": "was engaged and participated well in activities",
    "excellent": "was highly engaged and motivated throughout the session",
}

STRONG_THRESHOLD = 80
STEADY_THRESHOLD = 60


def performance_phrase(accuracy: float) -> str:
    if accuracy >= STRONG_THRESHOLD:
        return "demonstrated strong progress and mastery emerging"
    if accuracy >= STEADY_THRESHOLD:
        return "showed steady progress with continued practice needed"
    return "is developing skills in this area and would benefit from continued focus"


def first_name(name: str) -> str:
    parts = name.split()
    return parts[0] if parts else name


def generate_paragraph_note(student_name: str, session, goal_data, goal) -> str:
    """
    Rédige la note d'un objectif.

    - `session` : durée (`duration`), lieu (`location`) et engagement (`engagement`)
    - `goal_data` : accuracy, trials, prompt_level, activity, utterance, observations
    - `goal` : objectif de la banque (target_area, category)
    """
    short_name = first_name(student_name)
    prompt_text = PROMPT_PHRASES[goal_data.prompt_level]
    engagement_text = ENGAGEMENT_PHRASES[session.engagement]

    note = (
        f"{student_name} {engagement_text} during today's {session.duration}-minute "
        f"session in the {session.location}. "
    )
    note += (
        f"When targeting {goal.target_area.lower()} ({goal.category}), {short_name} achieved "
        f"{goal_data.accuracy}% accuracy across {goal_data.trials} trials {prompt_text}. "
    )

    if goal_data.activity:
        note += f"Activities included {goal_data.activity.lower()}. "

    if goal_data.utterance:
        note += f'Sample production: "{goal_data.utterance}". '

    note += f"{short_name} {performance_phrase(goal_data.accuracy)} in this area."

    if goal_data.observations:
        note += f" Additional observations: {goal_data.observations}"

    return note
