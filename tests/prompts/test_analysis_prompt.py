from datetime import date
from types import SimpleNamespace

import pytest

from app.prompts.analysis import (
    ActivityContext,
    BehaviorLogContext,
    ChildContext,
    build_analysis_context,
    calculate_age,
)

TODAY = date(2026, 10, 19)


def make_child(**overrides) -> ChildContext:
    values = {"first_name": "Ava", "date_of_birth": date(2018, 3, 2)}
    values.update(overrides)
    return ChildContext(**values)


@pytest.mark.parametrize(
    "date_of_birth, today, expected",
    [
        (date(2018, 6, 15), date(2025, 6, 14), 6),
        (date(2018, 6, 15), date(2025, 6, 15), 7),
        (date(2018, 12, 31), date(2019, 12, 30), 0),
        (date(2018, 12, 31), date(2020, 1, 1), 1),
        (date(2016, 2, 29), date(2024, 2, 28), 7),
        (date(2016, 2, 29), date(2024, 2, 29), 8),
    ],
)
def test_calculate_age(date_of_birth, today, expected):
    assert calculate_age(date_of_birth, today) == expected


def test_empty_history_uses_placeholders():
    document = build_analysis_context(make_child(), [], [], TODAY)

    assert document.startswith(
        "You are an expert pediatric therapist specializing in neurodevelopmental "
        "disorders. Analyze the following data for Ava"
    )
    assert "- Name: Ava" in document
    assert "- Age: 8 years old" in document
    assert "- Diagnosis: Not specified" in document
    assert "- Additional Notes: None" in document
    assert "Recent Behavior Logs (0 entries):\nNo behavior logs available" in document
    assert "Recent Activities (0 entries):\nNo activities available" in document
    assert "4. Provide 4-6 specific, actionable recommendations" in document
    assert document.endswith("parents can implement at home.\n")


def test_behavior_log_rendering():
    log = BehaviorLogContext(
        log_date=date(2026, 10, 18),
        mood="anxious",
        energy_level=2,
        sleep_quality=4,
        sleep_hours=7.5,
        behaviors_observed=["hand flapping", "echolalia"],
        triggers="Fire drill at school",
    )

    document = build_analysis_context(make_child(), [log], [], TODAY)

    expected = "\n".join(
        [
            "Recent Behavior Logs (1 entries):",
            "Date: 2026-10-18",
            "Mood: anxious",
            "Energy Level: 2/5",
            "Sleep Quality: 4/5",
            "Sleep Hours: 7.5",
            "Behaviors Observed: hand flapping, echolalia",
            "Triggers: Fire drill at school",
            "Successes: None",
            "Challenges: None",
        ]
    )
    assert expected in document


def test_behavior_log_missing_values():
    log = BehaviorLogContext(
        log_date=date(2026, 10, 18), mood=None, energy_level=3, sleep_quality=3
    )

    document = build_analysis_context(make_child(), [log], [], TODAY)

    assert "Mood: None" in document
    assert "Sleep Hours: N/A" in document
    assert "Behaviors Observed: None" in document


def test_whole_sleep_hours_render_without_decimals():
    log = BehaviorLogContext(
        log_date=TODAY, mood="calm", energy_level=3, sleep_quality=3, sleep_hours=8.0
    )

    document = build_analysis_context(make_child(), [log], [], TODAY)

    assert "Sleep Hours: 8\n" in document


def test_activity_rendering():
    activity = ActivityContext(
        activity_date=date(2026, 10, 17),
        activity_type="therapy",
        activity_name="Occupational therapy",
        difficulty_level=4,
        child_engagement=5,
        completion_status="completed",
    )

    document = build_analysis_context(make_child(), [], [activity], TODAY)

    expected = "\n".join(
        [
            "Recent Activities (1 entries):",
            "Date: 2026-10-17",
            "Type: therapy",
            "Name: Occupational therapy",
            "Duration: N/A minutes",
            "Difficulty: 4/5",
            "Engagement: 5/5",
            "Status: completed",
            "Notes: None",
        ]
    )
    assert expected in document


def test_entries_keep_given_order():
    logs = [
        BehaviorLogContext(
            log_date=date(2026, 10, day), mood="calm", energy_level=3, sleep_quality=3
        )
        for day in (18, 12, 15)
    ]

    document = build_analysis_context(make_child(), logs, [], TODAY)

    positions = [
        document.index(f"Date: 2026-10-{day}") for day in ("18", "12", "15")
    ]
    assert positions == sorted(positions)
    assert "\n\nDate: 2026-10-12" in document


def test_child_details_are_included():
    child = make_child(diagnosis="ADHD", notes="Prefers visual instructions")

    document = build_analysis_context(child, [], [], TODAY)

    assert "- Diagnosis: ADHD" in document
    assert "- Additional Notes: Prefers visual instructions" in document


def test_accepts_record_objects():
    child = SimpleNamespace(
        first_name="Leo", date_of_birth=date(2020, 1, 1), diagnosis="", notes=None
    )
    log = SimpleNamespace(
        log_date=TODAY,
        mood="happy",
        energy_level=5,
        sleep_quality=5,
        sleep_hours=None,
        behaviors_observed=None,
        triggers=None,
        successes="Tried new food",
        challenges=None,
    )

    document = build_analysis_context(child, [log], [], TODAY)

    assert "- Age: 6 years old" in document
    assert "- Diagnosis: Not specified" in document
    assert "Successes: Tried new food" in document
