"""Prompt construction for the child behavior analysis feature.

Everything in this module is pure: it turns already-loaded records into the
text document sent to the model and performs no I/O.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Optional

NOT_SPECIFIED = "Not specified"
NONE_PLACEHOLDER = "None"
NA_PLACEHOLDER = "N/A"
NO_BEHAVIOR_LOGS = "No behavior logs available"
NO_ACTIVITIES = "No activities available"


def calculate_age(date_of_birth: date, today: date) -> int:
    """Whole years between ``date_of_birth`` and ``today``."""
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def _or(value: Any, placeholder: str) -> str:
    if value is None or value == "":
        return placeholder
    return str(value)


def _number(value: Optional[float]) -> str:
    if value is None:
        return NA_PLACEHOLDER
    return f"{value:g}"


@dataclass
class ChildContext:
    first_name: str
    date_of_birth: date
    diagnosis: str | None = None
    notes: str | None = None

    @classmethod
    def from_record(cls, record: Any) -> "ChildContext":
        return cls(
            first_name=record.first_name,
            date_of_birth=record.date_of_birth,
            diagnosis=record.diagnosis,
            notes=record.notes,
        )


@dataclass
class BehaviorLogContext:
    log_date: date
    mood: str | None
    energy_level: int
    sleep_quality: int
    sleep_hours: float | None = None
    behaviors_observed: list[str] = field(default_factory=list)
    triggers: str | None = None
    successes: str | None = None
    challenges: str | None = None

    @classmethod
    def from_record(cls, record: Any) -> "BehaviorLogContext":
        return cls(
            log_date=record.log_date,
            mood=record.mood,
            energy_level=record.energy_level,
            sleep_quality=record.sleep_quality,
            sleep_hours=record.sleep_hours,
            behaviors_observed=list(record.behaviors_observed or []),
            triggers=record.triggers,
            successes=record.successes,
            challenges=record.challenges,
        )

    def render(self) -> str:
        behaviors = ", ".join(self.behaviors_observed) or NONE_PLACEHOLDER
        return "\n".join(
            [
                f"Date: {self.log_date.isoformat()}",
                f"Mood: {_or(self.mood, NONE_PLACEHOLDER)}",
                f"Energy Level: {self.energy_level}/5",
                f"Sleep Quality: {self.sleep_quality}/5",
                f"Sleep Hours: {_number(self.sleep_hours)}",
                f"Behaviors Observed: {behaviors}",
                f"Triggers: {_or(self.triggers, NONE_PLACEHOLDER)}",
                f"Successes: {_or(self.successes, NONE_PLACEHOLDER)}",
                f"Challenges: {_or(self.challenges, NONE_PLACEHOLDER)}",
            ]
        )


@dataclass
class ActivityContext:
    activity_date: date
    activity_type: str
    activity_name: str
    difficulty_level: int
    child_engagement: int
    completion_status: str
    duration_minutes: int | None = None
    notes: str | None = None

    @classmethod
    def from_record(cls, record: Any) -> "ActivityContext":
        return cls(
            activity_date=record.activity_date,
            activity_type=record.activity_type,
            activity_name=record.activity_name,
            difficulty_level=record.difficulty_level,
            child_engagement=record.child_engagement,
            completion_status=record.completion_status,
            duration_minutes=record.duration_minutes,
            notes=record.notes,
        )

    def render(self) -> str:
        return "\n".join(
            [
                f"Date: {self.activity_date.isoformat()}",
                f"Type: {self.activity_type}",
                f"Name: {self.activity_name}",
                f"Duration: {_or(self.duration_minutes, NA_PLACEHOLDER)} minutes",
                f"Difficulty: {self.difficulty_level}/5",
                f"Engagement: {self.child_engagement}/5",
                f"Status: {self.completion_status}",
                f"Notes: {_or(self.notes, NONE_PLACEHOLDER)}",
            ]
        )


class AnalysisPrompt:
    """Builds the analysis document for one child."""

    PREAMBLE = (
        "You are an expert pediatric therapist specializing in neurodevelopmental "
        "disorders. Analyze the following data for {name} and provide personalized "
        "recommendations."
    )

    INSTRUCTIONS = """Based on this data:
1. Identify behavior patterns and trends
2. Analyze triggers and their impact
3. Recognize what activities work best
4. Provide 4-6 specific, actionable recommendations
5. Prioritize recommendations based on urgency and impact
6. Consider the child's age, diagnosis, and individual needs

Focus on practical, evidence-based strategies that parents can implement at home."""

    def build(
        self,
        child: ChildContext,
        behavior_logs: list[BehaviorLogContext],
        activities: list[ActivityContext],
        today: date,
    ) -> str:
        sections = [
            self.PREAMBLE.format(name=child.first_name),
            "\n".join(
                [
                    "Child Information:",
                    f"- Name: {child.first_name}",
                    f"- Age: {calculate_age(child.date_of_birth, today)} years old",
                    f"- Diagnosis: {_or(child.diagnosis, NOT_SPECIFIED)}",
                    f"- Additional Notes: {_or(child.notes, NONE_PLACEHOLDER)}",
                ]
            ),
            self._section(
                f"Recent Behavior Logs ({len(behavior_logs)} entries):",
                [log.render() for log in behavior_logs],
                NO_BEHAVIOR_LOGS,
            ),
            self._section(
                f"Recent Activities ({len(activities)} entries):",
                [activity.render() for activity in activities],
                NO_ACTIVITIES,
            ),
            self.INSTRUCTIONS,
        ]
        return "\n\n".join(sections) + "\n"

    @staticmethod
    def _section(heading: str, entries: list[str], empty_sentence: str) -> str:
        body = "\n\n".join(entries) if entries else empty_sentence
        return f"{heading}\n{body}"


def build_analysis_context(
    child: Any,
    behavior_logs: Iterable[Any],
    activities: Iterable[Any],
    today: date,
) -> str:
    """Render the analysis document from child, log and activity records.

    Records are any objects exposing the model attributes (ORM rows or the
    context dataclasses). Order is preserved as given.
    """
    if not isinstance(child, ChildContext):
        child = ChildContext.from_record(child)
    log_contexts = [
        log
        if isinstance(log, BehaviorLogContext)
        else BehaviorLogContext.from_record(log)
        for log in behavior_logs
    ]
    activity_contexts = [
        activity
        if isinstance(activity, ActivityContext)
        else ActivityContext.from_record(activity)
        for activity in activities
    ]
    return AnalysisPrompt().build(
        child=child,
        behavior_logs=log_contexts,
        activities=activity_contexts,
        today=today,
    )
