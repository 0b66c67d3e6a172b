"""
EduWork Tracker — Provider Output Validation.

The task provider is untrusted: whatever text it returns is parsed and
checked here, at the boundary, before anything reaches the daily task cache.
Only validated `Task` objects leave this module.
"""

from __future__ import annotations

import json
import logging
import uuid
from collections import Counter
from dataclasses import dataclass, field

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from src.core.errors import ProviderError, ValidationError
from src.data.models import Priority, Task, normalize_priority

logger = logging.getLogger(__name__)

DEFAULT_MINUTES = 30


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TaskRules:
    """What a valid day of tasks looks like.

    priority_mode:
        "distinct" — exactly one easy, one medium and one hard task.
        "uniform"  — every task has `required_priority`.
    """

    priority_mode: str = "distinct"
    required_priority: Priority = Priority.EASY
    allowed_categories: tuple[str, ...] = field(default_factory=tuple)
    min_minutes: int = 15
    max_minutes: int = 25
    task_count: int = 3

    @classmethod
    def from_settings(cls) -> "TaskRules":
        from src.config import settings

        return cls(
            priority_mode=settings.TASK_PRIORITY_MODE,
            required_priority=normalize_priority(settings.TASK_REQUIRED_PRIORITY),
            allowed_categories=tuple(settings.TASK_CATEGORIES),
            min_minutes=settings.TASK_MIN_MINUTES,
            max_minutes=settings.TASK_MAX_MINUTES,
        )


# ---------------------------------------------------------------------------
# Raw provider shape
# ---------------------------------------------------------------------------


class RawTask(BaseModel):
    """One task as the provider returns it, before ids are assigned.

    JSON example:
    {
        "title": "Number line worksheet",
        "description": "Draw a 0-20 number line and 5 hopping questions",
        "category": "Math",
        "estimated_time_in_minutes": 20,
        "priority": "medium"
    }
    """
    title: str = Field(min_length=1)
    description: str = ""
    category: str = Field(min_length=1)
    estimated_minutes: int = Field(
        default=DEFAULT_MINUTES,
        gt=0,
        validation_alias=AliasChoices(
            "estimated_time_in_minutes", "estimatedTime", "estimated_minutes",
        ),
    )
    priority: Priority

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, v: str | Priority) -> Priority:
        return normalize_priority(v)


# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------

_PROMPT_TEMPLATE = """\
Generate exactly {count} daily teaching tasks for {date} for an English/General \
Knowledge/Math teacher who creates content for children up to 2nd standard \
(6-7 years old in India). The tasks should be realistic, educational, and help \
build teaching skills and content creation abilities.

Requirements:
{priority_rule}
- Every task takes between {min_minutes} and {max_minutes} minutes.
{category_rule}
Each task should have a clear, actionable title and a detailed description of \
what to do.

Format your response as a JSON array of exactly {count} objects with these exact properties:
- title: string
- description: string
- category: string
- estimated_time_in_minutes: number
- priority: string (one of "easy", "medium", "hard")

Return only the JSON array, no explanation.
"""


def build_prompt(rules: TaskRules, day: str) -> str:
    """Render the fixed generation prompt so it agrees with `rules`."""
    if rules.priority_mode == "distinct":
        priority_rule = (
            '- Exactly one task of each priority: "easy", "medium" and "hard".'
        )
    else:
        priority_rule = (
            f'- All {rules.task_count} tasks have priority "{rules.required_priority.value}".'
        )

    if rules.allowed_categories:
        quoted = ", ".join(f'"{c}"' for c in rules.allowed_categories)
        category_rule = f"- category must be one of: {quoted}.\n"
    else:
        category_rule = ""

    return _PROMPT_TEMPLATE.format(
        count=rules.task_count,
        date=day,
        priority_rule=priority_rule,
        min_minutes=rules.min_minutes,
        max_minutes=rules.max_minutes,
        category_rule=category_rule,
    )


# ---------------------------------------------------------------------------
# Parsing & checks
# ---------------------------------------------------------------------------


def clean_provider_response(raw_text: str) -> str:
    """Remove markdown code block delimiters from the provider's raw response."""
    cleaned_text = raw_text.strip()
    if cleaned_text.startswith("```json"):
        cleaned_text = cleaned_text.removeprefix("```json")
    elif cleaned_text.startswith("```"):
        cleaned_text = cleaned_text.removeprefix("```")
    if cleaned_text.endswith("```"):
        cleaned_text = cleaned_text.removesuffix("```")
    return cleaned_text.strip()


def _describe_pydantic_error(index: int, exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    where = ".".join(str(part) for part in first.get("loc", ())) or "task"
    return f"Task {index + 1}: {where}: {first.get('msg', 'invalid value')}"


def _check_priorities(tasks: list[RawTask], rules: TaskRules) -> None:
    counts = Counter(t.priority for t in tasks)
    if rules.priority_mode == "distinct":
        missing = [p.value for p in Priority if counts[p] == 0]
        if missing:
            raise ValidationError(
                "Expected one task of each priority (easy, medium, hard); "
                f"missing: {', '.join(missing)}"
            )
    else:
        wrong = [t.priority.value for t in tasks if t.priority != rules.required_priority]
        if wrong:
            raise ValidationError(
                f"Expected every task to have priority '{rules.required_priority.value}', "
                f"got: {', '.join(wrong)}"
            )


def _check_categories(tasks: list[RawTask], rules: TaskRules) -> None:
    if not rules.allowed_categories:
        return
    for i, task in enumerate(tasks):
        if task.category not in rules.allowed_categories:
            raise ValidationError(
                f"Task {i + 1}: category '{task.category}' is not one of "
                f"{', '.join(rules.allowed_categories)}"
            )


def _check_minutes(tasks: list[RawTask], rules: TaskRules) -> None:
    for i, task in enumerate(tasks):
        if not rules.min_minutes <= task.estimated_minutes <= rules.max_minutes:
            raise ValidationError(
                f"Task {i + 1}: estimated time {task.estimated_minutes} min is outside "
                f"{rules.min_minutes}-{rules.max_minutes} min"
            )


def parse_provider_output(raw_text: str, rules: TaskRules) -> list[RawTask]:
    """Parse and validate the provider's text into raw tasks.

    Raises:
        ProviderError: the text is not JSON at all.
        ValidationError: well-formed JSON that breaks a count/shape/rule check.
    """
    if not isinstance(raw_text, str) or not raw_text.strip():
        raise ProviderError("Task provider returned an empty response")
    cleaned = clean_provider_response(raw_text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error("Provider response is not JSON: %s — raw: '%s'", exc, raw_text[:200])
        raise ProviderError("Task provider returned a response that is not JSON") from exc

    if not isinstance(data, list) or len(data) != rules.task_count:
        got = f"{len(data)} items" if isinstance(data, list) else type(data).__name__
        raise ValidationError(
            f"Invalid response: expected exactly {rules.task_count} tasks, got {got}"
        )

    tasks: list[RawTask] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValidationError(f"Task {i + 1}: expected an object, got {type(item).__name__}")
        try:
            tasks.append(RawTask.model_validate(item))
        except PydanticValidationError as exc:
            raise ValidationError(_describe_pydantic_error(i, exc)) from exc

    _check_priorities(tasks, rules)
    _check_categories(tasks, rules)
    _check_minutes(tasks, rules)
    return tasks


def to_tasks(raw_tasks: list[RawTask], day: str) -> list[Task]:
    """Assign fresh ids and reset completion. Ids embed the day and a random
    batch token, so they never repeat across days or regenerations."""
    batch = uuid.uuid4().hex[:8]
    return [
        Task(
            id=f"task-{day}-{batch}-{i}",
            title=raw.title,
            description=raw.description,
            category=raw.category,
            estimated_minutes=raw.estimated_minutes,
            priority=raw.priority,
            completed=False,
        )
        for i, raw in enumerate(raw_tasks)
    ]
