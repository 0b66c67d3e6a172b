"""Tests for src.core.task_validation — provider output parsing and rules."""

import json

import pytest

from src.core.errors import ProviderError, ValidationError
from src.core.task_validation import (
    TaskRules,
    build_prompt,
    clean_provider_response,
    parse_provider_output,
    to_tasks,
)
from src.data.models import Priority


def _item(**overrides):
    item = {
        "title": "Phonics cards",
        "description": "Make 10 cards",
        "category": "Writing Skills",
        "estimated_time_in_minutes": 20,
        "priority": "easy",
    }
    item.update(overrides)
    return item


# ---------------------------------------------------------------------------
# clean_provider_response
# ---------------------------------------------------------------------------


class TestCleanProviderResponse:
    def test_strips_json_code_block(self):
        raw = '```json\n[{"a": 1}]\n```'
        assert clean_provider_response(raw) == '[{"a": 1}]'

    def test_strips_plain_code_block(self):
        assert clean_provider_response("```\n[]\n```") == "[]"

    def test_strips_whitespace(self):
        assert clean_provider_response("  []  ") == "[]"

    def test_no_code_block(self):
        assert clean_provider_response('[{"a": 1}]') == '[{"a": 1}]'


# ---------------------------------------------------------------------------
# parse_provider_output
# ---------------------------------------------------------------------------


class TestCountAndShape:
    def test_valid_distinct(self, rules, payload):
        tasks = parse_provider_output(payload(), rules)
        assert [t.priority for t in tasks] == [Priority.EASY, Priority.MEDIUM, Priority.HARD]
        assert tasks[0].estimated_minutes == 20

    def test_fenced_json_accepted(self, rules, payload):
        tasks = parse_provider_output(f"```json\n{payload()}\n```", rules)
        assert len(tasks) == 3

    @pytest.mark.parametrize("count", [2, 4])
    def test_wrong_count_rejected(self, rules, payload, count):
        with pytest.raises(ValidationError, match="exactly 3"):
            parse_provider_output(payload(count=count), rules)

    def test_object_instead_of_list_rejected(self, rules):
        with pytest.raises(ValidationError):
            parse_provider_output('{"tasks": []}', rules)

    def test_non_json_is_provider_error(self, rules):
        with pytest.raises(ProviderError):
            parse_provider_output("Sorry, I can't help with that.", rules)

    def test_missing_title_rejected(self, rules):
        data = [_item(priority="easy"), _item(priority="medium"), _item(priority="hard")]
        del data[1]["title"]
        with pytest.raises(ValidationError, match="Task 2"):
            parse_provider_output(json.dumps(data), rules)

    def test_unknown_priority_rejected(self, rules):
        data = [_item(priority="easy"), _item(priority="medium"), _item(priority="urgent")]
        with pytest.raises(ValidationError, match="Task 3"):
            parse_provider_output(json.dumps(data), rules)

    def test_non_object_entry_rejected(self, rules):
        with pytest.raises(ValidationError, match="expected an object"):
            parse_provider_output('[1, 2, 3]', rules)

    def test_minutes_alias_fields(self, rules):
        data = [
            _item(priority="easy"),
            {**_item(priority="medium"), "estimated_time_in_minutes": None},
            _item(priority="hard"),
        ]
        del data[1]["estimated_time_in_minutes"]
        data[1]["estimatedTime"] = 18
        tasks = parse_provider_output(json.dumps(data), rules)
        assert tasks[1].estimated_minutes == 18

    def test_missing_minutes_defaults_to_30_and_is_range_checked(self, rules):
        data = [_item(priority="easy"), _item(priority="medium"), _item(priority="hard")]
        del data[0]["estimated_time_in_minutes"]
        with pytest.raises(ValidationError, match="30 min"):
            parse_provider_output(json.dumps(data), rules)


class TestPriorityRules:
    def test_low_high_aliases_accepted(self, rules, payload):
        tasks = parse_provider_output(payload(priorities=("low", "medium", "high")), rules)
        assert {t.priority for t in tasks} == set(Priority)

    def test_identical_priorities_rejected_in_distinct_mode(self, rules, payload):
        with pytest.raises(ValidationError, match="missing"):
            parse_provider_output(payload(priorities=("easy", "easy", "easy")), rules)

    def test_uniform_mode_accepts_all_easy(self, payload):
        rules = TaskRules(priority_mode="uniform", required_priority=Priority.EASY)
        tasks = parse_provider_output(payload(priorities=("easy", "easy", "low")), rules)
        assert all(t.priority == Priority.EASY for t in tasks)

    def test_uniform_mode_rejects_mixed(self, payload):
        rules = TaskRules(priority_mode="uniform", required_priority=Priority.EASY)
        with pytest.raises(ValidationError, match="medium"):
            parse_provider_output(payload(), rules)


class TestCategoryAndMinutes:
    def test_category_outside_allowed_set_rejected(self, payload):
        rules = TaskRules(allowed_categories=("Writing Skills", "Math Skills"))
        with pytest.raises(ValidationError, match="category 'Art'"):
            parse_provider_output(payload(category="Art"), rules)

    def test_category_inside_allowed_set(self, payload):
        rules = TaskRules(allowed_categories=("Writing Skills", "Math Skills"))
        assert len(parse_provider_output(payload(category="Math Skills"), rules)) == 3

    def test_any_category_when_unrestricted(self, rules, payload):
        assert len(parse_provider_output(payload(category="Art"), rules)) == 3

    def test_minutes_above_range_rejected(self, rules, payload):
        with pytest.raises(ValidationError, match="15-25"):
            parse_provider_output(payload(minutes=30), rules)

    @pytest.mark.parametrize("minutes", [15, 25])
    def test_range_is_inclusive(self, rules, payload, minutes):
        assert len(parse_provider_output(payload(minutes=minutes), rules)) == 3

    def test_non_positive_minutes_rejected(self, rules, payload):
        with pytest.raises(ValidationError):
            parse_provider_output(payload(minutes=0), rules)


# ---------------------------------------------------------------------------
# build_prompt / to_tasks
# ---------------------------------------------------------------------------


class TestBuildPrompt:
    def test_distinct_prompt(self, rules):
        prompt = build_prompt(rules, "2025-02-14")
        assert "exactly 3" in prompt
        assert "one task of each priority" in prompt
        assert "category must be" not in prompt

    def test_uniform_prompt_with_categories(self):
        rules = TaskRules(
            priority_mode="uniform",
            required_priority=Priority.EASY,
            allowed_categories=("Writing Skills", "Math Skills"),
        )
        prompt = build_prompt(rules, "2025-02-14")
        assert 'All 3 tasks have priority "easy"' in prompt
        assert '"Writing Skills", "Math Skills"' in prompt


class TestToTasks:
    def test_assigns_unique_ids_and_resets_completion(self, rules, payload):
        raw = parse_provider_output(payload(), rules)
        tasks = to_tasks(raw, "2025-02-14")
        assert len({t.id for t in tasks}) == 3
        assert all(t.id.startswith("task-2025-02-14-") for t in tasks)
        assert all(t.completed is False for t in tasks)

    def test_ids_differ_between_batches(self, rules, payload):
        raw = parse_provider_output(payload(), rules)
        first = {t.id for t in to_tasks(raw, "2025-02-14")}
        second = {t.id for t in to_tasks(raw, "2025-02-14")}
        assert not first & second
