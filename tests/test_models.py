"""
Tests for filter rule Pydantic models.
"""

import pytest
from pydantic import ValidationError

from backend.labelfilter.models import (
    ConflictResolution,
    FilterRule,
    FilterRuleSet,
    MatchStrategy,
)


class TestFilterRule:
    """Tests for FilterRule model."""

    def test_valid_rule(self):
        """Test valid filter rule."""
        rule = FilterRule(
            id="urgent_bug",
            priority=10,
            when="1 & (7 | 9)",
            then={"queue": "triage"}
        )
        assert rule.id == "urgent_bug"
        assert rule.priority == 10
        assert rule.is_default is False

    def test_default_rule(self):
        """Test default rule."""
        rule = FilterRule(
            id="fallback",
            is_default=True,
            when=True,
            then={"queue": "backlog"}
        )
        assert rule.is_default is True
        assert rule.when is True

    def test_when_defaults_to_true(self):
        """Test omitted condition always matches."""
        assert FilterRule(id="always").when is True

    def test_integer_when_is_a_label(self):
        """Test a bare number is read as a label expression."""
        rule = FilterRule(id="single", when=1)
        assert rule.when == "1"

    def test_invalid_id_format(self):
        """Test invalid rule id format."""
        with pytest.raises(ValidationError) as exc_info:
            FilterRule(
                id="Urgent-Bug",  # Should be snake_case
                when="1"
            )
        assert "snake_case" in str(exc_info.value)

    def test_invalid_expression(self):
        """Test malformed condition is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            FilterRule(id="broken", when="1 & #")
        assert "Invalid label expression" in str(exc_info.value)

    def test_unconnected_operands(self):
        """Test condition with operands but no connective."""
        with pytest.raises(ValidationError):
            FilterRule(id="broken", when="1 2")

    def test_false_condition(self):
        """Test a condition that can never match."""
        with pytest.raises(ValidationError):
            FilterRule(id="never", when=False)


class TestFilterRuleSet:
    """Tests for FilterRuleSet model."""

    def test_defaults(self):
        """Test default strategies."""
        rule_set = FilterRuleSet()
        assert rule_set.match_strategy == MatchStrategy.FIRST_MATCH
        assert rule_set.conflict_resolution == ConflictResolution.FIRST_WINS
        assert rule_set.rules == []

    def test_duplicate_ids(self):
        """Test rule ids must be unique."""
        with pytest.raises(ValidationError) as exc_info:
            FilterRuleSet(rules=[
                FilterRule(id="dup", when="1"),
                FilterRule(id="dup", when="2"),
            ])
        assert "Duplicate rule id" in str(exc_info.value)

    def test_from_yaml(self):
        """Test loading a rule set from YAML."""
        rule_set = FilterRuleSet.from_yaml(
            "match_strategy: priority\n"
            "conflict_resolution: warn\n"
            "rules:\n"
            "  - id: urgent_bug\n"
            "    priority: 10\n"
            "    when: \"1 & (7 | 9)\"\n"
            "    then: {queue: triage}\n"
            "  - id: fallback\n"
            "    is_default: true\n"
            "    when: true\n"
            "    then: {queue: backlog}\n"
        )
        assert rule_set.match_strategy == MatchStrategy.PRIORITY
        assert rule_set.conflict_resolution == ConflictResolution.WARN
        assert [r.id for r in rule_set.rules] == ["urgent_bug", "fallback"]
        assert rule_set.rules[0].then == {"queue": "triage"}

    def test_from_yaml_list(self):
        """Test a bare list of rules."""
        rule_set = FilterRuleSet.from_yaml(
            "- id: docs\n"
            "  when: 3\n"
        )
        assert rule_set.rules[0].when == "3"

    def test_from_yaml_invalid_strategy(self):
        """Test unknown match strategy."""
        with pytest.raises(ValidationError):
            FilterRuleSet.from_yaml("match_strategy: random\n")

    def test_from_file(self, tmp_path):
        """Test loading a rule set from a file."""
        path = tmp_path / "rules.yaml"
        path.write_text("rules:\n  - id: docs\n    when: \"3 | 4\"\n", encoding="utf-8")
        rule_set = FilterRuleSet.from_file(path)
        assert rule_set.rules[0].when == "3 | 4"
