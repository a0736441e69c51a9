"""
Pydantic models for label filter rules.

A rule set pairs label expressions with outcomes, e.g.:

    match_strategy: priority
    rules:
      - id: urgent_bug
        priority: 10
        when: "1 & (7 | 9)"
        then: {queue: triage}
      - id: fallback
        is_default: true
        when: true
        then: {queue: backlog}
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .logic.tree import validate_expression

_SNAKE_CASE = re.compile(r"^[a-z][a-z0-9_]*$")


class MatchStrategy(str, Enum):
    """How matching rules are selected."""
    FIRST_MATCH = "first_match"
    PRIORITY = "priority"
    ALL_MATCH = "all_match"


class ConflictResolution(str, Enum):
    """What happens when several rules match with different outcomes."""
    FIRST_WINS = "first_wins"
    WARN = "warn"
    ERROR = "error"


class FilterRule(BaseModel):
    """A label expression paired with an outcome."""

    id: str
    when: Union[bool, str] = True
    then: Dict[str, Any] = Field(default_factory=dict)
    priority: int = 0
    is_default: bool = False

    @field_validator("id")
    @classmethod
    def _check_id(cls, v: str) -> str:
        if not _SNAKE_CASE.match(v):
            raise ValueError(f"Rule id '{v}' must be snake_case")
        return v

    @field_validator("when", mode="before")
    @classmethod
    def _label_literal(cls, v: Any) -> Any:
        # YAML reads "when: 5" as an int; treat it as the label 5
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("when")
    @classmethod
    def _check_when(cls, v: Union[bool, str]) -> Union[bool, str]:
        if isinstance(v, bool):
            if not v:
                raise ValueError("'when: false' can never match")
            return v
        valid, error = validate_expression(v)
        if not valid:
            raise ValueError(f"Invalid label expression {v!r}: {error}")
        return v


class FilterRuleSet(BaseModel):
    """An ordered collection of filter rules and how to apply them."""

    match_strategy: MatchStrategy = MatchStrategy.FIRST_MATCH
    conflict_resolution: ConflictResolution = ConflictResolution.FIRST_WINS
    rules: List[FilterRule] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "FilterRuleSet":
        seen = set()
        for rule in self.rules:
            if rule.id in seen:
                raise ValueError(f"Duplicate rule id '{rule.id}'")
            seen.add(rule.id)
        return self

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "FilterRuleSet":
        """Load a rule set from YAML content."""
        data = yaml.safe_load(yaml_content) or {}
        if isinstance(data, list):
            data = {"rules": data}
        return cls.model_validate(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "FilterRuleSet":
        """Load a rule set from a file."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_yaml(f.read())
