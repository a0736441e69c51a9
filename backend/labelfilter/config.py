"""
Compilation settings for label expressions.

Settings can be built directly or loaded from YAML, e.g.:

    filter:
      label_bits: 16
      strict_parentheses: true
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field


class FilterConfig(BaseModel):
    """Settings that control how expressions are compiled."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    label_bits: Optional[int] = Field(
        default=None,
        ge=1,
        le=64,
        description="Width of the unsigned label type; None means unbounded",
    )
    strict_parentheses: bool = Field(
        default=False,
        description="Reject an unmatched ')' instead of absorbing it",
    )

    @property
    def max_label(self) -> Optional[int]:
        """Largest operand accepted, or None when unbounded."""
        if self.label_bits is None:
            return None
        return (1 << self.label_bits) - 1

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "FilterConfig":
        """Load settings from YAML content."""
        data = yaml.safe_load(yaml_content) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping, got {type(data).__name__}")
        section = data.get("filter", data)
        return cls.model_validate(section or {})

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "FilterConfig":
        """Load settings from a file."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_yaml(f.read())


DEFAULT_CONFIG = FilterConfig()
