"""
Errors raised while compiling label expressions and evaluating rules.

Compilation is the only stage that fails; a compiled tree never raises
during evaluation.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ExpressionError(ValueError):
    """Base class for expression compilation errors."""

    def __init__(
        self,
        message: str,
        expression: str = "",
        position: Optional[int] = None,
    ):
        if position is not None:
            text = f"{message} at {position}"
        else:
            text = message
        super().__init__(text)
        self.message = message
        self.expression = expression
        self.position = position

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "expression": self.expression,
            "position": self.position,
        }


class InvalidToken(ExpressionError):
    """A character is not a digit, operator, parenthesis or separator."""


class LabelRangeError(InvalidToken):
    """A label operand does not fit the configured label type."""


class MalformedExpression(ExpressionError):
    """The postfix form does not reduce to exactly one node."""


class RuleConflictError(ValueError):
    """Several rules matched with different outcomes."""
