"""
labelfilter: compiled boolean predicates over numeric labels.

Expressions such as ``"(1 | 2) & !3"`` are compiled once into an
immutable tree and then checked against any number of label sets.
"""

from .config import FilterConfig
from .errors import (
    ExpressionError,
    InvalidToken,
    LabelRangeError,
    MalformedExpression,
    RuleConflictError,
)
from .logic import (
    LogicAnalyzer,
    RuleEngine,
    SyntaxTree,
    validate_expression,
)
from .models import (
    ConflictResolution,
    FilterRule,
    FilterRuleSet,
    MatchStrategy,
)

__version__ = "1.0.0"
__all__ = [
    "FilterConfig",
    "ExpressionError",
    "InvalidToken",
    "LabelRangeError",
    "MalformedExpression",
    "RuleConflictError",
    "SyntaxTree",
    "validate_expression",
    "LogicAnalyzer",
    "RuleEngine",
    "FilterRule",
    "FilterRuleSet",
    "MatchStrategy",
    "ConflictResolution",
]
