"""
Tests for the shunting-yard expression parser.
"""

import pytest

from backend.labelfilter.config import FilterConfig
from backend.labelfilter.errors import MalformedExpression
from backend.labelfilter.logic.parser import ExpressionParser


def _rpn(expression, config=None):
    return " ".join(t.value for t in ExpressionParser(config).parse(expression))


class TestPrecedence:
    """Tests for operator precedence."""

    def test_and_binds_tighter_than_or(self):
        """Test & is applied before |."""
        assert _rpn("1|2&3") == "1 2 3 & |"
        assert _rpn("1&2|3") == "1 2 & 3 |"

    def test_not_binds_tightest(self):
        """Test ! applies to the nearest operand only."""
        assert _rpn("!1&2") == "1 ! 2 &"
        assert _rpn("1&!2") == "1 2 ! &"

    def test_parentheses_override(self):
        """Test grouping overrides precedence."""
        assert _rpn("(1|2)&3") == "1 2 | 3 &"
        assert _rpn("!(1&2)") == "1 2 & !"

    def test_nested_parentheses(self):
        """Test nested groups."""
        assert _rpn("((1|2)&(3|4))") == "1 2 | 3 4 | &"


class TestAssociativity:
    """Tests for operator grouping."""

    def test_and_chain_left_associative(self):
        """Test 1&2&3 groups as (1&2)&3."""
        assert _rpn("1&2&3") == "1 2 & 3 &"

    def test_or_chain_left_associative(self):
        """Test 1|2|3 groups as (1|2)|3."""
        assert _rpn("1|2|3") == "1 2 | 3 |"

    def test_double_negation(self):
        """Test stacked prefix operators nest right to left."""
        assert _rpn("!!1") == "1 ! !"
        assert _rpn("1&!!2") == "1 2 ! ! &"


class TestParentheses:
    """Tests for unbalanced parentheses."""

    def test_unmatched_close_absorbed(self):
        """Test a stray ')' is absorbed by default."""
        assert _rpn("1)") == "1"

    def test_unmatched_close_flushes_operators(self):
        """Test a stray ')' still emits pending operators."""
        assert _rpn("1|2)&3") == "1 2 | 3 &"

    def test_unmatched_close_strict(self):
        """Test strict mode rejects a stray ')'."""
        config = FilterConfig(strict_parentheses=True)
        with pytest.raises(MalformedExpression, match="unmatched"):
            _rpn("1)", config)

    def test_matched_parentheses_strict(self):
        """Test strict mode accepts balanced input."""
        config = FilterConfig(strict_parentheses=True)
        assert _rpn("(1|2)", config) == "1 2 |"

    def test_unmatched_open(self):
        """Test a leftover '(' is rejected."""
        with pytest.raises(MalformedExpression, match="unmatched '\\('"):
            _rpn("(1")

    def test_empty_group(self):
        """Test an empty group emits nothing."""
        assert _rpn("()") == ""


class TestArityNotChecked:
    """Tests showing arity is left to the tree builder."""

    def test_adjacent_operands(self):
        """Test operands with no connective pass through."""
        assert _rpn("1 2") == "1 2"

    def test_dangling_operator(self):
        """Test a trailing operator is still emitted."""
        assert _rpn("1|") == "1 |"
