"""
Expression Parser for label expressions.

Converts infix token sequences into postfix (reverse Polish) order with
the shunting-yard algorithm.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from ..config import DEFAULT_CONFIG, FilterConfig
from ..errors import MalformedExpression
from .tokenizer import AND, LABEL, LP, NOT, OR, RP, Token, tokenize

logger = logging.getLogger(__name__)


class ExpressionParser:
    """
    Parser for label expressions.

    Converts expressions like:
        "1 | 2 & 3"
        "!(1 & 2) | 4"

    Into postfix token order:
        1 2 3 & |
        1 2 & ! 4 |
    """

    # Higher binds tighter
    PRECEDENCE: Dict[str, int] = {
        OR: 1,
        AND: 2,
        NOT: 3,
    }

    # Prefix operators group right to left: "!!1" is "!(!1)"
    RIGHT_ASSOCIATIVE = frozenset({NOT})

    def __init__(self, config: Optional[FilterConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def parse(self, expression: str) -> List[Token]:
        """
        Tokenize an expression and convert it to postfix order.

        Args:
            expression: The expression to parse.

        Returns:
            Postfix token sequence.
        """
        return self.to_rpn(tokenize(expression), expression)

    def to_rpn(self, tokens: Sequence[Token], expression: str = "") -> List[Token]:
        """
        Convert infix tokens to postfix order.

        Operator arity is not checked here; a missing operand only shows
        up when the tree is built.

        Raises:
            MalformedExpression: On an unmatched '(' or, in strict mode,
                an unmatched ')'.
        """
        output: List[Token] = []
        stack: List[Token] = []

        for token in tokens:
            if token.kind == LABEL:
                output.append(token)
            elif token.kind == LP:
                stack.append(token)
            elif token.kind == RP:
                while stack and stack[-1].kind != LP:
                    output.append(stack.pop())
                if stack:
                    stack.pop()
                elif self.config.strict_parentheses:
                    raise MalformedExpression("unmatched ')'", expression)
                else:
                    logger.debug("Absorbed unmatched ')' in %r", expression)
            else:
                while (
                    stack
                    and stack[-1].kind != LP
                    and self._pops_before(stack[-1], token)
                ):
                    output.append(stack.pop())
                stack.append(token)

        while stack:
            token = stack.pop()
            if token.kind == LP:
                raise MalformedExpression("unmatched '('", expression)
            output.append(token)

        return output

    def _pops_before(self, top: Token, incoming: Token) -> bool:
        """Whether the stacked operator must be emitted before pushing."""
        top_prec = self.PRECEDENCE[top.kind]
        incoming_prec = self.PRECEDENCE[incoming.kind]
        if incoming.kind in self.RIGHT_ASSOCIATIVE:
            return top_prec > incoming_prec
        return top_prec >= incoming_prec
