"""
Tokenizer for label expressions.

Splits an expression such as ``"(1 | 2) & !3"`` into label operands and
single-character operators.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from ..errors import InvalidToken

LABEL = "LABEL"
OR = "OR"
AND = "AND"
NOT = "NOT"
LP = "LP"
RP = "RP"

OPERATORS: Dict[str, str] = {
    "|": OR,
    "&": AND,
    "!": NOT,
    "(": LP,
    ")": RP,
}

SEPARATORS = " \t"
DIGITS = "0123456789"


@dataclass(frozen=True)
class Token:
    """A lexeme: either a label operand or an operator."""
    kind: str
    value: str

    @property
    def is_operator(self) -> bool:
        return self.kind != LABEL


def tokenize(expression: str) -> List[Token]:
    """
    Split an expression into tokens.

    Args:
        expression: The expression text.

    Returns:
        Tokens in input order.

    Raises:
        InvalidToken: On the first character that is not a digit,
            operator, parenthesis, space or tab.
    """
    tokens: List[Token] = []
    digits: List[str] = []

    def _flush() -> None:
        if digits:
            tokens.append(Token(LABEL, "".join(digits)))
            digits.clear()

    for i, ch in enumerate(expression):
        if ch in SEPARATORS:
            _flush()
            continue
        if ch in OPERATORS:
            _flush()
            tokens.append(Token(OPERATORS[ch], ch))
            continue
        if ch in DIGITS:
            digits.append(ch)
            continue
        raise InvalidToken(f"Unexpected {ch!r}", expression, i)

    _flush()
    return tokens
