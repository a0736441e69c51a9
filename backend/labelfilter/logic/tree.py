"""
Compiled label expressions.

    tree = SyntaxTree("(1 | 2) & !3")
    tree.check([2, 4])   # True
    tree.check([2, 3])   # False
"""

from __future__ import annotations

import logging
from collections.abc import Container
from typing import Any, Callable, Generic, Iterable, Optional, Tuple, TypeVar

from ..config import FilterConfig
from ..errors import ExpressionError
from .builder import TreeBuilder
from .nodes import Node, check_node
from .parser import ExpressionParser

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SyntaxTree(Generic[T]):
    """
    An immutable, compiled label expression.

    The expression is parsed once on construction; ``check`` can then be
    called any number of times, from any number of threads.
    """

    __slots__ = ("_expression", "_label_type", "_config", "_nodes", "_root")

    def __init__(
        self,
        expression: str,
        label_type: Callable[[int], T] = int,
        config: Optional[FilterConfig] = None,
    ):
        """
        Compile an expression.

        Args:
            expression: Infix expression over numeric labels.
            label_type: Callable applied to each operand value.
            config: Compilation settings.

        Raises:
            InvalidToken: If the expression contains an unknown character
                or an operand that does not fit the label type.
            MalformedExpression: If the expression does not reduce to a
                single tree.
        """
        rpn = ExpressionParser(config).parse(expression)
        nodes, root = TreeBuilder(label_type, config).build(rpn, expression)

        object.__setattr__(self, "_expression", expression)
        object.__setattr__(self, "_label_type", label_type)
        object.__setattr__(self, "_config", config)
        object.__setattr__(self, "_nodes", nodes)
        object.__setattr__(self, "_root", root)
        logger.debug("Compiled %r into %d nodes", expression, len(nodes))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        # Rebuild from source; copy and pickle cannot set attributes
        return (type(self), (self._expression, self._label_type, self._config))

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return self._nodes

    @property
    def root(self) -> int:
        return self._root

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._expression!r})"

    def check(self, labels: Iterable[T]) -> bool:
        """
        Test whether a label collection satisfies the expression.

        Args:
            labels: Labels to test against. One-shot iterables are
                materialized once per call.

        Returns:
            True if the expression holds for the labels.
        """
        if not isinstance(labels, Container):
            labels = tuple(labels)
        return check_node(self._nodes, self._root, labels)


def validate_expression(
    expression: str,
    config: Optional[FilterConfig] = None,
) -> Tuple[bool, Optional[str]]:
    """
    Validate an expression without raising.

    Returns:
        Tuple of (is_valid, error_message).
    """
    try:
        SyntaxTree(expression, config=config)
        return True, None
    except ExpressionError as e:
        logger.debug("Rejected expression %r: %s", expression, e)
        return False, str(e)
