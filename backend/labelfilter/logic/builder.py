"""
Tree builder: turns a postfix token sequence into a node arena.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence, Tuple

from ..config import DEFAULT_CONFIG, FilterConfig
from ..errors import LabelRangeError, MalformedExpression
from .nodes import AndNode, LabelNode, Node, NotNode, OrNode
from .tokenizer import AND, LABEL, NOT, OR, Token


class TreeBuilder:
    """
    Builds an evaluation tree bottom-up from postfix tokens.

    Nodes are appended to a list in the order they are built and the
    operand stack holds indices into that list, so the finished arena
    never has a child after its parent.
    """

    def __init__(
        self,
        label_type: Callable[[int], Any] = int,
        config: Optional[FilterConfig] = None,
    ):
        self.label_type = label_type
        self.config = config or DEFAULT_CONFIG

    def build(
        self,
        rpn: Sequence[Token],
        expression: str = "",
    ) -> Tuple[Tuple[Node, ...], int]:
        """
        Build the node arena.

        Args:
            rpn: Postfix token sequence.
            expression: Source text, used in error reports.

        Returns:
            Tuple of (nodes, root index).

        Raises:
            MalformedExpression: If an operator lacks operands or the
                sequence does not reduce to a single node.
            LabelRangeError: If an operand does not fit the label type.
        """
        nodes: List[Node] = []
        stack: List[int] = []

        for token in rpn:
            if token.kind == LABEL:
                node: Node = LabelNode(self._make_label(token, expression))
            elif token.kind in (OR, AND):
                if len(stack) < 2:
                    raise MalformedExpression(
                        f"missing operand for {token.value!r}", expression
                    )
                right = stack.pop()
                left = stack.pop()
                node = OrNode(left, right) if token.kind == OR else AndNode(left, right)
            elif token.kind == NOT:
                if not stack:
                    raise MalformedExpression(
                        f"missing operand for {token.value!r}", expression
                    )
                child = stack.pop()
                node = NotNode(child)
            else:
                raise MalformedExpression(
                    f"unexpected {token.value!r} in postfix sequence", expression
                )

            nodes.append(node)
            stack.append(len(nodes) - 1)

        if not stack:
            raise MalformedExpression("empty expression", expression)
        if len(stack) > 1:
            raise MalformedExpression("extra label/operand", expression)

        return tuple(nodes), stack[0]

    def _make_label(self, token: Token, expression: str) -> Any:
        """Parse an operand and cast it to the label type."""
        number = int(token.value)
        max_label = self.config.max_label
        if max_label is not None and number > max_label:
            raise LabelRangeError(
                f"label {number} exceeds {max_label}", expression
            )
        try:
            return self.label_type(number)
        except (ValueError, TypeError, OverflowError) as e:
            raise LabelRangeError(
                f"label {number} rejected by label type: {e}", expression
            ) from e
