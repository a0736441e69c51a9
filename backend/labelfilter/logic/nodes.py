"""
Evaluation tree nodes.

A compiled tree is a flat tuple of nodes (the arena). Children are
referenced by index and always sit before their parent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Container, List, Sequence, Tuple, Union


@dataclass(frozen=True)
class OrNode:
    left: int
    right: int


@dataclass(frozen=True)
class AndNode:
    left: int
    right: int


@dataclass(frozen=True)
class NotNode:
    child: int


@dataclass(frozen=True)
class LabelNode:
    value: Any


Node = Union[OrNode, AndNode, NotNode, LabelNode]


def check_node(nodes: Sequence[Node], index: int, labels: Container[Any]) -> bool:
    """
    Evaluate the subtree rooted at ``nodes[index]`` against a label set.

    Or and And short-circuit: the right child is only visited when the
    left one does not decide the result. Traversal uses an explicit
    stack, so arbitrarily long chains and deep nesting are fine.
    """
    # Frames are (index, left_done); ``result`` holds the last finished subtree
    stack: List[Tuple[int, bool]] = [(index, False)]
    result = False
    while stack:
        i, left_done = stack.pop()
        node = nodes[i]
        if isinstance(node, LabelNode):
            result = node.value in labels
        elif isinstance(node, NotNode):
            if left_done:
                result = not result
            else:
                stack.append((i, True))
                stack.append((node.child, False))
        elif isinstance(node, (AndNode, OrNode)):
            if not left_done:
                stack.append((i, True))
                stack.append((node.left, False))
            elif result == isinstance(node, OrNode):
                # Left side decided it: True for Or, False for And
                continue
            else:
                # The right child's result is this node's result
                stack.append((node.right, False))
        else:
            raise TypeError(f"Unsupported node: {node!r}")
    return result
