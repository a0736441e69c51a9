"""
Logic Analyzer.

Reports which labels a compiled expression refers to and how it is shaped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple

from .nodes import AndNode, LabelNode, NotNode, OrNode
from .tree import SyntaxTree


@dataclass
class AnalysisResult:
    """Result of analyzing a compiled expression."""
    labels: List[Any] = field(default_factory=list)
    negated_labels: List[Any] = field(default_factory=list)
    node_count: int = 0
    depth: int = 0
    operator_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "labels": self.labels,
            "negated_labels": self.negated_labels,
            "node_count": self.node_count,
            "depth": self.depth,
            "operator_counts": self.operator_counts,
        }


def iter_label_literals(tree: SyntaxTree) -> Iterator[Tuple[Any, bool]]:
    """
    Yield (label, positive) for every label leaf, left to right.

    ``positive`` is False when the leaf sits under an odd number of NOTs.
    """
    nodes = tree.nodes
    stack: List[Tuple[int, bool]] = [(tree.root, True)]
    while stack:
        index, polarity = stack.pop()
        node = nodes[index]
        if isinstance(node, LabelNode):
            yield node.value, polarity
        elif isinstance(node, NotNode):
            stack.append((node.child, not polarity))
        elif isinstance(node, (AndNode, OrNode)):
            # Right first so the left side is popped first
            stack.append((node.right, polarity))
            stack.append((node.left, polarity))


class LogicAnalyzer:
    """
    Analyzes compiled label expressions.

    Provides:
    - Referenced label enumeration
    - Negated label detection
    - Node and operator counts, nesting depth
    """

    def analyze(self, tree: SyntaxTree) -> AnalysisResult:
        """
        Analyze a compiled expression.

        Args:
            tree: The compiled expression.

        Returns:
            AnalysisResult with analysis details.
        """
        result = AnalysisResult(node_count=len(tree))

        # Label types only promise equality, so dedupe without hashing
        for value, positive in iter_label_literals(tree):
            if value not in result.labels:
                result.labels.append(value)
            if not positive and value not in result.negated_labels:
                result.negated_labels.append(value)

        result.operator_counts = self._count_operators(tree)
        result.depth = self._depth(tree)

        return result

    def _count_operators(self, tree: SyntaxTree) -> Dict[str, int]:
        """Count nodes of each kind."""
        counts = {"or": 0, "and": 0, "not": 0, "label": 0}
        for node in tree.nodes:
            if isinstance(node, OrNode):
                counts["or"] += 1
            elif isinstance(node, AndNode):
                counts["and"] += 1
            elif isinstance(node, NotNode):
                counts["not"] += 1
            else:
                counts["label"] += 1
        return counts

    def _depth(self, tree: SyntaxTree) -> int:
        """Nesting depth of the tree; a single label has depth 1."""
        # Children precede parents, so one forward pass is enough
        depths: List[int] = []
        for node in tree.nodes:
            if isinstance(node, (OrNode, AndNode)):
                depths.append(max(depths[node.left], depths[node.right]) + 1)
            elif isinstance(node, NotNode):
                depths.append(depths[node.child] + 1)
            else:
                depths.append(1)
        return depths[tree.root]
