"""
Logic engine for label filters.

Provides expression compilation and evaluation for label predicates.
"""

from .tokenizer import Token, tokenize
from .parser import ExpressionParser
from .nodes import AndNode, LabelNode, Node, NotNode, OrNode, check_node
from .builder import TreeBuilder
from .tree import SyntaxTree, validate_expression
from .analyzer import AnalysisResult, LogicAnalyzer, iter_label_literals
from .evaluator import RuleEngine

__all__ = [
    "Token",
    "tokenize",
    "ExpressionParser",
    "Node",
    "OrNode",
    "AndNode",
    "NotNode",
    "LabelNode",
    "check_node",
    "TreeBuilder",
    "SyntaxTree",
    "validate_expression",
    "AnalysisResult",
    "LogicAnalyzer",
    "iter_label_literals",
    "RuleEngine",
]
