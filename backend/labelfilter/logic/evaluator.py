"""
Rule evaluation for label filters.

Compiles each rule's expression once and evaluates the whole rule set
against label collections.
"""

from __future__ import annotations

import logging
from collections.abc import Container
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..config import FilterConfig
from ..errors import RuleConflictError
from ..models import ConflictResolution, FilterRule, FilterRuleSet, MatchStrategy
from .tree import SyntaxTree

logger = logging.getLogger(__name__)


class RuleEngine:
    """
    High-level engine for evaluating filter rules.

    Rules are compiled when the engine is created, so malformed
    expressions fail early and evaluation never re-parses.
    """

    def __init__(
        self,
        rule_set: FilterRuleSet,
        config: Optional[FilterConfig] = None,
        label_type: Callable[[int], Any] = int,
    ):
        """
        Initialize the rule engine.

        Args:
            rule_set: The rules and their match/conflict settings.
            config: Compilation settings for rule expressions.
            label_type: Callable applied to each operand value.

        Raises:
            ExpressionError: If a rule expression does not compile under
                the given settings.
        """
        self.rule_set = rule_set
        self.match_strategy = rule_set.match_strategy
        self.conflict_resolution = rule_set.conflict_resolution

        rules = list(rule_set.rules)
        if self.match_strategy == MatchStrategy.PRIORITY:
            rules = sorted(rules, key=lambda r: r.priority, reverse=True)

        self._compiled: List[Tuple[FilterRule, Optional[SyntaxTree]]] = []
        for rule in rules:
            tree = None
            if isinstance(rule.when, str):
                tree = SyntaxTree(rule.when, label_type=label_type, config=config)
                logger.debug("Compiled rule %s: %r", rule.id, rule.when)
            self._compiled.append((rule, tree))

    def _matches(self, tree: Optional[SyntaxTree], labels: Any) -> bool:
        # A rule without a tree has "when: true"
        return tree is None or tree.check(labels)

    def evaluate_rules(self, labels: Iterable[Any]) -> List[Dict[str, Any]]:
        """
        Evaluate the rules against a label collection.

        Default rules are only considered when no other rule matched.

        Args:
            labels: The labels to test.

        Returns:
            List of matching rule outcomes.

        Raises:
            RuleConflictError: If conflict_resolution is 'error' and
                conflicting rules match.
        """
        if not isinstance(labels, Container):
            labels = tuple(labels)
        matches = []
        warnings = []

        for is_default in (False, True):
            for rule, tree in self._compiled:
                if rule.is_default is not is_default:
                    continue
                if self._matches(tree, labels):
                    logger.debug("Rule %s matched", rule.id)
                    matches.append({
                        "rule_id": rule.id,
                        "result": rule.then,
                    })
                    if self.match_strategy != MatchStrategy.ALL_MATCH:
                        break
            if matches:
                break

        if self.match_strategy == MatchStrategy.ALL_MATCH and len(matches) > 1:
            unique_results = set(str(m["result"]) for m in matches)
            if len(unique_results) > 1:
                rule_ids = [m["rule_id"] for m in matches]
                if self.conflict_resolution == ConflictResolution.ERROR:
                    raise RuleConflictError(
                        f"Conflicting rules matched: {rule_ids}. "
                        "Use conflict_resolution='first_wins' or 'warn' to resolve."
                    )
                elif self.conflict_resolution == ConflictResolution.WARN:
                    message = (
                        f"Conflicting rules matched: {rule_ids}. "
                        f"Using first match: {matches[0]['rule_id']}"
                    )
                    logger.warning(message)
                    warnings.append(message)

        if matches and warnings:
            matches[0]["warnings"] = warnings

        return matches

    def evaluate(self, labels: Iterable[Any]) -> Dict[str, Any]:
        """
        Evaluate rules against labels.

        Returns:
            Evaluation result with matches and any warnings.
        """
        try:
            matches = self.evaluate_rules(labels)
        except RuleConflictError as e:
            return {
                "success": False,
                "error": str(e),
                "matches": [],
                "matched_count": 0,
            }

        return {
            "success": True,
            "matches": matches,
            "matched_count": len(matches),
            "first_match": matches[0] if matches else None,
            "warnings": matches[0].get("warnings", []) if matches else [],
        }

    def find_applicable_rule(self, labels: Iterable[Any]) -> Optional[Dict[str, Any]]:
        """
        Find the outcome of the first applicable rule.

        Returns:
            The matched rule's outcome or None.
        """
        result = self.evaluate(labels)
        if result["success"] and result["first_match"]:
            return result["first_match"]["result"]
        return None
