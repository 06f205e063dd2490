"""
Trigger engine - condition evaluation and action dispatch.

Handles condition evaluation against device attributes, action execution,
and execution history.
"""

import logging
from collections import deque
from datetime import datetime, UTC
from typing import Deque, List, Optional

from smart_hub.core.bus import Event
from smart_hub.core.exceptions import MalformedActionError
from smart_hub.core.registry import DeviceRegistry

from .actions import parse_action
from .evaluators import ConditionEvaluator
from .models import (
    ActionConfig,
    ComparisonOperator,
    EngineResult,
    RuleExecution,
    TriggerRule,
)

logger = logging.getLogger(__name__)


class TriggerEngine:
    """
    Evaluates trigger rules on each poll.

    Responsibilities:
    - Evaluate each rule's condition against current device attributes
    - Dispatch the action of every rule whose condition holds
    - Log and skip malformed actions without aborting the poll
    - Track execution history
    """

    HISTORY_SIZE = 100  # Number of executions to keep in history

    def __init__(self, registry: DeviceRegistry, history_size: int = HISTORY_SIZE) -> None:
        self._registry = registry
        self._evaluator = ConditionEvaluator(registry)
        self._rules: List[TriggerRule] = []

        # Execution history (ring buffer)
        self._history: Deque[RuleExecution] = deque(maxlen=history_size)

    @property
    def rules(self) -> List[TriggerRule]:
        return list(self._rules)

    def add(
        self,
        condition_type: str,
        operator: "ComparisonOperator | str",
        threshold: int,
        action: ActionConfig,
        source_device_id: Optional[int] = None,
    ) -> TriggerRule:
        """
        Add a trigger rule.

        Args:
            condition_type: Device attribute to inspect (e.g. "temperature")
            operator: One of >, <, >=, <=, ==, !=
            threshold: Value to compare against
            action: DeviceAction or string such as "turnOff(1)"
            source_device_id: Optional device to inspect exclusively

        Returns:
            The new rule

        Raises:
            InvalidOperatorError: If the operator is not supported
        """
        rule = TriggerRule(
            condition_type=condition_type,
            operator=operator,
            threshold=threshold,
            action=action,
            source_device_id=source_device_id,
        )
        return self.add_rule(rule)

    def add_rule(self, rule: TriggerRule) -> TriggerRule:
        """Add an already-built trigger rule."""
        self._rules.append(rule)
        logger.info(f"Added trigger: {rule.condition} -> {rule.action}")
        return rule

    # =========================================================================
    # Polling
    # =========================================================================

    def poll(self, now: Optional[datetime] = None) -> EngineResult:
        """
        Evaluate every rule, then publish one triggers.checked event.

        Args:
            now: Timestamp for history records (for testing)

        Returns:
            Result with counts of rules evaluated/triggered and any errors
        """
        if now is None:
            now = datetime.now(UTC)

        result = EngineResult()

        for index, rule in enumerate(self._rules):
            result.rules_evaluated += 1

            matched = self._evaluator.matching_devices(rule)
            if not matched:
                continue

            result.rules_triggered += 1
            matched_ids = [d.id for d in matched]
            error = self._dispatch(rule)

            if error is None:
                result.actions_executed += 1
            else:
                result.errors.append(error)

            self._history.append(
                RuleExecution(
                    rule_index=index,
                    condition=rule.condition,
                    action=str(rule.action),
                    matched_device_ids=matched_ids,
                    success=error is None,
                    error=error,
                    timestamp=now,
                )
            )

        logger.debug(
            f"Checked {result.rules_evaluated} trigger(s): "
            f"{result.rules_triggered} fired, {len(result.errors)} error(s)"
        )
        self._registry.bus.publish(
            Event(
                type="triggers.checked",
                source="triggers",
                payload={
                    "evaluated": result.rules_evaluated,
                    "triggered": result.rules_triggered,
                    "errors": list(result.errors),
                },
            )
        )
        return result

    def _dispatch(self, rule: TriggerRule) -> Optional[str]:
        """
        Execute a rule's action.

        Returns:
            None on success, otherwise the error message
        """
        try:
            action = parse_action(rule.action)
        except MalformedActionError as e:
            logger.warning(f"Skipping trigger {rule.condition!r}: {e}")
            return str(e)

        device = self._registry.apply_command(action.device_id, action.command, notify=False)
        if device is None:
            message = f"Action {action} targets unknown device {action.device_id}"
            logger.warning(f"Skipping trigger {rule.condition!r}: {message}")
            return message

        logger.info(f"Trigger {rule.condition!r} fired: {action}")
        return None

    # =========================================================================
    # History
    # =========================================================================

    def get_history(self, limit: int = 20) -> List[RuleExecution]:
        """
        Get execution history.

        Args:
            limit: Maximum entries to return

        Returns:
            List of RuleExecution records (newest first)
        """
        return list(reversed(self._history))[:limit]
