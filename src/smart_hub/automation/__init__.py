"""
Automation engines for smart-hub.

Features:
- Time-of-day schedules (level-triggered)
- Attribute-threshold triggers with device actions
- Execution history for debugging

Both engines are poll-driven: the host calls poll() periodically and each
poll publishes a single notification when it finishes.
"""

from .models import (
    ComparisonOperator,
    DeviceAction,
    ActionConfig,
    ScheduleEntry,
    TriggerRule,
    EngineResult,
    RuleExecution,
    parse_time_of_day,
)
from .actions import parse_action
from .evaluators import ConditionEvaluator, schedule_is_due
from .schedule import ScheduleEngine, build_entry
from .triggers import TriggerEngine

__all__ = [
    # Models
    "ComparisonOperator",
    "DeviceAction",
    "ActionConfig",
    "ScheduleEntry",
    "TriggerRule",
    "EngineResult",
    "RuleExecution",
    "parse_time_of_day",
    # Actions
    "parse_action",
    # Evaluators
    "ConditionEvaluator",
    "schedule_is_due",
    # Engines
    "ScheduleEngine",
    "build_entry",
    "TriggerEngine",
]
