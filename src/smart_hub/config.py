"""
Hub configuration.
"""

from dataclasses import dataclass
from typing import Any, Dict

CURRENT_CONFIG_VERSION = 1


@dataclass
class HubConfig:
    """Settings for a Hub instance."""

    version: int = CURRENT_CONFIG_VERSION
    isolate_observer_failures: bool = False  # Run all observers, raise failures together
    default_temperature: int = 70  # Thermostat temperature when none is given
    history_size: int = 100  # Trigger executions kept in history

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "version": self.version,
            "isolate_observer_failures": self.isolate_observer_failures,
            "default_temperature": self.default_temperature,
            "history_size": self.history_size,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HubConfig":
        """
        Deserialize from dict.

        Raises:
            ValueError: If the config version is not supported
        """
        version = data.get("version", CURRENT_CONFIG_VERSION)
        if version != CURRENT_CONFIG_VERSION:
            raise ValueError(f"Unsupported config version: {version}")

        return cls(
            version=version,
            isolate_observer_failures=data.get("isolate_observer_failures", False),
            default_temperature=data.get("default_temperature", 70),
            history_size=data.get("history_size", 100),
        )
