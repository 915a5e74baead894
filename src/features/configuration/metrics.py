"""Metrics collection for the configuration store."""

from dataclasses import dataclass, field
from typing import ClassVar

from src.features.configuration.errors import ConfigStoreErrorClass


@dataclass
class ConfigStoreMetrics:
    """Metrics for configuration load, save and apply operations.

    Singleton class shared by every store in the process.
    """

    config_loads_started_total: int = 0
    config_loads_succeeded_total: int = 0
    config_load_failures_total: dict[str, int] = field(default_factory=dict)
    bootstraps_skipped_total: int = 0
    bootstraps_joined_total: int = 0
    config_saves_accepted_total: int = 0
    config_saves_rejected_total: int = 0
    config_save_failures_total: dict[str, int] = field(default_factory=dict)
    theme_applications_total: int = 0

    _instance: ClassVar["ConfigStoreMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "ConfigStoreMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_load_started(self) -> None:
        """Record a load request sent to the authority."""
        self.config_loads_started_total += 1

    def record_load_succeeded(self) -> None:
        """Record a load that replaced the held configuration."""
        self.config_loads_succeeded_total += 1

    def record_load_failure(self, error_class: ConfigStoreErrorClass) -> None:
        """Record a failed load.

        Args:
            error_class: Classification of the failure.
        """
        key = error_class.value
        self.config_load_failures_total[key] = (
            self.config_load_failures_total.get(key, 0) + 1
        )

    def record_bootstrap_skipped(self) -> None:
        """Record a bootstrap refused by the admission check."""
        self.bootstraps_skipped_total += 1

    def record_bootstrap_joined(self) -> None:
        """Record a bootstrap that joined an in-flight one."""
        self.bootstraps_joined_total += 1

    def record_save_accepted(self) -> None:
        self.config_saves_accepted_total += 1

    def record_save_rejected(self) -> None:
        self.config_saves_rejected_total += 1

    def record_save_failure(self, error_class: ConfigStoreErrorClass) -> None:
        """Record a save that failed before reaching a verdict.

        Args:
            error_class: Classification of the failure.
        """
        key = error_class.value
        self.config_save_failures_total[key] = (
            self.config_save_failures_total.get(key, 0) + 1
        )

    def record_theme_applied(self) -> None:
        self.theme_applications_total += 1

    def to_dict(self) -> dict[str, int | dict[str, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "config_loads_started_total": self.config_loads_started_total,
            "config_loads_succeeded_total": self.config_loads_succeeded_total,
            "config_load_failures_total": dict(self.config_load_failures_total),
            "bootstraps_skipped_total": self.bootstraps_skipped_total,
            "bootstraps_joined_total": self.bootstraps_joined_total,
            "config_saves_accepted_total": self.config_saves_accepted_total,
            "config_saves_rejected_total": self.config_saves_rejected_total,
            "config_save_failures_total": dict(self.config_save_failures_total),
            "theme_applications_total": self.theme_applications_total,
        }
