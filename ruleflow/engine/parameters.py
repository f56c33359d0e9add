"""Engine parameters controlling threshold and skip behavior."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ruleflow.core.config import DEFAULT_PRIORITY, Settings, get_settings


class EngineParameters(BaseModel):
    """Parameters read by a firing session.

    Engines keep their own copy and hand out copies, so changing an instance
    after passing it to an engine has no effect on that engine.
    """

    model_config = ConfigDict(validate_assignment=True)

    priority_threshold: int = Field(
        DEFAULT_PRIORITY, description="Rules with a greater priority value are not fired"
    )
    skip_on_first_applied_rule: bool = Field(
        False, description="Stop after the first rule whose actions succeed"
    )
    skip_on_first_failed_rule: bool = Field(
        False, description="Stop after the first rule whose actions fail"
    )
    skip_on_first_non_triggered_rule: bool = Field(
        False, description="Stop at the first rule that is not triggered"
    )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> EngineParameters:
        """Build parameters from ``RULEFLOW_*`` settings."""
        settings = settings or get_settings()
        return cls(
            priority_threshold=settings.priority_threshold,
            skip_on_first_applied_rule=settings.skip_on_first_applied_rule,
            skip_on_first_failed_rule=settings.skip_on_first_failed_rule,
            skip_on_first_non_triggered_rule=settings.skip_on_first_non_triggered_rule,
        )

    def __str__(self) -> str:
        return (
            "Engine parameters { "
            f"skip_on_first_applied_rule = {self.skip_on_first_applied_rule}, "
            f"skip_on_first_non_triggered_rule = {self.skip_on_first_non_triggered_rule}, "
            f"skip_on_first_failed_rule = {self.skip_on_first_failed_rule}, "
            f"priority_threshold = {self.priority_threshold} }}"
        )
