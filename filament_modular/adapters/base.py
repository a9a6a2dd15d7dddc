"""
Adapter base — the contract between the use cases and external tools.

The use cases never call ``subprocess`` directly. They build an Action,
hand it to an adapter, and read the Receipt.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from filament_modular.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """Everything an adapter needs to execute an action."""

    action: Action
    project_root: str = "."
    params: dict[str, Any] = Field(default_factory=dict)

    @property
    def working_dir(self) -> str:
        """Working directory for the action: explicit ``cwd`` or the project root."""
        return self.action.params.get("cwd") or self.project_root


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters perform external side effects and return receipts.
    They never raise: failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the action can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Execute the action and return a receipt."""

    def run(self, context: ExecutionContext) -> Receipt:
        """Validate, then execute."""
        valid, error = self.validate(context)
        if not valid:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=error,
            )

        return self.execute(context)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
