"""
Mock adapter — stands in for the generator in tests.

Returns success by default. Can be told to fail with a given exit code,
and can run a side-effect callback so tests can drop the file the real
generator would have written.
"""

from __future__ import annotations

from collections.abc import Callable

from filament_modular.adapters.base import Adapter, ExecutionContext
from filament_modular.core.models.action import Receipt


class MockAdapter(Adapter):
    """Test double for any adapter."""

    def __init__(
        self,
        adapter_name: str = "mock",
        default_output: str = "[mock] executed",
        side_effect: Callable[[ExecutionContext], None] | None = None,
    ):
        self._name = adapter_name
        self._default_output = default_output
        self._side_effect = side_effect
        self._failure: tuple[str, int] | None = None
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    def set_failure(self, error: str = "Mock failure", return_code: int = 1) -> None:
        """Make every following execution fail."""
        self._failure = (error, return_code)

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)

        if self._failure is not None:
            error, code = self._failure
            return Receipt.failure(
                adapter=self._name,
                action_id=context.action.id,
                error=error,
                return_code=code,
            )

        if self._side_effect is not None:
            self._side_effect(context)

        return Receipt.success(
            adapter=self._name,
            action_id=context.action.id,
            output=self._default_output,
            return_code=0,
            metadata={"mock": True},
        )
