"""Adapters — bindings for the external tools the modularizer shells out to.

Public re-exports for convenient access.
"""

from filament_modular.adapters.base import Adapter, ExecutionContext
from filament_modular.adapters.mock import MockAdapter
from filament_modular.adapters.shell.command import ShellCommandAdapter

__all__ = [
    "Adapter",
    "ExecutionContext",
    "MockAdapter",
    "ShellCommandAdapter",
]
