"""
Scaffold operations — run ``make:filament-resource`` for a resource.

The generator runs with its working directory set to the project root
through the subprocess API. Success means exit status zero; anything
else comes back as a failed Receipt.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Iterable
from pathlib import Path

from filament_modular.adapters.base import Adapter, ExecutionContext
from filament_modular.adapters.shell.command import ShellCommandAdapter
from filament_modular.core.config.loader import ModularConfig
from filament_modular.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)

# Flags forwarded verbatim to the generator, in the order they're appended.
GENERATOR_FLAGS: tuple[str, ...] = (
    "model",
    "migration",
    "factory",
    "generate",
    "simple",
    "view",
    "soft-deletes",
    "force",
)


def build_generator_command(
    name: str,
    flags: Iterable[str],
    config: ModularConfig | None = None,
) -> list[str]:
    """Build the generator argv.

    Unknown flags raise ``ValueError``; known ones are emitted in
    ``GENERATOR_FLAGS`` order regardless of how they were given.
    """
    config = config or ModularConfig()
    enabled = set(flags)
    unknown = enabled.difference(GENERATOR_FLAGS)
    if unknown:
        raise ValueError(f"Unknown generator flag(s): {', '.join(sorted(unknown))}")

    argv = [*config.generator.command, name]
    argv += [f"--{flag}" for flag in GENERATOR_FLAGS if flag in enabled]
    return argv


def run_generator(
    name: str,
    flags: Iterable[str],
    project_root: Path,
    config: ModularConfig | None = None,
    adapter: Adapter | None = None,
) -> Receipt:
    """Run the scaffolding command and return its receipt."""
    config = config or ModularConfig()
    adapter = adapter or ShellCommandAdapter()
    argv = build_generator_command(name, flags, config)

    action = Action(
        id=f"generate:{name}",
        name="Generate Filament resource",
        adapter=adapter.name,
        params={
            "command": argv,
            "cwd": str(project_root),
            "timeout": config.generator.timeout,
        },
    )
    context = ExecutionContext(action=action, project_root=str(project_root))

    logger.info("Running generator in %s", project_root)
    receipt = adapter.run(context)
    receipt.metadata.setdefault("command", shlex.join(argv))

    if receipt.failed:
        logger.error("Generator failed: %s", receipt.error)
    return receipt
