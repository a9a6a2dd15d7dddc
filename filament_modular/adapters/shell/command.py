"""
Shell command adapter — execute an external command and capture its output.

The working directory is passed to ``subprocess.run`` explicitly; the
process-wide cwd is never touched, so nothing needs restoring when the
command fails.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import time
from pathlib import Path

from filament_modular.adapters.base import Adapter, ExecutionContext
from filament_modular.core.models.action import Receipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Execute commands and capture output.

    Action params:
        command (list[str] | str): argv list, or a string split with shlex.
        timeout (int): Timeout in seconds (default: 300).
        cwd (str): Override working directory (default: context.project_root).
    """

    @property
    def name(self) -> str:
        return "shell"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        argv = _argv(context.action.params.get("command"))
        if not argv:
            return False, "Missing required param: 'command'"

        cwd = context.working_dir
        if not Path(cwd).is_dir():
            return False, f"Working directory does not exist: {cwd}"

        if shutil.which(argv[0]) is None and not (Path(cwd) / argv[0]).is_file():
            return False, f"Executable not found: {argv[0]}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        argv = _argv(context.action.params.get("command"))
        timeout = context.action.params.get("timeout", 300)
        cwd = context.working_dir
        display = shlex.join(argv)

        logger.debug("Executing: %s (cwd=%s)", display, cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command timed out after {timeout}s",
                metadata={"command": display, "timeout": timeout},
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command execution error: {e}",
                metadata={"command": display},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = result.stdout.strip()
        stderr = result.stderr.strip()

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                action_id=context.action.id,
                output=output,
                duration_ms=elapsed_ms,
                return_code=result.returncode,
                metadata={"command": display, "stderr": stderr},
            )

        logger.debug("Command failed with code %d: %s", result.returncode, display)
        return Receipt.failure(
            adapter=self.name,
            action_id=context.action.id,
            error=stderr or f"Command exited with code {result.returncode}",
            output=output,
            duration_ms=elapsed_ms,
            return_code=result.returncode,
            metadata={"command": display},
        )


def _argv(command: list[str] | str | None) -> list[str]:
    if not command:
        return []
    if isinstance(command, str):
        return shlex.split(command)
    return [str(part) for part in command]
