"""Running shell commands and collecting what they print."""

from __future__ import annotations

import subprocess

DEFAULT_LIMIT = 4096


class CommandError(RuntimeError):
    """Raised when a command cannot be started at all."""


class CommandRunner:
    """Runs shell commands, keeping at most ``limit`` bytes of their output."""

    def __init__(self, limit: int = DEFAULT_LIMIT) -> None:
        if limit < 0:
            raise ValueError(f"output limit must not be negative, got {limit}")
        self.limit = limit

    def run(self, command: str) -> str:
        """Run ``command`` through the shell and return its standard output."""
        try:
            with subprocess.Popen(
                command, shell=True, stdout=subprocess.PIPE
            ) as proc:
                assert proc.stdout is not None
                data = proc.stdout.read(self.limit)
        except OSError as exc:
            raise CommandError(f"failed to execute {command!r}: {exc}") from exc
        return data.decode("utf-8", errors="replace")

    def spawn(self, command: str) -> int:
        """Run ``command`` through the shell without capturing output.

        Returns the exit status of the command.
        """
        try:
            completed = subprocess.run(command, shell=True, check=False)
        except OSError as exc:
            raise CommandError(f"failed to execute {command!r}: {exc}") from exc
        return completed.returncode