"""
command.py

Responsibility: Describe a single process invocation and hand it to `subprocess`.

A `Command` is inert data: program name, argument tokens, environment overrides and an
optional working directory. Builders return one; callers may augment it before running.

This module must be the only place that spawns processes. Output is returned exactly as
the tool produced it; nothing here interprets or rewrites git's diagnostics.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

# Conventional shell statuses for "command not found" and "found but could not run".
EXIT_NOT_FOUND = 127
EXIT_CANNOT_EXECUTE = 126


class CommandError(RuntimeError):
    """A command could not be started or exited with a non-zero status."""

    def __init__(self, argv: list[str], returncode: int, stdout: str = "", stderr: str = "") -> None:
        self.argv = argv
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"Command failed ({returncode}): {shlex.join(argv)}\n\n{stderr}")


@dataclass
class Command:
    program: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    cwd: str | None = None

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def arg(self, value: str | os.PathLike[str]) -> Command:
        self.args.append(os.fspath(value))
        return self

    def extend(self, values: Iterable[str | os.PathLike[str]]) -> Command:
        for value in values:
            self.arg(value)
        return self

    def set_env(self, key: str, value: str) -> Command:
        self.env[key] = value
        return self

    def update_env(self, mapping: Mapping[str, str]) -> Command:
        for key, value in mapping.items():
            self.set_env(key, value)
        return self

    def set_cwd(self, path: str | os.PathLike[str]) -> Command:
        self.cwd = os.fspath(path)
        return self

    def to_dict(self) -> dict[str, Any]:
        return {"argv": self.argv, "env": dict(self.env), "cwd": self.cwd}

    def __str__(self) -> str:
        return shlex.join(self.argv)

    def _process_env(self) -> dict[str, str] | None:
        # None lets the child inherit the parent environment unchanged.
        if not self.env:
            return None
        env = os.environ.copy()
        env.update(self.env)
        return env

    def _start_failure_code(self, error: OSError) -> int:
        # A missing working directory also surfaces as FileNotFoundError.
        if self.cwd is not None and not os.path.isdir(self.cwd):
            return EXIT_CANNOT_EXECUTE
        if isinstance(error, FileNotFoundError):
            return EXIT_NOT_FOUND
        return EXIT_CANNOT_EXECUTE

    def run(self, *, check: bool = False, timeout: float | None = None) -> subprocess.CompletedProcess[str]:
        """
        Run the command, capturing stdout/stderr as text.

        With `check=True` a non-zero exit raises `CommandError`; otherwise the
        `CompletedProcess` is returned as-is. A program that cannot be started always raises.
        """
        argv = self.argv
        logger.debug("Running %s (cwd=%s)", self, self.cwd or os.getcwd())
        try:
            result = subprocess.run(
                argv,
                cwd=self.cwd,
                env=self._process_env(),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=timeout,
                check=False,
            )
        except OSError as e:
            raise CommandError(argv, self._start_failure_code(e), stderr=str(e)) from e

        logger.debug("%s exited with %d", self.program, result.returncode)
        if check and result.returncode != 0:
            raise CommandError(argv, result.returncode, stdout=result.stdout, stderr=result.stderr)
        return result
