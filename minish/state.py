"""The state a running shell carries from one command line to the next."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from minish.environment import Environment

SUCCESS = 0
ERROR = 1
EXIT_CTRL_D = 130


@dataclass
class ShellState:
    """Environment, last exit status and run flag of a shell session."""

    env: Environment = field(default_factory=Environment)
    exit_status: int = 0
    running: bool = True
    last_pid: int = 0

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "ShellState":
        """Start a session with a copy of ``environ`` (the process environment by default)."""
        source = os.environ if environ is None else environ
        return cls(env=Environment.from_mapping(source))