from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_ITERATIONS = 5
MESSAGE_LENGTH = 1024


def _env_int(name: str, default: int) -> int:
    override = os.getenv(name)
    if override:
        try:
            value = int(override)
        except ValueError as exc:
            raise ValueError(f"{name} must be an integer") from exc
        if value <= 0:
            raise ValueError(f"{name} must be positive")
        return value
    return default


@dataclass(frozen=True)
class HarnessConfig:
    """Run-wide knobs. Env overrides: SIGCONFORM_ITERATIONS, SIGCONFORM_MESSAGE_LENGTH."""
    iterations: int = field(default_factory=lambda: _env_int("SIGCONFORM_ITERATIONS", DEFAULT_ITERATIONS))
    message_length: int = field(default_factory=lambda: _env_int("SIGCONFORM_MESSAGE_LENGTH", MESSAGE_LENGTH))

    def __post_init__(self) -> None:
        if self.iterations <= 0:
            raise ValueError("iterations must be positive")
        if self.message_length <= 0:
            raise ValueError("message_length must be positive")
