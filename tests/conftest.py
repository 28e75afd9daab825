from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
for candidate in (
    ROOT / "libs" / "core" / "src",
    ROOT / "libs" / "adapters" / "eddsa" / "src",
    ROOT / "libs" / "adapters" / "liboqs" / "src",
    ROOT / "libs" / "adapters" / "native" / "src",
    ROOT / "apps" / "cli" / "src",
):
    candidate_str = str(candidate)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

from sigconform import HarnessConfig  # noqa: E402


@pytest.fixture(autouse=True)
def clear_harness_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SIGCONFORM_ITERATIONS", "SIGCONFORM_MESSAGE_LENGTH", "SIGCONFORM_NATIVE_LIB"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def small_config() -> HarnessConfig:
    return HarnessConfig(iterations=3, message_length=64)
