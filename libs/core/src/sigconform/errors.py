from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    UNEXPECTED_OPERATION_FAILURE = "unexpected-operation-failure"
    VERIFICATION_MISMATCH = "verification-mismatch"
    CANARY_CORRUPTION = "canary-corruption"
    FORGERY_NOT_REJECTED = "forgery-not-rejected"


class HarnessError(RuntimeError):
    pass


class AllocationFailure(HarnessError):
    """Raised when a guarded buffer cannot be allocated. Fatal for the whole run."""


class SchemeError(HarnessError):
    """The scheme under test cannot be exercised (bad sizes, missing symbols, ...)."""


class ScenarioFailure(HarnessError):
    def __init__(self, kind: FailureKind, message: str, iteration: int | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.iteration = iteration
