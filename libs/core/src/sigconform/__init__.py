from .interfaces import ScratchSizes, SchemeParameters, Signature, SignatureScheme
from .registry import registry
from .config import HarnessConfig, MESSAGE_LENGTH, DEFAULT_ITERATIONS
from .errors import AllocationFailure, FailureKind, HarnessError, ScenarioFailure, SchemeError
from .memory import GuardedBuffer, Span
from .results import ScenarioResult, SuiteReport
from .scenarios import ScenarioRunner, urandom_fill
from .driver import run_suite, run_suites
from .bridge import ByteSchemeBinding

__all__ = [
    "ScratchSizes",
    "SchemeParameters",
    "Signature",
    "SignatureScheme",
    "registry",
    "HarnessConfig",
    "MESSAGE_LENGTH",
    "DEFAULT_ITERATIONS",
    "AllocationFailure",
    "FailureKind",
    "HarnessError",
    "ScenarioFailure",
    "SchemeError",
    "GuardedBuffer",
    "Span",
    "ScenarioResult",
    "SuiteReport",
    "ScenarioRunner",
    "urandom_fill",
    "run_suite",
    "run_suites",
    "ByteSchemeBinding",
]
