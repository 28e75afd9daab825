"""The three conformance scenarios.

Each scenario allocates its guarded buffers once, then runs the configured
number of iterations with a fresh key pair and a fresh random message. The
first failure ends the scenario; nothing is retried.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Dict, List, Optional, Tuple

from .config import HarnessConfig
from .errors import FailureKind, ScenarioFailure
from .interfaces import SignatureScheme
from .memory import GuardedBuffer, Span
from .results import ScenarioResult

log = logging.getLogger(__name__)

RandomFill = Callable[[memoryview], None]

COMBINED_ROUND_TRIP = "combined-round-trip"
DETACHED_ROUND_TRIP = "detached-round-trip"
FORGED_KEY_REJECTION = "forged-key-rejection"
SCENARIOS = (COMBINED_ROUND_TRIP, DETACHED_ROUND_TRIP, FORGED_KEY_REJECTION)

_POSITIVE_STATUS_NOTE = "return code should be < 0 on failure"


def urandom_fill(view: memoryview) -> None:
    view[:] = os.urandom(len(view))


class _Workspace:
    """Guarded buffers owned by one scenario run."""

    def __init__(self, scheme: SignatureScheme, layout: Dict[str, int]) -> None:
        self._scratch_sizes = scheme.params.scratch
        self.buffers: Dict[str, GuardedBuffer] = {}
        self.scratch: Optional[GuardedBuffer] = None
        try:
            for label, size in layout.items():
                self.buffers[label] = GuardedBuffer(size, label)
            if self._scratch_sizes is not None:
                self.scratch = GuardedBuffer(self._scratch_sizes.keypair, "scratch")
        except BaseException:
            self.close()
            raise

    def __enter__(self) -> "_Workspace":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __getitem__(self, label: str) -> Span:
        return self.buffers[label].span

    def scratch_for(self, op: str) -> Optional[Span]:
        if self.scratch is None:
            return None
        # Sizes differ per operation, so the workspace is re-sized before every call.
        self.scratch.resize(getattr(self._scratch_sizes, op))
        return self.scratch.span

    def check_guards(self, after: str) -> None:
        guarded = list(self.buffers.values())
        if self.scratch is not None:
            guarded.append(self.scratch)
        for buf in guarded:
            damaged = buf.damaged_guards()
            if damaged:
                raise ScenarioFailure(
                    FailureKind.CANARY_CORRUPTION,
                    f"ERROR canary overwritten: {after} damaged the {' and '.join(damaged)} guard of {buf.label}",
                )

    def close(self) -> None:
        for buf in self.buffers.values():
            buf.release()
        if self.scratch is not None:
            self.scratch.release()


def _with_status_note(message: str, status: int) -> str:
    if status > 0:
        return f"{message} ({_POSITIVE_STATUS_NOTE}, got {status})"
    return message


def _require_success(status: int, op: str) -> None:
    if status != 0:
        raise ScenarioFailure(
            FailureKind.UNEXPECTED_OPERATION_FAILURE,
            _with_status_note(f"ERROR {op} returned non-zero returncode {status}", status),
        )


def _require_length(length: int, bound: int, what: str) -> None:
    if not isinstance(length, int) or length < 0 or length > bound:
        raise ScenarioFailure(
            FailureKind.UNEXPECTED_OPERATION_FAILURE,
            f"ERROR reported {what} length {length!r} outside 0..{bound}",
        )


class ScenarioRunner:
    def __init__(
        self,
        scheme: SignatureScheme,
        config: Optional[HarnessConfig] = None,
        fill_random: Optional[RandomFill] = None,
    ) -> None:
        self.scheme = scheme
        self.params = scheme.params
        self.config = config or HarnessConfig()
        self.fill_random = fill_random or urandom_fill

    def run_all(self) -> List[ScenarioResult]:
        return [
            self.combined_round_trip(),
            self.detached_round_trip(),
            self.forged_key_rejection(),
        ]

    def combined_round_trip(self) -> ScenarioResult:
        p, mlen = self.params, self.config.message_length
        layout = {
            "pk": p.public_key_bytes,
            "sk": p.secret_key_bytes,
            "sm": mlen + p.signature_bytes,
            "m": mlen,
        }
        return self._run(COMBINED_ROUND_TRIP, layout, self._combined_iteration)

    def detached_round_trip(self) -> ScenarioResult:
        p, mlen = self.params, self.config.message_length
        layout = {
            "pk": p.public_key_bytes,
            "sk": p.secret_key_bytes,
            "sig": p.signature_bytes,
            "m": mlen,
        }
        return self._run(DETACHED_ROUND_TRIP, layout, self._detached_iteration)

    def forged_key_rejection(self) -> ScenarioResult:
        p, mlen = self.params, self.config.message_length
        layout = {
            "pk": p.public_key_bytes,
            "sk": p.secret_key_bytes,
            "pk2": p.public_key_bytes,
            "sk2": p.secret_key_bytes,
            "sm": mlen + p.signature_bytes,
            "m": mlen,
        }
        return self._run(FORGED_KEY_REJECTION, layout, self._forged_iteration)

    def _run(self, scenario: str, layout: Dict[str, int], iteration: Callable[[_Workspace], None]) -> ScenarioResult:
        result = ScenarioResult(scenario=scenario, iterations=self.config.iterations, completed=0)
        with _Workspace(self.scheme, layout) as ws:
            for i in range(self.config.iterations):
                try:
                    iteration(ws)
                except ScenarioFailure as failure:
                    failure.iteration = i
                    result.failure = failure.kind
                    result.failed_iteration = i
                    result.detail = failure.message
                    log.info("%s [%s] iteration %d: %s", self.params.algname, scenario, i, failure.message)
                    break
                result.completed += 1
                log.debug("%s [%s] iteration %d ok", self.params.algname, scenario, i)
        return result

    def _invoke(self, ws: _Workspace, op: str, scratch_op: str, fn, *spans: Span):
        outcome = fn(*spans, ws.scratch_for(scratch_op))
        ws.check_guards(op)
        return outcome

    def _keypair(self, ws: _Workspace, pk: str, sk: str) -> None:
        status = self._invoke(ws, "keypair", "keypair", self.scheme.keypair, ws[pk], ws[sk])
        _require_success(status, "keypair")

    def _fresh_message(self, ws: _Workspace) -> bytes:
        self.fill_random(ws["m"].view)
        return ws["m"].read()

    def _sign_combined(self, ws: _Workspace, sk: str) -> Span:
        status, smlen = self._invoke(ws, "sign", "sign", self.scheme.sign, ws["sm"], ws["m"], ws[sk])
        _require_success(status, "sign")
        _require_length(smlen, ws["sm"].size, "signed message")
        return ws["sm"].head(smlen)

    def _open_in_place(self, ws: _Workspace, signed: Span, pk: str) -> Tuple[int, int]:
        # Output aliases the input: both are the sm buffer.
        return self._invoke(ws, "open", "verify", self.scheme.open, ws["sm"], signed, ws[pk])

    def _combined_iteration(self, ws: _Workspace) -> None:
        self._keypair(ws, "pk", "sk")
        message = self._fresh_message(ws)
        signed = self._sign_combined(ws, "sk")
        status, mlen = self._open_in_place(ws, signed, "pk")
        if status != 0:
            raise ScenarioFailure(
                FailureKind.VERIFICATION_MISMATCH,
                _with_status_note("ERROR Signature did not verify correctly!", status),
            )
        if mlen != len(message) or ws["sm"].head(mlen).read() != message:
            raise ScenarioFailure(
                FailureKind.VERIFICATION_MISMATCH,
                f"ERROR opened message does not match the signed message (recovered {mlen!r} of {len(message)} bytes)",
            )

    def _detached_iteration(self, ws: _Workspace) -> None:
        self._keypair(ws, "pk", "sk")
        self._fresh_message(ws)
        status, siglen = self._invoke(
            ws, "sign_detached", "sign", self.scheme.sign_detached, ws["sig"], ws["m"], ws["sk"]
        )
        _require_success(status, "sign_detached")
        _require_length(siglen, ws["sig"].size, "signature")
        status = self._invoke(
            ws, "verify_detached", "verify", self.scheme.verify_detached, ws["sig"].head(siglen), ws["m"], ws["pk"]
        )
        if status != 0:
            raise ScenarioFailure(
                FailureKind.VERIFICATION_MISMATCH,
                _with_status_note("ERROR Signature did not verify correctly!", status),
            )

    def _forged_iteration(self, ws: _Workspace) -> None:
        self._keypair(ws, "pk2", "sk2")
        self._keypair(ws, "pk", "sk")
        if ws["pk"].read() == ws["pk2"].read():
            raise ScenarioFailure(
                FailureKind.UNEXPECTED_OPERATION_FAILURE,
                "ERROR two keypair calls produced the same public key",
            )
        self._fresh_message(ws)
        signed = self._sign_combined(ws, "sk")
        status, _ = self._open_in_place(ws, signed, "pk2")
        if status >= 0:
            raise ScenarioFailure(
                FailureKind.FORGERY_NOT_REJECTED,
                _with_status_note("ERROR Signature did verify correctly under wrong public key!", status),
            )
