from __future__ import annotations

import hashlib
import os

from sigconform import SchemeParameters, ScratchSizes

PK_BYTES = 32
SK_BYTES = 64
SIG_BYTES = 32


def _tag(public_key: bytes, message: bytes) -> bytes:
    return hashlib.sha256(b"sig" + public_key + message).digest()


class ToyScheme:
    """Hash-based stand-in: sk = seed || pk, sig = H(pk || m).

    Useless as a signature scheme but it distinguishes keys, which is all the
    harness needs to exercise every scenario.
    """
    name = "toy"
    algname = "Toy-SHA256"
    scratch = None

    def __init__(self) -> None:
        self.params = SchemeParameters(self.algname, PK_BYTES, SK_BYTES, SIG_BYTES, self.scratch)
        self.keypair_calls = 0

    def _seed(self) -> bytes:
        return os.urandom(32)

    def keypair(self, pk, sk, scratch=None):
        self.keypair_calls += 1
        seed = self._seed()
        public = hashlib.sha256(b"pk" + seed).digest()
        pk.store(public)
        sk.store(seed + public)
        return 0

    def sign(self, sm, m, sk, scratch=None):
        message = m.read()
        sm.store(_tag(sk.read()[32:], message) + message)
        return 0, SIG_BYTES + len(message)

    def open(self, m, sm, pk, scratch=None):
        blob = sm.read()
        if len(blob) < SIG_BYTES:
            return -1, 0
        tag, message = blob[:SIG_BYTES], blob[SIG_BYTES:]
        if tag != _tag(pk.read(), message):
            return -1, 0
        m.store(message)
        return 0, len(message)

    def sign_detached(self, sig, m, sk, scratch=None):
        sig.store(_tag(sk.read()[32:], m.read()))
        return 0, SIG_BYTES

    def verify_detached(self, sig, m, pk, scratch=None):
        return 0 if sig.read() == _tag(pk.read(), m.read()) else -1


class TrailingOverflowScheme(ToyScheme):
    name = "toy-overflow"

    def sign_detached(self, sig, m, sk, scratch=None):
        sig.store(_tag(sk.read()[32:], m.read()) + b"\x00")
        return 0, SIG_BYTES


class LeadingUnderflowScheme(ToyScheme):
    name = "toy-underflow"

    def keypair(self, pk, sk, scratch=None):
        status = super().keypair(pk, sk, scratch)
        pk.store(b"\xff", offset=-1)
        return status


class AcceptAnyScheme(ToyScheme):
    name = "toy-accept-any"

    def open(self, m, sm, pk, scratch=None):
        message = sm.read()[SIG_BYTES:]
        m.store(message)
        return 0, len(message)


class PositiveRejectScheme(ToyScheme):
    name = "toy-positive"

    def open(self, m, sm, pk, scratch=None):
        status, mlen = super().open(m, sm, pk, scratch)
        return (1 if status else 0), mlen


class AlignedOnlyScheme(ToyScheme):
    """Refuses odd addresses, like code that assumes aligned vector loads."""
    name = "toy-aligned-only"

    def keypair(self, pk, sk, scratch=None):
        if pk.address % 2 or sk.address % 2:
            return -1
        return super().keypair(pk, sk, scratch)


class GarbleOnOpenScheme(ToyScheme):
    name = "toy-garble"

    def open(self, m, sm, pk, scratch=None):
        status, mlen = super().open(m, sm, pk, scratch)
        if status == 0:
            m.store(bytes([m.read()[0] ^ 0xFF]))
        return status, mlen


class FlakyKeypairScheme(ToyScheme):
    name = "toy-flaky"
    fail_on_call = 3

    def keypair(self, pk, sk, scratch=None):
        if self.keypair_calls + 1 == self.fail_on_call:
            self.keypair_calls += 1
            return -2
        return super().keypair(pk, sk, scratch)


class FixedSeedScheme(ToyScheme):
    name = "toy-fixed-seed"

    def _seed(self) -> bytes:
        return b"\x07" * 32


class ScratchScheme(ToyScheme):
    """Needs caller scratch of an exact per-operation size and uses all of it."""
    name = "toy-scratch"
    algname = "Toy-SHA256-scratch"
    scratch = ScratchSizes(keypair=48, sign=96, verify=64)

    def __init__(self) -> None:
        super().__init__()
        self.seen = []

    def _use(self, scratch, op: str) -> bool:
        self.seen.append((op, None if scratch is None else scratch.size))
        expected = getattr(self.scratch, op)
        if scratch is None or scratch.size != expected:
            return False
        scratch.store(b"\xaa" * scratch.size)
        return True

    def keypair(self, pk, sk, scratch=None):
        if not self._use(scratch, "keypair"):
            return -1
        return super().keypair(pk, sk, scratch)

    def sign(self, sm, m, sk, scratch=None):
        if not self._use(scratch, "sign"):
            return -1, 0
        return super().sign(sm, m, sk, scratch)

    def open(self, m, sm, pk, scratch=None):
        if not self._use(scratch, "verify"):
            return -1, 0
        return super().open(m, sm, pk, scratch)

    def sign_detached(self, sig, m, sk, scratch=None):
        if not self._use(scratch, "sign"):
            return -1, 0
        return super().sign_detached(sig, m, sk, scratch)

    def verify_detached(self, sig, m, pk, scratch=None):
        if not self._use(scratch, "verify"):
            return -1
        return super().verify_detached(sig, m, pk, scratch)


class ScratchOverrunScheme(ScratchScheme):
    name = "toy-scratch-overrun"

    def _use(self, scratch, op: str) -> bool:
        ok = super()._use(scratch, op)
        if ok and op == "sign":
            scratch.store(b"\x00", offset=scratch.size)
        return ok


def zero_fill(view: memoryview) -> None:
    view[:] = bytes(len(view))


class HugeKeyScheme(ToyScheme):
    """Declares a secret key far larger than anything it writes."""
    name = "toy-huge"
    algname = "Toy-Huge"

    def __init__(self) -> None:
        super().__init__()
        self.params = SchemeParameters(self.algname, PK_BYTES, 1 << 20, SIG_BYTES)
