from __future__ import annotations

"""Lift a byte-level `Signature` adapter onto the buffer-level capability interface.

Inputs are read out of the caller's spans, outputs are stored back with
`Span.store`, so an adapter that produces more bytes than it declared runs
into the guard bytes like a native implementation would.

Combined encoding is ``sig || m``. Adapters whose signatures vary in length
set ``variable_signature_length = True`` and get a 2-byte big-endian length
prefix; that prefix is counted in ``signature_bytes``.
"""

import logging
from typing import Optional, Tuple

from .interfaces import SchemeParameters, Signature
from .memory import Span

log = logging.getLogger(__name__)

LENGTH_PREFIX_BYTES = 2
REJECTED = -1


class ByteSchemeBinding:
    def __init__(self, adapter: Signature) -> None:
        self.adapter = adapter
        self.name = adapter.name
        self._prefix = LENGTH_PREFIX_BYTES if getattr(adapter, "variable_signature_length", False) else 0
        self.params = SchemeParameters(
            algname=adapter.algorithm,
            public_key_bytes=adapter.public_key_bytes,
            secret_key_bytes=adapter.secret_key_bytes,
            signature_bytes=adapter.signature_bytes + self._prefix,
        )

    def _encode(self, signature: bytes, message: bytes) -> bytes:
        if self._prefix:
            return len(signature).to_bytes(self._prefix, "big") + signature + message
        return signature + message

    def _decode(self, blob: bytes) -> Optional[Tuple[bytes, bytes]]:
        if self._prefix:
            if len(blob) < self._prefix:
                return None
            siglen = int.from_bytes(blob[:self._prefix], "big")
            body = blob[self._prefix:]
        else:
            siglen = self.adapter.signature_bytes
            body = blob
        if siglen > len(body):
            return None
        return body[:siglen], body[siglen:]

    def keypair(self, pk: Span, sk: Span, scratch: Optional[Span] = None) -> int:
        try:
            public_key, secret_key = self.adapter.keygen()
        except Exception:
            log.exception("%s: keygen raised", self.name)
            return REJECTED
        pk.store(public_key)
        sk.store(secret_key)
        return 0

    def _sign_bytes(self, sk: Span, message: bytes) -> Optional[bytes]:
        try:
            return self.adapter.sign(sk.read(), message)
        except Exception:
            log.exception("%s: sign raised", self.name)
            return None

    def _verify_bytes(self, pk: Span, message: bytes, signature: bytes) -> bool:
        try:
            return bool(self.adapter.verify(pk.read(), message, signature))
        except Exception:
            log.exception("%s: verify raised", self.name)
            return False

    def sign(self, sm: Span, m: Span, sk: Span, scratch: Optional[Span] = None) -> Tuple[int, int]:
        message = m.read()
        signature = self._sign_bytes(sk, message)
        if signature is None:
            return REJECTED, 0
        blob = self._encode(signature, message)
        sm.store(blob)
        return 0, len(blob)

    def open(self, m: Span, sm: Span, pk: Span, scratch: Optional[Span] = None) -> Tuple[int, int]:
        # Read the whole blob first: m and sm may be the same memory.
        decoded = self._decode(sm.read())
        if decoded is None:
            return REJECTED, 0
        signature, message = decoded
        if not self._verify_bytes(pk, message, signature):
            return REJECTED, 0
        m.store(message)
        return 0, len(message)

    def sign_detached(self, sig: Span, m: Span, sk: Span, scratch: Optional[Span] = None) -> Tuple[int, int]:
        signature = self._sign_bytes(sk, m.read())
        if signature is None:
            return REJECTED, 0
        sig.store(signature)
        return 0, len(signature)

    def verify_detached(self, sig: Span, m: Span, pk: Span, scratch: Optional[Span] = None) -> int:
        return 0 if self._verify_bytes(pk, m.read(), sig.read()) else REJECTED
