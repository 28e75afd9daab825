from __future__ import annotations

import ctypes
from typing import Any, Optional, Tuple

from sigconform import SchemeParameters, Span

from ._core import bind_operations, load_library, new_length, to_uint8_ptr


def _ptr(span: Span):
    return to_uint8_ptr(span.address)


class NativeScheme:
    """Capability interface over a PQClean-style shared library.

    Symbols are ``<namespace>_crypto_sign_keypair`` and friends. Sizes and the
    algorithm name are compile-time macros in that API, so they are passed in.
    With ``params.scratch`` set, every entry point takes a trailing scratch
    pointer.
    """

    def __init__(self, lib: Any, namespace: str, params: SchemeParameters, name: Optional[str] = None) -> None:
        params.validate()
        self.lib = lib
        self.namespace = namespace
        self.params = params
        self.name = name or namespace or params.algname
        self._ops = bind_operations(lib, namespace, params.requires_scratch)

    @classmethod
    def from_path(cls, path: Optional[str], namespace: str, params: SchemeParameters, name: Optional[str] = None) -> "NativeScheme":
        return cls(load_library(path), namespace, params, name)

    def _tail(self, scratch: Optional[Span]) -> tuple:
        if not self.params.requires_scratch:
            return ()
        if scratch is None:
            raise ValueError(f"{self.name} needs a scratch buffer")
        return (_ptr(scratch),)

    def keypair(self, pk: Span, sk: Span, scratch: Optional[Span] = None) -> int:
        return self._ops["keypair"](_ptr(pk), _ptr(sk), *self._tail(scratch))

    def sign(self, sm: Span, m: Span, sk: Span, scratch: Optional[Span] = None) -> Tuple[int, int]:
        smlen = new_length()
        status = self._ops["sign"](
            _ptr(sm), ctypes.pointer(smlen), _ptr(m), m.size, _ptr(sk), *self._tail(scratch)
        )
        return status, smlen.value

    def open(self, m: Span, sm: Span, pk: Span, scratch: Optional[Span] = None) -> Tuple[int, int]:
        mlen = new_length()
        status = self._ops["open"](
            _ptr(m), ctypes.pointer(mlen), _ptr(sm), sm.size, _ptr(pk), *self._tail(scratch)
        )
        return status, mlen.value

    def sign_detached(self, sig: Span, m: Span, sk: Span, scratch: Optional[Span] = None) -> Tuple[int, int]:
        siglen = new_length()
        status = self._ops["signature"](
            _ptr(sig), ctypes.pointer(siglen), _ptr(m), m.size, _ptr(sk), *self._tail(scratch)
        )
        return status, siglen.value

    def verify_detached(self, sig: Span, m: Span, pk: Span, scratch: Optional[Span] = None) -> int:
        return self._ops["verify"](_ptr(sig), sig.size, _ptr(m), m.size, _ptr(pk), *self._tail(scratch))
