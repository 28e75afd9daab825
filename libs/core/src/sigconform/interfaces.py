"""Contracts between the harness and the implementations it exercises.

`SignatureScheme` is the buffer-level capability interface the scenarios call:
every output goes into a caller-supplied span and every operation answers with
a status (0 ok, negative rejection, never positive).

`Signature` is the simpler byte-level contract adapters implement. The bridge
module lifts it onto `SignatureScheme`.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from .errors import SchemeError
from .memory import Span


@dataclass(frozen=True)
class ScratchSizes:
    """Per-operation workspace sizes for schemes that need a caller buffer."""
    keypair: int
    sign: int
    verify: int


@dataclass(frozen=True)
class SchemeParameters:
    algname: str
    public_key_bytes: int
    secret_key_bytes: int
    signature_bytes: int
    scratch: Optional[ScratchSizes] = None

    @property
    def requires_scratch(self) -> bool:
        return self.scratch is not None

    def validate(self) -> None:
        if not isinstance(self.algname, str) or not self.algname or not self.algname.isprintable():
            raise SchemeError(f"Algorithm name must be a non-empty printable string: {self.algname!r}")
        sizes = {
            "public_key_bytes": self.public_key_bytes,
            "secret_key_bytes": self.secret_key_bytes,
            "signature_bytes": self.signature_bytes,
        }
        if self.scratch is not None:
            sizes.update(
                keypair_scratch_bytes=self.scratch.keypair,
                sign_scratch_bytes=self.scratch.sign,
                verify_scratch_bytes=self.scratch.verify,
            )
        for label, value in sizes.items():
            if not isinstance(value, int) or value <= 0:
                raise SchemeError(f"{self.algname}: {label} must be a positive integer, got {value!r}")


class SignatureScheme(Protocol):
    """Buffer-level capability interface (combined and detached forms)."""
    name: str
    params: SchemeParameters
    def keypair(self, pk: Span, sk: Span, scratch: Optional[Span] = None) -> int: ...
    def sign(self, sm: Span, m: Span, sk: Span, scratch: Optional[Span] = None) -> Tuple[int, int]: ...
    def open(self, m: Span, sm: Span, pk: Span, scratch: Optional[Span] = None) -> Tuple[int, int]: ...
    def sign_detached(self, sig: Span, m: Span, sk: Span, scratch: Optional[Span] = None) -> Tuple[int, int]: ...
    def verify_detached(self, sig: Span, m: Span, pk: Span, scratch: Optional[Span] = None) -> int: ...


class Signature(Protocol):
    """Byte-level digital signature contract."""
    name: str
    algorithm: str
    public_key_bytes: int
    secret_key_bytes: int
    signature_bytes: int
    def keygen(self) -> Tuple[bytes, bytes]: ...
    def sign(self, secret_key: bytes, message: bytes) -> bytes: ...
    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool: ...
