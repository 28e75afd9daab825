from __future__ import annotations
from typing import Tuple
from sigconform import registry

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519, ed448


def _gen_raw_keypair(private_cls) -> Tuple[bytes, bytes]:
    sk = private_cls.generate()
    sk_bytes = sk.private_bytes(
        serialization.Encoding.Raw,
        serialization.PrivateFormat.Raw,
        serialization.NoEncryption(),
    )
    pk_bytes = sk.public_key().public_bytes(
        serialization.Encoding.Raw,
        serialization.PublicFormat.Raw,
    )
    return pk_bytes, sk_bytes


@registry.register("ed25519")
class Ed25519Signature:
    """Ed25519 adapter using cryptography (raw 32-byte keys, 64-byte signatures)."""
    name = "ed25519"
    algorithm = "Ed25519"
    public_key_bytes = 32
    secret_key_bytes = 32
    signature_bytes = 64
    private_key_cls = ed25519.Ed25519PrivateKey
    public_key_cls = ed25519.Ed25519PublicKey

    def keygen(self) -> Tuple[bytes, bytes]:
        return _gen_raw_keypair(self.private_key_cls)

    def sign(self, secret_key: bytes, message: bytes) -> bytes:
        return self.private_key_cls.from_private_bytes(secret_key).sign(message)

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        pk = self.public_key_cls.from_public_bytes(public_key)
        try:
            pk.verify(signature, message)
        except InvalidSignature:
            return False
        return True


@registry.register("ed448")
class Ed448Signature(Ed25519Signature):
    name = "ed448"
    algorithm = "Ed448"
    public_key_bytes = 57
    secret_key_bytes = 57
    signature_bytes = 114
    private_key_cls = ed448.Ed448PrivateKey
    public_key_cls = ed448.Ed448PublicKey
