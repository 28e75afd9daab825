from __future__ import annotations

import pytest

from sigconform import ByteSchemeBinding, GuardedBuffer, HarnessConfig, registry, run_suite
from sigconform_eddsa.eddsa_adapter import Ed25519Signature, Ed448Signature


def test_adapters_are_registered():
    items = registry.list()
    assert items["ed25519"] is Ed25519Signature
    assert items["ed448"] is Ed448Signature


@pytest.mark.parametrize("adapter_cls", [Ed25519Signature, Ed448Signature])
def test_full_suite_passes(adapter_cls):
    report = run_suite(ByteSchemeBinding(adapter_cls()), HarnessConfig(iterations=2))
    assert report.exit_code == 0, [r.detail for r in report.results]
    assert report.algname == adapter_cls.algorithm


def test_keys_and_signature_match_declared_sizes():
    adapter = Ed25519Signature()
    pk, sk = adapter.keygen()
    assert len(pk) == adapter.public_key_bytes
    assert len(sk) == adapter.secret_key_bytes
    assert len(adapter.sign(sk, b"hello")) == adapter.signature_bytes
    assert adapter.verify(pk, b"hello", adapter.sign(sk, b"hello"))
    assert not adapter.verify(pk, b"hellO", adapter.sign(sk, b"hello"))


def test_zero_message_opens_and_wrong_key_rejects():
    binding = ByteSchemeBinding(Ed25519Signature())
    p = binding.params
    mlen = 1024
    with GuardedBuffer(p.public_key_bytes, "pk") as pk, GuardedBuffer(p.secret_key_bytes, "sk") as sk, \
            GuardedBuffer(p.public_key_bytes, "pk2") as pk2, GuardedBuffer(p.secret_key_bytes, "sk2") as sk2, \
            GuardedBuffer(mlen, "m") as m, GuardedBuffer(mlen + p.signature_bytes, "sm") as sm:
        assert binding.keypair(pk.span, sk.span) == 0
        status, smlen = binding.sign(sm.span, m.span, sk.span)
        assert status == 0
        assert smlen == mlen + p.signature_bytes
        signed = sm.span.head(smlen).read()

        status, opened = binding.open(sm.span, sm.span.head(smlen), pk.span)
        assert (status, opened) == (0, mlen)
        assert sm.span.head(mlen).read() == bytes(mlen)

        sm.span.store(signed)
        assert binding.keypair(pk2.span, sk2.span) == 0
        status, _ = binding.open(sm.span, sm.span.head(smlen), pk2.span)
        assert status < 0

        for buf in (pk, sk, pk2, sk2, m, sm):
            assert buf.intact()
