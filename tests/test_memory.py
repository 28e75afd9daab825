from __future__ import annotations

import pytest

from sigconform import AllocationFailure, FailureKind, GuardedBuffer, ScenarioFailure
from sigconform import memory
from sigconform.guard import CANARY, GUARD_BYTES


@pytest.mark.parametrize("size", [0, 1, 7, 32, 1024 + 64])
def test_span_starts_at_odd_address_with_intact_guards(size):
    with GuardedBuffer(size, "m") as buf:
        span = buf.span
        assert span.size == size
        assert span.address % 2 == 1
        assert buf.intact()
        assert bytes(buf._view[buf.leading_guard:buf.leading_guard + GUARD_BYTES]) == CANARY
        assert buf.trailing_guard == buf.leading_guard + GUARD_BYTES + size


def test_span_view_is_clipped_but_store_is_not():
    with GuardedBuffer(16, "sig") as buf:
        span = buf.span
        span.store(b"\x11" * 16)
        assert span.read() == b"\x11" * 16
        assert buf.intact()
        span.store(b"\x22", offset=16)
        assert buf.damaged_guards() == ["trailing"]


def test_store_before_span_hits_leading_guard():
    with GuardedBuffer(8, "pk") as buf:
        buf.span.store(b"\x00", offset=-1)
        assert buf.damaged_guards() == ["leading"]


def test_store_outside_allocation_fails_with_canary_corruption():
    with GuardedBuffer(8, "pk") as buf:
        with pytest.raises(ScenarioFailure) as excinfo:
            buf.span.store(b"\x00" * 64)
        assert excinfo.value.kind is FailureKind.CANARY_CORRUPTION
        assert "outside the allocation of pk" in excinfo.value.message
        assert buf.span.read() == b"\x00" * 8
        assert buf.damaged_guards() == ["trailing"]


def test_head_subspan_shares_memory():
    with GuardedBuffer(10, "sm") as buf:
        buf.span.store(b"abcdefghij")
        head = buf.span.head(4)
        assert head.address == buf.span.address
        assert head.read() == b"abcd"
        with pytest.raises(ValueError):
            buf.span.head(11)


def test_resize_recomputes_guard_placement():
    buf = GuardedBuffer(48, "scratch")
    try:
        buf.resize(96)
        assert buf.size == 96
        assert buf.span.size == 96
        assert buf.span.address % 2 == 1
        assert buf.trailing_guard == buf.leading_guard + GUARD_BYTES + 96
        assert buf.intact()
        buf.span.store(b"\x00", offset=96)
        assert not buf.intact()
    finally:
        buf.release()


def test_allocation_failure_is_distinguished(monkeypatch):
    def _exhausted(size):
        raise MemoryError

    monkeypatch.setattr(memory, "bytearray", _exhausted, raising=False)
    with pytest.raises(AllocationFailure):
        GuardedBuffer(32, "pk")


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        GuardedBuffer(-1, "pk")
