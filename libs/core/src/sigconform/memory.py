"""Guarded, deliberately misaligned buffers.

Every buffer handed to a scheme is carved out of a slightly larger allocation:

    [slack 0-1][leading guard 8][usable span][trailing guard 8]

The slack byte shifts the leading guard onto an odd address. Because the guard
is 8 bytes long the usable span starts on an odd address as well, so an
implementation that assumes aligned input (e.g. for wide vector loads) is
caught, and one that writes outside its span hits a canary.
"""

from __future__ import annotations

import ctypes
from typing import List

from .errors import AllocationFailure, FailureKind, ScenarioFailure
from .guard import GUARD_BYTES, check_guard, write_guard

_SLACK = 1


class Span:
    """Usable region of a :class:`GuardedBuffer`."""

    def __init__(self, owner: "GuardedBuffer", start: int, size: int) -> None:
        self._owner = owner
        self._start = start
        self.size = size

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"Span({self._owner.label!r}, address=0x{self.address:x}, size={self.size})"

    @property
    def label(self) -> str:
        return self._owner.label

    @property
    def address(self) -> int:
        return self._owner._address + self._start

    @property
    def view(self) -> memoryview:
        return self._owner._view[self._start:self._start + self.size]

    def read(self) -> bytes:
        return bytes(self.view)

    def store(self, data: bytes, offset: int = 0) -> None:
        """Copy ``data`` into the allocation, starting ``offset`` bytes into the span.

        Bounded by the allocation rather than the span: a store that runs past
        the span overwrites guard bytes, which is exactly what the harness is
        looking for. The part of a store that falls outside the whole
        allocation is dropped after writing the rest, and the store fails
        with ``CANARY_CORRUPTION``.
        """
        view = self._owner._view
        begin = self._start + offset
        end = begin + len(data)
        lo, hi = max(begin, 0), min(end, len(view))
        if lo < hi:
            view[lo:hi] = data[lo - begin:hi - begin]
        overrun = (lo - begin) + (end - hi) if lo < hi else len(data)
        if overrun:
            raise ScenarioFailure(
                FailureKind.CANARY_CORRUPTION,
                f"ERROR canary overwritten: store of {len(data)} bytes at offset {offset} "
                f"ran {overrun} bytes outside the allocation of {self.label}",
            )

    def head(self, length: int) -> "Span":
        if length < 0 or length > self.size:
            raise ValueError(f"length {length} outside span of {self.size} bytes")
        return Span(self._owner, self._start, length)


class GuardedBuffer:
    def __init__(self, size: int, label: str = "buffer") -> None:
        self.label = label
        self._allocate(size)

    def _allocate(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"{self.label}: size must be non-negative, got {size}")
        total = size + 2 * GUARD_BYTES + _SLACK
        try:
            raw = bytearray(total)
        except MemoryError as exc:
            raise AllocationFailure(f"Allocation of {total} bytes for {self.label} failed") from exc
        anchor = (ctypes.c_uint8 * total).from_buffer(raw)
        self._raw = raw
        self._anchor = anchor
        self._view = memoryview(raw)
        self._address = ctypes.addressof(anchor)
        self._base = 0 if self._address & 1 else 1
        self.size = size
        self.stamp()

    def __enter__(self) -> "GuardedBuffer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()

    @property
    def leading_guard(self) -> int:
        return self._base

    @property
    def trailing_guard(self) -> int:
        return self._base + GUARD_BYTES + self.size

    @property
    def span(self) -> Span:
        return Span(self, self._base + GUARD_BYTES, self.size)

    def stamp(self) -> None:
        write_guard(self._view, self.leading_guard)
        write_guard(self._view, self.trailing_guard)

    def damaged_guards(self) -> List[str]:
        damaged: List[str] = []
        if not check_guard(self._view, self.leading_guard):
            damaged.append("leading")
        if not check_guard(self._view, self.trailing_guard):
            damaged.append("trailing")
        return damaged

    def intact(self) -> bool:
        return not self.damaged_guards()

    def resize(self, size: int) -> None:
        # Fresh allocation: guard offsets follow the new size.
        self.release()
        self._allocate(size)

    def release(self) -> None:
        self._view = None
        self._anchor = None
        self._raw = None
