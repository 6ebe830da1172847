# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Incremental block buffering shared by every Merkle-Damgard algorithm.

The caller can hand us bytes in any chunk sizes it likes. BlockBuffer makes
sure the compression function still sees the message as a clean sequence of
full blocks, in arrival order, exactly once each:

  1. If a partial block is pending, top it up first. If that fills it,
     compress it and zero the buffer.
  2. While a whole block is left in the input, compress it straight out of
     the caller's memory (a memoryview slice, no copy).
  3. Stash whatever tail is left (always shorter than one block).

The total byte counter is bumped by the full input length before any of
that happens, so `buffered == total % block_size` holds at every return.
That equality is the buffer's one invariant; it is asserted on entry and
exit because a violation means this module is broken, not the caller.

Splitting an input into any sequence of absorb() calls leaves exactly the
same state as one absorb() of the concatenation.
"""

from collections.abc import Callable

from digestkit.utils.bytes import MASK64

# (block, state) -> new state
CompressFn = Callable[[bytes | bytearray | memoryview, list[int]], list[int]]


class BlockBuffer:
    """
    Streaming buffer plus chaining state for one digest computation.

    The algorithm-specific part is injected: block size, the compression
    function and the initial state words. Nothing here knows about SHA-2.
    """

    __slots__ = ("block_size", "state", "_compress", "_buffer", "_m", "_n")

    def __init__(self, block_size: int, compress: CompressFn, state: list[int]) -> None:
        self.block_size = block_size
        self.state = list(state)
        self._compress = compress
        self._buffer = bytearray(block_size)
        self._m = 0  # bytes pending in _buffer
        self._n = 0  # total bytes absorbed, mod 2^64

    @property
    def buffered(self) -> int:
        return self._m

    @property
    def total(self) -> int:
        return self._n

    def absorb(self, data: bytes | bytearray | memoryview) -> None:
        block_size = self.block_size
        assert self._m == self._n % block_size

        view = memoryview(data)
        if not view.c_contiguous:
            view = memoryview(view.tobytes())
        view = view.cast("B")
        n = len(view)
        if n == 0:
            return

        self._n = (self._n + n) & MASK64
        pos = 0

        if self._m > 0:
            k = min(block_size - self._m, n)
            self._buffer[self._m : self._m + k] = view[:k]
            pos = k
            self._m += k

            if self._m < block_size:
                assert self._m == self._n % block_size
                return

            self.state = self._compress(self._buffer, self.state)
            self._m = 0
            self._buffer[:] = bytes(block_size)

        while n - pos >= block_size:
            self.state = self._compress(view[pos : pos + block_size], self.state)
            pos += block_size

        rest = n - pos
        if rest > 0:
            self._buffer[:rest] = view[pos:]
            self._m = rest

        assert self._m == self._n % block_size

    def pad(self, length_size: int) -> None:
        """
        Apply FIPS 180-4 padding and the big-endian message bit length.

        Appends 0x80, then zeros, then the bit length encoded in
        `length_size` bytes (8 for 64-byte blocks, 16 for 128-byte blocks,
        where the upper half is always zero). The final block(s) are
        compressed before this returns.

        Args:
            length_size: Width in bytes of the trailing length field.
        """
        block_size = self.block_size
        bit_length = ((self._n * 8) & MASK64).to_bytes(length_size, "big")

        tail = block_size - length_size
        k = tail - self._m if self._m < tail else block_size + tail - self._m

        self.absorb(b"\x80" + bytes(k - 1))
        self.absorb(bit_length)
        assert self._m == 0

    def copy(self) -> "BlockBuffer":
        clone = BlockBuffer(self.block_size, self._compress, self.state)
        clone._buffer[:] = self._buffer
        clone._m = self._m
        clone._n = self._n
        return clone
