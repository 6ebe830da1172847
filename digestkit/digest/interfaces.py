# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Abstract base class for streaming digest algorithms.

Every algorithm in digestkit, primitive or keyed, obeys the same contract:

- absorb(data) any number of times, with any chunking
- finalize() exactly once, returning digest_size bytes
- copy() to fork the running state (used by unordered-container hashing)

The public methods enforce the one-shot lifecycle. Once finalize() has
run, the instance is spent and every further call raises
DigestFinalizedError. Subclasses only implement the underscored hooks and
never have to think about that rule.

Instances are single-owner and single-threaded. There is no locking.
"""

from abc import ABC, abstractmethod

from digestkit.digest.exceptions import DigestFinalizedError


class DigestAlgorithm(ABC):
    """
    Base class for all digest algorithm implementations.

    Contract:
        absorb(bytes-like) -> None     (repeatable, chunking-invariant)
        finalize() -> bytes            (len == digest_size, callable once)
        copy() -> DigestAlgorithm      (independent snapshot)
    """

    name: str = ""
    block_size: int = 0
    digest_size: int = 0

    _finalized: bool = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    def absorb(self, data: bytes | bytearray | memoryview) -> None:
        """Feed more message bytes into the running state."""
        if self._finalized:
            raise DigestFinalizedError(f"{self.name}: absorb() after finalize()")
        self._absorb(data)

    def finalize(self) -> bytes:
        """
        Apply padding and produce the digest.

        Returns:
            Exactly digest_size bytes.

        Raises:
            DigestFinalizedError: If the instance was already finalized.
        """
        if self._finalized:
            raise DigestFinalizedError(f"{self.name}: finalize() called twice")
        self._finalized = True
        digest = self._finalize()
        assert len(digest) == self.digest_size
        return digest

    def copy(self) -> "DigestAlgorithm":
        """Return an independent instance carrying the same running state."""
        if self._finalized:
            raise DigestFinalizedError(f"{self.name}: copy() after finalize()")
        return self._copy()

    @abstractmethod
    def _absorb(self, data: bytes | bytearray | memoryview) -> None: ...

    @abstractmethod
    def _finalize(self) -> bytes: ...

    @abstractmethod
    def _copy(self) -> "DigestAlgorithm": ...

    def __repr__(self) -> str:
        state = "finalized" if self._finalized else "live"
        return f"<{type(self).__name__} {self.name} {state}>"
