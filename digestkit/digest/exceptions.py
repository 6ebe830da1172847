# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Custom exceptions for the digest engine and the hash_append dispatcher.

Kept in their own module so callers can catch hashing failures without
pulling in the SHA-2 tables or the dispatch machinery.
"""


class HashError(Exception):
    """Base for all digestkit hashing errors."""


class DigestFinalizedError(HashError):
    """
    Raised when an algorithm instance is used after finalize().

    A digest context produces exactly one result. Absorbing more bytes,
    finalizing a second time, or copying a spent context are all caller bugs.
    """


class HashAppendError(HashError):
    """Raised when a value cannot be turned into a canonical byte stream."""


class UnsupportedTypeError(HashAppendError, TypeError):
    """
    Raised when no hash_append rule exists for a value's type.

    This is detected during the resolution pass, before a single byte is
    handed to the algorithm, so the algorithm's state is left untouched.
    """
