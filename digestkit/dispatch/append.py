# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
hash_append: feed arbitrary Python values into a digest deterministically.

    h = Sha256()
    hash_append(h, LITTLE_ENDIAN_FLAVOR, {"name": "alice", "tags": ["a", "b"]})
    digest = h.finalize()

The byte stream produced for a value depends only on its content and the
flavor. It never depends on the host byte order (unless the flavor says
"native"), object identity, or set/dict iteration order.

How a value is turned into bytes is decided per type, first match wins:

  1. extension   a function registered with register(), looked up along the
                 type's MRO, or else a __hash_append__(self, h, flavor) method
  2. scalar      bool (1 byte), Enum (its value), int (flavor.int_width bytes,
                 two's complement), float (IEEE-754 binary64, -0.0 folded
                 into 0.0, every NaN folded into one), None (one zero byte)
  3. bytes       bytes / bytearray / byte-format memoryview / str (UTF-8):
                 element count, then the raw bytes. A memoryview of wider
                 items (array("H"), array("d"), ...) is hashed as a
                 sequence of its items, so the flavor decides their order.
  4. composite   dataclasses and named tuples: fields in declaration order,
                 no count. Other sequences: count, then each element.
                 Mappings and sets: unordered (see below).
  5. otherwise   UnsupportedTypeError

Variable-length things always carry their count, which is what keeps
["ab", "c"] and ["a", "bc"] apart.

Unordered containers: each element is hashed into a copy of the current
state, the first 8 bytes of every copy's digest are read little-endian and
summed mod 2^64, then the sum and the count are appended. Addition is
commutative, so the order the container yields elements in is irrelevant.

Resolution happens before hashing. The value is first walked into a tape of
byte runs without touching the algorithm. Only when the whole tree has
resolved is the tape replayed into h.absorb(). An unsupported type deep
inside a value therefore leaves h exactly as it was.
"""

import dataclasses
import enum
import logging
import math
import struct
from collections.abc import Callable, Iterable, Mapping, Sequence, Set
from dataclasses import dataclass
from functools import cache
from typing import Any

from digestkit.digest.exceptions import HashAppendError, UnsupportedTypeError
from digestkit.dispatch.flavor import Flavor
from digestkit.utils.bytes import MASK64, read64le

logger = logging.getLogger(__name__)

# (h, flavor, value) -> None
AppendFn = Callable[[Any, Flavor, Any], None]

_EXTENSIONS: dict[type, AppendFn] = {}

_CANONICAL_NAN = struct.pack(">d", math.nan)

# memoryview formats whose items are single bytes
_BYTE_FORMATS = frozenset({"B", "b", "c"})


# ── Tape ────────────────────────────────────────────────────────────────────


class _Unordered:
    __slots__ = ("elements", "flavor")

    def __init__(self, elements: list["_Tape"], flavor: Flavor) -> None:
        self.elements = elements
        self.flavor = flavor


class _Tape:
    """
    Recording stand-in for a digest algorithm.

    Collects absorbed bytes (merged into runs) and unordered-container
    markers. Extensions receive a tape as their `h` and may call absorb()
    on it directly.
    """

    __slots__ = ("_ops", "_run")

    def __init__(self) -> None:
        self._ops: list[bytes | _Unordered] = []
        self._run = bytearray()

    def absorb(self, data: bytes | bytearray | memoryview) -> None:
        if isinstance(data, memoryview) and not data.c_contiguous:
            data = data.tobytes()
        self._run += data

    def add_unordered(self, op: _Unordered) -> None:
        self._flush()
        self._ops.append(op)

    def _flush(self) -> None:
        if self._run:
            self._ops.append(bytes(self._run))
            self._run = bytearray()

    @property
    def has_unordered(self) -> bool:
        return any(isinstance(op, _Unordered) for op in self._ops)

    def replay(self, h: Any) -> None:
        self._flush()
        for op in self._ops:
            if isinstance(op, _Unordered):
                _replay_unordered(h, op)
            else:
                h.absorb(op)


def _replay_unordered(h: Any, op: _Unordered) -> None:
    total = 0
    for element in op.elements:
        forked = h.copy()
        element.replay(forked)
        total = (total + read64le(forked.finalize())) & MASK64
    h.absorb(total.to_bytes(8, op.flavor.order))
    h.absorb(_encode_size(len(op.elements), op.flavor))


def _run(h: Any, record: Callable[["_Tape"], None]) -> None:
    """Record into h directly if it is already a tape, else record then replay."""
    if isinstance(h, _Tape):
        record(h)
        return
    if not callable(getattr(h, "absorb", None)):
        raise TypeError(f"hash_append needs an object with absorb(), got {type(h).__name__}")
    tape = _Tape()
    record(tape)
    # Unordered containers are hashed into forks of h, which must exist
    # before the first byte is replayed.
    if tape.has_unordered and not (
        callable(getattr(h, "copy", None)) and callable(getattr(h, "finalize", None))
    ):
        raise TypeError(
            f"hash_append of a mapping or set needs copy() and finalize() on "
            f"{type(h).__name__}"
        )
    tape.replay(h)


# ── Encoders ────────────────────────────────────────────────────────────────


def _encode_size(n: int, flavor: Flavor) -> bytes:
    try:
        return n.to_bytes(flavor.size_width, flavor.order)
    except OverflowError as err:
        raise HashAppendError(
            f"Element count {n} does not fit the flavor's {flavor.size_width}-byte size field"
        ) from err


def _encode_int(value: int, flavor: Flavor) -> bytes:
    # Accept the union of the signed and unsigned ranges, like a C integer of
    # that width would; negatives go out as two's complement.
    bits = flavor.int_width * 8
    if value < -(1 << (bits - 1)) or value >= (1 << bits):
        raise HashAppendError(
            f"Integer {value} does not fit the flavor's {flavor.int_width}-byte int width"
        )
    return (value & ((1 << bits) - 1)).to_bytes(flavor.int_width, flavor.order)


def _encode_float(value: float, flavor: Flavor) -> bytes:
    if value == 0.0:
        value = 0.0
    elif math.isnan(value):
        return _CANONICAL_NAN if flavor.order == "big" else _CANONICAL_NAN[::-1]
    return struct.pack("<d" if flavor.order == "little" else ">d", value)


# ── Rules ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class _Rule:
    name: str
    append: Callable[[_Tape, Flavor, Any], None]


def _append(tape: _Tape, flavor: Flavor, value: Any) -> None:
    _resolve(type(value)).append(tape, flavor, value)


def _append_bool(tape: _Tape, flavor: Flavor, value: bool) -> None:
    tape.absorb(b"\x01" if value else b"\x00")


def _append_enum(tape: _Tape, flavor: Flavor, value: enum.Enum) -> None:
    _append(tape, flavor, value.value)


def _append_int(tape: _Tape, flavor: Flavor, value: int) -> None:
    tape.absorb(_encode_int(int(value), flavor))


def _append_float(tape: _Tape, flavor: Flavor, value: float) -> None:
    tape.absorb(_encode_float(float(value), flavor))


def _append_none(tape: _Tape, flavor: Flavor, value: None) -> None:
    tape.absorb(b"\x00")


def _is_byte_view(view: memoryview) -> bool:
    return view.format.lstrip("@=<>!") in _BYTE_FORMATS


def _append_bytes(tape: _Tape, flavor: Flavor, value: bytes | bytearray | memoryview) -> None:
    if isinstance(value, memoryview):
        if not _is_byte_view(value):
            _append_typed_view(tape, flavor, value)
            return
        value = value.cast("B") if value.c_contiguous else value.tobytes()
    tape.absorb(_encode_size(len(value), flavor))
    tape.absorb(value)


def _append_typed_view(tape: _Tape, flavor: Flavor, value: memoryview) -> None:
    # The raw buffer holds words in host order, so go through the items.
    try:
        items = value.tolist()
    except NotImplementedError as err:
        raise UnsupportedTypeError(
            f"No hash_append rule for memoryview format {value.format!r}"
        ) from err
    if value.ndim == 0:
        _append(tape, flavor, items)
    else:
        _append_sequence(tape, flavor, items)


def _append_str(tape: _Tape, flavor: Flavor, value: str) -> None:
    _append_bytes(tape, flavor, value.encode("utf-8", "surrogatepass"))


def _append_dataclass(tape: _Tape, flavor: Flavor, value: Any) -> None:
    # Fields excluded from comparison are excluded from the hash too, so
    # equal instances always hash equal.
    for f in dataclasses.fields(value):
        if f.compare:
            _append(tape, flavor, getattr(value, f.name))


def _append_record(tape: _Tape, flavor: Flavor, value: Iterable[Any]) -> None:
    for item in value:
        _append(tape, flavor, item)


def _append_sequence(tape: _Tape, flavor: Flavor, value: Sequence[Any]) -> None:
    tape.absorb(_encode_size(len(value), flavor))
    for item in value:
        _append(tape, flavor, item)


def _record_unordered(tape: _Tape, flavor: Flavor, items: Iterable[Any]) -> None:
    elements: list[_Tape] = []
    for item in items:
        element = _Tape()
        _append(element, flavor, item)
        elements.append(element)
    tape.add_unordered(_Unordered(elements, flavor))


def _append_mapping(tape: _Tape, flavor: Flavor, value: Mapping[Any, Any]) -> None:
    elements: list[_Tape] = []
    for key, item in value.items():
        element = _Tape()
        _append(element, flavor, key)
        _append(element, flavor, item)
        elements.append(element)
    tape.add_unordered(_Unordered(elements, flavor))


def _append_set(tape: _Tape, flavor: Flavor, value: Set[Any]) -> None:
    _record_unordered(tape, flavor, value)


def _method_rule(tape: _Tape, flavor: Flavor, value: Any) -> None:
    value.__hash_append__(tape, flavor)


def _is_namedtuple(tp: type) -> bool:
    return issubclass(tp, tuple) and hasattr(tp, "_fields")


@cache
def _resolve(tp: type) -> _Rule:
    for base in tp.__mro__:
        if base in _EXTENSIONS:
            return _Rule("extension", _EXTENSIONS[base])
    if callable(getattr(tp, "__hash_append__", None)):
        return _Rule("extension", _method_rule)

    if issubclass(tp, bool):
        return _Rule("scalar", _append_bool)
    if issubclass(tp, enum.Enum):
        return _Rule("scalar", _append_enum)
    if issubclass(tp, int):
        return _Rule("scalar", _append_int)
    if issubclass(tp, float):
        return _Rule("scalar", _append_float)
    if tp is type(None):
        return _Rule("scalar", _append_none)

    if issubclass(tp, (bytes, bytearray, memoryview)):
        return _Rule("bytes", _append_bytes)
    if issubclass(tp, str):
        return _Rule("bytes", _append_str)

    if dataclasses.is_dataclass(tp):
        return _Rule("record", _append_dataclass)
    if _is_namedtuple(tp):
        return _Rule("record", _append_record)
    if issubclass(tp, Mapping):
        return _Rule("unordered", _append_mapping)
    if issubclass(tp, Set):
        return _Rule("unordered", _append_set)
    if issubclass(tp, Sequence):
        return _Rule("sequence", _append_sequence)

    raise UnsupportedTypeError(
        f"No hash_append rule for type {tp.__module__}.{tp.__qualname__}; "
        f"register one with digestkit.dispatch.append.register() "
        f"or define __hash_append__(self, h, flavor)"
    )


# ── Public API ──────────────────────────────────────────────────────────────


def register(cls: type, func: AppendFn | None = None) -> Any:
    """
    Register a user-defined hash_append rule for `cls` and its subclasses.

    Registered functions take priority over __hash_append__ methods and
    over every built-in rule. Usable directly or as a decorator:

        @register(Point)
        def _(h, flavor, p):
            hash_append(h, flavor, p.x)
            hash_append(h, flavor, p.y)

    The `h` handed to the function supports absorb() and can be passed to
    any hash_append* helper. It is not the live algorithm, so copy() and
    finalize() are not available on it.
    """
    if func is None:

        def decorator(f: AppendFn) -> AppendFn:
            register(cls, f)
            return f

        return decorator

    _EXTENSIONS[cls] = func
    _resolve.cache_clear()
    logger.debug("registered_hash_append", extra={"type": cls.__qualname__})
    return func


def unregister(cls: type) -> None:
    """Remove a rule added with register(). Unknown types are ignored."""
    if _EXTENSIONS.pop(cls, None) is not None:
        _resolve.cache_clear()


def dispatch_rule_for(value: Any) -> str:
    """
    Name the rule hash_append would use for `value`.

    One of "extension", "scalar", "bytes", "record", "sequence",
    "unordered".

    Raises:
        UnsupportedTypeError: If no rule applies.
    """
    rule = _resolve(type(value)).name
    if rule == "bytes" and isinstance(value, memoryview) and not _is_byte_view(value):
        return "sequence"
    return rule


def hash_append(h: Any, flavor: Flavor, value: Any) -> None:
    """
    Feed the canonical byte representation of `value` into `h`.

    Finalizing is left to the caller, so several values can be appended to
    the same algorithm in sequence.

    Args:
        h: Any DigestAlgorithm (plain or HMAC), or the `h` an extension received.
        flavor: Serialization policy.
        value: The value to hash.

    Raises:
        UnsupportedTypeError: Some part of `value` has no rule. `h` is untouched.
        HashAppendError: A scalar or count does not fit the flavor's widths.
    """
    _run(h, lambda tape: _append(tape, flavor, value))


def hash_append_size(h: Any, flavor: Flavor, n: int) -> None:
    """Append an element count using the flavor's size width."""
    _run(h, lambda tape: tape.absorb(_encode_size(n, flavor)))


def hash_append_range(h: Any, flavor: Flavor, items: Iterable[Any]) -> None:
    """Append each element in order, without a count."""
    _run(h, lambda tape: _append_record(tape, flavor, items))


def hash_append_sized_range(h: Any, flavor: Flavor, items: Iterable[Any]) -> None:
    """Append the element count, then each element in order."""
    _run(h, lambda tape: _append_sequence(tape, flavor, list(items)))


def hash_append_unordered_range(h: Any, flavor: Flavor, items: Iterable[Any]) -> None:
    """Append elements so that their order does not affect the result."""
    _run(h, lambda tape: _record_unordered(tape, flavor, items))
