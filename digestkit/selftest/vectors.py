# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Known-answer self test.

The vectors are the FIPS 180-4 example messages (empty, "abc", and the
two-block messages) plus RFC 4231 test cases 1, 2 and 6 for HMAC, which
cover a short key and a key longer than one block. A digest implementation
that passes all of them is interoperable with every other conforming one.

Each vector is also run through absorb() one byte at a time, so the self
test exercises the buffering path as well as the compression functions.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from digestkit.digest.registry import new_algorithm

_logger = logging.getLogger(__name__)

ABC = b"abc"
TWO_BLOCK_256 = b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq"
TWO_BLOCK_512 = (
    b"abcdefghbcdefghicdefghijdefghijkefghijklfghijklmghijklmn"
    b"hijklmnoijklmnopjklmnopqklmnopqrlmnopqrsmnopqrstnopqrstu"
)
MILLION_A = b"a" * 1_000_000


@dataclass(frozen=True)
class KnownAnswer:
    """One (algorithm, message, key) -> expected digest vector."""

    label: str
    algorithm: str
    message: bytes
    expected_hex: str
    key: Optional[bytes] = None
    long: bool = False


@dataclass(frozen=True)
class SelfTestReport:
    """Outcome of a self-test run."""

    passed: int
    failures: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


DIGEST_VECTORS: tuple[KnownAnswer, ...] = (
    KnownAnswer("empty", "sha224", b"", "d14a028c2a3a2bc9476102bb288234c415a2b01f828ea62ac5b3e42f"),
    KnownAnswer("abc", "sha224", ABC, "23097d223405d8228642a477bda255b32aadbce4bda0b3f7e36c9da7"),
    KnownAnswer(
        "two-block", "sha224", TWO_BLOCK_256,
        "75388b16512776cc5dba5da1fd890150b0c6455cb4f58b1952522525",
    ),
    KnownAnswer(
        "million-a", "sha224", MILLION_A,
        "20794655980c91d8bbb4c1ea97618a4bf03f42581948b2ee4ee7ad67", long=True,
    ),
    KnownAnswer(
        "empty", "sha256", b"",
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
    ),
    KnownAnswer(
        "abc", "sha256", ABC,
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad",
    ),
    KnownAnswer(
        "two-block", "sha256", TWO_BLOCK_256,
        "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1",
    ),
    KnownAnswer(
        "million-a", "sha256", MILLION_A,
        "cdc76e5c9914fb9281a1c7e284d73e67f1809a48a497200e046d39ccc7112cd0", long=True,
    ),
    KnownAnswer(
        "empty", "sha384", b"",
        "38b060a751ac96384cd9327eb1b1e36a21fdb71114be0743"
        "4c0cc7bf63f6e1da274edebfe76f65fbd51ad2f14898b95b",
    ),
    KnownAnswer(
        "abc", "sha384", ABC,
        "cb00753f45a35e8bb5a03d699ac65007272c32ab0eded163"
        "1a8b605a43ff5bed8086072ba1e7cc2358baeca134c825a7",
    ),
    KnownAnswer(
        "two-block", "sha384", TWO_BLOCK_512,
        "09330c33f71147e83d192fc782cd1b4753111b173b3b05d2"
        "2fa08086e3b0f712fcc7c71a557e2db966c3e9fa91746039",
    ),
    KnownAnswer(
        "million-a", "sha384", MILLION_A,
        "9d0e1809716474cb086e834e310a4a1ced149e9c00f24852"
        "7972cec5704c2a5b07b8b3dc38ecc4ebae97ddd87f3d8985",
        long=True,
    ),
    KnownAnswer(
        "empty", "sha512", b"",
        "cf83e1357eefb8bdf1542850d66d8007d620e4050b5715dc83f4a921d36ce9ce"
        "47d0d13c5d85f2b0ff8318d2877eec2f63b931bd47417a81a538327af927da3e",
    ),
    KnownAnswer(
        "abc", "sha512", ABC,
        "ddaf35a193617abacc417349ae20413112e6fa4e89a97ea20a9eeee64b55d39a"
        "2192992a274fc1a836ba3c23a3feebbd454d4423643ce80e2a9ac94fa54ca49f",
    ),
    KnownAnswer(
        "two-block", "sha512", TWO_BLOCK_512,
        "8e959b75dae313da8cf4f72814fc143f8f7779c6eb9f7fa17299aeadb6889018"
        "501d289e4900f7e4331b99dec4b5433ac7d329eeb6dd26545e96e55b874be909",
    ),
    KnownAnswer(
        "million-a", "sha512", MILLION_A,
        "e718483d0ce769644e2e42c7bc15b4638e1f98b13b2044285632a803afa973eb"
        "de0ff244877ea60a4cb0432ce577c31beb009c5c2c49aa2e4eadb217ad8cc09b",
        long=True,
    ),
    KnownAnswer(
        "empty", "sha512_224", b"",
        "6ed0dd02806fa89e25de060c19d3ac86cabb87d6a0ddd05c333b84f4",
    ),
    KnownAnswer(
        "abc", "sha512_224", ABC,
        "4634270f707b6a54daae7530460842e20e37ed265ceee9a43e8924aa",
    ),
    KnownAnswer(
        "two-block", "sha512_224", TWO_BLOCK_512,
        "23fec5bb94d60b23308192640b0c453335d664734fe40e7268674af9",
    ),
    KnownAnswer(
        "empty", "sha512_256", b"",
        "c672b8d1ef56ed28ab87c3622c5114069bdd3ad7b8f9737498d0c01ecef0967a",
    ),
    KnownAnswer(
        "abc", "sha512_256", ABC,
        "53048e2681941ef99b2e29b76b4c7dabe4c2d0c634fc6d46e0e2f13107e7af23",
    ),
    KnownAnswer(
        "two-block", "sha512_256", TWO_BLOCK_512,
        "3928e184fb8690f840da3988121d31be65cb9d3ef83ee6146feac861e19b563a",
    ),
)

_RFC4231_KEY_1 = b"\x0b" * 20
_RFC4231_DATA_1 = b"Hi There"
_RFC4231_KEY_2 = b"Jefe"
_RFC4231_DATA_2 = b"what do ya want for nothing?"
_RFC4231_KEY_6 = b"\xaa" * 131
_RFC4231_DATA_6 = b"Test Using Larger Than Block-Size Key - Hash Key First"

HMAC_VECTORS: tuple[KnownAnswer, ...] = (
    KnownAnswer(
        "rfc4231-1", "sha224", _RFC4231_DATA_1,
        "896fb1128abbdf196832107cd49df33f47b4b1169912ba4f53684b22", key=_RFC4231_KEY_1,
    ),
    KnownAnswer(
        "rfc4231-2", "sha224", _RFC4231_DATA_2,
        "a30e01098bc6dbbf45690f3a7e9e6d0f8bbea2a39e6148008fd05e44", key=_RFC4231_KEY_2,
    ),
    KnownAnswer(
        "rfc4231-6", "sha224", _RFC4231_DATA_6,
        "95e9a0db962095adaebe9b2d6f0dbce2d499f112f2d2b7273fa6870e", key=_RFC4231_KEY_6,
    ),
    KnownAnswer(
        "rfc4231-1", "sha256", _RFC4231_DATA_1,
        "b0344c61d8db38535ca8afceaf0bf12b881dc200c9833da726e9376c2e32cff7",
        key=_RFC4231_KEY_1,
    ),
    KnownAnswer(
        "rfc4231-2", "sha256", _RFC4231_DATA_2,
        "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843",
        key=_RFC4231_KEY_2,
    ),
    KnownAnswer(
        "rfc4231-6", "sha256", _RFC4231_DATA_6,
        "60e431591ee0b67f0d8a26aacbf5b77f8e0bc6213728c5140546040f0ee37f54",
        key=_RFC4231_KEY_6,
    ),
    KnownAnswer(
        "rfc4231-1", "sha384", _RFC4231_DATA_1,
        "afd03944d84895626b0825f4ab46907f15f9dadbe4101ec6"
        "82aa034c7cebc59cfaea9ea9076ede7f4af152e8b2fa9cb6",
        key=_RFC4231_KEY_1,
    ),
    KnownAnswer(
        "rfc4231-2", "sha384", _RFC4231_DATA_2,
        "af45d2e376484031617f78d2b58a6b1b9c7ef464f5a01b47"
        "e42ec3736322445e8e2240ca5e69e2c78b3239ecfab21649",
        key=_RFC4231_KEY_2,
    ),
    KnownAnswer(
        "rfc4231-6", "sha384", _RFC4231_DATA_6,
        "4ece084485813e9088d2c63a041bc5b44f9ef1012a2b588f"
        "3cd11f05033ac4c60c2ef6ab4030fe8296248df163f44952",
        key=_RFC4231_KEY_6,
    ),
    KnownAnswer(
        "rfc4231-1", "sha512", _RFC4231_DATA_1,
        "87aa7cdea5ef619d4ff0b4241a1d6cb02379f4e2ce4ec2787ad0b30545e17cde"
        "daa833b7d6b8a702038b274eaea3f4e4be9d914eeb61f1702e696c203a126854",
        key=_RFC4231_KEY_1,
    ),
    KnownAnswer(
        "rfc4231-2", "sha512", _RFC4231_DATA_2,
        "164b7a7bfcf819e2e395fbe73b56e0a387bd64222e831fd610270cd7ea250554"
        "9758bf75c05a994a6d034f65f8f0e6fdcaeab1a34d4a6b4b636e070a38bce737",
        key=_RFC4231_KEY_2,
    ),
    KnownAnswer(
        "rfc4231-6", "sha512", _RFC4231_DATA_6,
        "80b24263c7c1a3ebb71493c1dd7be8b49b46d1f41b4aeec1121b013783f8f352"
        "6b56d037e05f2598bd0fd2215d6a1e5295e64f73f63f0aec8b915a985d786598",
        key=_RFC4231_KEY_6,
    ),
)


def _digest(vector: KnownAnswer, bytewise: bool) -> str:
    h = new_algorithm(vector.algorithm, vector.key)
    if bytewise:
        for i in range(len(vector.message)):
            h.absorb(vector.message[i : i + 1])
    else:
        h.absorb(vector.message)
    return h.finalize().hex()


def run_selftest(include_long: bool = False) -> SelfTestReport:
    """
    Check every known-answer vector, whole and one byte at a time.

    Args:
        include_long: Also run the one-million-byte vectors (slow in pure
                      Python, a few seconds per algorithm).

    Returns:
        SelfTestReport listing each failing vector by label.
    """
    passed = 0
    failures: list[str] = []

    for vector in DIGEST_VECTORS + HMAC_VECTORS:
        if vector.long and not include_long:
            continue

        kind = "hmac" if vector.key is not None else "digest"
        # Byte-at-a-time over a million bytes adds nothing the short vectors
        # don't already cover.
        modes = (False,) if vector.long else (False, True)

        for bytewise in modes:
            actual = _digest(vector, bytewise)
            label = f"{kind}:{vector.algorithm}:{vector.label}" + (":bytewise" if bytewise else "")
            if actual == vector.expected_hex:
                passed += 1
                continue
            failures.append(label)
            _logger.error(
                "Known-answer mismatch",
                extra={"vector": label, "expected": vector.expected_hex, "actual": actual},
            )

    if failures:
        _logger.error("Self test failed", extra={"passed": passed, "failed": len(failures)})
    else:
        _logger.info("Self test passed", extra={"passed": passed})

    return SelfTestReport(passed=passed, failures=failures)
