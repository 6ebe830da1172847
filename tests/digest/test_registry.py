# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the algorithm registry.

Registration is global state, so anything a test adds is removed again.
"""

import hmac as stdlib_hmac
from collections.abc import Iterator

import pytest

from digestkit.digest import registry
from digestkit.digest.hmac import Hmac
from digestkit.digest.registry import (
    get_algorithm,
    list_algorithms,
    new_algorithm,
    register_algorithm,
)
from digestkit.digest.sha2 import Sha256


@pytest.fixture()
def _cleanup_registry() -> Iterator[None]:
    before = set(registry._ALGORITHM_REGISTRY)
    yield
    for name in set(registry._ALGORITHM_REGISTRY) - before:
        del registry._ALGORITHM_REGISTRY[name]


class TestBuiltins:
    def test_sha2_family_is_registered(self) -> None:
        assert list_algorithms() == [
            "sha224", "sha256", "sha384", "sha512", "sha512_224", "sha512_256",
        ]

    def test_get_returns_class(self) -> None:
        assert get_algorithm("sha256") is Sha256

    def test_unknown_name_lists_available(self) -> None:
        with pytest.raises(KeyError, match="sha256"):
            get_algorithm("md5")


class TestNewAlgorithm:
    def test_without_key_is_plain(self) -> None:
        assert isinstance(new_algorithm("sha256"), Sha256)

    def test_with_key_is_hmac(self) -> None:
        h = new_algorithm("sha384", b"key")
        assert isinstance(h, Hmac)
        assert h.name == "hmac-sha384"

    def test_seed_key_is_hmac(self) -> None:
        assert isinstance(new_algorithm("sha256", 7), Hmac)

    @pytest.mark.parametrize("key", [0, b""])
    def test_zero_seed_and_empty_key_are_hmac_with_empty_key(self, key: object) -> None:
        h = new_algorithm("sha256", key)  # type: ignore[arg-type]
        assert isinstance(h, Hmac)
        h.absorb(b"m")
        assert h.finalize() == stdlib_hmac.new(b"", b"m", "sha256").digest()


@pytest.mark.usefixtures("_cleanup_registry")
class TestRegistration:
    def test_register_new_algorithm(self) -> None:
        register_algorithm("sha256-alias", Sha256)
        assert "sha256-alias" in list_algorithms()
        assert isinstance(new_algorithm("sha256-alias"), Sha256)

    def test_duplicate_name_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="already registered"):
            register_algorithm("sha256", Sha256)
