# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Algorithm registry for digestkit.

Maps the config-level algorithm name ("sha256", "sha512_224", ...) to the
class that implements it. Config files, the CLI and the checksum tools all
select algorithms by string; this is the one place that string gets
resolved.

The registry is populated once at import time with the SHA-2 family and is
deterministic after that. Extra algorithms can be added with
register_algorithm(), which refuses to overwrite an existing name.
"""

import logging
from collections.abc import Callable

from digestkit.digest.hmac import Hmac, KeyMaterial
from digestkit.digest.interfaces import DigestAlgorithm
from digestkit.digest.sha2 import SHA2_ALGORITHMS

logger = logging.getLogger(__name__)

AlgorithmFactory = Callable[[], DigestAlgorithm]

_ALGORITHM_REGISTRY: dict[str, AlgorithmFactory] = {}


def register_algorithm(name: str, factory: AlgorithmFactory) -> None:
    """
    Register a digest algorithm under a unique name.

    Args:
        name: Config-level identifier (e.g. ``"sha256"``).
        factory: Zero-argument callable returning a fresh instance.

    Raises:
        ValueError: If ``name`` is already registered.
    """
    if name in _ALGORITHM_REGISTRY:
        raise ValueError(
            f"Algorithm '{name}' is already registered to {_ALGORITHM_REGISTRY[name]!r}"
        )
    _ALGORITHM_REGISTRY[name] = factory
    logger.debug("registered_algorithm", extra={"algorithm": name})


def get_algorithm(name: str) -> AlgorithmFactory:
    """
    Retrieve a registered algorithm factory by name.

    Raises:
        KeyError: If ``name`` is not registered.
    """
    if name not in _ALGORITHM_REGISTRY:
        available = sorted(_ALGORITHM_REGISTRY.keys())
        raise KeyError(f"Unknown algorithm '{name}'. Available: {available}")
    return _ALGORITHM_REGISTRY[name]


def list_algorithms() -> list[str]:
    """Return sorted list of all registered algorithm names."""
    return sorted(_ALGORITHM_REGISTRY.keys())


def new_algorithm(name: str, key: KeyMaterial = None) -> DigestAlgorithm:
    """
    Build a ready-to-use instance of a registered algorithm.

    With no key this is the plain digest. Any other key is wrapped in HMAC,
    including seed 0 and b"", which both key it with the empty string.
    """
    factory = get_algorithm(name)
    if key is None:
        return factory()
    return Hmac(factory, key)


def _register_builtins() -> None:
    for cls in SHA2_ALGORITHMS:
        register_algorithm(cls.name, cls)


_register_builtins()
