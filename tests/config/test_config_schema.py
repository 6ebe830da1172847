# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Schema-level validation tests.

These focus on the pydantic models themselves: boundary values, constraint
enforcement, and structural correctness.
"""

import pytest
from pydantic import ValidationError

from digestkit.config.schema import DigestKitConfig, GlobalConfig, HashingConfig


class TestGlobalConfigSchema:
    def test_default_log_level_is_info(self) -> None:
        config = GlobalConfig(config_version="1.0.0")
        assert config.log_level == "INFO"

    def test_config_version_is_required(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig()  # type: ignore[call-arg]

    def test_unknown_field_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig(config_version="1.0.0", seed=42)  # type: ignore[call-arg]


class TestHashingConfigSchema:
    @pytest.mark.parametrize(
        "algorithm",
        ["sha224", "sha256", "sha384", "sha512", "sha512_224", "sha512_256"],
    )
    def test_every_sha2_algorithm_is_accepted(self, algorithm: str) -> None:
        assert HashingConfig(algorithm=algorithm).algorithm == algorithm

    def test_unknown_algorithm_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            HashingConfig(algorithm="sha3_256")

    def test_hex_key_is_decoded(self) -> None:
        config = HashingConfig(hmac_key_hex="4a656665")
        assert config.hmac_key == b"Jefe"

    def test_non_hex_key_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            HashingConfig(hmac_key_hex="not hex")

    def test_default_flavor_is_little_endian(self) -> None:
        assert HashingConfig().flavor.byte_order == "little"


class TestDigestKitConfigSchema:
    def test_requires_global_section(self) -> None:
        with pytest.raises(ValidationError):
            DigestKitConfig()  # type: ignore[call-arg]

    def test_hashing_section_is_optional(self) -> None:
        config = DigestKitConfig.model_validate({"global": {"config_version": "1.0.0"}})
        assert config.hashing == HashingConfig()

    def test_rejects_top_level_unknown_fields(self) -> None:
        with pytest.raises(ValidationError):
            DigestKitConfig.model_validate({
                "global": {"config_version": "1.0.0"},
                "unknown_section": {"something": True},
            })
