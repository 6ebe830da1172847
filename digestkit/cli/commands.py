# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the digestkit CLI.

Each function here corresponds to one CLI subcommand and returns an exit
code from digestkit.cli.exit_codes. Results (digest lines, fingerprints,
the algorithm table) go to stdout; everything else goes through the
structured logger on stderr.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from digestkit.cli.exit_codes import (
    CONFIG_ERROR,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
    VALIDATION_ERROR,
)
from digestkit.config.exceptions import ConfigError
from digestkit.config.loader import load_config, read_yaml_document
from digestkit.config.schema import DigestKitConfig
from digestkit.digest.exceptions import HashAppendError
from digestkit.dispatch.flavor import Flavor
from digestkit.logging.logger import get_logger
from digestkit.runtime.bootstrap import bootstrap

DEFAULT_CONFIG_VERSION = "1.0.0"


def _load_and_bootstrap(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, DigestKitConfig, logging.Logger]:
    """
    The shared setup that every command needs: load config, run bootstrap.

    Without --config the built-in defaults are used. --log-level on the
    command line beats the config file's log_level.

    Returns a tuple of (exit_code, config, logger). If exit_code is not
    SUCCESS, the caller should return it immediately.
    """
    logger = get_logger(f"digestkit.cli.{command_name}", log_level=args.log_level or "INFO")
    config = DigestKitConfig.model_validate({"global": {"config_version": DEFAULT_CONFIG_VERSION}})

    if args.config is not None:
        try:
            config = load_config(Path(args.config))
        except ConfigError as err:
            logger.error(
                "Configuration error",
                extra={"command": command_name, "error": str(err)},
            )
            return CONFIG_ERROR, config, logger
    else:
        logger.debug("No config provided, running with defaults", extra={"command": command_name})

    global_config = config.global_config
    if args.log_level is not None:
        global_config = global_config.model_copy(update={"log_level": args.log_level})
    else:
        logger = get_logger(f"digestkit.cli.{command_name}", log_level=global_config.log_level)

    bootstrap(global_config)
    return SUCCESS, config, logger


def _resolve_algorithm(args: argparse.Namespace, config: DigestKitConfig) -> str:
    return args.algorithm or config.hashing.algorithm


def _resolve_key(args: argparse.Namespace, config: DigestKitConfig) -> Optional[bytes]:
    """CLI --key-hex wins over the config's hmac_key_hex. Raises ValueError on bad hex."""
    if getattr(args, "key_hex", None) is not None:
        return bytes.fromhex(args.key_hex)
    return config.hashing.hmac_key


def _resolve_flavor(args: argparse.Namespace, config: DigestKitConfig) -> Flavor:
    flavor = config.hashing.flavor
    if getattr(args, "byte_order", None) is None:
        return flavor
    return Flavor(
        byte_order=args.byte_order,
        size_width=flavor.size_width,
        int_width=flavor.int_width,
    )


def handle_digest(args: argparse.Namespace) -> int:
    """Print `<hexdigest>  <name>` for every file (or stdin for '-')."""
    exit_code, config, logger = _load_and_bootstrap(args, "digest")
    if exit_code != SUCCESS:
        return exit_code

    from digestkit.utils.hashing import compute_digest, compute_digest_stream

    try:
        algorithm = _resolve_algorithm(args, config)
        key = _resolve_key(args, config)
    except ValueError as err:
        logger.error("Invalid HMAC key", extra={"error": str(err)})
        return USER_ERROR

    status = SUCCESS
    for name in args.files:
        try:
            if name == "-":
                digest = compute_digest_stream(sys.stdin.buffer, algorithm, key)
            else:
                digest = compute_digest(Path(name), algorithm, key)
        except OSError as err:
            logger.error("Cannot read input", extra={"file": name, "error": str(err)})
            status = USER_ERROR
            continue
        except Exception as err:
            logger.error("Digest failed", extra={"file": name, "error": str(err)}, exc_info=True)
            return RUNTIME_ERROR

        sys.stdout.write(f"{digest}  {name}\n")
        logger.debug("Digest computed", extra={"file": name, "algorithm": algorithm})

    return status


def handle_fingerprint(args: argparse.Namespace) -> int:
    """Hash the value stored in a YAML/JSON document with hash_append."""
    exit_code, config, logger = _load_and_bootstrap(args, "fingerprint")
    if exit_code != SUCCESS:
        return exit_code

    from digestkit.dispatch.result import fingerprint

    try:
        algorithm = _resolve_algorithm(args, config)
        key = _resolve_key(args, config)
        flavor = _resolve_flavor(args, config)
        value = read_yaml_document(Path(args.document))
    except (ValueError, ConfigError) as err:
        logger.error("Cannot load document", extra={"document": args.document, "error": str(err)})
        return USER_ERROR

    try:
        result = fingerprint(value, algorithm, flavor, key)
    except HashAppendError as err:
        logger.error("Document cannot be hashed", extra={"document": args.document, "error": str(err)})
        return USER_ERROR
    except Exception as err:
        logger.error("Fingerprint failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR

    sys.stdout.write(f"{result}  {args.document}\n")
    logger.info(
        "Fingerprint computed",
        extra={"document": args.document, "algorithm": algorithm, "byte_order": flavor.byte_order},
    )
    return SUCCESS


def handle_checksum(args: argparse.Namespace) -> int:
    """Write checksum.txt for every file in a directory."""
    exit_code, config, logger = _load_and_bootstrap(args, "checksum")
    if exit_code != SUCCESS:
        return exit_code

    from digestkit.checksums.integrity import generate_checksums, write_checksum_file

    directory = Path(args.directory)
    if not directory.is_dir():
        logger.error("Directory not found", extra={"path": str(directory)})
        return USER_ERROR

    try:
        algorithm = _resolve_algorithm(args, config)
        key = _resolve_key(args, config)
    except ValueError as err:
        logger.error("Invalid HMAC key", extra={"error": str(err)})
        return USER_ERROR

    try:
        checksums = generate_checksums(directory, algorithm, key)
        path = write_checksum_file(directory, checksums)
    except Exception as err:
        logger.error("Checksum generation failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR

    logger.info("Checksums written", extra={"path": str(path), "entries": len(checksums)})
    return SUCCESS


def handle_verify(args: argparse.Namespace) -> int:
    """Check a directory against its checksum.txt."""
    exit_code, config, logger = _load_and_bootstrap(args, "verify")
    if exit_code != SUCCESS:
        return exit_code

    from digestkit.checksums.integrity import verify_checksums

    directory = Path(args.directory)
    if not directory.is_dir():
        logger.error("Directory not found", extra={"path": str(directory)})
        return USER_ERROR

    try:
        algorithm = _resolve_algorithm(args, config)
        key = _resolve_key(args, config)
    except ValueError as err:
        logger.error("Invalid HMAC key", extra={"error": str(err)})
        return USER_ERROR

    try:
        result = verify_checksums(directory, algorithm, key)
    except Exception as err:
        logger.error("Verification failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR

    for filename in result.mismatches:
        sys.stdout.write(f"{filename}: FAILED\n")
    for filename in result.missing_files:
        sys.stdout.write(f"{filename}: MISSING\n")
    for error in result.errors:
        logger.error("Verification error", extra={"error": error})

    if not result.is_valid:
        return VALIDATION_ERROR

    logger.info("Verification complete", extra={"checked_count": result.checked_count})
    return SUCCESS


def handle_selftest(args: argparse.Namespace) -> int:
    """Run the known-answer vectors."""
    exit_code, _, logger = _load_and_bootstrap(args, "selftest")
    if exit_code != SUCCESS:
        return exit_code

    from digestkit.selftest.vectors import run_selftest

    try:
        report = run_selftest(include_long=args.long)
    except Exception as err:
        logger.error("Self test crashed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR

    for label in report.failures:
        sys.stdout.write(f"{label}: FAILED\n")
    sys.stdout.write(f"{report.passed} passed, {len(report.failures)} failed\n")

    return SUCCESS if report.ok else VALIDATION_ERROR


def handle_info(args: argparse.Namespace) -> int:
    """List the available algorithms and describe the environment."""
    logger = get_logger("digestkit.cli.info", log_level=args.log_level or "INFO")

    from digestkit import __version__
    from digestkit.digest.registry import get_algorithm, list_algorithms
    from digestkit.runtime.environment import get_system_info

    for name in list_algorithms():
        instance = get_algorithm(name)()
        sys.stdout.write(f"{name:<12} block={instance.block_size:<4} digest={instance.digest_size}\n")

    system_info = get_system_info()
    logger.info(
        "System information",
        extra={
            "digestkit_version": __version__,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "byte_order": system_info.byte_order,
            "config": args.config,
        },
    )
    return SUCCESS
