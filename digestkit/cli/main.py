# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for digestkit.

Every operation is a subcommand of `digestkit`. The global options
(--config, --log-level) are inherited by every subcommand through
argparse's parent parser mechanism.

Usage:
    digestkit digest --algorithm sha512 release.tar.gz
    digestkit digest --key-hex 0b0b0b0b - < message.bin
    digestkit fingerprint --byte-order big record.yaml
    digestkit checksum dist/
    digestkit verify dist/
    digestkit selftest --long
    digestkit info
"""

import argparse
import sys

from digestkit.cli.commands import (
    handle_checksum,
    handle_digest,
    handle_fingerprint,
    handle_info,
    handle_selftest,
    handle_verify,
)
from digestkit.cli.exit_codes import USER_ERROR
from digestkit.digest.registry import list_algorithms


def _build_global_parser() -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    add_help=False so the parent's -h does not collide with each
    subcommand's own help.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (overrides the config file).",
    )
    return parent


def _build_algorithm_parser() -> argparse.ArgumentParser:
    """Options shared by every command that hashes something."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--algorithm",
        "-a",
        type=str,
        default=None,
        choices=list_algorithms(),
        help="Digest algorithm (overrides the config file, default sha256).",
    )
    parent.add_argument(
        "--key-hex",
        type=str,
        default=None,
        dest="key_hex",
        help="Hex-encoded HMAC key; turns the digest into an HMAC.",
    )
    return parent


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    """Register all subcommands with their handler functions."""
    algo = _build_algorithm_parser()

    digest = subparsers.add_parser(
        "digest", parents=[parent, algo], help="Print the digest of files or stdin."
    )
    digest.add_argument("files", nargs="+", help="Files to hash; '-' reads stdin.")
    digest.set_defaults(func=handle_digest)

    fingerprint = subparsers.add_parser(
        "fingerprint",
        parents=[parent, algo],
        help="Hash the structured value in a YAML/JSON document.",
    )
    fingerprint.add_argument("document", help="YAML or JSON file to fingerprint.")
    fingerprint.add_argument(
        "--byte-order",
        type=str,
        default=None,
        dest="byte_order",
        choices=["little", "big", "native"],
        help="Flavor byte order (overrides the config file).",
    )
    fingerprint.set_defaults(func=handle_fingerprint)

    checksum = subparsers.add_parser(
        "checksum", parents=[parent, algo], help="Write checksum.txt for a directory."
    )
    checksum.add_argument("directory", help="Directory whose files get checksummed.")
    checksum.set_defaults(func=handle_checksum)

    verify = subparsers.add_parser(
        "verify", parents=[parent, algo], help="Verify a directory against checksum.txt."
    )
    verify.add_argument("directory", help="Directory containing checksum.txt.")
    verify.set_defaults(func=handle_verify)

    selftest = subparsers.add_parser(
        "selftest", parents=[parent], help="Run the known-answer test vectors."
    )
    selftest.add_argument(
        "--long",
        action="store_true",
        default=False,
        help="Include the one-million-byte vectors.",
    )
    selftest.set_defaults(func=handle_selftest)

    info = subparsers.add_parser(
        "info", parents=[parent], help="List algorithms and environment info."
    )
    info.set_defaults(func=handle_info)


def main() -> None:
    """
    Main CLI entrypoint. This is what pyproject.toml's [project.scripts] points to.

    If no subcommand is given, we show help and exit with USER_ERROR.
    """
    parent = _build_global_parser()

    root_parser = argparse.ArgumentParser(
        prog="digestkit",
        description="SHA-2 digests, HMAC and deterministic value hashing.",
        parents=[parent],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)

    args = root_parser.parse_args()

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
