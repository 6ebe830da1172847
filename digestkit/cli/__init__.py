# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Command-line interface: argparse entrypoint and subcommand handlers."""
