# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""checksum.txt generation and verification for directories of files."""
