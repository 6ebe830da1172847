# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
digestkit: pure-Python SHA-2 and HMAC, plus deterministic hashing of
structured values.
"""

__version__ = "0.1.0"
