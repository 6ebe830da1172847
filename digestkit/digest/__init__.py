# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Streaming digest engine for digestkit.

Pure-Python SHA-2 family built on one shared BlockBuffer, plus HMAC over
any of them:
  - SHA-224, SHA-256             (64-byte blocks, 32-bit words)
  - SHA-384, SHA-512,
    SHA-512/224, SHA-512/256     (128-byte blocks, 64-bit words)
  - HMAC-<any of the above>

Output matches FIPS 180-4 / RFC 6234 byte for byte.
"""
