# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Generic value hashing for digestkit.

hash_append turns scalars, strings, sequences, records, mappings and sets
(and any type that opts in through register() or __hash_append__) into a
canonical byte stream, laid out according to a Flavor, and feeds it to any
digest algorithm from digestkit.digest.
"""
