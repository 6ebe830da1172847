# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Process bootstrap and environment checks."""
