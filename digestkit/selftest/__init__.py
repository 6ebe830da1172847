# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Known-answer vectors and the self-test runner."""
