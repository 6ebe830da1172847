# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""YAML configuration: pydantic schemas and the loader."""
