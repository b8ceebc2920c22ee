# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""API functions (LLM tools) and their factories."""

from .factory import APIFunctionFactory, StandardAPIFunctionFactory
from .function import APIFunction, ToolCall, add_or_override_from_context

__all__ = [
    "APIFunction",
    "APIFunctionFactory",
    "StandardAPIFunctionFactory",
    "ToolCall",
    "add_or_override_from_context",
]
