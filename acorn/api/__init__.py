# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Query executors and argument validation."""

from .executor import APIQueryExecutor, VoidAPIQueryExecutor
from .graphql_executor import (
    APIExecutionError,
    GraphQLAPIExecutor,
    classify_http_error,
)
from .validation import (
    build_arguments_model,
    validate_arguments,
    validate_function,
)

__all__ = [
    "APIExecutionError",
    "APIQueryExecutor",
    "GraphQLAPIExecutor",
    "VoidAPIQueryExecutor",
    "build_arguments_model",
    "classify_http_error",
    "validate_arguments",
    "validate_function",
]
