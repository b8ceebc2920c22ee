# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Core models, errors and configuration."""

from .config import (
    APIConfig,
    Config,
    ConverterConfig,
    OperationFilter,
    accept_all,
    ignore_prefix,
)
from .errors import (
    AcornError,
    OperationParseError,
    ParseError,
    SchemaParseError,
    ToolConstructionError,
    TraversalError,
    UnsupportedTypeError,
)
from .models import (
    APIQuery,
    Argument,
    FunctionDefinition,
    FunctionParameters,
    OperationKind,
    ParametersBuilder,
    ValidationResult,
)

__all__ = [
    # Config
    "APIConfig",
    "Config",
    "ConverterConfig",
    "OperationFilter",
    "accept_all",
    "ignore_prefix",
    # Errors
    "AcornError",
    "OperationParseError",
    "ParseError",
    "SchemaParseError",
    "ToolConstructionError",
    "TraversalError",
    "UnsupportedTypeError",
    # Models
    "APIQuery",
    "Argument",
    "FunctionDefinition",
    "FunctionParameters",
    "OperationKind",
    "ParametersBuilder",
    "ValidationResult",
]
