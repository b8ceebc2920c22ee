# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Acorn - GraphQL APIs as LLM tools.

Converts GraphQL schemas and operation documents into function definitions
that an LLM can call, each bound to the query that fulfils the call.

Submodules:
- core: Models, errors and configuration
- converter: Schema traversal and operation parsing
- tool: API functions (tools), context keys and factories
- api: Query executors and argument validation

Main classes:
- GraphQLSchemaConverter: Schema (SDL or introspection) -> functions
- GraphQLOperationConverter: Operation document -> functions
- APIFunction: Validates arguments and executes its query
"""

from acorn.api import (
    APIExecutionError,
    APIQueryExecutor,
    GraphQLAPIExecutor,
    VoidAPIQueryExecutor,
)
from acorn.converter import (
    ConversionResult,
    GraphQLOperationConverter,
    GraphQLSchemaConverter,
)
from acorn.core import (
    AcornError,
    APIConfig,
    APIQuery,
    Argument,
    Config,
    ConverterConfig,
    FunctionDefinition,
    FunctionParameters,
    OperationKind,
    OperationParseError,
    ParseError,
    SchemaParseError,
    ToolConstructionError,
    TraversalError,
    UnsupportedTypeError,
    ValidationResult,
    accept_all,
    ignore_prefix,
)
from acorn.tool import (
    APIFunction,
    APIFunctionFactory,
    StandardAPIFunctionFactory,
    ToolCall,
)

__version__ = "0.1.0"

__all__ = [
    # API
    "APIExecutionError",
    "APIQueryExecutor",
    "GraphQLAPIExecutor",
    "VoidAPIQueryExecutor",
    # Conversion
    "ConversionResult",
    "GraphQLOperationConverter",
    "GraphQLSchemaConverter",
    # Core
    "AcornError",
    "APIConfig",
    "APIQuery",
    "Argument",
    "Config",
    "ConverterConfig",
    "FunctionDefinition",
    "FunctionParameters",
    "OperationKind",
    "OperationParseError",
    "ParseError",
    "SchemaParseError",
    "ToolConstructionError",
    "TraversalError",
    "UnsupportedTypeError",
    "ValidationResult",
    "accept_all",
    "ignore_prefix",
    # Tools
    "APIFunction",
    "APIFunctionFactory",
    "StandardAPIFunctionFactory",
    "ToolCall",
]
