# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Exceptions raised while converting schemas and building tools."""


class AcornError(Exception):
    """Base class for all acorn errors."""


class UnsupportedTypeError(AcornError):
    """Raised when a GraphQL type cannot be mapped to a parameter type."""


class TraversalError(AcornError):
    """Raised when an object selection ends up with no fields."""

    def __init__(self, message: str, operation_name: str = ""):
        super().__init__(message)
        self.operation_name = operation_name


class ParseError(AcornError):
    """Raised when schema or operation text cannot be parsed."""


class SchemaParseError(ParseError):
    """The schema definition (SDL) is malformed."""


class OperationParseError(ParseError):
    """An operation document is malformed or unsupported."""


class ToolConstructionError(AcornError):
    """Raised when an executor rejects a function definition."""
