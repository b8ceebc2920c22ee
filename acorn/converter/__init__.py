# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Conversion of GraphQL schemas and operation documents into API functions."""

from .descriptions import resolve_description
from .operation_converter import GraphQLOperationConverter, extract_operation
from .schema_converter import ConversionResult, GraphQLSchemaConverter, VisitResult
from .signatures import render_argument_type, render_input_field_type
from .type_mapper import (
    DEFAULT_SCALAR_TYPE,
    SCALAR_TYPE_MAP,
    UnwrappedType,
    convert_input_type,
    convert_type_node,
    unwrap_output_type,
    unwrap_required,
)
from .visit_context import VisitContext, combine_arg_names

__all__ = [
    # Schema conversion
    "ConversionResult",
    "GraphQLSchemaConverter",
    "VisitContext",
    "VisitResult",
    "combine_arg_names",
    # Operation conversion
    "GraphQLOperationConverter",
    "extract_operation",
    # Helpers
    "DEFAULT_SCALAR_TYPE",
    "SCALAR_TYPE_MAP",
    "UnwrappedType",
    "convert_input_type",
    "convert_type_node",
    "render_argument_type",
    "render_input_field_type",
    "resolve_description",
    "unwrap_output_type",
    "unwrap_required",
]
