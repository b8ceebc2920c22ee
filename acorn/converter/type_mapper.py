# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Mapping of GraphQL input types to parameter type descriptors."""

from dataclasses import dataclass

from graphql import (
    GraphQLEnumType,
    GraphQLInputType,
    GraphQLList,
    GraphQLNonNull,
    GraphQLOutputType,
    GraphQLScalarType,
)
from graphql.language import ListTypeNode, NamedTypeNode, NonNullTypeNode, TypeNode

from acorn.core.errors import UnsupportedTypeError
from acorn.core.models import Argument

DEFAULT_SCALAR_TYPE = "string"

SCALAR_TYPE_MAP = {
    "Int": "integer",
    "Float": "number",
    "String": "string",
    "Boolean": "boolean",
    "ID": "string",
}


@dataclass(frozen=True)
class UnwrappedType:
    """An input type with its outer non-null wrapper removed."""
    type: GraphQLInputType
    required: bool


def unwrap_required(type_: GraphQLInputType) -> UnwrappedType:
    """Strip one non-null wrapper, remembering whether it was there."""
    if isinstance(type_, GraphQLNonNull):
        return UnwrappedType(type_.of_type, True)
    return UnwrappedType(type_, False)


def unwrap_output_type(type_: GraphQLOutputType) -> GraphQLOutputType:
    """Strip all list and non-null wrappers from an output type."""
    while isinstance(type_, (GraphQLList, GraphQLNonNull)):
        type_ = type_.of_type
    return type_


def scalar_kind(name: str) -> str:
    return SCALAR_TYPE_MAP.get(name, DEFAULT_SCALAR_TYPE)


def convert_input_type(type_: GraphQLInputType) -> Argument:
    """
    Map a (non-null stripped) GraphQL input type to a type descriptor.

    Input objects are rejected here; they are only valid as arguments that
    the schema converter flattens.

    Raises:
        UnsupportedTypeError: For input objects and any other unknown type
    """
    if isinstance(type_, GraphQLScalarType):
        return Argument(type=scalar_kind(type_.name))
    if isinstance(type_, GraphQLEnumType):
        return Argument(type="string", enum=tuple(type_.values.keys()))
    if isinstance(type_, GraphQLList):
        return Argument(
            type="array",
            items=convert_input_type(unwrap_required(type_.of_type).type),
        )
    raise UnsupportedTypeError(f"Unsupported type: {type_}")


def convert_type_node(node: TypeNode) -> Argument:
    """
    Map a type reference from an operation document to a type descriptor.

    Operation documents carry no schema, so every named type that is not a
    built-in scalar falls back to the default kind.
    """
    if isinstance(node, NonNullTypeNode):
        node = node.type
    if isinstance(node, ListTypeNode):
        return Argument(type="array", items=convert_type_node(node.type))
    if isinstance(node, NamedTypeNode):
        return Argument(type=scalar_kind(node.name.value))
    raise UnsupportedTypeError(f"Unexpected type: {node.kind}")
