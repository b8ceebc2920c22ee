# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Per-step traversal state for the schema converter."""

from dataclasses import dataclass

from graphql import GraphQLObjectType


def combine_arg_names(prefix: str, suffix: str) -> str:
    """Join flat parameter name parts: ``("", "id") -> "id"``, ``("user", "id") -> "user_id"``."""
    return f"{prefix}_{suffix}" if prefix else suffix


def combine_operation_names(prefix: str, suffix: str) -> str:
    return f"{prefix}.{suffix}" if prefix else suffix


@dataclass(frozen=True)
class VisitContext:
    """
    Immutable traversal state.

    Each nested selection derives a new context, so sibling fields always
    see the path as it was before their predecessors were visited.
    """
    schema_definition: str  # SDL text, used to recover comments
    operation_name: str  # Dotted path, for diagnostics
    prefix: str  # Flat parameter name prefix
    num_args: int  # Variables already declared before this step
    path: tuple[GraphQLObjectType, ...] = ()  # Object types on the current path

    def nested(
        self,
        field_name: str,
        object_type: GraphQLObjectType,
        additional_args: int,
    ) -> "VisitContext":
        return VisitContext(
            schema_definition=self.schema_definition,
            operation_name=combine_operation_names(self.operation_name, field_name),
            prefix=combine_arg_names(self.prefix, field_name),
            num_args=self.num_args + additional_args,
            path=(*self.path, object_type),
        )

    def has_visited(self, object_type: GraphQLObjectType) -> bool:
        return any(visited is object_type for visited in self.path)

    @property
    def depth(self) -> int:
        return len(self.path)
