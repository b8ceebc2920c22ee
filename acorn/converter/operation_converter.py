# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Convert hand-written GraphQL operations into API functions.

Unlike schema conversion, nothing is synthesized: each operation's variables
become the function parameters and the operation text itself is the query.
Comments above an operation or a variable become its description.
"""

import logging
from typing import Optional

from graphql import GraphQLError, parse
from graphql.language import (
    Location,
    NonNullTypeNode,
    OperationDefinitionNode,
    OperationType,
)

from acorn.converter.descriptions import resolve_description
from acorn.converter.type_mapper import convert_type_node
from acorn.core.errors import OperationParseError
from acorn.core.models import (
    APIQuery,
    FunctionDefinition,
    OperationKind,
    ParametersBuilder,
)
from acorn.tool.factory import APIFunctionFactory
from acorn.tool.function import APIFunction

logger = logging.getLogger(__name__)

_OPERATION_KINDS = {
    OperationType.QUERY: OperationKind.QUERY,
    OperationType.MUTATION: OperationKind.MUTATION,
    OperationType.SUBSCRIPTION: OperationKind.SUBSCRIPTION,
}


def extract_operation(text: str, location: Optional[Location] = None) -> str:
    """Slice one operation out of a document, dropping comments and blank lines."""
    start = location.start if location is not None else 0
    end = location.end if location is not None else len(text)

    lines = []
    for line in text[start:end].split("\n"):
        comment_position = line.find("#")
        if comment_position != -1:
            line = line[:comment_position].strip()
        if line:
            lines.append(line)

    return "\n".join(lines)


class GraphQLOperationConverter:
    """Converts operation documents (``.graphql`` files) into API functions."""

    def __init__(self, function_factory: APIFunctionFactory):
        self.function_factory = function_factory

    def convert_operations(self, operation_definition: str) -> list[APIFunction]:
        """
        Convert every operation in a document, in document order.

        Raises:
            OperationParseError: If the document cannot be parsed, is empty,
                contains a non-operation definition or a subscription
        """
        try:
            document = parse(operation_definition)
        except GraphQLError as e:
            raise OperationParseError(f"Invalid operation definition: {e.message}") from e

        if not document.definitions:
            raise OperationParseError("Operation definition contains no definitions")

        functions = []
        previous_end = 0
        for definition in document.definitions:
            if not isinstance(definition, OperationDefinitionNode):
                raise OperationParseError(
                    f"Expected definition to be an operation, but got: {definition.kind}"
                )

            function_def = self.convert_operation_definition(
                definition, operation_definition, previous_end
            )
            query = APIQuery(extract_operation(operation_definition, definition.loc))
            functions.append(self.function_factory.create(function_def, query))

            if definition.loc is not None:
                previous_end = definition.loc.end

        logger.debug(f"Converted {len(functions)} operations")
        return functions

    def convert_operation_definition(
        self,
        node: OperationDefinitionNode,
        operation_definition: str,
        previous_end: int = 0,
    ) -> FunctionDefinition:
        """Build the function definition for one operation from its variables."""
        kind = _OPERATION_KINDS[node.operation]
        if not kind.is_executable:
            name = node.name.value if node.name else ""
            raise OperationParseError(f"Do not support subscriptions: {name}")

        node_start = node.loc.start if node.loc is not None else None
        description = resolve_description(operation_definition, node_start, previous_end)

        params = ParametersBuilder()
        for variable_def in node.variable_definitions or ():
            variable_start = variable_def.loc.start if variable_def.loc is not None else None
            variable_description = resolve_description(
                operation_definition, variable_start, node_start
            )

            type_node = variable_def.type
            required = isinstance(type_node, NonNullTypeNode)
            argument = convert_type_node(type_node).with_description(variable_description)
            params.add(variable_def.variable.name.value, argument, required=required)

        return FunctionDefinition(
            name=node.name.value if node.name else "",
            description=description,
            parameters=params.build(),
        )
