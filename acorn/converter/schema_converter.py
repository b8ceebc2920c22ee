# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Convert a GraphQL schema into callable API functions.

Every root query and mutation field becomes one function. The converter
walks the field's arguments and return type, flattening input object
arguments into top-level parameters and selecting every reachable scalar
field (bounded by cycle detection and ``max_depth``).

Usage:
    from acorn.converter import GraphQLSchemaConverter
    from acorn.tool import StandardAPIFunctionFactory

    converter = GraphQLSchemaConverter(StandardAPIFunctionFactory(executor))
    functions = converter.convert_schema(schema_text)
"""

import json
import logging
from dataclasses import dataclass
from typing import Optional

from graphql import (
    GraphQLError,
    GraphQLField,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLUnionType,
    build_client_schema,
    build_schema,
    get_introspection_query,
    print_schema,
)
from graphql.language import Node

from acorn.converter.descriptions import resolve_description
from acorn.converter.signatures import render_argument_type, render_input_field_type
from acorn.converter.type_mapper import (
    UnwrappedType,
    convert_input_type,
    unwrap_output_type,
    unwrap_required,
)
from acorn.converter.visit_context import (
    VisitContext,
    combine_arg_names,
    combine_operation_names,
)
from acorn.core.config import ConverterConfig, OperationFilter
from acorn.core.errors import (
    SchemaParseError,
    TraversalError,
    UnsupportedTypeError,
)
from acorn.core.models import (
    APIQuery,
    FunctionDefinition,
    OperationKind,
    ParametersBuilder,
)
from acorn.tool.factory import APIFunctionFactory
from acorn.tool.function import APIFunction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisitResult:
    """Text fragments produced by visiting one field."""
    success: bool
    query_params: str = ""  # Variable declarations for the operation header
    query_body: str = ""  # Selection with argument bindings
    num_args: int = 0  # Variables declared in this subtree


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of converting one root field."""
    operation: OperationKind
    name: str
    function: Optional[APIFunction] = None
    error: Optional[Exception] = None

    @property
    def success(self) -> bool:
        return self.function is not None


def _loc_start(node: Optional[Node]) -> Optional[int]:
    if node is None or node.loc is None:
        return None
    return node.loc.start


def _clean_description(description: Optional[str]) -> Optional[str]:
    return description.strip() if description is not None else None


class GraphQLSchemaConverter:
    """Converts the query and mutation fields of a schema into API functions."""

    def __init__(
        self,
        function_factory: APIFunctionFactory,
        config: Optional[ConverterConfig] = None,
        operation_filter: Optional[OperationFilter] = None,
    ):
        """
        Initialize the converter.

        Args:
            function_factory: Factory binding definitions to an executor
            config: Traversal settings (depth limit, ignored prefixes)
            operation_filter: Overrides the filter derived from ``config``
        """
        self.function_factory = function_factory
        self.config = config or ConverterConfig()
        self.operation_filter = operation_filter or self.config.operation_filter()

    async def convert_schema_from_uri(self) -> list[APIFunction]:
        """Introspect the executor's endpoint and convert the resulting schema."""
        query = APIQuery(get_introspection_query())
        response = await self.function_factory.api_executor.execute_query(query)

        try:
            introspection = json.loads(response)
            if "data" in introspection:
                introspection = introspection["data"]
            schema = build_client_schema(introspection)
        except (json.JSONDecodeError, GraphQLError, TypeError) as e:
            raise SchemaParseError(f"Invalid introspection result: {e}") from e

        return self.convert_schema(print_schema(schema))

    def convert_schema(self, schema_definition: str) -> list[APIFunction]:
        """
        Convert every accepted query and mutation field into a function.

        Fields that cannot be converted are logged and left out.
        """
        return [
            result.function
            for result in self.convert_schema_results(schema_definition)
            if result.success
        ]

    def convert_schema_results(self, schema_definition: str) -> list[ConversionResult]:
        """
        Convert a schema, reporting one result per accepted root field.

        Raises:
            SchemaParseError: If the SDL cannot be parsed or is invalid
        """
        try:
            schema = build_schema(schema_definition)
        except (GraphQLError, TypeError) as e:
            raise SchemaParseError(f"Invalid schema definition: {e}") from e

        results: list[ConversionResult] = []
        roots = [
            (OperationKind.QUERY, schema.query_type),
            (OperationKind.MUTATION, schema.mutation_type),
        ]
        for kind, root_type in roots:
            if root_type is None:
                continue
            for field_name, field in root_type.fields.items():
                if not self.operation_filter(kind.value, field_name):
                    logger.debug(f"Skipping {kind.value} '{field_name}': rejected by operation filter")
                    continue
                results.append(self._convert_operation(kind, field_name, field, schema_definition))

        return results

    def _convert_operation(
        self,
        kind: OperationKind,
        field_name: str,
        field: GraphQLField,
        schema_definition: str,
    ) -> ConversionResult:
        try:
            function = self.convert_to_function(kind, field_name, field, schema_definition)
        except (UnsupportedTypeError, TraversalError) as e:
            logger.error(f"Error converting {kind.value}: {field_name}: {e}")
            return ConversionResult(kind, field_name, error=e)
        return ConversionResult(kind, field_name, function=function)

    def convert_to_function(
        self,
        kind: OperationKind,
        field_name: str,
        field: GraphQLField,
        schema_definition: str,
    ) -> APIFunction:
        """Convert a single root field into a function with its query."""
        params = ParametersBuilder()
        context = VisitContext(
            schema_definition=schema_definition,
            operation_name=combine_operation_names(kind.value, field_name),
            prefix="",
            num_args=0,
        )

        result = self.visit(field_name, field, params, context)

        function_def = FunctionDefinition(
            name=field_name,
            description=_clean_description(field.description),
            parameters=params.build(),
        )
        query = self.build_query(kind, field_name, result)
        return self.function_factory.create(function_def, APIQuery(query))

    @staticmethod
    def build_query(kind: OperationKind, field_name: str, result: VisitResult) -> str:
        header = f"{kind.value} {field_name}"
        if result.query_params:
            header += f"({result.query_params})"
        return f"{header} {{\n{result.query_body}\n}}"

    def visit(
        self,
        field_name: str,
        field: GraphQLField,
        params: ParametersBuilder,
        context: VisitContext,
    ) -> VisitResult:
        """
        Render one field: its argument bindings and, for object types, its
        nested selection.

        Arguments are recorded in ``params`` as they are encountered. A field
        whose object type is already on the path, or which would exceed the
        depth limit, is cut (``success=False``) and contributes no text.

        Raises:
            TraversalError: If an object selection ends up with no fields
            UnsupportedTypeError: If an argument type cannot be mapped
        """
        type_ = unwrap_output_type(field.type)

        if isinstance(type_, (GraphQLInterfaceType, GraphQLUnionType)):
            if context.depth == 0:
                raise UnsupportedTypeError(f"Unsupported return type: {type_}")
            logger.info(
                f"Skipping abstract type '{type_}' on operation '{context.operation_name}'"
            )
            return VisitResult(False)

        if isinstance(type_, GraphQLObjectType):
            # Don't recurse in a cycle or if depth limit is exceeded
            if context.has_visited(type_):
                logger.info(
                    f"Detected cycle on operation '{context.operation_name}'. Aborting traversal."
                )
                return VisitResult(False)
            if context.depth + 1 > self.config.max_depth:
                logger.info(
                    f"Aborting traversal because depth limit exceeded on operation '{context.operation_name}'"
                )
                return VisitResult(False)

        query_params = ""
        query_body = field_name
        num_args = 0

        if field.args:
            query_body += "("

            for i, (arg_name, arg) in enumerate(field.args.items()):
                unwrapped = unwrap_required(arg.type)

                if isinstance(unwrapped.type, GraphQLInputObjectType):
                    input_type = unwrapped.type
                    query_body += f"{', ' if i > 0 else ''}{arg_name}: {{ "

                    for j, (nested_name, nested_field) in enumerate(input_type.fields.items()):
                        description = _clean_description(nested_field.description)
                        if description is None:
                            description = resolve_description(
                                context.schema_definition,
                                _loc_start(nested_field.ast_node),
                                _loc_start(input_type.ast_node),
                            )

                        header, body = self._process_argument(
                            params,
                            context,
                            num_args,
                            unwrap_required(nested_field.type),
                            combine_arg_names(context.prefix, nested_name),
                            nested_name,
                            description,
                            first_in_object=j == 0,
                        )
                        query_params += header + render_input_field_type(nested_name, nested_field)
                        query_body += body
                        num_args += 1

                    query_body += " }"
                else:
                    description = _clean_description(arg.description)
                    if description is None:
                        description = resolve_description(
                            context.schema_definition,
                            _loc_start(arg.ast_node),
                            _loc_start(field.ast_node),
                        )

                    header, body = self._process_argument(
                        params,
                        context,
                        num_args,
                        unwrapped,
                        combine_arg_names(context.prefix, arg_name),
                        arg_name,
                        description,
                    )
                    query_params += header + render_argument_type(arg_name, arg)
                    query_body += body
                    num_args += 1

            query_body += ")"

        if isinstance(type_, GraphQLObjectType):
            query_body += " {\n"
            nested_args = 0
            at_least_one_field = False

            for nested_name, nested_field in type_.fields.items():
                nested = self.visit(
                    nested_name,
                    nested_field,
                    params,
                    context.nested(nested_name, type_, num_args + nested_args),
                )
                query_params += nested.query_params
                query_body += nested.query_body
                nested_args += nested.num_args
                at_least_one_field = at_least_one_field or nested.success

            if not at_least_one_field:
                raise TraversalError(
                    f"Expected at least one field on path: {context.operation_name}",
                    operation_name=context.operation_name,
                )

            query_body += "}"
            num_args += nested_args

        query_body += "\n"
        return VisitResult(True, query_params, query_body, num_args)

    @staticmethod
    def _process_argument(
        params: ParametersBuilder,
        context: VisitContext,
        num_args: int,
        unwrapped: UnwrappedType,
        arg_name: str,
        original_name: str,
        description: Optional[str],
        first_in_object: bool = False,
    ) -> tuple[str, str]:
        """
        Record one flat parameter and render its text.

        Returns:
            (header, body): ``header`` is the variable declaration up to the
            colon (the caller appends the type), ``body`` is the argument
            binding ``original_name: $arg_name``.
        """
        argument = convert_input_type(unwrapped.type).with_description(description)
        params.add(arg_name, argument, required=unwrapped.required)

        header = ", " if context.num_args + num_args > 0 else ""
        body = ", " if num_args > 0 and not first_in_object else ""

        variable = "$" + arg_name
        return f"{header}{variable}: ", f"{body}{original_name}: {variable}"
