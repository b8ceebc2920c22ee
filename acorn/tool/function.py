# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Callable API functions exposed to an LLM as tools.

An APIFunction pairs a function definition with the query it runs. Some
parameters can be declared as context keys: they are hidden from the
definition shown to the model and filled from the caller's session context
at execution time (e.g., the id of the logged-in customer).
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from acorn.api.executor import APIQueryExecutor
from acorn.core.errors import ToolConstructionError
from acorn.core.models import APIQuery, FunctionDefinition, ValidationResult

logger = logging.getLogger(__name__)


@dataclass
class ToolCall:
    """A tool call requested by the model."""
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


def add_or_override_from_context(
    arguments: Optional[Mapping[str, Any]],
    context_keys: Iterable[str],
    context: Optional[Mapping[str, Any]],
    parameter_names: Iterable[str] = (),
) -> dict[str, Any]:
    """
    Merge context values into call arguments.

    Keys match case-insensitively. A context value replaces any argument
    with the same (case-insensitive) name and is stored under the declared
    parameter name when there is one.

    Args:
        arguments: Arguments supplied by the caller
        context_keys: Names to take from the context
        context: Runtime context values
        parameter_names: Declared parameter names, used for the final key

    Returns:
        New dict of query variables
    """
    variables = dict(arguments or {})
    if not context:
        return variables

    context_lower = {key.lower(): value for key, value in context.items()}
    declared = {name.lower(): name for name in parameter_names}

    for key in context_keys:
        key_lower = key.lower()
        if key_lower not in context_lower:
            logger.warning(f"Context value for '{key}' not provided")
            continue

        for existing in [name for name in variables if name.lower() == key_lower]:
            del variables[existing]
        variables[declared.get(key_lower, key)] = context_lower[key_lower]

    return variables


class APIFunction:
    """A function definition bound to a query and the executor that runs it."""

    @staticmethod
    def create_invalid_call_message(function_name: str, error_message: Optional[str] = None) -> str:
        return (
            f"It looks like you tried to call function `{function_name}`, "
            f"but this has failed with the following error: {error_message}. "
            "Please retry to call the function again. Send ONLY the JSON as a response."
        )

    def __init__(
        self,
        function: FunctionDefinition,
        context_keys: Iterable[str],
        api_query: APIQuery,
        api_executor: APIQueryExecutor,
    ):
        """
        Bind a definition to a query.

        Raises:
            ToolConstructionError: If the executor rejects the definition
        """
        self._function = function
        self._context_keys = frozenset(context_keys)
        self._api_query = api_query
        self._api_executor = api_executor

        validation_result = api_executor.validate(function)
        if not validation_result.is_valid:
            raise ToolConstructionError(
                f"Function [{function.name}] invalid for API [{api_executor}]: "
                f"{validation_result.error_message}"
            )

    @property
    def function(self) -> FunctionDefinition:
        """Full definition, including context keys."""
        return self._function

    @property
    def context_keys(self) -> frozenset[str]:
        return self._context_keys

    @property
    def api_query(self) -> APIQuery:
        return self._api_query

    @property
    def api_executor(self) -> APIQueryExecutor:
        return self._api_executor

    @property
    def name(self) -> str:
        return self._function.name

    def get_name(self) -> str:
        return self._function.name

    def _is_visible(self, name: str) -> bool:
        return name.lower() not in {key.lower() for key in self._context_keys}

    def get_model_function(self) -> FunctionDefinition:
        """Definition shown to the model, with context keys removed."""
        return FunctionDefinition(
            name=self._function.name,
            description=self._function.description,
            parameters=self._function.parameters.filter(self._is_visible),
        )

    def validate(self, arguments: Any) -> ValidationResult:
        """Validate model-supplied arguments (context keys are not required)."""
        return self._api_executor.validate(self.get_model_function(), arguments)

    async def execute(
        self,
        arguments: Optional[Mapping[str, Any]] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Execute the query with arguments plus injected context values."""
        variables = add_or_override_from_context(
            arguments,
            self._context_keys,
            context,
            self._function.parameters.properties.keys(),
        )
        return await self._api_executor.execute_query(self._api_query, variables)

    async def validate_and_execute(
        self,
        arguments: Any,
        context: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Execute if the arguments are valid.

        Returns:
            The query result, or a retry message for the model when the
            arguments are invalid
        """
        validation_result = self.validate(arguments)
        if validation_result.is_valid:
            return await self.execute(arguments, context)

        logger.debug(f"Invalid call to '{self.name}': {validation_result.error_message}")
        return self.create_invalid_call_message(self.name, validation_result.error_message)

    async def validate_and_execute_from_string(
        self,
        arguments_json: str,
        context: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Like ``validate_and_execute`` but takes the arguments as JSON text."""
        try:
            arguments = json.loads(arguments_json)
        except (json.JSONDecodeError, TypeError) as e:
            return self.create_invalid_call_message(self.name, f"Malformed JSON: {e}")

        return await self.validate_and_execute(arguments, context)

    @staticmethod
    async def execute_tools(
        tool_calls: Union[ToolCall, list[ToolCall]],
        functions: Sequence["APIFunction"],
    ) -> Union[str, list[str]]:
        """
        Dispatch tool calls to functions by name.

        Unknown function names produce an empty result. Lists of calls run
        concurrently; results keep the order of the calls.
        """
        functions_by_name = {function.name: function for function in functions}

        if isinstance(tool_calls, ToolCall):
            function = functions_by_name.get(tool_calls.name)
            if function is None:
                logger.warning(f"Unknown function called: {tool_calls.name}")
                return ""
            return await function.validate_and_execute(tool_calls.arguments, {})

        return list(await asyncio.gather(
            *(APIFunction.execute_tools(call, functions) for call in tool_calls)
        ))

    def to_dict(self) -> dict[str, Any]:
        return {
            "function": self._function.to_dict(),
            "contextKeys": sorted(self._context_keys),
            "apiQuery": self._api_query.to_dict(),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self) -> str:
        return f"APIFunction(name={self.name!r}, context_keys={sorted(self._context_keys)!r})"
