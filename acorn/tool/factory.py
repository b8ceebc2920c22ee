# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Factories that turn function definitions and queries into API functions."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from acorn.api.executor import APIQueryExecutor, VoidAPIQueryExecutor
from acorn.core.models import APIQuery, FunctionDefinition
from acorn.tool.function import APIFunction


class APIFunctionFactory(ABC):
    """Creates API functions bound to an executor."""

    api_executor: APIQueryExecutor

    @abstractmethod
    def create(self, function: FunctionDefinition, query: APIQuery) -> APIFunction:
        """Create an APIFunction for a definition and its query."""


class StandardAPIFunctionFactory(APIFunctionFactory):
    """Binds every function to the same executor and context keys."""

    def __init__(
        self,
        api_executor: Optional[APIQueryExecutor] = None,
        context_keys: Iterable[str] = (),
    ):
        self.api_executor = api_executor or VoidAPIQueryExecutor()
        self.context_keys = frozenset(context_keys)

    def create(self, function: FunctionDefinition, query: APIQuery) -> APIFunction:
        """
        Create an APIFunction.

        Raises:
            ToolConstructionError: If the executor rejects the definition
        """
        return APIFunction(function, self.context_keys, query, self.api_executor)
