# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Executor boundary between API functions and the backend that runs queries."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from acorn.api.validation import validate_arguments, validate_function
from acorn.core.models import APIQuery, FunctionDefinition, ValidationResult

logger = logging.getLogger(__name__)


class APIQueryExecutor(ABC):
    """
    Validates function definitions and arguments, and executes queries.

    Subclasses only need to implement ``execute_query``; validation against
    the parameter schema is shared.
    """

    def validate(
        self,
        function: FunctionDefinition,
        arguments: Optional[Any] = None,
    ) -> ValidationResult:
        """
        Validate a function definition, or arguments for it.

        Args:
            function: Definition to check
            arguments: Candidate arguments; when omitted only the definition
                itself is checked

        Returns:
            ValidationResult with an error message when invalid
        """
        if arguments is None:
            return validate_function(function)
        return validate_arguments(function, arguments)

    @abstractmethod
    async def execute_query(
        self,
        query: APIQuery,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Execute a query and return the result as text."""

    def __str__(self) -> str:
        return type(self).__name__


class VoidAPIQueryExecutor(APIQueryExecutor):
    """Executor that performs no I/O, for schema-shape-only workflows."""

    async def execute_query(
        self,
        query: APIQuery,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> str:
        logger.debug("VoidAPIQueryExecutor: skipping query execution")
        return ""
