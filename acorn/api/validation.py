# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Validation of function definitions and call arguments.

Arguments are checked by building a Pydantic model from the function's
parameter schema, so type errors are reported the same way as everywhere
else Pydantic is used.
"""

import re
from typing import Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    create_model,
)

from acorn.core.models import Argument, FunctionDefinition, ValidationResult

FUNCTION_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

_SCALAR_TYPES: dict[str, Any] = {
    "string": StrictStr,
    "integer": StrictInt,
    "number": Union[StrictInt, StrictFloat],
    "boolean": StrictBool,
    "object": dict[str, Any],
}


def validate_function(function: FunctionDefinition) -> ValidationResult:
    """Check that a definition is structurally usable as a tool."""
    if not FUNCTION_NAME_PATTERN.match(function.name or ""):
        return ValidationResult.invalid(
            f"Function name '{function.name}' must match {FUNCTION_NAME_PATTERN.pattern}"
        )

    params = function.parameters
    if params.type != "object":
        return ValidationResult.invalid(f"Parameters must be of type 'object', got '{params.type}'")

    missing = [name for name in params.required if name not in params.properties]
    if missing:
        return ValidationResult.invalid(f"Required parameters not defined: {', '.join(missing)}")

    for name, argument in params.properties.items():
        error = _check_argument(name, argument)
        if error:
            return ValidationResult.invalid(error)

    return ValidationResult.ok()


def _check_argument(name: str, argument: Argument) -> Optional[str]:
    if argument.type == "array":
        if argument.items is None:
            return f"Array parameter '{name}' has no items type"
        return _check_argument(f"{name}[]", argument.items)
    if argument.type not in _SCALAR_TYPES:
        return f"Parameter '{name}' has unknown type '{argument.type}'"
    if argument.enum is not None and argument.type != "string":
        return f"Enum parameter '{name}' must be of type 'string'"
    return None


def _python_type(argument: Argument) -> Any:
    if argument.type == "array":
        return list[_python_type(argument.items)]
    if argument.enum:
        return Literal[tuple(argument.enum)]
    return _SCALAR_TYPES.get(argument.type, Any)


def build_arguments_model(function: FunctionDefinition) -> type[BaseModel]:
    """
    Create a Pydantic model mirroring a function's parameter schema.

    Parameter names are used as aliases so that names which clash with
    BaseModel attributes (or start with an underscore) still work.
    """
    params = function.parameters
    fields: dict[str, Any] = {}
    for i, (name, argument) in enumerate(params.properties.items()):
        python_type = _python_type(argument)
        if name in params.required:
            fields[f"arg_{i}"] = (python_type, Field(alias=name))
        else:
            fields[f"arg_{i}"] = (Optional[python_type], Field(default=None, alias=name))

    return create_model(
        f"{function.name or 'Function'}Arguments",
        __config__=ConfigDict(extra="ignore"),
        **fields,
    )


def validate_arguments(function: FunctionDefinition, arguments: Any) -> ValidationResult:
    """Check call arguments against a function's parameter schema."""
    if not isinstance(arguments, dict):
        return ValidationResult.invalid("Arguments must be a JSON object")

    model = build_arguments_model(function)
    try:
        model.model_validate(arguments)
    except ValidationError as e:
        messages = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            messages.append(f"{location}: {error['msg']}" if location else error["msg"])
        return ValidationResult.invalid("; ".join(messages))

    return ValidationResult.ok()
