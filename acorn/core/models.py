# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Core data structures for function definitions and API queries."""

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional


class OperationKind(Enum):
    """Kind of GraphQL operation.

    Only queries and mutations can be turned into functions; subscriptions
    are recognized so they can be rejected explicitly.
    """
    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"

    @property
    def is_executable(self) -> bool:
        return self is not OperationKind.SUBSCRIPTION


@dataclass(frozen=True)
class Argument:
    """Parameter type descriptor (JSON-schema like)."""
    type: str  # string, number, integer, boolean, array, object
    description: Optional[str] = None
    items: Optional["Argument"] = None  # always set for arrays
    enum: Optional[tuple[str, ...]] = None  # only for string-like scalars

    def with_description(self, description: Optional[str]) -> "Argument":
        return replace(self, description=description)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type}
        if self.description is not None:
            result["description"] = self.description
        if self.items is not None:
            result["items"] = self.items.to_dict()
        if self.enum is not None:
            result["enum"] = list(self.enum)
        return result


@dataclass(frozen=True)
class FunctionParameters:
    """Parameter schema of a function: an object with named properties."""
    properties: Mapping[str, Argument] = field(default_factory=dict)
    required: tuple[str, ...] = ()
    type: str = "object"

    def __post_init__(self):
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
        object.__setattr__(self, "required", tuple(self.required))

    def filter(self, keep: Callable[[str], bool]) -> "FunctionParameters":
        """Return a copy with only the property names accepted by ``keep``."""
        return FunctionParameters(
            properties={k: v for k, v in self.properties.items() if keep(k)},
            required=tuple(name for name in self.required if keep(name)),
            type=self.type,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "properties": {name: arg.to_dict() for name, arg in self.properties.items()},
            "required": list(self.required),
        }


class ParametersBuilder:
    """Append-only accumulator used while traversing one operation.

    Owned by a single conversion call and frozen with ``build()`` once
    traversal of that operation is complete.
    """

    def __init__(self):
        self._properties: dict[str, Argument] = {}
        self._required: list[str] = []

    def add(self, name: str, argument: Argument, required: bool = False) -> None:
        self._properties[name] = argument
        if required and name not in self._required:
            self._required.append(name)

    def build(self) -> FunctionParameters:
        return FunctionParameters(properties=self._properties, required=tuple(self._required))


@dataclass(frozen=True)
class FunctionDefinition:
    """A named, described function with a parameter schema."""
    name: str
    parameters: FunctionParameters = field(default_factory=FunctionParameters)
    description: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.description is not None:
            result["description"] = self.description
        result["parameters"] = self.parameters.to_dict()
        return result


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a definition or a set of arguments."""
    is_valid: bool
    error_message: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def invalid(cls, message: str) -> "ValidationResult":
        return cls(False, message)


@dataclass(frozen=True)
class APIQuery:
    """An executable GraphQL document."""
    query: str

    def to_dict(self) -> dict[str, Any]:
        return {"query": self.query}
