# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Render the declared type signature of a single argument or input field.

graphql-core can print whole types but not the type reference of one
argument, so the argument is wrapped in a throwaway ``DummyType``, printed
with ``print_type`` and the signature is cut out of the output using the
argument name as the anchor.

Known limitation: the anchor is the bare name, so the first ``name:`` in the
printed dummy type wins. Argument names that also occur as a word followed
by a colon elsewhere in the dummy output would match the wrong position.
"""

import re

from graphql import (
    GraphQLArgument,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLObjectType,
    GraphQLString,
    print_type,
)

from acorn.core.errors import UnsupportedTypeError

DUMMY_TYPE_NAME = "DummyType"


def _without_docs(kwargs: dict) -> dict:
    # keep type and default (`default_value` or the SDL `default` node)
    return {**kwargs, "description": None, "deprecation_reason": None}


def render_input_field_type(name: str, input_field: GraphQLInputField) -> str:
    """Return the type signature of an input object field, e.g. ``[Int!]!``."""
    dummy = GraphQLInputObjectType(
        DUMMY_TYPE_NAME,
        {name: GraphQLInputField(**_without_docs(input_field.to_kwargs()))},
    )
    return extract_type_from_dummy(print_type(dummy), name)


def render_argument_type(name: str, argument: GraphQLArgument) -> str:
    """Return the type signature of a field argument, e.g. ``ID!``."""
    dummy = GraphQLObjectType(
        DUMMY_TYPE_NAME,
        {
            "dummyField": GraphQLField(
                GraphQLString,
                args={name: GraphQLArgument(**_without_docs(argument.to_kwargs()))},
            ),
        },
    )
    return extract_type_from_dummy(print_type(dummy), name)


def extract_type_from_dummy(output: str, name: str) -> str:
    """
    Cut the signature following ``name:`` out of printed SDL.

    Raises:
        UnsupportedTypeError: If no signature for ``name`` is present
    """
    output = "\n".join(
        line for line in output.split("\n") if not line.strip().startswith("#")
    )

    match = re.search(rf"{name}\s*:\s*([^)}}]+)", output)
    if not match:
        raise UnsupportedTypeError(f"Could not find type in: {output}")

    return match.group(1).strip()
