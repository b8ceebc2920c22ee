# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Tests for converting GraphQL schemas into API functions."""

import json

import pytest
from graphql import build_schema, introspection_from_schema, parse, validate
from graphql.language import FieldNode

from acorn.converter.schema_converter import ConversionResult, GraphQLSchemaConverter
from acorn.core.config import ConverterConfig, ignore_prefix
from acorn.core.errors import (
    SchemaParseError,
    ToolConstructionError,
    TraversalError,
    UnsupportedTypeError,
)
from acorn.core.models import OperationKind
from acorn.tool.factory import StandardAPIFunctionFactory


def _converter(max_depth: int = 3, context_keys=(), operation_filter=None, executor=None):
    factory = StandardAPIFunctionFactory(executor, context_keys)
    return GraphQLSchemaConverter(
        factory,
        ConverterConfig(max_depth=max_depth),
        operation_filter=operation_filter,
    )


def _by_name(functions):
    return {function.name: function for function in functions}


def _selection_depth(node) -> int:
    """Number of nested selection sets below a field."""
    if node.selection_set is None:
        return 0
    return 1 + max(
        (_selection_depth(child) for child in node.selection_set.selections if isinstance(child, FieldNode)),
        default=0,
    )


class TestNutshopSchema:
    """End-to-end conversion of a small shop schema."""

    @pytest.fixture
    def schema_text(self, load_asset):
        return load_asset("nutshop-schema.graphqls")

    @pytest.fixture
    def functions(self, schema_text):
        converter = _converter(
            context_keys={"customerid"},
            operation_filter=ignore_prefix("internal"),
        )
        return converter.convert_schema(schema_text)

    def test_function_count_respects_filter(self, functions, schema_text):
        """Operations matching the ignored prefix are skipped."""
        assert [f.name for f in functions] == ["orders", "products", "addToCart"]
        assert len(_converter().convert_schema(schema_text)) == 4

    def test_orders_query_text(self, functions):
        """The synthesized query declares every variable and selects nested fields."""
        orders = _by_name(functions)["orders"]

        assert orders.api_query.query == (
            "query orders($customerid: ID!, $limit: Int = 10) {\n"
            "orders(customerid: $customerid, limit: $limit) {\n"
            "id\n"
            "customerid\n"
            "time\n"
            "items {\n"
            "productid\n"
            "quantity\n"
            "unit_price\n"
            "product {\n"
            "id\n"
            "name\n"
            "category\n"
            "}\n"
            "}\n"
            "}\n"
            "\n"
            "}"
        )

    def test_orders_parameters(self, functions):
        """Required reflects non-null arguments; comments become descriptions."""
        orders = _by_name(functions)["orders"]
        params = orders.function.parameters

        assert list(params.properties) == ["customerid", "limit"]
        assert params.required == ("customerid",)
        assert params.properties["customerid"].type == "string"
        assert params.properties["customerid"].description == "The customer whose orders are returned"
        assert params.properties["limit"].type == "integer"
        assert params.properties["limit"].description is None
        assert orders.function.description == "Retrieve the orders of a customer"

    def test_context_key_hidden_from_model(self, functions):
        """Context keys stay in the full schema but not in the model schema."""
        orders = _by_name(functions)["orders"]

        assert "customerid" in orders.function.parameters.properties
        model_params = orders.get_model_function().parameters
        assert "customerid" not in model_params.properties
        assert model_params.required == ()
        assert "limit" in model_params.properties

    def test_input_object_is_flattened(self, functions):
        """Input object fields become top-level parameters bound inside the object."""
        add_to_cart = _by_name(functions)["addToCart"]
        params = add_to_cart.function.parameters

        assert add_to_cart.api_query.query == (
            "mutation addToCart($customerid: ID!, $productid: Int!, $quantity: Int) {\n"
            "addToCart(item: { customerid: $customerid, productid: $productid, quantity: $quantity }) {\n"
            "id\n"
            "name\n"
            "category\n"
            "}\n"
            "\n"
            "}"
        )
        assert list(params.properties) == ["customerid", "productid", "quantity"]
        assert params.required == ("customerid", "productid")
        assert params.properties["customerid"].description == "Customer who owns the cart"

    def test_scalar_operation_without_arguments(self, schema_text):
        """An operation without variables has no variable list."""
        internal = _by_name(_converter().convert_schema(schema_text))["internalStats"]

        assert internal.api_query.query == "query internalStats {\ninternalStats\n\n}"
        assert internal.function.parameters.properties == {}

    def test_queries_validate_against_schema(self, schema_text):
        """Every synthesized query is a valid operation for the schema."""
        schema = build_schema(schema_text)
        for function in _converter().convert_schema(schema_text):
            errors = validate(schema, parse(function.api_query.query))
            assert errors == [], f"{function.name}: {errors}"

    def test_required_subset_of_properties(self, schema_text):
        for function in _converter().convert_schema(schema_text):
            params = function.function.parameters
            assert set(params.required) <= set(params.properties)

    def test_serialized_form(self, functions):
        orders = _by_name(functions)["orders"]
        data = json.loads(orders.to_json())

        assert data["function"]["name"] == "orders"
        assert data["function"]["parameters"]["type"] == "object"
        assert data["function"]["parameters"]["required"] == ["customerid"]
        assert data["contextKeys"] == ["customerid"]
        assert data["apiQuery"]["query"].startswith("query orders(")


class TestSensorsSchema:
    """Cycles between object types and arguments on nested fields."""

    @pytest.fixture
    def schema_text(self, load_asset):
        return load_asset("sensors.graphqls")

    def test_cycle_is_cut_and_nested_arguments_are_prefixed(self, schema_text):
        sensors = _by_name(_converter().convert_schema(schema_text))["sensors"]

        assert sensors.api_query.query == (
            "query sensors($sensorid: Int, $tags: [String!], $readings_limit: Int) {\n"
            "sensors(sensorid: $sensorid, tags: $tags) {\n"
            "sensorid\n"
            "machineid\n"
            "readings(limit: $readings_limit) {\n"
            "sensorid\n"
            "temperature\n"
            "timestamp\n"
            "}\n"
            "}\n"
            "\n"
            "}"
        )
        params = sensors.function.parameters
        assert list(params.properties) == ["sensorid", "tags", "readings_limit"]
        assert params.properties["tags"].type == "array"
        assert params.properties["tags"].items.type == "string"

    def test_enum_argument(self, schema_text):
        readings = _by_name(_converter().convert_schema(schema_text))["readings"]
        unit = readings.function.parameters.properties["unit"]

        assert unit.type == "string"
        assert unit.enum == ("CELSIUS", "FAHRENHEIT")
        assert unit.to_dict() == {"type": "string", "enum": ["CELSIUS", "FAHRENHEIT"]}

    def test_queries_validate_against_schema(self, schema_text):
        schema = build_schema(schema_text)
        functions = _converter().convert_schema(schema_text)

        assert len(functions) == 2
        for function in functions:
            assert validate(schema, parse(function.api_query.query)) == []


class TestTraversalGuards:
    """Cycle detection, depth limits and structural errors."""

    def test_self_reference_terminates(self):
        schema_text = """
        type Person {
          name: String
          friends: [Person]
        }
        type Query {
          person(id: ID!): Person
        }
        """
        person = _converter().convert_schema(schema_text)[0]

        assert person.api_query.query == (
            "query person($id: ID!) {\n"
            "person(id: $id) {\n"
            "name\n"
            "}\n"
            "\n"
            "}"
        )

    def test_mutual_reference_terminates(self):
        schema_text = """
        type A { b: B  x: Int }
        type B { a: A  y: Int }
        type Query { a: A  b: B }
        """
        functions = _by_name(_converter(max_depth=10).convert_schema(schema_text))

        assert functions["a"].api_query.query == "query a {\na {\nb {\ny\n}\nx\n}\n\n}"
        assert functions["b"].api_query.query == "query b {\nb {\na {\nx\n}\ny\n}\n\n}"

    @pytest.mark.parametrize("max_depth", [1, 2, 3, 4, 10])
    def test_selection_depth_never_exceeds_limit(self, max_depth):
        schema_text = """
        type A { b: B  v: Int }
        type B { c: C  v: Int }
        type C { d: D  v: Int }
        type D { v: Int }
        type Query { a: A }
        """
        function = _converter(max_depth=max_depth).convert_schema(schema_text)[0]
        operation = parse(function.api_query.query).definitions[0]
        root_field = operation.selection_set.selections[0]

        assert _selection_depth(root_field) == min(max_depth, 4)

    def test_empty_selection_raises_traversal_error(self):
        """A selection whose only field is cut by the depth limit is a structural error."""
        schema_text = """
        type Inner { value: Int }
        type Wrapper { inner: Inner }
        type Query { wrapper: Wrapper }
        """
        converter = _converter(max_depth=1)
        schema = build_schema(schema_text)

        with pytest.raises(TraversalError, match="query.wrapper") as exc_info:
            converter.convert_to_function(
                OperationKind.QUERY, "wrapper", schema.query_type.fields["wrapper"], schema_text
            )
        assert not isinstance(exc_info.value, UnsupportedTypeError)

    def test_structural_error_skips_only_that_operation(self):
        schema_text = """
        type Node { parent: Node }
        type Query {
          node: Node
          count: Int
        }
        """
        results = _converter().convert_schema_results(schema_text)

        assert [r.name for r in results] == ["node", "count"]
        assert isinstance(results[0].error, TraversalError)
        assert results[0].function is None
        assert results[1].success
        assert [f.name for f in _converter().convert_schema(schema_text)] == ["count"]

    def test_sibling_arguments_get_commas_without_parent_arguments(self):
        schema_text = """
        type Post { title: String }
        type Comment { text: String }
        type Viewer {
          posts(first: Int): [Post]
          comments(last: Int): [Comment]
        }
        type Query { viewer: Viewer }
        """
        viewer = _converter().convert_schema(schema_text)[0]

        assert viewer.api_query.query == (
            "query viewer($posts_first: Int, $comments_last: Int) {\n"
            "viewer {\n"
            "posts(first: $posts_first) {\n"
            "title\n"
            "}\n"
            "comments(last: $comments_last) {\n"
            "text\n"
            "}\n"
            "}\n"
            "\n"
            "}"
        )
        assert validate(build_schema(schema_text), parse(viewer.api_query.query)) == []


class TestConversionFailures:
    """Per-operation failures and parse errors."""

    def test_nested_input_object_is_unsupported(self):
        schema_text = """
        input Range { min: Int  max: Int }
        input Filter { range: Range }
        type Item { id: ID }
        type Query {
          search(filter: Filter): [Item]
          items: [Item]
        }
        """
        results = _converter().convert_schema_results(schema_text)

        assert isinstance(results[0], ConversionResult)
        assert isinstance(results[0].error, UnsupportedTypeError)
        assert results[1].success

    def test_union_return_type_is_unsupported(self):
        schema_text = """
        type Cat { name: String }
        type Dog { name: String }
        union Pet = Cat | Dog
        type Query { pet: Pet  pets: [Cat] }
        """
        results = _converter().convert_schema_results(schema_text)

        assert isinstance(results[0].error, UnsupportedTypeError)
        assert [f.name for f in _converter().convert_schema(schema_text)] == ["pets"]

    def test_invalid_schema_raises_parse_error(self):
        with pytest.raises(SchemaParseError):
            _converter().convert_schema("type Query {")

    def test_unknown_type_raises_parse_error(self):
        with pytest.raises(SchemaParseError):
            _converter().convert_schema("type Query { a: Missing }")

    def test_construction_error_propagates(self):
        """Definitions rejected by the executor are not silently dropped."""
        long_name = "a" * 70
        with pytest.raises(ToolConstructionError, match="invalid for API"):
            _converter().convert_schema(f"type Query {{ {long_name}: Int }}")


class TestConvertSchemaFromUri:
    """Conversion from an introspection result."""

    @pytest.mark.asyncio
    async def test_introspection_round_trip(self, load_asset, recording_executor):
        schema_text = load_asset("nutshop-schema.graphqls")
        recording_executor.response = {"data": introspection_from_schema(build_schema(schema_text))}
        converter = _converter(executor=recording_executor)

        functions = await converter.convert_schema_from_uri()

        assert [f.name for f in functions] == ["orders", "products", "internalStats", "addToCart"]
        assert "__schema" in recording_executor.calls[0][0].query
        orders = _by_name(functions)["orders"]
        assert orders.function.description == "Retrieve the orders of a customer"
        assert orders.function.parameters.required == ("customerid",)

    @pytest.mark.asyncio
    async def test_unwrapped_introspection_result(self, recording_executor):
        recording_executor.response = introspection_from_schema(build_schema("type Query { ping: String }"))
        converter = _converter(executor=recording_executor)

        functions = await converter.convert_schema_from_uri()

        assert [f.name for f in functions] == ["ping"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", ["", "not json", "[]"])
    async def test_unusable_introspection_reply(self, recording_executor, response):
        """Replies that are not an introspection result surface as parse errors."""
        recording_executor.response = response

        with pytest.raises(SchemaParseError, match="Invalid introspection result"):
            await _converter(executor=recording_executor).convert_schema_from_uri()


class TestDefaultValues:
    """SDL defaults carry over into variable declarations."""

    SCHEMA = """
    enum Unit { CELSIUS FAHRENHEIT }
    input Window { size: Int = 5 }
    type Query {
      average(unit: Unit = FAHRENHEIT, window: Window): Float
    }
    """

    def test_argument_and_input_field_defaults_in_header(self):
        average = _converter().convert_schema(self.SCHEMA)[0]

        assert average.api_query.query == (
            "query average($unit: Unit = FAHRENHEIT, $size: Int = 5) {\n"
            "average(unit: $unit, window: { size: $size })\n"
            "\n"
            "}"
        )
        assert validate(build_schema(self.SCHEMA), parse(average.api_query.query)) == []
