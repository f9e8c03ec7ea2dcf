from __future__ import annotations

import pytest

from mcpgen.ir import Parameter, ParameterType
from mcpgen.normalize import resolve_type
from mcpgen.render.typemap import TypeCategory, categorize, zod_for, zod_object


@pytest.mark.parametrize(
    "base, cat",
    [
        ("uint256", TypeCategory.INTEGER),
        ("int8", TypeCategory.INTEGER),
        ("uint", TypeCategory.INTEGER),
        ("bool", TypeCategory.BOOLEAN),
        ("address", TypeCategory.ADDRESS),
        ("string", TypeCategory.STRING),
        ("bytes", TypeCategory.BYTES),
        ("bytes32", TypeCategory.BYTES),
        ("bytes33", TypeCategory.OTHER),
        ("tuple", TypeCategory.TUPLE),
        ("fixed128x18", TypeCategory.OTHER),
        ("uint256x", TypeCategory.OTHER),
    ],
)
def test_categorize(base: str, cat: TypeCategory) -> None:
    assert categorize(base) is cat


@pytest.mark.parametrize(
    "type_str, expected",
    [
        ("uint256", "z.number()"),
        ("bool", "z.boolean()"),
        ("address", "z.string()"),
        ("bytes32", "z.string()"),
        ("string", "z.string()"),
        ("address[]", "z.array(z.string())"),
        ("uint8[4]", "z.array(z.number()).length(4)"),
        ("uint8[][2]", "z.array(z.array(z.number())).length(2)"),
        ("mapping(address => uint256)", "z.record(z.string(), z.number())"),
        ("function", "z.string()"),
    ],
)
def test_zod_for(type_str: str, expected: str) -> None:
    assert zod_for(resolve_type(type_str)) == expected


def test_tuple_and_tuple_array() -> None:
    comps = [{"name": "id", "type": "uint256"}, {"name": "", "type": "address[]"}]
    assert zod_for(resolve_type("tuple", comps)) == "z.object({ id: z.number(), arg1: z.array(z.string()) })"
    assert zod_for(resolve_type("tuple[]", comps)) == (
        "z.array(z.object({ id: z.number(), arg1: z.array(z.string()) }))"
    )
    assert zod_for(resolve_type("tuple[2][]", comps)) == (
        "z.array(z.array(z.object({ id: z.number(), arg1: z.array(z.string()) })).length(2))"
    )


def test_tuple_without_components() -> None:
    assert zod_for(ParameterType(base_type="tuple")) == "z.object({})"
    assert zod_object([]) == "z.object({})"


def test_object_field_names() -> None:
    fields = [Parameter(name="", type=ParameterType(base_type="bool"))]
    assert zod_object(fields) == "z.object({ arg0: z.boolean() })"
