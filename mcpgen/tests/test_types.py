from __future__ import annotations

import pytest

from mcpgen.errors import TypeResolutionError
from mcpgen.normalize.types import array_suffix, resolve_type, tuple_description


def test_scalar() -> None:
    t = resolve_type("uint256")
    assert t.base_type == "uint256"
    assert not t.is_array and t.array_size == 0
    assert t.chain_data.to_dict() == {}


def test_dynamic_array() -> None:
    t = resolve_type("address[]")
    assert (t.base_type, t.is_array, t.array_size) == ("address", True, 0)
    assert t.chain_data.is_dynamic_array and not t.chain_data.is_fixed_array
    assert array_suffix(t) == "[]"


def test_fixed_array() -> None:
    t = resolve_type("uint256[3]")
    assert (t.base_type, t.is_array, t.array_size) == ("uint256", True, 3)
    assert t.chain_data.is_fixed_array
    assert t.chain_data.array_size == 3
    assert array_suffix(t) == "[3]"


def test_nested_array_lifts_outermost_dimension_only() -> None:
    t = resolve_type("uint256[][2]")
    assert t.base_type == "uint256[]"
    assert t.is_array and t.array_size == 2


@pytest.mark.parametrize("bad", ["uint256[x]", "uint256[-1]", "uint256[1.5]"])
def test_non_numeric_array_size_is_rejected(bad: str) -> None:
    with pytest.raises(TypeResolutionError) as ei:
        resolve_type(bad)
    assert ei.value.type_str == bad
    assert "invalid array size" in ei.value.reason


@pytest.mark.parametrize("bad", ["[]", "uint256[3", "uint256[3]x"])
def test_malformed_array_suffix(bad: str) -> None:
    with pytest.raises(TypeResolutionError):
        resolve_type(bad)


def test_tuple_components_resolve_recursively() -> None:
    t = resolve_type(
        "tuple",
        [
            {"name": "id", "type": "uint256"},
            {"name": "tags", "type": "string[]"},
            {"name": "inner", "type": "tuple", "components": [{"name": "ok", "type": "bool"}]},
        ],
    )
    assert t.is_tuple
    assert [c.name for c in t.components] == ["id", "tags", "inner"]
    assert t.components[1].type.is_array
    assert t.components[2].type.components[0].type.base_type == "bool"
    assert t.chain_data.is_tuple
    assert t.chain_data.type_description == "{id: uint256, tags: string[], inner: tuple}"
    assert tuple_description(t.components) == t.chain_data.type_description


def test_tuple_array_keeps_components() -> None:
    t = resolve_type("tuple[]", [{"name": "a", "type": "address"}])
    assert t.base_type == "tuple" and t.is_array
    assert [c.name for c in t.components] == ["a"]


def test_mapping_form() -> None:
    t = resolve_type("mapping(address => uint256)")
    assert t.is_map
    assert t.map_key_type == "address"
    assert t.base_type == "uint256"


def test_mapping_without_arrow_leaves_key_empty() -> None:
    t = resolve_type("mapping(address)")
    assert t.is_map and t.map_key_type == ""
