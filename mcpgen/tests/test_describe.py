from __future__ import annotations

import copy

from mcpgen.ir import Event, EventParameter, Function, FunctionChainData, Parameter, ParameterType
from mcpgen.normalize import describe_event, describe_function, render_type_label, resolve_type


def test_type_labels() -> None:
    assert render_type_label(resolve_type("uint256")) == "uint256"
    assert render_type_label(resolve_type("address[]")) == "address[]"
    assert render_type_label(resolve_type("bytes32[4]")) == "bytes32[4]"
    assert render_type_label(resolve_type("tuple", [{"name": "a", "type": "bool"}])) == "tuple"


def test_describe_is_idempotent(erc20_ir) -> None:
    for fn in erc20_ir.functions:
        if fn.is_special:
            continue
        assert describe_function(fn) == fn.description
        assert describe_function(copy.deepcopy(fn)) == describe_function(fn)
    for ev in erc20_ir.events:
        assert describe_event(ev) == ev.description


def test_function_without_parameters() -> None:
    assert describe_function(Function(name="pause", state_mutability="nonpayable")) == "pause"


def test_overload_uses_declared_name() -> None:
    fn = Function(
        name="mint_1",
        inputs=[Parameter(name="to", type=ParameterType(base_type="address"))],
        outputs=[
            Parameter(name="ok", type=ParameterType(base_type="bool")),
            Parameter(name="", type=ParameterType(base_type="uint256")),
        ],
        chain_data=FunctionChainData(original_name="mint"),
    )
    assert describe_function(fn) == "mint - Parameters: to (address) - Returns: ok (bool), output1 (uint256)"


def test_event_without_parameters() -> None:
    assert describe_event(Event(name="Paused")) == "Paused event"
    ev = Event(name="X", parameters=[EventParameter(name="who", type=ParameterType(base_type="address"))])
    assert describe_event(ev) == "X event - Parameters: who (address)"
