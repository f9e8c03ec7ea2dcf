from __future__ import annotations

import pytest

from mcpgen.errors import IRValidationError
from mcpgen.ir import (
    ContractError,
    ContractIR,
    ContractMetadata,
    CustomType,
    Event,
    EventParameter,
    Function,
    Parameter,
    ParameterType,
    SourceInfo,
    validate_contract,
)


def _fields(report) -> list:
    return [f.field for f in report.findings]


def test_four_defects_yield_four_distinct_findings() -> None:
    ir = ContractIR(
        metadata=ContractMetadata(name="", chain=""),
        functions=[Function(name="", state_mutability="constant")],
    )
    report = validate_contract(ir)
    assert len(report) == 4
    assert _fields(report) == [
        "Name",
        "Chain",
        "Functions[0].Name",
        "Functions[0].StateMutability",
    ]
    assert len(set(_fields(report))) == 4
    assert "invalid state mutability: constant" in str(report.findings[3])


def test_normalized_erc20_is_clean(erc20_ir: ContractIR) -> None:
    report = validate_contract(erc20_ir)
    assert report.ok
    assert report.summarize() == "no findings"
    report.raise_for_findings()


def test_nested_paths_are_dot_bracket_indexed() -> None:
    bad_component = Parameter(name="inner", type=ParameterType(base_type=""))
    ir = ContractIR(
        metadata=ContractMetadata(name="C", chain="ethereum"),
        functions=[
            Function(name="ok", state_mutability="view"),
            Function(
                name="f",
                state_mutability="view",
                inputs=[
                    Parameter(name="a", type=ParameterType(base_type="uint256")),
                    Parameter(name="s", type=ParameterType(base_type="tuple", components=[bad_component])),
                ],
            ),
        ],
    )
    report = validate_contract(ir)
    assert _fields(report) == ["Functions[1].Inputs[1].Type.Components[0].Type.BaseType"]


def test_empty_state_mutability_is_invalid() -> None:
    ir = ContractIR(
        metadata=ContractMetadata(name="C", chain="ethereum"),
        functions=[Function(name="f", state_mutability="")],
    )
    report = validate_contract(ir)
    assert _fields(report) == ["Functions[0].StateMutability"]
    assert report.findings[0].message == "state mutability is required"


def test_visibility_only_checked_when_set() -> None:
    ir = ContractIR(
        metadata=ContractMetadata(name="C", chain="ethereum"),
        functions=[
            Function(name="a", state_mutability="view", visibility=""),
            Function(name="b", state_mutability="view", visibility="protected"),
        ],
    )
    assert _fields(validate_contract(ir)) == ["Functions[1].Visibility"]


def test_type_rules_array_size_and_map_key() -> None:
    ir = ContractIR(
        metadata=ContractMetadata(name="C", chain="ethereum"),
        errors=[
            ContractError(
                name="E",
                parameters=[
                    Parameter(name="a", type=ParameterType(base_type="uint8", is_array=True, array_size=-1)),
                    Parameter(name="m", type=ParameterType(base_type="uint8", is_map=True)),
                ],
            )
        ],
    )
    assert _fields(validate_contract(ir)) == [
        "Errors[0].Parameters[0].Type.ArraySize",
        "Errors[0].Parameters[1].Type.MapKeyType",
    ]


def test_event_parameters_need_names_but_outputs_do_not() -> None:
    ir = ContractIR(
        metadata=ContractMetadata(name="C", chain="ethereum"),
        functions=[
            Function(
                name="f",
                state_mutability="pure",
                outputs=[Parameter(name="", type=ParameterType(base_type="bool"))],
            )
        ],
        events=[Event(name="E", parameters=[EventParameter(name="", type=ParameterType(base_type="address"))])],
    )
    assert _fields(validate_contract(ir)) == ["Events[0].Parameters[0].Name"]


def test_source_language_and_custom_types() -> None:
    ir = ContractIR(
        metadata=ContractMetadata(name="C", chain="ethereum", source=SourceInfo(language=" ")),
        types=[CustomType(name="", fields=[Parameter(name="x", type=ParameterType(base_type=""))])],
    )
    assert _fields(validate_contract(ir)) == [
        "Source.Language",
        "Types[0].Name",
        "Types[0].Fields[0].Type.BaseType",
    ]


def test_raise_for_findings_carries_every_finding() -> None:
    report = validate_contract(ContractIR(metadata=ContractMetadata(name="", chain="")))
    assert report.summarize() == "2 findings"
    with pytest.raises(IRValidationError) as ei:
        report.raise_for_findings()
    assert ei.value.code == "IR_VALIDATION"
    assert ei.value.details["findings"] == [
        "Name: contract name is required",
        "Chain: chain identifier is required",
    ]


def test_contract_validate_shortcut() -> None:
    ir = ContractIR(metadata=ContractMetadata(name="C", chain=""))
    assert [f.field for f in ir.validate()] == ["Chain"]
