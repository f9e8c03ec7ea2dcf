from __future__ import annotations

import pytest

from mcpgen.errors import IRDecodeError
from mcpgen.ir import ContractIR, load_ir
from mcpgen.ir.schema import check_document, ir_schema


def test_load_round_trip(erc20_ir: ContractIR) -> None:
    assert load_ir(erc20_ir.to_json()) == erc20_ir
    assert load_ir(erc20_ir.to_json().encode("utf-8")) == erc20_ir
    assert load_ir(erc20_ir.to_dict()) == erc20_ir


def test_schema_is_draft7() -> None:
    assert "draft-07" in ir_schema()["$schema"]


def test_malformed_json() -> None:
    with pytest.raises(IRDecodeError, match="IR JSON parse error"):
        load_ir("{")


def test_document_shape_errors_carry_a_path(erc20_ir: ContractIR) -> None:
    doc = erc20_ir.to_dict()
    doc["functions"][1]["inputs"] = "nope"
    with pytest.raises(IRDecodeError) as ei:
        check_document(doc)
    assert ei.value.details["path"] == "$.functions[1].inputs"


def test_missing_metadata() -> None:
    with pytest.raises(IRDecodeError, match="metadata"):
        load_ir({"functions": [], "events": []})


def test_structural_defects_are_not_decode_errors() -> None:
    # empty names load fine; the validator reports them
    ir = load_ir({"metadata": {"name": "", "chain": ""}, "functions": [], "events": []})
    assert [f.field for f in ir.validate()] == ["Name", "Chain"]
