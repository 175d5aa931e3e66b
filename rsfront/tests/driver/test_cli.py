# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
CLI and `lower_source` tests.
"""

from __future__ import annotations

import json

import pytest

from rsfront.driver import lower_source, main
from rsfront.hygiene import Hygiene
from rsfront.stage1 import MacroCrateRoot, Path


def _run_json(capsys, argv: list[str]) -> tuple[int, dict]:
	exit_code = main(argv + ["--json"])
	out = capsys.readouterr().out
	return exit_code, json.loads(out)


def test_lower_source_path():
	value, diags = lower_source("a::b<T>")
	assert isinstance(value, Path)
	assert str(value) == "a::b<T>"
	assert diags == []


def test_lower_source_with_macro_hygiene():
	value, _ = lower_source("$crate::x", hygiene=Hygiene.for_macro(9))
	assert value.kind == MacroCrateRoot(9)


def test_lower_source_rejects_unknown_kind():
	with pytest.raises(ValueError):
		lower_source("a", kind="expr")


def test_lowering_failure_is_a_lower_diagnostic():
	value, diags = lower_source("<T as crate>::X", file="m.rs")
	assert value is None
	assert [d.phase for d in diags] == ["lower"]
	assert diags[0].span.line == 1


def test_cli_prints_rendered_path(capsys):
	assert main(["<T as Trait<A>>::Item"]) == 0
	captured = capsys.readouterr()
	assert captured.out.strip() == "Trait<Self = T, A>::Item"
	assert captured.err == ""


def test_cli_json_trait_path(capsys):
	exit_code, payload = _run_json(capsys, ["<T as a::Trait<A>>::Item"])
	assert exit_code == 0
	assert payload["exit_code"] == 0
	assert payload["diagnostics"] == []
	result = payload["result"]
	assert result["root"] == "plain"
	assert result["segments"] == ["a", "Trait", "Item"]
	assert result["generic_args"] == [
		None,
		{"args": ["T", "A"], "has_self_type": True, "bindings": []},
		None,
	]


def test_cli_json_fn_sugar(capsys):
	_, payload = _run_json(capsys, ["Fn(u8) -> bool"])
	assert payload["result"]["generic_args"] == [
		{"args": ["(u8,)"], "has_self_type": False, "bindings": [["Output", "bool"]]},
	]


def test_cli_parse_error(capsys):
	exit_code, payload = _run_json(capsys, ["a::?", "--file", "x.rs"])
	assert exit_code == 1
	assert payload["result"] is None
	assert payload["diagnostics"][0]["phase"] == "parser"
	assert payload["diagnostics"][0]["file"] == "x.rs"


def test_cli_lowering_error(capsys):
	exit_code, payload = _run_json(capsys, ["<T as crate>::X"])
	assert exit_code == 1
	diag = payload["diagnostics"][0]
	assert diag["phase"] == "lower"
	assert diag["file"] == "<input>"


def test_cli_text_errors_go_to_stderr(capsys):
	assert main(["a::?"]) == 1
	captured = capsys.readouterr()
	assert captured.out == ""
	assert captured.err.startswith("<input>:1:")
	assert ": error: " in captured.err


def test_cli_dollar_crate(capsys):
	_, payload = _run_json(capsys, ["$crate::m::X", "--dollar-crate", "4"])
	result = payload["result"]
	assert result["root"] == "dollar_crate"
	assert result["crate_id"] == 4
	assert result["segments"] == ["m", "X"]


def test_cli_type_relative(capsys):
	_, payload = _run_json(capsys, ["<Vec<u8>>::new"])
	assert payload["result"]["root"] == "type"
	assert payload["result"]["type"] == "Vec<u8>"


def test_cli_use_tree(capsys):
	assert main(["use a::{b, c as d, e::*};", "--kind", "use"]) == 0
	assert capsys.readouterr().out.splitlines() == ["a::b", "a::c as d", "a::e::*"]

	_, payload = _run_json(capsys, ["use crate::x as _;", "--kind", "use"])
	assert payload["result"] == [
		{
			"root": "crate",
			"segments": ["x"],
			"is_glob": False,
			"alias": "_",
			"display": "crate::x",
		}
	]


def test_cli_type(capsys):
	exit_code, payload = _run_json(capsys, ["&mut (A, B)", "--kind", "type"])
	assert exit_code == 0
	assert payload["result"] == {"type": "&mut (A, B)"}


def test_cli_rejects_unknown_kind(capsys):
	with pytest.raises(SystemExit):
		main(["a", "--kind", "expr"])
