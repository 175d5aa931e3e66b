# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
rsfront driver: parse + lower a single snippet.

Pipeline:
  text -> syntax (parser phase) -> stage1 lowering (lower phase)

Failures in either phase are reported as diagnostics rather than exceptions.
With --json, the CLI prints the lowered value plus structured diagnostics
(phase/message/severity/file/line/column) and an exit_code; otherwise it prints
the rendered value to stdout and human-readable messages to stderr.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional, Tuple

from rsfront.core.diagnostics import Diagnostic, has_errors
from rsfront.hygiene import Hygiene
from rsfront.stage1 import (
	AbsoluteRoot,
	CrateRoot,
	GenericArgs,
	ImportEntry,
	MacroCrateRoot,
	Path,
	PathKind,
	PlainRoot,
	SelfRoot,
	SuperRoot,
	TypeRef,
	TypeRelativeRoot,
	lower_path,
	lower_use_tree,
)
from rsfront.syntax import parse_path_text, parse_type_text, parse_use_tree_text

KINDS = ("path", "type", "use")
_DEFAULT_SOURCE_NAME = "<input>"


def lower_source(
	source: str,
	*,
	kind: str = "path",
	hygiene: Optional[Hygiene] = None,
	file: Optional[str] = None,
) -> Tuple[Any, List[Diagnostic]]:
	"""
	Parse and lower `source` as a path, a type, or a use tree.

	Returns `(value, diagnostics)`; `value` is a `Path`, a `TypeRef`, or a list
	of `ImportEntry`, and None when any error diagnostic was produced.
	"""
	if kind not in KINDS:
		raise ValueError(f"unknown snippet kind {kind!r} (expected one of {', '.join(KINDS)})")
	hygiene = hygiene or Hygiene.new_unhygienic()

	if kind == "type":
		type_node, diagnostics = parse_type_text(source, file=file)
		if type_node is None:
			return None, diagnostics
		return TypeRef.from_ast(type_node), diagnostics

	if kind == "use":
		use_tree, diagnostics = parse_use_tree_text(source, file=file)
		if use_tree is None:
			return None, diagnostics
		return lower_use_tree(None, use_tree, hygiene), diagnostics

	path_node, diagnostics = parse_path_text(source, file=file)
	if path_node is None:
		return None, diagnostics
	path = lower_path(path_node, hygiene)
	if path is None:
		diagnostics.append(
			Diagnostic(
				message="could not lower path",
				phase="lower",
				severity="error",
				span=path_node.span,
			)
		)
		return None, diagnostics
	return path, diagnostics


# JSON rendering


def _kind_to_json(kind: PathKind) -> Dict[str, Any]:
	if isinstance(kind, PlainRoot):
		return {"root": "plain"}
	if isinstance(kind, AbsoluteRoot):
		return {"root": "absolute"}
	if isinstance(kind, CrateRoot):
		return {"root": "crate"}
	if isinstance(kind, SelfRoot):
		return {"root": "self"}
	if isinstance(kind, SuperRoot):
		return {"root": "super"}
	if isinstance(kind, MacroCrateRoot):
		return {"root": "dollar_crate", "crate_id": kind.crate_id}
	if isinstance(kind, TypeRelativeRoot):
		return {"root": "type", "type": str(kind.type_ref)}
	raise AssertionError(f"unhandled path kind {kind!r}")


def _generic_args_to_json(args: Optional[GenericArgs]) -> Optional[Dict[str, Any]]:
	if args is None:
		return None
	return {
		"args": [str(a) for a in args.args],
		"has_self_type": args.has_self_type,
		"bindings": [[str(name), str(ty)] for name, ty in args.bindings],
	}


def path_to_json(path: Path) -> Dict[str, Any]:
	return {
		**_kind_to_json(path.kind),
		"segments": [str(s) for s in path.mod_path.segments],
		"generic_args": [_generic_args_to_json(a) for a in path.generic_args],
		"display": str(path),
	}


def _import_to_json(entry: ImportEntry) -> Dict[str, Any]:
	alias = None
	if entry.alias is not None:
		alias = "_" if entry.alias.is_underscore() else str(entry.alias.name)
	return {
		**_kind_to_json(entry.path.kind),
		"segments": [str(s) for s in entry.path.segments],
		"is_glob": entry.is_glob,
		"alias": alias,
		"display": str(entry.path),
	}


def value_to_json(value: Any) -> Any:
	if isinstance(value, Path):
		return path_to_json(value)
	if isinstance(value, TypeRef):
		return {"type": str(value)}
	if isinstance(value, list):
		return [_import_to_json(entry) for entry in value]
	return None


def _render_value(value: Any) -> List[str]:
	if isinstance(value, list):
		lines = []
		for entry in value:
			line = str(entry.path) + ("::*" if entry.is_glob else "")
			if entry.alias is not None:
				line += " as " + ("_" if entry.alias.is_underscore() else str(entry.alias.name))
			lines.append(line)
		return lines
	return [str(value)]


def main(argv: list[str] | None = None) -> int:
	"""
	Minimal CLI: parse a snippet, lower it, print the result.

	Exit code 0 on success, 1 if parsing or lowering failed.
	"""
	parser = argparse.ArgumentParser(prog="rsfront", description="Lower Rust path/type/use-tree syntax")
	parser.add_argument("text", help="Snippet to lower, e.g. 'std::collections::HashMap<K, V>'")
	parser.add_argument(
		"--kind",
		choices=KINDS,
		default="path",
		help="How to parse the snippet (default: path)",
	)
	parser.add_argument(
		"--dollar-crate",
		dest="dollar_crate",
		type=int,
		metavar="CRATE_ID",
		help="Lower as macro-expanded code from crate CRATE_ID (`$crate` resolves to it)",
	)
	parser.add_argument("--file", type=str, default=None, help="Source name used in diagnostics")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit the result and diagnostics as JSON (phase/message/severity/file/line/column)",
	)
	args = parser.parse_args(argv)

	hygiene = Hygiene.new_unhygienic()
	if args.dollar_crate is not None:
		hygiene = Hygiene.for_macro(args.dollar_crate)
	source_name = args.file or _DEFAULT_SOURCE_NAME

	value, diagnostics = lower_source(args.text, kind=args.kind, hygiene=hygiene, file=args.file)
	exit_code = 1 if has_errors(diagnostics) or value is None else 0

	if args.json:
		payload = {
			"exit_code": exit_code,
			"result": value_to_json(value),
			"diagnostics": [d.to_json(file=source_name) for d in diagnostics],
		}
		print(json.dumps(payload))
		return exit_code

	for diag in diagnostics:
		line = diag.span.line if diag.span.line is not None else "?"
		column = diag.span.column if diag.span.column is not None else "?"
		file = diag.span.file or source_name
		print(f"{file}:{line}:{column}: {diag.severity}: {diag.message}", file=sys.stderr)
	if value is not None:
		for line in _render_value(value):
			print(line)
	return exit_code


__all__ = ["KINDS", "lower_source", "path_to_json", "value_to_json", "main"]
