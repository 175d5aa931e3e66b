"""
Syntax layer: lark grammar, syntax nodes, and a diagnostics-collecting adapter.

`parse_path` / `parse_type` / `parse_use_tree` raise on bad input (lark's
`UnexpectedInput` or `PathShapeError`). The `*_text` variants collect those
failures as parser-phase diagnostics instead, so callers can report them
alongside later pipeline problems.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple, TypeVar

from lark.exceptions import UnexpectedInput

from rsfront.core.diagnostics import Diagnostic
from rsfront.core.span import Span
from . import ast
from .parser import PathShapeError, parse_path, parse_type, parse_use_tree

_N = TypeVar("_N")


def _parse_collecting(
	parse: Callable[[str], _N],
	source: str,
	file: Optional[str],
) -> Tuple[Optional[_N], List[Diagnostic]]:
	try:
		return parse(source), []
	except PathShapeError as err:
		span = Span.from_loc(err.loc, file=file)
		return None, [Diagnostic(message=str(err), phase="parser", severity="error", span=span)]
	except UnexpectedInput as err:
		# Some lark versions report -1 for positions at end of input.
		line = getattr(err, "line", None)
		column = getattr(err, "column", None)
		span = Span(
			file=file,
			line=line if line is not None and line > 0 else None,
			column=column if column is not None and column > 0 else None,
			raw=err,
		)
		return None, [Diagnostic(message=str(err), phase="parser", severity="error", span=span)]


def parse_path_text(source: str, *, file: Optional[str] = None) -> Tuple[Optional[ast.Path], List[Diagnostic]]:
	return _parse_collecting(parse_path, source, file)


def parse_type_text(source: str, *, file: Optional[str] = None) -> Tuple[Optional[ast.TypeNode], List[Diagnostic]]:
	return _parse_collecting(parse_type, source, file)


def parse_use_tree_text(source: str, *, file: Optional[str] = None) -> Tuple[Optional[ast.UseTree], List[Diagnostic]]:
	return _parse_collecting(parse_use_tree, source, file)


__all__ = [
	"ast",
	"PathShapeError",
	"parse_path",
	"parse_type",
	"parse_use_tree",
	"parse_path_text",
	"parse_type_text",
	"parse_use_tree_text",
]
