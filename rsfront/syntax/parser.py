# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
lark parse tree -> syntax nodes.

The grammar keeps paths and use trees flat (see grammar.lark); the builders
below fold them into qualifier chains and reject the shapes the grammar is too
permissive to rule out (turbofish after a keyword, `*` in the middle of a use
path, ...). Those are reported as `PathShapeError` so the adapter can turn
them into diagnostics instead of crashing.
"""

from __future__ import annotations

from pathlib import Path as FsPath
from typing import Callable, Dict, List, Optional, Tuple

from lark import Lark, Token, Tree

from rsfront.core.span import Span
from . import ast

_GRAMMAR_PATH = FsPath(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start=["path_root", "type_root", "use_root"],
	propagate_positions=True,
	maybe_placeholders=False,
)

_KEYWORD_KINDS = {
	"CRATE": ast.PathSegmentKind.CRATE_KW,
	"SELF": ast.PathSegmentKind.SELF_KW,
	"SUPER": ast.PathSegmentKind.SUPER_KW,
}


class PathShapeError(ValueError):
	"""
	User-facing error for syntactically valid but ill-shaped paths/use trees.

	Raised from the tree builder (not from the grammar) so the adapter can
	report a pinned parser diagnostic with a location.
	"""

	def __init__(self, message: str, *, loc: object | None) -> None:
		super().__init__(message)
		self.loc = loc


def parse_path(source: str) -> ast.Path:
	tree = _PARSER.parse(source, start="path_root")
	return _build_path(_only_tree(tree))


def parse_type(source: str) -> ast.TypeNode:
	tree = _PARSER.parse(source, start="type_root")
	return _build_type(_only_tree(tree))


def parse_use_tree(source: str) -> ast.UseTree:
	"""Parse `use a::{b, c};` (keyword and `;` optional) and return the root tree."""
	tree = _PARSER.parse(source, start="use_root")
	return _build_use_tree(_only_tree(tree))


# helpers


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


def _span(node: object) -> Span:
	return Span.from_loc(node)


def _span_between(start: object, end: object) -> Span:
	first = Span.from_loc(start)
	last = Span.from_loc(end)
	return Span(
		line=first.line,
		column=first.column,
		end_line=last.end_line,
		end_column=last.end_column,
		raw=start,
	)


def _trees(node: Tree) -> List[Tree]:
	return [c for c in node.children if isinstance(c, Tree)]


def _tokens(node: Tree, *types: str) -> List[Token]:
	return [c for c in node.children if isinstance(c, Token) and c.type in types]


def _only_tree(node: Tree) -> Tree:
	trees = _trees(node)
	if len(trees) != 1:
		raise AssertionError(f"parser bug: expected one subtree under {_name(node)}, got {len(trees)}")
	return trees[0]


def _located(node: ast.SyntaxNode, loc: object) -> ast.SyntaxNode:
	node.span = _span(loc)
	return node


# paths


def _build_path(tree: Tree) -> ast.Path:
	children = list(tree.children)
	leading = bool(children) and isinstance(children[0], Token) and children[0].type == "COLON2"
	items = [c for c in children if not (isinstance(c, Token) and c.type == "COLON2")]
	return _fold_path_items(items, leading=leading)


def _fold_path_items(items: List[Tree | Token], *, leading: bool) -> ast.Path:
	"""
	Fold a flat item sequence into a qualifier chain.

	A `type_arg_list` item is a turbofish (`a::<T>`): it belongs to the name
	segment right before it, which must not already carry generic arguments.
	"""
	groups: List[Tuple[Tree, Optional[Tree]]] = []
	for item in items:
		if not isinstance(item, Tree):
			raise PathShapeError(f"unexpected `{item}` in path", loc=item)
		if _name(item) == "type_arg_list":
			if not groups or groups[-1][1] is not None:
				raise PathShapeError("generic arguments must follow a path segment", loc=item)
			prev = groups[-1][0]
			if _name(prev) != "name_segment" or len(_trees(prev)) > 1:
				raise PathShapeError(
					"generic arguments must follow a named path segment without arguments",
					loc=item,
				)
			groups[-1] = (prev, item)
			continue
		groups.append((item, None))
	if not groups:
		raise PathShapeError("empty path", loc=None)

	path: Optional[ast.Path] = None
	start = groups[0][0]
	for idx, (seg_tree, turbofish) in enumerate(groups):
		segment = _build_segment(seg_tree, turbofish, has_colon_colon=leading and idx == 0)
		path = ast.Path(qualifier=path, segment=segment)
		path.span = _span_between(start, turbofish if turbofish is not None else seg_tree)
	assert path is not None
	return path


def _build_segment(tree: Tree, turbofish: Optional[Tree], *, has_colon_colon: bool) -> ast.PathSegment:
	kind = _name(tree)
	if kind == "keyword_segment":
		tok = _tokens(tree, *_KEYWORD_KINDS)[0]
		seg = ast.PathSegment(kind=_KEYWORD_KINDS[tok.type], has_colon_colon=has_colon_colon)
	elif kind == "qualified_segment":
		parts = _trees(tree)
		self_ty = _build_type(parts[0])
		trait_ref = _build_path_type(parts[1]) if len(parts) > 1 else None
		seg = ast.PathSegment(
			kind=ast.PathSegmentKind.TYPE,
			has_colon_colon=has_colon_colon,
			type_ref=self_ty,
			trait_ref=trait_ref,
		)
	elif kind == "name_segment":
		parts = _trees(tree)
		name_ref = _build_name_ref(parts[0])
		type_arg_list = None
		param_list = None
		ret_type = None
		for part in parts[1:]:
			part_kind = _name(part)
			if part_kind == "type_arg_list":
				type_arg_list = _build_type_arg_list(part)
			elif part_kind == "fn_param_list":
				param_list = _build_param_list(part)
			elif part_kind == "ret_type":
				ret_type = _build_ret_type(part)
		if turbofish is not None:
			type_arg_list = _build_type_arg_list(turbofish)
		seg = ast.PathSegment(
			kind=ast.PathSegmentKind.NAME,
			has_colon_colon=has_colon_colon,
			name_ref=name_ref,
			type_arg_list=type_arg_list,
			param_list=param_list,
			ret_type=ret_type,
		)
	else:
		raise PathShapeError(f"unexpected path segment `{kind}`", loc=tree)
	seg.span = _span(tree)
	return seg


def _build_name_ref(tree: Tree) -> ast.NameRef:
	tok = _tokens(tree, "IDENT", "DOLLAR_CRATE")[0]
	return _located(ast.NameRef(text=tok.value), tok)


def _build_type_arg_list(tree: Tree) -> ast.TypeArgList:
	type_args: List[ast.TypeArg] = []
	lifetime_args: List[ast.LifetimeArg] = []
	assoc_type_args: List[ast.AssocTypeArg] = []
	for arg in _trees(tree):
		kind = _name(arg)
		if kind == "type_arg":
			type_args.append(_located(ast.TypeArg(type_ref=_build_type(_only_tree(arg))), arg))
		elif kind == "lifetime_arg":
			tok = _tokens(arg, "LIFETIME")[0]
			lifetime_args.append(_located(ast.LifetimeArg(lifetime=tok.value), arg))
		elif kind == "assoc_type_arg":
			name_tok = _tokens(arg, "IDENT")[0]
			name_ref = _located(ast.NameRef(text=name_tok.value), name_tok)
			type_ref = _build_type(_only_tree(arg))
			assoc_type_args.append(_located(ast.AssocTypeArg(name_ref=name_ref, type_ref=type_ref), arg))
	return _located(
		ast.TypeArgList(type_args=type_args, lifetime_args=lifetime_args, assoc_type_args=assoc_type_args),
		tree,
	)


def _build_param_list(tree: Tree) -> ast.ParamList:
	params = [
		_located(ast.Param(ascribed_type=_build_type(_only_tree(param))), param)
		for param in _trees(tree)
	]
	return _located(ast.ParamList(params=params), tree)


def _build_ret_type(tree: Tree) -> ast.RetType:
	return _located(ast.RetType(type_ref=_build_type(_only_tree(tree))), tree)


# types


def _build_path_type(tree: Tree) -> ast.PathType:
	return _located(ast.PathType(path=_build_path(_only_tree(tree))), tree)


def _build_tuple_type(tree: Tree) -> ast.TypeNode:
	return ast.TupleType(fields=[_build_type(t) for t in _trees(tree)])


def _build_paren_type(tree: Tree) -> ast.TypeNode:
	return ast.ParenType(inner=_build_type(_only_tree(tree)))


def _build_never_type(tree: Tree) -> ast.TypeNode:
	return ast.NeverType()


def _build_placeholder_type(tree: Tree) -> ast.TypeNode:
	return ast.PlaceholderType()


def _build_ref_type(tree: Tree) -> ast.TypeNode:
	lifetimes = _tokens(tree, "LIFETIME")
	return ast.ReferenceType(
		inner=_build_type(_only_tree(tree)),
		mutable=bool(_tokens(tree, "MUT")),
		lifetime=lifetimes[0].value if lifetimes else None,
	)


def _build_ptr_type(tree: Tree) -> ast.TypeNode:
	return ast.PointerType(inner=_build_type(_only_tree(tree)), mutable=bool(_tokens(tree, "MUT")))


def _build_slice_type(tree: Tree) -> ast.TypeNode:
	return ast.SliceType(inner=_build_type(_only_tree(tree)))


def _build_array_type(tree: Tree) -> ast.TypeNode:
	length = _tokens(tree, "INT")
	return ast.ArrayType(inner=_build_type(_only_tree(tree)), length=length[0].value if length else None)


def _build_fn_ptr_type(tree: Tree) -> ast.TypeNode:
	param_list = None
	ret_type = None
	for part in _trees(tree):
		if _name(part) == "fn_param_list":
			param_list = _build_param_list(part)
		elif _name(part) == "ret_type":
			ret_type = _build_ret_type(part)
	return ast.FnPointerType(param_list=param_list, ret_type=ret_type)


def _build_bounds(tree: Tree) -> List[ast.TypeBound]:
	bounds: List[ast.TypeBound] = []
	for part in _trees(tree):
		if _name(part) == "lifetime_bound":
			bound = ast.TypeBound(lifetime=_tokens(part, "LIFETIME")[0].value)
		else:
			bound = ast.TypeBound(path_type=_build_path_type(part))
		bounds.append(_located(bound, part))
	return bounds


def _build_dyn_trait_type(tree: Tree) -> ast.TypeNode:
	return ast.DynTraitType(bounds=_build_bounds(tree))


def _build_impl_trait_type(tree: Tree) -> ast.TypeNode:
	return ast.ImplTraitType(bounds=_build_bounds(tree))


_TYPE_BUILDERS: Dict[str, Callable[[Tree], ast.TypeNode]] = {
	"path_type": _build_path_type,
	"tuple_type": _build_tuple_type,
	"paren_type": _build_paren_type,
	"never_type": _build_never_type,
	"placeholder_type": _build_placeholder_type,
	"ref_type": _build_ref_type,
	"ptr_type": _build_ptr_type,
	"slice_type": _build_slice_type,
	"array_type": _build_array_type,
	"fn_ptr_type": _build_fn_ptr_type,
	"dyn_trait_type": _build_dyn_trait_type,
	"impl_trait_type": _build_impl_trait_type,
}


def _build_type(tree: Tree) -> ast.TypeNode:
	builder = _TYPE_BUILDERS.get(_name(tree))
	if builder is None:
		raise AssertionError(f"parser bug: unknown type node `{_name(tree)}`")
	node = builder(tree)
	node.span = _span(tree)
	return node


# use trees


def _build_use_tree(tree: Tree) -> ast.UseTree:
	children = list(tree.children)
	leading = bool(children) and isinstance(children[0], Token) and children[0].type == "COLON2"
	rename = None
	if children and isinstance(children[-1], Tree) and _name(children[-1]) == "rename":
		rename = _build_rename(children.pop())
	items = [c for c in children if not (isinstance(c, Token) and c.type == "COLON2")]

	star = False
	use_tree_list = None
	if items:
		last = items[-1]
		if isinstance(last, Token) and last.type == "STAR":
			star = True
			items.pop()
		elif isinstance(last, Tree) and _name(last) == "use_tree_list":
			use_tree_list = _located(
				ast.UseTreeList(use_trees=[_build_use_tree(t) for t in _trees(last)]),
				last,
			)
			items.pop()
	for item in items:
		if isinstance(item, Token) and item.type == "STAR":
			raise PathShapeError("`*` must be the last element of a use path", loc=item)
		if isinstance(item, Tree) and _name(item) == "use_tree_list":
			raise PathShapeError("`{...}` must be the last element of a use path", loc=item)
	if rename is not None and (star or use_tree_list is not None):
		raise PathShapeError("only a plain use path can be renamed", loc=rename.span.raw)

	path = _fold_path_items(items, leading=leading) if items else None
	return _located(ast.UseTree(path=path, star=star, use_tree_list=use_tree_list, rename=rename), tree)


def _build_rename(tree: Tree) -> ast.Rename:
	idents = _tokens(tree, "IDENT")
	if idents:
		rename = ast.Rename(name_ref=_located(ast.NameRef(text=idents[0].value), idents[0]))
	else:
		rename = ast.Rename(underscore=True)
	return _located(rename, tree)


__all__ = ["PathShapeError", "parse_path", "parse_type", "parse_use_tree"]
