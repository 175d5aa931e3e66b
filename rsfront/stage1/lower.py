# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Syntax path -> semantic `Path` lowering, with accounting for hygiene.

Entry points (stage API):
  - lower_path: lower a whole path (works inside use trees too)
  - resolve_qualifier: the logical left-hand side of a syntax path
  - lower_generic_args: bracketed `<...>` arguments of one segment
  - lower_generic_args_from_fn_path: `Fn(A, B) -> C` call sugar

Sugar removed here:
  - `<T as Trait<A>>::Item` becomes `Trait<Self = T, A>::Item`
  - `Fn(A, B) -> C` becomes `Fn<(A, B), Output = C>`

Lowering is a pure function of the syntax node and the hygiene context.
Malformed input (missing segment, missing self type, trait path that does not
lower) yields None; shapes a conforming parser cannot produce raise
AssertionError.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from rsfront.core.name import Name, known
from rsfront.hygiene import DollarCrate, Hygiene, as_name
from rsfront.syntax import ast
from .path import (
	ABSOLUTE,
	CRATE,
	PLAIN,
	SELF,
	SUPER,
	GenericArg,
	GenericArgs,
	MacroCrateRoot,
	ModPath,
	Path,
	PathKind,
	TypeArgument,
	TypeRelativeRoot,
)
from .type_ref import TupleType, TypeRef

_KEYWORD_ROOTS = {
	ast.PathSegmentKind.CRATE_KW: CRATE,
	ast.PathSegmentKind.SELF_KW: SELF,
	ast.PathSegmentKind.SUPER_KW: SUPER,
}


def lower_path(path: ast.Path, hygiene: Hygiene) -> Optional[Path]:
	"""
	Convert a syntax path to a `Path`.

	Segments are visited right to left, following `resolve_qualifier`, and
	accumulated in that order; both accumulators are reversed at the end. A
	keyword root, a hygiene-detected `$crate`, or a type-qualified segment ends
	the walk.
	"""
	kind: PathKind = PLAIN
	segments: List[Name] = []
	generic_args: List[Optional[GenericArgs]] = []
	node = path
	while True:
		segment = node.segment
		if segment is None or segment.kind is None:
			return None

		if segment.has_colon_colon:
			kind = ABSOLUTE

		if segment.kind is ast.PathSegmentKind.NAME:
			if segment.name_ref is None:
				return None
			resolved = hygiene.name_ref_to_name(segment.name_ref)
			if isinstance(resolved, DollarCrate):
				kind = MacroCrateRoot(resolved.crate_id)
				break
			args = None
			if segment.type_arg_list is not None:
				args = lower_generic_args(segment.type_arg_list)
			if args is None:
				args = lower_generic_args_from_fn_path(segment.param_list, segment.ret_type)
			segments.append(resolved.name)
			generic_args.append(args)
		elif segment.kind is ast.PathSegmentKind.TYPE:
			if node.qualifier is not None:
				# Only the first segment of a path can be type-qualified.
				raise AssertionError("type-qualified path segment has a qualifier")
			if segment.type_ref is None:
				return None
			self_type = TypeRef.from_ast(segment.type_ref)
			if segment.trait_ref is None:
				# <T>::foo
				kind = TypeRelativeRoot(self_type)
				break
			# <T as Trait<A>>::Foo desugars to Trait<Self=T, A>::Foo
			spliced = _splice_trait_path(segment.trait_ref, self_type, segments, generic_args, hygiene)
			if spliced is None:
				return None
			kind = spliced
			break
		else:
			kind = _KEYWORD_ROOTS[segment.kind]
			break

		qualifier = resolve_qualifier(node)
		if qualifier is None:
			break
		node = qualifier

	segments.reverse()
	generic_args.reverse()
	return Path(ModPath(kind, tuple(segments)), tuple(generic_args))


def _splice_trait_path(
	trait_ref: ast.PathType,
	self_type: TypeRef,
	segments: List[Name],
	generic_args: List[Optional[GenericArgs]],
	hygiene: Hygiene,
) -> Optional[PathKind]:
	"""
	Append the lowered trait path (reversed) to the accumulators and give its
	last segment the synthesized `Self` argument. Returns the trait's root.
	"""
	if trait_ref.path is None:
		return None
	trait_path = lower_path(trait_ref.path, hygiene)
	if trait_path is None:
		return None
	if not trait_path.mod_path.segments:
		# `<T as crate>::X`: no trait segment to carry `Self`.
		return None

	# Accumulators are rightmost-first, so the trait's own last segment lands
	# right after what has been collected so far.
	trait_idx = len(segments)
	segments.extend(reversed(trait_path.mod_path.segments))
	generic_args.extend(reversed(trait_path.generic_args))

	trait_args = generic_args[trait_idx]
	if trait_args is None:
		trait_args = GenericArgs.empty()
	generic_args[trait_idx] = trait_args.with_self_type(self_type)
	return trait_path.kind


def resolve_qualifier(path: ast.Path) -> Optional[ast.Path]:
	"""
	The path to the left of `path`'s last segment.

	Prefers the direct qualifier. Otherwise, for a path sitting in a use-tree
	group (`use a::{b, c::d}`), continues with the path of the tree owning the
	nearest enclosing group.

	This is a bottom-up approximation: it does not track which group level a
	path belongs to, so unusual nestings can pick the wrong prefix. Use-tree
	lowering (`lower_use`) carries the prefix top-down instead.
	"""
	if path.qualifier is not None:
		return path.qualifier
	use_tree_list = next((n for n in path.ancestors() if isinstance(n, ast.UseTreeList)), None)
	if use_tree_list is None:
		return None
	use_tree = use_tree_list.parent_use_tree()
	if use_tree is None:
		return None
	return use_tree.path


def lower_generic_args(node: ast.TypeArgList) -> Optional[GenericArgs]:
	args: List[GenericArg] = []
	for type_arg in node.type_args:
		args.append(TypeArgument(TypeRef.from_ast_opt(type_arg.type_ref)))
	# lifetimes ignored for now
	bindings: List[Tuple[Name, TypeRef]] = []
	for assoc_type_arg in node.assoc_type_args:
		if assoc_type_arg.name_ref is None:
			continue
		bindings.append((as_name(assoc_type_arg.name_ref), TypeRef.from_ast_opt(assoc_type_arg.type_ref)))
	if not args and not bindings:
		return None
	return GenericArgs(args=tuple(args), has_self_type=False, bindings=tuple(bindings))


def lower_generic_args_from_fn_path(
	params: Optional[ast.ParamList],
	ret_type: Optional[ast.RetType],
) -> Optional[GenericArgs]:
	"""
	Collect `GenericArgs` from the parts of a fn-like path, i.e. `Fn(X, Y) -> Z`
	(which desugars to `Fn<(X, Y), Output=Z>`).
	"""
	args: List[GenericArg] = []
	bindings: List[Tuple[Name, TypeRef]] = []
	if params is not None:
		param_types = tuple(TypeRef.from_ast_opt(param.ascribed_type) for param in params.params)
		args.append(TypeArgument(TupleType(param_types)))
	if ret_type is not None:
		bindings.append((known.OUTPUT, TypeRef.from_ast_opt(ret_type.type_ref)))
	if not args and not bindings:
		return None
	return GenericArgs(args=tuple(args), has_self_type=False, bindings=tuple(bindings))


__all__ = [
	"lower_path",
	"resolve_qualifier",
	"lower_generic_args",
	"lower_generic_args_from_fn_path",
]
