# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Use-tree lowering.

`use a::{b, c::{self, d as e}, f::*};` flattens to one `ImportEntry` per
imported thing:

  a::b        a::c        a::c::d as e        a::f::*

Unlike `lower_path`, which rebuilds a path's prefix bottom-up from the syntax
tree, this walks the tree top-down and carries the prefix explicitly, so
nesting depth does not matter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from rsfront.core.name import Name
from rsfront.hygiene import DollarCrate, Hygiene, as_name
from rsfront.syntax import ast
from .path import ABSOLUTE, CRATE, PLAIN, SELF, SUPER, MacroCrateRoot, ModPath


@dataclass(frozen=True)
class ImportAlias:
	"""`as name`, or `as _` when `name` is None."""

	name: Optional[Name] = None

	def is_underscore(self) -> bool:
		return self.name is None


@dataclass(frozen=True)
class ImportEntry:
	"""One imported path out of a (possibly nested) use tree."""

	path: ModPath
	is_glob: bool = False
	alias: Optional[ImportAlias] = None
	# The leaf tree the entry came from (for diagnostics/source maps).
	tree: Optional[ast.UseTree] = field(default=None, compare=False, repr=False)


def lower_use_tree(prefix: Optional[ModPath], tree: ast.UseTree, hygiene: Hygiene) -> List[ImportEntry]:
	"""
	Flatten `tree` into import entries, with `prefix` prepended to each.

	Entries that cannot be lowered are skipped (type-qualified segments,
	generic arguments, keywords after a prefix).
	"""
	entries: List[ImportEntry] = []
	_lower_tree(prefix, tree, hygiene, entries)
	return entries


def _lower_tree(prefix: Optional[ModPath], tree: ast.UseTree, hygiene: Hygiene, out: List[ImportEntry]) -> None:
	if tree.use_tree_list is not None:
		if tree.path is not None:
			prefix = _convert_path(prefix, tree.path, hygiene)
			if prefix is None:
				return
		for child in tree.use_tree_list.use_trees:
			_lower_tree(prefix, child, hygiene, out)
		return

	alias = _alias(tree.rename)
	if tree.path is not None:
		# `use something::{self, ...}` imports `something` itself.
		if tree.path.qualifier is None and prefix is not None:
			segment = tree.path.segment
			if segment is not None and segment.kind is ast.PathSegmentKind.SELF_KW:
				out.append(ImportEntry(prefix, is_glob=False, alias=alias, tree=tree))
				return
		path = _convert_path(prefix, tree.path, hygiene)
		if path is not None:
			out.append(ImportEntry(path, is_glob=tree.star, alias=alias, tree=tree))
	elif tree.star and prefix is not None:
		# `use Enum::{*}` or `use a::{b, *}`
		out.append(ImportEntry(prefix, is_glob=True, alias=None, tree=tree))


def _alias(rename: Optional[ast.Rename]) -> Optional[ImportAlias]:
	if rename is None:
		return None
	if rename.underscore:
		return ImportAlias(None)
	if rename.name_ref is None:
		return None
	return ImportAlias(as_name(rename.name_ref))


def _convert_path(prefix: Optional[ModPath], path: ast.Path, hygiene: Hygiene) -> Optional[ModPath]:
	if path.qualifier is not None:
		prefix = _convert_path(prefix, path.qualifier, hygiene)
		if prefix is None:
			return None

	segment = path.segment
	if segment is None or segment.kind is None:
		return None
	if segment.kind is ast.PathSegmentKind.NAME:
		if segment.name_ref is None:
			return None
		if segment.type_arg_list is not None or segment.param_list is not None or segment.ret_type is not None:
			# no generic arguments in imports
			return None
		resolved = hygiene.name_ref_to_name(segment.name_ref)
		if isinstance(resolved, DollarCrate):
			return ModPath.from_simple_segments(MacroCrateRoot(resolved.crate_id), ())
		if prefix is None:
			kind = ABSOLUTE if segment.has_colon_colon else PLAIN
			return ModPath(kind, (resolved.name,))
		return ModPath(prefix.kind, prefix.segments + (resolved.name,))
	if segment.kind is ast.PathSegmentKind.TYPE:
		# not allowed in imports
		return None
	if prefix is not None:
		# `crate`/`self`/`super` are only valid as the first segment
		return None
	if segment.kind is ast.PathSegmentKind.CRATE_KW:
		return ModPath.from_simple_segments(CRATE, ())
	if segment.kind is ast.PathSegmentKind.SELF_KW:
		return ModPath.from_simple_segments(SELF, ())
	return ModPath.from_simple_segments(SUPER, ())


__all__ = ["ImportAlias", "ImportEntry", "lower_use_tree"]
