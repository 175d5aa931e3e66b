# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Syntax nodes for paths, types and use trees.

These mirror the grammar closely and carry no semantic information: names are
still raw source text, keywords are still keywords, sugar is still sugar.

Every node knows its `parent`. Links are established when the parent node is
constructed (children are always built first), so hand-built trees in tests
get the same links as trees produced by the parser. `parent` and `span` are
plain attributes, not dataclass fields, so they never take part in equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum, auto
from typing import Iterator, List, Optional

from rsfront.core.span import Span


class SyntaxNode:
	"""Base class for all syntax nodes."""

	parent: Optional["SyntaxNode"] = None
	span: Span = Span()

	def __post_init__(self) -> None:
		for f in fields(self):  # type: ignore[arg-type]
			_adopt(self, getattr(self, f.name))

	def ancestors(self) -> Iterator["SyntaxNode"]:
		"""Yield this node and then every enclosing node, innermost first."""
		node: Optional[SyntaxNode] = self
		while node is not None:
			yield node
			node = node.parent


def _adopt(parent: SyntaxNode, value: object) -> None:
	if isinstance(value, SyntaxNode):
		value.parent = parent
	elif isinstance(value, list):
		for item in value:
			if isinstance(item, SyntaxNode):
				item.parent = parent


# Names


@dataclass
class NameRef(SyntaxNode):
	"""An identifier occurrence (`foo`, `r#type`, `$crate`)."""

	text: str

	def is_dollar_crate(self) -> bool:
		return self.text == "$crate"


# Paths


class PathSegmentKind(Enum):
	NAME = auto()  # foo, foo<T>, Fn(A) -> B
	TYPE = auto()  # <T>, <T as Trait>
	CRATE_KW = auto()
	SELF_KW = auto()
	SUPER_KW = auto()


@dataclass
class PathSegment(SyntaxNode):
	"""
	One `::`-delimited unit of a path.

	`kind` is None only for structurally incomplete hand-built nodes; the
	parser always fills it. Which of the optional parts are present depends on
	the kind:
	  - NAME: `name_ref`, and at most one of `type_arg_list` or
	    `param_list` (+ optional `ret_type`) for `Fn(A) -> B` sugar
	  - TYPE: `type_ref` (the self type) and optional `trait_ref`
	  - keywords: nothing
	"""

	kind: Optional[PathSegmentKind]
	has_colon_colon: bool = False
	name_ref: Optional[NameRef] = None
	type_arg_list: Optional["TypeArgList"] = None
	param_list: Optional["ParamList"] = None
	ret_type: Optional["RetType"] = None
	type_ref: Optional["TypeNode"] = None
	trait_ref: Optional["PathType"] = None


@dataclass
class Path(SyntaxNode):
	"""
	A path is its last segment plus the path to its left (the qualifier).

	`a::b::c` is `Path(Path(Path(None, a), b), c)`.
	"""

	qualifier: Optional["Path"] = None
	segment: Optional[PathSegment] = None

	def first_segment(self) -> Optional[PathSegment]:
		path = self
		while path.qualifier is not None:
			path = path.qualifier
		return path.segment


# Generic arguments


@dataclass
class TypeArg(SyntaxNode):
	type_ref: Optional["TypeNode"] = None


@dataclass
class LifetimeArg(SyntaxNode):
	lifetime: str


@dataclass
class AssocTypeArg(SyntaxNode):
	"""`Name = Type` inside a generic argument list."""

	name_ref: Optional[NameRef] = None
	type_ref: Optional["TypeNode"] = None


@dataclass
class TypeArgList(SyntaxNode):
	"""Bracketed generic arguments, split by flavor (each in source order)."""

	type_args: List[TypeArg] = field(default_factory=list)
	lifetime_args: List[LifetimeArg] = field(default_factory=list)
	assoc_type_args: List[AssocTypeArg] = field(default_factory=list)


@dataclass
class Param(SyntaxNode):
	ascribed_type: Optional["TypeNode"] = None


@dataclass
class ParamList(SyntaxNode):
	params: List[Param] = field(default_factory=list)


@dataclass
class RetType(SyntaxNode):
	type_ref: Optional["TypeNode"] = None


# Types


class TypeNode(SyntaxNode):
	"""Base class for type syntax."""
	pass


@dataclass
class PathType(TypeNode):
	path: Optional[Path] = None


@dataclass
class TupleType(TypeNode):
	"""`()` or `(A,)` or `(A, B, ...)`."""

	fields: List[TypeNode] = field(default_factory=list)


@dataclass
class ParenType(TypeNode):
	inner: Optional[TypeNode] = None


@dataclass
class NeverType(TypeNode):
	pass


@dataclass
class PlaceholderType(TypeNode):
	pass


@dataclass
class ReferenceType(TypeNode):
	inner: Optional[TypeNode] = None
	mutable: bool = False
	lifetime: Optional[str] = None


@dataclass
class PointerType(TypeNode):
	inner: Optional[TypeNode] = None
	mutable: bool = False


@dataclass
class SliceType(TypeNode):
	inner: Optional[TypeNode] = None


@dataclass
class ArrayType(TypeNode):
	inner: Optional[TypeNode] = None
	length: Optional[str] = None


@dataclass
class FnPointerType(TypeNode):
	param_list: Optional[ParamList] = None
	ret_type: Optional[RetType] = None


@dataclass
class TypeBound(SyntaxNode):
	"""Either a trait path or a lifetime."""

	path_type: Optional[PathType] = None
	lifetime: Optional[str] = None


@dataclass
class DynTraitType(TypeNode):
	bounds: List[TypeBound] = field(default_factory=list)


@dataclass
class ImplTraitType(TypeNode):
	bounds: List[TypeBound] = field(default_factory=list)


# Use trees


@dataclass
class Rename(SyntaxNode):
	"""`as name` or `as _`."""

	name_ref: Optional[NameRef] = None
	underscore: bool = False


@dataclass
class UseTreeList(SyntaxNode):
	use_trees: List["UseTree"] = field(default_factory=list)

	def parent_use_tree(self) -> Optional["UseTree"]:
		"""The tree owning this `{...}` group (None for detached nodes)."""
		return self.parent if isinstance(self.parent, UseTree) else None


@dataclass
class UseTree(SyntaxNode):
	"""
	`path`, `path::*`, `path::{...}`, `*`, `{...}`, optionally renamed.

	At most one of `star` / `use_tree_list` is set.
	"""

	path: Optional[Path] = None
	star: bool = False
	use_tree_list: Optional[UseTreeList] = None
	rename: Optional[Rename] = None


__all__ = [
	"SyntaxNode",
	"NameRef",
	"PathSegmentKind",
	"PathSegment",
	"Path",
	"TypeArg",
	"LifetimeArg",
	"AssocTypeArg",
	"TypeArgList",
	"Param",
	"ParamList",
	"RetType",
	"TypeNode",
	"PathType",
	"TupleType",
	"ParenType",
	"NeverType",
	"PlaceholderType",
	"ReferenceType",
	"PointerType",
	"SliceType",
	"ArrayType",
	"FnPointerType",
	"TypeBound",
	"DynTraitType",
	"ImplTraitType",
	"Rename",
	"UseTreeList",
	"UseTree",
]
