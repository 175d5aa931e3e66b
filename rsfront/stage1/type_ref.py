# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Semantic type references.

A `TypeRef` is the syntax of a type with the syntax noise removed: parens are
gone, paths are lowered `Path` values, and anything missing or unparsable is
an `ErrorType` instead of a failure. Nothing is resolved here; `Vec<T>` is a
path type whose meaning is decided later by name resolution.

All variants are frozen and hashable so type references can sit inside
shared `GenericArgs` values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from rsfront.syntax import ast
from .path import Path


class Mutability(Enum):
	SHARED = auto()
	MUT = auto()

	@staticmethod
	def from_mutable(mutable: bool) -> "Mutability":
		return Mutability.MUT if mutable else Mutability.SHARED


class TypeRef:
	"""Base class for semantic type references."""

	@staticmethod
	def from_ast(node: ast.TypeNode) -> "TypeRef":
		return _lower_type(node)

	@staticmethod
	def from_ast_opt(node: Optional[ast.TypeNode]) -> "TypeRef":
		"""Like `from_ast`, but a missing node lowers to `ErrorType`."""
		if node is None:
			return ErrorType()
		return _lower_type(node)

	@staticmethod
	def unit() -> "TypeRef":
		return TupleType(())


@dataclass(frozen=True)
class NeverType(TypeRef):
	def __str__(self) -> str:
		return "!"


@dataclass(frozen=True)
class PlaceholderType(TypeRef):
	def __str__(self) -> str:
		return "_"


@dataclass(frozen=True)
class TupleType(TypeRef):
	fields: Tuple[TypeRef, ...] = ()

	def __post_init__(self) -> None:
		object.__setattr__(self, "fields", tuple(self.fields))

	def __str__(self) -> str:
		if len(self.fields) == 1:
			return f"({self.fields[0]},)"
		return "(" + ", ".join(str(f) for f in self.fields) + ")"


@dataclass(frozen=True)
class PathTypeRef(TypeRef):
	path: Path

	def __str__(self) -> str:
		return str(self.path)


@dataclass(frozen=True)
class RawPtrType(TypeRef):
	inner: TypeRef
	mutability: Mutability = Mutability.SHARED

	def __str__(self) -> str:
		qual = "mut" if self.mutability is Mutability.MUT else "const"
		return f"*{qual} {self.inner}"


@dataclass(frozen=True)
class ReferenceType(TypeRef):
	inner: TypeRef
	mutability: Mutability = Mutability.SHARED

	def __str__(self) -> str:
		qual = "mut " if self.mutability is Mutability.MUT else ""
		return f"&{qual}{self.inner}"


@dataclass(frozen=True)
class ArrayType(TypeRef):
	# Array lengths are expressions; they are not modelled yet.
	inner: TypeRef

	def __str__(self) -> str:
		return f"[{self.inner}; _]"


@dataclass(frozen=True)
class SliceType(TypeRef):
	inner: TypeRef

	def __str__(self) -> str:
		return f"[{self.inner}]"


@dataclass(frozen=True)
class FnPointerType(TypeRef):
	params: Tuple[TypeRef, ...] = ()
	ret: TypeRef = TupleType(())

	def __post_init__(self) -> None:
		object.__setattr__(self, "params", tuple(self.params))

	def __str__(self) -> str:
		params = ", ".join(str(p) for p in self.params)
		if self.ret == TypeRef.unit():
			return f"fn({params})"
		return f"fn({params}) -> {self.ret}"


class TypeBound:
	"""Base class for bounds in `impl`/`dyn` types."""
	pass


@dataclass(frozen=True)
class PathBound(TypeBound):
	path: Path

	def __str__(self) -> str:
		return str(self.path)


@dataclass(frozen=True)
class ErrorBound(TypeBound):
	"""A bound that could not be lowered (lifetimes are not modelled)."""

	def __str__(self) -> str:
		return "{error}"


@dataclass(frozen=True)
class ImplTraitType(TypeRef):
	bounds: Tuple[TypeBound, ...] = ()

	def __post_init__(self) -> None:
		object.__setattr__(self, "bounds", tuple(self.bounds))

	def __str__(self) -> str:
		return "impl " + " + ".join(str(b) for b in self.bounds)


@dataclass(frozen=True)
class DynTraitType(TypeRef):
	bounds: Tuple[TypeBound, ...] = ()

	def __post_init__(self) -> None:
		object.__setattr__(self, "bounds", tuple(self.bounds))

	def __str__(self) -> str:
		return "dyn " + " + ".join(str(b) for b in self.bounds)


@dataclass(frozen=True)
class ErrorType(TypeRef):
	"""Placeholder for missing or unlowerable type syntax."""

	def __str__(self) -> str:
		return "{error}"


def _lower_bound(bound: ast.TypeBound) -> TypeBound:
	if bound.path_type is not None and bound.path_type.path is not None:
		path = Path.from_ast(bound.path_type.path)
		if path is not None:
			return PathBound(path)
	return ErrorBound()


def _lower_type(node: ast.TypeNode) -> TypeRef:
	if isinstance(node, ast.ParenType):
		return TypeRef.from_ast_opt(node.inner)
	if isinstance(node, ast.TupleType):
		return TupleType(tuple(TypeRef.from_ast(f) for f in node.fields))
	if isinstance(node, ast.NeverType):
		return NeverType()
	if isinstance(node, ast.PlaceholderType):
		return PlaceholderType()
	if isinstance(node, ast.PathType):
		# Type paths are lowered without hygiene; a path that cannot be
		# lowered degrades to an error type rather than failing the caller.
		path = Path.from_ast(node.path) if node.path is not None else None
		return PathTypeRef(path) if path is not None else ErrorType()
	if isinstance(node, ast.PointerType):
		return RawPtrType(TypeRef.from_ast_opt(node.inner), Mutability.from_mutable(node.mutable))
	if isinstance(node, ast.ReferenceType):
		return ReferenceType(TypeRef.from_ast_opt(node.inner), Mutability.from_mutable(node.mutable))
	if isinstance(node, ast.ArrayType):
		return ArrayType(TypeRef.from_ast_opt(node.inner))
	if isinstance(node, ast.SliceType):
		return SliceType(TypeRef.from_ast_opt(node.inner))
	if isinstance(node, ast.FnPointerType):
		params: Tuple[TypeRef, ...] = ()
		if node.param_list is not None:
			params = tuple(TypeRef.from_ast_opt(p.ascribed_type) for p in node.param_list.params)
		ret = TypeRef.unit()
		if node.ret_type is not None:
			ret = TypeRef.from_ast_opt(node.ret_type.type_ref)
		return FnPointerType(params, ret)
	if isinstance(node, ast.ImplTraitType):
		return ImplTraitType(tuple(_lower_bound(b) for b in node.bounds))
	if isinstance(node, ast.DynTraitType):
		return DynTraitType(tuple(_lower_bound(b) for b in node.bounds))
	return ErrorType()


__all__ = [
	"Mutability",
	"TypeRef",
	"NeverType",
	"PlaceholderType",
	"TupleType",
	"PathTypeRef",
	"RawPtrType",
	"ReferenceType",
	"ArrayType",
	"SliceType",
	"FnPointerType",
	"TypeBound",
	"PathBound",
	"ErrorBound",
	"ImplTraitType",
	"DynTraitType",
	"ErrorType",
]
