# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type-reference lowering from parsed type syntax.
"""

from __future__ import annotations

import pytest

from rsfront.stage1.type_ref import (
	ArrayType,
	DynTraitType,
	ErrorBound,
	ErrorType,
	FnPointerType,
	ImplTraitType,
	Mutability,
	NeverType,
	PathBound,
	PathTypeRef,
	PlaceholderType,
	RawPtrType,
	ReferenceType,
	SliceType,
	TupleType,
	TypeRef,
)
from rsfront.syntax import ast, parse_type


def _ty(src: str) -> TypeRef:
	return TypeRef.from_ast(parse_type(src))


def test_parens_are_dropped():
	assert _ty("(u8)") == _ty("u8")
	assert _ty("((!))") == NeverType()


def test_unit_and_tuples():
	assert _ty("()") == TypeRef.unit()
	assert _ty("(u8,)") == TupleType((_ty("u8"),))
	one = _ty("(u8,)")
	assert str(one) == "(u8,)"
	assert str(_ty("(A, B)")) == "(A, B)"


def test_path_type_lowers_to_path():
	ty = _ty("std::vec::Vec<u8>")
	assert isinstance(ty, PathTypeRef)
	assert str(ty.path) == "std::vec::Vec<u8>"


def test_references_and_pointers():
	assert _ty("&'a mut T") == ReferenceType(_ty("T"), Mutability.MUT)
	assert _ty("&T").mutability is Mutability.SHARED
	assert _ty("*const u8") == RawPtrType(_ty("u8"), Mutability.SHARED)
	assert _ty("*mut u8") == RawPtrType(_ty("u8"), Mutability.MUT)


def test_arrays_and_slices():
	assert _ty("[u8; 4]") == ArrayType(_ty("u8"))
	assert _ty("[u8]") == SliceType(_ty("u8"))
	assert str(_ty("[u8; 4]")) == "[u8; _]"


def test_fn_pointers():
	assert _ty("fn(u8, u16) -> bool") == FnPointerType((_ty("u8"), _ty("u16")), _ty("bool"))
	assert _ty("fn()") == FnPointerType((), TypeRef.unit())
	assert str(_ty("fn(A)")) == "fn(A)"
	assert str(_ty("fn(A) -> B")) == "fn(A) -> B"


def test_trait_object_bounds():
	dyn_ty = _ty("dyn Iterator<Item = u8> + Send + 'static")
	assert isinstance(dyn_ty, DynTraitType)
	assert [type(b) for b in dyn_ty.bounds] == [PathBound, PathBound, ErrorBound]
	impl_ty = _ty("impl Fn(u8) -> u8")
	assert isinstance(impl_ty, ImplTraitType)
	assert str(impl_ty) == "impl Fn<(u8,), Output = u8>"


def test_never_and_placeholder():
	assert _ty("!") == NeverType()
	assert _ty("_") == PlaceholderType()


def test_missing_nodes_are_error_types():
	assert TypeRef.from_ast_opt(None) == ErrorType()
	assert TypeRef.from_ast(ast.ReferenceType()) == ReferenceType(ErrorType())
	assert TypeRef.from_ast(ast.PathType()) == ErrorType()


def test_unlowerable_path_is_error_type():
	node = ast.PathType(path=ast.Path(segment=ast.PathSegment(kind=None)))
	assert TypeRef.from_ast(node) == ErrorType()


@pytest.mark.parametrize("src", ["&mut (A, B)", "*const [u8]", "fn(&T) -> Option<U>"])
def test_type_refs_are_hashable(src):
	assert hash(_ty(src)) == hash(_ty(src))
