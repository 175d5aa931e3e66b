# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Stage1 path lowering tests.

These exercise `lower_path` end to end from parsed syntax:
  - roots: plain, absolute, crate/self/super, macro `$crate`, `<T>::`
  - per-segment generic arguments and their index alignment
  - `Fn(A) -> B` sugar and `<T as Trait<A>>::Item` desugaring
  - failure and invariant-violation behavior on malformed syntax
"""

from __future__ import annotations

import pytest

from rsfront.core.name import Name, known
from rsfront.hygiene import Hygiene
from rsfront.stage1 import (
	ABSOLUTE,
	CRATE,
	PLAIN,
	SELF,
	SUPER,
	GenericArgs,
	MacroCrateRoot,
	Path,
	TypeArgument,
	TypeRelativeRoot,
	lower_path,
)
from rsfront.stage1.type_ref import TupleType, TypeRef
from rsfront.syntax import ast, parse_path, parse_type


def _lower(src: str, hygiene: Hygiene | None = None) -> Path:
	path = lower_path(parse_path(src), hygiene or Hygiene.new_unhygienic())
	assert path is not None
	return path


def _names(path: Path) -> list[str]:
	return [str(n) for n in path.mod_path.segments]


def _ty(src: str) -> TypeRef:
	return TypeRef.from_ast(parse_type(src))


def test_plain_path_keeps_source_order():
	path = _lower("a::b::c")
	assert path.kind == PLAIN
	assert _names(path) == ["a", "b", "c"]
	assert path.generic_args == (None, None, None)


def test_leading_colon_colon_is_absolute():
	path = _lower("::a::b")
	assert path.kind == ABSOLUTE
	assert _names(path) == ["a", "b"]


@pytest.mark.parametrize(
	"src, kind",
	[
		("crate::x", CRATE),
		("self::x", SELF),
		("super::x", SUPER),
	],
)
def test_keyword_roots(src, kind):
	path = _lower(src)
	assert path.kind == kind
	assert _names(path) == ["x"]
	assert path.generic_args == (None,)


def test_bare_keyword_has_no_segments():
	path = _lower("self")
	assert path.kind == SELF
	assert path.mod_path.segments == ()
	assert path.generic_args == ()


def test_generic_args_attach_to_their_segment():
	path = _lower("a::b<T, U>")
	assert _names(path) == ["a", "b"]
	assert path.generic_args[0] is None
	args = path.generic_args[1]
	assert args == GenericArgs(args=(TypeArgument(_ty("T")), TypeArgument(_ty("U"))))
	assert args.has_self_type is False
	assert args.bindings == ()


def test_turbofish_matches_plain_generic_args():
	assert _lower("Vec::<u8>::new") == _lower("Vec<u8>::new")


def test_nested_generic_args():
	path = _lower("HashMap<K, Vec<V>>")
	args = path.generic_args[0]
	assert args is not None
	assert [str(a) for a in args.args] == ["K", "Vec<V>"]


def test_associated_type_bindings():
	path = _lower("Iterator<Item = u32>")
	args = path.generic_args[0]
	assert args is not None
	assert args.args == ()
	assert args.bindings == ((Name("Item"), _ty("u32")),)


def test_lifetimes_are_ignored():
	path = _lower("Cow<'a, str>")
	assert path.generic_args[0] == GenericArgs(args=(TypeArgument(_ty("str")),))
	only_lifetimes = _lower("Ref<'a>")
	assert only_lifetimes.generic_args == (None,)


def test_empty_generic_list_collapses_to_none():
	assert _lower("a<>").generic_args == (None,)


def test_fn_sugar_lowers_to_tuple_and_output_binding():
	path = _lower("Fn(X, Y) -> Z")
	args = path.generic_args[0]
	assert args == GenericArgs(
		args=(TypeArgument(TupleType((_ty("X"), _ty("Y")))),),
		bindings=((known.OUTPUT, _ty("Z")),),
	)


def test_fn_sugar_is_structurally_identical_to_written_form():
	sugared = _lower("std::ops::Fn(X, Y) -> Z")
	written = _lower("std::ops::Fn<(X, Y), Output = Z>")
	assert sugared == written


def test_fn_sugar_without_return_type():
	path = _lower("FnMut()")
	assert path.generic_args[0] == GenericArgs(args=(TypeArgument(TypeRef.unit()),))


def test_trait_qualified_path_inserts_self_type():
	path = _lower("<T as Trait<A>>::Item")
	assert path.kind == PLAIN
	assert _names(path) == ["Trait", "Item"]
	trait_args = path.generic_args[0]
	assert trait_args == GenericArgs(
		args=(TypeArgument(_ty("T")), TypeArgument(_ty("A"))),
		has_self_type=True,
	)
	assert trait_args.self_type() == _ty("T")
	assert path.generic_args[1] is None


def test_trait_qualified_path_self_goes_on_last_trait_segment():
	path = _lower("<T as a::b::Trait>::Item")
	assert _names(path) == ["a", "b", "Trait", "Item"]
	assert path.generic_args[0] is None
	assert path.generic_args[1] is None
	assert path.generic_args[2] == GenericArgs(args=(TypeArgument(_ty("T")),), has_self_type=True)
	assert path.generic_args[3] is None


def test_trait_qualified_path_takes_trait_root():
	assert _lower("<T as crate::m::Trait>::Item").kind == CRATE
	assert _lower("<T as ::std::Trait>::Item").kind == ABSOLUTE


def test_trait_qualified_path_keeps_outer_segment_args():
	path = _lower("<Vec<u8> as IntoIterator>::IntoIter<X>")
	assert _names(path) == ["IntoIterator", "IntoIter"]
	assert path.generic_args[0] == GenericArgs(args=(TypeArgument(_ty("Vec<u8>")),), has_self_type=True)
	assert path.generic_args[1] == GenericArgs(args=(TypeArgument(_ty("X")),))


def test_trait_qualified_path_renders_desugared():
	assert str(_lower("<T as Trait<A>>::Item")) == "Trait<Self = T, A>::Item"


def test_trait_without_segments_fails():
	assert lower_path(parse_path("<T as crate>::X"), Hygiene.new_unhygienic()) is None


def test_type_relative_path():
	path = _lower("<Vec<u8>>::new")
	assert path.kind == TypeRelativeRoot(_ty("Vec<u8>"))
	assert path.type_anchor() == _ty("Vec<u8>")
	assert _names(path) == ["new"]
	assert str(path) == "<Vec<u8>>::new"


def test_dollar_crate_in_macro_context():
	path = _lower("$crate::foo::Bar", Hygiene.for_macro(7))
	assert path.kind == MacroCrateRoot(7)
	assert _names(path) == ["foo", "Bar"]
	assert path.generic_args == (None, None)
	assert str(path) == "$crate::foo::Bar"


def test_dollar_crate_outside_macro_is_a_plain_name():
	path = _lower("$crate::foo")
	assert path.kind == PLAIN
	assert _names(path) == ["$crate", "foo"]


def test_dollar_crate_stops_the_walk():
	path = _lower("a::$crate::b", Hygiene.for_macro(1))
	assert path.kind == MacroCrateRoot(1)
	assert _names(path) == ["b"]


def test_raw_identifiers_drop_prefix():
	assert _names(_lower("r#type::r#match")) == ["type", "match"]


def test_raw_keyword_names_render_distinct_from_keyword_roots():
	raw = _lower("r#crate::x")
	assert raw.kind == PLAIN
	assert _names(raw) == ["crate", "x"]
	assert str(raw) == "r#crate::x"
	assert str(_lower("crate::x")) == "crate::x"
	assert str(_lower("a::r#type<T>")) == "a::r#type<T>"


@pytest.mark.parametrize(
	"src",
	[
		"a",
		"a::b::c",
		"::a::b<T>",
		"crate::a<'x, T, Item = U>::b",
		"Fn(A) -> B",
		"<T>::a::b<C>",
		"<T as a::Tr<U>>::X",
		"<<A as B>::C as D<E>>::F::G",
	],
)
def test_segments_and_generic_args_stay_aligned(src):
	path = _lower(src)
	assert len(path.mod_path.segments) == len(path.generic_args)
	assert len(path.segments()) == len(path.generic_args)


def test_empty_path_fails():
	assert lower_path(ast.Path(), Hygiene.new_unhygienic()) is None


def test_segment_without_kind_fails():
	node = ast.Path(segment=ast.PathSegment(kind=None))
	assert lower_path(node, Hygiene.new_unhygienic()) is None


def test_missing_qualifier_segment_fails():
	node = ast.Path(
		qualifier=ast.Path(),
		segment=ast.PathSegment(kind=ast.PathSegmentKind.NAME, name_ref=ast.NameRef("x")),
	)
	assert lower_path(node, Hygiene.new_unhygienic()) is None


def test_type_segment_without_self_type_fails():
	node = ast.Path(segment=ast.PathSegment(kind=ast.PathSegmentKind.TYPE))
	assert lower_path(node, Hygiene.new_unhygienic()) is None


def test_type_segment_with_empty_trait_ref_fails():
	node = ast.Path(
		segment=ast.PathSegment(
			kind=ast.PathSegmentKind.TYPE,
			type_ref=ast.PlaceholderType(),
			trait_ref=ast.PathType(),
		)
	)
	assert lower_path(node, Hygiene.new_unhygienic()) is None


def test_type_segment_with_qualifier_is_an_invariant_violation():
	node = ast.Path(
		qualifier=parse_path("a"),
		segment=ast.PathSegment(kind=ast.PathSegmentKind.TYPE, type_ref=ast.PlaceholderType()),
	)
	with pytest.raises(AssertionError):
		lower_path(node, Hygiene.new_unhygienic())


def test_from_src_and_from_ast_agree_outside_macros():
	node = parse_path("a::b<T>")
	assert Path.from_ast(node) == Path.from_src(node, Hygiene.new_unhygienic())
