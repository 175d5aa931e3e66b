# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Semantic paths.

Pipeline placement:
  syntax.ast.Path -> (stage1.lower) -> Path -> name resolution / type checking

A `Path` is the uniform shape every surface path form lowers to:
  - a root (`PathKind`): plain, `::`-absolute, `crate`, `self`, `super`,
    macro `$crate`, or type-relative `<T>::`
  - the remaining segment names in source order
  - one optional `GenericArgs` per segment, index-aligned with the names

Everything here is frozen and hashable. Lowering builds fresh values and never
mutates them afterwards, so equal `GenericArgs` can be shared freely between
paths (callers may intern them; nothing here requires it).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from rsfront.core.name import Name
from rsfront.hygiene import CrateId, Hygiene

if TYPE_CHECKING:
	from rsfront.syntax import ast
	from .type_ref import TypeRef


# Path roots


class PathKind:
	"""Base class for path roots."""


@dataclass(frozen=True)
class PlainRoot(PathKind):
	def __str__(self) -> str:
		return ""


@dataclass(frozen=True)
class AbsoluteRoot(PathKind):
	def __str__(self) -> str:
		return ""


@dataclass(frozen=True)
class CrateRoot(PathKind):
	def __str__(self) -> str:
		return "crate"


@dataclass(frozen=True)
class SelfRoot(PathKind):
	def __str__(self) -> str:
		return "self"


@dataclass(frozen=True)
class SuperRoot(PathKind):
	def __str__(self) -> str:
		return "super"


@dataclass(frozen=True)
class MacroCrateRoot(PathKind):
	"""`$crate` resolved by hygiene to the crate that defined the macro."""

	crate_id: CrateId

	def __str__(self) -> str:
		return "$crate"


@dataclass(frozen=True)
class TypeRelativeRoot(PathKind):
	"""`<T>::item`."""

	type_ref: "TypeRef"

	def __str__(self) -> str:
		return f"<{self.type_ref}>"


PLAIN = PlainRoot()
ABSOLUTE = AbsoluteRoot()
CRATE = CrateRoot()
SELF = SelfRoot()
SUPER = SuperRoot()


# Generic arguments


class GenericArg:
	"""Base class for generic arguments (lifetimes/consts would be siblings)."""
	pass


@dataclass(frozen=True)
class TypeArgument(GenericArg):
	type_ref: "TypeRef"

	def __str__(self) -> str:
		return str(self.type_ref)


@dataclass(frozen=True)
class GenericArgs:
	"""
	Generic arguments of one path segment.

	`has_self_type` marks that `args[0]` is a synthesized `Self` argument
	(from `<T as Trait<A>>::Item`), not something the user wrote in the list.
	`bindings` are associated-type bindings (`Output = T`) in source order.
	"""

	args: Tuple[GenericArg, ...] = ()
	has_self_type: bool = False
	bindings: Tuple[Tuple[Name, "TypeRef"], ...] = ()

	def __post_init__(self) -> None:
		object.__setattr__(self, "args", tuple(self.args))
		object.__setattr__(self, "bindings", tuple((name, ty) for name, ty in self.bindings))

	@staticmethod
	def empty() -> "GenericArgs":
		return GenericArgs()

	def is_empty(self) -> bool:
		return not self.args and not self.bindings

	def with_self_type(self, self_type: "TypeRef") -> "GenericArgs":
		"""Return a copy with `self_type` inserted as argument 0 and the flag set."""
		return GenericArgs(
			args=(TypeArgument(self_type),) + self.args,
			has_self_type=True,
			bindings=self.bindings,
		)

	def self_type(self) -> Optional["TypeRef"]:
		if not self.has_self_type or not self.args:
			return None
		first = self.args[0]
		return first.type_ref if isinstance(first, TypeArgument) else None

	def __str__(self) -> str:
		parts: List[str] = []
		for idx, arg in enumerate(self.args):
			if idx == 0 and self.has_self_type:
				parts.append(f"Self = {arg}")
			else:
				parts.append(str(arg))
		parts.extend(f"{name} = {ty}" for name, ty in self.bindings)
		return "<" + ", ".join(parts) + ">"


# Paths


@dataclass(frozen=True)
class ModPath:
	"""A root plus segment names in source order (leftmost first)."""

	kind: PathKind
	segments: Tuple[Name, ...] = ()

	def __post_init__(self) -> None:
		object.__setattr__(self, "segments", tuple(self.segments))

	@staticmethod
	def from_simple_segments(kind: PathKind, segments: Iterable[Name]) -> "ModPath":
		return ModPath(kind, tuple(segments))

	def __len__(self) -> int:
		return len(self.segments)

	def is_ident(self) -> bool:
		return isinstance(self.kind, PlainRoot) and len(self.segments) == 1

	def is_self(self) -> bool:
		return isinstance(self.kind, SelfRoot) and not self.segments

	def as_ident(self) -> Optional[Name]:
		return self.segments[0] if self.is_ident() else None

	def __str__(self) -> str:
		return _render(self.kind, [s.display() for s in self.segments])


class Segment(NamedTuple):
	"""One semantic segment: its name and (optional) generic arguments."""

	name: Name
	args: Optional[GenericArgs]


@dataclass(frozen=True)
class Path:
	"""
	A lowered path: `mod_path` plus per-segment generic arguments.

	Invariant: `len(generic_args) == len(mod_path.segments)`; slot i holds the
	arguments written on segment i, or None when none were written.
	"""

	mod_path: ModPath
	generic_args: Tuple[Optional[GenericArgs], ...] = ()

	def __post_init__(self) -> None:
		object.__setattr__(self, "generic_args", tuple(self.generic_args))
		if len(self.generic_args) != len(self.mod_path.segments):
			raise ValueError(
				f"path has {len(self.mod_path.segments)} segments but "
				f"{len(self.generic_args)} generic argument slots"
			)

	@staticmethod
	def from_src(node: "ast.Path", hygiene: Hygiene) -> Optional["Path"]:
		"""Lower a syntax path; `$crate` is resolved through `hygiene`."""
		# Local import: the lowering module depends on this one.
		from .lower import lower_path

		return lower_path(node, hygiene)

	@staticmethod
	def from_ast(node: "ast.Path") -> Optional["Path"]:
		"""Lower a syntax path that did not come from a macro expansion."""
		return Path.from_src(node, Hygiene.new_unhygienic())

	@staticmethod
	def from_known_path(
		mod_path: ModPath,
		generic_args: Optional[Sequence[Optional[GenericArgs]]] = None,
	) -> "Path":
		if generic_args is None:
			generic_args = [None] * len(mod_path.segments)
		return Path(mod_path, tuple(generic_args))

	@property
	def kind(self) -> PathKind:
		return self.mod_path.kind

	def type_anchor(self) -> Optional["TypeRef"]:
		"""The `T` of a `<T>::...` path, if this is one."""
		if isinstance(self.kind, TypeRelativeRoot):
			return self.kind.type_ref
		return None

	def segments(self) -> List[Segment]:
		return [Segment(name, args) for name, args in zip(self.mod_path.segments, self.generic_args)]

	def qualifier(self) -> Optional["Path"]:
		"""The path without its last segment (None for a segment-less path)."""
		if not self.mod_path.segments:
			return None
		return Path(
			ModPath(self.kind, self.mod_path.segments[:-1]),
			self.generic_args[:-1],
		)

	def as_ident(self) -> Optional[Name]:
		if any(args is not None for args in self.generic_args):
			return None
		return self.mod_path.as_ident()

	def __str__(self) -> str:
		parts = [
			name.display() + (str(args) if args is not None else "")
			for name, args in zip(self.mod_path.segments, self.generic_args)
		]
		return _render(self.kind, parts)


def _render(kind: PathKind, parts: List[str]) -> str:
	if isinstance(kind, PlainRoot):
		return "::".join(parts)
	if isinstance(kind, AbsoluteRoot):
		return "::" + "::".join(parts)
	return "::".join([str(kind)] + parts)


__all__ = [
	"PathKind",
	"PlainRoot",
	"AbsoluteRoot",
	"CrateRoot",
	"SelfRoot",
	"SuperRoot",
	"MacroCrateRoot",
	"TypeRelativeRoot",
	"PLAIN",
	"ABSOLUTE",
	"CRATE",
	"SELF",
	"SUPER",
	"GenericArg",
	"TypeArgument",
	"GenericArgs",
	"ModPath",
	"Segment",
	"Path",
]
