# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Hygiene: telling macro-introduced identifiers apart from source identifiers.

The only hygiene-sensitive identifier paths care about is `$crate`. Inside a
macro expansion it means "the crate that defined the macro"; anywhere else it
is just an odd-looking name. `Hygiene` captures which of the two situations a
syntax tree comes from and answers, per identifier occurrence, whether it is a
plain name or the macro-crate-root marker.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from rsfront.core.name import Name
from rsfront.syntax.ast import NameRef

# Stable crate identifiers, assigned by whoever builds the crate graph.
CrateId = int


@dataclass(frozen=True)
class ResolvedName:
	"""The identifier is an ordinary name."""

	name: Name


@dataclass(frozen=True)
class DollarCrate:
	"""The identifier is `$crate` from a macro defined in `crate_id`."""

	crate_id: CrateId


HygieneResolution = Union[ResolvedName, DollarCrate]


@dataclass(frozen=True)
class Hygiene:
	"""
	Read-only hygiene context for one syntax tree.

	`def_crate` is the crate whose macro produced the tree, or None for trees
	parsed straight from source files.
	"""

	def_crate: Optional[CrateId] = None

	@staticmethod
	def new_unhygienic() -> "Hygiene":
		return Hygiene(def_crate=None)

	@staticmethod
	def for_macro(def_crate: CrateId) -> "Hygiene":
		return Hygiene(def_crate=int(def_crate))

	def name_ref_to_name(self, name_ref: NameRef) -> HygieneResolution:
		if self.def_crate is not None and name_ref.is_dollar_crate():
			return DollarCrate(self.def_crate)
		return ResolvedName(as_name(name_ref))


def as_name(name_ref: NameRef) -> Name:
	"""Convert an identifier occurrence to a name, ignoring hygiene."""
	return Name.from_ident(name_ref.text)


__all__ = [
	"CrateId",
	"ResolvedName",
	"DollarCrate",
	"HygieneResolution",
	"Hygiene",
	"as_name",
]
