# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Semantic identifiers.

A `Name` is the value that survives lowering: it no longer remembers the
token it came from, compares by text, and interns that text so the many
copies of common names (`std`, `Output`) share storage.

Raw identifiers (`r#type`) are stored without their `r#` prefix: `r#type`
and a keyword-free `type` name refer to the same item.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass

_RAW_PREFIX = "r#"

# Strict keywords (minus `Self`, which paths use as an ordinary name); a name
# spelled like one can only come from a raw identifier.
_KEYWORDS = frozenset(
	"as break const continue crate else enum extern false fn for if impl in let loop match mod move "
	"mut pub ref return self static struct super trait true type unsafe use where while "
	"async await dyn".split()
)


@dataclass(frozen=True)
class Name:
	"""An interned, value-comparable identifier."""

	text: str

	def __post_init__(self) -> None:
		if not isinstance(self.text, str):
			raise TypeError(f"Name text must be str, got {type(self.text).__name__}")
		object.__setattr__(self, "text", sys.intern(self.text))

	@staticmethod
	def from_ident(text: str) -> "Name":
		"""Build a name from identifier source text, stripping a raw-ident prefix."""
		if text.startswith(_RAW_PREFIX):
			text = text[len(_RAW_PREFIX):]
		return Name(text)

	def display(self) -> str:
		"""Source spelling: keywords get their `r#` prefix back."""
		if self.text in _KEYWORDS:
			return _RAW_PREFIX + self.text
		return self.text

	def __str__(self) -> str:
		return self.text


class known:
	"""Names synthesized by lowering rather than read from source."""

	OUTPUT = Name("Output")


__all__ = ["Name", "known"]
