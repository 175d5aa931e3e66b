# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics and syntax nodes.

A Span wraps whatever location object the front-end provides (lark tokens,
lark tree metadata, error objects) via the `raw` field while also carrying
optional file/line/column info when available.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus raw parser loc)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any, *, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from an existing parser/location object.

		If `loc` is already a Span, it is returned unchanged (with `file`
		filled in when it was missing); otherwise the parser-specific object
		is stored in `raw`.
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			if loc.file is None and file is not None:
				return cls(file, loc.line, loc.column, loc.end_line, loc.end_column, loc.raw)
			return loc
		# lark trees keep positions on `.meta`; tokens carry them directly.
		meta = getattr(loc, "meta", None)
		src = meta if meta is not None and not getattr(meta, "empty", True) else loc
		return cls(
			file=file or getattr(loc, "file", None) or getattr(loc, "filename", None) or None,
			line=getattr(src, "line", None),
			column=getattr(src, "column", None),
			end_line=getattr(src, "end_line", None),
			end_column=getattr(src, "end_column", None),
			raw=loc,
		)

	def is_known(self) -> bool:
		return self.line is not None


__all__ = ["Span"]
