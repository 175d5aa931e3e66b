"""
Common diagnostic structure for the parser adapter, lowering driver and CLI.

A message plus optional span/metadata; callers collect these instead of
raising so several problems can be reported together.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a front-end diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Optional phase label ("parser", "lower").
	#
	# The CLI reports every diagnostic with a phase; attaching it at the
	# source keeps JSON output and test expectations unambiguous.
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		# Normalize missing spans to the sentinel Span() so downstream tooling
		# can rely on a structured object instead of None.
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def to_json(self, *, phase: str | None = None, file: str | None = None) -> dict:
		"""Render to a structured JSON-friendly dict."""
		return {
			"phase": self.phase or phase,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file or file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}


def has_errors(diagnostics: list[Diagnostic]) -> bool:
	return any(d.severity == "error" for d in diagnostics)


__all__ = ["Diagnostic", "has_errors"]
