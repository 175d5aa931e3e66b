"""
rsfront.core: shared primitives used across stages.

Modules:
  - span: best-effort source spans
  - diagnostics: Diagnostic record
  - name: interned identifiers and the synthesized `known` names
"""

__all__ = [
    "span",
    "diagnostics",
    "name",
]
