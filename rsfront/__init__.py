# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
rsfront: Rust path front-end.

Parses path, type and use-tree syntax and lowers it into the semantic values
consumed by name resolution and type checking.

Subpackages:
  - core: spans, diagnostics, names
  - syntax: lark grammar, syntax nodes, parser adapter
  - stage1: syntax -> semantic lowering (paths, type refs, use trees)
"""

__all__ = [
    "core",
    "syntax",
    "hygiene",
    "stage1",
]
