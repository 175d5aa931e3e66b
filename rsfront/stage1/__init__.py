"""
Stage1: syntax -> semantic lowering.

Public API:
  - path: Path/ModPath/PathKind/GenericArgs value types
  - type_ref: semantic TypeRef variants
  - lower: lower_path and its helpers
  - lower_use: lower_use_tree for `use` items
"""

from .path import (
	ABSOLUTE,
	CRATE,
	PLAIN,
	SELF,
	SUPER,
	AbsoluteRoot,
	CrateRoot,
	GenericArg,
	GenericArgs,
	MacroCrateRoot,
	ModPath,
	Path,
	PathKind,
	PlainRoot,
	Segment,
	SelfRoot,
	SuperRoot,
	TypeArgument,
	TypeRelativeRoot,
)
from .type_ref import TypeRef
from .lower import lower_generic_args, lower_generic_args_from_fn_path, lower_path, resolve_qualifier
from .lower_use import ImportAlias, ImportEntry, lower_use_tree

__all__ = [
	"ABSOLUTE",
	"CRATE",
	"PLAIN",
	"SELF",
	"SUPER",
	"AbsoluteRoot",
	"CrateRoot",
	"GenericArg",
	"GenericArgs",
	"MacroCrateRoot",
	"ModPath",
	"Path",
	"PathKind",
	"PlainRoot",
	"Segment",
	"SelfRoot",
	"SuperRoot",
	"TypeArgument",
	"TypeRelativeRoot",
	"TypeRef",
	"lower_path",
	"resolve_qualifier",
	"lower_generic_args",
	"lower_generic_args_from_fn_path",
	"ImportAlias",
	"ImportEntry",
	"lower_use_tree",
]
