# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Symbol table.

Binding turns parsed modules into a `Package` symbol: modules keyed by name,
each holding its module-level variables keyed by member name. Tokens are
assigned at bind time, so the evaluator and the config applier can address
variables without knowing where they came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from lumi import tokens
from lumi.compiler import ast as A

CONFIG = "config"
LET = "let"


@dataclass
class Variable:
	"""A module-level variable (`config` or `let`)."""

	name: str
	token: str
	kind: str  # CONFIG | LET
	type_name: str
	decl: Union[A.ConfigDecl, A.LetDecl]

	@property
	def is_config(self) -> bool:
		return self.kind == CONFIG


@dataclass
class Module:
	name: str
	token: str
	members: Dict[str, Variable] = field(default_factory=dict)
	tree: Optional[A.Module] = None


@dataclass
class Package:
	name: str
	description: Optional[str] = None
	version: Optional[str] = None
	modules: Dict[str, Module] = field(default_factory=dict)

	def lookup(self, tok: tokens.MemberToken) -> Optional[Variable]:
		if tok.package != self.name:
			return None
		mod = self.modules.get(tok.module)
		if mod is None:
			return None
		return mod.members.get(tok.member)
