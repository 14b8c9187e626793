# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Binder: parsed modules -> symbol table.

Checks performed here (all reported to the sink, none raised):
- duplicate members within a module,
- unknown declared types,
- references to names that are neither module members nor builtins.

Forward references are accepted at bind time; whether the referenced
variable is initialized yet is an evaluation-time question.
"""

from __future__ import annotations

import logging
from typing import Iterable

from lumi import tokens
from lumi.compiler import ast as A
from lumi.compiler import symbols
from lumi.compiler.errors import ErrorSymbolAlreadyExists, ErrorSymbolNotFound, ErrorUnknownType
from lumi.diag import Sink
from lumi.eval import rt
from lumi.pack import Package

logger = logging.getLogger(__name__)

# Names every module can reference without declaring them.
BUILTINS = ("args",)


def bind_package(pkg: Package, modules: Iterable[A.Module], sink: Sink) -> symbols.Package:
	pkgsym = symbols.Package(name=pkg.name, description=pkg.description, version=pkg.version)
	for tree in sorted(modules, key=lambda m: m.name):
		pkgsym.modules[tree.name] = _bind_module(pkg.name, tree, sink)
	logger.debug(
		"bound package %s: %d module(s), %d variable(s)",
		pkg.name,
		len(pkgsym.modules),
		sum(len(m.members) for m in pkgsym.modules.values()),
	)
	return pkgsym


def _bind_module(pkg_name: str, tree: A.Module, sink: Sink) -> symbols.Module:
	mod = symbols.Module(name=tree.name, token=tokens.module_token(pkg_name, tree.name), tree=tree)

	for stmt in tree.stmts:
		if stmt.name in mod.members or stmt.name in BUILTINS:
			sink.errorf(ErrorSymbolAlreadyExists, stmt.name, tree.name, span=stmt.loc, phase="bind")
			continue
		type_name = stmt.type_name or rt.ANY
		if type_name not in rt.DECLARABLE_TYPES:
			sink.errorf(ErrorUnknownType, type_name, ", ".join(rt.DECLARABLE_TYPES), span=stmt.loc, phase="bind")
			type_name = rt.ANY
		kind = symbols.CONFIG if isinstance(stmt, A.ConfigDecl) else symbols.LET
		mod.members[stmt.name] = symbols.Variable(
			name=stmt.name,
			token=tokens.module_member(pkg_name, tree.name, stmt.name),
			kind=kind,
			type_name=type_name,
			decl=stmt,
		)

	for stmt in tree.stmts:
		expr = stmt.default if isinstance(stmt, A.ConfigDecl) else stmt.value
		if expr is None:
			continue
		for ref in A.walk_names(expr):
			if ref.ident not in mod.members and ref.ident not in BUILTINS:
				sink.errorf(ErrorSymbolNotFound, ref.ident, tree.name, span=ref.loc, phase="bind")
	return mod
