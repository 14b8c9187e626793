# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Surface AST for Lumi source modules.

Every node carries a `loc` (a `Span`, possibly without line/column when the
parser had no token to anchor it to).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, Union

from lumi.diag import Span


@dataclass
class Literal:
	value: Any  # str | int | float | bool | None
	loc: Span = field(default_factory=Span)


@dataclass
class ArrayLit:
	elems: List["Expr"]
	loc: Span = field(default_factory=Span)


@dataclass
class ObjectLit:
	pairs: List[Tuple[str, "Expr"]]
	loc: Span = field(default_factory=Span)


@dataclass
class Name:
	ident: str
	loc: Span = field(default_factory=Span)


@dataclass
class Member:
	target: "Expr"
	name: str
	loc: Span = field(default_factory=Span)


@dataclass
class Index:
	target: "Expr"
	index: "Expr"
	loc: Span = field(default_factory=Span)


@dataclass
class Unary:
	op: str  # "-" | "!"
	operand: "Expr"
	loc: Span = field(default_factory=Span)


@dataclass
class Binary:
	op: str  # "+" | "-" | "*" | "/" | "==" | "!="
	left: "Expr"
	right: "Expr"
	loc: Span = field(default_factory=Span)


Expr = Union[Literal, ArrayLit, ObjectLit, Name, Member, Index, Unary, Binary]


@dataclass
class ConfigDecl:
	"""`config NAME [: TYPE] [= default];`"""

	name: str
	type_name: Optional[str]
	default: Optional[Expr]
	loc: Span = field(default_factory=Span)


@dataclass
class LetDecl:
	"""`let NAME [: TYPE] = value;`"""

	name: str
	type_name: Optional[str]
	value: Expr
	loc: Span = field(default_factory=Span)


Stmt = Union[ConfigDecl, LetDecl]


@dataclass
class Module:
	name: str
	stmts: List[Stmt]
	file: Optional[str] = None


def walk_names(expr: Expr):
	"""Yield every `Name` referenced by `expr` (depth-first, source order)."""
	if isinstance(expr, Name):
		yield expr
	elif isinstance(expr, ArrayLit):
		for e in expr.elems:
			yield from walk_names(e)
	elif isinstance(expr, ObjectLit):
		for _k, e in expr.pairs:
			yield from walk_names(e)
	elif isinstance(expr, (Member,)):
		yield from walk_names(expr.target)
	elif isinstance(expr, Index):
		yield from walk_names(expr.target)
		yield from walk_names(expr.index)
	elif isinstance(expr, Unary):
		yield from walk_names(expr.operand)
	elif isinstance(expr, Binary):
		yield from walk_names(expr.left)
		yield from walk_names(expr.right)
