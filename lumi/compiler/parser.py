# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lumi source parser (lark, LALR).

`parse_module` never raises on bad input: syntax errors come back as
diagnostics so the compiler can keep going with other modules and report
everything at once.
"""

from __future__ import annotations

import json
from typing import List, Optional, Tuple

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import UnexpectedInput, VisitError

from lumi.compiler import ast as A
from lumi.compiler.errors import ErrorParse
from lumi.diag import Diagnostic, Span
from lumi.eval import rt

_GRAMMAR = r"""
start: stmt*

?stmt: config_decl
	| let_decl

config_decl: "config" NAME [":" type_ref] ["=" expr] ";"
let_decl: "let" NAME [":" type_ref] "=" expr ";"
type_ref: NAME

?expr: equality

?equality: sum
	| equality "==" sum -> eq
	| equality "!=" sum -> ne

?sum: product
	| sum "+" product -> add
	| sum "-" product -> sub

?product: unary
	| product "*" unary -> mul
	| product "/" unary -> div

?unary: postfix
	| "-" unary -> neg
	| "!" unary -> not_

?postfix: atom
	| postfix "." NAME -> member
	| postfix "[" expr "]" -> index

?atom: STRING -> string
	| NUMBER -> number
	| "true" -> true
	| "false" -> false
	| "null" -> null
	| NAME -> var
	| "[" "]" -> array
	| "[" expr ("," expr)* "]" -> array
	| "{" "}" -> object
	| "{" pair ("," pair)* "}" -> object
	| "(" expr ")"

pair: (NAME | STRING) ":" expr

COMMENT: /#[^\n]*/

%import common.CNAME -> NAME
%import common.ESCAPED_STRING -> STRING
%import common.NUMBER
%import common.WS
%ignore WS
%ignore COMMENT
"""

_PARSER = Lark(
	_GRAMMAR,
	parser="lalr",
	lexer="basic",
	start="start",
	propagate_positions=True,
	maybe_placeholders=True,
)


class _LiteralError(ValueError):
	"""A STRING or NUMBER token with no valid value; carries the token for location."""

	def __init__(self, message: str, *, tok: Token) -> None:
		super().__init__(message)
		self.tok = tok


def _decode_string(tok: Token) -> str:
	try:
		return json.loads(tok.value)
	except ValueError as err:
		raise _LiteralError(f"invalid string literal {tok.value}", tok=tok) from err


def _decode_number(tok: Token) -> int | float:
	text = tok.value
	try:
		value: int | float = int(text) if text.isdigit() else float(text)
	except ValueError as err:
		raise _LiteralError(f"invalid number literal {text}", tok=tok) from err
	if not rt.number_in_range(value):
		raise _LiteralError(f"number literal {text} is out of range", tok=tok)
	return value


@v_args(meta=True)
class _ToAst(Transformer):
	"""Build `lumi.compiler.ast` nodes from the parse tree."""

	def __init__(self, file: Optional[str]) -> None:
		super().__init__()
		self._file = file

	def _loc(self, meta) -> Span:
		return Span.from_loc(meta, file=self._file)

	def start(self, meta, children) -> List[A.Stmt]:
		return list(children)

	def config_decl(self, meta, children) -> A.ConfigDecl:
		name, type_name, default = children
		return A.ConfigDecl(name=str(name), type_name=type_name, default=default, loc=self._loc(meta))

	def let_decl(self, meta, children) -> A.LetDecl:
		name, type_name, value = children
		return A.LetDecl(name=str(name), type_name=type_name, value=value, loc=self._loc(meta))

	def type_ref(self, meta, children) -> str:
		return str(children[0])

	def _binary(op: str):  # type: ignore[misc]
		def build(self, meta, children) -> A.Binary:
			left, right = children
			return A.Binary(op=op, left=left, right=right, loc=self._loc(meta))

		return build

	eq = _binary("==")
	ne = _binary("!=")
	add = _binary("+")
	sub = _binary("-")
	mul = _binary("*")
	div = _binary("/")
	del _binary

	def neg(self, meta, children) -> A.Unary:
		return A.Unary(op="-", operand=children[0], loc=self._loc(meta))

	def not_(self, meta, children) -> A.Unary:
		return A.Unary(op="!", operand=children[0], loc=self._loc(meta))

	def member(self, meta, children) -> A.Member:
		target, name = children
		return A.Member(target=target, name=str(name), loc=self._loc(meta))

	def index(self, meta, children) -> A.Index:
		target, idx = children
		return A.Index(target=target, index=idx, loc=self._loc(meta))

	def string(self, meta, children) -> A.Literal:
		return A.Literal(value=_decode_string(children[0]), loc=self._loc(meta))

	def number(self, meta, children) -> A.Literal:
		return A.Literal(value=_decode_number(children[0]), loc=self._loc(meta))

	def true(self, meta, children) -> A.Literal:
		return A.Literal(value=True, loc=self._loc(meta))

	def false(self, meta, children) -> A.Literal:
		return A.Literal(value=False, loc=self._loc(meta))

	def null(self, meta, children) -> A.Literal:
		return A.Literal(value=None, loc=self._loc(meta))

	def var(self, meta, children) -> A.Name:
		return A.Name(ident=str(children[0]), loc=self._loc(meta))

	def array(self, meta, children) -> A.ArrayLit:
		return A.ArrayLit(elems=list(children), loc=self._loc(meta))

	def object(self, meta, children) -> A.ObjectLit:
		return A.ObjectLit(pairs=list(children), loc=self._loc(meta))

	def pair(self, meta, children) -> Tuple[str, A.Expr]:
		key, value = children
		if key.type == "STRING":
			return _decode_string(key), value
		return str(key), value


def parse_module(source: str, name: str, *, file: Optional[str] = None) -> Tuple[Optional[A.Module], List[Diagnostic]]:
	"""
	Parse one module's source text.

	Returns `(module, [])` on success and `(None, diagnostics)` on syntax
	errors.
	"""
	origin = file or name
	try:
		tree = _PARSER.parse(source)
		stmts = _ToAst(origin).transform(tree)
	except UnexpectedInput as err:
		span = Span.from_loc(err, file=origin)
		return None, [Diagnostic(message=ErrorParse.render(_first_line(str(err))), code=ErrorParse.code, phase="parser", span=span)]
	except VisitError as err:
		if not isinstance(err.orig_exc, _LiteralError):
			raise
		span = Span.from_loc(err.orig_exc.tok, file=origin)
		return None, [Diagnostic(message=ErrorParse.render(str(err.orig_exc)), code=ErrorParse.code, phase="parser", span=span)]
	return A.Module(name=name, stmts=stmts, file=file), []


def _first_line(text: str) -> str:
	return text.strip().splitlines()[0] if text.strip() else text
