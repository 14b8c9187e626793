# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Tree-walking interpreter for module initializers.

Evaluation order for one package:

1. the preexec hook (if any) runs with a `PreexecContext`; config values it
   assigns become module globals before anything else executes;
2. modules run in name order, statements in source order;
3. a `config` variable already assigned by the hook keeps that value and its
   default is never evaluated; an unassigned one takes its default or is
   reported as missing.

Errors are reported to the sink per statement. A failed statement leaves its
variable uninitialized and silently skips statements that depend on it, so
one mistake produces one diagnostic.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from lumi.compiler import ast as A
from lumi.compiler import symbols
from lumi.compiler.errors import ErrorEval, ErrorMissingConfigValue
from lumi.diag import Sink, Span
from lumi.eval import rt
from lumi.eval.heapstate import Heap

logger = logging.getLogger(__name__)


@dataclass
class PreexecContext:
	"""
	What a preexec hook gets to see: the bound package (declarations exist),
	the heap that module globals live in, and the sink for its diagnostics.
	"""

	pkg: symbols.Package
	heap: Heap
	sink: Sink

	def assign(self, var: symbols.Variable, obj: rt.Object) -> None:
		self.heap.set_global(var.token, obj)


# A preexec hook: called once, after binding and before any initializer.
Preexec = Callable[[PreexecContext], None]


class EvalError(Exception):
	def __init__(self, message: str, loc: Optional[Span] = None) -> None:
		super().__init__(message)
		self.loc = loc


class _Poisoned(Exception):
	"""Raised when an expression references a variable whose initializer already failed."""


class Interpreter:
	def __init__(self, pkg: symbols.Package, args: Dict[str, str], sink: Sink) -> None:
		self.pkg = pkg
		self.args = dict(args)
		self.sink = sink
		self.heap = Heap()
		self._failed: set[str] = set()

	def run(self, preexec: Optional[Preexec] = None) -> Optional[Heap]:
		"""
		Run the preexec hook and then every module initializer.

		Returns the heap snapshot, or None if any diagnostic was reported
		along the way.
		"""
		errors_before = self.sink.error_count()
		if preexec is not None:
			logger.debug("running preexec hook for %s", self.pkg.name)
			preexec(PreexecContext(pkg=self.pkg, heap=self.heap, sink=self.sink))

		args_obj = self.heap.from_python(self.args)
		for mod in self.pkg.modules.values():
			if mod.tree is None:
				continue
			for stmt in mod.tree.stmts:
				var = mod.members.get(stmt.name)
				if var is None or var.decl is not stmt:
					continue  # duplicate declaration, already reported by the binder
				self._init_variable(mod, var, args_obj)

		if self.sink.error_count() != errors_before:
			return None
		return self.heap

	def _init_variable(self, mod: symbols.Module, var: symbols.Variable, args_obj: rt.Object) -> None:
		if var.is_config:
			if self.heap.get_global(var.token) is not None:
				return
			expr = var.decl.default
			if expr is None:
				self.sink.errorf(ErrorMissingConfigValue, var.token, span=var.decl.loc, phase="eval")
				self._failed.add(var.token)
				return
		else:
			expr = var.decl.value

		try:
			obj = self._eval(mod, expr, args_obj)
			if var.type_name != rt.ANY and obj.type != var.type_name:
				raise EvalError(f"expected a {var.type_name}, got a {obj.type}", var.decl.loc)
		except _Poisoned:
			self._failed.add(var.token)
			return
		except EvalError as err:
			self.sink.errorf(ErrorEval, var.token, str(err), span=err.loc or var.decl.loc, phase="eval")
			self._failed.add(var.token)
			return
		self.heap.set_global(var.token, obj)

	def _eval(self, mod: symbols.Module, expr: A.Expr, args_obj: rt.Object) -> rt.Object:
		heap = self.heap
		if isinstance(expr, A.Literal):
			return heap.from_python(expr.value)
		if isinstance(expr, A.ArrayLit):
			return heap.alloc(rt.ARRAY, [self._eval(mod, e, args_obj) for e in expr.elems])
		if isinstance(expr, A.ObjectLit):
			return heap.alloc(rt.OBJECT, {k: self._eval(mod, e, args_obj) for k, e in expr.pairs})
		if isinstance(expr, A.Name):
			return self._lookup(mod, expr, args_obj)
		if isinstance(expr, A.Member):
			target = self._eval(mod, expr.target, args_obj)
			if target.type != rt.OBJECT:
				raise EvalError(f"cannot read member '{expr.name}' of a {target.type}", expr.loc)
			if expr.name not in target.value:
				raise EvalError(f"object has no member '{expr.name}'", expr.loc)
			return target.value[expr.name]
		if isinstance(expr, A.Index):
			return self._index(mod, expr, args_obj)
		if isinstance(expr, A.Unary):
			operand = self._eval(mod, expr.operand, args_obj)
			if expr.op == "!":
				return heap.alloc(rt.BOOL, not rt.is_truthy(operand))
			if operand.type != rt.NUMBER:
				raise EvalError(f"cannot negate a {operand.type}", expr.loc)
			return heap.alloc(rt.NUMBER, -operand.value)
		if isinstance(expr, A.Binary):
			return self._binary(mod, expr, args_obj)
		raise AssertionError(f"unhandled expression {type(expr).__name__}")

	def _lookup(self, mod: symbols.Module, ref: A.Name, args_obj: rt.Object) -> rt.Object:
		var = mod.members.get(ref.ident)
		if var is None:
			if ref.ident == "args":
				return args_obj
			raise EvalError(f"unknown name '{ref.ident}'", ref.loc)
		if var.token in self._failed:
			raise _Poisoned(var.token)
		obj = self.heap.get_global(var.token)
		if obj is None:
			raise EvalError(f"'{ref.ident}' is used before it is initialized", ref.loc)
		return obj

	def _index(self, mod: symbols.Module, expr: A.Index, args_obj: rt.Object) -> rt.Object:
		target = self._eval(mod, expr.target, args_obj)
		idx = self._eval(mod, expr.index, args_obj)
		if target.type == rt.ARRAY:
			if idx.type != rt.NUMBER or not math.isfinite(idx.value) or int(idx.value) != idx.value:
				raise EvalError("array index must be an integer", expr.loc)
			i = int(idx.value)
			if i < 0 or i >= len(target.value):
				raise EvalError(f"array index {i} out of range", expr.loc)
			return target.value[i]
		if target.type == rt.OBJECT:
			if idx.type != rt.STRING:
				raise EvalError("object index must be a string", expr.loc)
			if idx.value not in target.value:
				raise EvalError(f"object has no member '{idx.value}'", expr.loc)
			return target.value[idx.value]
		raise EvalError(f"cannot index a {target.type}", expr.loc)

	def _binary(self, mod: symbols.Module, expr: A.Binary, args_obj: rt.Object) -> rt.Object:
		heap = self.heap
		left = self._eval(mod, expr.left, args_obj)
		right = self._eval(mod, expr.right, args_obj)
		op = expr.op
		if op == "==":
			return heap.alloc(rt.BOOL, left.same_value(right))
		if op == "!=":
			return heap.alloc(rt.BOOL, not left.same_value(right))
		if op == "+":
			if left.type == rt.STRING or right.type == rt.STRING:
				return heap.alloc(rt.STRING, rt.stringify(left) + rt.stringify(right))
			if left.type == rt.ARRAY and right.type == rt.ARRAY:
				return heap.alloc(rt.ARRAY, list(left.value) + list(right.value))
		if left.type != rt.NUMBER or right.type != rt.NUMBER:
			raise EvalError(f"operator '{op}' does not apply to {left.type} and {right.type}", expr.loc)
		try:
			value = _arith(op, left.value, right.value)
		except ZeroDivisionError:
			raise EvalError("division by zero", expr.loc) from None
		except OverflowError:
			value = math.inf
		if not rt.number_in_range(value):
			raise EvalError(f"result of '{op}' is out of range", expr.loc)
		return heap.alloc(rt.NUMBER, value)


def _arith(op: str, a, b):
	if op == "+":
		return a + b
	if op == "-":
		return a - b
	if op == "*":
		return a * b
	if op == "/":
		if b == 0:
			raise ZeroDivisionError(op)
		if isinstance(a, int) and isinstance(b, int) and a % b == 0:
			return a // b
		return a / b
	raise AssertionError(f"unhandled operator {op}")
