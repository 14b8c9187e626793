# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Heap snapshots.

The heap records every object allocated while a program's top-level
initializers ran, plus the module globals they were bound to. After
compilation the heap is a snapshot: downstream tooling reads it, nothing
mutates it further.
"""

from __future__ import annotations

from typing import Any

from . import rt


class Heap:
	def __init__(self) -> None:
		self.objects: list[rt.Object] = []
		# Member token -> object, in initialization order.
		self.globals: dict[str, rt.Object] = {}

	def alloc(self, type_: str, value: Any) -> rt.Object:
		obj = rt.Object(type=type_, value=value, id=len(self.objects) + 1)
		self.objects.append(obj)
		return obj

	def from_python(self, value: Any) -> rt.Object:
		"""
		Allocate an object graph for a JSON-like Python value.

		Raises TypeError for values with no runtime representation and
		ValueError for numbers outside the range of a double.
		"""
		kind = rt.type_of(value)
		if kind == rt.NUMBER and not rt.number_in_range(value):
			raise ValueError(f"number {value!r} is out of range")
		if kind == rt.ARRAY:
			return self.alloc(rt.ARRAY, [self.from_python(v) for v in value])
		if kind == rt.OBJECT:
			out: dict[str, rt.Object] = {}
			for k, v in value.items():
				if not isinstance(k, str):
					raise TypeError(f"object keys must be strings, got {type(k).__name__}")
				out[k] = self.from_python(v)
			return self.alloc(rt.OBJECT, out)
		return self.alloc(kind, value)

	def set_global(self, tok: str, obj: rt.Object) -> None:
		self.globals[tok] = obj

	def get_global(self, tok: str) -> rt.Object | None:
		return self.globals.get(tok)

	def to_dict(self) -> dict[str, Any]:
		return {
			"globals": {tok: obj.to_json() for tok, obj in self.globals.items()},
			"objects": len(self.objects),
		}
