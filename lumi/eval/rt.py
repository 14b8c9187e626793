# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Runtime objects.

Every value the interpreter produces is an `Object`: a runtime type tag plus
the underlying Python payload. Arrays and objects hold `Object`s, so a heap
snapshot can be walked without touching Python containers of raw values.
"""

from __future__ import annotations

import json
import math
import sys
from dataclasses import dataclass
from typing import Any

STRING = "string"
NUMBER = "number"
BOOL = "bool"
NULL = "null"
ARRAY = "array"
OBJECT = "object"

# Declarable types (the `any` type accepts every runtime type).
ANY = "any"
DECLARABLE_TYPES = (STRING, NUMBER, BOOL, ANY)


@dataclass(eq=False)
class Object:
	"""A runtime value. Identity matters: the heap tracks objects by `id`."""

	type: str
	value: Any
	id: int = 0

	def to_json(self) -> Any:
		"""Render the object (recursively) as JSON-ready Python data."""
		if self.type == ARRAY:
			return [elem.to_json() for elem in self.value]
		if self.type == OBJECT:
			return {k: v.to_json() for k, v in self.value.items()}
		return self.value

	def same_value(self, other: "Object") -> bool:
		return self.type == other.type and self.to_json() == other.to_json()

	def __repr__(self) -> str:
		return f"Object({self.type}, {self.to_json()!r})"


def type_of(value: Any) -> str:
	"""Runtime type tag for a raw Python value; raises TypeError for unsupported values."""
	if value is None:
		return NULL
	if isinstance(value, bool):
		return BOOL
	if isinstance(value, (int, float)):
		return NUMBER
	if isinstance(value, str):
		return STRING
	if isinstance(value, (list, tuple)):
		return ARRAY
	if isinstance(value, dict):
		return OBJECT
	raise TypeError(f"unsupported value of type {type(value).__name__}")


def number_in_range(value: int | float) -> bool:
	"""Whether a number is finite and within the range of a double."""
	if isinstance(value, float):
		return math.isfinite(value)
	return abs(value) <= sys.float_info.max


def is_truthy(obj: Object) -> bool:
	if obj.type == NULL:
		return False
	if obj.type in (ARRAY, OBJECT):
		return len(obj.value) > 0
	return bool(obj.value)


def stringify(obj: Object) -> str:
	"""String form used by `+` concatenation."""
	if obj.type == STRING:
		return obj.value
	if obj.type == BOOL:
		return "true" if obj.value else "false"
	if obj.type == NULL:
		return "null"
	if obj.type == NUMBER:
		v = obj.value
		if isinstance(v, float) and v.is_integer():
			return str(int(v))
		return str(v)
	return json.dumps(obj.to_json(), sort_keys=True, separators=(",", ":"))
