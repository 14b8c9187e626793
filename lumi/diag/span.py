# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Best-effort file/line/column of a diagnostic (Span() denotes unknown)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None

	@classmethod
	def from_loc(cls, loc: Any, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a parser token/tree meta or a lark exception.

		Objects without location fields produce a span carrying only `file`.
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			return loc
		return cls(
			file=file,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
		)

	def format(self) -> str:
		if self.file is None:
			return ""
		line = self.line if self.line is not None else "?"
		col = self.column if self.column is not None else "?"
		return f"{self.file}:{line}:{col}"
