# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostic codes and the structured diagnostic record.

A `Diag` is a catalogue entry: a stable numeric id plus a `str.format`
message template. Reporting a `Diag` with arguments yields a `Diagnostic`,
which is what sinks store and render.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .span import Span


@dataclass(frozen=True)
class Diag:
	"""A numbered diagnostic template (e.g. `Diag(101, "IO error: {0}")`)."""

	id: int
	message: str

	@property
	def code(self) -> str:
		return f"LUMI{self.id}"

	def render(self, *args: Any) -> str:
		return self.message.format(*args)


@dataclass
class Diagnostic:
	"""Represents a reported diagnostic (error/warning)."""

	message: str
	code: str | None = None
	# Optional phase label ("package", "parser", "bind", "eval", "config", "compiler").
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def format_human(self) -> str:
		parts: list[str] = []
		loc = self.span.format()
		if loc:
			parts.append(f"{loc}:")
		parts.append(f"{self.severity}:")
		if self.code:
			parts.append(f"{self.code}:")
		parts.append(self.message)
		return " ".join(parts)

	def to_dict(self) -> dict[str, Any]:
		"""Render to a structured JSON-friendly dict."""
		return {
			"code": self.code,
			"phase": self.phase,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}
