# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostics sink.

The sink is the shared reporting surface for everything a compilation can
get wrong. Callers decide success by looking at `error_count()`, not at
whether a result object came back.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from .diagnostics import Diag, Diagnostic
from .span import Span


class Sink:
	"""
	Collects diagnostics and (optionally) echoes them to a stream.

	`stream=None` keeps diagnostics in memory only, which is what tests use.
	"""

	def __init__(self, stream: TextIO | None = None) -> None:
		self._stream = stream
		self.diagnostics: list[Diagnostic] = []

	@classmethod
	def default(cls) -> "Sink":
		return cls(stream=sys.stderr)

	def report(self, diag: Diagnostic) -> None:
		self.diagnostics.append(diag)
		if self._stream is not None:
			print(diag.format_human(), file=self._stream)

	def errorf(self, d: Diag, *args: Any, span: Span | None = None, phase: str | None = None) -> None:
		self.report(Diagnostic(message=d.render(*args), code=d.code, phase=phase, severity="error", span=span or Span()))

	def error_count(self) -> int:
		return sum(1 for d in self.diagnostics if d.severity == "error")

	def success(self) -> bool:
		return self.error_count() == 0

	def errors(self) -> list[Diagnostic]:
		return [d for d in self.diagnostics if d.severity == "error"]
