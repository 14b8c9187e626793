# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Compiler options.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lumi.diag import Sink


@dataclass
class Options:
	"""
	Settings for one compiler instance.

	`args` carries the program arguments (the ones after `--` on the command
	line) keyed by name; the evaluator exposes them as the builtin `args`
	object. `diag` is where diagnostics go; `None` means the compiler creates
	its own stderr sink.
	"""

	args: dict[str, str] = field(default_factory=dict)
	diag: Sink | None = None


def default_options() -> Options:
	return Options()
