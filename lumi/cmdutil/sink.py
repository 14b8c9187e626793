# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Process-wide default diagnostics sink.

Commands report fatal conditions here. `reset_sink()` installs a fresh sink
at process entry (the CLI does this before dispatching a command).
"""

from __future__ import annotations

from typing import Optional

from lumi.diag import Sink

_sink: Optional[Sink] = None


def sink() -> Sink:
	global _sink
	if _sink is None:
		_sink = Sink.default()
	return _sink


def reset_sink(new: Optional[Sink] = None) -> Sink:
	global _sink
	_sink = new if new is not None else Sink.default()
	return _sink
