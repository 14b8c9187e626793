# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostics: numbered codes, structured diagnostics and the sink they are
reported to.
"""

from __future__ import annotations

from .diagnostics import Diag, Diagnostic
from .sink import Sink
from .span import Span

__all__ = ["Diag", "Diagnostic", "Sink", "Span"]
