# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lumi compiler package.

Front-end modules (`parser`, `binder`, `symbols`) live here together with
the `Compiler` entry points and the catalogue of diagnostic codes
(`errors`).
"""

from __future__ import annotations

from .compiler import Compiler, CompilerConstructionError
from .core import Options, default_options
from .factory import build_compiler

__all__ = ["Compiler", "CompilerConstructionError", "Options", "build_compiler", "default_options"]
