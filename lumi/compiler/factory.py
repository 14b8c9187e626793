# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from lumi.compiler.compiler import Compiler
from lumi.compiler.core import Options


def build_compiler(root: str, opts: Options) -> Compiler:
	"""
	Build a compiler at `root`, or at the working directory when `root` is empty.

	`opts.args` must already hold the program arguments. Raises
	`CompilerConstructionError` when the root cannot be used.
	"""
	if not root:
		return Compiler.newwd(opts)
	return Compiler.new(root, opts)
