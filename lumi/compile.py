# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Compilation orchestration.

This is the glue every command that needs a compiled program goes through:

  args -> (lumi args, program args)         cmdutil.args
       -> (package?, root)                  cmdutil.locate
       -> Compiler at root / working dir    compiler.build_compiler
       -> preexec hook from config          resource.ConfigMap
       -> compile_package | compile_workspace
       -> CompileResult

Failures before compilation (bad package source, unusable root) are
reported to the sink and yield None. Compilation failures are the
compiler's own diagnostics; a CompileResult still comes back and callers
check the sink's error count.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

from lumi import pack
from lumi.cmdutil import sink as cmdsink
from lumi.cmdutil.args import dashdash_args_to_map, find_separator, partition_args
from lumi.cmdutil.locate import read_package_from_arg
from lumi.cmdutil.log import verbose_enabled
from lumi.compiler import Compiler, CompilerConstructionError, build_compiler, default_options
from lumi.compiler import symbols
from lumi.compiler.errors import ErrorCantCreateCompiler, ErrorCantLoadPackage
from lumi.diag import Sink
from lumi.eval import rt
from lumi.eval.heapstate import Heap
from lumi.resource.config import ConfigApplier, ConfigMap

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
	compiler: Compiler
	pkg: Optional[symbols.Package]
	heap: Optional[Heap]
	config_vars: Dict[str, rt.Object] = field(default_factory=dict)


def prepare_compiler(
	args: Sequence[str], dashdash: Optional[int] = None, sink: Optional[Sink] = None, stdin=None
) -> Tuple[Optional[Compiler], Optional[pack.Package]]:
	"""
	Build a compiler for a command's positional arguments.

	`dashdash` is the number of arguments before `--`. When it is None and
	`args` still contains a literal `--`, that token marks the split and is
	dropped. Returns `(None, None)` after reporting to `sink` if the package
	cannot be read or the compiler cannot be created.
	"""
	sink = sink if sink is not None else cmdsink.sink()
	if dashdash is None:
		sep = find_separator(args)
		if sep is not None:
			args = [*args[:sep], *args[sep + 1:]]
			dashdash = sep
	lumi_args, program_args = partition_args(args, dashdash)

	opts = default_options()
	opts.args = dashdash_args_to_map(program_args)
	opts.diag = sink

	try:
		pkg, root = read_package_from_arg(lumi_args[0] if lumi_args else None, stdin)
	except pack.PackageError as err:
		sink.errorf(ErrorCantLoadPackage, err, phase="package")
		return None, None

	try:
		comp = build_compiler(root, opts)
	except CompilerConstructionError as err:
		sink.errorf(ErrorCantCreateCompiler, err, phase="compiler")
		return None, None
	return comp, pkg


def make_preexec(config: Optional[ConfigMap]) -> Tuple[Optional[ConfigApplier], Dict[str, rt.Object]]:
	"""The preexec hook for `config` (None when there is no config) and the vars it will fill."""
	config_vars: Dict[str, rt.Object] = {}
	if config is None:
		return None, config_vars
	return config.config_applier(config_vars), config_vars


def compile_args(
	args: Sequence[str],
	config: Optional[ConfigMap] = None,
	dashdash: Optional[int] = None,
	sink: Optional[Sink] = None,
	stdin=None,
) -> Optional[CompileResult]:
	"""
	Locate and compile the package named by `args` with `config` applied.

	Returns None (with an error reported) when no compiler could be built.
	"""
	comp, pkg = prepare_compiler(args, dashdash, sink, stdin)
	if comp is None:
		return None

	preexec, config_vars = make_preexec(config)
	if pkg is None:
		pkgsym, heap = comp.compile_workspace(preexec)
	else:
		pkgsym, heap = comp.compile_package(pkg, preexec)

	if heap is not None and verbose_enabled(3):
		logger.debug("heap snapshot: %s", heap.to_dict())
	return CompileResult(compiler=comp, pkg=pkgsym, heap=heap, config_vars=config_vars)
