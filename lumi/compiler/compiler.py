# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
The compiler: package -> (symbol table, heap snapshot).

A `Compiler` is bound to exactly one root directory for its lifetime. It has
two entry points:

- `compile_workspace(preexec)` finds the package descriptor at (or above)
  the root and compiles it;
- `compile_package(pkg, preexec)` compiles an already loaded package.

Both run parse -> bind -> evaluate, firing `preexec` between binding and the
first initializer. Problems are reported to `opts.diag`; callers check its
error count. Partial results are returned where they exist (a symbol table
without a heap when evaluation failed).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple

from lumi import pack
from lumi.compiler import ast as A
from lumi.compiler.binder import bind_package
from lumi.compiler.core import Options
from lumi.compiler.errors import ErrorCantLoadPackage, ErrorIO, ErrorMissingPackageFile
from lumi.compiler.parser import parse_module
from lumi.compiler import symbols
from lumi.diag import Sink
from lumi.eval import interpreter as interp
from lumi.eval.heapstate import Heap

logger = logging.getLogger(__name__)


class CompilerConstructionError(Exception):
	"""The compiler could not be bound to its root (missing, not a directory, unreadable)."""


class Compiler:
	def __init__(self, root: Path, opts: Options) -> None:
		self.root = root
		self.opts = opts
		self.diag: Sink = opts.diag if opts.diag is not None else Sink.default()

	@classmethod
	def new(cls, root: str | Path, opts: Options) -> "Compiler":
		"""Create a compiler rooted at an explicit directory."""
		p = Path(root)
		if not p.exists():
			raise CompilerConstructionError(f"root directory '{root}' does not exist")
		if not p.is_dir():
			raise CompilerConstructionError(f"root '{root}' is not a directory")
		if not os.access(p, os.R_OK | os.X_OK):
			raise CompilerConstructionError(f"root directory '{root}' is not readable")
		logger.debug("compiler rooted at %s", p.resolve())
		return cls(p.resolve(), opts)

	@classmethod
	def newwd(cls, opts: Options) -> "Compiler":
		"""Create a compiler rooted at the current working directory."""
		try:
			wd = Path.cwd()
		except OSError as err:
			raise CompilerConstructionError(f"cannot determine the working directory: {err}") from err
		return cls.new(wd, opts)

	def compile_workspace(self, preexec: Optional[interp.Preexec] = None) -> Tuple[Optional[symbols.Package], Optional[Heap]]:
		pkg_path = self.detect_package()
		if pkg_path is None:
			self.diag.errorf(ErrorMissingPackageFile, self.root, phase="compiler")
			return None, None
		try:
			pkg, _root = pack.read_path(pkg_path)
		except pack.PackageError as err:
			self.diag.errorf(ErrorCantLoadPackage, err, phase="package")
			return None, None
		return self._compile(pkg, preexec)

	def compile_package(
		self, pkg: pack.Package, preexec: Optional[interp.Preexec] = None
	) -> Tuple[Optional[symbols.Package], Optional[Heap]]:
		return self._compile(pkg, preexec)

	def _compile(
		self, pkg: pack.Package, preexec: Optional[interp.Preexec]
	) -> Tuple[Optional[symbols.Package], Optional[Heap]]:
		logger.info("compiling package %s", pkg.name)
		errors_before = self.diag.error_count()

		modules = self._parse_modules(pkg)
		if self.diag.error_count() != errors_before:
			return None, None

		pkgsym = bind_package(pkg, modules, self.diag)
		if self.diag.error_count() != errors_before:
			return pkgsym, None

		heap = interp.Interpreter(pkgsym, self.opts.args, self.diag).run(preexec)
		if heap is not None:
			logger.info("compiled package %s: %d global(s), %d object(s)", pkg.name, len(heap.globals), len(heap.objects))
		return pkgsym, heap

	def detect_package(self) -> Optional[Path]:
		"""Find the package descriptor in the root or the nearest parent that has one."""
		for d in (self.root, *self.root.parents):
			candidate = d / pack.PACKAGE_FILE
			if candidate.is_file():
				logger.debug("detected package file %s", candidate)
				return candidate
		return None

	def _parse_modules(self, pkg: pack.Package) -> List[A.Module]:
		out: List[A.Module] = []
		for name, source, file in self._module_sources(pkg):
			mod, diags = parse_module(source, name, file=file)
			for d in diags:
				self.diag.report(d)
			if mod is not None:
				out.append(mod)
		return out

	def _module_sources(self, pkg: pack.Package) -> List[Tuple[str, str, Optional[str]]]:
		if pkg.modules is not None:
			origin = str(pkg.path) if pkg.path is not None else None
			return [(name, src, origin) for name, src in pkg.modules.items()]
		if pkg.path is None:
			# A package from stdin without inline modules has nowhere to look for sources.
			return []

		src_root = pkg.path.parent
		found: List[Tuple[str, str, Optional[str]]] = []
		for path in sorted(src_root.rglob("*" + pack.SOURCE_SUFFIX)):
			rel = path.relative_to(src_root)
			if any(part.startswith(".") for part in rel.parts) or not path.is_file():
				continue
			try:
				source = path.read_text(encoding="utf-8")
			except (OSError, UnicodeDecodeError) as err:
				self.diag.errorf(ErrorIO, f"{path}: {err}", phase="compiler")
				continue
			found.append((rel.with_suffix("").as_posix(), source, str(path)))
		logger.debug("discovered %d source file(s) under %s", len(found), src_root)
		return found
