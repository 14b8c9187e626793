# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Package descriptor decoding (stdin or filesystem).
"""

from __future__ import annotations

import json
import logging
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO

logger = logging.getLogger(__name__)

# Name of the package descriptor looked up in directories and workspaces.
PACKAGE_FILE = "Lumi.json"

# Suffix of Lumi source files discovered under a package root.
SOURCE_SUFFIX = ".lumi"

_PACKAGE_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+(/[A-Za-z0-9_.-]+)*$")
_MODULE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(/[A-Za-z_][A-Za-z0-9_]*)*$")


class PackageError(ValueError):
	"""Raised when a package source cannot be read, decoded or validated."""


@dataclass
class Package:
	"""In-memory package descriptor."""

	name: str
	description: str | None = None
	version: str | None = None
	# Module name -> source text. `None` means "discover sources under the root".
	modules: dict[str, str] | None = None
	# Descriptor file the package came from (None for stdin).
	path: Path | None = field(default=None, compare=False)


def decode(text: str, *, origin: str = "<stdin>", path: Path | None = None) -> Package:
	"""
	Decode and validate a package descriptor from JSON text.

	Errors mention `origin` so users can tell which source was bad.
	"""
	try:
		obj: Any = json.loads(text)
	except json.JSONDecodeError as err:
		raise PackageError(f"{origin}: invalid JSON ({err.msg} at line {err.lineno} column {err.colno})") from err
	if not isinstance(obj, dict):
		raise PackageError(f"{origin}: package descriptor must be a JSON object")

	name = obj.get("name")
	if not isinstance(name, str) or not name:
		raise PackageError(f"{origin}: package is missing a 'name'")
	if not _PACKAGE_NAME_RE.match(name):
		raise PackageError(f"{origin}: illegal package name '{name}'")
	for key in ("description", "version"):
		if key in obj and obj[key] is not None and not isinstance(obj[key], str):
			raise PackageError(f"{origin}: '{key}' must be a string")

	modules = obj.get("modules")
	if modules is not None:
		if not isinstance(modules, dict):
			raise PackageError(f"{origin}: 'modules' must be an object of module name to source text")
		for mod_name, src in modules.items():
			if not _MODULE_NAME_RE.match(mod_name):
				raise PackageError(f"{origin}: illegal module name '{mod_name}'")
			if not isinstance(src, str):
				raise PackageError(f"{origin}: module '{mod_name}' source must be a string")
		modules = dict(modules)

	return Package(
		name=name,
		description=obj.get("description"),
		version=obj.get("version"),
		modules=modules,
		path=path,
	)


def read_stdin(stream: TextIO | None = None) -> Package:
	"""Read a self-describing package descriptor from standard input."""
	stream = stream if stream is not None else sys.stdin
	try:
		text = stream.read()
	except (OSError, UnicodeDecodeError) as err:
		raise PackageError(f"<stdin>: {err}") from err
	logger.debug("read %d bytes of package descriptor from stdin", len(text))
	return decode(text, origin="<stdin>")


def read_path(path: str | Path) -> tuple[Package, Path]:
	"""
	Load a package from a descriptor file or a directory containing one.

	Returns the package and its root: the directory itself, or the
	descriptor's containing directory.
	"""
	p = Path(path)
	if p.is_dir():
		root = p
		p = p / PACKAGE_FILE
	else:
		root = p.parent
	if not p.is_file():
		raise PackageError(f"{p}: no such package file")
	try:
		text = p.read_text(encoding="utf-8")
	except (OSError, UnicodeDecodeError) as err:
		raise PackageError(f"{p}: {err}") from err
	logger.debug("loaded package descriptor %s", p)
	return decode(text, origin=str(p), path=p), root
