# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import logging
from typing import Optional, TextIO, Tuple

from lumi import pack

logger = logging.getLogger(__name__)

# Package argument meaning "read the package descriptor from stdin".
STDIN_SENTINEL = "-"


def read_package_from_arg(arg: Optional[str], stdin: Optional[TextIO] = None) -> Tuple[Optional[pack.Package], str]:
	"""
	Resolve the package argument of a command.

	  None   -> (None, "")          compile the working directory
	  "-"    -> (package, "")       descriptor read from stdin
	  path   -> (package, root)     root is the directory, or the file's parent

	Raises `pack.PackageError` when the source cannot be read or decoded.
	"""
	if arg is None:
		return None, ""
	if arg == STDIN_SENTINEL:
		logger.debug("reading package from stdin")
		return pack.read_stdin(stdin), ""
	pkg, root = pack.read_path(arg)
	logger.debug("read package %s from %s (root %s)", pkg.name, arg, root)
	return pkg, str(root)
