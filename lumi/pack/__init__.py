# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Package descriptors.

A package is described by a `Lumi.json` file:

	{
	  "name": "acme/app",
	  "description": "optional",
	  "version": "optional",
	  "modules": {"index": "config region: string;"}
	}

`modules` is optional for packages on disk (sources are then discovered
next to the descriptor) and required in practice for packages read from
stdin, which have no root to discover sources under.
"""

from __future__ import annotations

from .package import PACKAGE_FILE, SOURCE_SUFFIX, Package, PackageError, decode, read_path, read_stdin

__all__ = ["PACKAGE_FILE", "SOURCE_SUFFIX", "Package", "PackageError", "decode", "read_path", "read_stdin"]
