# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Catalogue of compiler diagnostic codes.

Ids are stable: 1xx general/IO, 5xx package and compiler setup,
6xx parsing and binding, 7xx evaluation and configuration.
"""

from __future__ import annotations

from lumi.diag import Diag

ErrorIO = Diag(101, "An IO error occurred during the current operation: {0}")

ErrorMissingPackageFile = Diag(501, "No Lumi package file was found in '{0}' or any of its parents")
ErrorCantLoadPackage = Diag(502, "The package could not be loaded: {0}")
ErrorCantCreateCompiler = Diag(503, "An error occurred during compiler construction: {0}")

ErrorParse = Diag(601, "Syntax error: {0}")
ErrorSymbolAlreadyExists = Diag(602, "A symbol named '{0}' already exists in module '{1}'")
ErrorSymbolNotFound = Diag(603, "Symbol '{0}' was not found in module '{1}'")
ErrorUnknownType = Diag(604, "Unknown type '{0}'; expected one of {1}")

ErrorEval = Diag(701, "Evaluation of '{0}' failed: {1}")
ErrorMissingConfigValue = Diag(702, "Missing required configuration variable '{0}'")
ErrorConfigVarNotFound = Diag(703, "Configuration key '{0}' does not name a config variable: {1}")
ErrorIncorrectConfigType = Diag(704, "Configuration value for '{0}' is not a valid {1}: {2!r}")
ErrorInvalidConfig = Diag(705, "Invalid configuration: {0}")
