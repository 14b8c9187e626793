# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Token helpers.

A token is a fully-qualified name for a program entity or configuration key.
Tokens are plain strings; this module only pins their shape:

  package         acme/app
  module          acme/app:index
  module member   acme/app:index:region

The short member form `acme/app:region` addresses the default module.
"""

from __future__ import annotations

from dataclasses import dataclass

DELIMITER = ":"
DEFAULT_MODULE = "index"


@dataclass(frozen=True)
class MemberToken:
	"""A decomposed module-member token."""

	package: str
	module: str
	member: str


def module_token(package: str, module: str) -> str:
	return f"{package}{DELIMITER}{module}"


def module_member(package: str, module: str, member: str) -> str:
	return f"{package}{DELIMITER}{module}{DELIMITER}{member}"


def parse_member(tok: str) -> MemberToken:
	"""
	Split a member token into its parts.

	Accepts `pkg:module:member` and the short `pkg:member` form. Raises
	ValueError for anything else (no delimiter, empty parts, too many parts).
	"""
	parts = tok.split(DELIMITER)
	if len(parts) == 2:
		parts = [parts[0], DEFAULT_MODULE, parts[1]]
	if len(parts) != 3 or any(p == "" for p in parts):
		raise ValueError(f"malformed member token '{tok}'")
	return MemberToken(package=parts[0], module=parts[1], member=parts[2])
