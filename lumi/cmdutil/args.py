# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line argument helpers shared by subcommands.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

# Everything after this token is passed to the program, not interpreted by lumi.
SEPARATOR = "--"


def find_separator(argv: Sequence[str]) -> Optional[int]:
	"""Index of the first `--` in `argv`, or None."""
	for i, arg in enumerate(argv):
		if arg == SEPARATOR:
			return i
	return None


def partition_args(args: Sequence[str], dashdash: Optional[int]) -> Tuple[List[str], List[str]]:
	"""
	Split positional arguments at the separator position.

	`dashdash` is the number of arguments that came before `--` (None or -1
	when there was no `--`). Returns `(lumi_args, program_args)`.
	"""
	if dashdash is None or dashdash < 0:
		return list(args), []
	return list(args[:dashdash]), list(args[dashdash:])


def dashdash_args_to_map(args: Sequence[str]) -> Dict[str, str]:
	"""
	Turn program arguments into a name -> value map.

	  --k=v        k -> "v"
	  --k v        k -> "v"   (when v does not start with "-")
	  --no-k       k -> "false"
	  --k          k -> "true"

	Single-dash spellings behave the same.
	"""
	mapped: Dict[str, str] = {}
	i = 0
	while i < len(args):
		arg = args[i]
		# Eat - or -- at the start.
		if arg.startswith("--"):
			arg = arg[2:]
		elif arg.startswith("-"):
			arg = arg[1:]

		key, eq, value = arg.partition("=")
		if eq:
			mapped[key] = value
		elif i + 1 < len(args) and not args[i + 1].startswith("-"):
			mapped[arg] = args[i + 1]
			i += 1
		elif arg.startswith("no-"):
			mapped[arg[3:]] = "false"
		else:
			mapped[arg] = "true"
		i += 1
	return mapped
