# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
`lumi` command line.

The root command is composed from a list of `Command` descriptors; each
descriptor adds its own flags and runs against the parsed namespace and the
process sink. Root flags (`--logtostderr`, `-v`) configure logging for the
duration of the command.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from lumi import __version__
from lumi.cmdutil import sink as cmdsink
from lumi.cmdutil.args import find_separator
from lumi.cmdutil.log import logging_scope
from lumi.compile import CompileResult, compile_args
from lumi.compiler.errors import ErrorInvalidConfig
from lumi.diag import Sink
from lumi.resource.config import ConfigError, ConfigMap


@dataclass(frozen=True)
class Command:
	"""A subcommand: name, help, how to add its flags, and how to run it."""

	name: str
	help: str
	configure: Callable[[argparse.ArgumentParser], None]
	run: Callable[[argparse.Namespace, Sink], int]
	# Whether arguments after `--` are accepted and passed to the program.
	passthrough: bool = False


def _configure_compile(p: argparse.ArgumentParser) -> None:
	p.add_argument(
		"package",
		nargs="?",
		default=None,
		help="Package file or directory, or '-' to read the package from stdin (default: the working directory)",
	)
	p.add_argument(
		"--config",
		dest="config_pairs",
		action="append",
		default=None,
		metavar="KEY=VALUE",
		help="Configuration value for a config variable (repeatable), e.g. acme/app:region=us-west-2",
	)
	p.add_argument("--config-file", type=Path, default=None, help="JSON object of configuration values")


def _load_config(args: argparse.Namespace) -> Optional[ConfigMap]:
	"""Merge --config-file and --config (flags win); None when neither was given."""
	if args.config_file is None and not args.config_pairs:
		return None
	config = ConfigMap()
	if args.config_file is not None:
		config.update(ConfigMap.from_file(args.config_file))
	if args.config_pairs:
		config.update(ConfigMap.from_pairs(args.config_pairs))
	return config


def _summarize(result: CompileResult, sink: Sink) -> dict:
	pkg = result.pkg
	return {
		"package": pkg.name if pkg is not None else None,
		"root": str(result.compiler.root),
		"modules": sorted(pkg.modules) if pkg is not None else [],
		"heap": result.heap.to_dict() if result.heap is not None else None,
		"config": {k: v.to_json() for k, v in result.config_vars.items()},
		"diagnostics": [d.to_dict() for d in sink.diagnostics],
	}


def _run_compile(args: argparse.Namespace, sink: Sink) -> int:
	try:
		config = _load_config(args)
	except ConfigError as err:
		sink.errorf(ErrorInvalidConfig, err, phase="config")
		return 1

	positional: List[str] = [args.package] if args.package is not None else []
	result = compile_args([*positional, *args.program_args], config, dashdash=len(positional), sink=sink)
	if result is None:
		return 1
	print(json.dumps(_summarize(result, sink), sort_keys=True, indent=2))
	return 0 if sink.success() else 1


def _run_version(args: argparse.Namespace, sink: Sink) -> int:
	print(f"lumi {__version__}")
	return 0


COMMANDS: List[Command] = [
	Command(
		name="compile",
		help="Compile a package and print its symbols, heap snapshot and applied config",
		configure=_configure_compile,
		run=_run_compile,
		passthrough=True,
	),
	Command(name="version", help="Print the lumi version", configure=lambda p: None, run=_run_version),
]


def new_lumi_cmd(commands: Sequence[Command] = COMMANDS) -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="lumi", description="Lumi is a framework and toolset for reusable stacks of services")
	p.add_argument("--logtostderr", action="store_true", help="Log to stderr instead of to a file")
	p.add_argument(
		"-v",
		"--verbose",
		type=int,
		default=0,
		help="Enable verbose logging (e.g., -v 3); anything >3 is very verbose",
	)
	sub = p.add_subparsers(dest="cmd", required=True)
	for cmd in commands:
		cmd.configure(sub.add_parser(cmd.name, help=cmd.help))
	return p


def main(argv: Optional[List[str]] = None, commands: Sequence[Command] = COMMANDS) -> int:
	argv = list(sys.argv[1:] if argv is None else argv)
	program_args: List[str] = []
	sep = find_separator(argv)
	if sep is not None:
		argv, program_args = argv[:sep], argv[sep + 1:]

	p = new_lumi_cmd(commands)
	args = p.parse_args(argv)
	cmd = next(c for c in commands if c.name == args.cmd)
	if program_args and not cmd.passthrough:
		p.error(f"'{cmd.name}' does not accept program arguments after '--'")
	args.program_args = program_args

	sink = cmdsink.reset_sink()
	with logging_scope(log_to_stderr=args.logtostderr, verbose=args.verbose):
		code = cmd.run(args, sink)
	if code == 0 and not sink.success():
		code = 1
	return code
