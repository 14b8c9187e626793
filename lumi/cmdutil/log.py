# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Process-wide logging.

Logging is set up once at process entry and torn down once when the command
finishes, on every exit path:

	with logging_scope(log_to_stderr=args.logtostderr, verbose=args.verbose):
		return run(args)

Without `--logtostderr` messages go to `lumi.<user>.log` under the system
temp directory. `-v N` raises verbosity; `verbose_enabled(N)` gates the chattiest
messages the way `V(N)` levels do.
"""

from __future__ import annotations

import getpass
import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

LOGGER_NAME = "lumi"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_verbose = 0


def verbose_enabled(level: int) -> bool:
	return _verbose >= level


def default_log_path() -> Path:
	"""Per-user log file under the system temp directory, `lumi.<user>.log`."""
	try:
		user = getpass.getuser()
	except (KeyError, OSError):
		user = "unknownuser"
	return Path(tempfile.gettempdir()) / f"lumi.{user}.log"


def init_logging(log_to_stderr: bool, verbose: int, log_path: Optional[Path] = None) -> logging.Handler:
	"""Install the process handler on the `lumi` logger and return it."""
	global _verbose
	_verbose = max(0, verbose)

	if log_to_stderr:
		handler: logging.Handler = logging.StreamHandler()
	else:
		handler = logging.FileHandler(str(log_path or default_log_path()), encoding="utf-8")
	handler.setFormatter(logging.Formatter(LOG_FORMAT))

	root = logging.getLogger(LOGGER_NAME)
	root.addHandler(handler)
	root.setLevel(logging.DEBUG if _verbose > 0 else logging.INFO)
	# Messages stay on our handler; the host application's root logger is not touched.
	root.propagate = False
	return handler


def flush_logging(handler: logging.Handler) -> None:
	"""Flush and detach `handler`; safe to call once per `init_logging`."""
	global _verbose
	root = logging.getLogger(LOGGER_NAME)
	try:
		handler.flush()
	finally:
		root.removeHandler(handler)
		handler.close()
		root.propagate = True
		root.setLevel(logging.NOTSET)
		_verbose = 0


@contextmanager
def logging_scope(log_to_stderr: bool = False, verbose: int = 0, log_path: Optional[Path] = None) -> Iterator[logging.Handler]:
	handler = init_logging(log_to_stderr, verbose, log_path)
	try:
		yield handler
	finally:
		flush_logging(handler)
