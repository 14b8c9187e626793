# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Configuration maps and the config applier.

A `ConfigMap` maps member tokens (`pkg:module:name` or `pkg:name`) to raw
values. Turning it into a preexec hook with `config_applier(config_vars)`
yields a `ConfigApplier`: an explicit object pairing the map with the output
mapping it fills, which the compiler calls once right before the program's
initializers run.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict

from lumi import tokens
from lumi.compiler.errors import ErrorConfigVarNotFound, ErrorIncorrectConfigType
from lumi.eval import rt
from lumi.eval.interpreter import PreexecContext

logger = logging.getLogger(__name__)

# Decimal number syntax accepted in string config values.
_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(?P<frac>\.[0-9]+)?(?P<exp>[eE][+-]?[0-9]+)?")


class ConfigError(ValueError):
	"""A configuration source (flag or file) is malformed."""


class ConfigMap(dict):
	"""Member token -> raw configuration value."""

	def config_applier(self, config_vars: Dict[str, rt.Object]) -> "ConfigApplier":
		return ConfigApplier(self, config_vars)

	@classmethod
	def from_file(cls, path: str | Path) -> "ConfigMap":
		"""Load a JSON object of token -> value."""
		p = Path(path)
		try:
			obj = json.loads(p.read_text(encoding="utf-8"))
		except OSError as err:
			raise ConfigError(f"{p}: {err}") from err
		except json.JSONDecodeError as err:
			raise ConfigError(f"{p}: invalid JSON ({err.msg} at line {err.lineno} column {err.colno})") from err
		if not isinstance(obj, dict):
			raise ConfigError(f"{p}: configuration must be a JSON object")
		return cls(obj)

	@classmethod
	def from_pairs(cls, pairs: list[str]) -> "ConfigMap":
		"""Parse `key=value` strings (values stay strings)."""
		out = cls()
		for pair in pairs:
			key, sep, value = pair.partition("=")
			if not sep or not key:
				raise ConfigError(f"config '{pair}' must be of the form key=value")
			out[key] = value
		return out


class ConfigApplier:
	"""
	Preexec hook that assigns configuration values to `config` variables.

	Keys addressing other packages are skipped. Keys addressing this package
	must name a `config` variable, and values must convert to its declared
	type; otherwise a diagnostic is reported and the key is not applied.
	Applying again with the same map records the same `config_vars`.
	"""

	def __init__(self, config: ConfigMap, config_vars: Dict[str, rt.Object]) -> None:
		self.config = config
		self.config_vars = config_vars

	def __call__(self, ctx: PreexecContext) -> None:
		for key in sorted(self.config):
			try:
				tok = tokens.parse_member(key)
			except ValueError as err:
				ctx.sink.errorf(ErrorConfigVarNotFound, key, err, phase="config")
				continue
			if tok.package != ctx.pkg.name:
				logger.debug("skipping config %s: not for package %s", key, ctx.pkg.name)
				continue

			var = ctx.pkg.lookup(tok)
			if var is None:
				ctx.sink.errorf(ErrorConfigVarNotFound, key, "no such variable", phase="config")
				continue
			if not var.is_config:
				ctx.sink.errorf(ErrorConfigVarNotFound, key, f"'{var.name}' is a let binding", phase="config")
				continue

			raw = self.config[key]
			try:
				value = convert_config_value(raw, var.type_name)
				obj = ctx.heap.from_python(value)
			except (TypeError, ValueError):
				ctx.sink.errorf(ErrorIncorrectConfigType, key, var.type_name, raw, phase="config")
				continue

			ctx.assign(var, obj)
			self.config_vars[key] = obj
			logger.debug("applied config %s = %r", key, obj)


def convert_config_value(raw: Any, type_name: str) -> Any:
	"""
	Convert a raw config value to a value of `type_name`.

	Strings are parsed for `number` and `bool`; for `any`, strings that hold
	JSON are decoded and everything else is kept as is. Raises ValueError
	when no conversion exists.
	"""
	if type_name == rt.STRING:
		if isinstance(raw, str):
			return raw
		raise ValueError(f"not a string: {raw!r}")
	if type_name == rt.NUMBER:
		if isinstance(raw, bool):
			raise ValueError("bool is not a number")
		if isinstance(raw, str):
			text = raw.strip()
			m = _NUMBER_RE.fullmatch(text)
			if m is None:
				raise ValueError(f"not a number: {raw!r}")
			raw = float(text) if m.group("frac") or m.group("exp") else int(text)
		if not isinstance(raw, (int, float)):
			raise ValueError(f"not a number: {raw!r}")
		if not rt.number_in_range(raw):
			raise ValueError(f"number out of range: {raw!r}")
		return raw
	if type_name == rt.BOOL:
		if isinstance(raw, bool):
			return raw
		if isinstance(raw, str) and raw.strip().lower() in ("true", "false"):
			return raw.strip().lower() == "true"
		raise ValueError(f"not a bool: {raw!r}")
	if type_name == rt.ANY:
		if isinstance(raw, str):
			try:
				return json.loads(raw)
			except ValueError:
				return raw
		return raw
	raise ValueError(f"unknown type {type_name}")
