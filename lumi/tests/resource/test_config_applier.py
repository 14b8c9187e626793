# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from lumi.compiler import symbols
from lumi.compiler.binder import bind_package
from lumi.compiler.errors import ErrorConfigVarNotFound, ErrorIncorrectConfigType
from lumi.compiler.parser import parse_module
from lumi.diag import Sink
from lumi.eval.heapstate import Heap
from lumi.eval.interpreter import PreexecContext
from lumi.pack import Package
from lumi.resource.config import ConfigError, ConfigMap, convert_config_value

_SOURCE = """
config region: string;
config replicas: number = 1;
config debug: bool = false;
config tags;
let name = "app";
"""


def _ctx(sink: Sink) -> PreexecContext:
	mod, diags = parse_module(_SOURCE, "index")
	assert diags == []
	pkgsym: symbols.Package = bind_package(Package(name="app"), [mod], sink)
	return PreexecContext(pkg=pkgsym, heap=Heap(), sink=sink)


def _json(config_vars: dict) -> dict:
	return {k: v.to_json() for k, v in config_vars.items()}


def test_applier_populates_config_vars_only_when_called() -> None:
	sink = Sink()
	ctx = _ctx(sink)
	config_vars: dict = {}
	hook = ConfigMap({"app:region": "us-west-2", "app:index:replicas": "3"}).config_applier(config_vars)
	assert config_vars == {}

	hook(ctx)
	assert sink.diagnostics == []
	assert _json(config_vars) == {"app:region": "us-west-2", "app:index:replicas": 3}
	assert ctx.heap.globals["app:index:region"].to_json() == "us-west-2"
	assert ctx.heap.globals["app:index:replicas"].to_json() == 3


def test_applier_is_idempotent() -> None:
	sink = Sink()
	ctx = _ctx(sink)
	config_vars: dict = {}
	hook = ConfigMap({"app:region": "eu", "app:debug": "true", "app:tags": '{"team": "core"}'}).config_applier(config_vars)
	hook(ctx)
	first = _json(config_vars)
	hook(ctx)
	assert _json(config_vars) == first
	assert first == {"app:region": "eu", "app:debug": True, "app:tags": {"team": "core"}}
	assert sink.diagnostics == []


def test_applier_skips_other_packages_and_reports_bad_keys() -> None:
	sink = Sink()
	ctx = _ctx(sink)
	config_vars: dict = {}
	ConfigMap(
		{
			"aws:region": "us-east-1",
			"app:nope": "x",
			"app:name": "x",
			"app:replicas": "many",
			"malformed": "x",
		}
	).config_applier(config_vars)(ctx)
	assert config_vars == {}
	codes = sorted(d.code for d in sink.errors())
	assert codes == sorted([ErrorConfigVarNotFound.code] * 3 + [ErrorIncorrectConfigType.code])
	assert all(d.phase == "config" for d in sink.errors())


@pytest.mark.parametrize(
	("raw", "type_name", "expected"),
	[
		("x", "string", "x"),
		("42", "number", 42),
		(" 2.5 ", "number", 2.5),
		("-0.5e2", "number", -50.0),
		(7, "number", 7),
		("TRUE", "bool", True),
		(False, "bool", False),
		("[1, 2]", "any", [1, 2]),
		("plain", "any", "plain"),
		({"a": 1}, "any", {"a": 1}),
	],
)
def test_convert_config_value(raw, type_name: str, expected) -> None:
	assert convert_config_value(raw, type_name) == expected


@pytest.mark.parametrize(
	("raw", "type_name"),
	[
		(1, "string"),
		("x", "number"),
		(True, "number"),
		("nan", "number"),
		("inf", "number"),
		("1_000", "number"),
		("1e999", "number"),
		(float("nan"), "number"),
		(10 ** 400, "number"),
		("yes", "bool"),
	],
)
def test_convert_config_value_rejects(raw, type_name: str) -> None:
	with pytest.raises(ValueError):
		convert_config_value(raw, type_name)


def test_config_map_sources(tmp_path: Path) -> None:
	path = tmp_path / "config.json"
	path.write_text(json.dumps({"app:region": "eu", "app:replicas": 2}), encoding="utf-8")
	assert ConfigMap.from_file(path) == {"app:region": "eu", "app:replicas": 2}
	assert ConfigMap.from_pairs(["app:region=us=1", "app:x="]) == {"app:region": "us=1", "app:x": ""}

	with pytest.raises(ConfigError):
		ConfigMap.from_pairs(["novalue"])
	path.write_text("[1]", encoding="utf-8")
	with pytest.raises(ConfigError, match="JSON object"):
		ConfigMap.from_file(path)
	with pytest.raises(ConfigError):
		ConfigMap.from_file(tmp_path / "missing.json")
