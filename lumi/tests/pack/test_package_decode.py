# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from lumi import pack


def test_decode_full_descriptor() -> None:
	pkg = pack.decode(
		json.dumps(
			{
				"name": "acme/app",
				"description": "An app",
				"version": "1.2.3",
				"modules": {"index": "let x = 1;", "db/schema": "let y = 2;"},
			}
		)
	)
	assert pkg == pack.Package(
		name="acme/app",
		description="An app",
		version="1.2.3",
		modules={"index": "let x = 1;", "db/schema": "let y = 2;"},
	)
	assert list(pkg.modules) == ["index", "db/schema"]


@pytest.mark.parametrize(
	("obj", "message"),
	[
		([], "must be a JSON object"),
		({}, "missing a 'name'"),
		({"name": "has space"}, "illegal package name"),
		({"name": "a", "version": 1}, "'version' must be a string"),
		({"name": "a", "modules": []}, "'modules' must be an object"),
		({"name": "a", "modules": {"1bad": ""}}, "illegal module name"),
		({"name": "a", "modules": {"index": 3}}, "source must be a string"),
	],
)
def test_decode_rejects_malformed(obj, message: str) -> None:
	with pytest.raises(pack.PackageError, match=message):
		pack.decode(json.dumps(obj), origin="Lumi.json")


def test_read_stdin_uses_given_stream() -> None:
	pkg = pack.read_stdin(io.StringIO('{"name": "app"}'))
	assert pkg.name == "app"
	assert pkg.modules is None


def test_read_path_reports_unreadable_descriptor(tmp_path: Path) -> None:
	(tmp_path / pack.PACKAGE_FILE).write_bytes(b"\xff\xfe not utf-8")
	with pytest.raises(pack.PackageError):
		pack.read_path(tmp_path)
