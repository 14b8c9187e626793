# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from lumi import pack
from lumi.cmdutil.locate import STDIN_SENTINEL, read_package_from_arg


def _write_package(root: Path, obj: dict) -> Path:
	root.mkdir(parents=True, exist_ok=True)
	path = root / pack.PACKAGE_FILE
	path.write_text(json.dumps(obj), encoding="utf-8")
	return path


def test_no_argument_means_working_directory() -> None:
	assert read_package_from_arg(None) == (None, "")


def test_stdin_sentinel_reads_package_with_empty_root() -> None:
	stdin = io.StringIO(json.dumps({"name": "app", "modules": {"index": "config key: string;"}}))
	pkg, root = read_package_from_arg(STDIN_SENTINEL, stdin)
	assert root == ""
	assert pkg is not None
	assert pkg.name == "app"
	assert pkg.path is None
	assert pkg.modules == {"index": "config key: string;"}


def test_directory_argument_roots_at_directory(tmp_path: Path) -> None:
	proj = tmp_path / "proj"
	_write_package(proj, {"name": "acme/proj"})
	pkg, root = read_package_from_arg(str(proj))
	assert pkg is not None and pkg.name == "acme/proj"
	assert Path(root) == proj


def test_file_argument_roots_at_parent(tmp_path: Path) -> None:
	path = _write_package(tmp_path / "proj", {"name": "acme/proj", "version": "1.0.0"})
	pkg, root = read_package_from_arg(str(path))
	assert pkg is not None and pkg.version == "1.0.0"
	assert pkg.path == path
	assert Path(root) == path.parent


def test_missing_path_raises(tmp_path: Path) -> None:
	with pytest.raises(pack.PackageError, match="no such package file"):
		read_package_from_arg(str(tmp_path / "nope"))


def test_malformed_stdin_raises() -> None:
	with pytest.raises(pack.PackageError, match="invalid JSON"):
		read_package_from_arg(STDIN_SENTINEL, io.StringIO("{not json"))


def test_undecodable_stdin_raises_package_error() -> None:
	stdin = io.TextIOWrapper(io.BytesIO(b'{"name": "app\xff"}'), encoding="utf-8")
	with pytest.raises(pack.PackageError, match="<stdin>"):
		read_package_from_arg(STDIN_SENTINEL, stdin)
