# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Compiler entry points: construction, workspace detection and package
compilation end to end (parse -> bind -> evaluate).
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from lumi import pack
from lumi.compiler import Compiler, CompilerConstructionError, Options, build_compiler, default_options
from lumi.compiler.errors import ErrorCantLoadPackage, ErrorEval, ErrorMissingPackageFile, ErrorParse, ErrorSymbolNotFound
from lumi.diag import Sink


def _write_file(path: Path, text: str) -> None:
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(text, encoding="utf-8")


def _opts(**args: str) -> Options:
	opts = default_options()
	opts.args = dict(args)
	opts.diag = Sink()
	return opts


def test_default_options_are_fresh() -> None:
	a = default_options()
	b = default_options()
	a.args["x"] = "1"
	assert b.args == {}
	assert a.diag is None


def test_new_requires_existing_directory(tmp_path: Path) -> None:
	with pytest.raises(CompilerConstructionError, match="does not exist"):
		Compiler.new(tmp_path / "missing", _opts())
	f = tmp_path / "file.txt"
	f.write_text("x", encoding="utf-8")
	with pytest.raises(CompilerConstructionError, match="not a directory"):
		Compiler.new(f, _opts())


def test_build_compiler_picks_root_or_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
	monkeypatch.chdir(tmp_path)
	wd = build_compiler("", _opts())
	assert wd.root == tmp_path.resolve()

	sub = tmp_path / "sub"
	sub.mkdir()
	rooted = build_compiler(str(sub), _opts())
	assert rooted.root == sub.resolve()


def test_compiler_without_sink_uses_its_own() -> None:
	comp = Compiler(Path("."), default_options())
	assert isinstance(comp.diag, Sink)


def test_compile_workspace_discovers_sources(tmp_path: Path) -> None:
	_write_file(tmp_path / pack.PACKAGE_FILE, json.dumps({"name": "acme/app"}))
	_write_file(tmp_path / "index.lumi", 'config region: string = "us-east-1";\nlet name = "app-" + region;\n')
	_write_file(tmp_path / "db" / "main.lumi", "let size = args.size;\n")
	_write_file(tmp_path / ".hidden" / "skip.lumi", "this is not lumi")

	opts = _opts(size="3")
	comp = Compiler.new(tmp_path, opts)
	pkgsym, heap = comp.compile_workspace()

	assert opts.diag.diagnostics == []
	assert pkgsym is not None and sorted(pkgsym.modules) == ["db/main", "index"]
	assert heap is not None
	assert heap.to_dict()["globals"] == {
		"acme/app:db/main:size": "3",
		"acme/app:index:region": "us-east-1",
		"acme/app:index:name": "app-us-east-1",
	}


def test_compile_workspace_searches_parent_directories(tmp_path: Path) -> None:
	_write_file(tmp_path / pack.PACKAGE_FILE, json.dumps({"name": "acme/app", "modules": {"index": "let x = 1;"}}))
	nested = tmp_path / "a" / "b"
	nested.mkdir(parents=True)
	comp = Compiler.new(nested, _opts())
	pkgsym, heap = comp.compile_workspace()
	assert pkgsym is not None and pkgsym.name == "acme/app"
	assert heap is not None and heap.to_dict()["globals"] == {"acme/app:index:x": 1}


def test_compile_workspace_without_package_file(tmp_path: Path) -> None:
	comp = Compiler.new(tmp_path, _opts())
	assert comp.compile_workspace() == (None, None)
	assert [d.code for d in comp.diag.errors()] == [ErrorMissingPackageFile.code]


def test_compile_workspace_with_bad_package_file(tmp_path: Path) -> None:
	_write_file(tmp_path / pack.PACKAGE_FILE, json.dumps({"description": "no name"}))
	comp = Compiler.new(tmp_path, _opts())
	assert comp.compile_workspace() == (None, None)
	assert [d.code for d in comp.diag.errors()] == [ErrorCantLoadPackage.code]


def test_compile_package_parse_errors_yield_nothing(tmp_path: Path) -> None:
	comp = Compiler.new(tmp_path, _opts())
	pkg = pack.Package(name="app", modules={"index": "let = 1;", "other": "let y = ;"})
	assert comp.compile_package(pkg) == (None, None)
	assert [d.code for d in comp.diag.errors()] == [ErrorParse.code, ErrorParse.code]


def test_compile_package_bind_errors_keep_symbols(tmp_path: Path) -> None:
	comp = Compiler.new(tmp_path, _opts())
	pkg = pack.Package(name="app", modules={"index": "let y = nope;"})
	pkgsym, heap = comp.compile_package(pkg)
	assert pkgsym is not None and "y" in pkgsym.modules["index"].members
	assert heap is None
	assert [d.code for d in comp.diag.errors()] == [ErrorSymbolNotFound.code]


def test_compile_package_eval_errors_drop_heap(tmp_path: Path) -> None:
	comp = Compiler.new(tmp_path, _opts())
	pkg = pack.Package(name="app", modules={"index": "let y = 1 / 0;"})
	pkgsym, heap = comp.compile_package(pkg)
	assert pkgsym is not None
	assert heap is None
	assert [d.code for d in comp.diag.errors()] == [ErrorEval.code]


def test_stdin_package_without_modules_compiles_empty(tmp_path: Path) -> None:
	_write_file(tmp_path / "index.lumi", "let ignored = 1;")
	comp = Compiler.new(tmp_path, _opts())
	pkgsym, heap = comp.compile_package(pack.Package(name="app"))
	assert pkgsym is not None and pkgsym.modules == {}
	assert heap is not None and heap.globals == {}


def test_compile_workspace_does_not_go_through_compile_package(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
	_write_file(tmp_path / pack.PACKAGE_FILE, json.dumps({"name": "app", "modules": {"index": "let x = 1;"}}))

	def compile_package(self, pkg, preexec=None):
		raise AssertionError("compile_package called from compile_workspace")

	monkeypatch.setattr(Compiler, "compile_package", compile_package)
	comp = Compiler.new(tmp_path, _opts())
	pkgsym, heap = comp.compile_workspace()
	assert pkgsym is not None
	assert heap is not None and heap.to_dict()["globals"] == {"app:index:x": 1}
