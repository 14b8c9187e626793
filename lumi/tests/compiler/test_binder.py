# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from lumi import tokens
from lumi.compiler import symbols
from lumi.compiler.binder import bind_package
from lumi.compiler.errors import ErrorSymbolAlreadyExists, ErrorSymbolNotFound, ErrorUnknownType
from lumi.compiler.parser import parse_module
from lumi.diag import Sink
from lumi.pack import Package


def _bind(sources: dict[str, str]) -> tuple[symbols.Package, Sink]:
	sink = Sink()
	modules = []
	for name, src in sources.items():
		mod, diags = parse_module(src, name)
		assert diags == []
		modules.append(mod)
	return bind_package(Package(name="acme/app", version="0.1.0"), modules, sink), sink


def test_bind_assigns_tokens_and_kinds() -> None:
	pkgsym, sink = _bind({"index": "config region: string; let name = region;", "db": "let size = 3;"})
	assert sink.diagnostics == []
	assert list(pkgsym.modules) == ["db", "index"]
	region = pkgsym.modules["index"].members["region"]
	assert region.token == "acme/app:index:region"
	assert region.kind == symbols.CONFIG and region.type_name == "string"
	name = pkgsym.modules["index"].members["name"]
	assert name.kind == symbols.LET and name.type_name == "any"
	assert pkgsym.lookup(tokens.parse_member("acme/app:region")) is region
	assert pkgsym.lookup(tokens.parse_member("acme/app:db:size")) is pkgsym.modules["db"].members["size"]
	assert pkgsym.lookup(tokens.parse_member("other/pkg:region")) is None
	assert pkgsym.version == "0.1.0"


def test_bind_reports_duplicates_unknown_types_and_names() -> None:
	_pkgsym, sink = _bind(
		{
			"index": """
			config a: string;
			let a = 1;
			let args = 2;
			let b: text = 1;
			let c = missing + a;
			""",
		}
	)
	codes = [d.code for d in sink.errors()]
	assert codes == [
		ErrorSymbolAlreadyExists.code,
		ErrorSymbolAlreadyExists.code,
		ErrorUnknownType.code,
		ErrorSymbolNotFound.code,
	]
	assert all(d.phase == "bind" for d in sink.errors())
	assert "missing" in sink.errors()[-1].message


def test_bind_accepts_forward_references_and_builtins() -> None:
	_pkgsym, sink = _bind({"index": "let a = b + args.x; let b = 1;"})
	assert sink.diagnostics == []
