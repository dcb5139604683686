from textwrap import dedent

import pytest

from cratemap.ast_parse import parse_rust_file, parse_rust_source
from cratemap.errors import ParseError, ReadError
from cratemap.model import EnumDecl, FunctionDecl, ModuleDecl, OtherDecl, StructDecl, TraitImplDecl


def test_parse_simple_file(tmp_path):
	code = dedent(
		"""
		use std::fmt;

		/// A point
		#[derive(Debug)]
		pub struct Point<T> {
			pub x: T,
			y: T,
		}

		struct Pair(pub i32, String);

		enum Shape {
			Unit,
			Circle { radius: f64 },
			Rect(u32, u32),
		}

		pub async unsafe fn load(path: &str, n: usize) -> Result<(), Error> {
			Ok(())
		}

		impl<T> fmt::Display for Point<T> {
			fn fmt(&self, f: &mut fmt::Formatter) -> fmt::Result {
				Ok(())
			}
		}

		mod inline {
			fn hidden() {}
		}

		pub mod external;
		"""
	)
	p = tmp_path / "lib.rs"
	p.write_text(code)
	decls = parse_rust_file(p)

	assert [d.kind for d in decls] == [
		"other",
		"struct",
		"struct",
		"enum",
		"function",
		"trait_impl",
		"module",
		"module",
	]
	assert isinstance(decls[0], OtherDecl) and decls[0].node_type == "use_declaration"

	point = decls[1]
	assert isinstance(point, StructDecl)
	assert point.name == "Point<T>"
	assert point.attributes == ["derive(Debug)"]
	assert [(f.name, f.type_text, f.public) for f in point.fields] == [("x", "T", True), ("y", "T", False)]

	pair = decls[2]
	assert [(f.name, f.type_text, f.public) for f in pair.fields] == [("0", "i32", True), ("1", "String", False)]

	shape = decls[3]
	assert isinstance(shape, EnumDecl)
	assert [(v.name, v.data) for v in shape.variants] == [
		("Unit", None),
		("Circle", "{ radius: f64 }"),
		("Rect", "(u32, u32)"),
	]

	load = decls[4]
	assert isinstance(load, FunctionDecl)
	assert load.signature.name == "load"
	assert load.signature.public
	assert load.signature.modifiers == ["async", "unsafe"]
	assert load.signature.params == "path: &str, n: usize"
	assert load.signature.return_type == "Result<(), Error>"

	display = decls[5]
	assert isinstance(display, TraitImplDecl)
	assert display.target_type == "Point<T>"
	assert display.trait_name == "fmt::Display"
	assert display.generics == "<T>"
	assert [m.signature.name for m in display.members] == ["fmt"]
	assert display.members[0].signature.params == "&self, f: &mut fmt::Formatter"

	inline, external = decls[6], decls[7]
	assert isinstance(inline, ModuleDecl) and not inline.public
	assert [d.kind for d in inline.items] == ["function"]
	assert isinstance(external, ModuleDecl) and external.public
	assert external.items is None


def test_attributes_attach_to_next_item():
	decls = parse_rust_source(
		dedent(
			"""
			#[cfg(test)]
			// helpers live here
			mod tests {
				#[test]
				fn works() {}
			}

			impl Widget {
				#[test]
				fn check() {}
				pub const fn new() -> Self { Widget }
			}
			"""
		)
	)
	tests_mod, impl_block = decls
	assert tests_mod.attributes == ["cfg(test)"]
	assert tests_mod.items[0].attributes == ["test"]
	assert impl_block.trait_name is None
	assert [(m.signature.name, m.attributes) for m in impl_block.members] == [("check", ["test"]), ("new", [])]
	assert impl_block.members[1].signature.modifiers == ["const"]


def test_private_and_restricted_visibility():
	decls = parse_rust_source("pub(crate) fn a() {}\nfn b() {}\npub fn c() {}\n")
	assert [d.signature.public for d in decls] == [False, False, True]


def test_unit_struct_has_no_fields():
	(decl,) = parse_rust_source("pub struct Marker;\n")
	assert decl.name == "Marker"
	assert decl.fields == []


def test_syntax_error_raises_parse_error():
	with pytest.raises(ParseError) as exc:
		parse_rust_source("struct Broken {\n    x: i32,\n", "broken.rs")
	assert "broken.rs" in str(exc.value)


def test_missing_file_raises_read_error(tmp_path):
	with pytest.raises(ReadError) as exc:
		parse_rust_file(tmp_path / "nope.rs")
	assert exc.value.path == tmp_path / "nope.rs"
