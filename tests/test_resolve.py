import pytest

from cratemap.errors import ModuleNotFound
from cratemap.resolve import module_candidates, resolve_module


def test_flat_file_wins_over_directory_module(write_tree):
	root = write_tree({"foo.rs": "struct A;\n", "foo/mod.rs": "struct B;\n"})
	assert resolve_module("foo", root) == root / "foo.rs"


def test_directory_module(write_tree):
	root = write_tree({"foo/mod.rs": "struct B;\n"})
	assert resolve_module("foo", root) == root / "foo" / "mod.rs"


def test_candidates_stay_in_directory(tmp_path):
	flat, nested = module_candidates("net", tmp_path)
	assert flat == tmp_path / "net.rs"
	assert nested == tmp_path / "net" / "mod.rs"


def test_missing_module_names_both_candidates(tmp_path):
	with pytest.raises(ModuleNotFound) as exc:
		resolve_module("missing", tmp_path)
	err = exc.value
	assert err.module == "missing"
	assert err.candidates == [tmp_path / "missing.rs", tmp_path / "missing" / "mod.rs"]
	message = str(err)
	assert "missing" in message
	assert str(tmp_path / "missing.rs") in message
	assert str(tmp_path / "missing" / "mod.rs") in message


def test_raw_identifier_module(write_tree):
	root = write_tree({"async.rs": "fn f() {}\n"})
	assert module_candidates("r#async", root) == (root / "async.rs", root / "async" / "mod.rs")
	assert resolve_module("r#async", root) == root / "async.rs"
