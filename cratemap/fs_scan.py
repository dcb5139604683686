from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Union

from .errors import EntryNotFound, ReadError


ENTRY_FILENAMES = ("main.rs", "lib.rs")
CRATE_MANIFEST = "Cargo.toml"
SOURCE_DIR = "src"


def read_source(path: Union[str, Path]) -> str:
	path = Path(path)
	try:
		with open(path, "r", encoding="utf-8") as fh:
			return fh.read()
	except (OSError, UnicodeDecodeError) as e:
		raise ReadError(path, e) from e


def _search_dirs(directory: Path) -> List[Path]:
	# A crate root keeps its sources under src/
	if (directory / CRATE_MANIFEST).is_file():
		return [directory / SOURCE_DIR, directory]
	return [directory, directory / SOURCE_DIR]


def find_entry_file(path: Optional[Union[str, Path]] = None) -> Path:
	"""Turn a file, a source directory or a crate root into the entry file to traverse.

	Without a path the current working directory is searched.
	"""
	target = Path(path) if path is not None else Path(os.getcwd())
	if target.is_file():
		return target
	if not target.is_dir():
		raise EntryNotFound(target)

	for directory in _search_dirs(target):
		for filename in ENTRY_FILENAMES:
			candidate = directory / filename
			if candidate.is_file():
				return candidate
	raise EntryNotFound(target)
