from pathlib import Path
from textwrap import dedent
from typing import Dict

import pytest


@pytest.fixture
def write_tree(tmp_path):
	"""Write a {relative path: source} mapping under tmp_path and return tmp_path."""

	def write(files: Dict[str, str]) -> Path:
		for rel_path, code in files.items():
			path = tmp_path / rel_path
			path.parent.mkdir(parents=True, exist_ok=True)
			path.write_text(dedent(code), encoding="utf-8")
		return tmp_path

	return write
