from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple, Union

from .errors import ModuleNotFound


logger = logging.getLogger(__name__)

SOURCE_EXTENSION = ".rs"
MODULE_FILE = "mod.rs"
RAW_PREFIX = "r#"


def module_candidates(name: str, directory: Union[str, Path]) -> Tuple[Path, Path]:
	directory = Path(directory)
	# mod r#async; lives in async.rs
	if name.startswith(RAW_PREFIX):
		name = name[len(RAW_PREFIX):]
	return (
		directory / f"{name}{SOURCE_EXTENSION}",
		directory / name / MODULE_FILE,
	)


def resolve_module(name: str, directory: Union[str, Path]) -> Path:
	"""Find the file backing an out-of-line ``mod name;`` declaration.

	The flat sibling ``name.rs`` wins over ``name/mod.rs``.
	"""
	candidates = module_candidates(name, directory)
	for path in candidates:
		if path.exists():
			logger.info("Loading module %s from: %s", name, path)
			return path
	raise ModuleNotFound(name, candidates)
