from __future__ import annotations

from pathlib import Path
from typing import Sequence


class DiagramError(Exception):
	"""Base class for every fatal condition raised while building a diagram."""


class ReadError(DiagramError):
	def __init__(self, path: Path, cause: Exception):
		self.path = path
		self.cause = cause
		super().__init__(f"Failed to read file {path}: {cause}")


class ParseError(DiagramError):
	def __init__(self, path: Path, detail: str):
		self.path = path
		self.detail = detail
		super().__init__(f"Failed to parse file {path}: {detail}")


class ModuleNotFound(DiagramError):
	def __init__(self, module: str, candidates: Sequence[Path]):
		self.module = module
		self.candidates = list(candidates)
		paths = ", ".join(str(c) for c in self.candidates)
		super().__init__(f"Module {module} not found in any of the expected paths: {paths}")


class ModuleCycle(DiagramError):
	def __init__(self, module: str, path: Path):
		self.module = module
		self.path = path
		super().__init__(f"Module {module} resolves to {path}, which is already being traversed")


class EntryNotFound(DiagramError):
	def __init__(self, path: Path):
		self.path = path
		super().__init__(f"No main.rs or lib.rs found under {path}")


class RenderError(DiagramError):
	pass
