from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from .model import EnumVariant, FunctionSignature


FieldPair = Tuple[str, str]


class Renderer(ABC):
	"""Consumer of the traversal event stream.

	begin_module/end_module calls are always balanced. Failures are raised as
	RenderError and stop the run.
	"""

	@abstractmethod
	def begin_module(self, name: str) -> None:
		...

	@abstractmethod
	def end_module(self, name: str) -> None:
		...

	@abstractmethod
	def emit_struct(self, name: str, public_fields: Sequence[FieldPair], private_fields: Sequence[FieldPair]) -> None:
		...

	@abstractmethod
	def emit_enum(self, name: str, variants: Sequence[EnumVariant]) -> None:
		...

	@abstractmethod
	def emit_function(
		self,
		name: str,
		visibility: Optional[str],
		modifiers: Optional[str],
		params: str,
		return_type: Optional[str],
	) -> None:
		...

	@abstractmethod
	def emit_trait_impl(
		self,
		target_type: str,
		trait_name: Optional[str],
		generics: Optional[str],
		members: List[FunctionSignature],
	) -> None:
		...

	@abstractmethod
	def finish(self) -> str:
		"""Return the finished document."""
