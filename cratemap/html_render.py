from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

from jinja2 import Environment, PackageLoader, TemplateError, select_autoescape
from markupsafe import Markup

from .errors import RenderError
from .model import EnumVariant, FunctionSignature
from .renderer import FieldPair, Renderer


_env = Environment(
	loader=PackageLoader("cratemap", "templates"),
	autoescape=select_autoescape(["html"]),
	trim_blocks=True,
	lstrip_blocks=True,
)


class HtmlRenderer(Renderer):
	def __init__(self, name: str = "Diagram"):
		self.name = name
		# One fragment list per open module; the first entry is the page body
		self._scopes: List[Tuple[Optional[int], List[Markup]]] = [(None, [])]
		self._module_count = 0

	def _render(self, template: str, **context: Any) -> Markup:
		try:
			return Markup(_env.get_template(template).render(**context))
		except TemplateError as e:
			raise RenderError(f"Failed to render template {template}: {e}") from e

	def _push(self, fragment: Markup) -> None:
		self._scopes[-1][1].append(fragment)

	def begin_module(self, name: str) -> None:
		self._module_count += 1
		self._scopes.append((self._module_count, []))

	def end_module(self, name: str) -> None:
		if len(self._scopes) < 2:
			raise RenderError(f"end_module({name}) without a matching begin_module")
		module_id, fragments = self._scopes.pop()
		self._push(
			self._render("module.html", name=name, module_id=module_id, contents=Markup("\n").join(fragments))
		)

	def emit_struct(self, name: str, public_fields: Sequence[FieldPair], private_fields: Sequence[FieldPair]) -> None:
		self._push(
			self._render("struct.html", name=name, public_fields=public_fields, private_fields=private_fields)
		)

	def emit_enum(self, name: str, variants: Sequence[EnumVariant]) -> None:
		self._push(self._render("enum.html", name=name, variants=variants))

	def emit_function(
		self,
		name: str,
		visibility: Optional[str],
		modifiers: Optional[str],
		params: str,
		return_type: Optional[str],
	) -> None:
		self._push(
			self._render(
				"function.html",
				name=name,
				visibility=visibility,
				modifiers=modifiers,
				params=params,
				return_type=return_type,
			)
		)

	def emit_trait_impl(
		self,
		target_type: str,
		trait_name: Optional[str],
		generics: Optional[str],
		members: List[FunctionSignature],
	) -> None:
		self._push(
			self._render(
				"impl.html",
				target_type=target_type,
				trait_name=trait_name,
				generics=generics,
				members=members,
			)
		)

	def finish(self) -> str:
		if len(self._scopes) != 1:
			raise RenderError(f"{len(self._scopes) - 1} module(s) left open")
		contents = Markup("\n").join(self._scopes[0][1])
		return str(self._render("page.html", title=self.name, contents=contents))
