from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import List, Optional, Sequence, Tuple

from .errors import RenderError
from .model import EnumVariant, FunctionSignature
from .renderer import FieldPair, Renderer


SVG_NS = "http://www.w3.org/2000/svg"

MARGIN = 20.0
LINE_HEIGHT = 20.0
INDENT = 20.0
MODULE_WIDTH = 1000.0
MODULE_FILL = "rgba(250, 255, 204, 0.5)"


def _num(value: float) -> str:
	return f"{value:g}"


def format_signature(
	name: str,
	visibility: Optional[str],
	modifiers: Optional[str],
	params: str,
	return_type: Optional[str],
) -> str:
	parts = [p for p in (visibility, modifiers) if p]
	text = " ".join(parts + [f"fn {name}({params})"])
	if return_type:
		text += f" -> {return_type}"
	return text


class SvgRenderer(Renderer):
	"""Lays items out top to bottom, one text line each, indenting per module."""

	def __init__(self, name: str = "Diagram"):
		self.name = name
		self.svg = ET.Element(
			"svg",
			{
				"xmlns": SVG_NS,
				"font-family": "monospace",
				"font-size": "12",
				"style": "background-color: white",
			},
		)
		ET.SubElement(self.svg, "title").text = name
		self.x = MARGIN
		self.y = MARGIN
		self._open_modules: List[Tuple[float, float, ET.Element]] = []

	def _line(self, text: str, indent: int = 0) -> None:
		ET.SubElement(
			self.svg,
			"text",
			{"x": _num(self.x + indent * INDENT), "y": _num(self.y + LINE_HEIGHT * 0.75)},
		).text = text
		self.y += LINE_HEIGHT

	def begin_module(self, name: str) -> None:
		# Sized in end_module once the contents are known
		rect = ET.SubElement(self.svg, "rect")
		self._open_modules.append((self.x, self.y, rect))
		self.x += 10.0
		self._line(f"mod {name}")
		self.x += INDENT - 10.0

	def end_module(self, name: str) -> None:
		if not self._open_modules:
			raise RenderError(f"end_module({name}) without a matching begin_module")
		x, y, rect = self._open_modules.pop()
		depth = len(self._open_modules)
		rect.attrib.update(
			{
				"x": _num(x),
				"y": _num(y),
				"width": _num(MODULE_WIDTH - 2 * depth * INDENT),
				"height": _num(self.y - y + LINE_HEIGHT / 2),
				"fill": MODULE_FILL,
				"stroke": "black",
				"rx": "5",
				"ry": "5",
			}
		)
		self.x = x
		self.y += LINE_HEIGHT

	def emit_struct(self, name: str, public_fields: Sequence[FieldPair], private_fields: Sequence[FieldPair]) -> None:
		if not public_fields and not private_fields:
			self._line(f"struct {name};")
			return
		self._line(f"struct {name} {{")
		for field_name, field_type in public_fields:
			self._line(f"pub {field_name}: {field_type}", indent=1)
		for field_name, field_type in private_fields:
			self._line(f"{field_name}: {field_type}", indent=1)
		self._line("}")

	def emit_enum(self, name: str, variants: Sequence[EnumVariant]) -> None:
		self._line(f"enum {name} {{")
		for variant in variants:
			self._line(variant.name + (f" {variant.data}" if variant.data else ""), indent=1)
		self._line("}")

	def emit_function(
		self,
		name: str,
		visibility: Optional[str],
		modifiers: Optional[str],
		params: str,
		return_type: Optional[str],
	) -> None:
		self._line(format_signature(name, visibility, modifiers, params, return_type))

	def emit_trait_impl(
		self,
		target_type: str,
		trait_name: Optional[str],
		generics: Optional[str],
		members: List[FunctionSignature],
	) -> None:
		header = "impl" + (generics or "") + " "
		if trait_name:
			header += f"{trait_name} for "
		self._line(f"{header}{target_type} {{")
		for member in members:
			self._line(
				format_signature(
					member.name,
					"pub" if member.public else None,
					" ".join(member.modifiers) or None,
					member.params,
					member.return_type,
				),
				indent=1,
			)
		self._line("}")

	def finish(self) -> str:
		if self._open_modules:
			raise RenderError(f"{len(self._open_modules)} module(s) left open")
		self.svg.set("width", f"{_num(MODULE_WIDTH + 2 * MARGIN)}px")
		self.svg.set("height", f"{_num(self.y + MARGIN)}px")
		return ET.tostring(self.svg, encoding="unicode")
