from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple, Union

import tree_sitter_rust as ts_rust
from tree_sitter import Language, Node, Parser

from .errors import ParseError
from .fs_scan import read_source
from .model import (
	Declaration,
	EnumDecl,
	EnumVariant,
	FunctionDecl,
	FunctionSignature,
	ModuleDecl,
	OtherDecl,
	StructDecl,
	StructField,
	TraitImplDecl,
)


RUST_LANGUAGE = Language(ts_rust.language())

FUNCTION_MODIFIERS = ("async", "const", "unsafe")

_SKIPPED_NODES = {"line_comment", "block_comment", "inner_attribute_item"}

_parser = Parser(RUST_LANGUAGE)


def _text(node: Node, source: bytes) -> str:
	return source[node.start_byte:node.end_byte].decode("utf-8")


def _field_text(node: Node, field: str, source: bytes) -> Optional[str]:
	child = node.child_by_field_name(field)
	if child is None:
		return None
	return _text(child, source)


def _is_public(node: Node, source: bytes) -> bool:
	for child in node.named_children:
		if child.type == "visibility_modifier":
			return _text(child, source) == "pub"
	return False


def _attribute_text(node: Node, source: bytes) -> str:
	for child in node.named_children:
		if child.type == "attribute":
			return _text(child, source)
	# "#[" ... "]" without a recognisable attribute body
	return _text(node, source)[2:-1]


def _items_with_attributes(node: Node, source: bytes) -> List[Tuple[Node, List[str]]]:
	"""Pair each named child with the outer attributes written directly above it."""
	items: List[Tuple[Node, List[str]]] = []
	pending: List[str] = []
	for child in node.named_children:
		if child.type == "attribute_item":
			pending.append(_attribute_text(child, source))
		elif child.type in _SKIPPED_NODES:
			continue
		else:
			items.append((child, pending))
			pending = []
	return items


def _first_error(node: Node) -> Optional[Node]:
	if node.type == "ERROR" or node.is_missing:
		return node
	if not node.has_error:
		return None
	for child in node.children:
		found = _first_error(child)
		if found is not None:
			return found
	return node


def _parse_fields(body: Optional[Node], source: bytes) -> List[StructField]:
	fields: List[StructField] = []
	if body is None:
		return fields

	if body.type == "field_declaration_list":
		for child, _ in _items_with_attributes(body, source):
			if child.type != "field_declaration":
				continue
			fields.append(
				StructField(
					name=_field_text(child, "name", source) or str(len(fields)),
					type_text=_field_text(child, "type", source) or "",
					public=_is_public(child, source),
				)
			)
	elif body.type == "ordered_field_declaration_list":
		# Tuple fields: visibility sits next to the type rather than wrapping it
		public = False
		for child, _ in _items_with_attributes(body, source):
			if child.type == "visibility_modifier":
				public = _text(child, source) == "pub"
				continue
			fields.append(StructField(name=str(len(fields)), type_text=_text(child, source), public=public))
			public = False
	return fields


def _parse_struct(node: Node, source: bytes, attributes: List[str]) -> StructDecl:
	name = _field_text(node, "name", source) or ""
	generics = _field_text(node, "type_parameters", source)
	return StructDecl(
		name=name + (generics or ""),
		attributes=attributes,
		fields=_parse_fields(node.child_by_field_name("body"), source),
	)


def _parse_enum(node: Node, source: bytes, attributes: List[str]) -> EnumDecl:
	name = _field_text(node, "name", source) or ""
	generics = _field_text(node, "type_parameters", source)
	variants: List[EnumVariant] = []
	body = node.child_by_field_name("body")
	if body is not None:
		for child, _ in _items_with_attributes(body, source):
			if child.type != "enum_variant":
				continue
			variants.append(
				EnumVariant(
					name=_field_text(child, "name", source) or "",
					data=_field_text(child, "body", source),
				)
			)
	return EnumDecl(name=name + (generics or ""), attributes=attributes, variants=variants)


def _parse_signature(node: Node, source: bytes) -> FunctionSignature:
	modifiers: List[str] = []
	for child in node.named_children:
		if child.type == "function_modifiers":
			present = {_text(m, source) for m in child.children}
			modifiers = [m for m in FUNCTION_MODIFIERS if m in present]
			break

	params: List[str] = []
	parameters = node.child_by_field_name("parameters")
	if parameters is not None:
		for child in parameters.named_children:
			if child.type in _SKIPPED_NODES or child.type == "attribute_item":
				continue
			params.append(_text(child, source))

	return FunctionSignature(
		name=_field_text(node, "name", source) or "",
		public=_is_public(node, source),
		modifiers=modifiers,
		params=", ".join(params),
		return_type=_field_text(node, "return_type", source),
	)


def _parse_function(node: Node, source: bytes, attributes: List[str]) -> FunctionDecl:
	return FunctionDecl(attributes=attributes, signature=_parse_signature(node, source))


def _parse_impl(node: Node, source: bytes, attributes: List[str]) -> TraitImplDecl:
	members: List[FunctionDecl] = []
	body = node.child_by_field_name("body")
	if body is not None:
		for child, member_attributes in _items_with_attributes(body, source):
			if child.type == "function_item":
				members.append(_parse_function(child, source, member_attributes))
	return TraitImplDecl(
		target_type=_field_text(node, "type", source) or "",
		trait_name=_field_text(node, "trait", source),
		generics=_field_text(node, "type_parameters", source),
		attributes=attributes,
		members=members,
	)


def _parse_module(node: Node, source: bytes, attributes: List[str]) -> ModuleDecl:
	body = node.child_by_field_name("body")
	return ModuleDecl(
		name=_field_text(node, "name", source) or "",
		public=_is_public(node, source),
		attributes=attributes,
		items=_parse_items(body, source) if body is not None else None,
	)


_PARSERS = {
	"struct_item": _parse_struct,
	"enum_item": _parse_enum,
	"function_item": _parse_function,
	"impl_item": _parse_impl,
	"mod_item": _parse_module,
}


def _parse_items(node: Node, source: bytes) -> List[Declaration]:
	declarations: List[Declaration] = []
	for child, attributes in _items_with_attributes(node, source):
		parse = _PARSERS.get(child.type)
		if parse is None:
			declarations.append(OtherDecl(node_type=child.type, attributes=attributes))
		else:
			declarations.append(parse(child, source, attributes))
	return declarations


def parse_rust_source(text: str, path: Union[str, Path] = "<string>") -> List[Declaration]:
	source = text.encode("utf-8")
	tree = _parser.parse(source)
	root = tree.root_node
	if root.has_error:
		error = _first_error(root) or root
		line, column = error.start_point
		what = "missing " + error.type if error.is_missing else "unexpected syntax"
		raise ParseError(Path(path), f"{what} at line {line + 1}, column {column + 1}")
	return _parse_items(root, source)


def parse_rust_file(path: Union[str, Path]) -> List[Declaration]:
	path = Path(path)
	return parse_rust_source(read_source(path), path)
