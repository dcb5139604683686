from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field


class Kind(str, Enum):
	STRUCT = "struct"
	ENUM = "enum"
	FUNCTION = "function"
	TRAIT_IMPL = "trait_impl"
	MODULE = "module"
	OTHER = "other"


# Declarations, as extracted from a parsed source file

class StructField(BaseModel):
	name: str
	type_text: str
	public: bool = False


class EnumVariant(BaseModel):
	name: str
	data: Optional[str] = None


class FunctionSignature(BaseModel):
	name: str
	public: bool = False
	modifiers: List[str] = []
	params: str = ""
	return_type: Optional[str] = None


class StructDecl(BaseModel):
	kind: Literal["struct"] = "struct"
	name: str
	attributes: List[str] = []
	fields: List[StructField] = []


class EnumDecl(BaseModel):
	kind: Literal["enum"] = "enum"
	name: str
	attributes: List[str] = []
	variants: List[EnumVariant] = []


class FunctionDecl(BaseModel):
	kind: Literal["function"] = "function"
	attributes: List[str] = []
	signature: FunctionSignature


class TraitImplDecl(BaseModel):
	kind: Literal["trait_impl"] = "trait_impl"
	target_type: str
	trait_name: Optional[str] = None
	generics: Optional[str] = None
	attributes: List[str] = []
	members: List[FunctionDecl] = []


class ModuleDecl(BaseModel):
	kind: Literal["module"] = "module"
	name: str
	public: bool = False
	attributes: List[str] = []
	# None means the body lives in another file
	items: Optional[List["Declaration"]] = None


class OtherDecl(BaseModel):
	kind: Literal["other"] = "other"
	node_type: str
	attributes: List[str] = []


Declaration = Annotated[
	Union[StructDecl, EnumDecl, FunctionDecl, TraitImplDecl, ModuleDecl, OtherDecl],
	Field(discriminator="kind"),
]

ModuleDecl.model_rebuild()


# Visitor events, consumed by a renderer in stream order

class BeginModule(BaseModel):
	event: Literal["begin_module"] = "begin_module"
	name: str

	def dispatch(self, renderer: Any) -> None:
		renderer.begin_module(self.name)


class EndModule(BaseModel):
	event: Literal["end_module"] = "end_module"
	name: str

	def dispatch(self, renderer: Any) -> None:
		renderer.end_module(self.name)


class StructEvent(BaseModel):
	event: Literal["struct"] = "struct"
	name: str
	public_fields: List[Tuple[str, str]] = []
	private_fields: List[Tuple[str, str]] = []

	def dispatch(self, renderer: Any) -> None:
		renderer.emit_struct(self.name, self.public_fields, self.private_fields)


class EnumEvent(BaseModel):
	event: Literal["enum"] = "enum"
	name: str
	variants: List[EnumVariant] = []

	def dispatch(self, renderer: Any) -> None:
		renderer.emit_enum(self.name, self.variants)


class FunctionEvent(BaseModel):
	event: Literal["function"] = "function"
	name: str
	visibility: Optional[str] = None
	modifiers: Optional[str] = None
	params: str = ""
	return_type: Optional[str] = None

	def dispatch(self, renderer: Any) -> None:
		renderer.emit_function(self.name, self.visibility, self.modifiers, self.params, self.return_type)


class TraitImplEvent(BaseModel):
	event: Literal["trait_impl"] = "trait_impl"
	target_type: str
	trait_name: Optional[str] = None
	generics: Optional[str] = None
	members: List[FunctionSignature] = []

	def dispatch(self, renderer: Any) -> None:
		renderer.emit_trait_impl(self.target_type, self.trait_name, self.generics, self.members)


Event = Union[BeginModule, EndModule, StructEvent, EnumEvent, FunctionEvent, TraitImplEvent]


class DiagramOptions(BaseModel):
	format: Literal["html", "svg"] = "html"
	name: str = "Diagram"
	include_tests: bool = False


class DiagramSummary(BaseModel):
	overview: str
	modules: int = 0
	structs: int = 0
	enums: int = 0
	functions: int = 0
	trait_impls: int = 0
	impl_members: int = 0
	max_depth: int = 0
