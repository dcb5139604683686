"""Depth-first walk from an entry file to the ordered renderer event stream."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict

from .ast_parse import parse_rust_file
from .classify import classify, kind_of
from .errors import ModuleCycle
from .model import (
	BeginModule,
	Declaration,
	EndModule,
	EnumDecl,
	EnumEvent,
	Event,
	FunctionDecl,
	FunctionEvent,
	Kind,
	ModuleDecl,
	StructDecl,
	StructEvent,
	TraitImplDecl,
	TraitImplEvent,
)
from .renderer import Renderer
from .resolve import resolve_module


logger = logging.getLogger(__name__)

# Modules and unsupported items follow, interleaved in source order
SECTION_ORDER = (Kind.STRUCT, Kind.ENUM, Kind.FUNCTION, Kind.TRAIT_IMPL)


class FileContext(BaseModel):
	model_config = ConfigDict(frozen=True)

	path: Path
	lineage: Tuple[Path, ...] = ()

	@property
	def directory(self) -> Path:
		return self.path.parent

	def enter(self, path: Path) -> FileContext:
		return FileContext(path=path, lineage=self.lineage + (self.path.resolve(),))

	def on_lineage(self, path: Path) -> bool:
		resolved = path.resolve()
		return resolved == self.path.resolve() or resolved in self.lineage


class TraversalState(BaseModel):
	model_config = ConfigDict(frozen=True)

	in_test_context: bool = False

	def descend(self, is_test: bool) -> TraversalState:
		if is_test and not self.in_test_context:
			return TraversalState(in_test_context=True)
		return self


def order_sections(declarations: Sequence[Declaration]) -> List[Declaration]:
	buckets: Dict[Kind, List[Declaration]] = {kind: [] for kind in SECTION_ORDER}
	rest: List[Declaration] = []
	for decl in declarations:
		kind = kind_of(decl)
		if kind in buckets:
			buckets[kind].append(decl)
		else:
			rest.append(decl)

	ordered: List[Declaration] = []
	for kind in SECTION_ORDER:
		ordered.extend(buckets[kind])
	ordered.extend(rest)
	return ordered


def _classify(decl: Declaration, state: TraversalState, include_tests: bool) -> Tuple[Kind, bool]:
	if include_tests:
		return kind_of(decl), False
	return classify(decl, state.in_test_context)


def _struct_event(decl: StructDecl) -> StructEvent:
	return StructEvent(
		name=decl.name,
		public_fields=[(f.name, f.type_text) for f in decl.fields if f.public],
		private_fields=[(f.name, f.type_text) for f in decl.fields if not f.public],
	)


def _function_event(decl: FunctionDecl) -> FunctionEvent:
	sig = decl.signature
	return FunctionEvent(
		name=sig.name,
		visibility="pub" if sig.public else None,
		modifiers=" ".join(sig.modifiers) or None,
		params=sig.params,
		return_type=sig.return_type,
	)


def _trait_impl_event(
	decl: TraitImplDecl, state: TraversalState, include_tests: bool
) -> Optional[TraitImplEvent]:
	members = []
	for member in decl.members:
		_, is_test = _classify(member, state, include_tests)
		if is_test:
			logger.debug("Skipping test-only function %s in impl %s", member.signature.name, decl.target_type)
			continue
		members.append(member.signature)
	if not members:
		return None
	return TraitImplEvent(
		target_type=decl.target_type,
		trait_name=decl.trait_name,
		generics=decl.generics,
		members=members,
	)


def _module_events(
	decl: ModuleDecl, ctx: FileContext, state: TraversalState, include_tests: bool
) -> List[Event]:
	if decl.items is not None:
		children = collect_events(decl.items, ctx, state, include_tests)
	else:
		path = resolve_module(decl.name, ctx.directory)
		if ctx.on_lineage(path):
			raise ModuleCycle(decl.name, path)
		children = collect_file_events(ctx.enter(path), state, include_tests)

	if not children:
		logger.debug("Suppressing empty module %s", decl.name)
		return []
	return [BeginModule(name=decl.name), *children, EndModule(name=decl.name)]


def collect_events(
	declarations: Sequence[Declaration],
	ctx: FileContext,
	state: TraversalState,
	include_tests: bool = False,
) -> List[Event]:
	events: List[Event] = []
	for decl in order_sections(declarations):
		kind, is_test = _classify(decl, state, include_tests)
		if is_test:
			logger.debug("Skipping test-only %s in %s", kind.value, ctx.path)
			continue

		if isinstance(decl, StructDecl):
			events.append(_struct_event(decl))
		elif isinstance(decl, EnumDecl):
			events.append(EnumEvent(name=decl.name, variants=decl.variants))
		elif isinstance(decl, FunctionDecl):
			events.append(_function_event(decl))
		elif isinstance(decl, TraitImplDecl):
			event = _trait_impl_event(decl, state, include_tests)
			if event is not None:
				events.append(event)
		elif isinstance(decl, ModuleDecl):
			events.extend(_module_events(decl, ctx, state.descend(is_test), include_tests))
		else:
			logger.debug("Ignoring unsupported item %s in %s", decl.node_type, ctx.path)
	return events


def collect_file_events(ctx: FileContext, state: TraversalState, include_tests: bool = False) -> List[Event]:
	declarations = parse_rust_file(ctx.path)
	return collect_events(declarations, ctx, state, include_tests)


def traverse(path: Union[str, Path], include_tests: bool = False) -> List[Event]:
	return collect_file_events(FileContext(path=Path(path)), TraversalState(), include_tests)


def visit(path: Union[str, Path], renderer: Renderer, include_tests: bool = False) -> None:
	"""Traverse the whole tree first, then replay the events into the renderer.

	Any read, parse or resolution failure therefore surfaces before the
	renderer has seen a single event.
	"""
	for event in traverse(path, include_tests):
		event.dispatch(renderer)
