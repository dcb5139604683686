from __future__ import annotations

from typing import Sequence

from .model import (
	BeginModule,
	DiagramSummary,
	EndModule,
	EnumEvent,
	Event,
	FunctionEvent,
	StructEvent,
	TraitImplEvent,
)


def summarize_events(events: Sequence[Event]) -> DiagramSummary:
	summary = DiagramSummary(overview="")
	depth = 0
	for event in events:
		if isinstance(event, BeginModule):
			summary.modules += 1
			depth += 1
			summary.max_depth = max(summary.max_depth, depth)
		elif isinstance(event, EndModule):
			depth -= 1
		elif isinstance(event, StructEvent):
			summary.structs += 1
		elif isinstance(event, EnumEvent):
			summary.enums += 1
		elif isinstance(event, FunctionEvent):
			summary.functions += 1
		elif isinstance(event, TraitImplEvent):
			summary.trait_impls += 1
			summary.impl_members += len(event.members)

	summary.overview = (
		f"{summary.modules} modules (max depth {summary.max_depth}), "
		f"{summary.structs} structs, {summary.enums} enums, "
		f"{summary.functions} functions, "
		f"{summary.trait_impls} impl blocks with {summary.impl_members} members"
	)
	return summary
