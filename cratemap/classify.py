from __future__ import annotations

import re
from typing import Optional, Tuple

from .model import Declaration, Kind, ModuleDecl


TEST_ATTRIBUTE = "test"
CFG_ATTRIBUTE = "cfg"
TEST_MODULE_NAME = "tests"

_ATTRIBUTE_RE = re.compile(
	r"^\s*(?P<path>[A-Za-z_]\w*(?:\s*::\s*[A-Za-z_]\w*)*)\s*(?:\((?P<args>.*)\))?\s*$",
	re.DOTALL,
)


def parse_attribute(text: str) -> Optional[Tuple[str, Optional[str]]]:
	"""Split an attribute into its path and argument text.

	Only a bare path (``test``) or a parenthesized list (``cfg(test)``) is
	understood; anything else yields None.
	"""
	match = _ATTRIBUTE_RE.match(text)
	if match is None:
		return None
	path = re.sub(r"\s+", "", match.group("path"))
	args = match.group("args")
	return path, args.strip() if args is not None else None


def is_test_attribute(text: str) -> bool:
	"""True for a bare `test` or for `cfg(test)` exactly.

	Compound predicates such as `cfg(all(test, unix))` or `cfg(not(test))`
	are not treated as test-only.
	"""
	parsed = parse_attribute(text)
	if parsed is None:
		return False
	path, args = parsed
	if path == TEST_ATTRIBUTE:
		return args is None
	return path == CFG_ATTRIBUTE and args == TEST_ATTRIBUTE


def kind_of(decl: Declaration) -> Kind:
	return Kind(decl.kind)


def classify(decl: Declaration, in_test_context: bool = False) -> Tuple[Kind, bool]:
	kind = kind_of(decl)
	if in_test_context:
		return kind, True
	if isinstance(decl, ModuleDecl) and decl.name == TEST_MODULE_NAME:
		return kind, True
	return kind, any(is_test_attribute(a) for a in decl.attributes)
