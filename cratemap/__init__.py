"""Structural diagrams of Rust crates.

Modules:
- ast_parse.py: tree-sitter parsing of Rust source into declarations.
- classify.py: item kinds and test-only detection.
- resolve.py: locating the file behind an out-of-line module.
- traverse.py: recursive, ordered walk producing renderer events.
- renderer.py, html_render.py, svg_render.py: renderer contract and backends.
- diagram.py: renderer selection, rendering and output writing.
- fs_scan.py: entry-file discovery and source reading.
- model.py: declarations, events and options.
- summarize.py: counts over an event stream.
"""

__all__ = [
	"ast_parse",
	"classify",
	"diagram",
	"errors",
	"fs_scan",
	"html_render",
	"logs",
	"model",
	"renderer",
	"resolve",
	"summarize",
	"svg_render",
	"traverse",
]
