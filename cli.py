from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

import uvicorn

from cratemap.diagram import default_output, render_diagram, write_diagram
from cratemap.errors import DiagramError
from cratemap.fs_scan import find_entry_file
from cratemap.logs import configure_logging
from cratemap.model import DiagramOptions
from cratemap.summarize import summarize_events
from cratemap.traverse import traverse


logger = logging.getLogger("cratemap.cli")


def cmd_render(args: argparse.Namespace) -> None:
	options = DiagramOptions(format=args.format, name=args.name, include_tests=args.include_tests)
	entry = find_entry_file(args.path)
	logger.info("Rendering %s diagram from %s", options.format, entry)
	content = render_diagram(entry, options)
	write_diagram(args.output or default_output(options.format), content)


def cmd_events(args: argparse.Namespace) -> None:
	entry = find_entry_file(args.path)
	events = traverse(entry, include_tests=args.include_tests)
	summary = summarize_events(events)
	print(json.dumps({"events": [event.model_dump() for event in events], "summary": summary.model_dump()}, indent=2))


def cmd_serve(args: argparse.Namespace) -> None:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="cratemap", description="Generate a diagram from Rust source code")
	parser.add_argument(
		"-l",
		"--loglevel",
		default="INFO",
		choices=["DEBUG", "INFO", "WARNING", "ERROR"],
		help="Log level",
	)
	sub = parser.add_subparsers(dest="cmd", required=True)

	pr = sub.add_parser("render", help="Render a crate diagram to HTML or SVG")
	pr.add_argument("path", nargs="?", help="Path to main.rs, lib.rs or a crate directory")
	pr.add_argument("-o", "--output", help="Path to write the diagram to (default: diagram.<format>)")
	pr.add_argument("-f", "--format", default="html", choices=["html", "svg"])
	pr.add_argument("-n", "--name", default="Diagram", help="Name of the diagram")
	pr.add_argument("--include-tests", action="store_true", help="Keep #[test] / #[cfg(test)] items and tests modules")
	pr.set_defaults(func=cmd_render)

	pe = sub.add_parser("events", help="Print the traversal event stream as JSON")
	pe.add_argument("path", nargs="?", help="Path to main.rs, lib.rs or a crate directory")
	pe.add_argument("--include-tests", action="store_true")
	pe.set_defaults(func=cmd_events)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	configure_logging(args.loglevel)
	try:
		args.func(args)
	except DiagramError as e:
		logger.error("%s", e)
		return 1
	return 0


if __name__ == "__main__":
	sys.exit(main())
