from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Type, Union

from .errors import RenderError
from .html_render import HtmlRenderer
from .model import DiagramOptions
from .renderer import Renderer
from .svg_render import SvgRenderer
from .traverse import visit


logger = logging.getLogger(__name__)

RENDERERS: Dict[str, Type[Renderer]] = {
	"html": HtmlRenderer,
	"svg": SvgRenderer,
}

MEDIA_TYPES: Dict[str, str] = {
	"html": "text/html",
	"svg": "image/svg+xml",
}


def create_renderer(fmt: str, name: str = "Diagram") -> Renderer:
	try:
		renderer_cls = RENDERERS[fmt]
	except KeyError:
		raise RenderError(f"Unknown diagram format: {fmt}") from None
	return renderer_cls(name)


def default_output(fmt: str) -> Path:
	return Path(f"diagram.{fmt}")


def render_diagram(entry: Union[str, Path], options: DiagramOptions) -> str:
	renderer = create_renderer(options.format, options.name)
	visit(entry, renderer, include_tests=options.include_tests)
	return renderer.finish()


def write_diagram(path: Union[str, Path], content: str) -> None:
	path = Path(path)
	try:
		path.write_text(content, encoding="utf-8")
	except OSError as e:
		raise RenderError(f"Failed to write diagram to {path}: {e}") from e
	logger.info("Diagram written to %s", path)
