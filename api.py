from __future__ import annotations

from typing import Literal

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from cratemap.diagram import MEDIA_TYPES, render_diagram
from cratemap.errors import DiagramError, EntryNotFound
from cratemap.fs_scan import find_entry_file
from cratemap.model import DiagramOptions
from cratemap.summarize import summarize_events
from cratemap.traverse import traverse


app = FastAPI(title="Crate Diagram Renderer")


class DiagramRequest(BaseModel):
	path: str
	format: Literal["html", "svg"] = "html"
	name: str = "Diagram"
	include_tests: bool = False


@app.post("/diagram")
def diagram(req: DiagramRequest) -> Response:
	options = DiagramOptions(format=req.format, name=req.name, include_tests=req.include_tests)
	try:
		entry = find_entry_file(req.path)
		content = render_diagram(entry, options)
	except EntryNotFound as e:
		raise HTTPException(status_code=404, detail=str(e))
	except DiagramError as e:
		raise HTTPException(status_code=400, detail=str(e))
	return Response(content=content, media_type=MEDIA_TYPES[options.format])


@app.post("/events")
def events(req: DiagramRequest) -> dict:
	try:
		entry = find_entry_file(req.path)
		stream = traverse(entry, include_tests=req.include_tests)
	except EntryNotFound as e:
		raise HTTPException(status_code=404, detail=str(e))
	except DiagramError as e:
		raise HTTPException(status_code=400, detail=str(e))
	return {
		"events": [event.model_dump() for event in stream],
		"summary": summarize_events(stream).model_dump(),
	}


def create_app() -> FastAPI:
	return app
