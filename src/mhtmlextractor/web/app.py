from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from mhtmlextractor.application.services.archive_service import ArchiveService
from mhtmlextractor.core.config import APP_VERSION, AppConfig
from mhtmlextractor.core.errors import MhtmlExtractorError
from mhtmlextractor.domain.models.resource import ParseResult, Resource, ResourceSelection


class ParseRequest(BaseModel):
    path: str
    fetch_external: bool = False


class SelectionRequest(BaseModel):
    action: str
    index: int | None = None


class ExtractRequest(BaseModel):
    output_dir: str | None = None
    indices: list[int] | None = None


@dataclass(slots=True)
class _Session:
    result: ParseResult
    selection: ResourceSelection


def _resource_row(index: int, resource: Resource, selected: bool) -> dict[str, Any]:
    return {
        "index": index,
        "kind": resource.kind,
        "filename": resource.filename,
        "size": resource.size,
        "origin": resource.origin,
        "location": resource.location,
        "selected": selected,
    }


def _session_payload(session: _Session) -> dict[str, Any]:
    result = session.result
    return {
        "source_path": str(result.source_path),
        "count": len(result),
        "counts_by_origin": result.counts_by_origin(),
        "skipped_parts": result.skipped_parts,
        "has_html": bool(result.html_content),
        "selected": session.selection.indices(),
        "resources": [
            _resource_row(i, r, session.selection.is_selected(i)) for i, r in enumerate(result.resources)
        ],
    }


def create_app(config: AppConfig | None = None, service: ArchiveService | None = None) -> FastAPI:
    app = FastAPI(title="MHTML Extractor", version=APP_VERSION)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    archive_service = service or ArchiveService(config)
    lock = threading.Lock()
    state: dict[str, _Session | None] = {"session": None}

    def require_session() -> _Session:
        session = state["session"]
        if session is None:
            raise HTTPException(status_code=409, detail="No MHTML archive loaded. POST /api/parse first.")
        return session

    @app.get("/api/health")
    def api_health() -> dict[str, Any]:
        return {"ok": True, "version": APP_VERSION}

    @app.post("/api/parse")
    def api_parse(req: ParseRequest) -> dict[str, Any]:
        try:
            result = archive_service.parse(Path(req.path), fetch_external=req.fetch_external)
        except MhtmlExtractorError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        session = _Session(result=result, selection=ResourceSelection.all_of(result))
        with lock:
            state["session"] = session
        return {"ok": True, **_session_payload(session)}

    @app.get("/api/resources")
    def api_resources() -> dict[str, Any]:
        with lock:
            return _session_payload(require_session())

    @app.get("/api/html")
    def api_html() -> dict[str, Any]:
        with lock:
            session = require_session()
        return {"html": archive_service.get_html_content(session.result)}

    @app.post("/api/selection")
    def api_selection(req: SelectionRequest) -> dict[str, Any]:
        with lock:
            selection = require_session().selection
            try:
                if req.action == "select_all":
                    selection.select_all()
                elif req.action == "clear":
                    selection.clear()
                elif req.action == "toggle_all":
                    selection.toggle_all()
                elif req.action == "toggle":
                    if req.index is None:
                        raise HTTPException(status_code=400, detail="toggle requires an index")
                    selection.toggle(req.index)
                else:
                    raise HTTPException(status_code=400, detail=f"Unknown selection action: {req.action}")
            except MhtmlExtractorError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
            return {"ok": True, "selected": selection.indices()}

    @app.post("/api/extract")
    def api_extract(req: ExtractRequest) -> dict[str, Any]:
        with lock:
            session = require_session()
            indices = req.indices if req.indices is not None else session.selection.indices()
        result = session.result
        output_dir = (
            Path(req.output_dir) if req.output_dir else archive_service.default_output_dir(result.source_path)
        )
        try:
            paths = archive_service.extract_resources(result, output_dir, indices)
        except MhtmlExtractorError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {
            "ok": True,
            "output_dir": str(output_dir),
            "count": len(paths),
            "paths": [str(p) for p in paths],
        }

    return app
