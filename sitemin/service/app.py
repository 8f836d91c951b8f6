"""FastAPI application entrypoint for sitemin service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..gallery import GalleryResult
from ..minify import STRICTNESS_AGGRESSIVE
from ..orchestrator import BuildOutcome, Orchestrator, SourceRootError
from ..report import percent_saved


class BuildRequest(BaseModel):
    path: str
    build_dir: Optional[str] = None
    aggressive: bool = False
    workers: Optional[int] = None


class SkippedFile(BaseModel):
    path: str
    reason: str


class BuildResponse(BaseModel):
    build_root: str
    counts: Dict[str, int]
    original_bytes: int
    output_bytes: int
    percent_saved: int
    skipped: List[SkippedFile] = []


class GalleryRequest(BaseModel):
    path: str


class GalleryResponse(BaseModel):
    html_path: str
    output_dir: str
    items: int
    skipped: List[SkippedFile] = []


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing sitemin operations."""

    app = FastAPI(title="sitemin Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # Fresh orchestrator per request keeps runs independent.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/build", response_model=BuildResponse)
    async def build_site(
        payload: BuildRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> BuildResponse:
        def _run_build() -> BuildOutcome:
            return orchestrator.run_build(
                payload.path,
                build_dir=payload.build_dir,
                strictness=STRICTNESS_AGGRESSIVE if payload.aggressive else None,
                workers=payload.workers,
            )

        loop = asyncio.get_running_loop()
        outcome = await loop.run_in_executor(None, _run_build)
        stats = outcome.stats
        return BuildResponse(
            build_root=str(outcome.build_root),
            counts=dict(stats.counts),
            original_bytes=stats.original_bytes,
            output_bytes=stats.output_bytes,
            percent_saved=percent_saved(stats.original_bytes, stats.output_bytes),
            skipped=[SkippedFile(path=path, reason=reason) for path, reason in stats.skipped],
        )

    @app.post("/gallery", response_model=GalleryResponse)
    async def build_gallery(
        payload: GalleryRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GalleryResponse:
        def _run_gallery() -> GalleryResult:
            return orchestrator.run_gallery(payload.path)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run_gallery)
        return GalleryResponse(
            html_path=str(result.html_path),
            output_dir=str(result.output_dir),
            items=len(result.items),
            skipped=[SkippedFile(path=name, reason=reason) for name, reason in result.skipped],
        )

    @app.exception_handler(SourceRootError)
    async def source_root_handler(
        _: Any, exc: SourceRootError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
