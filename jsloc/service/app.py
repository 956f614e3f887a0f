"""FastAPI application entrypoint for jsloc service mode."""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..models import LineMetrics
from ..orchestrator import Orchestrator, analyze_source
from ..report import file_row, summary_row


class SourceRequest(BaseModel):
    source: str
    path: Optional[str] = None


class PathRequest(BaseModel):
    path: str


class FailureModel(BaseModel):
    file: str
    reason: str


class AnalysisResponse(BaseModel):
    kind: str
    summary: Optional[Dict[str, Any]] = None
    files: List[Dict[str, Any]]
    failures: List[FailureModel] = []


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing jsloc analysis."""

    app = FastAPI(title="jsloc Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze/source", response_model=AnalysisResponse)
    async def analyze_text(payload: SourceRequest) -> AnalysisResponse:
        loop = asyncio.get_running_loop()
        metrics = await loop.run_in_executor(
            None, partial(analyze_source, payload.source, file_path=payload.path)
        )
        return AnalysisResponse(kind="file", files=[file_row(metrics)])

    @app.post("/analyze/path", response_model=AnalysisResponse)
    async def analyze_path(
        payload: PathRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> AnalysisResponse:
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, orchestrator.run, payload.path)

        if isinstance(result, LineMetrics):
            return AnalysisResponse(kind="file", files=[file_row(result)])
        return AnalysisResponse(
            kind="directory",
            summary=summary_row(result.summary),
            files=[file_row(metrics) for metrics in result.files],
            failures=[
                FailureModel(file=path, reason=reason) for path, reason in result.failures
            ],
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
