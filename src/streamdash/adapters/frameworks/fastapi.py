"""FastAPI adapter exposing a dashboard session.

Endpoints cover the toggle interface (/streams), the render interface
(/logs, /metrics, /streams/stats, /mode) and the CSV export.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, FastAPI, HTTPException, Query, Response
from fastapi.responses import JSONResponse

from streamdash.config import SessionConfig
from streamdash.core.encoding.records import (
    entry_to_dict,
    snapshot_to_dict,
    stats_to_dict,
)
from streamdash.core.exceptions import InvalidFilterError, UnknownStreamError
from streamdash.runtime.scheduler import AsyncioScheduler
from streamdash.runtime.session import DashboardSession, MonitoringMode, create_session


def _streams_payload(session: DashboardSession) -> dict[str, Any]:
    return {"streams": session.streams(), "active_count": session.active_count()}


def create_dashboard_router(session: DashboardSession) -> APIRouter:
    """Create a FastAPI router bound to one dashboard session.

    Args:
        session: The session whose state the endpoints read and mutate.

    Returns:
        APIRouter with stream, log, metrics and mode endpoints configured.
    """
    router = APIRouter()

    @router.get("/streams")
    async def get_streams() -> JSONResponse:
        """Return the active flag of every stream."""
        return JSONResponse(content=_streams_payload(session))

    @router.post("/streams/all")
    async def set_all_streams(active: bool = Query(...)) -> JSONResponse:
        """Start or stop every stream."""
        session.set_all(active)
        return JSONResponse(content=_streams_payload(session))

    @router.post("/streams/toggle-all")
    async def toggle_all_streams() -> JSONResponse:
        """Stop all streams if all are active, otherwise start all."""
        session.toggle_all()
        return JSONResponse(content=_streams_payload(session))

    @router.get("/streams/stats")
    async def get_stream_stats() -> JSONResponse:
        """Return live figures for every stream."""
        return JSONResponse(content=[stats_to_dict(s) for s in session.stream_stats()])

    @router.post("/streams/{stream_id}/toggle")
    async def toggle_stream(stream_id: str) -> JSONResponse:
        """Flip one stream's active flag."""
        try:
            session.toggle(stream_id)
        except UnknownStreamError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        return JSONResponse(content=_streams_payload(session))

    @router.get("/logs")
    async def get_logs(severity: str = Query(default="all")) -> JSONResponse:
        """Return buffered log entries, most recent first.

        Args:
            severity: "all", "success", "warning" or "error".
        """
        try:
            entries = session.current_entries(severity)
        except InvalidFilterError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        return JSONResponse(
            content={
                "entries": [entry_to_dict(e) for e in entries],
                "counts": session.entry_counts(),
            }
        )

    @router.get("/logs/export")
    async def export_logs(format: str = Query(default="csv")) -> Response:
        """Return the full unfiltered buffer as a download.

        Args:
            format: "csv" (default) or "ndjson".
        """
        if format == "csv":
            body, media_type = session.export_csv(), "text/csv"
        elif format == "ndjson":
            body, media_type = session.export_ndjson(), "application/x-ndjson"
        else:
            raise HTTPException(
                status_code=400, detail=f"Unknown export format: {format!r}"
            )
        filename = session.export_filename(format)
        return Response(
            content=body,
            media_type=media_type,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @router.delete("/logs", status_code=204)
    async def clear_logs() -> Response:
        """Empty the log buffer."""
        session.clear_logs()
        return Response(status_code=204)

    @router.get("/metrics")
    async def get_metrics() -> JSONResponse:
        """Return the latest metrics snapshot."""
        return JSONResponse(content=snapshot_to_dict(session.current_snapshot()))

    @router.get("/mode")
    async def get_mode() -> JSONResponse:
        """Return the monitoring mode and the available modes."""
        return JSONResponse(
            content={
                "mode": session.mode.value,
                "modes": [m.value for m in MonitoringMode],
            }
        )

    @router.put("/mode/{mode}")
    async def set_mode(mode: str) -> JSONResponse:
        """Select the monitoring mode."""
        try:
            session.set_mode(mode)
        except ValueError as e:
            raise HTTPException(
                status_code=400, detail=f"Unknown monitoring mode: {mode!r}"
            ) from e
        return JSONResponse(content={"mode": session.mode.value})

    return router


def create_dashboard_app(
    config: SessionConfig | None = None,
    session: DashboardSession | None = None,
) -> FastAPI:
    """Create the dashboard FastAPI application.

    The session's periodic ticks run on an AsyncioScheduler for the lifetime
    of the app.

    Args:
        config: Session configuration (default: SessionConfig.from_env()).
        session: Pre-built session; when given, config is ignored.

    Returns:
        Configured FastAPI application instance.
    """
    if session is None:
        session = create_session(
            config or SessionConfig.from_env(), scheduler=AsyncioScheduler()
        )

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
        """Start the session's ticks on startup, stop them on shutdown."""
        session.start()
        yield
        session.stop()

    app = FastAPI(title="Video Analytics Dashboard", lifespan=lifespan)
    app.state.session = session
    app.include_router(create_dashboard_router(session), prefix="/api")
    return app
