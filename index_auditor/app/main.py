"""
FastAPI entrypoint for the Index Auditor service.

This module defines the public HTTP interface. It accepts an index list
(or audits the configured cluster directly), invokes the central
coordinator, and returns a structured AuditReport.

The application is stateless: every request audits exactly the metadata it
supplies or fetches.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.responses import Response

from index_auditor.app.config import AuditorConfig
from index_auditor.app.cluster.index_list_loader import (
    ClusterIndexListLoader,
    IndexListLoadError,
)
from index_auditor.app.coordinator.coordinator import AuditorCoordinator
from index_auditor.app.schemas.audit_report import AuditReport
from index_auditor.app.schemas.index_metadata import IndexListPayload

# Events / streaming
from index_auditor.app.events import MemoryQueueEventEmitter

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Presentation helpers (presentation-only)
# ---------------------------------------------------------------------------

def pretty_json(data: Any) -> str:
    """
    Pretty-print JSON for human-readable output.
    """
    return json.dumps(
        data,
        ensure_ascii=False,
        allow_nan=False,
        indent=2,
        separators=(", ", ": "),
    )


class PrettyJSONResponse(Response):
    """
    Pretty-printed JSON response for human-readable console output.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        return pretty_json(content).encode("utf-8")


# ---------------------------------------------------------------------------
# Application setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Index Auditor Service",
    description="Style audit for search cluster index mappings and names",
    version="0.1.0",
)


# ---------------------------------------------------------------------------
# Startup / Shutdown
# ---------------------------------------------------------------------------

@app.on_event("startup")
def startup_event() -> None:
    """
    Application startup hook.

    Configuration is loaded once and treated as immutable for the lifetime
    of the process. The cluster client is created here; no request is sent
    to the cluster until a cluster audit is requested.
    """
    config = AuditorConfig.from_env()

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    coordinator = AuditorCoordinator(
        config=config,
        index_list_loader=ClusterIndexListLoader.from_config(config),
    )

    app.state.config = config
    app.state.coordinator = coordinator

    logger.info(
        "Index auditor started (hosts=%s, pattern=%s)",
        config.OPENSEARCH_HOSTS,
        config.INDEX_PATTERN,
    )


# ---------------------------------------------------------------------------
# Request guards
# ---------------------------------------------------------------------------

def _enforce_index_limit(payload: IndexListPayload) -> None:
    config: AuditorConfig = app.state.config
    count = payload.index_count()

    if count > config.MAX_INDEX_COUNT:
        raise HTTPException(
            status_code=413,
            detail=(
                f"Index list holds {count} indices; the maximum allowed is "
                f"{config.MAX_INDEX_COUNT}"
            ),
        )


# ---------------------------------------------------------------------------
# API Routes
# ---------------------------------------------------------------------------

@app.post(
    "/audit",
    response_model=AuditReport,
    response_class=PrettyJSONResponse,
    summary="Audit a supplied index list",
)
async def audit_index_list(payload: IndexListPayload) -> AuditReport:
    """
    Run the enabled checks against the supplied index list.
    """
    _enforce_index_limit(payload)

    coordinator: AuditorCoordinator = app.state.coordinator

    return await coordinator.run_audit(
        index_list=payload.indices,
        audit_id=str(uuid4()),
    )


@app.post(
    "/audit/cluster",
    response_model=AuditReport,
    response_class=PrettyJSONResponse,
    summary="Audit the configured cluster",
)
async def audit_cluster() -> AuditReport:
    """
    Fetch index mappings from the configured cluster and audit them.
    """
    coordinator: AuditorCoordinator = app.state.coordinator

    try:
        return await coordinator.run_cluster_audit(audit_id=str(uuid4()))
    except IndexListLoadError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# Streaming Audit (SSE)
# ---------------------------------------------------------------------------

@app.post(
    "/audit/stream",
    summary="Audit a supplied index list (streaming progress)",
)
async def audit_index_list_stream(payload: IndexListPayload):
    """
    Perform an audit while streaming progress events.

    This endpoint is observational only:
    - Client disconnects do NOT cancel the audit
    - Events do NOT influence execution
    - Final AUDIT_COMPLETED event contains the AuditReport
    """
    _enforce_index_limit(payload)

    coordinator: AuditorCoordinator = app.state.coordinator
    audit_id = str(uuid4())
    emitter = MemoryQueueEventEmitter()

    # --------------------------------------------------------------
    # Background audit execution
    # --------------------------------------------------------------
    async def run_audit_task() -> None:
        try:
            await coordinator.run_audit(
                index_list=payload.indices,
                audit_id=audit_id,
                emitter=emitter,
            )
        except Exception:
            # Coordinator already emitted AUDIT_FAILED
            logger.exception("Streaming audit %s failed", audit_id)

    asyncio.create_task(run_audit_task())

    # --------------------------------------------------------------
    # SSE event stream
    # --------------------------------------------------------------
    async def event_stream():
        try:
            async for event in emitter.stream():
                yield event.to_sse_payload()
        except asyncio.CancelledError:
            # Client disconnected; audit continues
            pass

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
        },
    )


# ---------------------------------------------------------------------------
# Health Check
# ---------------------------------------------------------------------------

@app.get(
    "/health",
    summary="Service health check",
)
def health_check() -> JSONResponse:
    """Simple health check endpoint."""
    return JSONResponse(
        content={
            "status": "ok",
            "service": "index-auditor",
        }
    )
