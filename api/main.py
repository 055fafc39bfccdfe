"""
AdmitGuard API

Candidate admission intake: rule evaluation, exception gating and the
audit log.
"""

import json
import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

import admitguard
from admitguard.packs import AdmissionPack, get_default_pack, load_admission_pack
from admitguard.store import CandidateStore, InMemoryCandidateStore, SqliteCandidateStore

from api.routes import candidates, dashboard, evaluate, export, rules
from api.schemas.responses import HealthResponse


# =============================================================================
# Configuration
# =============================================================================

AG_DB_PATH = os.getenv("AG_DB_PATH", "admitguard.db")
AG_STORE = os.getenv("AG_STORE", "sqlite").lower()
AG_PACK_PATH = os.getenv("AG_PACK_PATH")
AG_LOG_LEVEL = os.getenv("AG_LOG_LEVEL", "INFO")
AG_DOCS_ENABLED = os.getenv("AG_DOCS_ENABLED", "true").lower() == "true"
AG_CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("AG_CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if o.strip()
]


# =============================================================================
# Logging Setup (Structured JSON)
# =============================================================================

class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if hasattr(record, "request_id"):
            log_entry["request_id"] = record.request_id
        if hasattr(record, "candidate_id"):
            log_entry["candidate_id"] = record.candidate_id
        if hasattr(record, "duration_ms"):
            log_entry["duration_ms"] = record.duration_ms
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


logger = logging.getLogger("admitguard")
logger.setLevel(getattr(logging, AG_LOG_LEVEL.upper(), logging.INFO))
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)


# =============================================================================
# Pack and Store
# =============================================================================

def build_store(kind: str = AG_STORE, db_path: str = AG_DB_PATH) -> CandidateStore:
    """Create the candidate store named by AG_STORE."""
    if kind == "memory":
        return InMemoryCandidateStore()
    if kind == "sqlite":
        return SqliteCandidateStore(db_path)
    raise ValueError(f"Unknown AG_STORE '{kind}' (expected 'sqlite' or 'memory')")


def load_pack(path: Optional[str] = AG_PACK_PATH) -> AdmissionPack:
    """Load the pack at AG_PACK_PATH, or the bundled default."""
    if path:
        return load_admission_pack(path)
    return get_default_pack()


# =============================================================================
# FastAPI App
# =============================================================================

def create_app(
    pack: Optional[AdmissionPack] = None,
    store: Optional[CandidateStore] = None,
) -> FastAPI:
    """
    Build the application.

    The pack and store are created on startup from the AG_* environment
    unless supplied here.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Load the admission pack and open the store on startup."""
        app.state.pack = pack if pack is not None else load_pack()
        app.state.store = store if store is not None else build_store()
        logger.info(
            "Loaded admission pack %s v%s (%d rules), store=%s",
            app.state.pack.id, app.state.pack.version,
            len(app.state.pack.catalog), app.state.store.backend,
        )

        # Share pack and store with routes
        rules.set_pack(app.state.pack)
        evaluate.set_pack(app.state.pack)
        candidates.set_context(app.state.pack, app.state.store)
        export.set_store(app.state.store)
        dashboard.set_store(app.state.store)

        yield

        logger.info("Shutting down")

    app = FastAPI(
        title="AdmitGuard API",
        description="""
**Candidate admission intake with rule-based eligibility.**

Every field is checked against an admission rule. STRICT rules block
submission. SOFT rules can be overridden by an exception with an accepted
rationale, or waived by flagging the record for manual review.

## Quick Start

1. `GET /api/rules` - See the admission rules
2. `POST /api/evaluate` - Evaluate a field edit
3. `POST /api/gate` - Check whether a draft can be submitted
4. `POST /api/candidates` - Submit a draft to the audit log
        """,
        version=admitguard.__version__,
        lifespan=lifespan,
        docs_url="/docs" if AG_DOCS_ENABLED else None,
        redoc_url="/redoc" if AG_DOCS_ENABLED else None,
        openapi_url="/openapi.json" if AG_DOCS_ENABLED else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=AG_CORS_ORIGINS,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add request ID to all requests."""
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start = time.time()

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        logger.debug(
            "%s %s -> %d", request.method, request.url.path, response.status_code,
            extra={
                "request_id": request_id,
                "duration_ms": round((time.time() - start) * 1000, 2),
            },
        )
        return response

    app.include_router(rules.router)
    app.include_router(evaluate.router)
    app.include_router(candidates.router)
    app.include_router(export.router)
    app.include_router(dashboard.router)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health(request: Request):
        """Health check endpoint."""
        loaded = request.app.state.pack
        return HealthResponse(
            healthy=True,
            version=admitguard.__version__,
            pack_id=loaded.id,
            pack_version=loaded.version,
            rules_loaded=len(loaded.catalog),
            store_backend=request.app.state.store.backend,
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
