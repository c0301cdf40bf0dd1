import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.deps import get_settings
from src.app_shell.config import validate_ops_rules
from src.domain.errors import (
    AuthorizationError,
    CampaignNotFound,
    InsufficientFunds,
    LedgerError,
    RegistryNotInitialized,
)
from src.rules.loader import load_rules

logger = logging.getLogger(__name__)

# Lifecycle conflicts; everything else that is not listed falls back to 400.
CONFLICT_CODES = {
    "campaign_completed",
    "goal_not_reached",
    "already_withdrawn",
}


def status_for_error(error: LedgerError) -> int:
    """HTTP status for a ledger abort."""
    if isinstance(error, CampaignNotFound):
        return 404
    if isinstance(error, AuthorizationError):
        return 403
    if isinstance(error, (InsufficientFunds, RegistryNotInitialized)):
        return 409
    if error.code in CONFLICT_CODES:
        return 409
    return 400


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules and validate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
        validate_ops_rules(rules)
        logger.info(f"Rules loaded from {settings.rules_path}")
    except Exception as e:
        print(f"CRITICAL: Rules load failed: {e}", file=sys.stderr)
        sys.exit(1)

    yield


app = FastAPI(
    title="Relief Escrow Ledger API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    return JSONResponse(
        status_code=status_for_error(exc),
        content={"code": exc.code, "message": exc.message},
    )


# --- Routers ---
from src.api.routes import campaigns  # noqa: E402

app.include_router(campaigns.router, prefix="/api", tags=["Campaigns"])


# CORS (Allow Frontend)
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "ledger"}
