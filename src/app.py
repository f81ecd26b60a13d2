"""Shopping FastAPI application.

Web server exposing the Pricing and Ordering domains over HTTP. Commands are
processed in-process and synchronously. Each request is wrapped in the
correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ordering.domain import background, ordering
from pricing.domain import pricing
from shared.api import register_exception_handlers, route_to_domains
from shared.utils.logging import add_context, clear_context, configure_logging

configure_logging()
logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
pricing.init()
ordering.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/pricing": pricing,
    "/carts": ordering,
    "/orders": ordering,
}


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    # Let detached work (recommendation refresh) finish
    await background.drain()
    logger.info("shutdown_complete")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Shopping API",
    description="Tiered pricing, shopping carts and orders",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

route_to_domains(app, _ROUTE_DOMAIN_MAP)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Bind a request id to every log line emitted while serving the request."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    clear_context()
    add_context(request_id=request_id, path=request.url.path)
    try:
        response = await call_next(request)
    finally:
        clear_context()
    response.headers["X-Request-ID"] = request_id
    return response


register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from ordering.api import cart_router, order_router  # noqa: E402
from pricing.api import router as pricing_router  # noqa: E402

app.include_router(pricing_router)
app.include_router(cart_router)
app.include_router(order_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "pricing": {"name": pricing.name},
                "ordering": {"name": ordering.name},
            },
        }
    )
