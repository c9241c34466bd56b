"""FastAPI application entry point."""

import os
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from web.deps import get_config
from web.routes import chat, drafts, generate, memories, products, profile

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    logger.info(
        "web.startup",
        remote_configured=config.record_store.is_configured,
        local_db=str(config.paths.local_db),
    )
    yield
    logger.info("web.shutdown")


app = FastAPI(
    title="AuthOS",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS: allow frontend origin
frontend_origin = os.getenv("FRONTEND_ORIGIN", "http://localhost:3000")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routes
app.include_router(profile.router)
app.include_router(memories.router)
app.include_router(products.router)
app.include_router(drafts.router)
app.include_router(chat.router)
app.include_router(generate.router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
