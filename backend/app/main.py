"""FastAPI application for the LeadMatch API."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from leadmatch import __version__
from leadmatch.config import config

from .routers import leads

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the reasoning configuration on startup."""
    if config.enable_ai_reasoning and config.gemini_api_key:
        logger.info(f"AI match reasoning enabled ({config.gemini_model})")
    else:
        logger.warning("AI match reasoning disabled, using template reasoning")
    yield


app = FastAPI(
    title="LeadMatch API",
    description="Buyer/property compatibility scoring and lead ranking",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS: the storefront calls /api/leads/match from the browser
allowed_origins = [
    "http://localhost:3000",  # storefront dev server
    "http://127.0.0.1:3000",
]
# Deployed storefront origin
frontend_url = os.environ.get("FRONTEND_URL")
if frontend_url:
    allowed_origins.append(frontend_url.rstrip("/"))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=3600,
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app.add_middleware(SecurityHeadersMiddleware)

# Include routers
app.include_router(leads.router, prefix="/api/leads", tags=["Leads"])


@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "name": "LeadMatch API",
        "version": __version__,
        "docs": "/docs",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "ai_reasoning": bool(config.enable_ai_reasoning and config.gemini_api_key),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.app.main:app", host="0.0.0.0", port=int(os.environ.get("PORT", "8000")))
