"""
SmartLang API - FastAPI Application

Run with: uvicorn api.main:app --reload
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smartlang import __version__
from api.routes.execute import router as execute_router
from api.routes.parse import router as parse_router
from api.routes.health import router as health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("SmartLang API starting...")
    yield
    logger.info("SmartLang API shutting down...")


app = FastAPI(
    title="SmartLang API",
    description="Execution service for SmartLang ledger contracts",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, tags=["Health"])
app.include_router(execute_router, prefix="/api/v1", tags=["Execution"])
app.include_router(parse_router, prefix="/api/v1", tags=["Parsing"])


@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "name": "SmartLang API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
