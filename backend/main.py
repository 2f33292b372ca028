"""
Focus Planner FastAPI Backend

Exposes the priority scheduler to the dashboard frontend.

Architecture:
- FastAPI handles HTTP routing and request/response validation
- Pydantic schemas ensure type safety
- The Prioritizer does all scoring; the API holds no state

Run with:
    uvicorn backend.main:app --reload --port 8000

Or:
    python -m backend.main
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.routers import focus_router
from backend.dependencies import get_config, get_prioritizer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup: configure logging and load settings.
    """
    config = get_config()
    logging.basicConfig(
        level=config.get_log_level(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    prioritizer = get_prioritizer()
    logger.info("Config loaded from: %s", config.config_dir)
    logger.info("Fallback mode: %s", prioritizer.fallback_mode.value)

    yield

    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Focus Planner API",
    description="""
    Work-item priority scheduler.

    ## Features

    - **Focus**: Rank open work items by energy fit, deadline, momentum,
      priority and open sub-items, with a short justification per item
    - **Energy**: Circadian energy level for any hour of the day
    """,
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",  # Vite dev server
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(focus_router)


@app.get("/")
async def root():
    """API root - returns basic info and available endpoints."""
    return {
        "name": "Focus Planner API",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "focus": "/focus/top",
            "energy": "/focus/energy",
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}


# Allow running directly with: python -m backend.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
