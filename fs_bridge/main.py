# fs_bridge/main.py - FastAPI application exposing the filesystem facade

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status

from . import config
from .api.files import router as files_router
from .core.encoding import FALLBACK_ENCODING

# --- Logging Setup ---
logging.basicConfig(level=config.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# --- Lifespan Context Manager ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup...")
    logger.info(f"Fallback text encoding: {FALLBACK_ENCODING.name}, max tree depth: {config.MAX_TREE_DEPTH}")
    yield
    logger.info("Application shutdown...")

# --- FastAPI App Initialization ---
app = FastAPI(
    title="Filesystem Bridge",
    description="Filesystem primitives (listing, text read/write, create/delete/rename, path helpers) for a GUI shell.",
    version="0.1.0",
    lifespan=lifespan
)

app.include_router(files_router)


@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Provides a basic health check for the service."""
    return {"status": "ok", "default_encoding": FALLBACK_ENCODING.name}

# --- Main execution block ---
def run():
    import uvicorn
    logger.info(f"Starting Uvicorn server on {config.HOST}:{config.PORT}...")
    uvicorn.run("fs_bridge.main:app", host=config.HOST, port=config.PORT)

if __name__ == "__main__":
    run()
