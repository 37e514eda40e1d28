from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from .dependencies import get_presence_manager
from .logger import logger
from .routers import players


@asynccontextmanager
async def lifespan(app: FastAPI):
    manager = get_presence_manager()
    logger.info("Starting up and tracking configured servers...")
    await manager.start_configured()
    logger.info("Startup complete.")
    yield
    logger.info("Shutting down player tracking...")
    await manager.stop_all()


api_app = FastAPI(root_path="/api")

api_app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

api_app.include_router(players.router)

app = FastAPI(lifespan=lifespan, title="Server Presence")
app.mount("/api", api_app)
