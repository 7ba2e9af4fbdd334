import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request

from . import __version__
from .api import shares
from .dependencies import get_samba_controller, get_settings
from .logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    settings = get_settings()
    setup_logging(settings)

    logging.info("Share Agent starting up...")
    logging.info(f"Samba config path: {settings.smb_config_path}")
    logging.info(f"Share store: {settings.store_file_path}")

    samba_controller = get_samba_controller()
    await samba_controller.start()

    yield

    logging.info("Share Agent shutting down...")
    await samba_controller.stop()


app = FastAPI(
    title="Share Agent",
    description="Publishes local directories as Samba shares",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(shares.router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logging.info(f"Incoming request: {request.method} {request.url.path}")
    response = await call_next(request)
    logging.info(f"Request completed: {request.method} {request.url.path} - {response.status_code}")
    return response


def run() -> None:
    settings = get_settings()
    uvicorn.run("share_agent.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
