import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from watchconsole.api import console_router, health_router
from watchconsole.config import settings
from watchconsole.gateway.backend import HttpBackendGateway
from watchconsole.models.failure import KnownError
from watchconsole.models.session import SessionContext
from watchconsole.services.console import ConsoleSession

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the backend client and run the console's initial load."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        gateway = HttpBackendGateway(client=client)
        context = SessionContext(user_id=settings.admin_user_id, username=settings.admin_username)
        app.state.console = ConsoleSession(
            gateway,
            context,
            enrichment_concurrency=settings.enrichment_concurrency,
        )
        if not await app.state.console.load():
            logger.warning("Starting with an empty console; POST /console/load to retry")
        yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("watchconsole"),
    lifespan=lifespan,
)

app.include_router(console_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render a KnownError as its FailureDetail with the error's status code."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_detail().model_dump(mode="json"),
    )
