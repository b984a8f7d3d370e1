from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from packages.postal_core.libpostal_engine import LibpostalEngine
from packages.postal_core.lifecycle import EngineHandle, asetup
from packages.postal_core.types import Ok
from services.address_api.app.routers import ops, parse
from services.address_api.app.settings import ApiSettings, load_settings

logger = logging.getLogger(__name__)


def create_app(handle: Optional[EngineHandle] = None, settings: Optional[ApiSettings] = None) -> FastAPI:
    settings = settings or load_settings()
    handle = handle or EngineHandle(LibpostalEngine(root_expansions=settings.expand_root))
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.setup_on_startup and not handle.ready:
            result = await asetup(handle, settings.data_dir)
            if not isinstance(result, Ok):
                # Keep serving so /ops/health reports the failure.
                logger.error("address engine unavailable: %s", result.message)
        yield

    app = FastAPI(title="Address Parser API", version="0.1.0", lifespan=lifespan)
    app.state.engine_handle = handle
    app.state.settings = settings
    app.include_router(parse.router, prefix="/v1/address", tags=["parse"])
    app.include_router(ops.router, prefix="/v1/address", tags=["ops"])
    return app


app = create_app()
