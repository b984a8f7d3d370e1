from __future__ import annotations

import asyncio
import logging
import threading
from enum import Enum

from packages.postal_core.engine import PostalEngine
from packages.postal_core.errors import EngineNotReadyError, EngineSetupError
from packages.postal_core.types import Err, Ok, SetupResult

logger = logging.getLogger(__name__)

SETUP_FAILED_MESSAGE = "libpostal setup failed"


class EngineStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FAILED = "failed"


class EngineHandle:
    """Shared handle on an engine; read-only once setup has succeeded."""

    def __init__(self, engine: PostalEngine) -> None:
        self.engine = engine
        self.status = EngineStatus.UNINITIALIZED
        self.data_dir: str | None = None
        self._setup_lock = threading.Lock()

    @property
    def ready(self) -> bool:
        return self.status is EngineStatus.READY

    def require_ready(self) -> PostalEngine:
        if not self.ready:
            raise EngineNotReadyError("libpostal engine is not initialized")
        return self.engine


def setup(handle: EngineHandle, data_dir: str) -> SetupResult:
    with handle._setup_lock:
        if handle.ready:
            # libpostal cannot be re-initialized with other data.
            logger.info("libpostal already set up from %s; ignoring %s", handle.data_dir, data_dir)
            return Ok(None)

        logger.info("libpostal setup starting data_dir=%s", data_dir)
        engine = handle.engine
        steps = (
            ("base data", engine.setup_base_data),
            ("parser model", engine.setup_parser_model),
            ("language classifier", engine.setup_language_model),
        )
        for step_name, step in steps:
            try:
                succeeded = bool(step(data_dir))
            except EngineSetupError as exc:
                logger.warning("libpostal setup step %s failed: %s", step_name, exc)
                succeeded = False
            except Exception:
                # Native data loaders raise arbitrary errors on corrupt files.
                logger.exception("libpostal setup step %s raised", step_name)
                succeeded = False
            if not succeeded:
                logger.warning("libpostal setup step failed: %s", step_name)
                handle.status = EngineStatus.FAILED
                return Err(SETUP_FAILED_MESSAGE)

        handle.status = EngineStatus.READY
        handle.data_dir = data_dir
        logger.info("libpostal setup finished data_dir=%s", data_dir)
        return Ok(None)


async def asetup(handle: EngineHandle, data_dir: str) -> SetupResult:
    return await asyncio.to_thread(setup, handle, data_dir)
