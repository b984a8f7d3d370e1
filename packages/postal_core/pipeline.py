from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List

from packages.postal_core.errors import EngineNotReadyError, UnknownLabelError
from packages.postal_core.lifecycle import EngineHandle, asetup, setup
from packages.postal_core.normalize import normalize_component
from packages.postal_core.parse import parse_components
from packages.postal_core.result import assemble, assemble_error, to_payload
from packages.postal_core.types import ParseResult

__all__ = ["aparse_address", "arun", "asetup", "parse_address", "run", "setup"]

logger = logging.getLogger(__name__)


def parse_address(handle: EngineHandle, text: str) -> ParseResult:
    try:
        engine = handle.require_ready()
        components = parse_components(engine, text)
        normalized = [normalize_component(engine, component) for component in components]
    except (EngineNotReadyError, UnknownLabelError) as exc:
        return assemble_error(str(exc))
    except (RuntimeError, UnicodeError, TypeError) as exc:
        logger.exception("libpostal call failed for %r", text)
        return assemble_error(f"address parsing failed: {exc.__class__.__name__}")
    return assemble(normalized)


async def aparse_address(handle: EngineHandle, text: str) -> ParseResult:
    return await asyncio.to_thread(parse_address, handle, text)


def run(handle: EngineHandle, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    outputs: List[Dict[str, Any]] = []
    for item in records:
        result = parse_address(handle, str(item.get("raw_text", "")))
        outputs.append({"raw_id": item.get("raw_id"), **to_payload(result)})
    return outputs


async def arun(handle: EngineHandle, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return await asyncio.to_thread(run, handle, records)
