from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from packages.postal_core.pipeline import aparse_address, arun
from packages.postal_core.types import Ok
from services.address_api.app.models.parse_models import (
    BatchParseRequest,
    BatchParseResponse,
    LabeledVariantsModel,
    ParseAddressRequest,
    ParseAddressResponse,
)

router = APIRouter()


@router.post("/parse", response_model=ParseAddressResponse)
async def parse_address(payload: ParseAddressRequest, request: Request) -> ParseAddressResponse:
    handle = request.app.state.engine_handle
    result = await aparse_address(handle, payload.text)
    if not isinstance(result, Ok):
        status_code = 422 if handle.ready else 503
        raise HTTPException(status_code=status_code, detail=result.message)
    return ParseAddressResponse(
        components=[LabeledVariantsModel(label=item.label, variants=list(item.variants)) for item in result.value]
    )


@router.post("/parse/batch", response_model=BatchParseResponse)
async def parse_batch(payload: BatchParseRequest, request: Request) -> BatchParseResponse:
    handle = request.app.state.engine_handle
    max_batch_size = request.app.state.settings.max_batch_size
    if len(payload.records) > max_batch_size:
        raise HTTPException(status_code=413, detail=f"batch exceeds {max_batch_size} records")
    if not handle.ready:
        raise HTTPException(status_code=503, detail="libpostal engine is not initialized")
    outputs = await arun(handle, [item.model_dump() for item in payload.records])
    return BatchParseResponse(results=outputs)
