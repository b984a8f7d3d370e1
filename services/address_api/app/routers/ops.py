from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Request

from packages.postal_core.lifecycle import asetup
from packages.postal_core.policy import LABEL_POLICY
from packages.postal_core.types import Ok
from services.address_api.app.models.ops_models import (
    HealthResponse,
    LabelPolicyResponse,
    SetupRequest,
    SetupResponse,
)

router = APIRouter()


@router.get("/ops/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    handle = request.app.state.engine_handle
    return HealthResponse(engine=handle.status.value, data_dir=handle.data_dir)


@router.post("/ops/setup", response_model=SetupResponse)
async def run_setup(request: Request, payload: Optional[SetupRequest] = None) -> SetupResponse:
    data_dir = (payload.data_dir if payload else None) or request.app.state.settings.data_dir
    handle = request.app.state.engine_handle
    result = await asetup(handle, data_dir)
    if not isinstance(result, Ok):
        raise HTTPException(status_code=500, detail=result.message)
    return SetupResponse(status=handle.status.value, data_dir=handle.data_dir or data_dir)


@router.get("/labels", response_model=LabelPolicyResponse)
def labels() -> LabelPolicyResponse:
    return LabelPolicyResponse(labels={label: flag.name for label, flag in LABEL_POLICY.items()})
