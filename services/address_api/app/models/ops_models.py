from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    engine: str
    data_dir: Optional[str] = None


class SetupRequest(BaseModel):
    data_dir: Optional[str] = Field(default=None, min_length=1, max_length=4096)


class SetupResponse(BaseModel):
    status: str
    data_dir: str


class LabelPolicyResponse(BaseModel):
    labels: Dict[str, str] = Field(default_factory=dict)
