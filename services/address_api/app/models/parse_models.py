from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ParseAddressRequest(BaseModel):
    text: str = Field(min_length=1, max_length=1024)


class LabeledVariantsModel(BaseModel):
    label: str
    variants: List[str] = Field(default_factory=list)


class ParseAddressResponse(BaseModel):
    status: str = "ok"
    components: List[LabeledVariantsModel] = Field(default_factory=list)


class AddressRecordInput(BaseModel):
    raw_id: str = Field(min_length=1, max_length=64)
    raw_text: str = Field(min_length=1, max_length=1024)


class BatchParseRequest(BaseModel):
    records: List[AddressRecordInput] = Field(min_length=1)


class BatchRecordResult(BaseModel):
    raw_id: str
    status: str
    components: List[LabeledVariantsModel] = Field(default_factory=list)
    error: Optional[str] = None


class BatchParseResponse(BaseModel):
    results: List[BatchRecordResult] = Field(default_factory=list)
