from __future__ import annotations

from typing import Any, Dict, Iterable

from packages.postal_core.types import Err, LabeledVariants, NormalizedComponent, Ok, ParseResult


def assemble(components: Iterable[NormalizedComponent]) -> ParseResult:
    return Ok([LabeledVariants(label=item.label, variants=tuple(item.variants)) for item in components])


def assemble_error(message: str) -> Err:
    return Err(message)


def to_payload(result: ParseResult) -> Dict[str, Any]:
    if isinstance(result, Ok):
        return {"status": "ok", "components": [item.to_dict() for item in result.value]}
    return {"status": "error", "error": result.message}
