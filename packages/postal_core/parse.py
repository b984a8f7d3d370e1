from __future__ import annotations

import logging
from typing import List

from packages.postal_core.engine import PostalEngine, parser_response
from packages.postal_core.types import ParsedComponent

logger = logging.getLogger(__name__)

UNIT_MARKER = "#"
UNIT_TOKEN = " Apt "


def prenormalize(text: str) -> str:
    # "#4" reads as a unit number to humans but not to the parser model.
    return text.replace(UNIT_MARKER, UNIT_TOKEN)


def parse_components(engine: PostalEngine, text: str) -> List[ParsedComponent]:
    address = prenormalize(text)
    with parser_response(engine, address, engine.default_parser_options()) as response:
        components = [
            ParsedComponent(label=str(label), value=str(value))
            for label, value in zip(response.labels, response.components)
        ]
    logger.debug("parsed %d components from %r", len(components), address)
    return components
