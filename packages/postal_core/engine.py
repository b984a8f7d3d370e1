from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Protocol

from packages.postal_core.types import NormalizeOptions


@dataclass
class ParserOptions:
    language: Optional[str] = None
    country: Optional[str] = None


@dataclass
class ParserResponse:
    labels: List[str] = field(default_factory=list)
    components: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.labels)


@dataclass
class ExpansionArray:
    strings: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.strings)


class PostalEngine(Protocol):
    """Narrow capability surface of the parsing/normalization engine."""

    def setup_base_data(self, data_dir: str) -> bool:
        ...

    def setup_parser_model(self, data_dir: str) -> bool:
        ...

    def setup_language_model(self, data_dir: str) -> bool:
        ...

    def default_parser_options(self) -> ParserOptions:
        ...

    def parse(self, text: str, options: ParserOptions) -> Optional[ParserResponse]:
        ...

    def release_parse(self, response: ParserResponse) -> None:
        ...

    def default_normalize_options(self) -> NormalizeOptions:
        ...

    def expand(self, value: str, options: NormalizeOptions) -> Optional[ExpansionArray]:
        ...

    def release_expansions(self, expansions: ExpansionArray) -> None:
        ...


@contextmanager
def parser_response(engine: PostalEngine, text: str, options: ParserOptions) -> Iterator[ParserResponse]:
    """Yield the engine's parse of ``text``, releasing it on every exit path."""
    response = engine.parse(text, options)
    if response is None:
        yield ParserResponse()
        return
    try:
        yield response
    finally:
        engine.release_parse(response)


@contextmanager
def expansion_array(engine: PostalEngine, value: str, options: NormalizeOptions) -> Iterator[ExpansionArray]:
    """Yield the expansions of ``value``, releasing them on every exit path."""
    expansions = engine.expand(value, options)
    if expansions is None:
        yield ExpansionArray()
        return
    try:
        yield expansions
    finally:
        engine.release_expansions(expansions)
