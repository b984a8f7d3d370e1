from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from packages.postal_core.engine import ExpansionArray, ParserOptions, ParserResponse
from packages.postal_core.types import NormalizeOptions

MAIN_ST = "123-A Main St, Springfield, IL"


class FakeEngine:
    """In-memory stand-in for libpostal that records every call."""

    def __init__(
        self,
        parses: Optional[Dict[str, List[Tuple[str, str]]]] = None,
        expansions: Optional[Dict[str, List[str]]] = None,
        failing_steps: Tuple[str, ...] = (),
    ) -> None:
        self.parses = parses or {}
        self.expansions = expansions or {}
        self.failing_steps = failing_steps
        self.setup_calls: List[Tuple[str, str]] = []
        self.parse_calls: List[str] = []
        self.expand_calls: List[Tuple[str, NormalizeOptions]] = []
        self.released_parses = 0
        self.released_expansions = 0

    def _step(self, name: str, data_dir: str) -> bool:
        self.setup_calls.append((name, data_dir))
        return name not in self.failing_steps

    def setup_base_data(self, data_dir: str) -> bool:
        return self._step("base", data_dir)

    def setup_parser_model(self, data_dir: str) -> bool:
        return self._step("parser", data_dir)

    def setup_language_model(self, data_dir: str) -> bool:
        return self._step("language", data_dir)

    def default_parser_options(self) -> ParserOptions:
        return ParserOptions()

    def parse(self, text: str, options: ParserOptions) -> Optional[ParserResponse]:
        self.parse_calls.append(text)
        if text not in self.parses:
            return None
        pairs = self.parses[text]
        return ParserResponse(labels=[label for label, _ in pairs], components=[value for _, value in pairs])

    def release_parse(self, response: ParserResponse) -> None:
        self.released_parses += 1

    def default_normalize_options(self) -> NormalizeOptions:
        return NormalizeOptions()

    def expand(self, value: str, options: NormalizeOptions) -> Optional[ExpansionArray]:
        self.expand_calls.append((value, options))
        if value not in self.expansions:
            return ExpansionArray(strings=[value.lower()])
        return ExpansionArray(strings=list(self.expansions[value]))

    def release_expansions(self, expansions: ExpansionArray) -> None:
        self.released_expansions += 1
