from __future__ import annotations

import logging
import os
import sys
from importlib import import_module
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from packages.postal_core.engine import ExpansionArray, ParserOptions, ParserResponse
from packages.postal_core.errors import EngineSetupError
from packages.postal_core.types import NormalizeOptions

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "LIBPOSTAL_DATA_DIR"
BINDING_MODULES = ("postal._expand", "postal._parser")

BASE_DATA_FILES: Sequence[Sequence[str]] = (
    ("transliteration/transliteration.dat",),
    ("numex/numex.dat",),
    ("address_expansions/address_dictionary.dat",),
)
# The CRF model replaced the averaged perceptron in libpostal 1.1; accept either.
PARSER_MODEL_FILES: Sequence[Sequence[str]] = (
    ("address_parser/address_parser_crf.dat", "address_parser/address_parser.dat"),
    ("address_parser/address_parser_vocab.trie",),
    ("address_parser/address_parser_phrases.dat",),
)
LANGUAGE_MODEL_FILES: Sequence[Sequence[str]] = (
    ("language_classifier/language_classifier.dat",),
)


def missing_datasets(data_dir: str, required: Iterable[Sequence[str]]) -> list[str]:
    """Return the required dataset files absent (or empty) under ``data_dir``.

    Each entry of ``required`` lists alternatives; one existing, non-empty file
    satisfies it.
    """
    root = Path(data_dir)
    missing: list[str] = []
    for alternatives in required:
        if not any(_is_dataset(root / name) for name in alternatives):
            missing.append(alternatives[0])
    return missing


def _is_dataset(path: Path) -> bool:
    return path.is_file() and path.stat().st_size > 0


class LibpostalEngine:
    """PostalEngine backed by the ``postal`` binding (pypostal).

    The binding loads libpostal's data when its native modules are first
    imported, so each setup step validates its dataset files, points the
    binding at ``data_dir`` and imports the module that loads them.

    ``data_dir`` reaches libpostal only through ``LIBPOSTAL_DATA_DIR``. A
    libpostal build that ignores the variable loads its compiled-in datadir
    instead, and data is loaded once per process: a later setup against
    another directory keeps the data already loaded.
    """

    def __init__(self, root_expansions: bool = True) -> None:
        self.root_expansions = root_expansions
        self._parser: Any = None
        self._expand: Any = None

    def _bind(self, data_dir: str, required: Iterable[Sequence[str]], step: str) -> bool:
        missing = missing_datasets(data_dir, required)
        if missing:
            logger.warning("libpostal %s: missing datasets under %s: %s", step, data_dir, ", ".join(missing))
            return False
        resolved = str(Path(data_dir).resolve())
        bound = os.environ.get(DATA_DIR_ENV)
        if bound and bound != resolved and any(name in sys.modules for name in BINDING_MODULES):
            logger.warning(
                "libpostal %s: data already loaded from %s; %s is validated but not loaded", step, bound, resolved
            )
        os.environ[DATA_DIR_ENV] = resolved
        return True

    def _load(self, module_name: str, step: str) -> Any:
        try:
            return import_module(module_name)
        except Exception as exc:
            # pypostal reports unreadable data as TypeError/RuntimeError at import time.
            raise EngineSetupError(f"libpostal {step}: cannot load {module_name}: {exc}") from exc

    def setup_base_data(self, data_dir: str) -> bool:
        # postal.expand also sets up the language classifier when it is imported.
        if not self._bind(data_dir, (*BASE_DATA_FILES, *LANGUAGE_MODEL_FILES), "base data"):
            return False
        self._expand = self._load("postal.expand", "base data")
        return True

    def setup_parser_model(self, data_dir: str) -> bool:
        if not self._bind(data_dir, PARSER_MODEL_FILES, "parser model"):
            return False
        self._parser = self._load("postal.parser", "parser model")
        return True

    def setup_language_model(self, data_dir: str) -> bool:
        if not self._bind(data_dir, LANGUAGE_MODEL_FILES, "language classifier"):
            return False
        self._expand = self._load("postal.expand", "language classifier")
        return True

    def default_parser_options(self) -> ParserOptions:
        return ParserOptions()

    def parse(self, text: str, options: ParserOptions) -> Optional[ParserResponse]:
        pairs = self._parser.parse_address(text, language=options.language, country=options.country)
        if pairs is None:
            return None
        # The binding yields (value, label) tuples.
        return ParserResponse(
            labels=[label for _, label in pairs],
            components=[value for value, _ in pairs],
        )

    def release_parse(self, response: ParserResponse) -> None:
        # The binding copies libpostal's response into Python objects and frees it natively.
        response.labels.clear()
        response.components.clear()

    def default_normalize_options(self) -> NormalizeOptions:
        return NormalizeOptions()

    def expand(self, value: str, options: NormalizeOptions) -> Optional[ExpansionArray]:
        expand_fn = self._expand.expand_address_root if self.root_expansions else self._expand.expand_address
        strings = expand_fn(value, **options.to_kwargs())
        if strings is None:
            return None
        return ExpansionArray(strings=list(strings))

    def release_expansions(self, expansions: ExpansionArray) -> None:
        expansions.strings.clear()
