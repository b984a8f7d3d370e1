from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar, Union

from packages.postal_core.policy import DEFAULT_ADDRESS_COMPONENTS

T = TypeVar("T")


@dataclass(frozen=True)
class ParsedComponent:
    label: str
    value: str


@dataclass(frozen=True)
class NormalizedComponent:
    label: str
    value: str
    variants: Tuple[str, ...] = ()


@dataclass(frozen=True)
class LabeledVariants:
    label: str
    variants: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "variants": list(self.variants)}


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    message: str


ParseResult = Union[Ok[List[LabeledVariants]], Err]
SetupResult = Union[Ok[None], Err]


@dataclass
class NormalizeOptions:
    """Mirror of libpostal's normalize options, with libpostal's defaults."""

    languages: Optional[List[str]] = None
    address_components: int = int(DEFAULT_ADDRESS_COMPONENTS)
    latin_ascii: bool = True
    transliterate: bool = True
    strip_accents: bool = True
    decompose: bool = True
    lowercase: bool = True
    trim_string: bool = True
    replace_word_hyphens: bool = True
    delete_word_hyphens: bool = True
    replace_numeric_hyphens: bool = False
    delete_numeric_hyphens: bool = False
    split_alpha_from_numeric: bool = True
    delete_final_periods: bool = True
    delete_acronym_periods: bool = True
    drop_english_possessives: bool = True
    delete_apostrophes: bool = True
    expand_numex: bool = True
    roman_numerals: bool = True

    def to_kwargs(self) -> Dict[str, Any]:
        kwargs = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "languages"}
        kwargs["address_components"] = int(self.address_components)
        if self.languages:
            kwargs["languages"] = list(self.languages)
        return kwargs
