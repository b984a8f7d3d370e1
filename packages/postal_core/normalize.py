from __future__ import annotations

from packages.postal_core.engine import PostalEngine, expansion_array
from packages.postal_core.policy import require_policy
from packages.postal_core.types import NormalizeOptions, NormalizedComponent, ParsedComponent


def build_options(engine: PostalEngine, label: str) -> NormalizeOptions:
    flag = require_policy(label)
    options = engine.default_normalize_options()
    if flag:
        options.address_components = int(flag)
    # Lets "12-14" and "1214" (or "123-A" and "123A") meet on a common variant.
    options.replace_numeric_hyphens = True
    options.delete_numeric_hyphens = True
    return options


def normalize_component(engine: PostalEngine, component: ParsedComponent) -> NormalizedComponent:
    options = build_options(engine, component.label)
    with expansion_array(engine, component.value, options) as expansions:
        variants = tuple(str(item) for item in expansions.strings)
    return NormalizedComponent(label=component.label, value=component.value, variants=variants)
