from __future__ import annotations

from enum import IntFlag
from types import MappingProxyType
from typing import Mapping, Optional

from packages.postal_core.errors import UnknownLabelError


class AddressComponent(IntFlag):
    """Component-class flags understood by libpostal's expander (libpostal.h bit values)."""

    NONE = 0
    ANY = 1 << 0
    NAME = 1 << 1
    HOUSE_NUMBER = 1 << 2
    STREET = 1 << 3
    UNIT = 1 << 4
    LEVEL = 1 << 5
    STAIRCASE = 1 << 6
    ENTRANCE = 1 << 7
    CATEGORY = 1 << 8
    NEAR = 1 << 9
    TOPONYM = 1 << 13
    POSTAL_CODE = 1 << 14
    PO_BOX = 1 << 15
    ALL = (1 << 16) - 1


DEFAULT_ADDRESS_COMPONENTS = (
    AddressComponent.NAME
    | AddressComponent.HOUSE_NUMBER
    | AddressComponent.STREET
    | AddressComponent.PO_BOX
    | AddressComponent.UNIT
    | AddressComponent.LEVEL
    | AddressComponent.ENTRANCE
    | AddressComponent.STAIRCASE
    | AddressComponent.POSTAL_CODE
)

LABEL_POLICY: Mapping[str, AddressComponent] = MappingProxyType(
    {
        "house": AddressComponent.ANY,
        "category": AddressComponent.CATEGORY,
        "near": AddressComponent.NEAR,
        "house_number": AddressComponent.HOUSE_NUMBER,
        "road": AddressComponent.TOPONYM,
        "unit": AddressComponent.UNIT,
        "level": AddressComponent.LEVEL,
        "staircase": AddressComponent.STAIRCASE,
        "entrance": AddressComponent.ENTRANCE,
        "po_box": AddressComponent.PO_BOX,
        "postcode": AddressComponent.POSTAL_CODE,
        "suburb": AddressComponent.ANY,
        "city_district": AddressComponent.NAME,
        "city": AddressComponent.NAME,
        "island": AddressComponent.NAME,
        "state_district": AddressComponent.NAME,
        "state": AddressComponent.NAME,
        "country_region": AddressComponent.NAME,
        "country": AddressComponent.NAME,
        "world_region": AddressComponent.NAME,
    }
)


def policy_for(label: str) -> Optional[AddressComponent]:
    return LABEL_POLICY.get(label)


def require_policy(label: str) -> AddressComponent:
    flag = policy_for(label)
    if flag is None:
        raise UnknownLabelError(label)
    return flag


def known_labels() -> frozenset[str]:
    return frozenset(LABEL_POLICY)
