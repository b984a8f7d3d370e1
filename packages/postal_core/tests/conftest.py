from __future__ import annotations

import pytest

from packages.postal_core.lifecycle import EngineHandle, EngineStatus
from packages.postal_core.tests.fakes import MAIN_ST, FakeEngine


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine(
        parses={
            MAIN_ST: [
                ("house_number", "123-a"),
                ("road", "main st"),
                ("city", "springfield"),
                ("state", "il"),
            ],
        },
        expansions={
            "123-a": ["123 a", "123a"],
            "main st": ["main street", "main saint"],
            "il": ["illinois", "il"],
        },
    )


@pytest.fixture
def ready_handle(fake_engine: FakeEngine) -> EngineHandle:
    handle = EngineHandle(fake_engine)
    handle.status = EngineStatus.READY
    handle.data_dir = "/data/libpostal"
    return handle
