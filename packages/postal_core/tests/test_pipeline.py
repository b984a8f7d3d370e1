import asyncio

from packages.postal_core.lifecycle import EngineHandle, setup
from packages.postal_core.pipeline import aparse_address, arun, parse_address, run
from packages.postal_core.policy import known_labels
from packages.postal_core.tests.fakes import MAIN_ST, FakeEngine
from packages.postal_core.types import Err, LabeledVariants, Ok


def test_parse_address_end_to_end(ready_handle: EngineHandle) -> None:
    result = parse_address(ready_handle, MAIN_ST)
    assert isinstance(result, Ok)
    assert result.value == [
        LabeledVariants("house_number", ("123 a", "123a")),
        LabeledVariants("road", ("main street", "main saint")),
        LabeledVariants("city", ("springfield",)),
        LabeledVariants("state", ("illinois", "il")),
    ]
    assert {item.label for item in result.value} <= known_labels()
    assert all(item.variants for item in result.value)


def test_parse_address_unknown_label_fails_whole_address() -> None:
    engine = FakeEngine(parses={"x": [("road", "main st"), ("neighbourhood", "soho")]})
    handle = EngineHandle(engine)
    setup(handle, "/data")
    result = parse_address(handle, "x")
    assert result == Err("unknown address component label: neighbourhood")


def test_parse_address_before_setup_fails() -> None:
    engine = FakeEngine(parses={MAIN_ST: [("road", "main st")]})
    result = parse_address(EngineHandle(engine), MAIN_ST)
    assert result == Err("libpostal engine is not initialized")
    assert engine.parse_calls == []


def test_parse_address_after_failed_setup_fails() -> None:
    handle = EngineHandle(FakeEngine(failing_steps=("parser",)))
    assert isinstance(setup(handle, "/data"), Err)
    assert isinstance(parse_address(handle, MAIN_ST), Err)


def test_parse_address_engine_error_is_reported() -> None:
    class CrashingEngine(FakeEngine):
        def parse(self, text, options):
            raise RuntimeError("segfault avoided")

    handle = EngineHandle(CrashingEngine())
    setup(handle, "/data")
    assert parse_address(handle, "1 Main St") == Err("address parsing failed: RuntimeError")


def test_parse_address_empty_parse_is_ok(ready_handle: EngineHandle) -> None:
    assert parse_address(ready_handle, "unparseable") == Ok([])


def test_aparse_address(ready_handle: EngineHandle) -> None:
    result = asyncio.run(aparse_address(ready_handle, MAIN_ST))
    assert isinstance(result, Ok)
    assert [item.label for item in result.value] == ["house_number", "road", "city", "state"]


def test_run_batch_isolates_records(ready_handle: EngineHandle, fake_engine: FakeEngine) -> None:
    fake_engine.parses["bad"] = [("neighbourhood", "soho")]
    outputs = run(
        ready_handle,
        [{"raw_id": "r1", "raw_text": MAIN_ST}, {"raw_id": "r2", "raw_text": "bad"}],
    )
    assert [item["raw_id"] for item in outputs] == ["r1", "r2"]
    assert outputs[0]["status"] == "ok"
    assert outputs[0]["components"][0] == {"label": "house_number", "variants": ["123 a", "123a"]}
    assert outputs[1] == {"raw_id": "r2", "status": "error", "error": "unknown address component label: neighbourhood"}


def test_arun(ready_handle: EngineHandle) -> None:
    outputs = asyncio.run(arun(ready_handle, [{"raw_id": "r1", "raw_text": MAIN_ST}]))
    assert outputs[0]["status"] == "ok"
