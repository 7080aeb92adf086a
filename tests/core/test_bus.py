from typing import List

import pytest
from pydantic import BaseModel

from switchpanel.core.bus import Bus, BusEvent, EventPayload


class PingProps(BaseModel):
    value: int


Ping = BusEvent.define("test.ping", PingProps)


@pytest.mark.anyio
async def test_publish_reaches_typed_and_wildcard_subscribers() -> None:
    bus = Bus()
    seen: List[str] = []

    async def on_ping(payload: EventPayload) -> None:
        seen.append(f"typed:{payload.properties['value']}")

    bus.subscribe(Ping, on_ping)
    bus.subscribe_all(lambda payload: seen.append(f"all:{payload.type}"))

    await bus.publish(Ping, PingProps(value=1))
    await bus.publish(Ping, {"value": 2})

    assert seen == ["typed:1", "all:test.ping", "typed:2", "all:test.ping"]


@pytest.mark.anyio
async def test_unsubscribe_and_failing_subscriber() -> None:
    bus = Bus()
    seen: List[int] = []

    def broken(payload: EventPayload) -> None:
        raise RuntimeError("boom")

    bus.subscribe(Ping, broken)
    unsubscribe = bus.subscribe(Ping, lambda payload: seen.append(payload.properties["value"]))
    assert bus.subscriber_count(Ping) == 2

    await bus.publish(Ping, PingProps(value=1))
    unsubscribe()
    await bus.publish(Ping, PingProps(value=2))

    assert seen == [1]
    assert bus.subscriber_count(Ping) == 1


@pytest.mark.anyio
async def test_publish_rejects_wrong_properties_type() -> None:
    with pytest.raises(TypeError):
        await Bus().publish(Ping, "not props")


def test_buses_are_independent() -> None:
    first = Bus()
    second = Bus()
    first.subscribe(Ping, lambda payload: None)

    assert first.subscriber_count(Ping) == 1
    assert second.subscriber_count(Ping) == 0
    first.clear()
    assert first.subscriber_count(Ping) == 0
