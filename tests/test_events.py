from orbit.client.events import EventBus


def test_subscribers_called_in_order():
    bus = EventBus()
    calls = []
    bus.subscribe("ping", lambda payload: calls.append(("a", payload)))
    bus.subscribe("ping", lambda payload: calls.append(("b", payload)))

    bus.publish("ping", {"n": 1})
    assert calls == [("a", {"n": 1}), ("b", {"n": 1})]


def test_failing_subscriber_does_not_stop_others():
    bus = EventBus()
    calls = []

    def broken(payload):
        raise RuntimeError("boom")

    bus.subscribe("ping", broken)
    bus.subscribe("ping", calls.append)

    bus.publish("ping")
    assert calls == [{}]


def test_unsubscribe():
    bus = EventBus()
    calls = []
    unsubscribe = bus.subscribe("ping", calls.append)

    unsubscribe()
    unsubscribe()
    bus.publish("ping")
    assert calls == []


def test_publish_without_subscribers():
    EventBus().publish("nobody-listens", {"x": 1})
